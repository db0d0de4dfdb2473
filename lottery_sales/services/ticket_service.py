"""Service layer for individual tickets."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lottery_sales.db import is_unique_violation
from lottery_sales.errors import ConflictError, NotFoundError, ValidationError
from lottery_sales.models.ticket import TicketState
from lottery_sales.repositories.draw_repository import DrawRepository
from lottery_sales.repositories.ticket_repository import TicketRecord, TicketRepository
from lottery_sales.validation import require_positive_price, require_ticket_number

logger = logging.getLogger(__name__)


def _parse_state(state: TicketState | str | None) -> TicketState | None:
    if state is None or isinstance(state, TicketState):
        return state
    try:
        return TicketState(str(state).strip().upper())
    except ValueError as exc:
        raise ValidationError(
            message="Invalid state",
            details={"state": ["Must be one of AVAILABLE|SOLD"]},
        ) from exc


class TicketService:
    """Ticket use-cases."""

    def __init__(
        self,
        tickets: TicketRepository | None = None,
        draws: DrawRepository | None = None,
    ) -> None:
        self._tickets = tickets or TicketRepository()
        self._draws = draws or DrawRepository()

    def create_ticket(
        self,
        session: Session,
        draw_id: int,
        number: str,
        price: Decimal | int | float | str,
        state: TicketState | str | None = None,
    ) -> TicketRecord:
        number = require_ticket_number(number)
        price = require_positive_price(price)
        parsed_state = _parse_state(state) or TicketState.AVAILABLE

        if self._draws.get_by_id(session, draw_id) is None:
            raise NotFoundError(message=f"Draw {draw_id} not found")

        if self._tickets.get_by_number(session, draw_id, number) is not None:
            raise self._duplicate(draw_id, number)

        if parsed_state is not TicketState.AVAILABLE:
            # SOLD is reached only through a sale, which also records the buyer.
            raise ValidationError(
                message="Invalid state",
                details={"state": ["New tickets must be AVAILABLE"]},
            )

        try:
            return self._tickets.create(session, draw_id=draw_id, number=number, price=price, state=parsed_state)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise self._duplicate(draw_id, number) from exc

    @staticmethod
    def _duplicate(draw_id: int, number: str) -> ConflictError:
        logger.info("Duplicate ticket %s in draw %s", number, draw_id)
        return ConflictError(
            message=f"Ticket {number} already exists in draw {draw_id}",
            details={"draw_id": draw_id, "number": number},
        )

    def get_ticket(self, session: Session, ticket_id: int) -> TicketRecord:
        ticket = self._tickets.get_by_id(session, ticket_id)
        if ticket is None:
            raise NotFoundError(message=f"Ticket {ticket_id} not found")
        return ticket

    def list_by_draw(
        self,
        session: Session,
        draw_id: int,
        state: TicketState | str | None = None,
    ) -> Sequence[TicketRecord]:
        return self._tickets.list_by_draw(session, draw_id, state=_parse_state(state))

    def list_by_customer(self, session: Session, customer_id: int) -> Sequence[TicketRecord]:
        return self._tickets.list_by_customer(session, customer_id)
