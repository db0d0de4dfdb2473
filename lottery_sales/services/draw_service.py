"""Business logic for draws and the generation of their ticket inventory."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from datetime import date
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lottery_sales.db import is_foreign_key_violation, is_unique_violation
from lottery_sales.errors import ConflictError, NotFoundError, ValidationError
from lottery_sales.repositories.draw_repository import DrawRecord, DrawRepository
from lottery_sales.repositories.ticket_repository import TicketRecord, TicketRepository
from lottery_sales.validation import MAX_TICKET_NUMBER, require_positive_count, require_positive_price, require_text

logger = logging.getLogger(__name__)

DEFAULT_NUMBER_WIDTH = 4
DEFAULT_MAX_BATCH = 10_000


class DrawService:
    """Draw use-cases."""

    def __init__(
        self,
        draws: DrawRepository | None = None,
        tickets: TicketRepository | None = None,
    ) -> None:
        self._draws = draws or DrawRepository()
        self._tickets = tickets or TicketRepository()

    def create_draw(self, session: Session, name: str, draw_date: date) -> DrawRecord:
        name = require_text("name", name)
        if not isinstance(draw_date, date):
            raise ValidationError(message="Invalid draw_date", details={"draw_date": ["Must be a date"]})

        draw = self._draws.create(session, name=name, draw_date=draw_date)
        logger.info("Created draw %s (%s on %s)", draw.id, draw.name, draw.draw_date.isoformat())
        return draw

    def list_draws(self, session: Session) -> Sequence[DrawRecord]:
        return self._draws.list_all(session)

    def get_draw(self, session: Session, draw_id: int) -> DrawRecord:
        draw = self._draws.get_by_id(session, draw_id)
        if draw is None:
            raise NotFoundError(message=f"Draw {draw_id} not found")
        return draw

    def delete_draw(self, session: Session, draw_id: int) -> None:
        """Delete a draw together with its tickets.

        Tickets go first, then the draw, in the caller's transaction. A draw
        with sold tickets is kept: its sale records still point at them.
        """

        self.get_draw(session, draw_id)

        sold = self._tickets.count_sold(session, draw_id)
        if sold:
            raise ConflictError(
                message=f"Draw {draw_id} has sold tickets and cannot be deleted",
                details={"sold_tickets": sold},
            )

        try:
            removed = self._tickets.delete_by_draw(session, draw_id)
            self._draws.delete(session, draw_id)
        except IntegrityError as exc:
            # A ticket was sold after the count above.
            if not is_foreign_key_violation(exc):
                raise
            raise ConflictError(
                message=f"Draw {draw_id} has sold tickets and cannot be deleted",
                details={"draw_id": draw_id},
            ) from exc
        logger.info("Deleted draw %s and %s tickets", draw_id, removed)

    def generate_tickets(
        self,
        session: Session,
        draw_id: int,
        count: int,
        unit_price: Decimal | int | float | str,
        number_width: int = DEFAULT_NUMBER_WIDTH,
        max_batch: int = DEFAULT_MAX_BATCH,
    ) -> Sequence[TicketRecord]:
        """Create ``count`` AVAILABLE tickets numbered sequentially.

        Numbering continues after the highest number already in the draw, so
        the first batch is "0001".."<count>" and later batches never reuse a
        number. Two batches generated concurrently for one draw can still
        pick the same range; the (draw, number) constraint rejects the
        second one as a conflict.
        """

        count = require_positive_count(count, maximum=max_batch)
        price = require_positive_price(unit_price, field="price")
        self.get_draw(session, draw_id)

        start = self._tickets.max_number(session, draw_id) + 1
        last = start + count - 1
        if last > MAX_TICKET_NUMBER:
            raise ValidationError(
                message="Invalid count",
                details={"count": [f"Draw {draw_id} would exceed ticket number {MAX_TICKET_NUMBER}"]},
            )

        numbers = [str(n).zfill(number_width) for n in range(start, last + 1)]
        try:
            tickets = self._tickets.create_many(session, draw_id=draw_id, numbers=numbers, price=price)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            logger.info("Ticket range %s-%s already taken in draw %s", numbers[0], numbers[-1], draw_id)
            raise ConflictError(
                message=f"Tickets {numbers[0]}..{numbers[-1]} already exist in draw {draw_id}",
            ) from exc

        logger.info("Generated %s tickets (%s..%s) for draw %s", len(tickets), numbers[0], numbers[-1], draw_id)
        return tickets
