"""Sale transaction: turn an AVAILABLE ticket into a recorded sale.

Steps, inside the caller's transaction:

1. Load the ticket (row-locked where the database supports it) and fail
   fast if it is missing or not AVAILABLE.
2. Load the customer.
3. Insert the sale record. The unique constraint on ``sales.ticket_id``
   is the final word when two sales race for the same ticket: the loser's
   insert is rejected and reported as a conflict.
4. Only then flip the ticket to SOLD with a conditional update.

Writing the ledger before the flip means a failure in between leaves the
ticket AVAILABLE, never SOLD without a sale. Any error propagates and the
transaction is rolled back as a whole.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lottery_sales.db import is_unique_violation
from lottery_sales.errors import ConflictError, NotFoundError
from lottery_sales.models.ticket import TicketState
from lottery_sales.repositories.customer_repository import CustomerRepository
from lottery_sales.repositories.sale_repository import SaleRecord, SaleRepository
from lottery_sales.repositories.ticket_repository import TicketRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaleReceipt:
    sale_id: int
    ticket_id: int
    ticket_number: str
    customer_id: int
    customer_name: str
    sold_at: datetime
    price: Decimal


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _already_sold(ticket_id: int) -> ConflictError:
    return ConflictError(
        message=f"Ticket {ticket_id} is already sold",
        details={"ticket_id": ticket_id},
    )


class SaleService:
    """Sells tickets and reads the sale ledger."""

    def __init__(
        self,
        tickets: TicketRepository | None = None,
        customers: CustomerRepository | None = None,
        sales: SaleRepository | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._tickets = tickets or TicketRepository()
        self._customers = customers or CustomerRepository()
        self._sales = sales or SaleRepository()
        self._clock = clock

    def sell(self, session: Session, ticket_id: int, customer_id: int) -> SaleReceipt:
        ticket = self._tickets.get_for_update(session, ticket_id)
        if ticket is None:
            raise NotFoundError(message=f"Ticket {ticket_id} not found")
        if ticket.state is not TicketState.AVAILABLE:
            raise _already_sold(ticket_id)

        customer = self._customers.get_by_id(session, customer_id)
        if customer is None:
            raise NotFoundError(message=f"Customer {customer_id} not found")

        try:
            sale = self._sales.insert(
                session,
                ticket_id=ticket.id,
                customer_id=customer.id,
                sold_at=self._clock(),
                price=ticket.price,
            )
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            logger.info("Lost race for ticket %s: sale already recorded", ticket_id)
            raise _already_sold(ticket_id) from exc

        if not self._tickets.mark_sold(session, ticket.id, customer.id):
            logger.info("Ticket %s changed state during sale", ticket_id)
            raise _already_sold(ticket_id)

        logger.info("Sold ticket %s (%s) to customer %s as sale %s", ticket.id, ticket.number, customer.id, sale.id)
        return SaleReceipt(
            sale_id=sale.id,
            ticket_id=ticket.id,
            ticket_number=ticket.number,
            customer_id=customer.id,
            customer_name=customer.name,
            sold_at=sale.sold_at,
            price=sale.price,
        )

    def list_sales(self, session: Session) -> Sequence[SaleRecord]:
        return self._sales.list_all(session)

    def get_sale(self, session: Session, sale_id: int) -> SaleRecord:
        sale = self._sales.get_by_id(session, sale_id)
        if sale is None:
            raise NotFoundError(message=f"Sale {sale_id} not found")
        return sale
