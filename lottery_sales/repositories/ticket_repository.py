"""Repository layer for Ticket persistence.

Returns plain records; nothing here is lazily loaded. Writes are flushed
immediately so unique-constraint violations surface to the caller.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from decimal import Decimal

from sqlalchemy import Integer, cast, delete, func, select, update
from sqlalchemy.orm import Session

from lottery_sales.models.draw import Draw
from lottery_sales.models.sale import Sale
from lottery_sales.models.ticket import Ticket, TicketState


@dataclass(frozen=True)
class TicketRecord:
    id: int
    draw_id: int
    number: str
    price: Decimal
    state: TicketState
    customer_id: int | None


@dataclass(frozen=True)
class TicketSummaryRecord:
    """Ticket joined with its draw, as shown in a customer's history."""

    id: int
    number: str
    price: Decimal
    state: str
    draw_id: int
    draw_name: str


def _to_record(ticket: Ticket) -> TicketRecord:
    return TicketRecord(
        id=int(ticket.id),
        draw_id=int(ticket.draw_id),
        number=str(ticket.number),
        price=Decimal(ticket.price),
        state=TicketState(ticket.state),
        customer_id=int(ticket.customer_id) if ticket.customer_id is not None else None,
    )


class TicketRepository:
    """Persistence for the ticket inventory."""

    def get_by_id(self, session: Session, ticket_id: int) -> TicketRecord | None:
        ticket = session.get(Ticket, ticket_id)
        return _to_record(ticket) if ticket is not None else None

    def get_by_number(self, session: Session, draw_id: int, number: str) -> TicketRecord | None:
        stmt = select(Ticket).where(Ticket.draw_id == draw_id).where(Ticket.number == number)
        ticket = session.scalars(stmt).first()
        return _to_record(ticket) if ticket is not None else None

    def get_for_update(self, session: Session, ticket_id: int) -> TicketRecord | None:
        """Load a ticket holding a row lock until the transaction ends.

        The lock is honoured on PostgreSQL; SQLite ignores FOR UPDATE and
        relies on its single-writer lock instead.
        """

        stmt = select(Ticket).where(Ticket.id == ticket_id).with_for_update()
        ticket = session.scalars(stmt).first()
        return _to_record(ticket) if ticket is not None else None

    def list_by_draw(
        self,
        session: Session,
        draw_id: int,
        state: TicketState | None = None,
    ) -> Sequence[TicketRecord]:
        stmt = select(Ticket).where(Ticket.draw_id == draw_id)
        if state is not None:
            stmt = stmt.where(Ticket.state == state)
        stmt = stmt.order_by(Ticket.number.asc(), Ticket.id.asc())
        return [_to_record(t) for t in session.scalars(stmt).all()]

    def list_by_customer(self, session: Session, customer_id: int) -> Sequence[TicketRecord]:
        stmt = select(Ticket).where(Ticket.customer_id == customer_id).order_by(Ticket.id.asc())
        return [_to_record(t) for t in session.scalars(stmt).all()]

    def list_summaries_for_customer(self, session: Session, customer_id: int) -> Sequence[TicketSummaryRecord]:
        """Purchased tickets with their draw, most recent sale first."""

        stmt = (
            select(Ticket, Draw.name)
            .join(Draw, Draw.id == Ticket.draw_id)
            .join(Sale, Sale.ticket_id == Ticket.id)
            .where(Ticket.customer_id == customer_id)
            .order_by(Sale.id.desc())
        )
        out: list[TicketSummaryRecord] = []
        for ticket, draw_name in session.execute(stmt).all():
            out.append(
                TicketSummaryRecord(
                    id=int(ticket.id),
                    number=str(ticket.number),
                    price=Decimal(ticket.price),
                    state=TicketState(ticket.state).value,
                    draw_id=int(ticket.draw_id),
                    draw_name=str(draw_name),
                )
            )
        return out

    def max_number(self, session: Session, draw_id: int) -> int:
        """Highest ticket number in a draw, 0 when it has none."""

        stmt = select(func.max(cast(Ticket.number, Integer))).where(Ticket.draw_id == draw_id)
        value = session.scalar(stmt)
        return int(value) if value is not None else 0

    def count_sold(self, session: Session, draw_id: int) -> int:
        stmt = (
            select(func.count(Ticket.id))
            .where(Ticket.draw_id == draw_id)
            .where(Ticket.state == TicketState.SOLD)
        )
        return int(session.scalar(stmt) or 0)

    def create(
        self,
        session: Session,
        draw_id: int,
        number: str,
        price: Decimal,
        state: TicketState = TicketState.AVAILABLE,
    ) -> TicketRecord:
        ticket = Ticket(draw_id=draw_id, number=number, price=price, state=state)
        session.add(ticket)
        session.flush()  # assign PK, enforce uq_tickets_draw_number
        return _to_record(ticket)

    def create_many(
        self,
        session: Session,
        draw_id: int,
        numbers: Iterable[str],
        price: Decimal,
    ) -> Sequence[TicketRecord]:
        tickets = [Ticket(draw_id=draw_id, number=n, price=price, state=TicketState.AVAILABLE) for n in numbers]
        session.add_all(tickets)
        session.flush()
        return [_to_record(t) for t in tickets]

    def mark_sold(self, session: Session, ticket_id: int, customer_id: int) -> bool:
        """Flip AVAILABLE -> SOLD. Returns False when the ticket was not available."""

        stmt = (
            update(Ticket)
            .where(Ticket.id == ticket_id)
            .where(Ticket.state == TicketState.AVAILABLE)
            .values(state=TicketState.SOLD, customer_id=customer_id)
        )
        result = session.execute(stmt)
        return result.rowcount == 1

    def delete_by_draw(self, session: Session, draw_id: int) -> int:
        result = session.execute(delete(Ticket).where(Ticket.draw_id == draw_id))
        return int(result.rowcount or 0)
