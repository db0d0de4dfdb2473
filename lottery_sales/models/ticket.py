"""Ticket ORM model.

One row per ticket. ``(draw_id, number)`` is unique so every draw can reuse
the same numbering scheme. ``customer_id`` is set only once the ticket is
sold.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from sqlalchemy import Enum as SAEnum
from sqlalchemy import ForeignKey, Integer, Numeric, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lottery_sales.models.base import Base


class TicketState(str, Enum):
    AVAILABLE = "AVAILABLE"
    SOLD = "SOLD"


class Ticket(Base):
    """A numbered, purchasable unit within a draw."""

    __tablename__ = "tickets"
    __table_args__ = (UniqueConstraint("draw_id", "number", name="uq_tickets_draw_number"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    draw_id: Mapped[int] = mapped_column(Integer, ForeignKey("draws.id"), nullable=False, index=True)
    number: Mapped[str] = mapped_column(String(16), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    state: Mapped[TicketState] = mapped_column(
        SAEnum(TicketState, native_enum=False, length=16, name="ticket_state"),
        nullable=False,
        default=TicketState.AVAILABLE,
    )
    customer_id: Mapped[int | None] = mapped_column(Integer, ForeignKey("customers.id"), nullable=True, index=True)
