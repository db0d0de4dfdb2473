"""Sale ledger ORM model.

Append-only: a row is written once per ticket and never updated. The
unique constraint on ``ticket_id`` is what decides concurrent sales of the
same ticket.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, ForeignKey, Integer, Numeric, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from lottery_sales.models.base import Base


class Sale(Base):
    """One completed sale of one ticket."""

    __tablename__ = "sales"
    __table_args__ = (UniqueConstraint("ticket_id", name="uq_sales_ticket"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    ticket_id: Mapped[int] = mapped_column(Integer, ForeignKey("tickets.id"), nullable=False)
    customer_id: Mapped[int] = mapped_column(Integer, ForeignKey("customers.id"), nullable=False, index=True)
    sold_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)
    price: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
