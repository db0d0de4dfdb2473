"""Sale repository (persistence).

Insert and read only: sale records are never updated or deleted. This
module does not decide whether a ticket may be sold; it relies on the
``uq_sales_ticket`` constraint and lets ``IntegrityError`` propagate.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from decimal import Decimal

from sqlalchemy import exists, select
from sqlalchemy.orm import Session

from lottery_sales.models.sale import Sale


@dataclass(frozen=True)
class SaleRecord:
    """Immutable record of one ticket sold to one customer."""

    id: int
    ticket_id: int
    customer_id: int
    sold_at: datetime
    price: Decimal


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns.
    if value.tzinfo is None or value.utcoffset() is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def _to_record(sale: Sale) -> SaleRecord:
    return SaleRecord(
        id=int(sale.id),
        ticket_id=int(sale.ticket_id),
        customer_id=int(sale.customer_id),
        sold_at=_as_utc(sale.sold_at),
        price=Decimal(sale.price),
    )


class SaleRepository:
    """Append-only sale ledger."""

    def insert(
        self,
        session: Session,
        ticket_id: int,
        customer_id: int,
        sold_at: datetime,
        price: Decimal,
    ) -> SaleRecord:
        sale = Sale(ticket_id=ticket_id, customer_id=customer_id, sold_at=sold_at, price=price)
        session.add(sale)
        session.flush()  # raises IntegrityError if the ticket already has a sale
        return _to_record(sale)

    def get_by_id(self, session: Session, sale_id: int) -> SaleRecord | None:
        sale = session.get(Sale, sale_id)
        return _to_record(sale) if sale is not None else None

    def get_by_ticket(self, session: Session, ticket_id: int) -> SaleRecord | None:
        stmt = select(Sale).where(Sale.ticket_id == ticket_id)
        sale = session.scalars(stmt).first()
        return _to_record(sale) if sale is not None else None

    def list_all(self, session: Session) -> Sequence[SaleRecord]:
        stmt = select(Sale).order_by(Sale.id.asc())
        return [_to_record(s) for s in session.scalars(stmt).all()]

    def list_by_customer(self, session: Session, customer_id: int) -> Sequence[SaleRecord]:
        stmt = select(Sale).where(Sale.customer_id == customer_id).order_by(Sale.id.asc())
        return [_to_record(s) for s in session.scalars(stmt).all()]

    def exists_for_customer(self, session: Session, customer_id: int) -> bool:
        stmt = select(exists().where(Sale.customer_id == customer_id))
        return bool(session.scalar(stmt))
