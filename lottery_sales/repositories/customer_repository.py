"""Repository layer for Customer persistence."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy import delete, select
from sqlalchemy.orm import Session

from lottery_sales.models.customer import Customer


@dataclass(frozen=True)
class CustomerRecord:
    id: int
    name: str
    email: str


def _to_record(customer: Customer) -> CustomerRecord:
    return CustomerRecord(id=int(customer.id), name=str(customer.name), email=str(customer.email))


class CustomerRepository:
    """CRUD operations for Customer."""

    def list_all(self, session: Session) -> Sequence[CustomerRecord]:
        stmt = select(Customer).order_by(Customer.id.asc())
        return [_to_record(c) for c in session.scalars(stmt).all()]

    def get_by_id(self, session: Session, customer_id: int) -> CustomerRecord | None:
        customer = session.get(Customer, customer_id)
        return _to_record(customer) if customer is not None else None

    def get_by_email(self, session: Session, email: str) -> CustomerRecord | None:
        # Exact, case-sensitive match.
        stmt = select(Customer).where(Customer.email == email)
        customer = session.scalars(stmt).first()
        return _to_record(customer) if customer is not None else None

    def create(self, session: Session, name: str, email: str) -> CustomerRecord:
        customer = Customer(name=name, email=email)
        session.add(customer)
        session.flush()
        return _to_record(customer)

    def update(self, session: Session, customer_id: int, name: str, email: str) -> CustomerRecord | None:
        customer = session.get(Customer, customer_id)
        if customer is None:
            return None
        customer.name = name
        customer.email = email
        session.flush()
        return _to_record(customer)

    def delete(self, session: Session, customer_id: int) -> int:
        result = session.execute(delete(Customer).where(Customer.id == customer_id))
        return int(result.rowcount or 0)
