"""Service layer for customers and their purchase history."""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from lottery_sales.db import is_foreign_key_violation, is_unique_violation
from lottery_sales.errors import ConflictError, NotFoundError
from lottery_sales.repositories.customer_repository import CustomerRecord, CustomerRepository
from lottery_sales.repositories.sale_repository import SaleRepository
from lottery_sales.repositories.ticket_repository import TicketRepository, TicketSummaryRecord
from lottery_sales.validation import require_email, require_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CustomerHistory:
    id: int
    name: str
    email: str
    tickets: Sequence[TicketSummaryRecord]


def _email_taken(email: str) -> ConflictError:
    return ConflictError(
        message="A customer with that email already exists",
        details={"email": [email]},
    )


class CustomerService:
    """Customer use-cases."""

    def __init__(
        self,
        customers: CustomerRepository | None = None,
        tickets: TicketRepository | None = None,
        sales: SaleRepository | None = None,
    ) -> None:
        self._customers = customers or CustomerRepository()
        self._tickets = tickets or TicketRepository()
        self._sales = sales or SaleRepository()

    def register(self, session: Session, name: str, email: str) -> CustomerRecord:
        name = require_text("name", name)
        email = require_email(email)

        if self._customers.get_by_email(session, email) is not None:
            raise _email_taken(email)

        try:
            customer = self._customers.create(session, name=name, email=email)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            logger.info("Email %s registered concurrently", email)
            raise _email_taken(email) from exc

        logger.info("Registered customer %s", customer.id)
        return customer

    def list_customers(self, session: Session) -> Sequence[CustomerRecord]:
        return self._customers.list_all(session)

    def get_customer(self, session: Session, customer_id: int) -> CustomerRecord:
        customer = self._customers.get_by_id(session, customer_id)
        if customer is None:
            raise NotFoundError(message=f"Customer {customer_id} not found")
        return customer

    def find_by_email(self, session: Session, email: str) -> CustomerRecord:
        customer = self._customers.get_by_email(session, email)
        if customer is None:
            raise NotFoundError(message=f"Customer with email {email} not found")
        return customer

    def update(self, session: Session, customer_id: int, name: str, email: str) -> CustomerRecord:
        """Rename a customer or change their email.

        Keeping the current email is always allowed; taking another
        customer's email is a conflict.
        """

        name = require_text("name", name)
        email = require_email(email)
        current = self.get_customer(session, customer_id)

        if email != current.email:
            holder = self._customers.get_by_email(session, email)
            if holder is not None and holder.id != customer_id:
                raise _email_taken(email)

        try:
            updated = self._customers.update(session, customer_id, name=name, email=email)
        except IntegrityError as exc:
            if not is_unique_violation(exc):
                raise
            raise _email_taken(email) from exc

        if updated is None:
            raise NotFoundError(message=f"Customer {customer_id} not found")
        return updated

    def delete(self, session: Session, customer_id: int) -> None:
        """Remove a customer who has never bought a ticket.

        Customers with sales are kept so the ledger and their SOLD tickets
        keep a valid buyer.
        """

        self.get_customer(session, customer_id)
        if self._sales.exists_for_customer(session, customer_id):
            raise ConflictError(
                message=f"Customer {customer_id} has purchases and cannot be deleted",
                details={"customer_id": customer_id},
            )

        try:
            self._customers.delete(session, customer_id)
        except IntegrityError as exc:
            # A sale committed between the check and the delete.
            if not is_foreign_key_violation(exc):
                raise
            raise ConflictError(
                message=f"Customer {customer_id} has purchases and cannot be deleted",
                details={"customer_id": customer_id},
            ) from exc
        logger.info("Deleted customer %s", customer_id)

    def history_by_email(self, session: Session, email: str) -> CustomerHistory:
        customer = self.find_by_email(session, email)
        tickets = self._tickets.list_summaries_for_customer(session, customer.id)
        return CustomerHistory(
            id=customer.id,
            name=customer.name,
            email=customer.email,
            tickets=tickets,
        )
