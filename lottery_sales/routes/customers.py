"""Customer routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottery_sales.db import get_session
from lottery_sales.schemas.customer import (
    CustomerHistorySchema,
    CustomerSchema,
    CustomerWriteSchema,
    HistoryQuerySchema,
)
from lottery_sales.schemas.ticket import TicketSchema
from lottery_sales.services.customer_service import CustomerService
from lottery_sales.services.ticket_service import TicketService
from lottery_sales.utils.responses import created, ok

customers_bp = Blueprint("customers", __name__)

_customer_schema = CustomerSchema()
_customers_schema = CustomerSchema(many=True)
_write_schema = CustomerWriteSchema()
_history_query_schema = HistoryQuerySchema()
_history_schema = CustomerHistorySchema()
_tickets_schema = TicketSchema(many=True)
_service = CustomerService()
_ticket_service = TicketService()


@customers_bp.post("/customers")
def register_customer():
    payload = request.get_json(silent=True) or {}
    data = _write_schema.load(payload)

    customer = _service.register(get_session(), name=data["name"], email=data["email"])
    return created(_customer_schema.dump(customer))


@customers_bp.get("/customers")
def list_customers():
    customers = _service.list_customers(get_session())
    return ok(_customers_schema.dump(customers))


@customers_bp.get("/customers/history")
def customer_history():
    """Customer data plus every ticket they bought, looked up by email."""

    query = _history_query_schema.load(request.args.to_dict())
    history = _service.history_by_email(get_session(), query["email"])
    return ok(_history_schema.dump(history))


@customers_bp.get("/customers/email/<path:email>")
def find_by_email(email: str):
    customer = _service.find_by_email(get_session(), email)
    return ok(_customer_schema.dump(customer))


@customers_bp.get("/customers/<int:customer_id>")
def get_customer(customer_id: int):
    customer = _service.get_customer(get_session(), customer_id)
    return ok(_customer_schema.dump(customer))


@customers_bp.put("/customers/<int:customer_id>")
def update_customer(customer_id: int):
    payload = request.get_json(silent=True) or {}
    data = _write_schema.load(payload)

    customer = _service.update(get_session(), customer_id, name=data["name"], email=data["email"])
    return ok(_customer_schema.dump(customer))


@customers_bp.delete("/customers/<int:customer_id>")
def delete_customer(customer_id: int):
    _service.delete(get_session(), customer_id)
    return ok({"id": customer_id, "deleted": True})


@customers_bp.get("/customers/<int:customer_id>/tickets")
def list_customer_tickets(customer_id: int):
    session = get_session()
    _service.get_customer(session, customer_id)
    tickets = _ticket_service.list_by_customer(session, customer_id)
    return ok(_tickets_schema.dump(tickets))
