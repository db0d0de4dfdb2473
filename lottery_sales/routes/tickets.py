"""Ticket routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottery_sales.db import get_session
from lottery_sales.schemas.ticket import TicketCreateSchema, TicketSchema
from lottery_sales.services.ticket_service import TicketService
from lottery_sales.utils.responses import created, ok

tickets_bp = Blueprint("tickets", __name__)

_ticket_schema = TicketSchema()
_tickets_schema = TicketSchema(many=True)
_create_schema = TicketCreateSchema()
_service = TicketService()


@tickets_bp.post("/tickets")
def create_ticket():
    """Create a single ticket in an existing draw."""

    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    ticket = _service.create_ticket(
        get_session(),
        draw_id=data["draw_id"],
        number=data["number"],
        price=data["price"],
        state=data.get("state"),
    )
    return created(_ticket_schema.dump(ticket))


@tickets_bp.get("/tickets/<int:ticket_id>")
def get_ticket(ticket_id: int):
    ticket = _service.get_ticket(get_session(), ticket_id)
    return ok(_ticket_schema.dump(ticket))


@tickets_bp.get("/tickets/draw/<int:draw_id>")
def list_by_draw(draw_id: int):
    tickets = _service.list_by_draw(get_session(), draw_id)
    return ok(_tickets_schema.dump(tickets))
