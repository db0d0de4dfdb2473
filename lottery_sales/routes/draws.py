"""Draw routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, current_app, request

from lottery_sales.db import get_session
from lottery_sales.schemas.draw import DrawCreateSchema, DrawSchema, GenerateTicketsSchema
from lottery_sales.schemas.ticket import TicketFilterSchema, TicketSchema
from lottery_sales.services.draw_service import DrawService
from lottery_sales.services.ticket_service import TicketService
from lottery_sales.utils.responses import created, ok

draws_bp = Blueprint("draws", __name__)

_draw_schema = DrawSchema()
_draws_schema = DrawSchema(many=True)
_create_schema = DrawCreateSchema()
_generate_schema = GenerateTicketsSchema()
_filter_schema = TicketFilterSchema()
_tickets_schema = TicketSchema(many=True)
_service = DrawService()
_ticket_service = TicketService()


@draws_bp.get("/draws")
def list_draws():
    """List all draws."""

    draws = _service.list_draws(get_session())
    return ok(_draws_schema.dump(draws))


@draws_bp.post("/draws")
def create_draw():
    """Create a new draw."""

    payload = request.get_json(silent=True) or {}
    data = _create_schema.load(payload)

    draw = _service.create_draw(get_session(), name=data["name"], draw_date=data["draw_date"])

    # Commit occurs in teardown if no exception.
    return created(_draw_schema.dump(draw))


@draws_bp.get("/draws/<int:draw_id>")
def get_draw(draw_id: int):
    draw = _service.get_draw(get_session(), draw_id)
    return ok(_draw_schema.dump(draw))


@draws_bp.delete("/draws/<int:draw_id>")
def delete_draw(draw_id: int):
    """Delete a draw and its (unsold) tickets."""

    _service.delete_draw(get_session(), draw_id)
    return ok({"id": draw_id, "deleted": True})


@draws_bp.post("/draws/<int:draw_id>/tickets")
def generate_tickets(draw_id: int):
    """Generate the next ``count`` tickets of a draw."""

    payload = request.get_json(silent=True) or {}
    data = _generate_schema.load(payload)

    tickets = _service.generate_tickets(
        get_session(),
        draw_id,
        count=data["count"],
        unit_price=data["price"],
        number_width=int(current_app.config["TICKET_NUMBER_WIDTH"]),
        max_batch=int(current_app.config["MAX_TICKETS_PER_BATCH"]),
    )
    return created(_tickets_schema.dump(tickets))


@draws_bp.get("/draws/<int:draw_id>/tickets")
def list_draw_tickets(draw_id: int):
    """List a draw's tickets, optionally only AVAILABLE or SOLD ones."""

    query = _filter_schema.load(request.args.to_dict())
    session = get_session()

    _service.get_draw(session, draw_id)
    tickets = _ticket_service.list_by_draw(session, draw_id, state=query["state"])
    return ok(_tickets_schema.dump(tickets))
