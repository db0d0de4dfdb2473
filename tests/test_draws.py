from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from lottery_sales.errors import ConflictError, NotFoundError, ValidationError
from lottery_sales.models.ticket import TicketState
from lottery_sales.repositories.ticket_repository import TicketRepository
from lottery_sales.services.draw_service import DrawService


def test_create_list_and_get_draw(uow, draw_service):
    first = uow(draw_service.create_draw, "Sorteo Mayo", date(2026, 5, 1))
    second = uow(draw_service.create_draw, "Sorteo Enero", date(2026, 1, 15))

    listed = uow(draw_service.list_draws)

    assert [d.id for d in listed] == [second.id, first.id]
    assert uow(draw_service.get_draw, first.id) == first


def test_get_missing_draw(uow, draw_service):
    with pytest.raises(NotFoundError):
        uow(draw_service.get_draw, 999)


def test_create_draw_requires_name(uow, draw_service):
    with pytest.raises(ValidationError) as excinfo:
        uow(draw_service.create_draw, "   ", date(2026, 5, 1))
    assert "name" in excinfo.value.details


def test_generate_tickets_numbering(uow, draw_service, ticket_service):
    # Pad the table so the target draw has id 5.
    for i in range(4):
        uow(draw_service.create_draw, f"Sorteo {i}", date(2026, 1, i + 1))
    draw = uow(draw_service.create_draw, "Sorteo 5", date(2026, 2, 1))
    assert draw.id == 5

    tickets = uow(draw_service.generate_tickets, 5, count=10, unit_price=10000)

    assert [t.number for t in tickets] == [f"{n:04d}" for n in range(1, 11)]
    assert all(t.state is TicketState.AVAILABLE for t in tickets)
    assert all(t.price == Decimal("10000") for t in tickets)
    assert all(t.draw_id == 5 for t in tickets)
    assert all(t.customer_id is None for t in tickets)
    assert len(uow(ticket_service.list_by_draw, 5)) == 10


def test_generate_tickets_continues_after_highest_number(uow, draw_service, ticket_service, draw, tickets):
    uow(ticket_service.create_ticket, draw.id, "0042", Decimal("5000"))

    more = uow(draw_service.generate_tickets, draw.id, count=3, unit_price=Decimal("2000"))

    assert [t.number for t in more] == ["0043", "0044", "0045"]
    numbers = [t.number for t in uow(ticket_service.list_by_draw, draw.id)]
    assert len(numbers) == len(set(numbers)) == 14


def test_generate_tickets_numbering_is_per_draw(uow, draw_service, draw, tickets):
    other = uow(draw_service.create_draw, "Sorteo Extra", date(2027, 1, 1))

    generated = uow(draw_service.generate_tickets, other.id, count=2, unit_price=1)

    assert [t.number for t in generated] == ["0001", "0002"]


@pytest.mark.parametrize(
    ("count", "price", "field"),
    [
        (0, 10000, "count"),
        (-3, 10000, "count"),
        (5, 0, "price"),
        (5, "-1", "price"),
        (5, "abc", "price"),
        (2.9, 10000, "count"),
        (True, 10000, "count"),
        ("3", 10000, "count"),
        (2, "0.004", "price"),
        (2, Decimal("10000000000"), "price"),
    ],
)
def test_generate_tickets_rejects_bad_input(uow, draw_service, draw, count, price, field):
    with pytest.raises(ValidationError) as excinfo:
        uow(draw_service.generate_tickets, draw.id, count=count, unit_price=price)
    assert field in excinfo.value.details


def test_generate_tickets_respects_batch_limit(uow, draw_service, draw):
    with pytest.raises(ValidationError):
        uow(draw_service.generate_tickets, draw.id, count=11, unit_price=1, max_batch=10)


def test_generate_tickets_cannot_pass_six_digits(uow, draw_service, ticket_service, draw):
    uow(ticket_service.create_ticket, draw.id, "999998", 1)

    with pytest.raises(ValidationError):
        uow(draw_service.generate_tickets, draw.id, count=2, unit_price=1)


def test_generate_tickets_for_missing_draw(uow, draw_service):
    with pytest.raises(NotFoundError):
        uow(draw_service.generate_tickets, 404, count=1, unit_price=1)


def test_delete_draw_removes_its_tickets(uow, draw_service, ticket_service, draw, tickets):
    uow(draw_service.delete_draw, draw.id)

    with pytest.raises(NotFoundError):
        uow(draw_service.get_draw, draw.id)
    with pytest.raises(NotFoundError):
        uow(ticket_service.get_ticket, tickets[0].id)


def test_delete_draw_with_sold_tickets_is_refused(uow, draw_service, ticket_service, sale_service, draw, tickets, jane):
    uow(sale_service.sell, tickets[0].id, jane.id)

    with pytest.raises(ConflictError):
        uow(draw_service.delete_draw, draw.id)

    assert uow(draw_service.get_draw, draw.id) == draw
    assert len(uow(ticket_service.list_by_draw, draw.id)) == 10


class _InventoryMissingLateSale(TicketRepository):
    """Reports no sold tickets, as if the sale landed after the count."""

    def count_sold(self, session, draw_id):
        return 0


def test_delete_draw_racing_a_sale_conflicts(uow, ticket_service, sale_service, draw, tickets, jane):
    uow(sale_service.sell, tickets[0].id, jane.id)
    service = DrawService(tickets=_InventoryMissingLateSale())

    with pytest.raises(ConflictError):
        uow(service.delete_draw, draw.id)

    assert uow(service.get_draw, draw.id) == draw
    assert len(uow(ticket_service.list_by_draw, draw.id)) == 10
