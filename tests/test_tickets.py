from __future__ import annotations

from datetime import date
from decimal import Decimal

import pytest

from lottery_sales.errors import ConflictError, NotFoundError, ValidationError
from lottery_sales.models.ticket import TicketState


def test_create_ticket_defaults_to_available(uow, ticket_service, draw):
    ticket = uow(ticket_service.create_ticket, draw.id, "0001", Decimal("10000"))

    assert ticket.state is TicketState.AVAILABLE
    assert ticket.customer_id is None
    assert uow(ticket_service.get_ticket, ticket.id) == ticket


@pytest.mark.parametrize(
    ("price", "state"),
    [
        (Decimal("10000"), None),
        (Decimal("1"), "AVAILABLE"),
        (Decimal("99"), TicketState.SOLD),
    ],
)
def test_duplicate_number_in_draw_conflicts(uow, ticket_service, draw, price, state):
    uow(ticket_service.create_ticket, draw.id, "0001", Decimal("10000"))

    with pytest.raises(ConflictError):
        uow(ticket_service.create_ticket, draw.id, "0001", price, state)

    assert len(uow(ticket_service.list_by_draw, draw.id)) == 1


def test_same_number_in_another_draw_is_fine(uow, ticket_service, draw_service, draw):
    other = uow(draw_service.create_draw, "Sorteo Extra", date(2027, 1, 1))

    a = uow(ticket_service.create_ticket, draw.id, "0001", 10)
    b = uow(ticket_service.create_ticket, other.id, "0001", 10)

    assert a.id != b.id


@pytest.mark.parametrize(
    "number",
    ["", "abc", "1234567", "12a4", "-1", "\u0661\u0662\u0663", " 12 ", "12\n", 12, None],
)
def test_create_ticket_rejects_bad_numbers(uow, ticket_service, draw, number):
    with pytest.raises(ValidationError) as excinfo:
        uow(ticket_service.create_ticket, draw.id, number, 10)
    assert "number" in excinfo.value.details


@pytest.mark.parametrize("price", [0, -5, "0.00"])
def test_create_ticket_rejects_non_positive_price(uow, ticket_service, draw, price):
    with pytest.raises(ValidationError):
        uow(ticket_service.create_ticket, draw.id, "7", price)


@pytest.mark.parametrize("price", [Decimal("0.001"), "10.005", Decimal("10000000000"), True])
def test_create_ticket_rejects_prices_the_column_cannot_hold(uow, ticket_service, draw, price):
    with pytest.raises(ValidationError) as excinfo:
        uow(ticket_service.create_ticket, draw.id, "7", price)
    assert "price" in excinfo.value.details
    assert uow(ticket_service.list_by_draw, draw.id) == []


def test_create_ticket_keeps_two_decimal_price(uow, ticket_service, draw):
    ticket = uow(ticket_service.create_ticket, draw.id, "7", Decimal("12345.67"))

    assert uow(ticket_service.get_ticket, ticket.id).price == Decimal("12345.67")


def test_new_ticket_cannot_start_sold(uow, ticket_service, draw):
    with pytest.raises(ValidationError) as excinfo:
        uow(ticket_service.create_ticket, draw.id, "0003", 10, "SOLD")
    assert "state" in excinfo.value.details


def test_create_ticket_for_missing_draw(uow, ticket_service):
    with pytest.raises(NotFoundError):
        uow(ticket_service.create_ticket, 123, "0001", 10)


def test_get_missing_ticket(uow, ticket_service):
    with pytest.raises(NotFoundError):
        uow(ticket_service.get_ticket, 123)


def test_list_by_state_and_customer(uow, ticket_service, sale_service, draw, tickets, jane):
    uow(sale_service.sell, tickets[2].id, jane.id)
    uow(sale_service.sell, tickets[5].id, jane.id)

    available = uow(ticket_service.list_by_draw, draw.id, "AVAILABLE")
    sold = uow(ticket_service.list_by_draw, draw.id, TicketState.SOLD)
    mine = uow(ticket_service.list_by_customer, jane.id)

    assert len(available) == 8
    assert [t.number for t in sold] == ["0003", "0006"]
    assert [t.id for t in mine] == [tickets[2].id, tickets[5].id]
    assert all(t.customer_id == jane.id for t in sold)
    assert all(t.customer_id is None for t in available)


def test_list_by_unknown_state(uow, ticket_service, draw):
    with pytest.raises(ValidationError):
        uow(ticket_service.list_by_draw, draw.id, "RESERVED")
