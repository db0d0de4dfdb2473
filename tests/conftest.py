from __future__ import annotations

from collections.abc import Callable, Generator
from datetime import date
from decimal import Decimal
from typing import Any

import pytest
from flask import Flask
from flask.testing import FlaskClient
from sqlalchemy.orm import Session, sessionmaker

from lottery_sales import create_app
from lottery_sales.db import session_scope
from lottery_sales.services.customer_service import CustomerService
from lottery_sales.services.draw_service import DrawService
from lottery_sales.services.sale_service import SaleService
from lottery_sales.services.ticket_service import TicketService


@pytest.fixture()
def app(tmp_path) -> Generator[Flask, None, None]:
    # File-backed so worker threads get their own connections.
    test_app = create_app(
        {
            "TESTING": True,
            "DATABASE_URL": f"sqlite:///{tmp_path / 'lottery.db'}",
        }
    )
    yield test_app
    test_app.extensions["engine"].dispose()


@pytest.fixture()
def client(app: Flask) -> FlaskClient:
    return app.test_client()


@pytest.fixture()
def session_factory(app: Flask) -> sessionmaker[Session]:
    return app.extensions["session_factory"]


@pytest.fixture()
def uow(session_factory: sessionmaker[Session]) -> Callable[..., Any]:
    """Run one service call in its own transaction, like one request."""

    def run(fn: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        with session_scope(session_factory) as session:
            return fn(session, *args, **kwargs)

    return run


@pytest.fixture()
def draw_service() -> DrawService:
    return DrawService()


@pytest.fixture()
def ticket_service() -> TicketService:
    return TicketService()


@pytest.fixture()
def customer_service() -> CustomerService:
    return CustomerService()


@pytest.fixture()
def sale_service() -> SaleService:
    return SaleService()


@pytest.fixture()
def draw(uow, draw_service):
    return uow(draw_service.create_draw, "Sorteo Navidad", date(2026, 12, 24))


@pytest.fixture()
def tickets(uow, draw_service, draw):
    return uow(draw_service.generate_tickets, draw.id, count=10, unit_price=Decimal("10000"))


@pytest.fixture()
def jane(uow, customer_service):
    return uow(customer_service.register, "Jane Doe", "jane@example.com")
