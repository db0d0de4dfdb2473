"""ORM models."""

from lottery_sales.models.customer import Customer
from lottery_sales.models.draw import Draw
from lottery_sales.models.sale import Sale
from lottery_sales.models.ticket import Ticket, TicketState

__all__ = ["Customer", "Draw", "Sale", "Ticket", "TicketState"]
