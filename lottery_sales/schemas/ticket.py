"""Marshmallow schemas for Ticket."""

from __future__ import annotations

import re

from marshmallow import EXCLUDE, Schema, fields, validate

from lottery_sales.models.ticket import TicketState
from lottery_sales.validation import TICKET_NUMBER_PATTERN


class TicketSchema(Schema):
    """Serialize Ticket."""

    id = fields.Int(required=True)
    draw_id = fields.Int(required=True)
    number = fields.Str(required=True)
    price = fields.Decimal(required=True, as_string=True)
    state = fields.Enum(TicketState, required=True)
    customer_id = fields.Int(allow_none=True)


class TicketCreateSchema(Schema):
    """Validate create Ticket payload."""

    draw_id = fields.Int(required=True)
    number = fields.Str(
        required=True,
        validate=validate.Regexp(TICKET_NUMBER_PATTERN, flags=re.ASCII, error="number must be 1 to 6 digits"),
    )
    price = fields.Decimal(required=True, places=2, validate=validate.Range(min=0, min_inclusive=False))
    state = fields.Enum(TicketState, required=False, load_default=None)


class TicketFilterSchema(Schema):
    """Validate ticket list query string."""

    class Meta:
        unknown = EXCLUDE

    state = fields.Enum(TicketState, required=False, load_default=None)


class TicketSummarySchema(Schema):
    """One purchased ticket in a customer's history."""

    id = fields.Int(required=True)
    number = fields.Str(required=True)
    price = fields.Decimal(required=True, as_string=True)
    state = fields.Str(required=True)
    draw_id = fields.Int(required=True)
    draw_name = fields.Str(required=True)
