"""Marshmallow schemas for Customer."""

from __future__ import annotations

from marshmallow import EXCLUDE, Schema, fields, validate

from lottery_sales.schemas.ticket import TicketSummarySchema


class CustomerSchema(Schema):
    """Serialize Customer."""

    id = fields.Int(required=True)
    name = fields.Str(required=True)
    email = fields.Email(required=True)


class CustomerWriteSchema(Schema):
    """Validate register/update payloads."""

    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    email = fields.Email(required=True, validate=validate.Length(max=254))


class HistoryQuerySchema(Schema):
    class Meta:
        unknown = EXCLUDE

    email = fields.Email(required=True)


class CustomerHistorySchema(Schema):
    """Customer plus every ticket they bought."""

    id = fields.Int(required=True)
    name = fields.Str(required=True)
    email = fields.Email(required=True)
    tickets = fields.List(fields.Nested(TicketSummarySchema), required=True)
