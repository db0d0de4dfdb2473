"""Marshmallow schemas for Draw."""

from __future__ import annotations

from marshmallow import Schema, fields, validate


class DrawSchema(Schema):
    """Serialize Draw."""

    id = fields.Int(required=True)
    name = fields.Str(required=True)
    draw_date = fields.Date(required=True)


class DrawCreateSchema(Schema):
    """Validate create Draw payload."""

    name = fields.Str(required=True, validate=validate.Length(min=1, max=200))
    draw_date = fields.Date(required=True)


class GenerateTicketsSchema(Schema):
    """Validate a ticket generation request for a draw."""

    count = fields.Integer(required=True, validate=validate.Range(min=1))
    price = fields.Decimal(required=True, places=2, validate=validate.Range(min=0, min_inclusive=False))
