"""Marshmallow schemas for sales."""

from __future__ import annotations

from marshmallow import Schema, fields


class SaleRequestSchema(Schema):
    """Validate a sale request."""

    ticket_id = fields.Int(required=True)
    customer_id = fields.Int(required=True)


class SaleReceiptSchema(Schema):
    """Serialize the result of a sale."""

    sale_id = fields.Int(required=True)
    ticket_id = fields.Int(required=True)
    ticket_number = fields.Str(required=True)
    customer_id = fields.Int(required=True)
    customer_name = fields.Str(required=True)
    sold_at = fields.DateTime(required=True)
    price = fields.Decimal(required=True, as_string=True)


class SaleSchema(Schema):
    """Serialize a ledger entry."""

    id = fields.Int(required=True)
    ticket_id = fields.Int(required=True)
    customer_id = fields.Int(required=True)
    sold_at = fields.DateTime(required=True)
    price = fields.Decimal(required=True, as_string=True)
