"""Sale routes (controllers). No business logic here."""

from __future__ import annotations

from flask import Blueprint, request

from lottery_sales.db import get_session
from lottery_sales.schemas.sale import SaleReceiptSchema, SaleRequestSchema, SaleSchema
from lottery_sales.services.sale_service import SaleService
from lottery_sales.utils.responses import created, ok

sales_bp = Blueprint("sales", __name__)

_request_schema = SaleRequestSchema()
_receipt_schema = SaleReceiptSchema()
_sale_schema = SaleSchema()
_sales_schema = SaleSchema(many=True)
_service = SaleService()


@sales_bp.post("/sales")
def sell_ticket():
    """Sell one ticket to one customer.

    The whole sale runs in the request's transaction, committed in teardown.
    """

    payload = request.get_json(silent=True) or {}
    data = _request_schema.load(payload)

    receipt = _service.sell(get_session(), ticket_id=data["ticket_id"], customer_id=data["customer_id"])
    return created(_receipt_schema.dump(receipt))


@sales_bp.get("/sales")
def list_sales():
    sales = _service.list_sales(get_session())
    return ok(_sales_schema.dump(sales))


@sales_bp.get("/sales/<int:sale_id>")
def get_sale(sale_id: int):
    sale = _service.get_sale(get_session(), sale_id)
    return ok(_sale_schema.dump(sale))
