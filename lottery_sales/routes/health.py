"""Health check routes."""

from __future__ import annotations

from flask import Blueprint
from sqlalchemy import text

from lottery_sales.db import get_session
from lottery_sales.utils.responses import ok

health_bp = Blueprint("health", __name__)


@health_bp.get("/health")
def health_check():
    """Liveness only."""

    return ok({"status": "ok"})


@health_bp.get("/api/status")
def status():
    """Liveness plus a database round trip."""

    get_session().execute(text("SELECT 1"))
    return ok({"status": "ok", "database": "ok"})
