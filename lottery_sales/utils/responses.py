"""Helpers for the JSON envelope shared by every endpoint.

``{"success": bool, "data": ..., "error": {"code", "message", "details"} | null}``
"""

from __future__ import annotations

from typing import Any

from flask import Response, jsonify

from lottery_sales.errors import AppError


def ok(data: Any, status_code: int = 200) -> Response:
    return jsonify({"success": True, "data": data, "error": None}), status_code


def created(data: Any) -> Response:
    return ok(data, status_code=201)


def fail(code: str, message: str, status_code: int, details: Any | None = None) -> Response:
    error = {"code": code, "message": message, "details": details}
    return jsonify({"success": False, "data": None, "error": error}), status_code


def fail_with(exc: AppError) -> Response:
    """Render an application error."""

    return fail(exc.code, exc.message, exc.status_code, exc.details)
