"""Centralized error handlers.

Every handler marks the request session as failed so the teardown rolls
back whatever the failed operation flushed.
"""

from __future__ import annotations

import logging

from flask import Flask
from marshmallow import ValidationError as MarshmallowValidationError
from sqlalchemy.exc import IntegrityError
from werkzeug.exceptions import HTTPException

from lottery_sales.db import is_unique_violation, mark_request_failed
from lottery_sales.errors import AppError, ConflictError, ValidationError
from lottery_sales.utils.responses import fail, fail_with

logger = logging.getLogger(__name__)


def register_error_handlers(app: Flask) -> None:
    """Register error handlers for the Flask app."""

    @app.errorhandler(AppError)
    def _handle_app_error(exc: AppError):
        mark_request_failed()
        return fail_with(exc)

    @app.errorhandler(MarshmallowValidationError)
    def _handle_schema_error(exc: MarshmallowValidationError):
        mark_request_failed()
        # exc.messages is a dict of field -> list[str]
        wrapped = ValidationError(details=exc.messages)
        return fail_with(wrapped)

    @app.errorhandler(IntegrityError)
    def _handle_integrity_error(exc: IntegrityError):
        mark_request_failed()
        if not is_unique_violation(exc):
            logger.exception("Integrity error")
            return fail("internal_error", "Internal server error", 500)

        logger.info("Unique constraint violation", exc_info=exc)
        wrapped = ConflictError(details=str(exc.orig) if exc.orig else str(exc))
        return fail_with(wrapped)

    @app.errorhandler(HTTPException)
    def _handle_http_exception(exc: HTTPException):
        mark_request_failed()
        status = int(getattr(exc, "code", 500) or 500)
        if status == 404:
            return fail("not_found", "Not found", 404)
        if status == 405:
            return fail("method_not_allowed", "Method not allowed", 405)

        return fail(
            "http_error",
            getattr(exc, "description", "HTTP error"),
            status,
            details={"name": getattr(exc, "name", "HTTPException")},
        )

    @app.errorhandler(Exception)
    def _handle_unexpected(exc: Exception):
        mark_request_failed()
        logger.exception("Unhandled exception")
        return fail("internal_error", "Internal server error", 500)
