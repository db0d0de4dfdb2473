"""Explicit input checks shared by the services.

The HTTP schemas validate request bodies too, but services are callable
without the web layer, so each write path re-checks its inputs here. Every
check raises :class:`lottery_sales.errors.ValidationError` with per-field
messages in ``details``. Inputs are rejected, never corrected.
"""

from __future__ import annotations

import re
from decimal import Decimal, InvalidOperation
from typing import Any

from marshmallow import ValidationError as MarshmallowValidationError
from marshmallow import validate

from lottery_sales.errors import ValidationError

TICKET_NUMBER_PATTERN = r"^[0-9]{1,6}\Z"
MAX_TICKET_NUMBER = 999_999

# Prices live in Numeric(12, 2) columns.
PRICE_PLACES = 2
MAX_PRICE = Decimal(10) ** 10

_ticket_number = validate.Regexp(
    TICKET_NUMBER_PATTERN,
    flags=re.ASCII,
    error="Ticket number must be 1 to 6 digits",
)
_email = validate.Email(error="Not a valid email address")


def _fail(field: str, message: str) -> ValidationError:
    return ValidationError(message=f"Invalid {field}", details={field: [message]})


def require_text(field: str, value: Any) -> str:
    if value is None or not str(value).strip():
        raise _fail(field, "Must not be blank")
    return str(value)


def require_ticket_number(value: Any) -> str:
    if not isinstance(value, str):
        raise _fail("number", "Must be a string of digits")
    try:
        _ticket_number(value)
    except MarshmallowValidationError as exc:
        raise _fail("number", str(exc.messages[0])) from exc
    return value


def require_positive_price(value: Any, field: str = "price") -> Decimal:
    if isinstance(value, bool):
        raise _fail(field, "Must be a decimal number")
    try:
        price = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise _fail(field, "Must be a decimal number") from exc
    if not price.is_finite() or price <= 0:
        raise _fail(field, "Must be greater than 0")
    if price.as_tuple().exponent < -PRICE_PLACES:
        raise _fail(field, f"At most {PRICE_PLACES} decimal places")
    if price >= MAX_PRICE:
        raise _fail(field, f"Must be less than {MAX_PRICE}")
    return price


def require_positive_count(value: Any, maximum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise _fail("count", "Must be an integer")
    if value < 1:
        raise _fail("count", "Must be >= 1")
    if value > maximum:
        raise _fail("count", f"Must be <= {maximum}")
    return value


def require_email(value: Any) -> str:
    email = require_text("email", value)
    try:
        _email(email)
    except MarshmallowValidationError as exc:
        raise _fail("email", str(exc.messages[0])) from exc
    return email
