from __future__ import annotations
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP

from typing import Any

from stockbook.time_utils import parse_iso_date


# Maximum price: 9,999,999.99 (999,999,999 cents)
# This prevents database overflow issues and nonsensical prices
MAX_PRICE_CENTS = 999_999_999

# Upper bound for a single stock batch
MAX_STOCK_BATCH = 10_000

# Matches the String(255) name columns
MAX_NAME_LENGTH = 255


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., selling an item twice)."""


class NotFoundError(LookupError):
    """404-level: row missing or outside the caller's inventory."""


def json_object(payload: Any) -> dict:
    """Request body as a dict; a missing body is empty, anything but an object is rejected."""
    if payload is None:
        return {}
    if not isinstance(payload, dict):
        raise ValidationError("request body must be a JSON object")
    return payload


def coerce_int(value: Any, field: str) -> int:
    # Already an int (but not bool which is a subclass of int)
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    # String input - must be plain digits (with optional leading minus)
    if isinstance(value, str):
        stripped = value.strip()
        if not stripped:
            raise ValidationError(f"{field} must be an integer")
        # Reject scientific notation (e.g., "1e15", "1E10")
        if 'e' in stripped.lower():
            raise ValidationError(f"{field} must be a plain integer (scientific notation not allowed)")
        # Reject decimal points (e.g., "12.5")
        if '.' in stripped:
            raise ValidationError(f"{field} must be an integer (no decimals)")
        try:
            return int(stripped)
        except ValueError:
            raise ValidationError(f"{field} must be an integer")
    if isinstance(value, float):
        raise ValidationError(f"{field} must be an integer, not a decimal")
    raise ValidationError(f"{field} must be an integer")


def price_to_cents(value: Any, field: str) -> int:
    """
    Convert a client-entered amount ("80", 80, "79.99") to integer cents.

    A blank or missing amount counts as 0, the same as a cleared price box.
    """
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")
    cents = int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if cents < 0:
        raise ValidationError(f"{field} must be >= 0")
    if cents > MAX_PRICE_CENTS:
        raise ValidationError(f"{field} cannot exceed {MAX_PRICE_CENTS / 100:,.2f}")
    return cents


def require_name(value: Any, field: str = "name") -> str:
    name = "" if value is None else str(value).strip()
    if not name:
        raise ValidationError(f"{field} cannot be blank")
    if len(name) > MAX_NAME_LENGTH:
        raise ValidationError(f"{field} exceeds max length {MAX_NAME_LENGTH}")
    return name


def parse_stock_quantity(value: Any) -> int:
    if value is None:
        raise ValidationError("quantity is required")
    quantity = coerce_int(value, "quantity")
    if quantity <= 0:
        raise ValidationError("quantity must be a positive integer")
    if quantity > MAX_STOCK_BATCH:
        raise ValidationError(f"quantity cannot exceed {MAX_STOCK_BATCH}")
    return quantity


def parse_sale_date(value: Any, window: tuple[date, date]) -> date:
    """
    Resolve the date a sale is recorded against.

    Missing -> the latest allowed day (today). Anything outside the inclusive
    window is rejected.
    """
    earliest, latest = window
    if value is None or (isinstance(value, str) and not value.strip()):
        return latest
    if not isinstance(value, str):
        raise ValidationError("sold_date must be a YYYY-MM-DD string")
    try:
        sold_on = parse_iso_date(value)
    except ValueError:
        raise ValidationError("sold_date must be a YYYY-MM-DD string")
    if sold_on < earliest or sold_on > latest:
        raise ValidationError(
            f"sold_date must be between {earliest.isoformat()} and {latest.isoformat()}"
        )
    return sold_on
