"""
Idempotent normalizers for money and time values.

All normalizers must be idempotent: normalized(normalized(x)) == normalized(x)
Applied at the service boundary before anything reaches the store or the
query engine, so the core can assume well-formed values.
"""
import re
from datetime import datetime, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

TWO_PLACES = Decimal("0.01")

_DATE_ONLY = re.compile(r"^\d{4}-\d{2}-\d{2}$")


class NormalizeError(ValueError):
    """Raised when normalization fails and cannot be recovered."""

    pass


def utc_now() -> datetime:
    """Current instant, timezone-aware UTC."""
    return datetime.now(timezone.utc)


def normalize_amount(value: Optional[Any]) -> str:
    """
    Normalize a monetary amount to a fixed-point string with two decimals.

    Rules:
    - Accepts Decimal, int, float or numeric text
    - Rounds half-up to two fraction digits

    Idempotent: normalize_amount("25.50") == "25.50"

    Args:
        value: Amount in any numeric representation

    Returns:
        Fixed-point string, e.g. "25.50"

    Raises:
        NormalizeError: If the value is empty, not a finite number, or too
            large to carry two fraction digits
    """
    if value is None or value == "":
        raise NormalizeError("Amount is empty or None")

    if isinstance(value, bool):
        raise NormalizeError(f"Invalid amount: {value}")

    try:
        # str() first so floats use their shortest repr (25.5 -> "25.5")
        amount = Decimal(str(value).strip())
    except InvalidOperation:
        raise NormalizeError(f"Invalid amount: {value}")

    if not amount.is_finite():
        raise NormalizeError(f"Invalid amount: {value}")

    try:
        # Fails past the context precision (28 significant digits)
        return str(amount.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise NormalizeError(f"Amount out of range: {value}")


def parse_instant(value: Optional[Any]) -> datetime:
    """
    Parse a date or instant into a timezone-aware UTC datetime.

    Accepts:
    - datetime (naive values are taken as UTC)
    - Date-only text "YYYY-MM-DD" (midnight UTC)
    - ISO-8601 instants, with "Z" or an explicit offset

    Idempotent: parse_instant(parse_instant(x)) == parse_instant(x)

    Args:
        value: Date/instant text or datetime

    Returns:
        Aware datetime in UTC

    Raises:
        NormalizeError: If the value cannot be parsed
    """
    if value is None or value == "":
        raise NormalizeError("Date is empty or None")

    if isinstance(value, datetime):
        parsed = value
    else:
        value_str = str(value).strip()
        if value_str.endswith("Z") or value_str.endswith("z"):
            value_str = value_str[:-1] + "+00:00"
        try:
            if _DATE_ONLY.match(value_str):
                parsed = datetime.strptime(value_str, "%Y-%m-%d")
            else:
                parsed = datetime.fromisoformat(value_str)
        except ValueError:
            raise NormalizeError(f"Cannot parse date: {value}")

    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


def format_instant(value: Optional[datetime]) -> str:
    """
    Render an instant as ISO-8601 UTC text with millisecond precision.

    Example: 2024-01-15T10:30:00.000Z
    """
    if value is None:
        return ""
    value = parse_instant(value)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


def format_day(value: Optional[datetime]) -> str:
    """Render the UTC calendar day of an instant as YYYY-MM-DD."""
    if value is None:
        return ""
    return parse_instant(value).strftime("%Y-%m-%d")
