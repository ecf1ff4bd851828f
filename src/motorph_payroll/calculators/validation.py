"""Coercion and field validation shared by components and the payroll aggregate."""

from __future__ import annotations

from datetime import date, datetime, time
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from motorph_payroll.calculators.types import InvalidFieldError

CENTS = Decimal("0.01")


def round_to_cents(amount: Decimal) -> Decimal:
    """Round amount to 2 decimal places (cents)."""
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def to_decimal(value: Any, field: str, label: str | None = None) -> Decimal:
    """Coerce int/str/float/Decimal to Decimal.

    Floats go through str() so 0.05 stays 0.05 instead of its binary expansion.
    """
    label = label or field.replace("_", " ").capitalize()
    if isinstance(value, bool) or value is None:
        raise InvalidFieldError(field, f"{label} must be a number")
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError) as exc:
            raise InvalidFieldError(field, f"{label} must be a number") from exc
    if not result.is_finite():
        raise InvalidFieldError(field, f"{label} must be a finite number")
    return result


def require_non_negative(value: Any, field: str, label: str | None = None) -> Decimal:
    label = label or field.replace("_", " ").capitalize()
    amount = to_decimal(value, field, label)
    if amount < 0:
        raise InvalidFieldError(field, f"{label} cannot be negative")
    return amount


def require_positive_id(value: Any, field: str = "employee_id", label: str = "Employee ID") -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldError(field, f"{label} must be an integer")
    if value <= 0:
        raise InvalidFieldError(field, f"{label} must be positive")
    return value


def require_non_negative_int(value: Any, field: str, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldError(field, f"{label} must be an integer")
    if value < 0:
        raise InvalidFieldError(field, f"{label} cannot be negative")
    return value


def require_text(value: Any, field: str = "type", label: str = "Type") -> str:
    if not isinstance(value, str) or not value.strip():
        raise InvalidFieldError(field, f"{label} cannot be empty")
    return value.strip()


def require_date(value: Any, field: str, label: str) -> date:
    """Accept a date (datetime is narrowed to its date) or an ISO string."""
    if value is None:
        raise InvalidFieldError(field, f"{label} cannot be null")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidFieldError(field, f"{label} must be an ISO date") from exc
    raise InvalidFieldError(field, f"{label} must be a date")


def parse_clock_time(value: Any, field: str, label: str) -> time:
    """Accept a time, a datetime (time part) or an "HH:MM[:SS]" string."""
    if isinstance(value, datetime):
        return value.time()
    if isinstance(value, time):
        return value
    if isinstance(value, str):
        try:
            return time.fromisoformat(value.strip())
        except ValueError as exc:
            raise InvalidFieldError(field, f"{label} must be HH:MM or HH:MM:SS") from exc
    raise InvalidFieldError(field, f"{label} must be a time of day")


def seconds_since_midnight(value: time) -> int:
    return value.hour * 3600 + value.minute * 60 + value.second
