from __future__ import annotations

from datetime import datetime, time
from decimal import Decimal, InvalidOperation
from typing import Union

from ..core.exceptions import ValidationError


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_non_negative_int(value: int, field_name: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValidationError(f"{field_name} must be an integer")
    if value < 0:
        raise ValidationError(f"{field_name} cannot be negative")
    return value


def to_decimal(value: Union[Decimal, int, float, str], field_name: str) -> Decimal:
    """Coerce a money-like value into Decimal without going through binary floats."""
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value))
        except (InvalidOperation, ValueError):
            raise ValidationError(f"{field_name} is not a valid amount")
    if not result.is_finite():
        raise ValidationError(f"{field_name} is not a valid amount")
    return result


def parse_clock_time(value: Union[str, time], field_name: str) -> time:
    """Parse a wall-clock time given as HH:MM or HH:MM:SS."""
    if isinstance(value, time):
        return value
    v = (value or "").strip()
    for fmt in ("%H:%M:%S", "%H:%M"):
        try:
            return datetime.strptime(v, fmt).time()
        except ValueError:
            continue
    raise ValidationError(f"{field_name} must be a time of day (HH:MM or HH:MM:SS), got {value!r}")
