from __future__ import annotations

from datetime import date, datetime, tzinfo
from typing import Optional
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ConfigurationError, ValidationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    try:
        return datetime.strptime(value.strip(), "%Y-%m-%d").date()
    except (AttributeError, ValueError):
        raise ValidationError(f"Invalid date {value!r}, expected YYYY-MM-DD")


def get_zone(name: str) -> ZoneInfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError):
        raise ConfigurationError(f"Unknown timezone {name!r}")


def now_local(tz: tzinfo) -> datetime:
    """Current time in the operating timezone.

    Note: Only service entry points call this; calculations take `now` explicitly.
    """
    return datetime.now(tz)


def to_local(instant: datetime, tz: tzinfo) -> datetime:
    """Express an instant in the operating timezone.

    Naive datetimes are taken to be local wall-clock time already.
    """
    if instant.tzinfo is None:
        return instant.replace(tzinfo=tz)
    return instant.astimezone(tz)


def format_date_ymd(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def parse_duration(value: Optional[str]) -> int:
    """Parse HH:MM:SS, MM:SS or bare seconds into a number of seconds."""
    if value is None:
        return 0
    text = str(value).strip()
    if not text:
        return 0

    parts = text.split(":")
    if len(parts) > 3 or not all(p.isdigit() for p in parts):
        raise ValidationError(f"Invalid duration {value!r}")

    seconds = 0
    for p in parts:
        seconds = seconds * 60 + int(p)
    return seconds


def format_duration(seconds: int) -> str:
    h, rem = divmod(int(seconds), 3600)
    m, s = divmod(rem, 60)
    return f"{h:02d}:{m:02d}:{s:02d}"


def format_duration_human(seconds: int) -> str:
    h, rem = divmod(int(seconds), 3600)
    m = rem // 60
    if h == 0:
        return f"{m}m"
    return f"{h}h {m}m"
