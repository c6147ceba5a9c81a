from __future__ import annotations

import importlib
import logging
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv

from .common.datetime_utils import get_zone, now_local, parse_iso_date
from .core.constants import DEFAULT_TIMEZONE
from .config import get_settings_module
from .core.exceptions import ConfigurationError, ValidationError

LOG_FORMAT = "%(levelname)s %(asctime)s %(name)s %(message)s"


@dataclass(frozen=True)
class PayrollSettings:
    settings_module: str
    timezone: ZoneInfo
    system_launch_date: date
    free_lates: int
    commission_rate: Decimal
    clamp_negative_total: bool
    grace_minutes: int
    late_threshold_minutes: int
    min_talk_seconds: int
    log_level: str
    debug: bool = False


def configure_logging(level: str = "INFO") -> logging.Logger:
    """Attach one stream handler to the package logger (repeat calls only change the level)."""
    numeric = logging.getLevelName(str(level).upper())
    if not isinstance(numeric, int):
        raise ConfigurationError(f"Unknown LOG_LEVEL {level!r}")

    root = logging.getLogger("shift_payroll")
    root.setLevel(numeric)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root


def _int(settings, name: str, default: int) -> int:
    raw = getattr(settings, name, default)
    try:
        value = int(raw)
    except (TypeError, ValueError):
        raise ConfigurationError(f"{name} must be an integer, got {raw!r}")
    if value < 0:
        raise ConfigurationError(f"{name} cannot be negative")
    return value


def _flag(settings, name: str) -> bool:
    raw = str(getattr(settings, name, "0")).strip().lower()
    if raw in {"1", "true", "yes", "on"}:
        return True
    if raw in {"0", "false", "no", "off", ""}:
        return False
    raise ConfigurationError(f"{name} must be 0 or 1, got {raw!r}")


def _launch_date(raw: str, tz: ZoneInfo) -> date:
    if not raw:
        return now_local(tz).date().replace(day=1)
    try:
        return parse_iso_date(raw)
    except ValidationError:
        raise ConfigurationError(f"SYSTEM_LAUNCH_DATE must be YYYY-MM-DD, got {raw!r}")


def load_settings(settings_module: Optional[str] = None, *, setup_logging: bool = True) -> PayrollSettings:
    load_dotenv(override=False)

    module_name = settings_module or get_settings_module()
    settings = importlib.import_module(module_name)

    tz = get_zone(getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE))

    raw_rate = getattr(settings, "COMMISSION_RATE", "0.05")
    try:
        rate = Decimal(str(raw_rate))
    except InvalidOperation:
        raise ConfigurationError(f"COMMISSION_RATE must be a number, got {raw_rate!r}")
    if not rate.is_finite() or not 0 <= rate <= 1:
        raise ConfigurationError("COMMISSION_RATE must be between 0 and 1")

    grace = _int(settings, "GRACE_MINUTES", 30)
    threshold = _int(settings, "LATE_THRESHOLD_MINUTES", 90)
    if grace > threshold:
        raise ConfigurationError("GRACE_MINUTES cannot exceed LATE_THRESHOLD_MINUTES")

    result = PayrollSettings(
        settings_module=module_name,
        timezone=tz,
        system_launch_date=_launch_date(str(getattr(settings, "SYSTEM_LAUNCH_DATE", "") or ""), tz),
        free_lates=_int(settings, "FREE_LATES", 3),
        commission_rate=rate,
        clamp_negative_total=_flag(settings, "CLAMP_NEGATIVE_TOTAL"),
        grace_minutes=grace,
        late_threshold_minutes=threshold,
        min_talk_seconds=_int(settings, "MIN_TALK_SECONDS", 30),
        log_level=str(getattr(settings, "LOG_LEVEL", "INFO")).upper(),
        debug=bool(getattr(settings, "DEBUG", False)),
    )

    if setup_logging:
        configure_logging(result.log_level)
        logging.getLogger(__name__).debug(
            "[settings] module=%s tz=%s launch=%s", module_name, result.timezone.key, result.system_launch_date
        )
    return result
