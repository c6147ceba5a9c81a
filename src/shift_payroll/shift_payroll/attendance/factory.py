from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import DEFAULT_GRACE_MINUTES, DEFAULT_LATE_THRESHOLD_MINUTES, MINUTES_PER_DAY
from ..core.exceptions import ConfigurationError
from ..shifts.model import ShiftSpec, minute_of_day
from .strategies.base import CheckInStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.on_time_strategy import OnTimeStrategy


def minutes_late(shift: ShiftSpec, local_now: datetime) -> int:
    """Minutes between shift start and `local_now`, wrapped into (-12h, +12h].

    A 01:00 check-in for a 21:00 shift is 240 minutes late, not 1200 early.
    """
    diff = minute_of_day(local_now) - shift.start_minute
    half_day = MINUTES_PER_DAY // 2
    if diff < -half_day:
        diff += MINUTES_PER_DAY
    elif diff > half_day:
        diff -= MINUTES_PER_DAY
    return diff


@dataclass
class CheckInStrategyFactory:
    """Factory Pattern: choose the check-in strategy from the grace rules."""

    grace_minutes: int = DEFAULT_GRACE_MINUTES
    late_threshold_minutes: int = DEFAULT_LATE_THRESHOLD_MINUTES

    def __post_init__(self):
        if not 0 <= self.grace_minutes <= self.late_threshold_minutes:
            raise ConfigurationError("Grace period must be between 0 and the late threshold")

    def for_checkin(self, *, minutes_late: int) -> CheckInStrategy:
        if minutes_late <= self.grace_minutes:
            return OnTimeStrategy()
        if minutes_late <= self.late_threshold_minutes:
            return LateStrategy()
        return HalfDayStrategy()
