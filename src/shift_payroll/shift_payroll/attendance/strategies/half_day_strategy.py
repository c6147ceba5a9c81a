from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class HalfDayStrategy(CheckInStrategy):
    """Past the late threshold: the day is booked as a half day."""

    def decide_checkin(self, *, minutes_late: int) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.HALF_DAY,
            minutes_late=minutes_late,
            note=f"{minutes_late} minutes late, marked as half day",
        )
