from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Late check-in."""

    def decide_checkin(self, *, minutes_late: int) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.LATE, minutes_late=minutes_late, note=f"{minutes_late} minutes late")
