from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy, StatusDecision


class OnTimeStrategy(CheckInStrategy):
    """Early, or late but within the grace period."""

    def decide_checkin(self, *, minutes_late: int) -> StatusDecision:
        if minutes_late <= 0:
            note = f"{abs(minutes_late)} minutes early"
        else:
            note = f"Checked in within grace period ({minutes_late} mins)"
        return StatusDecision(status=AttendanceStatus.ON_TIME, minutes_late=max(0, minutes_late), note=note)
