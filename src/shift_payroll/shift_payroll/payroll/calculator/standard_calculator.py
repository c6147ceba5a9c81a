from __future__ import annotations

from typing import Optional

from ...attendance.model import AttendanceRecord
from ...attendance.policy import AttendanceMultipliers
from ...core.enums import AttendanceStatus
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: potential * score * status multiplier.

    No attendance record means absent. A half day not yet approved by HR is
    cut in half once more.
    """

    def __init__(self, multipliers: Optional[AttendanceMultipliers] = None):
        self._multipliers = multipliers or AttendanceMultipliers()

    @staticmethod
    def status_of(record: Optional[AttendanceRecord]) -> AttendanceStatus:
        return record.status if record else AttendanceStatus.ABSENT

    def multiplier(self, record: Optional[AttendanceRecord]) -> float:
        return self._multipliers.for_status(self.status_of(record))

    def daily_earnings(
        self,
        daily_potential: float,
        performance_score: float,
        record: Optional[AttendanceRecord],
    ) -> float:
        earnings = daily_potential * performance_score * self.multiplier(record)
        if record and record.status == AttendanceStatus.HALF_DAY and not record.hr_approved:
            earnings *= self._multipliers.unapproved_half_day_penalty
        return earnings
