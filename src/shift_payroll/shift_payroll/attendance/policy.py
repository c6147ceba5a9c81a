"""Attendance multipliers and the monthly "free lates" policy.

Late days earn the full multiplier; excess lateness is charged once per month
as half a day's pay per late beyond the free allowance, together with half a
day per half-day absence.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, Mapping

from ..core.constants import (
    DEFAULT_FREE_LATES,
    EXCESS_LATE_PENALTY_DAYS,
    HALF_DAY_PENALTY_DAYS,
    UNAPPROVED_HALF_DAY_PENALTY,
)
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConfigurationError

DEFAULT_MULTIPLIERS: Mapping[AttendanceStatus, float] = {
    AttendanceStatus.ON_TIME: 1.0,
    AttendanceStatus.LATE: 1.0,
    AttendanceStatus.HALF_DAY: 0.5,
    AttendanceStatus.ABSENT: 0.0,
}


@dataclass(frozen=True)
class AttendanceMultipliers:
    table: Mapping[AttendanceStatus, float] = field(default_factory=lambda: dict(DEFAULT_MULTIPLIERS))
    unapproved_half_day_penalty: float = UNAPPROVED_HALF_DAY_PENALTY

    def __post_init__(self):
        missing = [s.value for s in AttendanceStatus if s not in self.table]
        if missing:
            raise ConfigurationError(f"Missing attendance multipliers for: {', '.join(missing)}")

    def for_status(self, status: AttendanceStatus) -> float:
        return self.table[AttendanceStatus(status)]


@dataclass(frozen=True)
class LatePolicyResult:
    total_lates: int
    total_half_days: int
    free_lates_used: int
    free_lates_remaining: int
    excess_lates: int
    deduction_days: float
    deduction_amount: float


@dataclass(frozen=True)
class LatePolicy:
    free_lates: int = DEFAULT_FREE_LATES
    excess_late_penalty_days: float = EXCESS_LATE_PENALTY_DAYS
    half_day_penalty_days: float = HALF_DAY_PENALTY_DAYS

    def __post_init__(self):
        if self.free_lates < 0:
            raise ConfigurationError("free_lates cannot be negative")

    def evaluate(self, total_lates: int, total_half_days: int, daily_potential: float) -> LatePolicyResult:
        free_used = min(total_lates, self.free_lates)
        excess = max(0, total_lates - self.free_lates)
        deduction_days = total_half_days * self.half_day_penalty_days + excess * self.excess_late_penalty_days
        return LatePolicyResult(
            total_lates=total_lates,
            total_half_days=total_half_days,
            free_lates_used=free_used,
            free_lates_remaining=self.free_lates - free_used,
            excess_lates=excess,
            deduction_days=deduction_days,
            deduction_amount=deduction_days * daily_potential,
        )

    def evaluate_statuses(self, statuses: Iterable[AttendanceStatus], daily_potential: float) -> LatePolicyResult:
        lates = 0
        half_days = 0
        for status in statuses:
            if status == AttendanceStatus.LATE:
                lates += 1
            elif status == AttendanceStatus.HALF_DAY:
                half_days += 1
        return self.evaluate(lates, half_days, daily_potential)
