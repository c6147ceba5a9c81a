from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date
from enum import Enum
from typing import Any, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.policy import LatePolicyResult
from ..core.enums import AttendanceStatus
from ..performance.model import DailyTelemetry, PerformanceTargets

DayPair = tuple[DailyTelemetry, Optional[AttendanceRecord]]


@dataclass(frozen=True)
class SalaryInput:
    """Everything the aggregator needs; nothing is read from clocks or storage."""

    base_salary: float
    system_launch_date: date
    reference_date: date
    targets: PerformanceTargets
    past_days: Sequence[DayPair] = ()
    today: Optional[DayPair] = None


@dataclass(frozen=True)
class DayEarnings:
    work_date: date
    status: AttendanceStatus
    hr_approved: bool
    performance_score: float
    multiplier: float
    earnings: float


@dataclass(frozen=True)
class StatusTally:
    days: int = 0
    earnings: float = 0.0


@dataclass(frozen=True)
class PerformanceSummary:
    total_calls: int
    total_talk_time_seconds: int
    total_leads: int
    avg_performance_score: float


@dataclass(frozen=True)
class SalaryBreakdown:
    """Derived month-to-date pay for one agent. Never stored."""

    reference_date: date
    base_salary: float
    working_days_in_month: int
    working_days_elapsed: int
    working_days_remaining: int
    daily_potential: float

    ghost_days: int
    ghost_earnings: float

    active_days: int
    active_earnings: float

    today_earnings: float
    today_performance_score: float
    today_attendance_multiplier: float

    late_policy: LatePolicyResult

    total_earned_before_deduction: float
    total_earned: float
    projected_salary: float
    percentage_earned: float

    attendance_breakdown: dict[AttendanceStatus, StatusTally]
    performance_summary: PerformanceSummary
    days: tuple[DayEarnings, ...] = field(default=())

    def to_dict(self) -> dict[str, Any]:
        return _plain(asdict(self))


def _plain(value: Any) -> Any:
    if isinstance(value, dict):
        return {_plain_key(k): _plain(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    return value


def _plain_key(key: Any) -> Any:
    return key.value if isinstance(key, Enum) else key
