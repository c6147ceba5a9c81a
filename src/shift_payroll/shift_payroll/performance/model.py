from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal

from ..common.validators import require_non_negative_int, to_decimal
from ..core.enums import EmploymentType
from ..core.exceptions import ConfigurationError, ValidationError


@dataclass(frozen=True)
class DailyTelemetry:
    """Domain entity: one agent's counters for one attributed date."""

    work_date: date
    calls: int = 0
    talk_time_seconds: int = 0
    leads_approved: int = 0
    sales_amount: Decimal = field(default=Decimal("0"))

    def __post_init__(self):
        require_non_negative_int(self.calls, "calls")
        require_non_negative_int(self.talk_time_seconds, "talk_time_seconds")
        require_non_negative_int(self.leads_approved, "leads_approved")
        amount = to_decimal(self.sales_amount, "sales_amount")
        if amount < 0:
            raise ValidationError("sales_amount cannot be negative")
        object.__setattr__(self, "sales_amount", amount)


@dataclass(frozen=True)
class PerformanceTargets:
    """Daily counts that earn the full weight of each sub-score."""

    calls: int
    talk_time_seconds: int
    leads: int

    def __post_init__(self):
        for name in ("calls", "talk_time_seconds", "leads"):
            if getattr(self, name) <= 0:
                raise ConfigurationError(f"Performance target '{name}' must be positive")


@dataclass(frozen=True)
class PerformanceWeights:
    calls: float = 0.40
    talk_time: float = 0.30
    leads: float = 0.30

    def __post_init__(self):
        if min(self.calls, self.talk_time, self.leads) < 0:
            raise ConfigurationError("Performance weights cannot be negative")
        if not math.isclose(self.calls + self.talk_time + self.leads, 1.0, abs_tol=1e-9):
            raise ConfigurationError("Performance weights must sum to 1.0")


@dataclass(frozen=True)
class PerformanceScore:
    calls_score: float
    talk_time_score: float
    leads_score: float

    @property
    def total(self) -> float:
        return self.calls_score + self.talk_time_score + self.leads_score


DEFAULT_TARGETS: dict[EmploymentType, PerformanceTargets] = {
    EmploymentType.FULL_TIME: PerformanceTargets(calls=150, talk_time_seconds=3600, leads=3),
    EmploymentType.PART_TIME: PerformanceTargets(calls=75, talk_time_seconds=1800, leads=2),
}


def targets_for(
    employment_type: EmploymentType,
    table: dict[EmploymentType, PerformanceTargets] = DEFAULT_TARGETS,
) -> PerformanceTargets:
    try:
        return table[EmploymentType(employment_type)]
    except (KeyError, ValueError):
        raise ConfigurationError(f"No performance targets for employment type {employment_type!r}")
