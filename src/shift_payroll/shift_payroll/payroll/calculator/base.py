from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...attendance.model import AttendanceRecord


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for daily pay)."""

    @abstractmethod
    def multiplier(self, record: Optional[AttendanceRecord]) -> float:
        raise NotImplementedError

    @abstractmethod
    def daily_earnings(
        self,
        daily_potential: float,
        performance_score: float,
        record: Optional[AttendanceRecord],
    ) -> float:
        raise NotImplementedError
