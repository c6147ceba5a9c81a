from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import DailyTelemetry


class TelemetryRepository(Protocol):
    def get_for_agent_and_date(self, agent_id: int, work_date: date) -> Optional[DailyTelemetry]:
        raise NotImplementedError

    def list_for_agent_between(self, agent_id: int, start: date, end: date) -> Sequence[DailyTelemetry]:
        raise NotImplementedError

    def add_sales_amount(self, agent_id: int, work_date: date, amount: Decimal) -> Decimal:
        """Increment the running sales total for the date, returning the new total."""

        raise NotImplementedError

    def add_leads(self, agent_id: int, work_date: date, count: int = 1) -> int:
        """Increment the approved-lead counter for the date, returning the new count."""

        raise NotImplementedError
