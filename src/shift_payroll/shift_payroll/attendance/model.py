from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one agent's attendance for one attributed date."""

    work_date: date
    status: AttendanceStatus
    hr_approved: bool = False
    agent_id: Optional[int] = None
    check_in_time: Optional[datetime] = None
    minutes_late: int = 0
    note: Optional[str] = None
