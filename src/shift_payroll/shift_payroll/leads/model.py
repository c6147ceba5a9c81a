from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import ReviewStatus


@dataclass(frozen=True)
class Lead:
    """Domain entity: a lead an agent reports, counted only once HR approves it.

    Note: Plain data object (no storage access code).
    """

    lead_id: Optional[int]
    agent_id: int
    customer_name: str
    customer_email: Optional[str] = None
    status: ReviewStatus = ReviewStatus.PENDING
    credited_date: Optional[date] = None
    reviewed_by_role: Optional[str] = None
