from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional

from ..core.enums import EmploymentType
from ..shifts.model import ShiftSpec


@dataclass(frozen=True)
class AgentProfile:
    """Domain entity: per-agent pay configuration.

    Note: Plain data object (no storage access code).
    """

    agent_id: int
    full_name: str
    base_salary: float
    shift: ShiftSpec
    employment_type: EmploymentType = EmploymentType.FULL_TIME
    sales_target: Decimal = field(default=Decimal("0"))
    extension_number: Optional[str] = None
    is_active: bool = True
