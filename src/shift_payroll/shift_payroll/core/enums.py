from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Roles used for authorization checks."""

    HR = "hr"
    AGENT = "agent"


class AttendanceStatus(str, Enum):
    """Normalized attendance status stored per attributed date."""

    ON_TIME = "on_time"
    LATE = "late"
    HALF_DAY = "half_day"
    ABSENT = "absent"


class EmploymentType(str, Enum):
    FULL_TIME = "full_time"
    PART_TIME = "part_time"


class SaleStatus(str, Enum):
    PARTIAL = "partial"
    COMPLETED = "completed"


class ReviewStatus(str, Enum):
    """Review flow state for HR-approved submissions."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
