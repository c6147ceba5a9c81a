"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
"""

from decimal import Decimal

DEFAULT_TIMEZONE = "Asia/Karachi"

DEFAULT_FREE_LATES = 3
EXCESS_LATE_PENALTY_DAYS = 0.5
HALF_DAY_PENALTY_DAYS = 0.5
UNAPPROVED_HALF_DAY_PENALTY = 0.5

DEFAULT_GRACE_MINUTES = 30
DEFAULT_LATE_THRESHOLD_MINUTES = 90

DEFAULT_MIN_TALK_SECONDS = 30

DEFAULT_COMMISSION_RATE = Decimal("0.05")

MINUTES_PER_DAY = 24 * 60
