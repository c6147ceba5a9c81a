"""Working-day arithmetic over a fixed Monday-Friday work week.

All functions are pure and operate on calendar dates only.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from ..core.exceptions import ConfigurationError


def is_working_day(day: date) -> bool:
    return day.weekday() < 5


def is_weekend(day: date) -> bool:
    return day.weekday() >= 5


def month_start(day: date) -> date:
    return day.replace(day=1)


def month_end(day: date) -> date:
    return day.replace(day=calendar.monthrange(day.year, day.month)[1])


def working_days_between(start: date, end: date) -> int:
    """Working days in [start, end], inclusive. Empty when start > end."""
    if start > end:
        return 0

    total_days = (end - start).days + 1
    full_weeks, extra = divmod(total_days, 7)
    count = full_weeks * 5
    first_weekday = start.weekday()
    for offset in range(extra):
        if (first_weekday + offset) % 7 < 5:
            count += 1
    return count


def working_days_in_month(reference_date: date) -> int:
    return working_days_between(month_start(reference_date), month_end(reference_date))


def require_working_days_in_month(reference_date: date) -> int:
    """Like working_days_in_month, but a zero count is a fatal configuration error."""
    days = working_days_in_month(reference_date)
    if days <= 0:
        raise ConfigurationError(f"No working days in month of {reference_date.isoformat()}")
    return days


def working_days_elapsed(reference_date: date) -> int:
    return working_days_between(month_start(reference_date), reference_date)


def working_days_remaining(reference_date: date) -> int:
    tomorrow = reference_date + timedelta(days=1)
    end = month_end(reference_date)
    if tomorrow > end:
        return 0
    return working_days_between(tomorrow, end)


def ghost_days(system_launch_date: date, reference_date: date) -> int:
    """Working days of the reference month that passed before the system launched.

    - launched on/before the 1st: none
    - launching in a later month: every working day elapsed so far
    - launched mid-month: the 1st up to the day before launch, never past the reference date
    """
    start = month_start(reference_date)
    if system_launch_date <= start:
        return 0

    if system_launch_date > month_end(reference_date):
        return working_days_elapsed(reference_date)

    last_ghost_day = min(system_launch_date - timedelta(days=1), reference_date)
    return working_days_between(start, last_ghost_day)
