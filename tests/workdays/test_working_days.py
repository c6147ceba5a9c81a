from datetime import date

import pytest

from shift_payroll.workdays.working_days import (
    ghost_days,
    is_working_day,
    month_end,
    working_days_between,
    working_days_elapsed,
    working_days_in_month,
    working_days_remaining,
)


def test_weekdays_are_working_days():
    assert is_working_day(date(2025, 1, 17))  # Friday
    assert not is_working_day(date(2025, 1, 18))
    assert not is_working_day(date(2025, 1, 19))


def test_between_is_inclusive_and_empty_when_reversed():
    assert working_days_between(date(2025, 1, 13), date(2025, 1, 17)) == 5
    assert working_days_between(date(2025, 1, 18), date(2025, 1, 19)) == 0
    assert working_days_between(date(2025, 1, 17), date(2025, 1, 13)) == 0


@pytest.mark.parametrize(
    "ref, expected",
    [
        (date(2025, 1, 15), 23),
        (date(2025, 2, 1), 20),
        (date(2024, 2, 29), 21),
        (date(2024, 3, 31), 21),
    ],
)
def test_working_days_in_month(ref, expected):
    assert working_days_in_month(ref) == expected


def test_elapsed_and_remaining_split_the_month():
    ref = date(2025, 1, 15)
    assert working_days_elapsed(ref) == 11
    assert working_days_remaining(ref) == 12

    for day in range(1, 32):
        d = date(2025, 1, day)
        assert working_days_elapsed(d) + working_days_remaining(d) == working_days_in_month(d)


def test_remaining_is_zero_on_last_day():
    assert working_days_remaining(month_end(date(2025, 1, 1))) == 0


def test_ghost_days_for_mid_month_launch():
    # 1st..9th January 2025 holds seven working days
    assert ghost_days(date(2025, 1, 10), date(2025, 1, 20)) == 7


def test_ghost_days_never_pass_reference_date():
    assert ghost_days(date(2025, 1, 10), date(2025, 1, 3)) == 3


def test_no_ghost_days_when_launched_before_month():
    assert ghost_days(date(2024, 6, 1), date(2025, 1, 20)) == 0
    assert ghost_days(date(2025, 1, 1), date(2025, 1, 20)) == 0


def test_future_launch_makes_every_elapsed_day_a_ghost():
    assert ghost_days(date(2025, 3, 1), date(2025, 1, 15)) == 11
