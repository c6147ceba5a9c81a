from __future__ import annotations

from datetime import date, datetime, timedelta, timezone

import pytest

from shift_payroll.core.exceptions import ValidationError
from shift_payroll.shifts.model import ShiftSpec
from shift_payroll.shifts.resolver import ShiftWindowResolver

NIGHT = ShiftSpec.parse("21:00", "05:00")
DAY = ShiftSpec.parse("09:00", "17:00")


def test_parse_accepts_seconds_and_detects_overnight():
    assert NIGHT.is_overnight
    assert not DAY.is_overnight
    assert ShiftSpec.parse("21:00:00", "05:00:00") == NIGHT


@pytest.mark.parametrize("start, end", [("25:00", "05:00"), ("9am", "17:00"), ("", "17:00"), ("09:00", "09:00")])
def test_parse_rejects_malformed_or_empty_shift(start, end):
    with pytest.raises(ValidationError):
        ShiftSpec.parse(start, end)


def test_overnight_shift_evening_belongs_to_today(karachi):
    resolver = ShiftWindowResolver(karachi)

    window = resolver.resolve(NIGHT, datetime(2025, 1, 15, 22, 0, tzinfo=karachi))

    assert window.attributed_date == date(2025, 1, 15)
    assert window.start == datetime(2025, 1, 15, 21, 0, tzinfo=karachi)
    assert window.end == datetime(2025, 1, 16, 5, 0, tzinfo=karachi)


def test_overnight_shift_after_midnight_belongs_to_yesterday(karachi):
    resolver = ShiftWindowResolver(karachi)

    window = resolver.resolve(NIGHT, datetime(2025, 1, 16, 2, 0, tzinfo=karachi))

    assert window.attributed_date == date(2025, 1, 15)
    assert window.contains(datetime(2025, 1, 16, 2, 0, tzinfo=karachi))


def test_overnight_gap_resolves_to_last_completed_shift(karachi):
    resolver = ShiftWindowResolver(karachi)

    window = resolver.resolve(NIGHT, datetime(2025, 1, 16, 6, 0, tzinfo=karachi))

    assert window.attributed_date == date(2025, 1, 15)
    assert window.end == datetime(2025, 1, 16, 5, 0, tzinfo=karachi)


def test_attendance_date_moves_on_after_shift_end(karachi):
    resolver = ShiftWindowResolver(karachi)

    assert resolver.attendance_date(NIGHT, datetime(2025, 1, 15, 22, 0, tzinfo=karachi)) == date(2025, 1, 15)
    assert resolver.attendance_date(NIGHT, datetime(2025, 1, 16, 2, 0, tzinfo=karachi)) == date(2025, 1, 15)
    assert resolver.attendance_date(NIGHT, datetime(2025, 1, 16, 6, 0, tzinfo=karachi)) == date(2025, 1, 16)


def test_same_day_shift(karachi):
    resolver = ShiftWindowResolver(karachi)

    during = resolver.resolve(DAY, datetime(2025, 1, 15, 10, 0, tzinfo=karachi))
    after = resolver.resolve(DAY, datetime(2025, 1, 15, 18, 0, tzinfo=karachi))
    before = resolver.resolve(DAY, datetime(2025, 1, 15, 8, 0, tzinfo=karachi))

    assert during.attributed_date == date(2025, 1, 15)
    assert during.end == datetime(2025, 1, 15, 17, 0, tzinfo=karachi)
    assert after.attributed_date == date(2025, 1, 15)
    assert before.attributed_date == date(2025, 1, 14)


def test_weekend_is_judged_by_shift_start(karachi):
    resolver = ShiftWindowResolver(karachi)

    friday_night = datetime(2025, 1, 17, 22, 0, tzinfo=karachi)
    saturday_tail = datetime(2025, 1, 18, 2, 0, tzinfo=karachi)
    saturday_night = datetime(2025, 1, 18, 22, 0, tzinfo=karachi)

    assert not resolver.is_weekend_shift(NIGHT, friday_night)
    assert not resolver.is_weekend_shift(NIGHT, saturday_tail)
    assert resolver.is_weekend_shift(NIGHT, saturday_night)


def test_instants_are_read_in_local_time(karachi):
    resolver = ShiftWindowResolver(karachi)

    # 17:00 UTC is 22:00 in Karachi
    from_utc = resolver.resolve(NIGHT, datetime(2025, 1, 15, 17, 0, tzinfo=timezone.utc))
    from_naive = resolver.resolve(NIGHT, datetime(2025, 1, 15, 22, 0))

    assert from_utc.attributed_date == date(2025, 1, 15)
    assert from_naive == from_utc
    assert from_utc.start_utc == datetime(2025, 1, 15, 16, 0, tzinfo=timezone.utc)


def test_every_instant_maps_to_a_window_containing_or_preceding_it(karachi):
    resolver = ShiftWindowResolver(karachi)

    for hour in range(24):
        now = datetime(2025, 1, 15, hour, 30, tzinfo=karachi)
        window = resolver.resolve(NIGHT, now)
        assert window.start <= now
        assert window.end - window.start == timedelta(hours=8)
