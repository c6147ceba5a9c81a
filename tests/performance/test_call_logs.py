from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal

import pytest

from shift_payroll.common.datetime_utils import format_duration, format_duration_human, parse_duration
from shift_payroll.core.exceptions import ValidationError
from shift_payroll.performance.call_logs import (
    CallLog,
    CallSummary,
    build_shift_telemetry,
    merge_daily,
    summarize_by_date,
    summarize_window,
)
from shift_payroll.performance.model import DailyTelemetry
from shift_payroll.shifts.model import ShiftSpec
from shift_payroll.shifts.resolver import ShiftWindowResolver


@pytest.mark.parametrize(
    "raw, seconds",
    [("01:02:03", 3723), ("02:05", 125), ("45", 45), (None, 0), ("", 0)],
)
def test_parse_duration(raw, seconds):
    assert parse_duration(raw) == seconds


@pytest.mark.parametrize("raw", ["abc", "1:2:3:4", "-5", "1.5"])
def test_parse_duration_rejects_garbage(raw):
    with pytest.raises(ValidationError):
        parse_duration(raw)


def test_duration_formatting():
    assert format_duration(3723) == "01:02:03"
    assert format_duration_human(3900) == "1h 5m"
    assert format_duration_human(720) == "12m"


def _window(karachi):
    resolver = ShiftWindowResolver(karachi)
    return resolver.resolve(ShiftSpec.parse("21:00", "05:00"), datetime(2025, 1, 15, 22, 0, tzinfo=karachi))


def _logs(karachi):
    return [
        CallLog("101", datetime(2025, 1, 15, 20, 59, tzinfo=karachi), "00:05:00"),  # before shift
        CallLog("101", datetime(2025, 1, 15, 21, 30, tzinfo=karachi), "00:00:45"),
        CallLog("101", datetime(2025, 1, 15, 23, 0, tzinfo=karachi), "20"),  # too short for talk time
        CallLog("101", datetime(2025, 1, 16, 4, 59, tzinfo=karachi), "01:00"),
        CallLog("101", datetime(2025, 1, 16, 5, 0, tzinfo=karachi), 90),  # shift already ended
    ]


def test_window_counts_every_call_but_only_long_talk(karachi):
    summary = summarize_window(_logs(karachi), _window(karachi))

    assert summary == CallSummary(calls=3, talk_time_seconds=105)


def test_meeting_time_counts_as_talk_time(karachi):
    stats = build_shift_telemetry(_window(karachi), _logs(karachi), leads_approved=2, meeting_seconds=600)

    assert stats.work_date == date(2025, 1, 15)
    assert stats.calls == 3
    assert stats.talk_time_seconds == 705
    assert stats.leads_approved == 2


def test_summarize_by_calendar_date(karachi):
    by_date = summarize_by_date(_logs(karachi), karachi)

    assert list(by_date) == [date(2025, 1, 15), date(2025, 1, 16)]
    assert by_date[date(2025, 1, 15)] == CallSummary(calls=3, talk_time_seconds=345)
    assert by_date[date(2025, 1, 16)] == CallSummary(calls=2, talk_time_seconds=150)


def test_merge_keeps_leads_and_sales_from_stored_rows():
    stored = [
        DailyTelemetry(work_date=date(2025, 1, 14), calls=5, leads_approved=2, sales_amount=Decimal("100")),
        DailyTelemetry(work_date=date(2025, 1, 13), calls=9, talk_time_seconds=60),
    ]
    call_days = {
        date(2025, 1, 14): CallSummary(calls=40, talk_time_seconds=1200),
        date(2025, 1, 15): CallSummary(calls=3, talk_time_seconds=90),
    }

    merged = merge_daily(stored, call_days)

    assert [t.work_date for t in merged] == [date(2025, 1, 13), date(2025, 1, 14), date(2025, 1, 15)]
    assert merged[0].calls == 9
    assert merged[1] == DailyTelemetry(
        work_date=date(2025, 1, 14), calls=40, talk_time_seconds=1200, leads_approved=2, sales_amount=Decimal("100")
    )
    assert merged[2].leads_approved == 0
