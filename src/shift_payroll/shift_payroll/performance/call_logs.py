from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, tzinfo
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Union

from ..common.datetime_utils import parse_duration, to_local
from ..core.constants import DEFAULT_MIN_TALK_SECONDS
from ..shifts.model import ShiftInstance
from .model import DailyTelemetry


@dataclass(frozen=True)
class CallLog:
    """One call reported by the phone system."""

    extension: str
    call_time: datetime
    duration: Union[str, int]
    call_type: Optional[str] = None

    @property
    def duration_seconds(self) -> int:
        if isinstance(self.duration, int):
            return max(self.duration, 0)
        return parse_duration(self.duration)


@dataclass(frozen=True)
class CallSummary:
    calls: int = 0
    talk_time_seconds: int = 0


def _summarize(logs: Iterable[CallLog], min_talk_seconds: int) -> CallSummary:
    calls = 0
    talk = 0
    for log in logs:
        calls += 1
        seconds = log.duration_seconds
        if seconds >= min_talk_seconds:
            talk += seconds
    return CallSummary(calls=calls, talk_time_seconds=talk)


def summarize_window(
    logs: Iterable[CallLog],
    window: ShiftInstance,
    *,
    min_talk_seconds: int = DEFAULT_MIN_TALK_SECONDS,
) -> CallSummary:
    """Every call inside the window counts; only calls of at least `min_talk_seconds` add talk time."""
    tz = window.start.tzinfo
    return _summarize((log for log in logs if window.contains(to_local(log.call_time, tz))), min_talk_seconds)


def summarize_by_date(
    logs: Iterable[CallLog],
    tz: tzinfo,
    *,
    min_talk_seconds: int = DEFAULT_MIN_TALK_SECONDS,
) -> dict[date, CallSummary]:
    by_date: dict[date, list[CallLog]] = {}
    for log in logs:
        by_date.setdefault(to_local(log.call_time, tz).date(), []).append(log)
    return {d: _summarize(items, min_talk_seconds) for d, items in sorted(by_date.items())}


def merge_daily(
    stored: Iterable[DailyTelemetry],
    call_days: Mapping[date, CallSummary],
) -> list[DailyTelemetry]:
    """Call-log counts override stored calls/talk time; stored leads and sales are kept."""
    merged: dict[date, DailyTelemetry] = {t.work_date: t for t in stored}
    for day, summary in call_days.items():
        existing = merged.get(day)
        merged[day] = DailyTelemetry(
            work_date=day,
            calls=summary.calls,
            talk_time_seconds=summary.talk_time_seconds,
            leads_approved=existing.leads_approved if existing else 0,
            sales_amount=existing.sales_amount if existing else Decimal("0"),
        )
    return [merged[d] for d in sorted(merged)]


def build_shift_telemetry(
    window: ShiftInstance,
    logs: Iterable[CallLog],
    *,
    leads_approved: int = 0,
    sales_amount: Decimal = Decimal("0"),
    meeting_seconds: int = 0,
    min_talk_seconds: int = DEFAULT_MIN_TALK_SECONDS,
) -> DailyTelemetry:
    """Live counters for the current shift; HR-entered meeting time counts as talk time."""
    summary = summarize_window(logs, window, min_talk_seconds=min_talk_seconds)
    return DailyTelemetry(
        work_date=window.attributed_date,
        calls=summary.calls,
        talk_time_seconds=summary.talk_time_seconds + int(meeting_seconds),
        leads_approved=leads_approved,
        sales_amount=sales_amount,
    )
