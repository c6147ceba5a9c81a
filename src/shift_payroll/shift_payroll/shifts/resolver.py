from __future__ import annotations

from datetime import date, datetime, timedelta, tzinfo

from ..common.datetime_utils import to_local
from .model import ShiftInstance, ShiftSpec, minute_of_day


class ShiftWindowResolver:
    """Map "now" and a shift spec to the shift instance it belongs to.

    The accounting day resets at shift start, not at local midnight, so an
    overnight shift (e.g. 21:00-05:00) is never split across two reporting days.
    Outside any live shift the most recently completed shift is returned.
    """

    def __init__(self, tz: tzinfo):
        self._tz = tz

    @property
    def tz(self) -> tzinfo:
        return self._tz

    def resolve(self, spec: ShiftSpec, now: datetime) -> ShiftInstance:
        local_now = to_local(now, self._tz)
        today = local_now.date()
        yesterday = today - timedelta(days=1)
        now_min = minute_of_day(local_now)

        if spec.is_overnight:
            if now_min >= spec.start_minute:
                start_day = today
            else:
                # Tail of last night's shift, or the gap after it ended.
                start_day = yesterday
            end_day = start_day + timedelta(days=1)
        else:
            start_day = today if now_min >= spec.start_minute else yesterday
            end_day = start_day

        return ShiftInstance(
            start=self._at(start_day, spec.start),
            end=self._at(end_day, spec.end),
            attributed_date=start_day,
        )

    def is_weekend_shift(self, spec: ShiftSpec, now: datetime) -> bool:
        return self.resolve(spec, now).is_paused

    def attendance_date(self, spec: ShiftSpec, now: datetime) -> date:
        """Date a check-in at `now` is booked against.

        Only the after-midnight tail of an overnight shift belongs to yesterday;
        from shift end onwards a new day has begun.
        """
        local_now = to_local(now, self._tz)
        if spec.is_overnight and minute_of_day(local_now) < spec.end_minute:
            return local_now.date() - timedelta(days=1)
        return local_now.date()

    def _at(self, day: date, clock) -> datetime:
        return datetime.combine(day, clock, tzinfo=self._tz)
