from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timezone
from typing import Union

from ..common.validators import parse_clock_time
from ..core.exceptions import ValidationError
from ..workdays.working_days import is_weekend


def minute_of_day(value: Union[time, datetime]) -> int:
    return value.hour * 60 + value.minute


@dataclass(frozen=True)
class ShiftSpec:
    """Domain entity: an agent's recurring shift, as wall-clock start/end times."""

    start: time
    end: time

    def __post_init__(self):
        if minute_of_day(self.start) == minute_of_day(self.end):
            raise ValidationError("Shift start and end cannot be the same time")

    @classmethod
    def parse(cls, start: Union[str, time], end: Union[str, time]) -> "ShiftSpec":
        return cls(
            start=parse_clock_time(start, "shift_start"),
            end=parse_clock_time(end, "shift_end"),
        )

    @property
    def start_minute(self) -> int:
        return minute_of_day(self.start)

    @property
    def end_minute(self) -> int:
        return minute_of_day(self.end)

    @property
    def is_overnight(self) -> bool:
        return self.start_minute > self.end_minute


@dataclass(frozen=True)
class ShiftInstance:
    """One concrete occurrence of a shift.

    Telemetry and attendance are booked against `attributed_date`, the local
    date on which the shift starts.
    """

    start: datetime
    end: datetime
    attributed_date: date

    def __post_init__(self):
        if not self.start < self.end:
            raise ValidationError("Shift must end after it starts")

    @property
    def is_paused(self) -> bool:
        """Weekend shift: judged by the start day, so Friday night still counts."""
        return is_weekend(self.attributed_date)

    @property
    def start_utc(self) -> datetime:
        return self.start.astimezone(timezone.utc)

    def contains(self, instant: datetime) -> bool:
        return self.start <= instant < self.end
