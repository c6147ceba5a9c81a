from __future__ import annotations

from datetime import date
from typing import Iterable, Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..attendance.policy import LatePolicy, LatePolicyResult
from ..common.money import round_money
from ..core.enums import AttendanceStatus
from ..core.exceptions import ValidationError
from ..performance.model import DailyTelemetry
from ..performance.scorer import PerformanceScorer
from ..workdays.working_days import (
    ghost_days,
    month_start,
    require_working_days_in_month,
    working_days_elapsed,
)
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import DayEarnings, DayPair, PerformanceSummary, SalaryBreakdown, SalaryInput, StatusTally


def pair_by_date(
    telemetry: Iterable[DailyTelemetry],
    attendance: Iterable[AttendanceRecord],
) -> list[DayPair]:
    """Join telemetry rows with the attendance of the same date (None when missing)."""
    by_date = {a.work_date: a for a in attendance}
    return [(t, by_date.get(t.work_date)) for t in sorted(telemetry, key=lambda t: t.work_date)]


class SalaryAggregator:
    """Month-to-date pay: ghost + active + today - late policy, plus a projection.

    Amounts accumulate at full precision and are rounded to cents once, on output.
    """

    def __init__(
        self,
        scorer: Optional[PerformanceScorer] = None,
        calculator: Optional[PayrollCalculator] = None,
        late_policy: Optional[LatePolicy] = None,
        *,
        clamp_negative_total: bool = False,
    ):
        self._scorer = scorer or PerformanceScorer()
        self._calculator = calculator or StandardPayrollCalculator()
        self._late_policy = late_policy or LatePolicy()
        self._clamp_negative_total = bool(clamp_negative_total)

    def calculate(self, data: SalaryInput) -> SalaryBreakdown:
        if data.base_salary < 0:
            raise ValidationError("base_salary cannot be negative")
        self._validate_days(data.past_days, data.today, data.reference_date, data.system_launch_date)

        ref = data.reference_date
        days_in_month = require_working_days_in_month(ref)
        daily_potential = data.base_salary / days_in_month

        ghosts = ghost_days(data.system_launch_date, ref)
        ghost_earnings = ghosts * daily_potential

        tallies = {status: [0, 0.0] for status in AttendanceStatus}
        lines: list[DayEarnings] = []
        scores: list[float] = []
        totals = [0, 0, 0]

        def book(telemetry: DailyTelemetry, record: Optional[AttendanceRecord]) -> DayEarnings:
            score = self._scorer.score(telemetry, data.targets)
            line = DayEarnings(
                work_date=telemetry.work_date,
                status=StandardPayrollCalculator.status_of(record),
                hr_approved=bool(record and record.hr_approved),
                performance_score=score,
                multiplier=self._calculator.multiplier(record),
                earnings=self._calculator.daily_earnings(daily_potential, score, record),
            )
            tallies[line.status][0] += 1
            tallies[line.status][1] += line.earnings
            scores.append(score)
            totals[0] += telemetry.calls
            totals[1] += telemetry.talk_time_seconds
            totals[2] += telemetry.leads_approved
            lines.append(line)
            return line

        active_earnings = 0.0
        for telemetry, record in sorted(data.past_days, key=lambda p: p[0].work_date):
            active_earnings += book(telemetry, record).earnings
        active_days = len(lines)

        today_line = book(*data.today) if data.today is not None else None
        today_earnings = today_line.earnings if today_line else 0.0

        late = self._late_policy.evaluate_statuses((line.status for line in lines), daily_potential)

        before_deduction = ghost_earnings + active_earnings + today_earnings
        total_earned = before_deduction - late.deduction_amount
        if self._clamp_negative_total:
            total_earned = max(total_earned, 0.0)

        avg_score = sum(scores) / len(scores) if scores else 1.0
        elapsed = working_days_elapsed(ref)
        remaining = days_in_month - elapsed
        projected = total_earned + remaining * daily_potential * avg_score

        return SalaryBreakdown(
            reference_date=ref,
            base_salary=round_money(data.base_salary),
            working_days_in_month=days_in_month,
            working_days_elapsed=elapsed,
            working_days_remaining=remaining,
            daily_potential=round_money(daily_potential),
            ghost_days=ghosts,
            ghost_earnings=round_money(ghost_earnings),
            active_days=active_days,
            active_earnings=round_money(active_earnings),
            today_earnings=round_money(today_earnings),
            today_performance_score=today_line.performance_score if today_line else 0.0,
            today_attendance_multiplier=today_line.multiplier if today_line else 0.0,
            late_policy=_rounded_late(late),
            total_earned_before_deduction=round_money(before_deduction),
            total_earned=round_money(total_earned),
            projected_salary=round_money(projected),
            percentage_earned=round_money(total_earned / data.base_salary * 100) if data.base_salary else 0.0,
            attendance_breakdown={
                status: StatusTally(days=days, earnings=round_money(amount))
                for status, (days, amount) in tallies.items()
            },
            performance_summary=PerformanceSummary(
                total_calls=totals[0],
                total_talk_time_seconds=totals[1],
                total_leads=totals[2],
                avg_performance_score=avg_score,
            ),
            days=tuple(_rounded_line(line) for line in lines),
        )

    @staticmethod
    def _validate_days(past_days: Sequence[DayPair], today: Optional[DayPair], ref: date, launch: date) -> None:
        # Days before launch are paid as ghost days, so a telemetry row there would pay twice.
        first = month_start(ref)
        seen: set[date] = set()
        for telemetry, record in past_days:
            day = telemetry.work_date
            if not first <= day < ref:
                raise ValidationError(f"Past day {day.isoformat()} is outside {first.isoformat()}..{ref.isoformat()}")
            if day < launch:
                raise ValidationError(f"Past day {day.isoformat()} predates the launch on {launch.isoformat()}")
            if day in seen:
                raise ValidationError(f"Duplicate telemetry for {day.isoformat()}")
            if record is not None and record.work_date != day:
                raise ValidationError(f"Attendance for {record.work_date.isoformat()} paired with {day.isoformat()}")
            seen.add(day)

        if today is not None:
            telemetry, record = today
            if telemetry.work_date != ref:
                raise ValidationError(f"Today's telemetry is dated {telemetry.work_date.isoformat()}, expected {ref.isoformat()}")
            if ref < launch:
                raise ValidationError(f"Today ({ref.isoformat()}) predates the launch on {launch.isoformat()}")
            if record is not None and record.work_date != ref:
                raise ValidationError(f"Today's attendance is dated {record.work_date.isoformat()}, expected {ref.isoformat()}")


def _rounded_late(result: LatePolicyResult) -> LatePolicyResult:
    return LatePolicyResult(
        total_lates=result.total_lates,
        total_half_days=result.total_half_days,
        free_lates_used=result.free_lates_used,
        free_lates_remaining=result.free_lates_remaining,
        excess_lates=result.excess_lates,
        deduction_days=result.deduction_days,
        deduction_amount=round_money(result.deduction_amount),
    )


def _rounded_line(line: DayEarnings) -> DayEarnings:
    return DayEarnings(
        work_date=line.work_date,
        status=line.status,
        hr_approved=line.hr_approved,
        performance_score=line.performance_score,
        multiplier=line.multiplier,
        earnings=round_money(line.earnings),
    )
