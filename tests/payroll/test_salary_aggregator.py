from __future__ import annotations

from datetime import date

import pytest

from shift_payroll.attendance.model import AttendanceRecord
from shift_payroll.core.enums import AttendanceStatus, EmploymentType
from shift_payroll.core.exceptions import ValidationError
from shift_payroll.payroll.aggregator import SalaryAggregator, pair_by_date
from shift_payroll.payroll.model import SalaryInput
from shift_payroll.performance.model import DailyTelemetry, targets_for

TARGETS = targets_for(EmploymentType.FULL_TIME)
LAUNCHED = date(2024, 1, 1)
# January 2025 has 23 working days, so 23000 pays 1000 a day
BASE = 23000.0


def _full(day):
    return DailyTelemetry(work_date=day, calls=150, talk_time_seconds=3600, leads_approved=3)


def _att(day, status, approved=False):
    return AttendanceRecord(work_date=day, status=status, hr_approved=approved, agent_id=1)


def _month_input(**overrides):
    d13, d14, d15 = date(2025, 1, 13), date(2025, 1, 14), date(2025, 1, 15)
    values = dict(
        base_salary=BASE,
        system_launch_date=LAUNCHED,
        reference_date=d15,
        targets=TARGETS,
        past_days=[
            (_full(d13), _att(d13, AttendanceStatus.ON_TIME)),
            (DailyTelemetry(work_date=d14, calls=75, talk_time_seconds=1800), _att(d14, AttendanceStatus.LATE)),
        ],
        today=(_full(d15), _att(d15, AttendanceStatus.HALF_DAY)),
    )
    values.update(overrides)
    return SalaryInput(**values)


def test_month_to_date_breakdown():
    b = SalaryAggregator().calculate(_month_input())

    assert b.working_days_in_month == 23
    assert b.daily_potential == 1000.0
    assert b.ghost_days == 0
    assert b.active_days == 2
    assert b.active_earnings == 1350.0
    assert b.today_earnings == 250.0
    assert b.today_attendance_multiplier == 0.5
    assert b.total_earned_before_deduction == 1600.0

    # one late is free; the half day costs half a day
    assert b.late_policy.total_lates == 1
    assert b.late_policy.deduction_days == pytest.approx(0.5)
    assert b.late_policy.deduction_amount == 500.0
    assert b.total_earned == 1100.0

    assert b.working_days_elapsed == 11
    assert b.working_days_remaining == 12
    assert b.performance_summary.avg_performance_score == pytest.approx(2.35 / 3)
    assert b.projected_salary == pytest.approx(10500.0)
    assert b.percentage_earned == 4.78


def test_attendance_tallies_and_day_lines():
    b = SalaryAggregator().calculate(_month_input())

    tallies = b.attendance_breakdown
    assert tallies[AttendanceStatus.ON_TIME].days == 1
    assert tallies[AttendanceStatus.ON_TIME].earnings == 1000.0
    assert tallies[AttendanceStatus.LATE].earnings == 350.0
    assert tallies[AttendanceStatus.HALF_DAY].days == 1
    assert tallies[AttendanceStatus.ABSENT].days == 0
    assert [d.work_date.day for d in b.days] == [13, 14, 15]
    assert b.performance_summary.total_calls == 375


def test_ghost_days_before_launch_are_paid_in_full():
    b = SalaryAggregator().calculate(
        SalaryInput(
            base_salary=BASE,
            system_launch_date=date(2025, 1, 10),
            reference_date=date(2025, 1, 20),
            targets=TARGETS,
        )
    )

    assert b.ghost_days == 7
    assert b.ghost_earnings == 7000.0
    assert b.total_earned == 7000.0
    # no scored days yet: projection assumes full performance
    assert b.performance_summary.avg_performance_score == 1.0
    assert b.working_days_remaining == 9
    assert b.projected_salary == 16000.0


def test_telemetry_without_attendance_counts_as_absent():
    day = date(2025, 1, 14)
    b = SalaryAggregator().calculate(_month_input(past_days=[(_full(day), None)], today=None))

    assert b.active_earnings == 0.0
    assert b.attendance_breakdown[AttendanceStatus.ABSENT].days == 1
    assert b.performance_summary.avg_performance_score == pytest.approx(1.0)


def test_negative_total_is_reported_unless_clamped():
    days = [
        (DailyTelemetry(work_date=date(2025, 1, d)), _att(date(2025, 1, d), AttendanceStatus.HALF_DAY))
        for d in (6, 7, 8, 9)
    ]
    data = _month_input(past_days=days, today=None)

    assert SalaryAggregator().calculate(data).total_earned == -2000.0
    assert SalaryAggregator(clamp_negative_total=True).calculate(data).total_earned == 0.0


def test_zero_base_salary_has_zero_percentage():
    b = SalaryAggregator().calculate(_month_input(base_salary=0.0))

    assert b.total_earned == 0.0
    assert b.percentage_earned == 0.0


@pytest.mark.parametrize(
    "past_days",
    [
        [(_full(date(2025, 1, 15)), None)],
        [(_full(date(2024, 12, 31)), None)],
        [(_full(date(2025, 1, 13)), None), (_full(date(2025, 1, 13)), None)],
        [(_full(date(2025, 1, 13)), _att(date(2025, 1, 14), AttendanceStatus.ON_TIME))],
    ],
)
def test_bad_past_days_are_rejected(past_days):
    with pytest.raises(ValidationError):
        SalaryAggregator().calculate(_month_input(past_days=past_days))


def test_rows_before_launch_are_rejected_instead_of_paid_twice():
    launch = date(2025, 1, 10)
    early = date(2025, 1, 6)

    with pytest.raises(ValidationError):
        SalaryAggregator().calculate(
            _month_input(
                system_launch_date=launch,
                past_days=[(_full(early), _att(early, AttendanceStatus.ON_TIME))],
                today=None,
            )
        )

    # today is the reference date; a launch after it leaves every day a ghost day
    with pytest.raises(ValidationError):
        SalaryAggregator().calculate(_month_input(system_launch_date=date(2025, 1, 16), past_days=[]))


def test_launch_day_itself_is_an_active_day():
    launch = date(2025, 1, 13)
    b = SalaryAggregator().calculate(_month_input(system_launch_date=launch))

    assert b.ghost_days == 8
    assert b.active_days == 2
    assert b.active_earnings == 1350.0


def test_today_must_be_the_reference_date():
    with pytest.raises(ValidationError):
        SalaryAggregator().calculate(_month_input(today=(_full(date(2025, 1, 16)), None)))


def test_negative_base_salary_rejected():
    with pytest.raises(ValidationError):
        SalaryAggregator().calculate(_month_input(base_salary=-1.0))


def test_same_input_same_output():
    aggregator = SalaryAggregator()
    data = _month_input()

    first = aggregator.calculate(data)
    second = aggregator.calculate(data)

    assert first == second
    assert first.to_dict() == second.to_dict()


def test_to_dict_is_plain_data():
    out = SalaryAggregator().calculate(_month_input()).to_dict()

    assert out["reference_date"] == "2025-01-15"
    assert out["attendance_breakdown"]["half_day"] == {"days": 1, "earnings": 250.0}
    assert out["late_policy"]["deduction_amount"] == 500.0
    assert out["days"][0]["status"] == "on_time"


def test_pair_by_date_leaves_gaps_as_none():
    d13, d14 = date(2025, 1, 13), date(2025, 1, 14)
    pairs = pair_by_date([_full(d14), _full(d13)], [_att(d14, AttendanceStatus.LATE)])

    assert [p[0].work_date for p in pairs] == [d13, d14]
    assert pairs[0][1] is None
    assert pairs[1][1].status == AttendanceStatus.LATE
