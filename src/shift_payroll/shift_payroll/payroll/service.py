from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..agents.model import AgentProfile
from ..agents.repository import AgentRepository
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_date_ymd, format_duration_human, now_local, to_local
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..performance.model import DailyTelemetry, PerformanceTargets, targets_for
from ..performance.repository import TelemetryRepository
from ..sales.ledger import target_hit
from ..shifts.model import ShiftInstance
from ..shifts.resolver import ShiftWindowResolver
from ..workdays.working_days import month_end, month_start
from .aggregator import SalaryAggregator, pair_by_date
from .model import DayPair, SalaryBreakdown, SalaryInput

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class AgentSnapshot:
    """What an agent's dashboard shows for "now"."""

    agent_id: int
    shift: ShiftInstance
    is_paused: bool
    today: DailyTelemetry
    breakdown: SalaryBreakdown
    sales_amount: Decimal
    sales_target: Decimal
    target_hit: bool


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]


def _agent_targets(agent: AgentProfile, table: Optional[dict]) -> PerformanceTargets:
    return targets_for(agent.employment_type) if table is None else targets_for(agent.employment_type, table)


def _load_month(
    telemetry: TelemetryRepository,
    attendance: AttendanceRepository,
    agent_id: int,
    reference_date: date,
    launch_date: date,
) -> tuple[list[DayPair], Optional[DayPair]]:
    """Past (telemetry, attendance) pairs of the month plus the reference day's pair, if any.

    Rows dated before the launch are left out; those days are paid as ghost days.
    """
    first = max(month_start(reference_date), launch_date)
    if first > reference_date:
        return [], None
    stats = telemetry.list_for_agent_between(agent_id, first, reference_date)
    records = attendance.list_for_agent_between(agent_id, first, reference_date)
    pairs = pair_by_date(stats, records)

    past = [p for p in pairs if p[0].work_date < reference_date]
    today = next((p for p in pairs if p[0].work_date == reference_date), None)
    return past, today


class SalaryService:
    def __init__(
        self,
        agents: AgentRepository,
        telemetry: TelemetryRepository,
        attendance: AttendanceRepository,
        resolver: ShiftWindowResolver,
        aggregator: SalaryAggregator,
        system_launch_date: date,
        *,
        targets: Optional[dict] = None,
    ):
        self._agents = agents
        self._telemetry = telemetry
        self._attendance = attendance
        self._resolver = resolver
        self._aggregator = aggregator
        self._launch_date = system_launch_date
        self._targets = targets

    def build_snapshot(self, agent_id: int, *, now: Optional[datetime] = None) -> AgentSnapshot:
        agent = self._agents.get_by_id(agent_id)
        if not agent:
            raise NotFoundError(f"Agent {agent_id} does not exist")

        local_now = to_local(now or now_local(self._resolver.tz), self._resolver.tz)
        window = self._resolver.resolve(agent.shift, local_now)
        ref = window.attributed_date

        past, today = _load_month(self._telemetry, self._attendance, agent_id, ref, self._launch_date)
        breakdown = self._aggregator.calculate(
            SalaryInput(
                base_salary=agent.base_salary,
                system_launch_date=self._launch_date,
                reference_date=ref,
                targets=_agent_targets(agent, self._targets),
                past_days=past,
                today=today,
            )
        )

        today_stats = today[0] if today else DailyTelemetry(work_date=ref)
        hit = target_hit(agent.sales_target, today_stats.sales_amount)
        logger.debug(
            "[payroll] snapshot agent_id=%s shift_date=%s paused=%s total_earned=%s projected=%s",
            agent_id, ref, window.is_paused, breakdown.total_earned, breakdown.projected_salary,
        )
        return AgentSnapshot(
            agent_id=agent_id,
            shift=window,
            is_paused=window.is_paused,
            today=today_stats,
            breakdown=breakdown,
            sales_amount=today_stats.sales_amount,
            sales_target=agent.sales_target,
            target_hit=hit,
        )


class PayrollReportService:
    """HR month view: one row per agent-day and one summary line per agent."""

    def __init__(
        self,
        agents: AgentRepository,
        telemetry: TelemetryRepository,
        attendance: AttendanceRepository,
        aggregator: SalaryAggregator,
        system_launch_date: date,
        *,
        targets: Optional[dict] = None,
    ):
        self._agents = agents
        self._telemetry = telemetry
        self._attendance = attendance
        self._aggregator = aggregator
        self._launch_date = system_launch_date
        self._targets = targets

    def build_monthly_report(self, *, year: int, month: int, as_of: Optional[date] = None) -> ReportData:
        first = date(int(year), int(month), 1)
        last = month_end(first)
        ref = min(as_of or last, last)
        if ref < first:
            raise ValidationError(f"as_of {ref.isoformat()} is before {format_date_ymd(first)}")

        out_rows: list[dict] = []
        summary: list[dict] = []

        for agent in self._agents.list_active():
            past, today = _load_month(self._telemetry, self._attendance, agent.agent_id, ref, self._launch_date)
            b = self._aggregator.calculate(
                SalaryInput(
                    base_salary=agent.base_salary,
                    system_launch_date=self._launch_date,
                    reference_date=ref,
                    targets=_agent_targets(agent, self._targets),
                    past_days=past,
                    today=today,
                )
            )

            for line in b.days:
                out_rows.append(
                    {
                        "agent_id": agent.agent_id,
                        "full_name": agent.full_name,
                        "work_date": format_date_ymd(line.work_date),
                        "status": line.status.value,
                        "hr_approved": line.hr_approved,
                        "performance_score": round(line.performance_score, 4),
                        "earnings": line.earnings,
                    }
                )

            tallies = b.attendance_breakdown
            perf = b.performance_summary
            summary.append(
                {
                    "agent_id": agent.agent_id,
                    "full_name": agent.full_name,
                    "employment_type": agent.employment_type.value,
                    "on_time_days": tallies[AttendanceStatus.ON_TIME].days,
                    "late_days": tallies[AttendanceStatus.LATE].days,
                    "half_days": tallies[AttendanceStatus.HALF_DAY].days,
                    "absent_days": tallies[AttendanceStatus.ABSENT].days,
                    "total_calls": perf.total_calls,
                    "total_talk_time": format_duration_human(perf.total_talk_time_seconds),
                    "total_leads": perf.total_leads,
                    "avg_performance_score": round(perf.avg_performance_score, 4),
                    "ghost_earnings": b.ghost_earnings,
                    "deduction": b.late_policy.deduction_amount,
                    "final_payout": b.total_earned,
                    "projected_salary": b.projected_salary,
                }
            )

        summary.sort(key=lambda x: x["final_payout"], reverse=True)
        logger.info("[payroll] monthly report %s-%02d as_of=%s agents=%s", first.year, first.month, ref, len(summary))
        return ReportData(rows=out_rows, summary=summary)
