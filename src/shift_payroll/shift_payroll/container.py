from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .agents.repository import AgentRepository
from .attendance.factory import CheckInStrategyFactory
from .attendance.policy import LatePolicy
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .leads.repository import LeadRepository
from .leads.service import LeadService
from .payroll.aggregator import SalaryAggregator
from .payroll.calculator.standard_calculator import StandardPayrollCalculator
from .payroll.service import PayrollReportService, SalaryService
from .performance.repository import TelemetryRepository
from .performance.scorer import PerformanceScorer
from .sales.ledger import SalesLedger
from .sales.repository import PaymentRepository, SaleRepository
from .settings import PayrollSettings
from .shifts.resolver import ShiftWindowResolver
from .storage.memory import (
    InMemoryAgentRepository,
    InMemoryAttendanceRepository,
    InMemoryLeadRepository,
    InMemoryPaymentRepository,
    InMemorySaleRepository,
    InMemoryTelemetryRepository,
)


@dataclass(frozen=True)
class Container:
    settings: PayrollSettings

    agents_repo: AgentRepository
    telemetry_repo: TelemetryRepository
    attendance_repo: AttendanceRepository
    sales_repo: SaleRepository
    payments_repo: PaymentRepository
    leads_repo: LeadRepository

    resolver: ShiftWindowResolver
    aggregator: SalaryAggregator
    attendance_service: AttendanceService
    sales_ledger: SalesLedger
    lead_service: LeadService
    salary_service: SalaryService
    payroll_report_service: PayrollReportService


def build_container(
    settings: PayrollSettings,
    *,
    agents: Optional[AgentRepository] = None,
    telemetry: Optional[TelemetryRepository] = None,
    attendance: Optional[AttendanceRepository] = None,
    sales: Optional[SaleRepository] = None,
    payments: Optional[PaymentRepository] = None,
    leads: Optional[LeadRepository] = None,
) -> Container:
    agents_repo = agents if agents is not None else InMemoryAgentRepository()
    telemetry_repo = telemetry if telemetry is not None else InMemoryTelemetryRepository()
    attendance_repo = attendance if attendance is not None else InMemoryAttendanceRepository()
    sales_repo = sales if sales is not None else InMemorySaleRepository()
    payments_repo = payments if payments is not None else InMemoryPaymentRepository()
    leads_repo = leads if leads is not None else InMemoryLeadRepository()

    resolver = ShiftWindowResolver(settings.timezone)
    aggregator = SalaryAggregator(
        PerformanceScorer(),
        StandardPayrollCalculator(),
        LatePolicy(free_lates=settings.free_lates),
        clamp_negative_total=settings.clamp_negative_total,
    )
    attendance_service = AttendanceService(
        attendance_repo,
        agents_repo,
        resolver,
        strategy_factory=CheckInStrategyFactory(
            grace_minutes=settings.grace_minutes,
            late_threshold_minutes=settings.late_threshold_minutes,
        ),
    )
    sales_ledger = SalesLedger(
        sales_repo,
        payments_repo,
        telemetry_repo,
        agents=agents_repo,
        commission_rate=settings.commission_rate,
    )
    lead_service = LeadService(leads_repo, telemetry_repo)
    salary_service = SalaryService(
        agents_repo, telemetry_repo, attendance_repo, resolver, aggregator, settings.system_launch_date
    )
    payroll_report_service = PayrollReportService(
        agents_repo, telemetry_repo, attendance_repo, aggregator, settings.system_launch_date
    )

    return Container(
        settings=settings,
        agents_repo=agents_repo,
        telemetry_repo=telemetry_repo,
        attendance_repo=attendance_repo,
        sales_repo=sales_repo,
        payments_repo=payments_repo,
        leads_repo=leads_repo,
        resolver=resolver,
        aggregator=aggregator,
        attendance_service=attendance_service,
        sales_ledger=sales_ledger,
        lead_service=lead_service,
        salary_service=salary_service,
        payroll_report_service=payroll_report_service,
    )
