"""Example: drive the services directly with in-memory storage.

Seeds one night-shift agent, checks in, logs a sale, and prints the salary snapshot.
"""

from datetime import datetime, timedelta
from decimal import Decimal

from shift_payroll.agents.model import AgentProfile
from shift_payroll.container import build_container
from shift_payroll.core.enums import Role
from shift_payroll.performance.call_logs import CallLog, build_shift_telemetry
from shift_payroll.settings import load_settings
from shift_payroll.shifts.model import ShiftSpec
from shift_payroll.storage.memory import InMemoryAgentRepository


def main():
    settings = load_settings()
    agents = InMemoryAgentRepository(
        [
            AgentProfile(
                agent_id=1,
                full_name="Demo Agent",
                base_salary=60000.0,
                shift=ShiftSpec.parse("21:00", "05:00"),
                sales_target=Decimal("5000"),
                extension_number="101",
            )
        ]
    )
    container = build_container(settings, agents=agents)

    now = datetime.now(settings.timezone)
    window = container.resolver.resolve(agents.get_by_id(1).shift, now)
    container.attendance_service.check_in(1, now=window.start + timedelta(minutes=12))

    logs = [CallLog("101", window.start + timedelta(minutes=15 * i), "00:02:30") for i in range(20)]
    container.telemetry_repo.upsert(
        1, build_shift_telemetry(window, logs, leads_approved=1, min_talk_seconds=settings.min_talk_seconds)
    )
    container.sales_ledger.create_sale(
        current_role=Role.AGENT,
        agent_id=1,
        customer_name="Walk-in customer",
        total_deal_value="5000",
        initial_payment="5000",
        attributed_date=window.attributed_date,
    )
    lead = container.lead_service.submit_lead(current_role=Role.AGENT, agent_id=1, customer_name="Callback prospect")
    container.lead_service.review_lead(
        current_role=Role.HR, lead_id=lead.lead_id, approve=True, attributed_date=window.attributed_date
    )

    snapshot = container.salary_service.build_snapshot(1, now=now)
    print(snapshot.breakdown.to_dict())
    print("golden ticket:", snapshot.target_hit)
    print(container.payroll_report_service.build_monthly_report(year=now.year, month=now.month, as_of=now.date()).summary)


if __name__ == "__main__":
    main()
