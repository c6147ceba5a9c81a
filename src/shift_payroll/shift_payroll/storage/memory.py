"""In-memory repositories.

Default storage for the container and for tests. Each repository guards its
dict with a lock; none of them knows anything about pay rules.
"""

from __future__ import annotations

import itertools
import threading
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Iterable, Optional, Sequence

from ..agents.model import AgentProfile
from ..attendance.model import AttendanceRecord
from ..common.validators import require_non_negative_int, to_decimal
from ..core.enums import ReviewStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..leads.model import Lead
from ..performance.model import DailyTelemetry
from ..sales.model import PaymentSubmission, Sale


class InMemoryAgentRepository:
    def __init__(self, agents: Iterable[AgentProfile] = ()):
        self._agents = {a.agent_id: a for a in agents}
        self._lock = threading.Lock()

    def add(self, agent: AgentProfile) -> None:
        with self._lock:
            self._agents[agent.agent_id] = agent

    def get_by_id(self, agent_id: int) -> Optional[AgentProfile]:
        return self._agents.get(int(agent_id))

    def list_active(self) -> Sequence[AgentProfile]:
        return sorted((a for a in self._agents.values() if a.is_active), key=lambda a: a.agent_id)


class InMemoryTelemetryRepository:
    def __init__(self):
        self._rows: dict[tuple[int, date], DailyTelemetry] = {}
        self._lock = threading.Lock()

    def upsert(self, agent_id: int, telemetry: DailyTelemetry) -> None:
        with self._lock:
            self._rows[(int(agent_id), telemetry.work_date)] = telemetry

    def get_for_agent_and_date(self, agent_id: int, work_date: date) -> Optional[DailyTelemetry]:
        return self._rows.get((int(agent_id), work_date))

    def list_for_agent_between(self, agent_id: int, start: date, end: date) -> Sequence[DailyTelemetry]:
        rows = [t for (a, d), t in self._rows.items() if a == int(agent_id) and start <= d <= end]
        return sorted(rows, key=lambda t: t.work_date)

    def add_sales_amount(self, agent_id: int, work_date: date, amount: Decimal) -> Decimal:
        amount = to_decimal(amount, "amount")
        if amount < 0:
            raise ValidationError("Sales credit cannot be negative")
        with self._lock:
            key = (int(agent_id), work_date)
            current = self._rows.get(key) or DailyTelemetry(work_date=work_date)
            updated = replace(current, sales_amount=current.sales_amount + amount)
            self._rows[key] = updated
            return updated.sales_amount

    def add_leads(self, agent_id: int, work_date: date, count: int = 1) -> int:
        require_non_negative_int(count, "count")
        with self._lock:
            key = (int(agent_id), work_date)
            current = self._rows.get(key) or DailyTelemetry(work_date=work_date)
            updated = replace(current, leads_approved=current.leads_approved + count)
            self._rows[key] = updated
            return updated.leads_approved


class InMemoryAttendanceRepository:
    def __init__(self):
        self._rows: dict[tuple[int, date], AttendanceRecord] = {}
        self._lock = threading.Lock()

    def get_for_agent_and_date(self, agent_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._rows.get((int(agent_id), work_date))

    def list_for_agent_between(self, agent_id: int, start: date, end: date) -> Sequence[AttendanceRecord]:
        rows = [r for (a, d), r in self._rows.items() if a == int(agent_id) and start <= d <= end]
        return sorted(rows, key=lambda r: r.work_date)

    def save(self, record: AttendanceRecord) -> None:
        if record.agent_id is None:
            raise ValidationError("Attendance record needs an agent_id")
        with self._lock:
            self._rows[(int(record.agent_id), record.work_date)] = record


class InMemorySaleRepository:
    def __init__(self):
        self._rows: dict[int, Sale] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, sale: Sale) -> Sale:
        with self._lock:
            stored = replace(sale, sale_id=next(self._ids))
            self._rows[stored.sale_id] = stored
            return stored

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        return self._rows.get(int(sale_id))

    def save(self, sale: Sale) -> None:
        with self._lock:
            if sale.sale_id not in self._rows:
                raise NotFoundError(f"Sale {sale.sale_id} does not exist")
            self._rows[sale.sale_id] = sale

    def list_for_agent(self, agent_id: int) -> Sequence[Sale]:
        return [s for s in self._rows.values() if s.agent_id == int(agent_id)]

    def list_pending(self) -> Sequence[Sale]:
        return sorted(
            (s for s in self._rows.values() if s.approval_status == ReviewStatus.PENDING), key=lambda s: s.sale_id
        )


class InMemoryPaymentRepository:
    def __init__(self):
        self._rows: dict[int, PaymentSubmission] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, payment: PaymentSubmission) -> PaymentSubmission:
        with self._lock:
            stored = replace(payment, payment_id=next(self._ids))
            self._rows[stored.payment_id] = stored
            return stored

    def get_by_id(self, payment_id: int) -> Optional[PaymentSubmission]:
        return self._rows.get(int(payment_id))

    def save(self, payment: PaymentSubmission) -> None:
        with self._lock:
            if payment.payment_id not in self._rows:
                raise NotFoundError(f"Payment {payment.payment_id} does not exist")
            self._rows[payment.payment_id] = payment

    def list_pending(self) -> Sequence[PaymentSubmission]:
        return sorted(
            (p for p in self._rows.values() if p.status == ReviewStatus.PENDING), key=lambda p: p.payment_id
        )


class InMemoryLeadRepository:
    def __init__(self):
        self._rows: dict[int, Lead] = {}
        self._ids = itertools.count(1)
        self._lock = threading.Lock()

    def add(self, lead: Lead) -> Lead:
        with self._lock:
            stored = replace(lead, lead_id=next(self._ids))
            self._rows[stored.lead_id] = stored
            return stored

    def get_by_id(self, lead_id: int) -> Optional[Lead]:
        return self._rows.get(int(lead_id))

    def save(self, lead: Lead) -> None:
        with self._lock:
            if lead.lead_id not in self._rows:
                raise NotFoundError(f"Lead {lead.lead_id} does not exist")
            self._rows[lead.lead_id] = lead

    def list_pending(self) -> Sequence[Lead]:
        return sorted(
            (lead for lead in self._rows.values() if lead.status == ReviewStatus.PENDING), key=lambda lead: lead.lead_id
        )
