from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Optional

from ..agents.repository import AgentRepository
from ..common.datetime_utils import now_local, to_local
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, InvalidStateError, NotFoundError
from ..shifts.resolver import ShiftWindowResolver
from .factory import CheckInStrategyFactory, minutes_late
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        agents: AgentRepository,
        resolver: ShiftWindowResolver,
        *,
        strategy_factory: Optional[CheckInStrategyFactory] = None,
    ):
        self._attendance = attendance
        self._agents = agents
        self._resolver = resolver
        self._factory = strategy_factory or CheckInStrategyFactory()

    def check_in(self, agent_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        agent = self._agents.get_by_id(agent_id)
        if not agent:
            raise NotFoundError(f"Agent {agent_id} does not exist")

        local_now = to_local(now or now_local(self._resolver.tz), self._resolver.tz)
        work_date = self._resolver.attendance_date(agent.shift, local_now)

        if self._attendance.get_for_agent_and_date(agent_id, work_date):
            raise InvalidStateError(f"Agent {agent_id} already checked in for {work_date.isoformat()}")

        late_by = minutes_late(agent.shift, local_now)
        strategy = self._factory.for_checkin(minutes_late=late_by)
        decision = strategy.decide_checkin(minutes_late=late_by)

        record = AttendanceRecord(
            work_date=work_date,
            status=decision.status,
            hr_approved=False,
            agent_id=agent_id,
            check_in_time=local_now,
            minutes_late=decision.minutes_late,
            note=decision.note,
        )
        self._attendance.save(record)
        logger.info(
            "[attendance] check-in agent_id=%s date=%s status=%s minutes_late=%s",
            agent_id, work_date, decision.status.value, decision.minutes_late,
        )
        return record

    def review(
        self,
        *,
        current_role: Role,
        agent_id: int,
        work_date: date,
        status: Optional[AttendanceStatus] = None,
    ) -> AttendanceRecord:
        """HR review: optionally revise the status; the record becomes approved for good."""
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can review attendance")

        record = self._attendance.get_for_agent_and_date(agent_id, work_date)
        if not record:
            raise NotFoundError(f"No attendance for agent {agent_id} on {work_date.isoformat()}")

        updated = replace(
            record,
            status=AttendanceStatus(status) if status is not None else record.status,
            hr_approved=True,
        )
        self._attendance.save(updated)
        logger.info(
            "[attendance] reviewed agent_id=%s date=%s status=%s->%s",
            agent_id, work_date, record.status.value, updated.status.value,
        )
        return updated
