from __future__ import annotations

import logging
import threading
from dataclasses import replace
from datetime import date
from typing import Optional, Sequence

from ..common.validators import require_non_empty
from ..core.enums import ReviewStatus, Role
from ..core.exceptions import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from ..performance.repository import TelemetryRepository
from .model import Lead
from .repository import LeadRepository

logger = logging.getLogger(__name__)


class LeadService:
    """Agent lead submissions and their HR review.

    An approved lead adds one to the agent's `leads_approved` counter for the
    shift it is credited to; pending and rejected leads never count.
    """

    def __init__(self, leads: LeadRepository, telemetry: TelemetryRepository):
        self._leads = leads
        self._telemetry = telemetry
        self._review_lock = threading.Lock()

    def submit_lead(
        self,
        *,
        current_role: Role,
        agent_id: int,
        customer_name: str,
        customer_email: Optional[str] = None,
    ) -> Lead:
        if current_role != Role.AGENT:
            raise AuthorizationError("Only agents can submit leads")

        name = require_non_empty(customer_name, "customer_name")
        email = (customer_email or "").strip() or None
        if email is not None and "@" not in email:
            raise ValidationError(f"customer_email {customer_email!r} is not an email address")

        lead = self._leads.add(Lead(lead_id=None, agent_id=int(agent_id), customer_name=name, customer_email=email))
        logger.info("[leads] submitted lead_id=%s agent_id=%s", lead.lead_id, lead.agent_id)
        return lead

    def review_lead(self, *, current_role: Role, lead_id: int, approve: bool, attributed_date: date) -> Lead:
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can review leads")

        with self._review_lock:
            lead = self._leads.get_by_id(lead_id)
            if not lead:
                raise NotFoundError(f"Lead {lead_id} does not exist")
            if lead.status != ReviewStatus.PENDING:
                raise InvalidStateError(f"Lead {lead_id} was already {lead.status.value}")

            if approve:
                reviewed = replace(
                    lead, status=ReviewStatus.APPROVED, credited_date=attributed_date, reviewed_by_role=Role.HR.value
                )
            else:
                reviewed = replace(lead, status=ReviewStatus.REJECTED, reviewed_by_role=Role.HR.value)
            self._leads.save(reviewed)

            if approve:
                count = self._telemetry.add_leads(lead.agent_id, attributed_date)
                logger.info(
                    "[leads] approved lead_id=%s agent_id=%s date=%s leads=%s",
                    lead_id, lead.agent_id, attributed_date, count,
                )
            else:
                logger.info("[leads] rejected lead_id=%s agent_id=%s", lead_id, lead.agent_id)
        return reviewed

    def pending_leads(self, *, current_role: Role) -> Sequence[Lead]:
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can view pending leads")
        return self._leads.list_pending()
