from __future__ import annotations

import logging
import threading
import weakref
from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Optional, Sequence, Union

from ..agents.repository import AgentRepository
from ..common.money import quantize_money
from ..common.validators import require_non_empty, to_decimal
from ..core.constants import DEFAULT_COMMISSION_RATE
from ..core.enums import ReviewStatus, Role, SaleStatus
from ..core.exceptions import AuthorizationError, InvalidStateError, NotFoundError, ValidationError
from ..performance.repository import TelemetryRepository
from .model import ZERO, PaymentResult, PaymentSubmission, Sale, SalesTotals
from .repository import PaymentRepository, SaleRepository

logger = logging.getLogger(__name__)

Amount = Union[Decimal, int, float, str]


def target_hit(sales_target: Amount, sales_amount: Amount) -> bool:
    """Golden ticket: a positive target met by the shift's running sales total."""
    target = to_decimal(sales_target, "sales_target")
    return target > 0 and to_decimal(sales_amount, "sales_amount") >= target


class _SaleLock:
    __slots__ = ("lock", "__weakref__")

    def __init__(self):
        self.lock = threading.Lock()


class SalesLedger:
    """Sales, payments and the one-time commission on completion.

    Every mutation of a sale runs under that sale's lock, so the partial to
    completed transition (and its commission) happens at most once. Locks
    live only while some caller holds them.
    """

    def __init__(
        self,
        sales: SaleRepository,
        payments: PaymentRepository,
        telemetry: TelemetryRepository,
        *,
        agents: Optional[AgentRepository] = None,
        commission_rate: Amount = DEFAULT_COMMISSION_RATE,
    ):
        self._sales = sales
        self._payments = payments
        self._telemetry = telemetry
        self._agents = agents
        self._commission_rate = to_decimal(commission_rate, "commission_rate")
        if not ZERO <= self._commission_rate <= 1:
            raise ValidationError("commission_rate must be between 0 and 1")
        self._locks: "weakref.WeakValueDictionary[int, _SaleLock]" = weakref.WeakValueDictionary()
        self._locks_guard = threading.Lock()

    def _lock_for(self, sale_id: int) -> _SaleLock:
        # Callers must keep the returned holder referenced while they hold its lock.
        with self._locks_guard:
            holder = self._locks.get(int(sale_id))
            if holder is None:
                holder = _SaleLock()
                self._locks[int(sale_id)] = holder
            return holder

    def _get_sale(self, sale_id: int) -> Sale:
        sale = self._sales.get_by_id(sale_id)
        if not sale:
            raise NotFoundError(f"Sale {sale_id} does not exist")
        return sale

    def commission_for(self, total_deal_value: Decimal) -> Decimal:
        return quantize_money(total_deal_value * self._commission_rate)

    def _credit(self, agent_id: int, work_date: date, amount: Decimal) -> None:
        before_hit = self.golden_ticket(agent_id, work_date)
        total = self._telemetry.add_sales_amount(agent_id, work_date, amount)
        if not before_hit and self.golden_ticket(agent_id, work_date):
            logger.info("[sales] golden ticket agent_id=%s date=%s total=%s", agent_id, work_date, total)

    def create_sale(
        self,
        *,
        current_role: Role,
        agent_id: int,
        customer_name: str,
        total_deal_value: Amount,
        attributed_date: date,
        initial_payment: Amount = 0,
        requires_approval: bool = False,
    ) -> Sale:
        """Log a deal for the shift on `attributed_date`.

        With `requires_approval` the sale waits for HR and nothing is credited
        until `review_sale` approves it.
        """
        if current_role != Role.AGENT:
            raise AuthorizationError("Only agents can log sales")

        name = require_non_empty(customer_name, "customer_name")
        value = quantize_money(to_decimal(total_deal_value, "total_deal_value"))
        paid = quantize_money(to_decimal(initial_payment, "initial_payment"))
        if value <= 0:
            raise ValidationError("total_deal_value must be a positive amount")
        if paid < 0:
            raise ValidationError("initial_payment cannot be negative")
        if paid > value:
            raise ValidationError("initial_payment cannot exceed total_deal_value")

        completed = paid >= value
        commission = self.commission_for(value) if completed else ZERO
        sale = self._sales.add(
            Sale(
                sale_id=None,
                agent_id=int(agent_id),
                customer_name=name,
                total_deal_value=value,
                attributed_date=attributed_date,
                amount_collected=paid,
                status=SaleStatus.COMPLETED if completed else SaleStatus.PARTIAL,
                commission_paid=completed,
                commission_amount=commission,
                approval_status=ReviewStatus.PENDING if requires_approval else ReviewStatus.APPROVED,
            )
        )
        logger.info(
            "[sales] created sale_id=%s agent_id=%s value=%s collected=%s status=%s approval=%s",
            sale.sale_id, sale.agent_id, value, paid, sale.status.value, sale.approval_status.value,
        )
        if not requires_approval:
            self._credit_approved(sale, attributed_date)
        return sale

    def _credit_approved(self, sale: Sale, work_date: date) -> None:
        # The full deal value counts toward the shift total right away.
        self._credit(sale.agent_id, work_date, sale.total_deal_value)
        if sale.commission_paid:
            self._credit(sale.agent_id, work_date, sale.commission_amount)
            logger.info("[sales] completed sale_id=%s commission=%s", sale.sale_id, sale.commission_amount)

    def review_sale(self, *, current_role: Role, sale_id: int, approve: bool, attributed_date: date) -> Sale:
        """HR decision on a sale logged with `requires_approval`.

        Approval credits the deal value (and any commission already earned)
        to the shift on `attributed_date`.
        """
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can review sales")

        holder = self._lock_for(sale_id)
        with holder.lock:
            sale = self._get_sale(sale_id)
            if sale.approval_status != ReviewStatus.PENDING:
                raise InvalidStateError(f"Sale {sale_id} was already {sale.approval_status.value}")

            reviewed = replace(sale, approval_status=ReviewStatus.APPROVED if approve else ReviewStatus.REJECTED)
            self._sales.save(reviewed)
            if approve:
                self._credit_approved(reviewed, attributed_date)
        logger.info("[sales] sale %s sale_id=%s date=%s", reviewed.approval_status.value, sale_id, attributed_date)
        return reviewed

    def add_payment(self, sale_id: int, amount: Amount, *, attributed_date: date) -> PaymentResult:
        """Apply a payment collected during the shift on `attributed_date`.

        A commission earned by this payment is credited to that shift, not to
        the one the sale was logged on.
        """
        requested = quantize_money(to_decimal(amount, "amount"))
        if requested <= 0:
            raise ValidationError("Payment amount must be positive")

        holder = self._lock_for(sale_id)
        with holder.lock:
            return self._apply_payment(sale_id, requested, attributed_date)

    def _apply_payment(self, sale_id: int, requested: Decimal, work_date: date) -> PaymentResult:
        sale = self._get_sale(sale_id)
        if sale.approval_status != ReviewStatus.APPROVED:
            raise InvalidStateError(f"Sale {sale_id} is {sale.approval_status.value}, not approved")
        if sale.status == SaleStatus.COMPLETED:
            raise InvalidStateError(f"Sale {sale_id} is already completed")

        applied = min(requested, sale.remaining_balance)
        collected = sale.amount_collected + applied
        completed_now = collected >= sale.total_deal_value
        commission = self.commission_for(sale.total_deal_value) if completed_now else ZERO

        updated = replace(
            sale,
            amount_collected=collected,
            status=SaleStatus.COMPLETED if completed_now else SaleStatus.PARTIAL,
            commission_paid=completed_now,
            commission_amount=commission,
        )
        self._sales.save(updated)
        logger.info(
            "[sales] payment sale_id=%s requested=%s applied=%s collected=%s",
            sale_id, requested, applied, collected,
        )
        if completed_now:
            self._credit(sale.agent_id, work_date, commission)
            logger.info("[sales] completed sale_id=%s commission=%s date=%s", sale_id, commission, work_date)

        return PaymentResult(
            sale=updated,
            requested_amount=requested,
            applied_amount=applied,
            completed_now=completed_now,
            commission_amount=commission,
        )

    def submit_payment(self, *, current_role: Role, agent_id: int, sale_id: int, amount: Amount) -> PaymentSubmission:
        if current_role != Role.AGENT:
            raise AuthorizationError("Only agents can submit payments")

        requested = quantize_money(to_decimal(amount, "amount"))
        if requested <= 0:
            raise ValidationError("Payment amount must be positive")

        sale = self._get_sale(sale_id)
        if sale.agent_id != int(agent_id):
            raise AuthorizationError(f"Sale {sale_id} belongs to another agent")
        if sale.approval_status != ReviewStatus.APPROVED:
            raise InvalidStateError(f"Sale {sale_id} is {sale.approval_status.value}, not approved")
        if sale.status == SaleStatus.COMPLETED:
            raise InvalidStateError(f"Sale {sale_id} is already completed")

        payment = self._payments.add(
            PaymentSubmission(payment_id=None, sale_id=sale_id, agent_id=sale.agent_id, amount=requested)
        )
        logger.info("[sales] payment submitted payment_id=%s sale_id=%s amount=%s", payment.payment_id, sale_id, requested)
        return payment

    def review_payment(
        self, *, current_role: Role, payment_id: int, approve: bool, attributed_date: date
    ) -> PaymentSubmission:
        """HR decision on a submitted payment; approval applies it as of the shift on `attributed_date`."""
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can review payments")

        payment = self._payments.get_by_id(payment_id)
        if not payment:
            raise NotFoundError(f"Payment {payment_id} does not exist")

        holder = self._lock_for(payment.sale_id)
        with holder.lock:
            payment = self._payments.get_by_id(payment_id)
            if payment.status != ReviewStatus.PENDING:
                raise InvalidStateError(f"Payment {payment_id} was already {payment.status.value}")

            if not approve:
                reviewed = replace(payment, status=ReviewStatus.REJECTED, reviewed_by_role=Role.HR.value)
                self._payments.save(reviewed)
                logger.info("[sales] payment rejected payment_id=%s", payment_id)
                return reviewed

            result = self._apply_payment(payment.sale_id, payment.amount, attributed_date)
            reviewed = replace(
                payment,
                status=ReviewStatus.APPROVED,
                reviewed_by_role=Role.HR.value,
                applied_amount=result.applied_amount,
            )
            self._payments.save(reviewed)
        logger.info("[sales] payment approved payment_id=%s applied=%s", payment_id, result.applied_amount)
        return reviewed

    def pending_sales(self, *, current_role: Role) -> Sequence[Sale]:
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can view pending sales")
        return self._sales.list_pending()

    def pending_payments(self, *, current_role: Role) -> Sequence[PaymentSubmission]:
        if current_role != Role.HR:
            raise AuthorizationError("Only HR can view pending payments")
        return self._payments.list_pending()

    def golden_ticket(self, agent_id: int, work_date: date) -> bool:
        if self._agents is None:
            return False
        agent = self._agents.get_by_id(agent_id)
        if not agent:
            return False
        stats = self._telemetry.get_for_agent_and_date(agent_id, work_date)
        return target_hit(agent.sales_target, stats.sales_amount if stats else ZERO)

    def totals_for_agent(self, agent_id: int) -> SalesTotals:
        sales = [s for s in self._sales.list_for_agent(agent_id) if s.counts_toward_totals]
        return SalesTotals(
            total_sales=len(sales),
            total_deal_value=sum((s.total_deal_value for s in sales), ZERO),
            total_collected=sum((s.amount_collected for s in sales), ZERO),
            completed_sales=sum(1 for s in sales if s.status == SaleStatus.COMPLETED),
            partial_sales=sum(1 for s in sales if s.status == SaleStatus.PARTIAL),
            total_commission=sum((s.commission_amount for s in sales), ZERO),
        )
