from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..common.money import quantize_money
from ..core.enums import ReviewStatus, SaleStatus

ZERO = Decimal("0")


@dataclass(frozen=True)
class Sale:
    """Domain entity: one deal and its collection progress.

    Note: Plain data object (no storage access code).
    """

    sale_id: Optional[int]
    agent_id: int
    customer_name: str
    total_deal_value: Decimal
    attributed_date: date
    amount_collected: Decimal = field(default=ZERO)
    status: SaleStatus = SaleStatus.PARTIAL
    commission_paid: bool = False
    commission_amount: Decimal = field(default=ZERO)
    approval_status: ReviewStatus = ReviewStatus.APPROVED
    created_at: Optional[datetime] = None

    @property
    def counts_toward_totals(self) -> bool:
        return self.approval_status != ReviewStatus.REJECTED

    @property
    def remaining_balance(self) -> Decimal:
        return max(self.total_deal_value - self.amount_collected, ZERO)

    @property
    def progress_percent(self) -> Decimal:
        if self.total_deal_value <= 0:
            return ZERO
        return quantize_money(self.amount_collected / self.total_deal_value * 100)


@dataclass(frozen=True)
class PaymentSubmission:
    """A payment an agent reports against a sale, waiting for HR."""

    payment_id: Optional[int]
    sale_id: int
    agent_id: int
    amount: Decimal
    status: ReviewStatus = ReviewStatus.PENDING
    reviewed_by_role: Optional[str] = None
    applied_amount: Decimal = field(default=ZERO)


@dataclass(frozen=True)
class PaymentResult:
    sale: Sale
    requested_amount: Decimal
    applied_amount: Decimal
    completed_now: bool
    commission_amount: Decimal = field(default=ZERO)


@dataclass(frozen=True)
class SalesTotals:
    total_sales: int = 0
    total_deal_value: Decimal = field(default=ZERO)
    total_collected: Decimal = field(default=ZERO)
    completed_sales: int = 0
    partial_sales: int = 0
    total_commission: Decimal = field(default=ZERO)
