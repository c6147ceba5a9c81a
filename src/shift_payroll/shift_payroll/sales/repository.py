from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import PaymentSubmission, Sale


class SaleRepository(Protocol):
    def add(self, sale: Sale) -> Sale:
        """Persist a new sale and return it with its assigned id."""

        raise NotImplementedError

    def get_by_id(self, sale_id: int) -> Optional[Sale]:
        raise NotImplementedError

    def save(self, sale: Sale) -> None:
        raise NotImplementedError

    def list_for_agent(self, agent_id: int) -> Sequence[Sale]:
        raise NotImplementedError

    def list_pending(self) -> Sequence[Sale]:
        """Sales still waiting for HR approval, oldest first."""

        raise NotImplementedError


class PaymentRepository(Protocol):
    def add(self, payment: PaymentSubmission) -> PaymentSubmission:
        raise NotImplementedError

    def get_by_id(self, payment_id: int) -> Optional[PaymentSubmission]:
        raise NotImplementedError

    def save(self, payment: PaymentSubmission) -> None:
        raise NotImplementedError

    def list_pending(self) -> Sequence[PaymentSubmission]:
        """Submitted payments still waiting for HR review, oldest first."""

        raise NotImplementedError
