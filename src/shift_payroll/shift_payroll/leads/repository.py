from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Lead


class LeadRepository(Protocol):
    def add(self, lead: Lead) -> Lead:
        """Persist a new lead and return it with its assigned id."""

        raise NotImplementedError

    def get_by_id(self, lead_id: int) -> Optional[Lead]:
        raise NotImplementedError

    def save(self, lead: Lead) -> None:
        raise NotImplementedError

    def list_pending(self) -> Sequence[Lead]:
        raise NotImplementedError
