from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AgentProfile


class AgentRepository(Protocol):
    def get_by_id(self, agent_id: int) -> Optional[AgentProfile]:
        raise NotImplementedError

    def list_active(self) -> Sequence[AgentProfile]:
        raise NotImplementedError
