from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Broadcast


class BroadcastRepository(Protocol):
    def list_all(self) -> Sequence[Broadcast]:
        """All broadcasts, newest first."""

        raise NotImplementedError

    def get_by_id(self, broadcast_id: str) -> Optional[Broadcast]:
        raise NotImplementedError

    def save(self, broadcast: Broadcast) -> str:
        raise NotImplementedError

    def delete(self, broadcast_id: str) -> bool:
        raise NotImplementedError
