from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Site, Worker


class WorkerRepository(Protocol):
    """작업자/현장 조회 인터페이스.

    Note (DIP): services depend on this protocol, not on a concrete DB.
    """

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        raise NotImplementedError

    def list_active(self) -> Sequence[Worker]:
        raise NotImplementedError

    def list_sites(self) -> Sequence[Site]:
        raise NotImplementedError
