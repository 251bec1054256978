from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import AllocationType
from .model import ResourceAllocation


class AllocationRepository(Protocol):
    def create(self, allocation: ResourceAllocation) -> int:
        raise NotImplementedError

    def list_filtered(
        self,
        *,
        allocation_type: Optional[AllocationType] = None,
        resource_id: Optional[int] = None,
        site_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[ResourceAllocation]:
        raise NotImplementedError
