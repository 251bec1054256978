from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from .model import WorkRecord


class WorkRecordRepository(Protocol):
    def create(self, *, worker_id: int, site_id: int, work_date: date, labor_hours: Decimal) -> int:
        raise NotImplementedError

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
    ) -> Sequence[WorkRecord]:
        """Records with ``start_date <= work_date <= end_date``, oldest first."""

        raise NotImplementedError
