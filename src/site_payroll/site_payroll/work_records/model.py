from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.money import labor_to_clock_hours


@dataclass(frozen=True)
class WorkRecord:
    """도메인 엔티티: 하루 한 현장에서의 작업자 공수 기록.

    labor_hours is in 공수 units (1.0 = one 8-hour day). Records are never
    updated after submission.
    """

    worker_id: int
    site_id: int
    work_date: date
    labor_hours: Decimal
    record_id: Optional[int] = None

    @property
    def clock_hours(self) -> Decimal:
        return labor_to_clock_hours(self.labor_hours)
