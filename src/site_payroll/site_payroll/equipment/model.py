from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..core.enums import AllocationType


@dataclass(frozen=True)
class ResourceAllocation:
    """Worker or equipment assigned to a site for a day.

    Cost fields are filled only when both hours and an hourly rate were given.
    """

    allocation_type: AllocationType
    resource_id: int
    site_id: int
    allocated_date: date
    hours_worked: Optional[Decimal] = None
    hourly_rate: Optional[Decimal] = None
    overtime_rate: Optional[Decimal] = None
    regular_hours: Optional[Decimal] = None
    overtime_hours: Optional[Decimal] = None
    total_cost: Optional[Decimal] = None
    task_description: Optional[str] = None
    notes: Optional[str] = None
    allocation_id: Optional[int] = None

    @property
    def has_cost(self) -> bool:
        return self.total_cost is not None
