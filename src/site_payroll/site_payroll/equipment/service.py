from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.datetime_utils import require_date_range
from ..common.logging_config import get_logger
from ..common.money import ZERO, round_hours
from ..common.validators import optional_positive, require_at_most, require_non_negative
from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER, MAX_HOURS_VALUE, STANDARD_WORKDAY_HOURS
from ..core.enums import AllocationType
from ..core.exceptions import ValidationError
from ..payroll.calculator.standard_calculator import calculate_pay
from ..payroll.model import AggregationResult, PayBreakdown
from .model import ResourceAllocation
from .repository import AllocationRepository

logger = get_logger("equipment")


class AllocationService:
    def __init__(
        self,
        allocations: AllocationRepository,
        *,
        threshold_hours: Decimal = STANDARD_WORKDAY_HOURS,
        overtime_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER,
    ):
        self._allocations = allocations
        self._threshold = threshold_hours
        self._overtime_multiplier = overtime_multiplier

    def create_allocation(
        self,
        *,
        allocation_type: Any,
        resource_id: int,
        site_id: int,
        allocated_date: date,
        hours_worked: Any = None,
        hourly_rate: Any = None,
        overtime_rate: Any = None,
        task_description: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> ResourceAllocation:
        try:
            kind = AllocationType(allocation_type)
        except ValueError:
            raise ValidationError(f"배정 유형이 올바르지 않습니다: {allocation_type!r}") from None

        hours = None
        if hours_worked not in (None, ""):
            # stored as DECIMAL(6,2); cost is computed on the stored value
            hours = require_at_most(require_non_negative(hours_worked, "hours_worked"), MAX_HOURS_VALUE, "hours_worked")
            hours = round_hours(hours)
        rate = optional_positive(hourly_rate, "hourly_rate")
        ot_rate = optional_positive(overtime_rate, "overtime_rate")

        allocation = ResourceAllocation(
            allocation_type=kind,
            resource_id=int(resource_id),
            site_id=int(site_id),
            allocated_date=allocated_date,
            hours_worked=hours,
            hourly_rate=rate,
            overtime_rate=ot_rate,
            task_description=task_description,
            notes=notes,
        )

        # Costs only when both hours and an hourly rate are known.
        if hours is not None and rate is not None:
            b = calculate_pay(
                hours,
                rate,
                ot_rate,
                threshold_hours=self._threshold,
                overtime_multiplier=self._overtime_multiplier,
            )
            allocation = replace(
                allocation,
                regular_hours=b.regular_hours,
                overtime_hours=b.overtime_hours,
                total_cost=b.total_cost,
            )

        allocation_id = self._allocations.create(allocation)
        logger.info(
            "resource allocation created",
            extra={
                "allocation_id": allocation_id,
                "allocation_type": kind.value,
                "site_id": allocation.site_id,
                "total_cost": allocation.total_cost,
            },
        )
        return replace(allocation, allocation_id=allocation_id)

    def list_allocations(
        self,
        *,
        allocation_type: Any = None,
        resource_id: Optional[int] = None,
        site_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[ResourceAllocation]:
        if date_from and date_to:
            require_date_range(date_from, date_to)
        try:
            kind = AllocationType(allocation_type) if allocation_type else None
        except ValueError:
            raise ValidationError(f"배정 유형이 올바르지 않습니다: {allocation_type!r}") from None
        return self._allocations.list_filtered(
            allocation_type=kind,
            resource_id=resource_id,
            site_id=site_id,
            date_from=date_from,
            date_to=date_to,
        )

    def get_cost_summary(self, **filters: Any) -> AggregationResult:
        """Sum of per-allocation costs; allocations without a cost are ignored."""
        result = AggregationResult()
        for a in self.list_allocations(**filters):
            if not a.has_cost:
                continue
            result = result.add(
                PayBreakdown(
                    regular_hours=a.regular_hours or ZERO,
                    overtime_hours=a.overtime_hours or ZERO,
                    regular_pay=ZERO,
                    overtime_pay=ZERO,
                    total_cost=a.total_cost,
                )
            )
        return result
