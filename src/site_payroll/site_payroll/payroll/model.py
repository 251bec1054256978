from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from ..common.money import ZERO
from ..common.validators import optional_positive, require_at_most, require_positive
from ..core.constants import DEFAULT_OVERTIME_MULTIPLIER, MAX_MONEY_VALUE
from ..core.enums import Role, RuleType, SalaryStatus


@dataclass(frozen=True)
class RateProfile:
    """Hourly and overtime pay rates for a worker or an allocation.

    Without an explicit overtime rate the hourly rate times the overtime
    multiplier (1.5 by default) applies.
    """

    hourly_rate: Decimal
    overtime_rate: Optional[Decimal] = None
    overtime_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER

    def __post_init__(self):
        hourly_rate = require_at_most(require_positive(self.hourly_rate, "hourly_rate"), MAX_MONEY_VALUE, "hourly_rate")
        overtime_rate = optional_positive(self.overtime_rate, "overtime_rate")
        if overtime_rate is not None:
            require_at_most(overtime_rate, MAX_MONEY_VALUE, "overtime_rate")
        object.__setattr__(self, "hourly_rate", hourly_rate)
        object.__setattr__(self, "overtime_rate", overtime_rate)
        object.__setattr__(
            self, "overtime_multiplier", require_positive(self.overtime_multiplier, "overtime_multiplier")
        )

    @property
    def effective_overtime_rate(self) -> Decimal:
        if self.overtime_rate is not None:
            return self.overtime_rate
        return self.hourly_rate * self.overtime_multiplier


@dataclass(frozen=True)
class PayBreakdown:
    """Result of splitting one record/allocation into regular and overtime."""

    regular_hours: Decimal
    overtime_hours: Decimal
    regular_pay: Decimal
    overtime_pay: Decimal
    total_cost: Decimal
    overtime_rate: Optional[Decimal] = None

    def as_dict(self) -> dict:
        return {
            "regular_hours": str(self.regular_hours),
            "overtime_hours": str(self.overtime_hours),
            "overtime_rate": str(self.overtime_rate) if self.overtime_rate is not None else None,
            "regular_pay": str(self.regular_pay),
            "overtime_pay": str(self.overtime_pay),
            "total_cost": str(self.total_cost),
        }


@dataclass(frozen=True)
class AggregationResult:
    """Sum of per-record breakdowns. Derived, never persisted."""

    regular_hours: Decimal = ZERO
    overtime_hours: Decimal = ZERO
    total_cost: Decimal = ZERO

    def add(self, breakdown: PayBreakdown) -> "AggregationResult":
        return AggregationResult(
            regular_hours=self.regular_hours + breakdown.regular_hours,
            overtime_hours=self.overtime_hours + breakdown.overtime_hours,
            total_cost=self.total_cost + breakdown.total_cost,
        )

    def as_dict(self) -> dict:
        return {
            "regular_hours": str(self.regular_hours),
            "overtime_hours": str(self.overtime_hours),
            "total_cost": str(self.total_cost),
        }


@dataclass(frozen=True)
class SalaryRule:
    rule_id: int
    rule_name: str
    rule_type: RuleType
    base_amount: Decimal
    multiplier: Optional[Decimal] = None
    site_id: Optional[int] = None
    role: Optional[Role] = None
    is_active: bool = True


@dataclass(frozen=True)
class SalaryRecord:
    """급여 레코드: one per work record, hours in clock hours."""

    worker_id: int
    site_id: int
    work_date: date
    labor_hours: Decimal
    regular_hours: Decimal
    overtime_hours: Decimal
    base_pay: Decimal
    overtime_pay: Decimal
    total_pay: Decimal
    status: SalaryStatus = SalaryStatus.CALCULATED
    bonus_pay: Decimal = ZERO
    deductions: Decimal = ZERO
    notes: Optional[str] = None
    record_id: Optional[int] = None


@dataclass(frozen=True)
class SalaryStats:
    total_workers: int
    pending_calculations: int
    approved_payments: int
    total_payroll: Decimal
    average_daily_pay: Decimal
    overtime_percentage: Decimal


@dataclass
class OutputSummary:
    """Per worker and site 공수 summary (출력 현황)."""

    worker_id: int
    worker_name: str
    worker_role: str
    site_id: int
    site_name: str
    total_labor_hours: Decimal = ZERO
    total_work_hours: Decimal = ZERO
    total_overtime_hours: Decimal = ZERO
    base_pay: Decimal = ZERO
    overtime_pay: Decimal = ZERO
    total_pay: Decimal = ZERO
    work_dates: list[date] = field(default_factory=list)

    @property
    def work_days_count(self) -> int:
        return len(self.work_dates)

    @property
    def first_work_date(self) -> Optional[date]:
        return self.work_dates[0] if self.work_dates else None

    @property
    def last_work_date(self) -> Optional[date]:
        return self.work_dates[-1] if self.work_dates else None


@dataclass(frozen=True)
class CalendarDay:
    work_date: date
    labor_hours: Decimal
    site_name: str


@dataclass(frozen=True)
class ManpowerTotal:
    worker_id: int
    start: date
    end: date
    labor_hours: Decimal
    clock_hours: Decimal
    record_count: int
