from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Mapping, Optional

from ...common.money import ZERO, round_money
from ...common.validators import require_at_most, require_non_negative
from ...core.constants import DEFAULT_OVERTIME_MULTIPLIER, MAX_HOURS_VALUE, STANDARD_WORKDAY_HOURS
from ..model import PayBreakdown, RateProfile
from .base import PayCalculator


class StandardPayCalculator(PayCalculator):
    """Hourly rule: up to 8h at the hourly rate, the rest at the overtime rate.

    Each call sees one record or allocation; overtime is never carried over
    between calls.
    """

    def __init__(self, rates: RateProfile, *, threshold_hours: Decimal = STANDARD_WORKDAY_HOURS):
        self._rates = rates
        self._threshold = threshold_hours

    @property
    def rates(self) -> RateProfile:
        return self._rates

    def calculate(self, hours_worked: Any) -> PayBreakdown:
        hours = require_at_most(require_non_negative(hours_worked, "hours_worked"), MAX_HOURS_VALUE, "hours_worked")
        regular_hours = min(hours, self._threshold)
        overtime_hours = max(ZERO, hours - self._threshold)
        overtime_rate = self._rates.effective_overtime_rate

        regular_pay = round_money(regular_hours * self._rates.hourly_rate)
        overtime_pay = round_money(overtime_hours * overtime_rate)
        return PayBreakdown(
            regular_hours=regular_hours,
            overtime_hours=overtime_hours,
            regular_pay=regular_pay,
            overtime_pay=overtime_pay,
            total_cost=regular_pay + overtime_pay,
            overtime_rate=overtime_rate,
        )


def calculate_pay(
    hours_worked: Any,
    hourly_rate: Any,
    overtime_rate: Any = None,
    *,
    threshold_hours: Decimal = STANDARD_WORKDAY_HOURS,
    overtime_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER,
) -> PayBreakdown:
    """Price one record or allocation.

    >>> calculate_pay(10, 10000).total_cost
    Decimal('110000')
    """
    rates = RateProfile(hourly_rate=hourly_rate, overtime_rate=overtime_rate, overtime_multiplier=overtime_multiplier)
    return StandardPayCalculator(rates, threshold_hours=threshold_hours).calculate(hours_worked)


def calculate_batch(entries: Iterable[Mapping[str, Any]], **policy: Any) -> list[PayBreakdown]:
    """``[{hours_worked, hourly_rate, overtime_rate?}, ...]`` -> breakdowns, same order."""
    results: list[PayBreakdown] = []
    for entry in entries:
        overtime_rate: Optional[Any] = entry.get("overtime_rate")
        results.append(calculate_pay(entry.get("hours_worked"), entry.get("hourly_rate"), overtime_rate, **policy))
    return results
