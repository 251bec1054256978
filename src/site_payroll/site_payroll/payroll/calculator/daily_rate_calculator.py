from __future__ import annotations

from decimal import Decimal
from typing import Any

from ...common.money import ZERO, clock_to_labor_hours, round_money
from ...common.validators import require_at_most, require_non_negative, require_positive
from ...core.constants import MAX_HOURS_VALUE, MAX_MONEY_VALUE, STANDARD_WORKDAY_HOURS
from ..model import PayBreakdown
from .base import PayCalculator


class DailyRatePayCalculator(PayCalculator):
    """공수 기반: pay = 공수 x 일당, no separate overtime premium.

    Hours are still split at 8h so reports show the overtime portion.
    """

    def __init__(self, daily_rate: Any, *, threshold_hours: Decimal = STANDARD_WORKDAY_HOURS):
        self._daily_rate = require_at_most(require_positive(daily_rate, "daily_rate"), MAX_MONEY_VALUE, "daily_rate")
        self._threshold = threshold_hours

    @property
    def daily_rate(self) -> Decimal:
        return self._daily_rate

    def calculate(self, hours_worked: Any) -> PayBreakdown:
        hours = require_at_most(require_non_negative(hours_worked, "hours_worked"), MAX_HOURS_VALUE, "hours_worked")
        base_pay = round_money(clock_to_labor_hours(hours) * self._daily_rate)
        return PayBreakdown(
            regular_hours=min(hours, self._threshold),
            overtime_hours=max(ZERO, hours - self._threshold),
            regular_pay=base_pay,
            overtime_pay=ZERO,
            total_cost=base_pay,
        )
