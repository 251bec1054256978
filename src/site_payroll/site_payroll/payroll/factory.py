from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Optional

from ..core.constants import DEFAULT_DAILY_RATE, DEFAULT_OVERTIME_MULTIPLIER, STANDARD_WORKDAY_HOURS
from ..core.enums import RuleType
from ..workers.model import Worker
from .calculator.base import PayCalculator
from .calculator.daily_rate_calculator import DailyRatePayCalculator
from .calculator.standard_calculator import StandardPayCalculator
from .model import RateProfile, SalaryRule
from .rules import select_rule


@dataclass
class PayCalculatorFactory:
    """Factory Pattern: choose a pay calculator from the applicable rules.

    Order: daily-rate rule, hourly rule (+ overtime multiplier rule), the
    worker's own daily rate, then the default daily rate.
    """

    default_daily_rate: Decimal = DEFAULT_DAILY_RATE
    default_overtime_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER
    threshold_hours: Decimal = STANDARD_WORKDAY_HOURS

    def for_worker(self, *, worker: Worker, site_id: Optional[int], rules: Iterable[SalaryRule]) -> PayCalculator:
        rules = list(rules)

        daily = select_rule(rules, RuleType.DAILY_RATE, site_id=site_id, role=worker.role)
        if daily:
            return DailyRatePayCalculator(daily.base_amount, threshold_hours=self.threshold_hours)

        hourly = select_rule(rules, RuleType.HOURLY_RATE, site_id=site_id, role=worker.role)
        if hourly:
            overtime = select_rule(rules, RuleType.OVERTIME_MULTIPLIER, site_id=site_id, role=worker.role)
            multiplier = self.default_overtime_multiplier
            if overtime and overtime.multiplier:
                multiplier = overtime.multiplier
            rates = RateProfile(hourly_rate=hourly.base_amount, overtime_multiplier=multiplier)
            return StandardPayCalculator(rates, threshold_hours=self.threshold_hours)

        if worker.daily_rate is not None and worker.daily_rate > 0:
            return DailyRatePayCalculator(worker.daily_rate, threshold_hours=self.threshold_hours)
        return DailyRatePayCalculator(self.default_daily_rate, threshold_hours=self.threshold_hours)
