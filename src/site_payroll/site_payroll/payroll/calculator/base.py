from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any

from ...common.money import labor_to_clock_hours, to_decimal
from ..model import PayBreakdown


class PayCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def calculate(self, hours_worked: Any) -> PayBreakdown:
        """Split clock hours of a single record/allocation and price them."""

        raise NotImplementedError

    def calculate_labor(self, labor_hours: Any) -> PayBreakdown:
        return self.calculate(labor_to_clock_hours(to_decimal(labor_hours, "labor_hours")))
