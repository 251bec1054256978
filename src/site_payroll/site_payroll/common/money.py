"""Fixed-point helpers for hours and won amounts.

All payroll arithmetic runs on ``Decimal``. Money is rounded to whole won with
ROUND_HALF_UP, once per computed component; hours keep two decimal places.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from ..core.constants import HOURS_DECIMAL_PLACES, MONEY_DECIMAL_PLACES, STANDARD_WORKDAY_HOURS
from ..core.exceptions import InvalidArgumentError

ZERO = Decimal("0")


def to_decimal(value: Any, field_name: str = "value") -> Decimal:
    """Convert user/DB input to Decimal.

    Floats go through ``str()`` so ``0.1`` stays ``Decimal("0.1")``.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidArgumentError(f"{field_name} 값이 올바르지 않습니다: {value!r}")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float)):
        result = Decimal(str(value))
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidArgumentError(f"{field_name} 값이 올바르지 않습니다: {value!r}") from None
    else:
        raise InvalidArgumentError(f"{field_name} 값이 올바르지 않습니다: {value!r}")

    if not result.is_finite():
        raise InvalidArgumentError(f"{field_name} 값이 올바르지 않습니다: {value!r}")
    return result


def _quantizer(places: int) -> Decimal:
    return Decimal(1).scaleb(-places)


def _quantize(value: Decimal, places: int) -> Decimal:
    try:
        return value.quantize(_quantizer(places), rounding=ROUND_HALF_UP)
    except InvalidOperation:
        raise InvalidArgumentError(f"값이 너무 큽니다: {value}") from None


def round_money(value: Decimal, places: int = MONEY_DECIMAL_PLACES) -> Decimal:
    return _quantize(value, places)


def round_hours(value: Decimal, places: int = HOURS_DECIMAL_PLACES) -> Decimal:
    return _quantize(value, places)


def labor_to_clock_hours(labor_hours: Decimal) -> Decimal:
    """공수 -> 시간 (1.0 공수 = 8시간)."""
    return labor_hours * STANDARD_WORKDAY_HOURS


def clock_to_labor_hours(hours: Decimal) -> Decimal:
    return hours / STANDARD_WORKDAY_HOURS
