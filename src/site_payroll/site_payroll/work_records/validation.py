from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any

from ..common.money import labor_to_clock_hours, to_decimal
from ..core.constants import LABOR_HOURS_STEP, MAX_LABOR_HOURS_PER_DAY
from ..core.exceptions import ValidationError

_DESCRIPTIONS = {
    Decimal("0.25"): "2시간 근무",
    Decimal("0.5"): "반일 근무 (4시간)",
    Decimal("0.75"): "6시간 근무",
    Decimal("1"): "정규 근무 (8시간)",
    Decimal("1.25"): "정규 + 연장 2시간 (10시간)",
    Decimal("1.5"): "연장 근무 포함 (12시간)",
    Decimal("1.75"): "정규 + 연장 6시간 (14시간)",
    Decimal("2"): "16시간 근무",
}


@dataclass(frozen=True)
class LaborHoursInfo:
    labor_hours: Decimal
    hours: Decimal
    has_overtime: bool
    overtime_hours: Decimal
    description: str


def validate_labor_hours(value: Any) -> Decimal:
    """Submitted 공수: positive, in 0.25 steps, at most 2.0 per day."""
    labor = to_decimal(value, "공수")
    if labor <= 0:
        raise ValidationError("공수는 0보다 커야 합니다")
    if labor % LABOR_HOURS_STEP != 0:
        raise ValidationError("공수는 0.25 (2시간) 단위로 입력해야 합니다")
    if labor > MAX_LABOR_HOURS_PER_DAY:
        raise ValidationError("하루 공수는 2.0 (16시간)을 넘을 수 없습니다")
    return labor


def describe_labor_hours(value: Any) -> LaborHoursInfo:
    labor = validate_labor_hours(value)
    hours = labor_to_clock_hours(labor)
    has_overtime = labor > 1
    overtime_hours = labor_to_clock_hours(labor - 1) if has_overtime else Decimal("0")
    description = _DESCRIPTIONS.get(labor.normalize(), f"{hours.normalize():f}시간 근무")
    return LaborHoursInfo(
        labor_hours=labor,
        hours=hours,
        has_overtime=has_overtime,
        overtime_hours=overtime_hours,
        description=description,
    )
