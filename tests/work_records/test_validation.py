from decimal import Decimal

import pytest

from src.site_payroll.site_payroll.core.exceptions import ValidationError
from src.site_payroll.site_payroll.work_records.validation import describe_labor_hours, validate_labor_hours


@pytest.mark.parametrize("value", ["0.25", 0.5, 1, "1.75", 2])
def test_accepts_quarter_steps(value):
    assert validate_labor_hours(value) == Decimal(str(value))


@pytest.mark.parametrize("value", [0, -0.25, "0.3", 1.1, "2.25", 3, "abc", None, True])
def test_rejects_invalid(value):
    with pytest.raises(ValidationError):
        validate_labor_hours(value)


def test_describe_regular_day():
    info = describe_labor_hours(1)

    assert info.hours == 8
    assert info.has_overtime is False
    assert info.overtime_hours == 0
    assert info.description == "정규 근무 (8시간)"


def test_describe_overtime_day():
    info = describe_labor_hours("1.5")

    assert info.hours == 12
    assert info.has_overtime is True
    assert info.overtime_hours == 4
    assert info.description == "연장 근무 포함 (12시간)"


def test_describe_half_day():
    assert describe_labor_hours("0.5").description == "반일 근무 (4시간)"
