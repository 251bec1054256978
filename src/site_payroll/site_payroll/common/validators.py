from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional

from ..core.exceptions import InvalidArgumentError, ValidationError
from .money import to_decimal


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} 항목이 비어 있습니다")
    return value.strip()


def require_non_negative(value: Any, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount < 0:
        raise InvalidArgumentError(f"{field_name}은(는) 0 이상이어야 합니다")
    return amount


def require_positive(value: Any, field_name: str) -> Decimal:
    amount = to_decimal(value, field_name)
    if amount <= 0:
        raise InvalidArgumentError(f"{field_name}은(는) 0보다 커야 합니다")
    return amount


def require_at_most(amount: Decimal, limit: Decimal, field_name: str) -> Decimal:
    if amount > limit:
        raise InvalidArgumentError(f"{field_name}은(는) {limit} 이하여야 합니다")
    return amount


def optional_positive(value: Any, field_name: str) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    return require_positive(value, field_name)


def require_int(value: Any, field_name: str) -> int:
    if isinstance(value, bool):
        raise ValidationError(f"{field_name} 값이 올바르지 않습니다")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} 값이 올바르지 않습니다") from None
