"""Salary rule selection and management."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Iterable, Optional, Sequence

from ..common.logging_config import get_logger
from ..common.validators import require_non_empty, require_positive
from ..core.enums import Role, RuleType
from ..core.exceptions import ValidationError
from .model import SalaryRule
from .repository import SalaryRuleRepository

logger = get_logger("payroll.rules")


def _applies(rule: SalaryRule, *, site_id: Optional[int], role: Optional[Role]) -> bool:
    if not rule.is_active:
        return False
    if rule.site_id is not None and rule.site_id != site_id:
        return False
    # Overtime multipliers are scoped by site only.
    if rule.rule_type != RuleType.OVERTIME_MULTIPLIER and rule.role is not None and rule.role != role:
        return False
    return True


def _specificity(rule: SalaryRule) -> tuple[int, int]:
    score = (2 if rule.site_id is not None else 0) + (1 if rule.role is not None else 0)
    return (-score, rule.rule_id)


def select_rule(
    rules: Iterable[SalaryRule],
    rule_type: RuleType,
    *,
    site_id: Optional[int],
    role: Optional[Role],
) -> Optional[SalaryRule]:
    """Most specific applicable rule: site+role, site, role, then global."""
    candidates = [r for r in rules if r.rule_type == rule_type and _applies(r, site_id=site_id, role=role)]
    if not candidates:
        return None
    return min(candidates, key=_specificity)


class SalaryRuleService:
    def __init__(self, rules: SalaryRuleRepository):
        self._rules = rules

    def list_rules(self, *, active_only: bool = False) -> Sequence[SalaryRule]:
        rules = self._rules.list_all()
        if active_only:
            return [r for r in rules if r.is_active]
        return rules

    def upsert_rule(
        self,
        *,
        rule_name: str,
        rule_type: Any,
        base_amount: Any = None,
        multiplier: Any = None,
        site_id: Optional[int] = None,
        role: Any = None,
        is_active: bool = True,
        rule_id: Optional[int] = None,
    ) -> int:
        name = require_non_empty(rule_name, "규칙 이름")
        try:
            kind = RuleType(rule_type)
            role_value = Role(role) if role else None
        except ValueError as e:
            raise ValidationError(str(e)) from None

        if kind == RuleType.OVERTIME_MULTIPLIER:
            factor: Optional[Decimal] = require_positive(multiplier, "multiplier")
            amount = Decimal("0")
        else:
            factor = None
            amount = require_positive(base_amount, "base_amount")

        saved_id = self._rules.upsert(
            rule_id=rule_id,
            rule_name=name,
            rule_type=kind,
            base_amount=amount,
            multiplier=factor,
            site_id=site_id,
            role=role_value,
            is_active=bool(is_active),
        )
        logger.info("salary rule saved", extra={"rule_id": saved_id, "rule_type": kind.value})
        return saved_id

    def delete_rules(self, rule_ids: Sequence[int]) -> int:
        if not rule_ids:
            raise ValidationError("삭제할 규칙을 선택하세요")
        deleted = self._rules.delete_many([int(i) for i in rule_ids])
        logger.info("salary rules deleted", extra={"count": deleted})
        return deleted
