from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import Role, RuleType, SalaryStatus
from .model import SalaryRecord, SalaryRule


class SalaryRuleRepository(Protocol):
    def list_all(self) -> Sequence[SalaryRule]:
        raise NotImplementedError

    def upsert(
        self,
        *,
        rule_id: Optional[int],
        rule_name: str,
        rule_type: RuleType,
        base_amount: Decimal,
        multiplier: Optional[Decimal],
        site_id: Optional[int],
        role: Optional[Role],
        is_active: bool,
    ) -> int:
        raise NotImplementedError

    def delete_many(self, rule_ids: Sequence[int]) -> int:
        raise NotImplementedError


class SalaryRecordRepository(Protocol):
    def list_range(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        status: Optional[SalaryStatus] = None,
    ) -> Sequence[SalaryRecord]:
        raise NotImplementedError

    def replace_calculated(
        self,
        *,
        start_date: date,
        end_date: date,
        site_id: Optional[int],
        worker_id: Optional[int],
        records: Sequence[SalaryRecord],
    ) -> int:
        """Drop ``calculated`` rows in scope and insert ``records`` atomically.

        Approved and paid rows are left untouched.
        """

        raise NotImplementedError

    def transition_status(
        self,
        *,
        record_ids: Sequence[int],
        from_status: SalaryStatus,
        to_status: SalaryStatus,
    ) -> int:
        raise NotImplementedError
