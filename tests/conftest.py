from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Optional

import pytest

from src.site_payroll.site_payroll.container import Container
from src.site_payroll.site_payroll.core.enums import Role, SalaryStatus
from src.site_payroll.site_payroll.equipment.model import ResourceAllocation
from src.site_payroll.site_payroll.equipment.service import AllocationService
from src.site_payroll.site_payroll.payroll.model import SalaryRecord, SalaryRule
from src.site_payroll.site_payroll.payroll.rules import SalaryRuleService
from src.site_payroll.site_payroll.payroll.service import PayrollService
from src.site_payroll.site_payroll.work_records.model import WorkRecord
from src.site_payroll.site_payroll.work_records.service import WorkRecordService
from src.site_payroll.site_payroll.workers.model import Site, Worker


@dataclass
class InMemoryWorkers:
    workers: dict[int, Worker] = field(default_factory=dict)
    sites: dict[int, Site] = field(default_factory=dict)

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        return self.workers.get(worker_id)

    def list_active(self):
        return [w for w in self.workers.values() if w.is_active]

    def list_sites(self):
        return list(self.sites.values())


class InMemoryWorkRecords:
    def __init__(self, records=None):
        self.records: list[WorkRecord] = list(records or [])

    def create(self, *, worker_id, site_id, work_date, labor_hours) -> int:
        record_id = len(self.records) + 1
        self.records.append(
            WorkRecord(record_id=record_id, worker_id=worker_id, site_id=site_id, work_date=work_date, labor_hours=labor_hours)
        )
        return record_id

    def list_range(self, *, start_date, end_date, site_id=None, worker_id=None):
        out = [
            r
            for r in self.records
            if start_date <= r.work_date <= end_date
            and (site_id is None or r.site_id == site_id)
            and (worker_id is None or r.worker_id == worker_id)
        ]
        out.sort(key=lambda r: r.work_date)
        return out


class InMemoryRules:
    def __init__(self, rules=None):
        self.rules: dict[int, SalaryRule] = {r.rule_id: r for r in (rules or [])}

    def list_all(self):
        return sorted(self.rules.values(), key=lambda r: r.rule_id)

    def upsert(self, *, rule_id, rule_name, rule_type, base_amount, multiplier, site_id, role, is_active) -> int:
        rid = rule_id if rule_id is not None else max(self.rules, default=0) + 1
        self.rules[rid] = SalaryRule(
            rule_id=rid,
            rule_name=rule_name,
            rule_type=rule_type,
            base_amount=base_amount,
            multiplier=multiplier,
            site_id=site_id,
            role=role,
            is_active=is_active,
        )
        return rid

    def delete_many(self, rule_ids) -> int:
        deleted = 0
        for rid in rule_ids:
            if self.rules.pop(rid, None) is not None:
                deleted += 1
        return deleted


class InMemorySalaryRecords:
    def __init__(self, records=None):
        self.records: list[SalaryRecord] = []
        self._next_id = 1
        for r in records or []:
            self._add(r)

    def _add(self, record: SalaryRecord) -> None:
        self.records.append(replace(record, record_id=self._next_id))
        self._next_id += 1

    @staticmethod
    def _in_scope(r, start_date, end_date, site_id, worker_id) -> bool:
        return (
            (start_date is None or r.work_date >= start_date)
            and (end_date is None or r.work_date <= end_date)
            and (site_id is None or r.site_id == site_id)
            and (worker_id is None or r.worker_id == worker_id)
        )

    def list_range(self, *, start_date=None, end_date=None, site_id=None, worker_id=None, status=None):
        return [
            r
            for r in self.records
            if self._in_scope(r, start_date, end_date, site_id, worker_id) and (status is None or r.status == status)
        ]

    def replace_calculated(self, *, start_date, end_date, site_id, worker_id, records) -> int:
        self.records = [
            r
            for r in self.records
            if not (r.status == SalaryStatus.CALCULATED and self._in_scope(r, start_date, end_date, site_id, worker_id))
        ]
        for r in records:
            self._add(r)
        return len(records)

    def transition_status(self, *, record_ids, from_status, to_status) -> int:
        moved = 0
        for i, r in enumerate(self.records):
            if r.record_id in record_ids and r.status == from_status:
                self.records[i] = replace(r, status=to_status)
                moved += 1
        return moved


class InMemoryAllocations:
    def __init__(self):
        self.allocations: list[ResourceAllocation] = []

    def create(self, allocation: ResourceAllocation) -> int:
        allocation_id = len(self.allocations) + 1
        self.allocations.append(replace(allocation, allocation_id=allocation_id))
        return allocation_id

    def list_filtered(self, *, allocation_type=None, resource_id=None, site_id=None, date_from=None, date_to=None):
        return [
            a
            for a in self.allocations
            if (allocation_type is None or a.allocation_type == allocation_type)
            and (resource_id is None or a.resource_id == resource_id)
            and (site_id is None or a.site_id == site_id)
            and (date_from is None or a.allocated_date >= date_from)
            and (date_to is None or a.allocated_date <= date_to)
        ]


@pytest.fixture
def workers_repo() -> InMemoryWorkers:
    return InMemoryWorkers(
        workers={
            1: Worker(worker_id=1, full_name="김현장", role=Role.SITE_MANAGER),
            2: Worker(worker_id=2, full_name="이작업", role=Role.WORKER),
            3: Worker(worker_id=3, full_name="박작업", role=Role.WORKER, daily_rate=Decimal("140000")),
        },
        sites={
            10: Site(site_id=10, name="강남 A현장"),
            20: Site(site_id=20, name="송파 B현장"),
        },
    )


@pytest.fixture
def work_records_repo() -> InMemoryWorkRecords:
    return InMemoryWorkRecords(
        [
            WorkRecord(record_id=1, worker_id=2, site_id=10, work_date=date(2025, 3, 3), labor_hours=Decimal("1.0")),
            WorkRecord(record_id=2, worker_id=2, site_id=10, work_date=date(2025, 3, 4), labor_hours=Decimal("1.25")),
            WorkRecord(record_id=3, worker_id=2, site_id=20, work_date=date(2025, 3, 5), labor_hours=Decimal("0.5")),
            WorkRecord(record_id=4, worker_id=1, site_id=10, work_date=date(2025, 3, 3), labor_hours=Decimal("1.5")),
            WorkRecord(record_id=5, worker_id=3, site_id=20, work_date=date(2025, 4, 1), labor_hours=Decimal("1.0")),
        ]
    )


@pytest.fixture
def rules_repo() -> InMemoryRules:
    return InMemoryRules()


@pytest.fixture
def salary_records_repo() -> InMemorySalaryRecords:
    return InMemorySalaryRecords()


@pytest.fixture
def allocations_repo() -> InMemoryAllocations:
    return InMemoryAllocations()


@pytest.fixture
def payroll_service(work_records_repo, workers_repo, rules_repo, salary_records_repo) -> PayrollService:
    return PayrollService(work_records_repo, workers_repo, rules_repo, salary_records_repo)


@pytest.fixture
def container(payroll_service, rules_repo, work_records_repo, workers_repo, allocations_repo) -> Container:
    return Container(
        conn=None,
        payroll_service=payroll_service,
        rule_service=SalaryRuleService(rules_repo),
        work_record_service=WorkRecordService(work_records_repo, workers_repo),
        allocation_service=AllocationService(allocations_repo),
    )


@pytest.fixture
def client(container, monkeypatch):
    from src.site_payroll.site_payroll.main import create_app

    monkeypatch.setenv("APP_ENV", "testing")
    app = create_app(container)
    return app.test_client()
