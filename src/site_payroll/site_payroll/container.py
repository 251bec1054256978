from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from .core.constants import DEFAULT_DAILY_RATE, DEFAULT_OVERTIME_MULTIPLIER, STANDARD_WORKDAY_HOURS
from .database.connection import DBConfig, DatabaseConnection
from .equipment.mysql_allocation_repository import MySQLAllocationRepository
from .equipment.service import AllocationService
from .payroll.factory import PayCalculatorFactory
from .payroll.mysql_salary_repository import MySQLSalaryRecordRepository, MySQLSalaryRuleRepository
from .payroll.rules import SalaryRuleService
from .payroll.service import PayrollService
from .work_records.mysql_work_record_repository import MySQLWorkRecordRepository
from .work_records.service import WorkRecordService
from .workers.mysql_worker_repository import MySQLWorkerRepository


@dataclass(frozen=True)
class PayrollSettings:
    standard_workday_hours: Decimal = STANDARD_WORKDAY_HOURS
    overtime_multiplier: Decimal = DEFAULT_OVERTIME_MULTIPLIER
    default_daily_rate: Decimal = DEFAULT_DAILY_RATE


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    payroll_service: PayrollService
    rule_service: SalaryRuleService
    work_record_service: WorkRecordService
    allocation_service: AllocationService
    settings: PayrollSettings = PayrollSettings()


def build_container(*, db_config: dict, settings: Optional[PayrollSettings] = None) -> Container:
    settings = settings or PayrollSettings()
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    workers_repo = MySQLWorkerRepository(conn)
    work_records_repo = MySQLWorkRecordRepository(conn)
    rules_repo = MySQLSalaryRuleRepository(conn)
    salary_records_repo = MySQLSalaryRecordRepository(conn)
    allocations_repo = MySQLAllocationRepository(conn)

    factory = PayCalculatorFactory(
        default_daily_rate=settings.default_daily_rate,
        default_overtime_multiplier=settings.overtime_multiplier,
        threshold_hours=settings.standard_workday_hours,
    )

    return Container(
        conn=conn,
        payroll_service=PayrollService(work_records_repo, workers_repo, rules_repo, salary_records_repo, factory=factory),
        rule_service=SalaryRuleService(rules_repo),
        work_record_service=WorkRecordService(work_records_repo, workers_repo),
        allocation_service=AllocationService(
            allocations_repo,
            threshold_hours=settings.standard_workday_hours,
            overtime_multiplier=settings.overtime_multiplier,
        ),
        settings=settings,
    )
