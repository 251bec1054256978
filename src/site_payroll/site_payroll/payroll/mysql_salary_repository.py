from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..core.enums import Role, RuleType, SalaryStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, in_clause, to_decimal_or_none
from .model import SalaryRecord, SalaryRule
from .repository import SalaryRecordRepository, SalaryRuleRepository


class MySQLSalaryRuleRepository(SalaryRuleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[SalaryRule]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT rule_id, rule_name, rule_type, base_amount, multiplier, site_id, role, is_active
                FROM salary_rules
                ORDER BY rule_type ASC, rule_id ASC
                """
            )
            return [
                SalaryRule(
                    rule_id=int(r["rule_id"]),
                    rule_name=r["rule_name"],
                    rule_type=RuleType(r["rule_type"]),
                    base_amount=to_decimal_or_none(r["base_amount"]),
                    multiplier=to_decimal_or_none(r.get("multiplier")),
                    site_id=int(r["site_id"]) if r.get("site_id") is not None else None,
                    role=Role(r["role"]) if r.get("role") else None,
                    is_active=bool(r.get("is_active", 1)),
                )
                for r in fetchall(cur)
            ]

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
        params = (
            rule_name,
            rule_type.value,
            base_amount,
            multiplier,
            site_id,
            role.value if role else None,
            int(is_active),
        )
        with db_cursor(self._conn_factory) as (_, cur):
            if rule_id is None:
                cur.execute(
                    """
                    INSERT INTO salary_rules(rule_name, rule_type, base_amount, multiplier, site_id, role, is_active)
                    VALUES(%s,%s,%s,%s,%s,%s,%s)
                    """,
                    params,
                )
                return int(cur.lastrowid)

            cur.execute(
                """
                UPDATE salary_rules
                SET rule_name=%s, rule_type=%s, base_amount=%s, multiplier=%s, site_id=%s, role=%s, is_active=%s
                WHERE rule_id=%s
                """,
                params + (int(rule_id),),
            )
            return int(rule_id)

    def delete_many(self, rule_ids: Sequence[int]) -> int:
        placeholders, params = in_clause(rule_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM salary_rules WHERE rule_id IN {placeholders}", tuple(params))
            return cur.rowcount


class MySQLSalaryRecordRepository(SalaryRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _scope(
        *,
        start_date: Optional[date],
        end_date: Optional[date],
        site_id: Optional[int],
        worker_id: Optional[int],
    ) -> tuple[list[str], list[object]]:
        clauses: list[str] = []
        params: list[object] = []
        if start_date is not None:
            clauses.append("work_date >= %s")
            params.append(start_date)
        if end_date is not None:
            clauses.append("work_date <= %s")
            params.append(end_date)
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))
        if worker_id is not None:
            clauses.append("worker_id=%s")
            params.append(int(worker_id))
        return clauses, params

    def list_range(
        self,
        *,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
        status: Optional[SalaryStatus] = None,
    ) -> Sequence[SalaryRecord]:
        clauses, params = self._scope(start_date=start_date, end_date=end_date, site_id=site_id, worker_id=worker_id)
        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        where = ("WHERE " + " AND ".join(clauses)) if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_id, worker_id, site_id, work_date, labor_hours, regular_hours, overtime_hours,
                       base_pay, overtime_pay, bonus_pay, deductions, total_pay, status, notes
                FROM salary_records
                {where}
                ORDER BY work_date DESC, worker_id ASC
                """,
                tuple(params),
            )
            return [
                SalaryRecord(
                    record_id=int(r["record_id"]),
                    worker_id=int(r["worker_id"]),
                    site_id=int(r["site_id"]),
                    work_date=r["work_date"],
                    labor_hours=to_decimal_or_none(r["labor_hours"]),
                    regular_hours=to_decimal_or_none(r["regular_hours"]),
                    overtime_hours=to_decimal_or_none(r["overtime_hours"]),
                    base_pay=to_decimal_or_none(r["base_pay"]),
                    overtime_pay=to_decimal_or_none(r["overtime_pay"]),
                    bonus_pay=to_decimal_or_none(r["bonus_pay"]),
                    deductions=to_decimal_or_none(r["deductions"]),
                    total_pay=to_decimal_or_none(r["total_pay"]),
                    status=SalaryStatus(r["status"]),
                    notes=r.get("notes"),
                )
                for r in fetchall(cur)
            ]

    def replace_calculated(
        self,
        *,
        start_date: date,
        end_date: date,
        site_id: Optional[int],
        worker_id: Optional[int],
        records: Sequence[SalaryRecord],
    ) -> int:
        clauses, params = self._scope(start_date=start_date, end_date=end_date, site_id=site_id, worker_id=worker_id)
        clauses.append("status=%s")
        params.append(SalaryStatus.CALCULATED.value)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"DELETE FROM salary_records WHERE {' AND '.join(clauses)}", tuple(params))
            if records:
                cur.executemany(
                    """
                    INSERT INTO salary_records(
                        worker_id, site_id, work_date, labor_hours, regular_hours, overtime_hours,
                        base_pay, overtime_pay, bonus_pay, deductions, total_pay, status, notes
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    [
                        (
                            r.worker_id,
                            r.site_id,
                            r.work_date,
                            r.labor_hours,
                            r.regular_hours,
                            r.overtime_hours,
                            r.base_pay,
                            r.overtime_pay,
                            r.bonus_pay,
                            r.deductions,
                            r.total_pay,
                            r.status.value,
                            r.notes,
                        )
                        for r in records
                    ],
                )
            return len(records)

    def transition_status(
        self,
        *,
        record_ids: Sequence[int],
        from_status: SalaryStatus,
        to_status: SalaryStatus,
    ) -> int:
        placeholders, params = in_clause(record_ids)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"UPDATE salary_records SET status=%s WHERE status=%s AND record_id IN {placeholders}",
                tuple([to_status.value, from_status.value] + params),
            )
            return cur.rowcount
