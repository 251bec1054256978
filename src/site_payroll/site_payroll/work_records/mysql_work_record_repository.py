from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_decimal_or_none
from .model import WorkRecord
from .repository import WorkRecordRepository


class MySQLWorkRecordRepository(WorkRecordRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, worker_id: int, site_id: int, work_date: date, labor_hours: Decimal) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO work_records(worker_id, site_id, work_date, labor_hours)
                VALUES(%s,%s,%s,%s)
                """,
                (int(worker_id), int(site_id), work_date, labor_hours),
            )
            return int(cur.lastrowid)

    def list_range(
        self,
        *,
        start_date: date,
        end_date: date,
        site_id: Optional[int] = None,
        worker_id: Optional[int] = None,
    ) -> Sequence[WorkRecord]:
        clauses = ["work_date BETWEEN %s AND %s"]
        params: list[object] = [start_date, end_date]

        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))
        if worker_id is not None:
            clauses.append("worker_id=%s")
            params.append(int(worker_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT record_id, worker_id, site_id, work_date, labor_hours
                FROM work_records
                WHERE {where}
                ORDER BY work_date ASC, record_id ASC
                """,
                tuple(params),
            )
            return [
                WorkRecord(
                    record_id=int(r["record_id"]),
                    worker_id=int(r["worker_id"]),
                    site_id=int(r["site_id"]),
                    work_date=r["work_date"],
                    labor_hours=to_decimal_or_none(r["labor_hours"]),
                )
                for r in fetchall(cur)
            ]
