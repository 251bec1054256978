from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import AllocationType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, to_decimal_or_none
from .model import ResourceAllocation
from .repository import AllocationRepository


class MySQLAllocationRepository(AllocationRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, allocation: ResourceAllocation) -> int:
        a = allocation
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO resource_allocations(
                    allocation_type, resource_id, site_id, allocated_date, hours_worked, hourly_rate,
                    overtime_rate, regular_hours, overtime_hours, total_cost, task_description, notes
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    a.allocation_type.value,
                    a.resource_id,
                    a.site_id,
                    a.allocated_date,
                    a.hours_worked,
                    a.hourly_rate,
                    a.overtime_rate,
                    a.regular_hours,
                    a.overtime_hours,
                    a.total_cost,
                    a.task_description,
                    a.notes,
                ),
            )
            return int(cur.lastrowid)

    def list_filtered(
        self,
        *,
        allocation_type: Optional[AllocationType] = None,
        resource_id: Optional[int] = None,
        site_id: Optional[int] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> Sequence[ResourceAllocation]:
        clauses: list[str] = []
        params: list[object] = []

        if allocation_type is not None:
            clauses.append("allocation_type=%s")
            params.append(allocation_type.value)
        if resource_id is not None:
            clauses.append("resource_id=%s")
            params.append(int(resource_id))
        if site_id is not None:
            clauses.append("site_id=%s")
            params.append(int(site_id))
        if date_from is not None:
            clauses.append("allocated_date >= %s")
            params.append(date_from)
        if date_to is not None:
            clauses.append("allocated_date <= %s")
            params.append(date_to)

        where = ("WHERE " + " AND ".join(clauses)) if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT allocation_id, allocation_type, resource_id, site_id, allocated_date, hours_worked,
                       hourly_rate, overtime_rate, regular_hours, overtime_hours, total_cost,
                       task_description, notes
                FROM resource_allocations
                {where}
                ORDER BY allocated_date DESC, allocation_id DESC
                """,
                tuple(params),
            )
            return [
                ResourceAllocation(
                    allocation_id=int(r["allocation_id"]),
                    allocation_type=AllocationType(r["allocation_type"]),
                    resource_id=int(r["resource_id"]),
                    site_id=int(r["site_id"]),
                    allocated_date=r["allocated_date"],
                    hours_worked=to_decimal_or_none(r.get("hours_worked")),
                    hourly_rate=to_decimal_or_none(r.get("hourly_rate")),
                    overtime_rate=to_decimal_or_none(r.get("overtime_rate")),
                    regular_hours=to_decimal_or_none(r.get("regular_hours")),
                    overtime_hours=to_decimal_or_none(r.get("overtime_hours")),
                    total_cost=to_decimal_or_none(r.get("total_cost")),
                    task_description=r.get("task_description"),
                    notes=r.get("notes"),
                )
                for r in fetchall(cur)
            ]
