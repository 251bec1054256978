from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, to_decimal_or_none
from .model import Site, Worker
from .repository import WorkerRepository


def _to_worker(r: dict) -> Worker:
    return Worker(
        worker_id=int(r["worker_id"]),
        full_name=r["full_name"],
        role=Role(r["role"]),
        daily_rate=to_decimal_or_none(r.get("daily_rate")),
        is_active=bool(r.get("is_active", 1)),
    )


class MySQLWorkerRepository(WorkerRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, worker_id: int) -> Optional[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT worker_id, full_name, role, daily_rate, is_active
                FROM workers
                WHERE worker_id=%s
                """,
                (int(worker_id),),
            )
            r = fetchone(cur)
            return _to_worker(r) if r else None

    def list_active(self) -> Sequence[Worker]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT worker_id, full_name, role, daily_rate, is_active
                FROM workers
                WHERE is_active=1
                ORDER BY full_name ASC
                """
            )
            return [_to_worker(r) for r in fetchall(cur)]

    def list_sites(self) -> Sequence[Site]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT site_id, name FROM sites WHERE is_active=1 ORDER BY name ASC")
            return [Site(site_id=int(r["site_id"]), name=r["name"]) for r in fetchall(cur)]
