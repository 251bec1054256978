from __future__ import annotations

from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional

from ..common.money import to_decimal
from .connection import DatabaseConnection


@contextmanager
def db_cursor(conn_factory: DatabaseConnection, *, dictionary: bool = True):
    conn = conn_factory.connect()
    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def to_decimal_or_none(value: Any) -> Optional[Decimal]:
    """DECIMAL columns come back as Decimal; NULL stays None."""
    if value is None:
        return None
    return to_decimal(value)


def in_clause(values: Iterable[Any]) -> tuple[str, list[Any]]:
    """Build ``IN (%s, %s, ...)`` placeholders for a non-empty iterable."""
    params = list(values)
    if not params:
        raise ValueError("in_clause requires at least one value")
    return "(" + ", ".join(["%s"] * len(params)) + ")", params
