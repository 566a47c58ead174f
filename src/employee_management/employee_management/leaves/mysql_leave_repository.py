from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Leave
from .repository import LeaveRepository

_SELECT = """
    SELECT l.leave_id, l.emp_id, l.from_date, l.to_date, l.reason, l.status,
           l.created_at, l.decided_at, e.emp_name
    FROM leaves l
    JOIN employees e ON e.emp_id = l.emp_id
"""


def _to_leave(r: dict) -> Leave:
    return Leave(
        leave_id=int(r["leave_id"]),
        emp_id=int(r["emp_id"]),
        from_date=r["from_date"],
        to_date=r["to_date"],
        reason=r["reason"],
        status=LeaveStatus(r["status"]),
        created_at=r.get("created_at"),
        decided_at=r.get("decided_at"),
        emp_name=r.get("emp_name"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, emp_id: int, from_date: date, to_date: date, reason: str) -> int:
        with db_cursor(self._conn_factory, operation="leaves.create") as (_, cur):
            cur.execute(
                """
                INSERT INTO leaves(emp_id, from_date, to_date, reason, status)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(emp_id), from_date, to_date, reason, LeaveStatus.PENDING.value),
            )
            return int(cur.lastrowid)

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        with db_cursor(self._conn_factory, operation="leaves.get_by_id") as (_, cur):
            cur.execute(_SELECT + " WHERE l.leave_id=%s", (int(leave_id),))
            row = fetchone(cur)
            return _to_leave(row) if row else None

    def list_leaves(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        emp_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[Leave]:
        where = []
        params: list = []
        if status is not None:
            where.append("l.status=%s")
            params.append(status.value)
        if emp_id is not None:
            where.append("l.emp_id=%s")
            params.append(int(emp_id))

        sql = _SELECT
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " ORDER BY l.created_at DESC, l.leave_id DESC LIMIT %s"
        params.append(int(limit))

        with db_cursor(self._conn_factory, operation="leaves.list") as (_, cur):
            cur.execute(sql, tuple(params))
            return [_to_leave(r) for r in fetchall(cur)]

    def count_by_status(self, status: LeaveStatus) -> int:
        with db_cursor(self._conn_factory, operation="leaves.count_by_status") as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM leaves WHERE status=%s", (status.value,))
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def decide(self, *, leave_id: int, status: LeaveStatus) -> bool:
        with db_cursor(self._conn_factory, operation="leaves.decide") as (_, cur):
            cur.execute(
                """
                UPDATE leaves
                SET status=%s, decided_at=NOW()
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0
