from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Department
from .repository import DepartmentRepository


def _to_department(r: dict) -> Department:
    return Department(dept_id=int(r["dept_id"]), dept_name=r["dept_name"], description=r.get("description"))


class MySQLDepartmentRepository(DepartmentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Department]:
        with db_cursor(self._conn_factory, operation="departments.list_all") as (_, cur):
            cur.execute("SELECT dept_id, dept_name, description FROM departments ORDER BY dept_name")
            return [_to_department(r) for r in fetchall(cur)]

    def get_by_id(self, dept_id: int) -> Optional[Department]:
        with db_cursor(self._conn_factory, operation="departments.get_by_id") as (_, cur):
            cur.execute(
                "SELECT dept_id, dept_name, description FROM departments WHERE dept_id=%s",
                (int(dept_id),),
            )
            row = fetchone(cur)
            return _to_department(row) if row else None

    def get_by_name(self, dept_name: str) -> Optional[Department]:
        with db_cursor(self._conn_factory, operation="departments.get_by_name") as (_, cur):
            cur.execute(
                "SELECT dept_id, dept_name, description FROM departments WHERE LOWER(dept_name)=LOWER(%s) LIMIT 1",
                (dept_name,),
            )
            row = fetchone(cur)
            return _to_department(row) if row else None

    def create(self, *, dept_name: str, description: Optional[str]) -> int:
        with db_cursor(self._conn_factory, operation="departments.create") as (_, cur):
            cur.execute(
                "INSERT INTO departments(dept_name, description) VALUES(%s,%s)",
                (dept_name, description),
            )
            return int(cur.lastrowid)

    def update(self, *, dept_id: int, dept_name: str, description: Optional[str]) -> bool:
        with db_cursor(self._conn_factory, operation="departments.update") as (_, cur):
            cur.execute(
                "UPDATE departments SET dept_name=%s, description=%s WHERE dept_id=%s",
                (dept_name, description, int(dept_id)),
            )
            return cur.rowcount > 0

    def delete(self, dept_id: int) -> bool:
        # employees.dept_id is ON DELETE SET NULL
        with db_cursor(self._conn_factory, operation="departments.delete") as (_, cur):
            cur.execute("DELETE FROM departments WHERE dept_id=%s", (int(dept_id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory, operation="departments.count") as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM departments")
            row = fetchone(cur)
            return int(row["total"]) if row else 0
