from __future__ import annotations

from dataclasses import fields
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from ..departments.model import Department
from .model import Employee, EmployeeUpdate, NewEmployee
from .repository import EmployeeRepository

_SELECT = """
    SELECT e.emp_id, e.emp_name, e.phone_no, e.email, e.role, e.manager_id, e.salary,
           e.address, e.joining_date, e.gender, e.dept_id,
           d.dept_id AS d_dept_id, d.dept_name AS d_dept_name, d.description AS d_description
    FROM employees e
    LEFT JOIN departments d ON d.dept_id = e.dept_id
"""

_INSERT = """
    INSERT INTO employees(
        emp_name, phone_no, email, role, manager_id, salary, address, joining_date, gender, dept_id
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""

_UPDATABLE = tuple(f.name for f in fields(EmployeeUpdate))
# Blank values for these columns are written as NULL.
_CLEARABLE = frozenset({"email", "role", "gender"})


def _to_employee(r: dict) -> Employee:
    department = None
    if r.get("d_dept_id") is not None:
        department = Department(
            dept_id=int(r["d_dept_id"]),
            dept_name=r.get("d_dept_name"),
            description=r.get("d_description"),
        )
    return Employee(
        emp_id=int(r["emp_id"]),
        emp_name=r["emp_name"],
        phone_no=r["phone_no"],
        email=r.get("email"),
        role=r.get("role"),
        manager_id=int(r["manager_id"]) if r.get("manager_id") is not None else None,
        salary=as_decimal(r["salary"]),
        address=r["address"],
        joining_date=r["joining_date"],
        gender=r.get("gender"),
        dept_id=int(r["dept_id"]) if r.get("dept_id") is not None else None,
        department=department,
    )


def _insert_params(e: NewEmployee) -> tuple:
    return (
        e.emp_name,
        e.phone_no,
        e.email,
        e.role,
        e.manager_id,
        e.salary,
        e.address,
        e.joining_date,
        e.gender,
        e.dept_id,
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, limit: Optional[int] = None) -> Sequence[Employee]:
        sql = _SELECT + " ORDER BY e.emp_id"
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(limit),)
        with db_cursor(self._conn_factory, operation="employees.list_all") as (_, cur):
            cur.execute(sql, params)
            return [_to_employee(r) for r in fetchall(cur)]

    def get_by_id(self, emp_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory, operation="employees.get_by_id") as (_, cur):
            cur.execute(_SELECT + " WHERE e.emp_id=%s", (int(emp_id),))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory, operation="employees.get_by_email") as (_, cur):
            cur.execute(_SELECT + " WHERE e.email=%s LIMIT 1", (email,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def get_by_phone(self, phone_no: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory, operation="employees.get_by_phone") as (_, cur):
            cur.execute(_SELECT + " WHERE e.phone_no=%s LIMIT 1", (phone_no,))
            row = fetchone(cur)
            return _to_employee(row) if row else None

    def count(self) -> int:
        with db_cursor(self._conn_factory, operation="employees.count") as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees")
            row = fetchone(cur)
            return int(row["total"]) if row else 0

    def create(self, employee: NewEmployee) -> int:
        with db_cursor(self._conn_factory, operation="employees.create") as (_, cur):
            cur.execute(_INSERT, _insert_params(employee))
            return int(cur.lastrowid)

    def create_many(self, employees: Sequence[NewEmployee]) -> list[int]:
        ids: list[int] = []
        with db_cursor(self._conn_factory, operation="employees.create_many") as (_, cur):
            for e in employees:
                cur.execute(_INSERT, _insert_params(e))
                ids.append(int(cur.lastrowid))
        return ids

    def update(self, emp_id: int, changes: EmployeeUpdate) -> bool:
        assignments = []
        params: list = []
        for name in _UPDATABLE:
            value = getattr(changes, name)
            if value is not None:
                assignments.append(f"{name}=%s")
                params.append(None if name in _CLEARABLE and value == "" else value)
        if not assignments:
            return False

        params.append(int(emp_id))
        with db_cursor(self._conn_factory, operation="employees.update") as (_, cur):
            cur.execute(f"UPDATE employees SET {', '.join(assignments)} WHERE emp_id=%s", tuple(params))
            # MySQL reports 0 rows for a no-op update, so check existence separately.
            if cur.rowcount > 0:
                return True
            cur.execute("SELECT 1 AS found FROM employees WHERE emp_id=%s", (int(emp_id),))
            return fetchone(cur) is not None

    def set_department(self, emp_id: int, dept_id: Optional[int]) -> bool:
        with db_cursor(self._conn_factory, operation="employees.set_department") as (_, cur):
            cur.execute(
                "UPDATE employees SET dept_id=%s WHERE emp_id=%s",
                (int(dept_id) if dept_id is not None else None, int(emp_id)),
            )
            return cur.rowcount > 0

    def delete(self, emp_id: int) -> bool:
        # leaves and payslips cascade
        with db_cursor(self._conn_factory, operation="employees.delete") as (_, cur):
            cur.execute("DELETE FROM employees WHERE emp_id=%s", (int(emp_id),))
            return cur.rowcount > 0
