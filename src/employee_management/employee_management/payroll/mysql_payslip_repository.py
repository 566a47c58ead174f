from __future__ import annotations

from dataclasses import fields
from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import as_decimal, db_cursor, fetchall, fetchone
from .model import Payslip, PayslipBreakdown
from .repository import PayslipRepository

# Column names match PayslipBreakdown attribute names.
_AMOUNT_COLUMNS = tuple(f.name for f in fields(PayslipBreakdown))

_SELECT = (
    "SELECT payslip_id, emp_id, payslip_month, payslip_year, created_at, "
    + ", ".join(_AMOUNT_COLUMNS)
    + " FROM payslips"
)

_INSERT_COLUMNS = ("emp_id", "payslip_month", "payslip_year") + _AMOUNT_COLUMNS
_INSERT = (
    f"INSERT INTO payslips({', '.join(_INSERT_COLUMNS)}) "
    f"VALUES({', '.join(['%s'] * len(_INSERT_COLUMNS))})"
)


def _to_payslip(r: dict) -> Payslip:
    return Payslip(
        payslip_id=int(r["payslip_id"]),
        emp_id=int(r["emp_id"]),
        month=r["payslip_month"],
        year=str(r["payslip_year"]),
        breakdown=PayslipBreakdown(**{col: as_decimal(r[col]) for col in _AMOUNT_COLUMNS}),
        created_at=r.get("created_at"),
    )


class MySQLPayslipRepository(PayslipRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_latest(self, emp_id: int) -> Optional[Payslip]:
        with db_cursor(self._conn_factory, operation="payslips.get_latest") as (_, cur):
            cur.execute(
                _SELECT + " WHERE emp_id=%s ORDER BY created_at DESC, payslip_id DESC LIMIT 1",
                (int(emp_id),),
            )
            row = fetchone(cur)
            return _to_payslip(row) if row else None

    def get_for_period(self, *, emp_id: int, month: str, year: str) -> Optional[Payslip]:
        with db_cursor(self._conn_factory, operation="payslips.get_for_period") as (_, cur):
            cur.execute(
                _SELECT + " WHERE emp_id=%s AND payslip_month=%s AND payslip_year=%s",
                (int(emp_id), month, year),
            )
            row = fetchone(cur)
            return _to_payslip(row) if row else None

    def list_for_employee(self, emp_id: int) -> Sequence[Payslip]:
        with db_cursor(self._conn_factory, operation="payslips.list_for_employee") as (_, cur):
            cur.execute(
                _SELECT + " WHERE emp_id=%s ORDER BY created_at DESC, payslip_id DESC",
                (int(emp_id),),
            )
            return [_to_payslip(r) for r in fetchall(cur)]

    def create(self, *, emp_id: int, month: str, year: str, breakdown: PayslipBreakdown) -> int:
        amounts = breakdown.as_dict()
        params = (int(emp_id), month, year) + tuple(amounts[col] for col in _AMOUNT_COLUMNS)
        with db_cursor(self._conn_factory, operation="payslips.create") as (_, cur):
            cur.execute(_INSERT, params)
            return int(cur.lastrowid)
