from __future__ import annotations

from dataclasses import fields, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest

from src.employee_management.employee_management.core.enums import LeaveStatus
from src.employee_management.employee_management.core.exceptions import DataAccessError, DuplicateRecordError
from src.employee_management.employee_management.departments.model import Department
from src.employee_management.employee_management.departments.service import DepartmentService
from src.employee_management.employee_management.departments.validation import DepartmentValidator
from src.employee_management.employee_management.employees.model import Employee, NewEmployee
from src.employee_management.employee_management.leaves.model import Leave
from src.employee_management.employee_management.metrics.sink import InMemoryMetrics
from src.employee_management.employee_management.payroll.model import Payslip


class FakeDepartmentRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Department] = {}
        self.list_calls = 0
        self.get_calls = 0
        self.fail = False

    def _check(self):
        if self.fail:
            raise DataAccessError("database unavailable")

    def add(self, name: Optional[str], description: Optional[str] = None, *, dept_id: Optional[int] = None) -> Department:
        dept_id = self._next_id if dept_id is None else dept_id
        self._next_id = max(self._next_id, dept_id) + 1
        self.rows[dept_id] = Department(dept_id=dept_id, dept_name=name, description=description)
        return self.rows[dept_id]

    def list_all(self):
        self._check()
        self.list_calls += 1
        return sorted(self.rows.values(), key=lambda d: d.dept_name or "")

    def get_by_id(self, dept_id):
        self._check()
        self.get_calls += 1
        return self.rows.get(int(dept_id))

    def get_by_name(self, dept_name):
        self._check()
        for d in self.rows.values():
            if (d.dept_name or "").lower() == dept_name.lower():
                return d
        return None

    def create(self, *, dept_name, description):
        self._check()
        if self.get_by_name(dept_name):
            raise DuplicateRecordError(f"Duplicate entry '{dept_name}'")
        return self.add(dept_name, description).dept_id

    def update(self, *, dept_id, dept_name, description):
        self._check()
        if int(dept_id) not in self.rows:
            return False
        self.rows[int(dept_id)] = Department(dept_id=int(dept_id), dept_name=dept_name, description=description)
        return True

    def delete(self, dept_id):
        self._check()
        return self.rows.pop(int(dept_id), None) is not None

    def count(self):
        self._check()
        return len(self.rows)


class FakeEmployeeRepo:
    """Stores raw rows; the department is resolved on every read, like the SQL LEFT JOIN."""

    def __init__(self, departments: FakeDepartmentRepo):
        self._departments = departments
        self._next_id = 1000
        self.rows: dict[int, Employee] = {}
        self.fail = False

    def _check(self):
        if self.fail:
            raise DataAccessError("database unavailable")

    def _resolve(self, e: Employee) -> Employee:
        dept = self._departments.rows.get(e.dept_id) if e.dept_id is not None else None
        return replace(e, department=dept)

    def add(self, *, emp_name="Asha Verma", phone_no=None, salary="50000", role=None, dept_id=None, email=None) -> Employee:
        emp_id = self._next_id
        self._next_id += 1
        self.rows[emp_id] = Employee(
            emp_id=emp_id,
            emp_name=emp_name,
            phone_no=phone_no or f"9{emp_id:09d}",
            salary=Decimal(str(salary)),
            address="Pune",
            joining_date=date(2024, 1, 1),
            email=email,
            role=role,
            dept_id=dept_id,
        )
        return self._resolve(self.rows[emp_id])

    def list_all(self, *, limit=None):
        self._check()
        rows = [self._resolve(e) for e in sorted(self.rows.values(), key=lambda e: e.emp_id)]
        return rows[:limit] if limit is not None else rows

    def get_by_id(self, emp_id):
        self._check()
        e = self.rows.get(int(emp_id))
        return self._resolve(e) if e else None

    def get_by_email(self, email):
        self._check()
        return next((self._resolve(e) for e in self.rows.values() if e.email == email), None)

    def get_by_phone(self, phone_no):
        self._check()
        return next((self._resolve(e) for e in self.rows.values() if e.phone_no == phone_no), None)

    def count(self):
        self._check()
        return len(self.rows)

    def create(self, employee: NewEmployee):
        self._check()
        emp_id = self._next_id
        self._next_id += 1
        values = {f.name: getattr(employee, f.name) for f in fields(NewEmployee)}
        self.rows[emp_id] = Employee(emp_id=emp_id, **values)
        return emp_id

    def create_many(self, employees):
        return [self.create(e) for e in employees]

    def update(self, emp_id, changes):
        self._check()
        current = self.rows.get(int(emp_id))
        if not current:
            return False
        values = {f.name: getattr(changes, f.name) for f in fields(changes) if getattr(changes, f.name) is not None}
        values.update({k: None for k in ("email", "role", "gender") if values.get(k) == ""})
        self.rows[int(emp_id)] = replace(current, **values)
        return True

    def set_department(self, emp_id, dept_id):
        self._check()
        current = self.rows.get(int(emp_id))
        if not current:
            return False
        self.rows[int(emp_id)] = replace(current, dept_id=dept_id)
        return True

    def delete(self, emp_id):
        self._check()
        return self.rows.pop(int(emp_id), None) is not None


class FakeLeaveRepo:
    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Leave] = {}
        self.fail = False

    def create(self, *, emp_id, from_date, to_date, reason):
        leave_id = self._next_id
        self._next_id += 1
        self.rows[leave_id] = Leave(
            leave_id=leave_id,
            emp_id=int(emp_id),
            from_date=from_date,
            to_date=to_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            created_at=datetime(2026, 10, 1, 9, 0, 0),
        )
        return leave_id

    def get_by_id(self, leave_id):
        return self.rows.get(int(leave_id))

    def list_leaves(self, *, status=None, emp_id=None, limit=200):
        rows = [
            r
            for r in self.rows.values()
            if (status is None or r.status == status) and (emp_id is None or r.emp_id == int(emp_id))
        ]
        return sorted(rows, key=lambda r: r.leave_id, reverse=True)[:limit]

    def count_by_status(self, status):
        if self.fail:
            raise DataAccessError("database unavailable")
        return sum(1 for r in self.rows.values() if r.status == status)

    def decide(self, *, leave_id, status):
        leave = self.rows.get(int(leave_id))
        if not leave or leave.status != LeaveStatus.PENDING:
            return False
        self.rows[int(leave_id)] = replace(leave, status=status, decided_at=datetime(2026, 10, 2, 9, 0, 0))
        return True


class FakePayslipRepo:
    """Enforces the (emp_id, month, year) unique key like the payslips table."""

    def __init__(self):
        self._next_id = 1
        self.rows: dict[int, Payslip] = {}
        self.create_calls = 0
        # Called inside create() before the key check; lets tests inject a competing insert.
        self.before_insert = None

    def _insert(self, *, emp_id, month, year, breakdown):
        for p in self.rows.values():
            if (p.emp_id, p.month, p.year) == (int(emp_id), month, year):
                raise DuplicateRecordError(f"Duplicate entry '{emp_id}-{month}-{year}'")
        payslip_id = self._next_id
        self._next_id += 1
        self.rows[payslip_id] = Payslip(
            payslip_id=payslip_id,
            emp_id=int(emp_id),
            month=month,
            year=year,
            breakdown=breakdown,
            created_at=datetime(2026, 10, 1, 9, 0, payslip_id % 60),
        )
        return payslip_id

    def get_latest(self, emp_id):
        rows = [p for p in self.rows.values() if p.emp_id == int(emp_id)]
        return max(rows, key=lambda p: p.payslip_id) if rows else None

    def get_for_period(self, *, emp_id, month, year):
        return next(
            (p for p in self.rows.values() if (p.emp_id, p.month, p.year) == (int(emp_id), month, year)),
            None,
        )

    def list_for_employee(self, emp_id):
        return sorted((p for p in self.rows.values() if p.emp_id == int(emp_id)), key=lambda p: p.payslip_id, reverse=True)

    def create(self, *, emp_id, month, year, breakdown):
        self.create_calls += 1
        if self.before_insert:
            hook, self.before_insert = self.before_insert, None
            hook()
        return self._insert(emp_id=emp_id, month=month, year=year, breakdown=breakdown)


@pytest.fixture
def metrics():
    return InMemoryMetrics()


@pytest.fixture
def departments_repo():
    return FakeDepartmentRepo()


@pytest.fixture
def employees_repo(departments_repo):
    return FakeEmployeeRepo(departments_repo)


@pytest.fixture
def leaves_repo():
    return FakeLeaveRepo()


@pytest.fixture
def payslips_repo():
    return FakePayslipRepo()


@pytest.fixture
def validator(metrics):
    return DepartmentValidator(metrics=metrics)


@pytest.fixture
def department_service(departments_repo, metrics):
    return DepartmentService(departments_repo, metrics=metrics)
