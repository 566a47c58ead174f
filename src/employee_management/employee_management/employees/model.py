from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from ..departments.model import Department


@dataclass(frozen=True)
class Employee:
    """Employee row with its department resolved.

    `dept_id` is the stored link; `department` is None when the link is null
    or does not resolve to a department row (dangling).
    """

    emp_id: int
    emp_name: str
    phone_no: str
    salary: Decimal
    address: str
    joining_date: date
    email: Optional[str] = None
    role: Optional[str] = None
    manager_id: Optional[int] = None
    gender: Optional[str] = None
    dept_id: Optional[int] = None
    department: Optional[Department] = None

    @property
    def has_dangling_department(self) -> bool:
        return self.dept_id is not None and self.department is None


@dataclass(frozen=True)
class NewEmployee:
    emp_name: str
    phone_no: str
    salary: Decimal
    address: str
    joining_date: date
    email: Optional[str] = None
    role: Optional[str] = None
    manager_id: Optional[int] = None
    gender: Optional[str] = None
    dept_id: Optional[int] = None


@dataclass(frozen=True)
class EmployeeUpdate:
    """Partial update: fields left as None are not changed.

    An empty string for `email`, `role` or `gender` clears the stored value.
    """

    emp_name: Optional[str] = None
    phone_no: Optional[str] = None
    email: Optional[str] = None
    role: Optional[str] = None
    manager_id: Optional[int] = None
    salary: Optional[Decimal] = None
    address: Optional[str] = None
    joining_date: Optional[date] = None
    gender: Optional[str] = None
    dept_id: Optional[int] = None

    def is_empty(self) -> bool:
        return all(getattr(self, f) is None for f in self.__dataclass_fields__)
