from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Employee, EmployeeUpdate, NewEmployee


class EmployeeRepository(Protocol):
    def list_all(self, *, limit: Optional[int] = None) -> Sequence[Employee]:
        raise NotImplementedError

    def get_by_id(self, emp_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_phone(self, phone_no: str) -> Optional[Employee]:
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def create(self, employee: NewEmployee) -> int:
        raise NotImplementedError

    def create_many(self, employees: Sequence[NewEmployee]) -> list[int]:
        """Insert all rows in one transaction."""

        raise NotImplementedError

    def update(self, emp_id: int, changes: EmployeeUpdate) -> bool:
        raise NotImplementedError

    def set_department(self, emp_id: int, dept_id: Optional[int]) -> bool:
        raise NotImplementedError

    def delete(self, emp_id: int) -> bool:
        raise NotImplementedError
