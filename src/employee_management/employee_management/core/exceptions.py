from __future__ import annotations

from typing import Optional


class DomainError(Exception):
    """Base exception for business rule violations."""


class ValidationError(DomainError):
    """Raised when input data is invalid or violates domain rules."""


class ConflictError(DomainError):
    """Raised when a value must be unique but is already taken."""


class NotFoundError(DomainError):
    """Raised when a referenced record does not exist."""


class EmployeeNotFoundError(NotFoundError):
    def __init__(self, emp_id: int):
        super().__init__(f"Employee not found with ID: {emp_id}")
        self.emp_id = emp_id


class DepartmentNotFoundError(NotFoundError):
    def __init__(self, dept_id: int):
        super().__init__(f"Department not found with ID: {dept_id}")
        self.dept_id = dept_id


class LeaveNotFoundError(NotFoundError):
    def __init__(self, leave_id: int):
        super().__init__(f"Leave not found with ID: {leave_id}")
        self.leave_id = leave_id


class PayslipNotFoundError(NotFoundError):
    def __init__(self, emp_id: int, month: Optional[str] = None, year: Optional[str] = None):
        period = f" for period {month} {year}" if month and year else ""
        super().__init__(f"No payslip found for employee ID: {emp_id}{period}")
        self.emp_id = emp_id
        self.month = month
        self.year = year


class PayslipCalculationError(DomainError):
    """Raised when a payslip cannot be computed (e.g. non-positive salary)."""

    def __init__(self, message: str, *, emp_id: Optional[int] = None):
        if emp_id is not None:
            message = f"Payslip calculation failed for employee ID: {emp_id} - {message}"
        super().__init__(message)
        self.emp_id = emp_id


class DepartmentDataError(DomainError):
    """Structured department inconsistency (referential corruption)."""

    def __init__(
        self,
        issue: str,
        *,
        employee_id: Optional[int] = None,
        department_id: Optional[int] = None,
        message: Optional[str] = None,
    ):
        text = message or (
            f"Department data issue for employee ID: {employee_id}, "
            f"department ID: {department_id} - {issue}"
        )
        super().__init__(text)
        self.issue = issue
        self.employee_id = employee_id
        self.department_id = department_id


class DataAccessError(Exception):
    """Raised when the storage layer fails (connection lost, bad SQL, ...)."""


class DuplicateRecordError(ConflictError):
    """Raised by repositories when a unique constraint rejects an insert/update."""
