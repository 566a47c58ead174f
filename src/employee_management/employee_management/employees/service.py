from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import coerce_date, now_local
from ..common.validators import (
    require_email,
    require_max_length,
    require_non_empty,
    require_not_future,
    require_person_name,
    require_phone,
    require_positive_amount,
)
from ..core.constants import (
    DEFAULT_LIST_LIMIT,
    MAX_EMPLOYEE_ADDRESS_LENGTH,
    MAX_EMPLOYEE_EMAIL_LENGTH,
    MAX_EMPLOYEE_GENDER_LENGTH,
    MAX_EMPLOYEE_NAME_LENGTH,
    MAX_EMPLOYEE_ROLE_LENGTH,
)
from ..core.enums import DepartmentIssue
from ..core.exceptions import (
    ConflictError,
    DepartmentDataError,
    DepartmentNotFoundError,
    DuplicateRecordError,
    EmployeeNotFoundError,
    ValidationError,
)
from ..departments.service import DepartmentService
from ..departments.validation import DepartmentValidator
from .model import Employee, EmployeeUpdate, NewEmployee
from .repository import EmployeeRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employees (admin screens and the employee's own settings)."""

    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentService,
        validator: DepartmentValidator,
        *,
        today: Optional[Callable[[], date]] = None,
    ):
        self._employees = employees
        self._departments = departments
        self._validator = validator
        self._today = today or (lambda: now_local().date())

    # -------- queries --------
    def list_employees(self, *, limit: int = DEFAULT_LIST_LIMIT) -> list[Employee]:
        return list(self._employees.list_all(limit=limit))

    def count_employees(self) -> int:
        return self._employees.count()

    def get_employee(self, emp_id: int) -> Employee:
        emp = self._employees.get_by_id(int(emp_id))
        if not emp:
            raise EmployeeNotFoundError(emp_id)
        return emp

    def is_email_available(self, email: str) -> bool:
        email = require_email(email)
        available = self._employees.get_by_email(email) is None
        logger.info("Email availability check for %s: %s", email, "available" if available else "taken")
        return available

    def is_phone_available(self, phone_no: str) -> bool:
        phone_no = require_phone(phone_no)
        available = self._employees.get_by_phone(phone_no) is None
        logger.info("Phone availability check for %s: %s", phone_no, "available" if available else "taken")
        return available

    # -------- validation helpers --------
    @staticmethod
    def _name(value: Optional[str]) -> str:
        name = require_non_empty(value, "Employee name")
        return require_max_length(name, "Employee name", MAX_EMPLOYEE_NAME_LENGTH)

    @staticmethod
    def _address(value: Optional[str]) -> str:
        address = require_non_empty(value, "Address")
        return require_max_length(address, "Address", MAX_EMPLOYEE_ADDRESS_LENGTH)

    @staticmethod
    def _optional(value: Optional[str], field_name: str, max_len: int) -> str:
        """Stripped text, "" when blank."""
        return require_max_length((value or "").strip(), field_name, max_len)

    @classmethod
    def _email(cls, value: Optional[str]) -> str:
        email = cls._optional(value, "Email", MAX_EMPLOYEE_EMAIL_LENGTH)
        return require_email(email) if email else ""

    def _clean_new(self, new: NewEmployee) -> NewEmployee:
        joining = coerce_date(new.joining_date, "Joining date")
        require_not_future(joining, "Joining date", today=self._today())
        return replace(
            new,
            emp_name=self._name(new.emp_name),
            phone_no=require_phone(new.phone_no),
            email=self._email(new.email) or None,
            role=self._optional(new.role, "Role", MAX_EMPLOYEE_ROLE_LENGTH) or None,
            salary=require_positive_amount(new.salary, "Salary"),
            address=self._address(new.address),
            joining_date=joining,
            gender=self._optional(new.gender, "Gender", MAX_EMPLOYEE_GENDER_LENGTH) or None,
        )

    def _ensure_unique(self, *, email: Optional[str], phone_no: Optional[str], exclude_emp_id: Optional[int] = None) -> None:
        if email:
            other = self._employees.get_by_email(email)
            if other and other.emp_id != exclude_emp_id:
                raise ConflictError(f"Email already registered: {email}")
        if phone_no:
            other = self._employees.get_by_phone(phone_no)
            if other and other.emp_id != exclude_emp_id:
                raise ConflictError(f"Phone number already registered: {phone_no}")

    def _require_department_reference(self, emp_id: Optional[int], dept_id: int, context: str) -> None:
        if not self._validator.is_valid_department_reference(dept_id):
            self._validator.record_issue(emp_id, dept_id, DepartmentIssue.INVALID_DEPARTMENT_ID_FORMAT, context)
            raise DepartmentDataError(
                DepartmentIssue.INVALID_DEPARTMENT_ID_FORMAT.value,
                employee_id=emp_id,
                department_id=dept_id,
                message="Invalid department ID format",
            )

    def _resolve_department_for_add(self, dept_id: Optional[int]) -> Optional[int]:
        if dept_id is None:
            return None
        self._require_department_reference(None, dept_id, "add_employee")
        if self._departments.find_department(dept_id) is None:
            logger.warning("Department not found with ID: %s, proceeding without department assignment", dept_id)
            self._validator.record_issue(None, dept_id, DepartmentIssue.DEPARTMENT_NOT_FOUND_ON_ADD, "add_employee")
            return None
        return int(dept_id)

    # -------- commands --------
    def add_employee(self, new: NewEmployee, dept_id: Optional[int] = None) -> Employee:
        resolved = self._resolve_department_for_add(dept_id if dept_id is not None else new.dept_id)
        clean = replace(self._clean_new(new), dept_id=resolved)
        self._ensure_unique(email=clean.email, phone_no=clean.phone_no)

        try:
            emp_id = self._employees.create(clean)
        except DuplicateRecordError as e:
            raise ConflictError("Email or phone number already registered") from e

        employee = self.get_employee(emp_id)
        self._validator.safe_department_name(employee, "add_employee")
        logger.info("Added employee %s (id=%s)", employee.emp_name, emp_id)
        return employee

    def add_employees(self, employees: Sequence[NewEmployee]) -> list[Employee]:
        """Validate every row first, then store them all in one transaction."""
        cleaned: list[NewEmployee] = []
        seen_emails: set[str] = set()
        seen_phones: set[str] = set()
        for new in employees:
            clean = replace(self._clean_new(new), dept_id=self._resolve_department_for_add(new.dept_id))
            if clean.phone_no in seen_phones or (clean.email and clean.email in seen_emails):
                raise ConflictError(f"Duplicate email or phone number in batch: {clean.emp_name}")
            self._ensure_unique(email=clean.email, phone_no=clean.phone_no)
            seen_phones.add(clean.phone_no)
            if clean.email:
                seen_emails.add(clean.email)
            cleaned.append(clean)

        if not cleaned:
            return []

        try:
            ids = self._employees.create_many(cleaned)
        except DuplicateRecordError as e:
            raise ConflictError("Email or phone number already registered") from e

        logger.info("Added %d employees", len(ids))
        return [self.get_employee(i) for i in ids]

    def update_employee(self, emp_id: int, changes: EmployeeUpdate) -> Employee:
        """Partial update; only fields set on `changes` are written."""
        current = self.get_employee(emp_id)
        if changes.is_empty():
            return current

        values = {}
        if changes.emp_name is not None:
            values["emp_name"] = self._name(changes.emp_name)
        if changes.phone_no is not None:
            values["phone_no"] = require_phone(changes.phone_no)
        if changes.email is not None:
            values["email"] = self._email(changes.email)
        if changes.role is not None:
            values["role"] = self._optional(changes.role, "Role", MAX_EMPLOYEE_ROLE_LENGTH)
        if changes.salary is not None:
            values["salary"] = require_positive_amount(changes.salary, "Salary")
        if changes.address is not None:
            values["address"] = self._address(changes.address)
        if changes.joining_date is not None:
            joining = coerce_date(changes.joining_date, "Joining date")
            values["joining_date"] = require_not_future(joining, "Joining date", today=self._today())
        if changes.gender is not None:
            values["gender"] = self._optional(changes.gender, "Gender", MAX_EMPLOYEE_GENDER_LENGTH)
        if changes.dept_id is not None:
            self._require_department_reference(current.emp_id, changes.dept_id, "update_employee")
            values["dept_id"] = self._departments.get_department(changes.dept_id).dept_id
        if changes.manager_id is not None:
            if int(changes.manager_id) == current.emp_id:
                raise ValidationError("An employee cannot manage themselves")
            values["manager_id"] = self.get_employee(changes.manager_id).emp_id

        clean = replace(changes, **values)
        self._ensure_unique(email=clean.email, phone_no=clean.phone_no, exclude_emp_id=current.emp_id)

        try:
            ok = self._employees.update(current.emp_id, clean)
        except DuplicateRecordError as e:
            raise ConflictError("Email or phone number already registered") from e
        if not ok:
            raise EmployeeNotFoundError(emp_id)

        logger.info("Updated employee id=%s fields=%s", emp_id, sorted(values))
        return self.get_employee(emp_id)

    def update_settings(self, emp_id: int, *, emp_name: Optional[str] = None, phone_no: Optional[str] = None) -> Employee:
        """Employee self-service: change display name and/or phone number."""
        if emp_name is None and phone_no is None:
            raise ValidationError("Provide a name or a phone number to update")
        name = require_person_name(emp_name) if emp_name is not None else None
        phone = require_phone(phone_no) if phone_no is not None else None
        return self.update_employee(emp_id, EmployeeUpdate(emp_name=name, phone_no=phone))

    def delete_employee(self, emp_id: int) -> None:
        if not self._employees.delete(int(emp_id)):
            raise EmployeeNotFoundError(emp_id)
        logger.info("Deleted employee id=%s", emp_id)

    def assign_department(self, emp_id: int, dept_id: Optional[int]) -> Employee:
        if dept_id is not None:
            self._require_department_reference(int(emp_id), dept_id, "assign_department")
            if self._departments.find_department(dept_id) is None:
                raise DepartmentNotFoundError(dept_id)
        if not self._employees.set_department(int(emp_id), dept_id):
            self.get_employee(emp_id)
        return self.get_employee(emp_id)
