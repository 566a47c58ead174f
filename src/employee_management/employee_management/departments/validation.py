"""Department consistency checks.

Resolves the display name of an employee's department and classifies every
inconsistency it meets (missing employee, null link, dangling link, corrupt id,
blank name). Classifications are logged and forwarded to the metrics sink.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Union

from ..core.constants import DEFAULT_DEPARTMENT_NAME
from ..core.enums import DepartmentIssue
from ..core.exceptions import DepartmentDataError
from ..employees.model import Employee
from ..metrics.sink import MetricsSink, NullMetrics

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DepartmentCheck:
    department_name: str
    issue: Optional[DepartmentIssue] = None

    @property
    def is_consistent(self) -> bool:
        return self.issue is None


class DepartmentValidator:
    def __init__(self, *, metrics: Optional[MetricsSink] = None):
        self._metrics = metrics or NullMetrics()

    def check(self, employee: Optional[Employee], *, context: str = "") -> DepartmentCheck:
        """Resolve the department name for display.

        Raises DepartmentDataError only when a resolved department carries a
        non-positive id; every other inconsistency yields the fallback name.
        """
        if employee is None:
            self.record_issue(None, None, DepartmentIssue.NULL_EMPLOYEE_REFERENCE, context)
            return DepartmentCheck(DEFAULT_DEPARTMENT_NAME, DepartmentIssue.NULL_EMPLOYEE_REFERENCE)

        department = employee.department
        if department is None:
            if employee.dept_id is None:
                issue = DepartmentIssue.NULL_DEPARTMENT_REFERENCE
            else:
                issue = DepartmentIssue.DANGLING_DEPARTMENT_REFERENCE
            self.record_issue(employee.emp_id, employee.dept_id, issue, context)
            return DepartmentCheck(DEFAULT_DEPARTMENT_NAME, issue)

        if department.dept_id is None or department.dept_id <= 0:
            self.record_issue(employee.emp_id, department.dept_id, DepartmentIssue.INVALID_DEPARTMENT_ID, context)
            raise DepartmentDataError(
                DepartmentIssue.INVALID_DEPARTMENT_ID.value,
                employee_id=employee.emp_id,
                department_id=department.dept_id,
                message=f"Invalid department ID: {department.dept_id}",
            )

        name = (department.dept_name or "").strip()
        if not name:
            self.record_issue(employee.emp_id, department.dept_id, DepartmentIssue.EMPTY_DEPARTMENT_NAME, context)
            return DepartmentCheck(DEFAULT_DEPARTMENT_NAME, DepartmentIssue.EMPTY_DEPARTMENT_NAME)

        return DepartmentCheck(name)

    def safe_department_name(self, employee: Optional[Employee], context: str = "") -> str:
        """Like check(), but never raises: corruption also maps to the fallback name."""
        try:
            return self.check(employee, context=context).department_name
        except DepartmentDataError as e:
            logger.error("Department data error in %s: %s", context or "unknown context", e)
            return DEFAULT_DEPARTMENT_NAME

    def is_department_data_available(self, employee: Optional[Employee]) -> bool:
        if employee is None or employee.department is None:
            return False
        department = employee.department
        return (
            department.dept_id is not None
            and department.dept_id > 0
            and bool((department.dept_name or "").strip())
        )

    def is_valid_department_reference(self, dept_id: Optional[int]) -> bool:
        """Format check only; existence is the department service's concern."""
        valid = dept_id is not None and dept_id > 0
        if not valid:
            logger.debug("Invalid department ID: %s", dept_id)
        return valid

    def record_issue(
        self,
        employee_id: Optional[int],
        department_id: Optional[int],
        issue: Union[DepartmentIssue, str],
        context: str = "",
    ) -> None:
        issue_name = getattr(issue, "value", str(issue))
        dept_text = "null" if department_id is None else department_id
        logger.warning(
            "DEPARTMENT_ISSUE: Employee=%s, Department=%s, Issue=%s",
            employee_id,
            dept_text,
            issue_name,
            extra={
                "employee_id": employee_id,
                "department_id": department_id,
                "department_issue": issue_name,
                "issue_context": context,
            },
        )
        self._metrics.record_department_issue(issue_name)
