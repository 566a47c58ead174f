"""Repair of employee/department links.

Creates the standard departments, re-homes employees whose department link is
null or dangling (by role keywords), and reports on relationship health.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Sequence

from ..core.constants import NO_DEPARTMENT_BUCKET
from ..core.exceptions import DataAccessError
from ..employees.repository import EmployeeRepository
from .assignment import DEFAULT_DEPARTMENTS, ROLE_RULES, RoleRule, assign_department_by_role, default_department
from .service import DepartmentService

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ReconciliationResult:
    success: bool
    message: str
    departments_created: int = 0
    employees_updated: int = 0
    errors: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class RelationshipReport:
    valid: bool
    errors: list[str]
    total_employees: int = 0
    employees_without_department: int = 0
    employees_with_invalid_department: int = 0
    total_departments: int = 0
    distribution: dict[str, int] = field(default_factory=dict)


class DepartmentReconciliationService:
    def __init__(
        self,
        employees: EmployeeRepository,
        departments: DepartmentService,
        *,
        default_departments: Sequence[tuple[str, str]] = DEFAULT_DEPARTMENTS,
        rules: Sequence[RoleRule] = ROLE_RULES,
    ):
        self._employees = employees
        self._departments = departments
        self._default_departments = tuple(default_departments)
        self._rules = tuple(rules)

    def populate_default_departments(self) -> int:
        logger.info("Populating default departments...")
        created = self._departments.ensure_departments(self._default_departments)
        logger.info("Created %d new departments", created)
        return created

    def reassign_orphaned_employees(self) -> int:
        """Give a department to every employee whose link is null or dangling."""
        departments = self._departments.list_departments()
        if default_department(departments) is None:
            logger.error("No departments available for assignment")
            return 0

        known_ids = {d.dept_id for d in departments}
        updated = 0
        for emp in self._employees.list_all():
            if emp.department is not None and emp.department.dept_id in known_ids:
                continue
            target = assign_department_by_role(emp.role, departments, self._rules)
            if target is None:
                continue
            if self._employees.set_department(emp.emp_id, target.dept_id):
                updated += 1
                logger.info("Updated employee %s with department %s", emp.emp_name, target.dept_name)

        logger.info("Updated %d employees with proper department assignments", updated)
        return updated

    def employee_distribution(self) -> dict[str, int]:
        """Department name -> employee count, plus a bucket for unassigned employees."""
        departments = self._departments.list_departments()
        employees = self._employees.list_all()

        summary = {d.dept_name or "": 0 for d in departments}
        by_id = {d.dept_id: d.dept_name or "" for d in departments}
        without = 0
        for emp in employees:
            dept_id = emp.department.dept_id if emp.department is not None else None
            if dept_id in by_id:
                summary[by_id[dept_id]] += 1
            else:
                without += 1
        if without:
            summary[NO_DEPARTMENT_BUCKET] = without
        return summary

    def validate_relationships(self) -> RelationshipReport:
        logger.info("Validating employee-department relationships...")
        try:
            employees = list(self._employees.list_all())
            departments = self._departments.list_departments()
            known_ids = {d.dept_id for d in departments}

            without = sum(1 for e in employees if e.dept_id is None)
            invalid = sum(
                1
                for e in employees
                if e.dept_id is not None and (e.department is None or e.department.dept_id not in known_ids)
            )

            errors: list[str] = []
            if without:
                errors.append(f"Found {without} employees without department assignment")
            if invalid:
                errors.append(f"Found {invalid} employees with invalid department references")

            report = RelationshipReport(
                valid=not errors,
                errors=errors,
                total_employees=len(employees),
                employees_without_department=without,
                employees_with_invalid_department=invalid,
                total_departments=len(departments),
                distribution=self.employee_distribution(),
            )
        except DataAccessError as e:
            logger.error("Error during validation: %s", e)
            return RelationshipReport(valid=False, errors=[f"Validation failed: {e}"])

        logger.info("Validation completed. Valid: %s, Errors: %d", report.valid, len(report.errors))
        return report

    def reconcile(self) -> ReconciliationResult:
        """Create default departments, fix orphaned employees, then validate."""
        logger.info("Starting department data migration...")
        try:
            created = self.populate_default_departments()
            updated = self.reassign_orphaned_employees()
        except DataAccessError as e:
            logger.error("Error during department migration: %s", e)
            return ReconciliationResult(False, "Migration failed", errors=[f"Migration failed: {e}"])

        report = self.validate_relationships()
        if report.valid:
            message = "Migration completed successfully"
        else:
            message = "Migration completed with validation warnings"
        logger.info("%s: created=%d updated=%d", message, created, updated)
        return ReconciliationResult(
            success=report.valid,
            message=message,
            departments_created=created,
            employees_updated=updated,
            errors=list(report.errors),
        )
