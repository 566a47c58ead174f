from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional, Union

from ..common.datetime_utils import current_period, normalize_period, now_local
from ..core.enums import DepartmentIssue
from ..core.exceptions import (
    DataAccessError,
    DomainError,
    DuplicateRecordError,
    EmployeeNotFoundError,
    PayslipCalculationError,
    PayslipNotFoundError,
)
from ..departments.validation import DepartmentValidator
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .calculator.base import PayslipCalculator
from .calculator.standard_calculator import StandardPayslipCalculator
from .model import BulkGenerationResult, Payslip, PayslipStatement
from .repository import PayslipRepository

logger = logging.getLogger(__name__)

MonthInput = Union[int, str]
YearInput = Union[int, str]


class PayslipService:
    """Use case: read and generate payslips.

    A payslip is generated at most once per (employee, month, year); later
    calls return the stored record unchanged even if the salary changed.
    """

    def __init__(
        self,
        payslips: PayslipRepository,
        employees: EmployeeRepository,
        validator: DepartmentValidator,
        *,
        calculator: Optional[PayslipCalculator] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._payslips = payslips
        self._employees = employees
        self._validator = validator
        self._calculator = calculator or StandardPayslipCalculator()
        self._clock = clock or now_local

    def _employee(self, emp_id: int) -> Employee:
        emp = self._employees.get_by_id(int(emp_id))
        if not emp:
            logger.warning("Employee not found with ID: %s", emp_id)
            raise EmployeeNotFoundError(emp_id)
        return emp

    def _statement(self, employee: Employee, payslip: Payslip, context: str) -> PayslipStatement:
        return PayslipStatement(
            emp_id=employee.emp_id,
            emp_name=employee.emp_name,
            department_name=self._validator.safe_department_name(employee, context),
            month=payslip.month,
            year=payslip.year,
            breakdown=payslip.breakdown,
            payslip_id=payslip.payslip_id,
            created_at=payslip.created_at,
        )

    # -------- queries --------
    def get_payslip(self, emp_id: int) -> PayslipStatement:
        """Latest payslip of the employee, generating the current period's one if none exists."""
        employee = self._employee(emp_id)
        payslip = self._payslips.get_latest(employee.emp_id)
        if payslip:
            logger.info("Found existing payslip for employee ID: %s", emp_id)
        else:
            month, year = current_period(self._clock())
            logger.info("No existing payslip found, generating new payslip for employee ID: %s", emp_id)
            payslip = self._generate(employee, month, year)
        return self._statement(employee, payslip, "payslip_fetch")

    def get_payslip_for_period(self, emp_id: int, month: MonthInput, year: YearInput) -> PayslipStatement:
        month, year = normalize_period(month, year)
        employee = self._employee(emp_id)
        payslip = self._generate(employee, month, year)
        return self._statement(employee, payslip, "payslip_period_fetch")

    def find_payslip(self, emp_id: int, month: MonthInput, year: YearInput) -> PayslipStatement:
        """Stored payslip for the period; never generates."""
        month, year = normalize_period(month, year)
        employee = self._employee(emp_id)
        payslip = self._payslips.get_for_period(emp_id=employee.emp_id, month=month, year=year)
        if not payslip:
            raise PayslipNotFoundError(emp_id, month, year)
        return self._statement(employee, payslip, "payslip_lookup")

    def list_payslips(self, emp_id: int) -> list[PayslipStatement]:
        employee = self._employee(emp_id)
        return [
            self._statement(employee, p, "payslip_history")
            for p in self._payslips.list_for_employee(employee.emp_id)
        ]

    # -------- commands --------
    def generate_payslip(self, emp_id: int, month: MonthInput, year: YearInput) -> Payslip:
        month, year = normalize_period(month, year)
        return self._generate(self._employee(emp_id), month, year)

    def _generate(self, employee: Employee, month: str, year: str) -> Payslip:
        department_name = self._validator.safe_department_name(employee, "payslip_generation")
        logger.debug(
            "Generating payslip for employee %s in department: %s for period %s %s",
            employee.emp_id,
            department_name,
            month,
            year,
        )

        existing = self._payslips.get_for_period(emp_id=employee.emp_id, month=month, year=year)
        if existing:
            logger.info("Payslip already exists for employee ID: %s for period: %s %s", employee.emp_id, month, year)
            return existing

        try:
            breakdown = self._calculator.calculate(employee.salary)
        except PayslipCalculationError as e:
            raise PayslipCalculationError(str(e), emp_id=employee.emp_id) from e

        try:
            payslip_id = self._payslips.create(emp_id=employee.emp_id, month=month, year=year, breakdown=breakdown)
        except DuplicateRecordError:
            # Another caller stored this period first; theirs is the record.
            stored = self._payslips.get_for_period(emp_id=employee.emp_id, month=month, year=year)
            if stored is None:
                raise
            logger.info("Concurrent payslip generation for employee ID: %s %s %s, using stored record", employee.emp_id, month, year)
            return stored

        logger.info("Successfully generated and saved payslip for employee ID: %s for period: %s %s", employee.emp_id, month, year)
        stored = self._payslips.get_for_period(emp_id=employee.emp_id, month=month, year=year)
        return stored or Payslip(payslip_id=payslip_id, emp_id=employee.emp_id, month=month, year=year, breakdown=breakdown)

    def generate_all(self, month: Optional[MonthInput] = None, year: Optional[YearInput] = None) -> BulkGenerationResult:
        """Generate the period's payslip for every employee; failures are counted, not raised."""
        if month is None or year is None:
            now_month, now_year = current_period(self._clock())
            month = now_month if month is None else month
            year = now_year if year is None else year
        month, year = normalize_period(month, year)

        employees = list(self._employees.list_all())
        logger.info("Starting bulk payslip generation for %d employees (%s %s)", len(employees), month, year)

        success = 0
        errors: list[str] = []
        for emp in employees:
            try:
                self._generate(emp, month, year)
                success += 1
            except (DomainError, DataAccessError) as e:
                logger.error("Error generating payslip for employee %s: %s", emp.emp_id, e)
                self._validator.record_issue(emp.emp_id, emp.dept_id, DepartmentIssue.BULK_GENERATION_ERROR, "bulk_payslip_generation")
                errors.append(f"Employee {emp.emp_id}: {e}")

        logger.info("Bulk payslip generation completed. Success: %d, Errors: %d", success, len(errors))
        return BulkGenerationResult(month=month, year=year, success_count=success, error_count=len(errors), errors=errors)
