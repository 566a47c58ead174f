from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .dashboard.service import DashboardService
from .database.connection import DBConfig, DatabaseConnection
from .departments.mysql_department_repository import MySQLDepartmentRepository
from .departments.reconciliation import DepartmentReconciliationService
from .departments.service import DepartmentService
from .departments.validation import DepartmentValidator
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.service import EmployeeService
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .metrics.sink import InMemoryMetrics, MetricsSink
from .payroll.calculator.base import PayslipCalculator
from .payroll.mysql_payslip_repository import MySQLPayslipRepository
from .payroll.service import PayslipService


@dataclass(frozen=True)
class Container:
    conn: DatabaseConnection
    metrics: MetricsSink

    departments_repo: MySQLDepartmentRepository
    employees_repo: MySQLEmployeeRepository
    leaves_repo: MySQLLeaveRepository
    payslips_repo: MySQLPayslipRepository

    department_validator: DepartmentValidator
    department_service: DepartmentService
    reconciliation_service: DepartmentReconciliationService
    employee_service: EmployeeService
    leave_service: LeaveService
    payslip_service: PayslipService
    dashboard_service: DashboardService


def build_container(
    *,
    db_config: dict,
    metrics: Optional[MetricsSink] = None,
    calculator: Optional[PayslipCalculator] = None,
) -> Container:
    metrics = metrics or InMemoryMetrics()
    conn = DatabaseConnection(DBConfig.from_dict(db_config), metrics=metrics)

    departments_repo = MySQLDepartmentRepository(conn)
    employees_repo = MySQLEmployeeRepository(conn)
    leaves_repo = MySQLLeaveRepository(conn)
    payslips_repo = MySQLPayslipRepository(conn)

    department_validator = DepartmentValidator(metrics=metrics)
    department_service = DepartmentService(departments_repo, metrics=metrics)
    reconciliation_service = DepartmentReconciliationService(employees_repo, department_service)
    employee_service = EmployeeService(employees_repo, department_service, department_validator)
    leave_service = LeaveService(leaves_repo, employees_repo)
    payslip_service = PayslipService(payslips_repo, employees_repo, department_validator, calculator=calculator)
    dashboard_service = DashboardService(employees_repo, leaves_repo, departments_repo)

    return Container(
        conn=conn,
        metrics=metrics,
        departments_repo=departments_repo,
        employees_repo=employees_repo,
        leaves_repo=leaves_repo,
        payslips_repo=payslips_repo,
        department_validator=department_validator,
        department_service=department_service,
        reconciliation_service=reconciliation_service,
        employee_service=employee_service,
        leave_service=leave_service,
        payslip_service=payslip_service,
        dashboard_service=dashboard_service,
    )
