import logging
from datetime import date
from decimal import Decimal

import pytest

from src.employee_management.employee_management.core.constants import DEFAULT_DEPARTMENT_NAME
from src.employee_management.employee_management.core.enums import DepartmentIssue
from src.employee_management.employee_management.core.exceptions import DepartmentDataError
from src.employee_management.employee_management.departments.model import Department
from src.employee_management.employee_management.employees.model import Employee


def make_employee(*, dept_id=None, department=None, emp_id=7):
    return Employee(
        emp_id=emp_id,
        emp_name="Asha",
        phone_no="9876543210",
        salary=Decimal("50000"),
        address="Pune",
        joining_date=date(2024, 1, 1),
        dept_id=dept_id,
        department=department,
    )


def test_valid_department_name_is_trimmed(validator):
    emp = make_employee(dept_id=3, department=Department(3, "  Finance  "))
    check = validator.check(emp)
    assert check.department_name == "Finance"
    assert check.is_consistent


@pytest.mark.parametrize(
    "employee, issue",
    [
        (None, DepartmentIssue.NULL_EMPLOYEE_REFERENCE),
        (make_employee(), DepartmentIssue.NULL_DEPARTMENT_REFERENCE),
        (make_employee(dept_id=99), DepartmentIssue.DANGLING_DEPARTMENT_REFERENCE),
        (make_employee(dept_id=3, department=Department(3, None)), DepartmentIssue.EMPTY_DEPARTMENT_NAME),
        (make_employee(dept_id=3, department=Department(3, "   ")), DepartmentIssue.EMPTY_DEPARTMENT_NAME),
    ],
)
def test_inconsistencies_fall_back_and_are_classified(validator, metrics, employee, issue):
    check = validator.check(employee)

    assert check.department_name == DEFAULT_DEPARTMENT_NAME
    assert check.issue == issue
    assert metrics.department_issue_counts() == {issue.value: 1}


@pytest.mark.parametrize("bad_id", [0, -4])
def test_non_positive_department_id_is_corruption(validator, metrics, bad_id):
    emp = make_employee(dept_id=bad_id, department=Department(bad_id, "Finance"))

    with pytest.raises(DepartmentDataError) as exc:
        validator.check(emp)

    assert exc.value.issue == "INVALID_DEPARTMENT_ID"
    assert exc.value.employee_id == 7
    assert exc.value.department_id == bad_id
    assert metrics.department_issue_counts() == {"INVALID_DEPARTMENT_ID": 1}


def test_safe_department_name_never_raises(validator):
    emp = make_employee(dept_id=0, department=Department(0, "Finance"))
    assert validator.safe_department_name(emp, "payslip_fetch") == DEFAULT_DEPARTMENT_NAME
    assert validator.safe_department_name(None) == DEFAULT_DEPARTMENT_NAME


def test_issue_log_line_format(validator, caplog):
    caplog.set_level(logging.WARNING)
    validator.check(make_employee(emp_id=12))

    record = next(r for r in caplog.records if "DEPARTMENT_ISSUE" in r.getMessage())
    assert record.getMessage() == "DEPARTMENT_ISSUE: Employee=12, Department=null, Issue=NULL_DEPARTMENT_REFERENCE"
    assert record.department_issue == "NULL_DEPARTMENT_REFERENCE"


def test_is_department_data_available(validator):
    assert validator.is_department_data_available(make_employee(dept_id=2, department=Department(2, "Sales")))
    assert not validator.is_department_data_available(None)
    assert not validator.is_department_data_available(make_employee())
    assert not validator.is_department_data_available(make_employee(dept_id=2, department=Department(2, " ")))
    assert not validator.is_department_data_available(make_employee(dept_id=0, department=Department(0, "Sales")))


def test_is_valid_department_reference(validator):
    assert validator.is_valid_department_reference(1)
    assert not validator.is_valid_department_reference(0)
    assert not validator.is_valid_department_reference(-1)
    assert not validator.is_valid_department_reference(None)


def test_record_issue_accepts_plain_strings(validator, metrics):
    validator.record_issue(None, 5, "CUSTOM_CHECK", "manual")
    assert metrics.department_issue_counts() == {"CUSTOM_CHECK": 1}
