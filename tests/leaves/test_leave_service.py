from datetime import date

import pytest

from src.employee_management.employee_management.core.enums import LeaveStatus
from src.employee_management.employee_management.core.exceptions import (
    EmployeeNotFoundError,
    LeaveNotFoundError,
    ValidationError,
)
from src.employee_management.employee_management.leaves.service import LeaveService


@pytest.fixture
def service(leaves_repo, employees_repo):
    return LeaveService(leaves_repo, employees_repo)


def test_apply_leave_starts_pending(service, employees_repo):
    emp = employees_repo.add()

    leave = service.apply_leave(emp_id=emp.emp_id, from_date="2026-11-02", to_date="2026-11-04", reason=" Family trip ")

    assert leave.status == LeaveStatus.PENDING
    assert leave.from_date == date(2026, 11, 2)
    assert leave.reason == "Family trip"
    assert leave.days == 3
    assert service.count_pending() == 1


def test_apply_leave_validation(service, employees_repo):
    emp = employees_repo.add()
    with pytest.raises(ValidationError):
        service.apply_leave(emp_id=emp.emp_id, from_date=date(2026, 11, 4), to_date=date(2026, 11, 2), reason="x")
    with pytest.raises(ValidationError):
        service.apply_leave(emp_id=emp.emp_id, from_date="04-11-2026", to_date="2026-11-05", reason="x")
    with pytest.raises(ValidationError):
        service.apply_leave(emp_id=emp.emp_id, from_date=date(2026, 11, 4), to_date=date(2026, 11, 4), reason="  ")


def test_apply_leave_unknown_employee(service):
    with pytest.raises(EmployeeNotFoundError):
        service.apply_leave(emp_id=1, from_date=date(2026, 11, 4), to_date=date(2026, 11, 4), reason="Sick")


def test_approve_and_reject(service, employees_repo):
    emp = employees_repo.add()
    a = service.apply_leave(emp_id=emp.emp_id, from_date=date(2026, 11, 2), to_date=date(2026, 11, 2), reason="a")
    b = service.apply_leave(emp_id=emp.emp_id, from_date=date(2026, 11, 3), to_date=date(2026, 11, 3), reason="b")

    assert service.approve_leave(a.leave_id).status == LeaveStatus.APPROVED
    assert service.reject_leave(b.leave_id).status == LeaveStatus.REJECTED
    assert service.list_pending() == []
    assert service.count_pending() == 0
    assert [l.leave_id for l in service.list_for_employee(emp.emp_id)] == [b.leave_id, a.leave_id]


def test_deciding_twice_is_rejected(service, employees_repo):
    emp = employees_repo.add()
    leave = service.apply_leave(emp_id=emp.emp_id, from_date=date(2026, 11, 2), to_date=date(2026, 11, 2), reason="a")
    service.approve_leave(leave.leave_id)

    with pytest.raises(ValidationError):
        service.reject_leave(leave.leave_id)
    with pytest.raises(ValidationError):
        service.approve_leave(leave.leave_id)


def test_unknown_leave_raises(service):
    with pytest.raises(LeaveNotFoundError):
        service.approve_leave(99)
