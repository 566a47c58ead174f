from __future__ import annotations

import logging
from datetime import date
from typing import Union

from ..common.datetime_utils import coerce_date
from ..common.validators import require_max_length, require_non_empty
from ..core.enums import LeaveStatus
from ..core.exceptions import EmployeeNotFoundError, LeaveNotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import Leave
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    def apply_leave(
        self,
        *,
        emp_id: int,
        from_date: Union[date, str],
        to_date: Union[date, str],
        reason: str,
    ) -> Leave:
        start = coerce_date(from_date, "From date")
        end = coerce_date(to_date, "To date")
        if end < start:
            raise ValidationError("To date cannot be before from date")
        reason = require_non_empty(reason, "Reason")
        require_max_length(reason, "Reason", 255)

        if not self._employees.get_by_id(int(emp_id)):
            raise EmployeeNotFoundError(emp_id)

        leave_id = self._leaves.create(emp_id=int(emp_id), from_date=start, to_date=end, reason=reason)
        logger.info("Leave %s applied by employee %s (%s to %s)", leave_id, emp_id, start, end)
        return self._get(leave_id)

    def _get(self, leave_id: int) -> Leave:
        leave = self._leaves.get_by_id(int(leave_id))
        if not leave:
            raise LeaveNotFoundError(leave_id)
        return leave

    def list_pending(self) -> list[Leave]:
        return list(self._leaves.list_leaves(status=LeaveStatus.PENDING))

    def count_pending(self) -> int:
        return self._leaves.count_by_status(LeaveStatus.PENDING)

    def list_for_employee(self, emp_id: int) -> list[Leave]:
        return list(self._leaves.list_leaves(emp_id=int(emp_id)))

    def _decide(self, leave_id: int, status: LeaveStatus) -> Leave:
        leave = self._get(leave_id)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError(f"Leave {leave_id} has already been {leave.status.value.lower()}")

        if not self._leaves.decide(leave_id=int(leave_id), status=status):
            # Lost a race with another decision.
            raise ValidationError(f"Leave {leave_id} has already been decided")

        logger.info("Leave %s %s", leave_id, status.value.lower())
        return self._get(leave_id)

    def approve_leave(self, leave_id: int) -> Leave:
        return self._decide(leave_id, LeaveStatus.APPROVED)

    def reject_leave(self, leave_id: int) -> Leave:
        return self._decide(leave_id, LeaveStatus.REJECTED)
