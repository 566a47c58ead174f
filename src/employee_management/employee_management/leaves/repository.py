from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import Leave


class LeaveRepository(Protocol):
    def create(self, *, emp_id: int, from_date: date, to_date: date, reason: str) -> int:
        raise NotImplementedError

    def get_by_id(self, leave_id: int) -> Optional[Leave]:
        raise NotImplementedError

    def list_leaves(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        emp_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[Leave]:
        raise NotImplementedError

    def count_by_status(self, status: LeaveStatus) -> int:
        raise NotImplementedError

    def decide(self, *, leave_id: int, status: LeaveStatus) -> bool:
        """Move a PENDING leave to `status`; False when it is not pending (or missing)."""

        raise NotImplementedError
