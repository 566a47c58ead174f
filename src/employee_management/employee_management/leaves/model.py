from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus


@dataclass(frozen=True)
class Leave:
    leave_id: int
    emp_id: int
    from_date: date
    to_date: date
    reason: str
    status: LeaveStatus
    created_at: Optional[datetime] = None
    decided_at: Optional[datetime] = None
    emp_name: Optional[str] = None

    @property
    def days(self) -> int:
        return (self.to_date - self.from_date).days + 1
