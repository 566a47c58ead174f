from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from ..core.enums import LeaveStatus
from ..core.exceptions import DataAccessError
from ..departments.repository import DepartmentRepository
from ..employees.repository import EmployeeRepository
from ..leaves.repository import LeaveRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DashboardSummary:
    total_employees: int
    pending_leaves: int
    total_departments: int
    database_healthy: bool
    error: Optional[str] = None


class DashboardService:
    """Admin dashboard counters. Storage failures give a degraded summary instead of an error."""

    def __init__(
        self,
        employees: EmployeeRepository,
        leaves: LeaveRepository,
        departments: DepartmentRepository,
    ):
        self._employees = employees
        self._leaves = leaves
        self._departments = departments

    def summary(self) -> DashboardSummary:
        try:
            return DashboardSummary(
                total_employees=self._employees.count(),
                pending_leaves=self._leaves.count_by_status(LeaveStatus.PENDING),
                total_departments=self._departments.count(),
                database_healthy=True,
            )
        except DataAccessError as e:
            logger.error("Dashboard summary degraded, database unavailable: %s", e)
            return DashboardSummary(
                total_employees=0,
                pending_leaves=0,
                total_departments=0,
                database_healthy=False,
                error=str(e),
            )
