from __future__ import annotations

from enum import Enum


class LeaveStatus(str, Enum):
    """Approval workflow state of a leave request."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DepartmentIssue(str, Enum):
    """Classification of department inconsistencies, used for monitoring."""

    NULL_EMPLOYEE_REFERENCE = "NULL_EMPLOYEE_REFERENCE"
    NULL_DEPARTMENT_REFERENCE = "NULL_DEPARTMENT_REFERENCE"
    DANGLING_DEPARTMENT_REFERENCE = "DANGLING_DEPARTMENT_REFERENCE"
    INVALID_DEPARTMENT_ID = "INVALID_DEPARTMENT_ID"
    INVALID_DEPARTMENT_ID_FORMAT = "INVALID_DEPARTMENT_ID_FORMAT"
    EMPTY_DEPARTMENT_NAME = "EMPTY_DEPARTMENT_NAME"
    DEPARTMENT_NOT_FOUND_ON_ADD = "DEPARTMENT_NOT_FOUND_ON_ADD"
    BULK_GENERATION_ERROR = "BULK_GENERATION_ERROR"
