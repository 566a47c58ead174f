from __future__ import annotations

import logging
import threading
from typing import Optional, Sequence

from ..common.validators import require_max_length, require_non_empty
from ..core.constants import MAX_DEPARTMENT_DESCRIPTION_LENGTH, MAX_DEPARTMENT_NAME_LENGTH
from ..core.exceptions import ConflictError, DepartmentNotFoundError, DuplicateRecordError
from ..metrics.sink import MetricsSink, NullMetrics
from .model import Department
from .repository import DepartmentRepository

logger = logging.getLogger(__name__)

_CACHE_NAME = "departments"


class DepartmentService:
    """Use case: manage departments.

    Reads go through a cache owned by this instance; any write clears it.
    """

    def __init__(self, departments: DepartmentRepository, *, metrics: Optional[MetricsSink] = None):
        self._departments = departments
        self._metrics = metrics or NullMetrics()
        self._lock = threading.Lock()
        self._all: Optional[list[Department]] = None
        self._by_id: dict[int, Department] = {}
        # Bumped by every write; a read started in an older generation is not cached.
        self._generation = 0

    def _invalidate(self) -> None:
        with self._lock:
            self._generation += 1
            self._all = None
            self._by_id.clear()

    @staticmethod
    def _clean(dept_name: str, description: Optional[str]) -> tuple[str, Optional[str]]:
        name = require_non_empty(dept_name, "Department name")
        require_max_length(name, "Department name", MAX_DEPARTMENT_NAME_LENGTH)
        desc = (description or "").strip() or None
        require_max_length(desc, "Description", MAX_DEPARTMENT_DESCRIPTION_LENGTH)
        return name, desc

    def list_departments(self) -> list[Department]:
        with self._lock:
            cached = self._all
            generation = self._generation
        self._metrics.record_cache_access(_CACHE_NAME, cached is not None)
        if cached is not None:
            return list(cached)

        rows = list(self._departments.list_all())
        with self._lock:
            if generation == self._generation:
                self._all = rows
                self._by_id.update({d.dept_id: d for d in rows})
        return list(rows)

    def find_department(self, dept_id: int) -> Optional[Department]:
        with self._lock:
            cached = self._by_id.get(int(dept_id))
            generation = self._generation
        self._metrics.record_cache_access(_CACHE_NAME, cached is not None)
        if cached is not None:
            return cached

        dept = self._departments.get_by_id(int(dept_id))
        if dept:
            with self._lock:
                if generation == self._generation:
                    self._by_id[dept.dept_id] = dept
        return dept

    def get_department(self, dept_id: int) -> Department:
        dept = self.find_department(dept_id)
        if not dept:
            raise DepartmentNotFoundError(dept_id)
        return dept

    def find_by_name(self, dept_name: str) -> Optional[Department]:
        key = (dept_name or "").strip().lower()
        for d in self.list_departments():
            if (d.dept_name or "").strip().lower() == key:
                return d
        return None

    def count_departments(self) -> int:
        return self._departments.count()

    def add_department(self, *, dept_name: str, description: Optional[str] = None) -> Department:
        name, desc = self._clean(dept_name, description)
        if self._departments.get_by_name(name):
            raise ConflictError(f"Department already exists: {name}")

        try:
            dept_id = self._departments.create(dept_name=name, description=desc)
        except DuplicateRecordError:
            raise ConflictError(f"Department already exists: {name}")
        finally:
            self._invalidate()

        logger.info("Created department %s (id=%s)", name, dept_id)
        return Department(dept_id=dept_id, dept_name=name, description=desc)

    def update_department(self, dept_id: int, *, dept_name: str, description: Optional[str] = None) -> Department:
        self.get_department(dept_id)
        name, desc = self._clean(dept_name, description)
        other = self._departments.get_by_name(name)
        if other and other.dept_id != int(dept_id):
            raise ConflictError(f"Department already exists: {name}")

        try:
            ok = self._departments.update(dept_id=int(dept_id), dept_name=name, description=desc)
        except DuplicateRecordError:
            raise ConflictError(f"Department already exists: {name}")
        finally:
            self._invalidate()

        if not ok:
            raise DepartmentNotFoundError(dept_id)
        return Department(dept_id=int(dept_id), dept_name=name, description=desc)

    def delete_department(self, dept_id: int) -> None:
        try:
            ok = self._departments.delete(int(dept_id))
        finally:
            self._invalidate()
        if not ok:
            raise DepartmentNotFoundError(dept_id)
        logger.info("Deleted department id=%s", dept_id)

    def ensure_departments(self, departments: Sequence[tuple[str, str]]) -> int:
        """Create the (name, description) pairs whose name does not exist yet."""
        existing = {(d.dept_name or "").strip().lower() for d in self.list_departments()}
        created = 0
        for name, description in departments:
            if name.lower() in existing:
                continue
            self.add_department(dept_name=name, description=description)
            existing.add(name.lower())
            created += 1
            logger.info("Created department: %s", name)
        return created
