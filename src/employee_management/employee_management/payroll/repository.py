from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Payslip, PayslipBreakdown


class PayslipRepository(Protocol):
    def get_latest(self, emp_id: int) -> Optional[Payslip]:
        raise NotImplementedError

    def get_for_period(self, *, emp_id: int, month: str, year: str) -> Optional[Payslip]:
        raise NotImplementedError

    def list_for_employee(self, emp_id: int) -> Sequence[Payslip]:
        raise NotImplementedError

    def create(self, *, emp_id: int, month: str, year: str, breakdown: PayslipBreakdown) -> int:
        """Insert one payslip.

        Raises DuplicateRecordError when (emp_id, month, year) already exists.
        """

        raise NotImplementedError
