from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Union

from ..model import PayslipBreakdown

SalaryInput = Union[Decimal, int, float, str]


class PayslipCalculator(ABC):
    """Calculator interface (Strategy Pattern for payslips)."""

    @abstractmethod
    def calculate(self, monthly_salary: SalaryInput) -> PayslipBreakdown:
        raise NotImplementedError
