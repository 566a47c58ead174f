from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class PayslipBreakdown:
    """All money amounts of one payslip, each rounded to 2 decimal places."""

    basic_pay: Decimal
    hra: Decimal
    medical_allowance: Decimal
    transport_allowance: Decimal
    other_allowances: Decimal
    gross_salary: Decimal
    pf: Decimal
    esi: Decimal
    tax_deductions: Decimal
    other_deductions: Decimal
    total_deductions: Decimal
    net_salary: Decimal

    def as_dict(self) -> dict[str, Decimal]:
        return asdict(self)


@dataclass(frozen=True)
class Payslip:
    payslip_id: int
    emp_id: int
    month: str
    year: str
    breakdown: PayslipBreakdown
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class PayslipStatement:
    """Read model shown to employees/admins: payslip plus display-safe employee info."""

    emp_id: int
    emp_name: str
    department_name: str
    month: str
    year: str
    breakdown: PayslipBreakdown
    payslip_id: Optional[int] = None
    created_at: Optional[datetime] = None


@dataclass(frozen=True)
class BulkGenerationResult:
    month: str
    year: str
    success_count: int
    error_count: int
    errors: list[str] = field(default_factory=list)

    @property
    def total(self) -> int:
        return self.success_count + self.error_count
