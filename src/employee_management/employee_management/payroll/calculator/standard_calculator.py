from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Optional, Sequence

from ...core.exceptions import PayslipCalculationError
from ..model import PayslipBreakdown
from .base import PayslipCalculator, SalaryInput

_CENT = Decimal("0.01")
ZERO = Decimal("0.00")

BASIC_PAY_RATE = Decimal("0.60")
HRA_RATE = Decimal("0.30")
MEDICAL_ALLOWANCE = Decimal("2000.00")
TRANSPORT_ALLOWANCE = Decimal("3000.00")
PF_RATE = Decimal("0.12")
ESI_RATE = Decimal("0.0075")
ESI_GROSS_CEILING = Decimal("25000.00")

# (band width, marginal rate) applied to the annual salary; None = unbounded.
TAX_BRACKETS: tuple[tuple[Optional[Decimal], Decimal], ...] = (
    (Decimal("250000"), Decimal("0")),
    (Decimal("250000"), Decimal("0.05")),
    (Decimal("500000"), Decimal("0.20")),
    (None, Decimal("0.30")),
)


def round_money(value: Decimal) -> Decimal:
    return value.quantize(_CENT, rounding=ROUND_HALF_UP)


def to_salary(value: Any) -> Decimal:
    """Coerce calculator input to Decimal; floats go through str() to keep their printed value."""
    if value is None or isinstance(value, bool):
        raise PayslipCalculationError("Salary must be provided")
    try:
        if isinstance(value, Decimal):
            salary = value
        elif isinstance(value, float):
            salary = Decimal(str(value))
        else:
            salary = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        raise PayslipCalculationError(f"Salary is not a number: {value!r}")
    if not salary.is_finite():
        raise PayslipCalculationError(f"Salary is not a finite number: {value!r}")
    if salary <= 0:
        raise PayslipCalculationError("Salary must be greater than zero")
    return salary


def annual_tax(annual_salary: Decimal, brackets: Sequence[tuple[Optional[Decimal], Decimal]] = TAX_BRACKETS) -> Decimal:
    """Marginal tax over the bracket table (unrounded)."""
    tax = Decimal("0")
    remaining = annual_salary
    for width, rate in brackets:
        if remaining <= 0:
            break
        taxable = remaining if width is None else min(remaining, width)
        tax += taxable * rate
        remaining -= taxable
    return tax


class StandardPayslipCalculator(PayslipCalculator):
    """Standard rule: 60% basic, 30% HRA, fixed allowances, PF/ESI and slab income tax."""

    def __init__(self, *, tax_brackets: Sequence[tuple[Optional[Decimal], Decimal]] = TAX_BRACKETS):
        self._tax_brackets = tuple(tax_brackets)

    def monthly_tax(self, monthly_salary: Decimal) -> Decimal:
        return round_money(annual_tax(monthly_salary * 12, self._tax_brackets) / 12)

    def calculate(self, monthly_salary: SalaryInput) -> PayslipBreakdown:
        salary = to_salary(monthly_salary)

        basic_pay = round_money(salary * BASIC_PAY_RATE)
        hra = round_money(basic_pay * HRA_RATE)
        medical = MEDICAL_ALLOWANCE
        transport = TRANSPORT_ALLOWANCE
        other_allowances = ZERO
        gross = round_money(basic_pay + hra + medical + transport + other_allowances)

        pf = round_money(basic_pay * PF_RATE)
        esi = round_money(gross * ESI_RATE) if gross <= ESI_GROSS_CEILING else ZERO
        tax = self.monthly_tax(salary)
        other_deductions = ZERO
        total_deductions = round_money(pf + esi + tax + other_deductions)
        net = round_money(gross - total_deductions)

        return PayslipBreakdown(
            basic_pay=basic_pay,
            hra=hra,
            medical_allowance=medical,
            transport_allowance=transport,
            other_allowances=other_allowances,
            gross_salary=gross,
            pf=pf,
            esi=esi,
            tax_deductions=tax,
            other_deductions=other_deductions,
            total_deductions=total_deductions,
            net_salary=net,
        )
