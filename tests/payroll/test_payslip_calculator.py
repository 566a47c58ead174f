from decimal import Decimal

import pytest

from src.employee_management.employee_management.core.exceptions import PayslipCalculationError
from src.employee_management.employee_management.payroll.calculator.standard_calculator import (
    StandardPayslipCalculator,
    annual_tax,
)


def D(v: str) -> Decimal:
    return Decimal(v)


def test_salary_50000_matches_worked_example():
    b = StandardPayslipCalculator().calculate(Decimal("50000"))

    assert b.basic_pay == D("30000.00")
    assert b.hra == D("9000.00")
    assert b.medical_allowance == D("2000.00")
    assert b.transport_allowance == D("3000.00")
    assert b.other_allowances == D("0.00")
    assert b.gross_salary == D("44000.00")
    assert b.pf == D("3600.00")
    assert b.esi == D("0.00")
    assert b.tax_deductions == D("2708.33")
    assert b.other_deductions == D("0.00")
    assert b.total_deductions == D("6308.33")
    assert b.net_salary == D("37691.67")


def test_salary_15000_pays_esi_and_no_tax():
    b = StandardPayslipCalculator().calculate(Decimal("15000"))

    assert b.basic_pay == D("9000.00")
    assert b.hra == D("2700.00")
    assert b.gross_salary == D("16700.00")
    assert b.pf == D("1080.00")
    assert b.esi == D("125.25")
    assert b.tax_deductions == D("0.00")
    assert b.total_deductions == D("1205.25")
    assert b.net_salary == D("15494.75")


def test_esi_boundary_is_inclusive():
    # gross = basic * 1.3 + 5000; 25641 gives 24999.98, 26000 gives 25280.00
    calc = StandardPayslipCalculator()
    below = calc.calculate(Decimal("25641"))
    assert below.gross_salary <= D("25000.00")
    assert below.esi == (below.gross_salary * D("0.0075")).quantize(D("0.01"))

    above = calc.calculate(Decimal("26000"))
    assert above.gross_salary > D("25000.00")
    assert above.esi == D("0.00")


def test_float_and_string_inputs_behave_like_decimal():
    calc = StandardPayslipCalculator()
    expected = calc.calculate(Decimal("50000.0"))

    assert calc.calculate(50000.0) == expected
    assert calc.calculate("50000") == expected
    assert calc.calculate(50000) == expected


@pytest.mark.parametrize("salary", [None, 0, -1, "abc", "NaN", float("inf"), True])
def test_invalid_salary_raises(salary):
    with pytest.raises(PayslipCalculationError):
        StandardPayslipCalculator().calculate(salary)


@pytest.mark.parametrize(
    "annual, expected",
    [
        (D("250000"), D("0")),
        (D("500000"), D("12500")),
        (D("1000000"), D("112500")),
        (D("1200000"), D("172500")),
    ],
)
def test_annual_tax_brackets_are_marginal(annual, expected):
    assert annual_tax(annual) == expected


def test_high_salary_monthly_tax_rounds_half_up():
    # annual 1,200,000 -> 172,500 / 12 = 14375.00
    b = StandardPayslipCalculator().calculate(Decimal("100000"))
    assert b.tax_deductions == D("14375.00")
    assert b.net_salary == b.gross_salary - b.total_deductions


def test_totals_are_consistent_for_any_salary():
    calc = StandardPayslipCalculator()
    for salary in ("10000", "12345.67", "33333.33", "250000"):
        b = calc.calculate(salary)
        assert b.gross_salary == b.basic_pay + b.hra + b.medical_allowance + b.transport_allowance + b.other_allowances
        assert b.total_deductions == b.pf + b.esi + b.tax_deductions + b.other_deductions
        assert b.net_salary == b.gross_salary - b.total_deductions
        assert all(v == v.quantize(D("0.01")) for v in b.as_dict().values())


# Monthly salaries straddling the annual 250k, 500k and 1M bracket edges.
BRACKET_EDGE_SALARIES = [
    "20833.32", "20833.33", "20833.34", "20833.35",
    "41666.65", "41666.66", "41666.67", "41666.68",
    "83333.32", "83333.33", "83333.34", "83333.35",
]


def sweep_salaries() -> list[Decimal]:
    grid = [D("0.01") + D("1234.57") * i for i in range(0, 120)]
    return sorted(set(grid + [D(s) for s in BRACKET_EDGE_SALARIES]))


def test_tax_never_decreases_as_salary_grows():
    calc = StandardPayslipCalculator()
    taxes = [calc.calculate(s).tax_deductions for s in sweep_salaries()]
    assert all(a <= b for a, b in zip(taxes, taxes[1:]))


@pytest.mark.parametrize("lower, upper", [("20833.33", "20833.34"), ("41666.66", "41666.67"), ("83333.33", "83333.34")])
def test_tax_is_continuous_across_bracket_edges(lower, upper):
    calc = StandardPayslipCalculator()
    below = calc.calculate(D(lower)).tax_deductions
    above = calc.calculate(D(upper)).tax_deductions
    assert below <= above <= below + D("0.01")


@pytest.mark.parametrize("salary", sweep_salaries())
def test_breakdown_identities_hold_across_salary_range(salary):
    b = StandardPayslipCalculator().calculate(salary)
    assert b.gross_salary == b.basic_pay + b.hra + b.medical_allowance + b.transport_allowance + b.other_allowances
    assert b.total_deductions == b.pf + b.esi + b.tax_deductions + b.other_deductions
    assert b.net_salary == b.gross_salary - b.total_deductions
    assert b.tax_deductions >= 0


def test_custom_tax_brackets_are_used():
    calc = StandardPayslipCalculator(tax_brackets=((None, D("0.10")),))
    b = calc.calculate(D("12000"))
    assert b.tax_deductions == D("1200.00")
