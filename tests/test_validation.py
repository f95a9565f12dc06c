"""Tests for input validation and advisory warnings."""

from decimal import Decimal

import pytest

from rdcredit.errors import ValidationError
from rdcredit.validation import input_warnings, validate_input

from conftest import TAX_YEAR, build_input, zero_input


# === HARD FAILURES ===


@pytest.mark.parametrize("field,value", [
    ("current_year_revenue", Decimal("-1")),
    ("quarterly_payroll_tax", Decimal("-0.01")),
    ("technical_employee_count", -1),
    ("average_technical_salary", Decimal("-50000")),
    ("contractor_costs", Decimal("-10")),
    ("supplies_costs", Decimal("-10")),
    ("software_costs", Decimal("-10")),
    ("cloud_costs", Decimal("-10")),
])
def test_negative_amounts_rejected(field, value):
    with pytest.raises(ValidationError) as exc:
        validate_input(build_input(**{field: value}))
    assert any(field in e for e in exc.value.errors)


@pytest.mark.parametrize("pct", [Decimal("-0.1"), Decimal("100.01"), Decimal("150")])
def test_allocation_out_of_range_rejected(pct):
    with pytest.raises(ValidationError) as exc:
        validate_input(build_input(rd_allocation_percentage=pct))
    assert "rd_allocation_percentage" in str(exc.value)


@pytest.mark.parametrize("pct", [Decimal("0"), Decimal("100")])
def test_allocation_bounds_accepted(pct):
    validate_input(build_input(rd_allocation_percentage=pct))


def test_more_than_three_prior_years_rejected():
    inp = build_input(is_first_time_filer=False, prior_year_qres=(1, 2, 3, 4))
    with pytest.raises(ValidationError) as exc:
        validate_input(inp)
    assert "at most 3" in str(exc.value)


def test_negative_prior_year_rejected():
    inp = build_input(is_first_time_filer=False, prior_year_qres=(Decimal("10"), Decimal("-5")))
    with pytest.raises(ValidationError) as exc:
        validate_input(inp)
    assert "prior_year_qres[1]" in str(exc.value)


def test_tax_year_before_first_revenue_rejected():
    inp = build_input(tax_year=TAX_YEAR, year_of_first_revenue=TAX_YEAR + 1)
    with pytest.raises(ValidationError):
        validate_input(inp)



def test_all_violations_reported_together():
    inp = build_input(
        contractor_costs=Decimal("-1"),
        rd_allocation_percentage=Decimal("101"),
        year_of_first_revenue=TAX_YEAR + 3,
    )
    with pytest.raises(ValidationError) as exc:
        validate_input(inp)
    assert len(exc.value.errors) == 3


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        validate_input(build_input(cloud_costs=Decimal("-1")))


def test_zero_input_is_valid():
    validate_input(zero_input())


# === ADVISORY WARNINGS ===


def test_typical_input_has_no_warnings():
    assert input_warnings(build_input()) == []


def test_high_allocation_warning():
    warnings = input_warnings(build_input(rd_allocation_percentage=Decimal("90")))
    assert warnings == ["Over 80% R&D allocation is unusual - ensure accurate time tracking"]


def test_low_allocation_warning_only_with_employees():
    assert any("Low R&D allocation" in w for w in input_warnings(build_input(rd_allocation_percentage=Decimal("10"))))
    assert not any(
        "Low R&D allocation" in w
        for w in input_warnings(build_input(rd_allocation_percentage=Decimal("10"), technical_employee_count=0))
    )


def test_salary_warnings():
    assert "Salary seems low for technical employees" in input_warnings(
        build_input(average_technical_salary=Decimal("30000"))
    )
    assert "High average salary - ensure this reflects actual wages" in input_warnings(
        build_input(average_technical_salary=Decimal("250000"))
    )


def test_contractor_heavy_warning():
    inp = build_input(technical_employee_count=1, average_technical_salary=Decimal("90000"),
                      contractor_costs=Decimal("100000"))
    assert "High contractor costs - ensure proper documentation" in input_warnings(inp)


def test_zero_input_has_no_warnings():
    assert input_warnings(zero_input()) == []
