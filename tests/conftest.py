"""Shared fixtures for the rdcredit test suite."""

from decimal import Decimal

import pytest

from rdcredit.credit_models import CalculationInput
from rdcredit.law_regime import resolve_regime


TAX_YEAR = 2025


def build_input(**overrides) -> CalculationInput:
    """A small, valid first-time filer. Override any field by keyword."""
    fields = dict(
        business_type="technology",
        current_year_revenue=Decimal("1200000"),
        year_of_first_revenue=TAX_YEAR - 2,
        has_income_tax_liability=False,
        quarterly_payroll_tax=Decimal("30000"),
        technical_employee_count=4,
        average_technical_salary=Decimal("120000"),
        rd_allocation_percentage=Decimal("50"),
        contractor_costs=Decimal("40000"),
        supplies_costs=Decimal("5000"),
        software_costs=Decimal("6000"),
        cloud_costs=Decimal("9000"),
        prior_year_qres=(),
        is_first_time_filer=True,
        section_280c_election="full",
        tax_year=TAX_YEAR,
    )
    fields.update(overrides)
    return CalculationInput(**fields)


def zero_input(**overrides) -> CalculationInput:
    fields = dict(
        current_year_revenue=Decimal("0"),
        quarterly_payroll_tax=Decimal("0"),
        technical_employee_count=0,
        average_technical_salary=Decimal("0"),
        rd_allocation_percentage=Decimal("0"),
        contractor_costs=Decimal("0"),
        supplies_costs=Decimal("0"),
        software_costs=Decimal("0"),
        cloud_costs=Decimal("0"),
    )
    fields.update(overrides)
    return build_input(**fields)


@pytest.fixture
def default_regime():
    return resolve_regime(None)


@pytest.fixture
def capitalize_regime():
    return resolve_regime("capitalize_amortize")
