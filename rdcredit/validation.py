"""Input range validation and advisory warnings.

Validation fails fast: the whole calculation is rejected rather than computed
from clamped values, and every violation is reported at once.
"""

from __future__ import annotations

from decimal import Decimal
from typing import List

from .credit_models import CalculationInput
from .errors import ValidationError


MAX_PRIOR_YEARS = 3

_NON_NEGATIVE_FIELDS = (
    "current_year_revenue",
    "quarterly_payroll_tax",
    "technical_employee_count",
    "average_technical_salary",
    "contractor_costs",
    "supplies_costs",
    "software_costs",
    "cloud_costs",
)

# Advisory thresholds
HIGH_ALLOCATION_PCT = Decimal("80")
LOW_ALLOCATION_PCT = Decimal("20")
LOW_SALARY = Decimal("40000")
HIGH_SALARY = Decimal("200000")


def validate_input(inp: CalculationInput) -> None:
    """Raise ValidationError listing every out-of-range field."""
    errors: List[str] = []

    for name in _NON_NEGATIVE_FIELDS:
        value = getattr(inp, name)
        if value < 0:
            errors.append(f"{name} must be >= 0 (got {value})")

    pct = inp.rd_allocation_percentage
    if pct < 0 or pct > 100:
        errors.append(f"rd_allocation_percentage must be between 0 and 100 (got {pct})")

    if len(inp.prior_year_qres) > MAX_PRIOR_YEARS:
        errors.append(
            f"prior_year_qres accepts at most {MAX_PRIOR_YEARS} years (got {len(inp.prior_year_qres)})"
        )
    for i, qre in enumerate(inp.prior_year_qres):
        if qre < 0:
            errors.append(f"prior_year_qres[{i}] must be >= 0 (got {qre})")

    if inp.tax_year < inp.year_of_first_revenue:
        errors.append(
            f"tax_year {inp.tax_year} is before year_of_first_revenue {inp.year_of_first_revenue}"
        )

    if errors:
        raise ValidationError(errors)


def input_warnings(inp: CalculationInput) -> List[str]:
    """Non-fatal warnings about unusual but valid input patterns."""
    warnings: List[str] = []
    pct = inp.rd_allocation_percentage
    salary = inp.average_technical_salary

    if pct > HIGH_ALLOCATION_PCT:
        warnings.append("Over 80% R&D allocation is unusual - ensure accurate time tracking")
    if pct < LOW_ALLOCATION_PCT and inp.technical_employee_count > 0:
        warnings.append("Low R&D allocation - ensure all experimentation time is included")
    if 0 < salary < LOW_SALARY:
        warnings.append("Salary seems low for technical employees")
    if salary > HIGH_SALARY:
        warnings.append("High average salary - ensure this reflects actual wages")

    annual_wages = inp.technical_employee_count * salary
    if inp.contractor_costs > 0 and inp.contractor_costs > annual_wages:
        warnings.append("High contractor costs - ensure proper documentation")

    return warnings
