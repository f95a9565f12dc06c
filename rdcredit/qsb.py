"""Qualified Small Business eligibility and payroll tax offset.

A QSB has gross receipts under $5M for the tax year and no gross receipts
more than five years back. A QSB with no income tax liability may apply the
credit against its payroll tax, bounded by the credit, the regime cap and
the annualized payroll tax.

Lifetime (five-election) limits are tracked by the caller's customer history,
not here.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List

from .credit_models import CalculationInput, QSBEvaluation
from .law_regime import LawRegimeConfig


log = logging.getLogger(__name__)

ZERO = Decimal("0")
QSB_REVENUE_LIMIT = Decimal("5000000")
QSB_AGE_LIMIT_YEARS = 5
QUARTERS_PER_YEAR = 4


def evaluate_qsb(inp: CalculationInput, federal_credit: Decimal, regime: LawRegimeConfig) -> QSBEvaluation:
    years = inp.tax_year - inp.year_of_first_revenue

    # Evaluate every condition so all failures are reported together.
    reasons: List[str] = []
    revenue_ok = inp.current_year_revenue < QSB_REVENUE_LIMIT
    age_ok = years <= QSB_AGE_LIMIT_YEARS
    if not revenue_ok:
        reasons.append(f"Revenue {inp.current_year_revenue} is not under the $5,000,000 limit")
    if not age_ok:
        reasons.append(f"{years} years since first revenue exceeds the {QSB_AGE_LIMIT_YEARS}-year limit")
    eligible = revenue_ok and age_ok

    offset_available = eligible and regime.payroll_offset_enabled and not inp.has_income_tax_liability
    if offset_available:
        annual_payroll_tax = inp.quarterly_payroll_tax * QUARTERS_PER_YEAR
        offset = max(ZERO, min(federal_credit, regime.max_payroll_offset, annual_payroll_tax))
    else:
        offset = ZERO

    log.debug("qsb eligible=%s offset_available=%s offset=%s", eligible, offset_available, offset)
    return QSBEvaluation(
        is_eligible=eligible,
        payroll_tax_offset=offset,
        years_since_first_revenue=years,
        ineligibility_reasons=tuple(reasons),
        offset_available=offset_available,
        quarterly_offset=offset / QUARTERS_PER_YEAR,
    )
