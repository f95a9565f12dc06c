"""Federal credit computation (Alternative Simplified Credit).

This is *not tax advice*. It implements the ASC arithmetic:

- First-time filer: credit = QRE x first-time rate (6%).
- Repeat filer: base = 50% of the average of the prior three years' QREs,
  credit = max(QRE - base, 0) x repeat rate (14%).

The average always divides by three; missing years count as zero. This
understates the base for young repeat filers and is kept as-is pending
review by a tax specialist.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from .credit_models import (
    ASCComputation,
    CalculationInput,
    FilerStatus,
    QualifiedExpenses,
    Section280CChoice,
    Section280COptions,
)
from .law_regime import LawRegimeConfig


log = logging.getLogger(__name__)

ZERO = Decimal("0")
ASC_BASE_FRACTION = Decimal("0.50")
ASC_LOOKBACK_YEARS = 3
CORPORATE_TAX_RATE = Decimal("0.21")


def compute_asc(qre: QualifiedExpenses, inp: CalculationInput, regime: LawRegimeConfig) -> ASCComputation:
    current = max(ZERO, qre.total)
    status = inp.filer_status

    if status == FilerStatus.FIRST_TIME:
        rate = regime.credit_rate_first_time
        return ASCComputation(
            method=status,
            current_year_qre=current,
            excess_qre=current,
            credit_rate=rate,
            calculated_credit=current * rate,
        )

    if status == FilerStatus.REPEAT:
        prior = list(inp.prior_year_qres[:ASC_LOOKBACK_YEARS])
        prior_average = sum(prior, ZERO) / ASC_LOOKBACK_YEARS
        base = max(ZERO, prior_average * ASC_BASE_FRACTION)
        excess = max(ZERO, current - base)
        rate = regime.credit_rate_repeat
        return ASCComputation(
            method=status,
            current_year_qre=current,
            prior_year_average=prior_average,
            base_amount=base,
            excess_qre=excess,
            credit_rate=rate,
            calculated_credit=excess * rate,
        )

    raise ValueError(f"Unhandled filer status: {status}")


def compute_credit(qre: QualifiedExpenses, inp: CalculationInput, regime: LawRegimeConfig) -> Decimal:
    """Federal credit for the current year. Never negative."""
    asc = compute_asc(qre, inp, regime)
    log.debug("credit method=%s base=%s credit=%s", asc.method.value, asc.base_amount, asc.calculated_credit)
    return asc.calculated_credit


def credit_options(federal_credit: Decimal, election: Section280CChoice) -> Section280COptions:
    """Compare the full credit with the IRC 280C(c)(2) reduced credit.

    The reduced credit is the full credit less the corporate rate; electing it
    preserves the research deduction. The comparison is reported alongside the
    result and does not change the federal credit.
    """
    if election == Section280CChoice.FULL:
        deduction_reduction = federal_credit
    elif election == Section280CChoice.REDUCED:
        deduction_reduction = ZERO
    else:
        raise ValueError(f"Unhandled 280C election: {election}")

    return Section280COptions(
        election=election,
        full_credit=federal_credit,
        reduced_credit=federal_credit * (1 - CORPORATE_TAX_RATE),
        deduction_reduction=deduction_reduction,
    )
