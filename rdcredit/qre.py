"""Qualified research expense aggregation.

Category rules:
- Wages: employees x average salary x R&D allocation %.
- Contract research: only the regime's qualifying fraction of dollars
  (65% under IRC 41(b)(3)), regardless of contractor headcount.
- Supplies, software and cloud: 100% qualifying.
"""

from __future__ import annotations

import logging
from decimal import Decimal

from .credit_models import CalculationInput, QualifiedExpenses
from .law_regime import LawRegimeConfig


log = logging.getLogger(__name__)

ZERO = Decimal("0")
HUNDRED = Decimal("100")


def _d(x) -> Decimal:
    if isinstance(x, Decimal):
        return x
    return Decimal(str(x))


def _floor0(x: Decimal) -> Decimal:
    return max(ZERO, x)


def aggregate(inp: CalculationInput, regime: LawRegimeConfig) -> QualifiedExpenses:
    """Normalize raw expenses into QRE components. Input must already be validated."""
    pct = min(max(_d(inp.rd_allocation_percentage), ZERO), HUNDRED)
    wages = _floor0(_d(inp.technical_employee_count) * _d(inp.average_technical_salary) * (pct / HUNDRED))
    contractors = _floor0(_d(inp.contractor_costs) * regime.contractor_qualifying_fraction)
    supplies = _floor0(_d(inp.supplies_costs))
    software_and_cloud = _floor0(_d(inp.software_costs) + _d(inp.cloud_costs))

    qre = QualifiedExpenses(
        wages=wages,
        contractors=contractors,
        supplies=supplies,
        software_and_cloud=software_and_cloud,
        total=wages + contractors + supplies + software_and_cloud,
    )
    log.debug("qre regime=%s total=%s", regime.regime_id, qre.total)
    return qre
