"""Calculation entry point.

Deterministic and side-effect free: no I/O, no shared mutable state. The
law regime is resolved to an immutable config and threaded through each
component; concurrent callers need no coordination.
"""

from __future__ import annotations

import logging
from typing import Optional

from .composer import compose
from .credit_calc import compute_asc
from .credit_models import CalculationInput, CalculationResult
from .law_regime import LawRegimeConfig, resolve_regime
from .pricing import assign_tier
from .qre import aggregate
from .qsb import evaluate_qsb
from .validation import input_warnings, validate_input


log = logging.getLogger(__name__)


def run_calculation(inp: CalculationInput, regime: LawRegimeConfig) -> CalculationResult:
    """Compute a full result under an already-resolved regime.

    Raises ValidationError for out-of-range input.
    """
    validate_input(inp)

    qre = aggregate(inp, regime)
    asc = compute_asc(qre, inp, regime)
    federal_credit = asc.calculated_credit
    qsb_result = evaluate_qsb(inp, federal_credit, regime)
    tier_result = assign_tier(federal_credit)

    result = compose(
        qre,
        federal_credit,
        qsb_result,
        tier_result,
        regime,
        inp=inp,
        asc=asc,
        advisory_warnings=input_warnings(inp),
    )
    log.debug(
        "calculated %s regime=%s credit=%s tier=%s",
        result.provenance.calculation_id, regime.regime_id, federal_credit, tier_result.tier,
    )
    return result


def calculate(inp: CalculationInput, regime_id: Optional[str] = None) -> CalculationResult:
    """Resolve the regime id, then calculate.

    Raises ConfigurationError for an unknown regime id and ValidationError
    for out-of-range input.
    """
    return run_calculation(inp, resolve_regime(regime_id))
