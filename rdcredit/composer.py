"""Assemble component outputs into one immutable CalculationResult."""

from __future__ import annotations

import hashlib
import json
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from .credit_calc import credit_options
from .credit_models import (
    ASCComputation,
    CalculationInput,
    CalculationProvenance,
    CalculationResult,
    Confidence,
    FilerStatus,
    PricingAssignment,
    QSBEvaluation,
    QualifiedExpenses,
)
from .law_regime import LawRegimeConfig
from .pricing import compute_roi
from .validation import HIGH_ALLOCATION_PCT, LOW_ALLOCATION_PCT


CAPITALIZATION_WARNING = (
    "R&D expenses must be capitalized and amortized under Section 174; "
    "the credit's cash-flow impact differs from its nominal amount"
)


def _sha256_dict(payload: Dict[str, Any]) -> str:
    data = json.dumps(payload, sort_keys=True, default=str).encode("utf-8")
    return hashlib.sha256(data).hexdigest()


def _pct(rate: Decimal) -> str:
    return f"{(rate * 100).normalize():f}%"


def build_assumptions(inp: CalculationInput, asc: ASCComputation, regime: LawRegimeConfig) -> List[str]:
    method = "first-time" if asc.method == FilerStatus.FIRST_TIME else "repeat"
    assumptions = [
        f"{_pct(asc.credit_rate)} credit rate based on {method} filer status",
        f"{inp.rd_allocation_percentage}% of technical employee time spent on R&D activities",
        "All expenses are properly documented and qualify under Section 41",
    ]
    if inp.contractor_costs > 0:
        assumptions.append(
            f"Contractor costs limited to {_pct(regime.contractor_qualifying_fraction)} qualification per IRS rules"
        )
    if regime.capitalization_required:
        assumptions.append("Section 174 amortization rules apply - expenses capitalized over 5 years")
    return assumptions


def assess_confidence(inp: CalculationInput, advisory_warnings: Sequence[str]) -> Confidence:
    pct = inp.rd_allocation_percentage
    if not advisory_warnings and LOW_ALLOCATION_PCT <= pct <= HIGH_ALLOCATION_PCT:
        return Confidence.HIGH
    if len(advisory_warnings) <= 2:
        return Confidence.MEDIUM
    return Confidence.LOW


def compose(
    qre: QualifiedExpenses,
    federal_credit: Decimal,
    qsb_result: QSBEvaluation,
    tier_result: PricingAssignment,
    regime: LawRegimeConfig,
    *,
    inp: CalculationInput,
    asc: ASCComputation,
    advisory_warnings: Sequence[str] = (),
) -> CalculationResult:
    """Merge component outputs. Inputs are not modified; a new record is returned."""
    warnings = list(advisory_warnings)
    if regime.capitalization_required:
        warnings.append(CAPITALIZATION_WARNING)

    effective_rate = federal_credit / qre.total if qre.total > 0 else Decimal("0")

    # Capitalized R&D defers the deduction, so only the credit is cash now.
    if regime.capitalization_required:
        immediate_cash_impact = federal_credit
    else:
        immediate_cash_impact = federal_credit + qre.total

    fields: Dict[str, Any] = dict(
        qualified_expenses=qre,
        federal_credit=federal_credit,
        is_qsb_eligible=qsb_result.is_eligible,
        payroll_tax_offset=qsb_result.payroll_tax_offset,
        pricing_tier=tier_result.tier,
        pricing_amount=tier_result.amount,
        warnings=tuple(warnings),
        business_type=inp.business_type,
        section_280c_election=inp.section_280c_election,
        asc=asc,
        qsb=qsb_result,
        credit_options=credit_options(federal_credit, inp.section_280c_election),
        effective_credit_rate=effective_rate,
        roi=compute_roi(federal_credit, tier_result.amount, qsb_result),
        assumptions=tuple(build_assumptions(inp, asc, regime)),
        confidence=assess_confidence(inp, advisory_warnings),
        capitalization_required=regime.capitalization_required,
        immediate_cash_impact=immediate_cash_impact,
    )

    # Deterministic digest: no timestamps, so identical calls hash identically.
    digest = _sha256_dict({
        "inputs": inp.model_dump(mode="json"),
        "regime": regime.model_dump(mode="json"),
        "outputs": {
            k: (v.model_dump(mode="json") if hasattr(v, "model_dump") else v)
            for k, v in fields.items()
        },
    })
    provenance = CalculationProvenance(
        regime_id=regime.regime_id,
        ruleset_version=regime.ruleset_version,
        calculation_id=f"rdc_{inp.tax_year}_{digest[:12]}",
        calculation_sha256=digest,
    )
    return CalculationResult(provenance=provenance, **fields)
