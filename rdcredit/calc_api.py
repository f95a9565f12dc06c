"""
Calculation API endpoints for the R&D Tax Credit engine.

Provides:
- POST /calculate - Run a calculation under the active law regime
- GET /regimes - List supported regime ids
- GET /regimes/{regime_id} - Regime parameters
- GET /pricing/tiers - Service price table
- GET /pricing/tier?credit= - Tier for a given credit
"""

import logging
from decimal import Decimal
from typing import List

from fastapi import APIRouter, Depends, HTTPException, Query

from .credit_models import CalculationInput, CalculationResult, PricingAssignment, PricingTier
from .errors import ConfigurationError
from .engine import run_calculation
from .law_regime import LawRegimeConfig, list_regimes, regime_id_from_env, resolve_regime
from .pricing import PRICING_TIERS, assign_tier


calc_router = APIRouter(tags=["calculation"])
logger = logging.getLogger(__name__)

# Resolved once at process start; a bad LAW_REGIME fails the import.
ACTIVE_REGIME_ID = regime_id_from_env()
ACTIVE_REGIME = resolve_regime(ACTIVE_REGIME_ID)


def get_active_regime() -> LawRegimeConfig:
    """Dependency returning the process-wide regime (override in tests)."""
    return ACTIVE_REGIME


# ============================================================================
# POST /calculate
# ============================================================================

@calc_router.post("/calculate", response_model=CalculationResult)
def calculate_credit(
    payload: CalculationInput,
    regime: LawRegimeConfig = Depends(get_active_regime),
) -> CalculationResult:
    """
    Compute QREs, federal credit, payroll offset and pricing tier.

    Raises:
        422: If any field is out of range (ValidationError)
    """
    logger.info("HIT /calculate tax_year=%s regime=%s", payload.tax_year, regime.regime_id)
    return run_calculation(payload, regime)


# ============================================================================
# Regimes
# ============================================================================

@calc_router.get("/regimes")
def get_regimes(regime: LawRegimeConfig = Depends(get_active_regime)) -> dict:
    return {"active": regime.regime_id, "regimes": list_regimes()}


@calc_router.get("/regimes/{regime_id}", response_model=LawRegimeConfig)
def get_regime(regime_id: str) -> LawRegimeConfig:
    try:
        return resolve_regime(regime_id)
    except ConfigurationError as e:
        raise HTTPException(status_code=404, detail=str(e))


# ============================================================================
# Pricing
# ============================================================================

@calc_router.get("/pricing/tiers", response_model=List[PricingTier])
def get_pricing_tiers() -> List[PricingTier]:
    return list(PRICING_TIERS)


@calc_router.get("/pricing/tier", response_model=PricingAssignment)
def get_pricing_tier(credit: Decimal = Query(..., description="Federal credit amount")) -> PricingAssignment:
    return assign_tier(credit)


def setup_calc_routes(app):
    app.include_router(calc_router)
