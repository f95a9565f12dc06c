"""Service pricing tiers keyed by federal credit.

Tiers are half-open [min, max): a credit of exactly 5,000.00 is tier 1.
"""

from __future__ import annotations

from bisect import bisect_right
from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional, Tuple

from .credit_models import ROI, PricingAssignment, PricingTier, QSBEvaluation
from .errors import ValidationError


def _tier(tier: int, name: str, lo: int, hi, price: int) -> PricingTier:
    return PricingTier(
        tier=tier,
        name=name,
        min_credit=Decimal(lo),
        max_credit=None if hi is None else Decimal(hi),
        price=Decimal(price),
    )


PRICING_TIERS: Tuple[PricingTier, ...] = (
    _tier(0, "Starter", 0, 5000, 399),
    _tier(1, "Growth", 5000, 10000, 500),
    _tier(2, "Professional", 10000, 20000, 750),
    _tier(3, "Scale", 20000, 35000, 1000),
    _tier(4, "Advanced", 35000, 50000, 1250),
    _tier(5, "Premium", 50000, 100000, 1500),
    _tier(6, "Elite", 100000, 200000, 2000),
    _tier(7, "Enterprise", 200000, None, 2500),
)

_LOWER_BOUNDS: List[Decimal] = [t.min_credit for t in PRICING_TIERS]

DAYS_PER_YEAR = Decimal("365")
DAYS_PER_MONTH = Decimal("30")


def tier_for(federal_credit: Decimal) -> PricingTier:
    if federal_credit < 0:
        raise ValidationError([f"federal_credit must be a non-negative number (got {federal_credit})"])
    # Rightmost tier whose lower bound is <= credit.
    return PRICING_TIERS[bisect_right(_LOWER_BOUNDS, federal_credit) - 1]


def assign_tier(federal_credit: Decimal) -> PricingAssignment:
    t = tier_for(federal_credit)
    return PricingAssignment(tier=t.tier, name=t.name, amount=t.price)


def _whole_days(days: Decimal) -> int:
    return int(days.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def compute_roi(
    federal_credit: Decimal,
    service_cost: Decimal,
    qsb_result: Optional[QSBEvaluation] = None,
) -> ROI:
    """Return on the service fee, with payback timed by when the cash arrives.

    With a payroll offset the benefit lands quarterly, so payback is the fee
    over the monthly offset (30-day months). Otherwise the credit is realized
    annually and payback is 365 days over the ROI multiple. No fee means
    immediate payback; no credit means no payback (None).
    """
    multiple = federal_credit / service_cost if service_cost > 0 else Decimal("0")

    if service_cost <= 0:
        payback_days: Optional[int] = 0
    elif qsb_result is not None and qsb_result.offset_available and qsb_result.quarterly_offset > 0:
        # fee / (quarterly / 3) months
        payback_days = _whole_days(service_cost * 3 * DAYS_PER_MONTH / qsb_result.quarterly_offset)
    elif federal_credit > 0:
        # 365 / roi_multiple
        payback_days = _whole_days(DAYS_PER_YEAR * service_cost / federal_credit)
    else:
        payback_days = None

    return ROI(
        credit_amount=federal_credit,
        service_cost=service_cost,
        roi_multiple=multiple,
        net_benefit=federal_credit - service_cost,
        payback_days=payback_days,
    )
