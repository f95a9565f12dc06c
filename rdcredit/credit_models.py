"""R&D credit calculation data model.

Goal: represent caller input and the computed result in a strict, auditable
structure.

Design principles:
- Every record is immutable (frozen); a calculation builds new records.
- Currency is Decimal and is never rounded here; presentation rounds.
- Input models check types only. Range checks live in validation.py so that
  out-of-range values fail with the engine's own ValidationError.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum
from typing import Optional, Tuple

from pydantic import BaseModel, ConfigDict


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class BusinessType(str, Enum):
    # Used for narrative generation downstream, not for math.
    TECHNOLOGY = "technology"
    MANUFACTURING = "manufacturing"
    HEALTHCARE = "healthcare"
    FINANCIAL = "financial"
    RETAIL = "retail"
    CONSULTING = "consulting"
    OTHER = "other"


class Section280CChoice(str, Enum):
    FULL = "full"        # do not elect reduced credit
    REDUCED = "reduced"  # elect reduced credit


class FilerStatus(str, Enum):
    FIRST_TIME = "first_time"  # 6% of current QREs
    REPEAT = "repeat"          # ASC: 14% of QREs over half the 3-year average


class Confidence(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


# ============================================================================
# Input
# ============================================================================

class CalculationInput(_Frozen):
    """Reported activity and expense data for one tax year."""

    business_type: BusinessType = BusinessType.OTHER

    # QSB eligibility
    current_year_revenue: Decimal = Decimal("0")
    year_of_first_revenue: int
    has_income_tax_liability: bool = False
    quarterly_payroll_tax: Decimal = Decimal("0")

    # R&D team
    technical_employee_count: int = 0
    average_technical_salary: Decimal = Decimal("0")
    rd_allocation_percentage: Decimal = Decimal("0")

    # Other expenses
    contractor_costs: Decimal = Decimal("0")
    supplies_costs: Decimal = Decimal("0")
    software_costs: Decimal = Decimal("0")
    cloud_costs: Decimal = Decimal("0")

    # ASC history, most recent year first
    prior_year_qres: Tuple[Decimal, ...] = ()
    is_first_time_filer: bool = True

    section_280c_election: Section280CChoice = Section280CChoice.FULL
    tax_year: int

    @property
    def filer_status(self) -> FilerStatus:
        return FilerStatus.FIRST_TIME if self.is_first_time_filer else FilerStatus.REPEAT


# ============================================================================
# Component outputs
# ============================================================================

class QualifiedExpenses(_Frozen):
    """QRE components. total == wages + contractors + supplies + software_and_cloud."""

    wages: Decimal
    contractors: Decimal
    supplies: Decimal
    software_and_cloud: Decimal
    total: Decimal


class ASCComputation(_Frozen):
    """Intermediate values of the credit computation."""

    method: FilerStatus
    current_year_qre: Decimal
    prior_year_average: Decimal = Decimal("0")
    base_amount: Decimal = Decimal("0")
    excess_qre: Decimal
    credit_rate: Decimal
    calculated_credit: Decimal


class Section280COptions(_Frozen):
    """Full vs reduced credit comparison. Informational; never alters the credit."""

    election: Section280CChoice
    full_credit: Decimal
    reduced_credit: Decimal
    deduction_reduction: Decimal


class QSBEvaluation(_Frozen):
    is_eligible: bool
    payroll_tax_offset: Decimal
    years_since_first_revenue: int
    ineligibility_reasons: Tuple[str, ...] = ()
    offset_available: bool = False
    quarterly_offset: Decimal = Decimal("0")


class PricingTier(_Frozen):
    """One row of the service price table, covering [min_credit, max_credit)."""

    tier: int
    name: str
    min_credit: Decimal
    max_credit: Optional[Decimal] = None  # None = unbounded
    price: Decimal


class PricingAssignment(_Frozen):
    tier: int
    name: str
    amount: Decimal


class ROI(_Frozen):
    credit_amount: Decimal
    service_cost: Decimal
    roi_multiple: Decimal
    net_benefit: Decimal  # may be negative for small credits
    payback_days: Optional[int] = None  # None = credit never covers the fee


class CalculationProvenance(_Frozen):
    """Auditability: which rules produced the numbers, plus a content digest."""

    regime_id: str
    ruleset_version: str
    calculation_id: str
    calculation_sha256: str


# ============================================================================
# Result
# ============================================================================

class CalculationResult(_Frozen):
    qualified_expenses: QualifiedExpenses
    federal_credit: Decimal
    is_qsb_eligible: bool
    payroll_tax_offset: Decimal
    pricing_tier: int
    pricing_amount: Decimal
    warnings: Tuple[str, ...] = ()

    # Pass-through and supporting detail
    business_type: BusinessType
    section_280c_election: Section280CChoice
    asc: ASCComputation
    qsb: QSBEvaluation
    credit_options: Section280COptions
    effective_credit_rate: Decimal
    roi: ROI
    assumptions: Tuple[str, ...] = ()
    confidence: Confidence
    capitalization_required: bool
    immediate_cash_impact: Decimal
    provenance: CalculationProvenance
