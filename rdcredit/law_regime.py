"""Law regime table.

Each regime is a named, versioned set of numeric parameters reflecting which
version of tax law is in effect. The table is fixed at import; a regime is
selected by id and passed explicitly into every calculation.
"""

from __future__ import annotations

import os
from decimal import Decimal
from typing import Dict, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict

from .errors import ConfigurationError


DEFAULT_REGIME_ID = "immediate_expensing"
REGIME_ENV_VAR = "LAW_REGIME"


class LawRegimeConfig(BaseModel):
    model_config = ConfigDict(frozen=True)

    regime_id: str
    description: str
    ruleset_version: str

    capitalization_required: bool  # Section 174 capitalize/amortize
    payroll_offset_enabled: bool
    max_payroll_offset: Decimal
    credit_rate_first_time: Decimal = Decimal("0.06")
    credit_rate_repeat: Decimal = Decimal("0.14")
    contractor_qualifying_fraction: Decimal = Decimal("0.65")


REGIMES: Dict[str, LawRegimeConfig] = {
    "immediate_expensing": LawRegimeConfig(
        regime_id="immediate_expensing",
        description="Domestic R&D expensed immediately (tax years 2025+)",
        ruleset_version="2025.1",
        capitalization_required=False,
        payroll_offset_enabled=True,
        max_payroll_offset=Decimal("500000"),
    ),
    "capitalize_amortize": LawRegimeConfig(
        regime_id="capitalize_amortize",
        description="Section 174 capitalization and 5-year amortization (tax years 2022-2024)",
        ruleset_version="2022.1",
        capitalization_required=True,
        payroll_offset_enabled=True,
        max_payroll_offset=Decimal("500000"),
    ),
    "proposed": LawRegimeConfig(
        regime_id="proposed",
        description="Pending legislation: higher ASC rates, contractor share and offset cap",
        ruleset_version="proposed.1",
        capitalization_required=False,
        payroll_offset_enabled=True,
        max_payroll_offset=Decimal("1000000"),
        credit_rate_first_time=Decimal("0.08"),
        credit_rate_repeat=Decimal("0.16"),
        contractor_qualifying_fraction=Decimal("0.75"),
    ),
}


def list_regimes() -> List[str]:
    return list(REGIMES)


def resolve_regime(regime_id: Optional[str] = None) -> LawRegimeConfig:
    """Look up a regime by id.

    Only an absent id (None) falls back to the default. A present but
    unknown id, including "", is a configuration defect.
    """
    if regime_id is None:
        return REGIMES[DEFAULT_REGIME_ID]
    try:
        return REGIMES[regime_id]
    except KeyError:
        raise ConfigurationError(
            f"Unknown law regime {regime_id!r}. Supported: {', '.join(REGIMES)}"
        ) from None


def regime_id_from_env(environ: Optional[Mapping[str, str]] = None) -> Optional[str]:
    """Read the active regime id from LAW_REGIME; unset or blank means absent."""
    env = os.environ if environ is None else environ
    value = (env.get(REGIME_ENV_VAR) or "").strip()
    return value or None
