"""Error taxonomy for the calculation engine."""

from __future__ import annotations

from typing import Iterable, Tuple


class ValidationError(ValueError):
    """Caller supplied out-of-range input. Carries every violation found."""

    def __init__(self, errors: Iterable[str]):
        self.errors: Tuple[str, ...] = tuple(errors)
        super().__init__("; ".join(self.errors) or "invalid calculation input")


class ConfigurationError(ValueError):
    """Deployment defect, e.g. an unknown law regime id. Not retryable."""
