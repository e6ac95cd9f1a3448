"""Base exceptions shared across the valuation package."""

from __future__ import annotations


class ValuationError(Exception):
    """
    Base exception for all valuation errors.

    Carries the pipeline stage that failed ("load", "select", "store"
    or "predict") so callers can report where a run broke.
    """

    stage: str | None = None

    def __init__(self, message: str, stage: str | None = None):
        super().__init__(message)
        if stage is not None:
            self.stage = stage

    def __str__(self) -> str:
        message = super().__str__()
        if self.stage:
            return f"[{self.stage}] {message}"
        return message


class ConfigurationError(ValuationError):
    """
    Raised when caller-supplied configuration is invalid.

    This can happen when:
    - Fold count is below 2 or above the number of samples
    - Hyperparameter grid is empty or holds out-of-range values
    - A model's feature width doesn't match the current encoder
    """

    pass
