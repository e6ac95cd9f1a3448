"""Custom exceptions for training module."""

from __future__ import annotations

from ..errors import ValuationError


class TrainingError(ValuationError):
    """Base exception for training-related errors."""

    stage = "select"


class NoViableModelError(TrainingError):
    """
    Raised when no hyperparameter candidate produced a usable model.

    This can happen when:
    - Every fold of every candidate failed to fit or score
    - The winning candidates all failed to refit on the full dataset
    """

    pass


class MetricsError(TrainingError):
    """
    Raised when a score cannot be computed.

    This can happen when:
    - Input arrays have different lengths or are empty
    - Predictions contain NaN or Inf
    - Held-out targets have zero variance, so R² is undefined
    """

    pass
