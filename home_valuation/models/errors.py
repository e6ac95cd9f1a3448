"""Custom exceptions for model storage module."""

from __future__ import annotations

from ..errors import ValuationError


class ModelError(ValuationError):
    """Base exception for model-related errors."""

    stage = "store"


class ModelNotFoundError(ModelError):
    """
    Raised when no persisted model file exists.

    This is expected on a first run and signals that a model
    must be trained.
    """

    pass


class ModelCorruptError(ModelError):
    """
    Raised when the persisted model file cannot be deserialized.

    This can happen when:
    - File holds invalid JSON
    - Required keys are missing (schema mismatch)
    - Format version is not supported
    - Coefficient count doesn't match the recorded feature names
    - Coefficients or intercept are not finite numbers
    """

    pass
