"""Price prediction from a fitted model."""

from __future__ import annotations

import numpy as np

from ..errors import ConfigurationError
from .models import TrainedModel


def predict(model: TrainedModel, feature_vector: np.ndarray) -> float:
    """
    Predict the price of a single property.

    Args:
        model: Fitted model
        feature_vector: Encoded features, shape (F,)

    Returns:
        Estimated price

    Raises:
        ConfigurationError: If the vector width doesn't match the model.
            This means the model was trained on a different feature set.
    """
    vector = np.asarray(feature_vector, dtype=np.float64).reshape(-1)
    _check_width(model, vector.shape[0])
    return float(model.predict(vector))


def predict_batch(model: TrainedModel, features: np.ndarray) -> np.ndarray:
    """Predict prices for an (N, F) feature matrix."""
    matrix = np.asarray(features, dtype=np.float64)
    if matrix.ndim != 2:
        raise ConfigurationError(
            f"Feature matrix must be 2D, got shape {matrix.shape}", stage="predict"
        )
    _check_width(model, matrix.shape[1])
    return model.predict(matrix)


def _check_width(model: TrainedModel, width: int) -> None:
    if width != model.feature_count:
        raise ConfigurationError(
            f"Feature width mismatch: model expects {model.feature_count} "
            f"features, got {width}. Retrain the model for the current encoder.",
            stage="predict",
        )
