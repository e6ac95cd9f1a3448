"""
This module provides the regression metrics used during model selection:
- R²: Coefficient of Determination (the cross-validation score)
- MAE: Mean Absolute Error
- RMSE: Root Mean Squared Error

Scoring convention:
    Candidates are ranked by mean R² across folds, higher is better.
    MAE and RMSE are only reported as diagnostics for the final refit.
"""

from __future__ import annotations

import numpy as np

from .errors import MetricsError
from .models import FitMetrics


def r2_score(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """
    Calculate R² (Coefficient of Determination).

    Formula: R² = 1 - (SS_res / SS_tot)
    where SS_res = sum((y_true - y_pred)²)
    and SS_tot = sum((y_true - mean(y_true))²)

    Args:
        y_true: Ground truth prices
        y_pred: Predicted prices

    Returns:
        R² value (can be negative if model is worse than mean)

    Raises:
        MetricsError: If inputs are invalid or SS_tot is zero
    """
    y_true, y_pred = _validate(y_true, y_pred)

    ss_res = np.sum((y_true - y_pred) ** 2)
    ss_tot = np.sum((y_true - np.mean(y_true)) ** 2)

    if ss_tot == 0:
        raise MetricsError("R² undefined: ground truth values are all identical")

    return float(1 - (ss_res / ss_tot))


def calculate_metrics(y_true: np.ndarray, y_pred: np.ndarray) -> FitMetrics:
    """
    Calculate diagnostic metrics for a set of predictions.

    R² is None when the ground truth has zero variance.

    Raises:
        MetricsError: If arrays have different lengths, are empty or hold NaN/Inf
    """
    y_true, y_pred = _validate(y_true, y_pred)

    try:
        r2: float | None = r2_score(y_true, y_pred)
    except MetricsError:
        r2 = None

    return FitMetrics(
        mae=_calculate_mae(y_true, y_pred),
        rmse=_calculate_rmse(y_true, y_pred),
        r2=r2,
        n_samples=len(y_true),
    )


def _validate(y_true: np.ndarray, y_pred: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    y_true = np.asarray(y_true, dtype=np.float64).flatten()
    y_pred = np.asarray(y_pred, dtype=np.float64).flatten()

    if len(y_true) != len(y_pred):
        raise MetricsError(
            f"Array length mismatch: y_true={len(y_true)}, y_pred={len(y_pred)}"
        )

    if len(y_true) == 0:
        raise MetricsError("Empty input arrays")

    if not np.all(np.isfinite(y_pred)):
        raise MetricsError("Predictions contain NaN or Inf")

    return y_true, y_pred


def _calculate_mae(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Mean Absolute Error in currency units."""
    return float(np.mean(np.abs(y_true - y_pred)))


def _calculate_rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    """Root Mean Squared Error in currency units."""
    return float(np.sqrt(np.mean((y_true - y_pred) ** 2)))
