"""Data models for fitted regression models."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

import numpy as np

from ..data.models import FEATURE_ORDER
from .errors import ModelCorruptError

FORMAT_VERSION = 1


@dataclass(frozen=True)
class TrainedModel:
    """
    Fitted elastic-net regression state.

    Immutable once fitted. Callers only need predict() and the
    to_dict()/from_dict() pair; the coefficients stay an internal detail.
    """

    coefficients: tuple[float, ...]
    intercept: float
    penalty: float
    l1_ratio: float
    feature_names: tuple[str, ...] = FEATURE_ORDER

    @classmethod
    def from_estimator(
        cls,
        estimator: Any,
        penalty: float,
        l1_ratio: float,
        feature_names: tuple[str, ...] = FEATURE_ORDER,
    ) -> TrainedModel:
        """Capture the state of a fitted scikit-learn linear estimator."""
        coef = np.asarray(estimator.coef_, dtype=np.float64).reshape(-1)
        return cls(
            coefficients=tuple(float(c) for c in coef),
            intercept=float(np.asarray(estimator.intercept_).reshape(-1)[0]),
            penalty=float(penalty),
            l1_ratio=float(l1_ratio),
            feature_names=tuple(feature_names),
        )

    @property
    def feature_count(self) -> int:
        return len(self.coefficients)

    def predict(self, features: np.ndarray) -> np.ndarray:
        """Apply the linear form to an (N, F) matrix or a single (F,) vector."""
        return np.asarray(features, dtype=np.float64) @ np.asarray(
            self.coefficients, dtype=np.float64
        ) + self.intercept

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "format_version": FORMAT_VERSION,
            "feature_names": list(self.feature_names),
            "coefficients": list(self.coefficients),
            "intercept": self.intercept,
            "penalty": self.penalty,
            "l1_ratio": self.l1_ratio,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> TrainedModel:
        """
        Create from dictionary (JSON deserialization).

        Raises:
            ModelCorruptError: If the payload doesn't match the schema
        """
        if not isinstance(data, dict):
            raise ModelCorruptError(
                f"Model payload must be an object, got {type(data).__name__}"
            )

        version = data.get("format_version")
        if version != FORMAT_VERSION:
            raise ModelCorruptError(f"Unsupported model format version: {version!r}")

        try:
            feature_names = tuple(str(name) for name in data["feature_names"])
            coefficients = tuple(float(c) for c in data["coefficients"])
            intercept = float(data["intercept"])
            penalty = float(data["penalty"])
            l1_ratio = float(data["l1_ratio"])
        except KeyError as e:
            raise ModelCorruptError(f"Model payload missing key: {e}") from e
        except (TypeError, ValueError) as e:
            raise ModelCorruptError(f"Invalid value in model payload: {e}") from e

        if len(coefficients) != len(feature_names):
            raise ModelCorruptError(
                f"Model has {len(coefficients)} coefficients "
                f"but {len(feature_names)} feature names"
            )

        if feature_names != FEATURE_ORDER:
            raise ModelCorruptError(
                f"Model feature names {list(feature_names)} don't match "
                f"the encoder order {list(FEATURE_ORDER)}"
            )

        if not all(math.isfinite(v) for v in (*coefficients, intercept)):
            raise ModelCorruptError("Model coefficients must be finite")

        return cls(
            coefficients=coefficients,
            intercept=intercept,
            penalty=penalty,
            l1_ratio=l1_ratio,
            feature_names=feature_names,
        )
