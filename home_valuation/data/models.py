"""Data models for property records and training datasets."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from .errors import DataFormatError

# Order is shared by the encoder and every persisted model.
# Changing it invalidates stored models.
FEATURE_ORDER: tuple[str, ...] = (
    "size",
    "floor",
    "latitude",
    "longitude",
    "has_lift",
    "price_per_area",
    "rooms",
    "bathrooms",
    "swimming_pool",
    "garden",
    "garage",
)

FEATURE_COUNT = len(FEATURE_ORDER)

BOOLEAN_FIELDS = frozenset({"has_lift", "swimming_pool", "garden", "garage"})


@dataclass(frozen=True)
class PropertyRecord:
    """
    Listing attributes of a single property.

    Values are already parsed upstream; only floor may be absent.
    """

    size: float
    latitude: float
    longitude: float
    price_per_area: float
    rooms: float
    bathrooms: float
    floor: float | None = None
    has_lift: bool = False
    swimming_pool: bool = False
    garden: bool = False
    garage: bool = False


@dataclass(frozen=True)
class LabeledSample:
    """One training record: target price plus its encoded feature vector."""

    target: float
    features: tuple[float, ...]


@dataclass(frozen=True)
class Dataset:
    """
    Immutable training dataset.

    Holds an (N, F) float64 feature matrix and an (N,) target vector.
    Both arrays are made read-only on construction; cross-validation
    works on index folds, never on in-place edits.
    """

    features: np.ndarray
    targets: np.ndarray

    def __post_init__(self) -> None:
        features = np.array(self.features, dtype=np.float64)
        targets = np.array(self.targets, dtype=np.float64).reshape(-1)

        if features.ndim != 2 or features.shape[1] != FEATURE_COUNT:
            raise DataFormatError(
                f"Feature matrix must have shape (N, {FEATURE_COUNT}), "
                f"got {features.shape}"
            )
        if features.shape[0] != targets.shape[0]:
            raise DataFormatError(
                f"Row count mismatch: features={features.shape[0]}, "
                f"targets={targets.shape[0]}"
            )
        if features.shape[0] == 0:
            raise DataFormatError("Dataset has no rows")

        features.setflags(write=False)
        targets.setflags(write=False)
        object.__setattr__(self, "features", features)
        object.__setattr__(self, "targets", targets)

    @classmethod
    def from_samples(cls, samples: Sequence[LabeledSample]) -> Dataset:
        """Build a dataset from labeled samples."""
        if not samples:
            raise DataFormatError("Dataset has no rows")
        return cls(
            features=np.array([s.features for s in samples], dtype=np.float64),
            targets=np.array([s.target for s in samples], dtype=np.float64),
        )

    def __len__(self) -> int:
        return int(self.features.shape[0])

    def __repr__(self) -> str:
        return f"Dataset({len(self)} samples, {self.feature_count} features)"

    @property
    def feature_count(self) -> int:
        return int(self.features.shape[1])
