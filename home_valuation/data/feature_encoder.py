"""Feature encoder for converting property records to model input."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from dataclasses import asdict
from typing import Any

import numpy as np

from .errors import DataFormatError
from .models import BOOLEAN_FIELDS, FEATURE_COUNT, FEATURE_ORDER, PropertyRecord

logger = logging.getLogger(__name__)

PropertyLike = PropertyRecord | Mapping[str, Any]


def encode(record: PropertyLike) -> np.ndarray:
    """
    Encode a single property into a fixed-order feature vector.

    Args:
        record: PropertyRecord or mapping with the same field names

    Returns:
        np.ndarray of shape (11,), dtype float64, in FEATURE_ORDER

    Raises:
        DataFormatError: If a required field is missing from a mapping
    """
    fields = asdict(record) if isinstance(record, PropertyRecord) else record

    vector = []
    for name in FEATURE_ORDER:
        value = fields.get(name)
        if name in BOOLEAN_FIELDS:
            vector.append(1.0 if value else 0.0)
        elif name == "floor":
            vector.append(0.0 if value is None else float(value))
        else:
            if value is None:
                raise DataFormatError(
                    f"Missing required field: '{name}'", field=name, stage="predict"
                )
            vector.append(float(value))

    return np.array(vector, dtype=np.float64)


def encode_batch(records: Iterable[PropertyLike]) -> np.ndarray:
    """
    Encode a batch of properties.

    Returns:
        np.ndarray of shape (len(records), 11), dtype float64
    """
    rows = [encode(record) for record in records]
    if not rows:
        return np.empty((0, FEATURE_COUNT), dtype=np.float64)

    result = np.vstack(rows)
    logger.debug(f"Encoded to array shape {result.shape}")
    return result


def decode(vector: Iterable[float]) -> dict[str, float]:
    """Map a feature vector back to field names by position."""
    values = [float(v) for v in vector]
    if len(values) != FEATURE_COUNT:
        raise DataFormatError(
            f"Feature vector must have {FEATURE_COUNT} values, got {len(values)}"
        )
    return dict(zip(FEATURE_ORDER, values))


def get_feature_names() -> list[str]:
    """Return ordered list of feature names."""
    return list(FEATURE_ORDER)
