"""Data module for property feature encoding and dataset loading."""

from .errors import (
    ColumnConfigError,
    DataError,
    DataFormatError,
)
from .feature_encoder import decode, encode, encode_batch, get_feature_names
from .loader import (
    DEFAULT_COLUMN_CONFIG_PATH,
    ColumnMapping,
    load_column_mapping,
    load_dataset,
)
from .models import (
    FEATURE_COUNT,
    FEATURE_ORDER,
    Dataset,
    LabeledSample,
    PropertyRecord,
)

__all__ = [
    # Errors
    "DataError",
    "DataFormatError",
    "ColumnConfigError",
    # Feature encoding
    "encode",
    "encode_batch",
    "decode",
    "get_feature_names",
    "FEATURE_ORDER",
    "FEATURE_COUNT",
    # Loading
    "ColumnMapping",
    "DEFAULT_COLUMN_CONFIG_PATH",
    "load_column_mapping",
    "load_dataset",
    # Models
    "Dataset",
    "LabeledSample",
    "PropertyRecord",
]
