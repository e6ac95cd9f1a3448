"""
Residential property price estimation.

Elastic-net regression over a fixed 11-feature listing vector, selected
by grid search with k-fold cross-validation and persisted as a single
JSON model file.

Usage:
    from home_valuation import PropertyRecord, ValuationConfig, ValuationEngine

    engine = ValuationEngine(ValuationConfig(k_folds=5))
    model = engine.obtain_model("data/idealista_homes_spain.csv")
    price = engine.predict(model, PropertyRecord(size=85, latitude=40.41, ...))
"""

from .config import ValuationConfig
from .data import (
    DataFormatError,
    Dataset,
    PropertyRecord,
    encode,
    load_dataset,
)
from .errors import ConfigurationError, ValuationError
from .models import (
    ModelCorruptError,
    ModelNotFoundError,
    ModelStore,
    TrainedModel,
    predict,
)
from .orchestration import ValuationEngine
from .training import NoViableModelError, SelectorConfig, select

__version__ = "0.1.0"

__all__ = [
    # Engine (main entry point)
    "ValuationEngine",
    "ValuationConfig",
    # Core operations
    "encode",
    "load_dataset",
    "select",
    "SelectorConfig",
    "ModelStore",
    "predict",
    # Types
    "PropertyRecord",
    "Dataset",
    "TrainedModel",
    # Errors
    "ValuationError",
    "DataFormatError",
    "ConfigurationError",
    "NoViableModelError",
    "ModelNotFoundError",
    "ModelCorruptError",
]
