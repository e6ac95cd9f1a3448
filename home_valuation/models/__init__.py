"""
Model management module.

Provides the fitted model type, single-file persistence and prediction.

Usage:
    from home_valuation.models import ModelStore, predict

    store = ModelStore(Path("output/cervo_model.json"))
    model = store.load()
    price = predict(model, features)
"""

from .errors import ModelCorruptError, ModelError, ModelNotFoundError
from .models import FORMAT_VERSION, TrainedModel
from .predictor import predict, predict_batch
from .store import ModelStore

__all__ = [
    # Models
    "TrainedModel",
    "FORMAT_VERSION",
    # Persistence
    "ModelStore",
    # Prediction
    "predict",
    "predict_batch",
    # Errors
    "ModelError",
    "ModelNotFoundError",
    "ModelCorruptError",
]
