"""
Valuation engine coordinating loading, selection, storage and prediction.

The three caller-facing operations are:
- obtain_model: load the stored model, training one if none exists
- force_retrain: always train and overwrite the stored model
- predict: price a property with a given model
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TextIO

from ..config import ValuationConfig
from ..data.feature_encoder import PropertyLike, encode
from ..data.loader import load_column_mapping, load_dataset
from ..models.errors import ModelNotFoundError
from ..models.models import TrainedModel
from ..models.predictor import predict as predict_features
from ..models.store import ModelStore
from ..training.models import SelectionResult
from ..training.selector import select

logger = logging.getLogger(__name__)

Source = str | Path | TextIO


class ValuationEngine:
    """
    Obtain, retrain and apply the price model.

    Coordinates:
    - Dataset loading from the configured CSV
    - Grid search model selection
    - Single-file model persistence
    - Prediction for encoded properties

    Usage:
        engine = ValuationEngine(ValuationConfig())
        model = engine.obtain_model()
        price = engine.predict(model, PropertyRecord(...))

    A missing model file triggers training. A corrupt model file is
    raised to the caller, who decides whether to retrain.
    """

    def __init__(
        self,
        config: ValuationConfig | None = None,
        store: ModelStore | None = None,
    ):
        """
        Initialize engine.

        Args:
            config: Valuation settings. Defaults to ValuationConfig().
            store: Model store. Defaults to one at config.model_path.
        """
        self._config = config or ValuationConfig()
        self._store = store or ModelStore(self._config.model_path)
        self._last_selection: SelectionResult | None = None

    @property
    def config(self) -> ValuationConfig:
        return self._config

    @property
    def store(self) -> ModelStore:
        return self._store

    @property
    def last_selection(self) -> SelectionResult | None:
        """Diagnostics of the most recent training run, if any."""
        return self._last_selection

    def obtain_model(self, source: Source | None = None) -> TrainedModel:
        """
        Load the saved model, or train and save a new one if none exists.

        Args:
            source: Training data. Defaults to config.dataset_path.

        Raises:
            ModelCorruptError: If the saved model cannot be read
            DataFormatError, ConfigurationError, NoViableModelError: If training fails
        """
        try:
            model = self._store.load()
            logger.info("Loaded existing trained model")
            return model
        except ModelNotFoundError:
            logger.warning("No saved model found. Training a new one...")

        return self.force_retrain(source)

    def force_retrain(self, source: Source | None = None) -> TrainedModel:
        """
        Train a model from scratch and overwrite the saved one.

        The saved model is only replaced after selection succeeds.
        """
        source = source if source is not None else self._config.dataset_path
        logger.info("Training a new model... This may take some time.")

        columns = load_column_mapping(self._config.column_config_path)
        dataset = load_dataset(source, columns)

        result = select(
            dataset,
            k_folds=self._config.k_folds,
            penalty_grid=self._config.penalty_grid,
            l1_ratio_grid=self._config.l1_ratio_grid,
            config=self._config.selector,
        )
        self._store.save(result.model)
        self._last_selection = result

        logger.info(f"Model training complete. Saved to {self._store.path}")
        return result.model

    def predict(self, model: TrainedModel, prop: PropertyLike) -> float:
        """
        Estimate the price of a property.

        Raises:
            ConfigurationError: If the model was trained on a different feature set
        """
        return predict_features(model, encode(prop))

    def predict_price(self, prop: PropertyLike, source: Source | None = None) -> float:
        """Obtain a usable model, then price the property with it."""
        return self.predict(self.obtain_model(source), prop)
