"""Single-file persistence for the active model."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path

from .errors import ModelCorruptError, ModelError, ModelNotFoundError
from .models import TrainedModel

logger = logging.getLogger(__name__)


class ModelStore:
    """
    Persist the latest trained model as a single JSON file.

    Every save overwrites the previous model; there is no versioning.
    Writes go to a temp file in the same directory and are moved into
    place with os.replace, so a failed save never leaves a truncated
    model behind.

    Only one training run should write at a time. Loads are read-only
    and safe to run concurrently.
    """

    def __init__(self, path: Path):
        """
        Initialize model store.

        Args:
            path: Location of the persisted model file
        """
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def exists(self) -> bool:
        return self._path.is_file()

    def save(self, model: TrainedModel) -> Path:
        """
        Serialize model to the store path, replacing any existing file.

        Returns:
            Path to the saved model
        """
        self._path.parent.mkdir(parents=True, exist_ok=True)

        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{self._path.name}.", suffix=".tmp", dir=self._path.parent
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(model.to_dict(), f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_name, self._path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise ModelError(f"Failed to save model to {self._path}: {e}") from e
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        logger.info(
            f"Saved model to {self._path} "
            f"(penalty={model.penalty}, l1_ratio={model.l1_ratio})"
        )
        return self._path

    def load(self) -> TrainedModel:
        """
        Deserialize the persisted model.

        Raises:
            ModelNotFoundError: If no model file exists
            ModelCorruptError: If the file cannot be parsed into a model
        """
        try:
            with open(self._path, encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise ModelNotFoundError(f"No saved model at {self._path}") from e
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise ModelCorruptError(f"Invalid model file {self._path}: {e}") from e
        except OSError as e:
            raise ModelError(f"Cannot read model file {self._path}: {e}") from e

        model = TrainedModel.from_dict(data)
        logger.info(f"Loaded model from {self._path}")
        return model

    def delete(self) -> bool:
        """
        Remove the persisted model.

        Returns:
            True if removed, False if not found
        """
        if self._path.exists():
            self._path.unlink()
            logger.info(f"Removed saved model {self._path}")
            return True
        return False
