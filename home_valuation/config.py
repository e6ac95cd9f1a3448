"""
Valuation configuration management.

Settings come from CLI flags, falling back to environment variables,
which may be loaded from a .env file.
"""

from __future__ import annotations

import argparse
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from dotenv import load_dotenv, set_key

from .errors import ConfigurationError
from .training.selector import (
    DEFAULT_K_FOLDS,
    DEFAULT_L1_RATIO_GRID,
    DEFAULT_PENALTY_GRID,
    SelectorConfig,
)

logger = logging.getLogger(__name__)

DEFAULT_ENV_PATH = Path(".env")


@dataclass(frozen=True)
class ValuationConfig:
    """Resolved settings for a training or prediction run."""

    dataset_path: Path = Path("data/idealista_homes_spain.csv")
    model_path: Path = Path("output/cervo_model.json")
    column_config_path: Path | None = None
    k_folds: int = DEFAULT_K_FOLDS
    penalty_grid: tuple[float, ...] = DEFAULT_PENALTY_GRID
    l1_ratio_grid: tuple[float, ...] = DEFAULT_L1_RATIO_GRID
    selector: SelectorConfig = field(default_factory=SelectorConfig)


def load_env(env_path: Path | None = None) -> None:
    """Load variables from a .env file without overriding the environment."""
    load_dotenv(env_path or DEFAULT_ENV_PATH, override=False)


def parse_grid(value: str) -> tuple[float, ...]:
    """Parse a comma-separated list of floats, e.g. '0.01,0.1,1.0'."""
    try:
        return tuple(float(v) for v in value.split(",") if v.strip())
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid grid {value!r}: {e}") from e


def _env_int(name: str, default: int) -> int:
    """Read an integer default from the environment, ignoring unparseable values."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"Ignoring {name}={value!r}: not an integer, using {default}")
        return default


def _env_grid(name: str, default: tuple[float, ...]) -> tuple[float, ...]:
    """Read a grid default from the environment, ignoring unparseable values."""
    value = os.environ.get(name)
    if value is None or not value.strip():
        return default
    try:
        return parse_grid(value)
    except argparse.ArgumentTypeError as e:
        logger.warning(f"Ignoring {name}: {e}")
        return default


def add_args(parser: argparse.ArgumentParser) -> None:
    """
    Add training arguments to the parser.

    Arguments can be overridden by environment variables.
    """

    parser.add_argument(
        "--data.path",
        dest="dataset_path",
        type=str,
        help="Path to the listings CSV used for training.",
        default=os.environ.get("DATASET_PATH", "data/idealista_homes_spain.csv"),
    )

    parser.add_argument(
        "--data.columns",
        dest="column_config_path",
        type=str,
        help="YAML file with column positions (default: packaged mapping).",
        default=os.environ.get("COLUMN_CONFIG_PATH") or None,
    )

    parser.add_argument(
        "--model.path",
        dest="model_path",
        type=str,
        help="Location of the persisted model file.",
        default=os.environ.get("MODEL_PATH", "output/cervo_model.json"),
    )

    parser.add_argument(
        "--k-folds",
        dest="k_folds",
        type=int,
        help="Number of cross-validation folds.",
        default=_env_int("K_FOLDS", DEFAULT_K_FOLDS),
    )

    parser.add_argument(
        "--grid.penalty",
        dest="penalty_grid",
        type=parse_grid,
        help="Comma-separated penalty strengths to search.",
        default=_env_grid("PENALTY_GRID", DEFAULT_PENALTY_GRID),
    )

    parser.add_argument(
        "--grid.l1_ratio",
        dest="l1_ratio_grid",
        type=parse_grid,
        help="Comma-separated L1 ratios to search.",
        default=_env_grid("L1_RATIO_GRID", DEFAULT_L1_RATIO_GRID),
    )

    parser.add_argument(
        "--max-workers",
        dest="max_workers",
        type=int,
        help="Threads used to score grid candidates.",
        default=_env_int("MAX_WORKERS", 1),
    )

    parser.add_argument(
        "--max-iter",
        dest="max_iter",
        type=int,
        help="Maximum solver iterations per fit.",
        default=_env_int("MAX_ITER", 10_000),
    )

    parser.add_argument(
        "--log_level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level.",
        default=os.environ.get("LOG_LEVEL", "INFO"),
    )


def config_from_args(args: argparse.Namespace) -> ValuationConfig:
    """Build a ValuationConfig from parsed arguments."""
    return ValuationConfig(
        dataset_path=Path(args.dataset_path),
        model_path=Path(args.model_path),
        column_config_path=(
            Path(args.column_config_path) if args.column_config_path else None
        ),
        k_folds=args.k_folds,
        penalty_grid=tuple(args.penalty_grid),
        l1_ratio_grid=tuple(args.l1_ratio_grid),
        selector=SelectorConfig(
            max_iter=args.max_iter,
            max_workers=args.max_workers,
        ),
    )


def check_config(config: ValuationConfig) -> None:
    """
    Validate configuration.

    Raises:
        ConfigurationError: If configuration is invalid.
    """
    if config.k_folds < 2:
        raise ConfigurationError(f"--k-folds must be >= 2, got {config.k_folds}")

    if not config.penalty_grid:
        raise ConfigurationError("--grid.penalty must list at least one value")

    if not config.l1_ratio_grid:
        raise ConfigurationError("--grid.l1_ratio must list at least one value")

    if any(v < 0 for v in config.penalty_grid):
        raise ConfigurationError("--grid.penalty values must be >= 0")

    if any(not 0.0 <= v <= 1.0 for v in config.l1_ratio_grid):
        raise ConfigurationError("--grid.l1_ratio values must be in [0, 1]")

    if config.selector.max_workers < 1:
        raise ConfigurationError("--max-workers must be >= 1")

    if config.selector.max_iter < 1:
        raise ConfigurationError("--max-iter must be >= 1")


def config_to_dict(config: ValuationConfig) -> dict[str, Any]:
    """Convert config to dictionary for logging."""
    return {
        "dataset_path": str(config.dataset_path),
        "model_path": str(config.model_path),
        "column_config_path": (
            str(config.column_config_path) if config.column_config_path else None
        ),
        "k_folds": config.k_folds,
        "penalty_grid": list(config.penalty_grid),
        "l1_ratio_grid": list(config.l1_ratio_grid),
        "max_workers": config.selector.max_workers,
        "max_iter": config.selector.max_iter,
    }


def persist_setting(key: str, value: str, env_path: Path | None = None) -> Path:
    """
    Write a setting back to the .env file so later runs reuse it.

    Creates the file if needed. Returns the path written.
    """
    env_path = env_path or DEFAULT_ENV_PATH
    env_path.touch(exist_ok=True)
    set_key(str(env_path), key, value, quote_mode="never")
    return env_path


def setup_logging(level: str) -> None:
    """Configure logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)s | %(name)s | %(message)s",
    )
