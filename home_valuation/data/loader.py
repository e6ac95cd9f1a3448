"""Dataset loader for tabular listing sources."""

from __future__ import annotations

import csv
import logging
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import TextIO

import yaml

from .errors import ColumnConfigError, DataFormatError
from .models import BOOLEAN_FIELDS, FEATURE_ORDER, Dataset, LabeledSample

logger = logging.getLogger(__name__)

DEFAULT_COLUMN_CONFIG_PATH = Path(__file__).parent / "mappings" / "column_config.yaml"


@dataclass(frozen=True)
class ColumnMapping:
    """
    Explicit column positions for a tabular source.

    Positions are zero-based. Every feature in FEATURE_ORDER must be mapped;
    positions are never inferred from headers.
    """

    target: int
    features: dict[str, int] = field(default_factory=dict)

    def __post_init__(self) -> None:
        missing = [name for name in FEATURE_ORDER if name not in self.features]
        if missing:
            raise ColumnConfigError(f"Column mapping missing features: {missing}")

        unknown = sorted(set(self.features) - set(FEATURE_ORDER))
        if unknown:
            raise ColumnConfigError(f"Column mapping has unknown features: {unknown}")

        for name, position in [("target", self.target), *self.features.items()]:
            if not isinstance(position, int) or isinstance(position, bool):
                raise ColumnConfigError(
                    f"Column position for '{name}' must be an integer, got {position!r}"
                )
            if position < 0:
                raise ColumnConfigError(
                    f"Column position for '{name}' must be >= 0, got {position}"
                )


def load_column_mapping(config_path: Path | None = None) -> ColumnMapping:
    """
    Load a column mapping from YAML.

    Args:
        config_path: Path to column_config.yaml. If None, uses default location.

    Raises:
        ColumnConfigError: If the file is missing or malformed
    """
    if config_path is None:
        config_path = DEFAULT_COLUMN_CONFIG_PATH

    try:
        with open(config_path) as f:
            config = yaml.safe_load(f)
    except FileNotFoundError as e:
        raise ColumnConfigError(f"Column config not found: {config_path}") from e
    except yaml.YAMLError as e:
        raise ColumnConfigError(f"Invalid YAML in column config: {e}") from e

    if not isinstance(config, dict) or not {"target", "features"} <= config.keys():
        raise ColumnConfigError(
            f"Column config must define 'target' and 'features': {config_path}"
        )
    if not isinstance(config["features"], dict):
        raise ColumnConfigError("Column config 'features' must be a mapping")

    return ColumnMapping(target=config["target"], features=dict(config["features"]))


def load_dataset(
    source: str | Path | TextIO,
    columns: ColumnMapping | None = None,
    has_header: bool = True,
) -> Dataset:
    """
    Parse a CSV source into a Dataset.

    Args:
        source: Path to a CSV file or an open text stream
        columns: Column positions. If None, uses the packaged default mapping.
        has_header: Skip the first row when True

    Returns:
        Dataset with one row per source record

    Raises:
        DataFormatError: If any required field fails to parse, or no rows exist
    """
    if columns is None:
        columns = load_column_mapping()

    if isinstance(source, (str, Path)):
        path = Path(source)
        logger.info(f"Loading dataset from {path}")
        try:
            with open(path, newline="", encoding="utf-8") as f:
                dataset = _read(csv.reader(f), columns, has_header)
        except FileNotFoundError as e:
            raise DataFormatError(f"Dataset source not found: {path}") from e
    else:
        dataset = _read(csv.reader(source), columns, has_header)

    logger.info(f"Loaded {dataset!r}")
    return dataset


def _read(reader, columns: ColumnMapping, has_header: bool) -> Dataset:
    """Run _load_rows over a csv reader, turning decode and csv errors into DataFormatError."""
    try:
        return _load_rows(reader, columns, has_header)
    except (UnicodeDecodeError, csv.Error) as e:
        # line_num counts source lines consumed so far, header included
        consumed = reader.line_num
        if isinstance(e, csv.Error):
            # the failing line is already counted
            consumed -= 1
        row = max(consumed - (1 if has_header else 0), 0)
        raise DataFormatError(
            f"Row {row}: cannot read dataset near line {reader.line_num}: {e}",
            row=row,
        ) from e


def _load_rows(
    rows: Iterable[Sequence[str]],
    columns: ColumnMapping,
    has_header: bool,
) -> Dataset:
    samples: list[LabeledSample] = []

    iterator = iter(rows)
    if has_header:
        next(iterator, None)

    for index, row in enumerate(iterator):
        if not row:
            # csv yields [] for blank lines
            continue
        samples.append(
            LabeledSample(
                target=_parse_number(row, columns.target, "target", index),
                features=tuple(_parse_features(row, columns, index)),
            )
        )

    if not samples:
        raise DataFormatError("Dataset source has no data rows")

    return Dataset.from_samples(samples)


def _parse_features(row: Sequence[str], columns: ColumnMapping, index: int) -> list[float]:
    values = []
    for name in FEATURE_ORDER:
        position = columns.features[name]
        if name in BOOLEAN_FIELDS:
            values.append(_parse_flag(row, position))
        elif name == "floor":
            values.append(_parse_floor(row, position))
        else:
            values.append(_parse_number(row, position, name, index))
    return values


def _parse_number(row: Sequence[str], position: int, name: str, index: int) -> float:
    if position >= len(row):
        raise DataFormatError(
            f"Row {index}: missing required field '{name}' (column {position}, "
            f"row has {len(row)} columns)",
            row=index,
            field=name,
        )

    text = row[position].strip()
    try:
        value = float(text)
    except ValueError as e:
        raise DataFormatError(
            f"Row {index}: cannot parse field '{name}' from {text!r}",
            row=index,
            field=name,
        ) from e

    if not math.isfinite(value):
        raise DataFormatError(
            f"Row {index}: field '{name}' is not finite ({text!r})",
            row=index,
            field=name,
        )
    return value


def _parse_floor(row: Sequence[str], position: int) -> float:
    """Floor is optional: absent or unparseable values become 0.0."""
    if position >= len(row):
        return 0.0
    try:
        value = float(row[position].strip())
    except ValueError:
        return 0.0
    return value if math.isfinite(value) else 0.0


def _parse_flag(row: Sequence[str], position: int) -> float:
    """Only the exact text 'true' (after trimming) counts as set."""
    if position >= len(row):
        return 0.0
    return 1.0 if row[position].strip() == "true" else 0.0
