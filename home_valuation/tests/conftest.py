"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import csv
from collections.abc import Callable
from pathlib import Path
from typing import Any

import numpy as np
import pytest

from home_valuation.data import Dataset

# Column layout of the scraper's listings CSV
CSV_HEADER = [
    "property_code",
    "price",
    "size",
    "floor",
    "address",
    "province",
    "municipality",
    "district",
    "neighborhood",
    "latitude",
    "longitude",
    "has_lift",
    "price_by_area",
    "rooms",
    "bathrooms",
    "swimming_pool",
    "garden",
    "garage",
    "url",
]


def random_features(n_samples: int, seed: int = 42) -> np.ndarray:
    """
    Generate independent, realistic-looking listing features.

    Columns follow FEATURE_ORDER.
    """
    rng = np.random.default_rng(seed)
    return np.column_stack(
        [
            rng.uniform(40, 200, n_samples),  # size
            rng.integers(0, 10, n_samples),  # floor
            rng.uniform(36.0, 43.0, n_samples),  # latitude
            rng.uniform(-9.0, 3.0, n_samples),  # longitude
            rng.integers(0, 2, n_samples),  # has_lift
            rng.uniform(1000, 5000, n_samples),  # price_per_area
            rng.integers(1, 6, n_samples),  # rooms
            rng.integers(1, 4, n_samples),  # bathrooms
            rng.integers(0, 2, n_samples),  # swimming_pool
            rng.integers(0, 2, n_samples),  # garden
            rng.integers(0, 2, n_samples),  # garage
        ]
    ).astype(np.float64)


def linear_dataset(n_samples: int, noise: float = 0.0, seed: int = 42) -> Dataset:
    """Dataset where price = 100 * size + 5 * rooms (+ gaussian noise)."""
    features = random_features(n_samples, seed=seed)
    targets = 100.0 * features[:, 0] + 5.0 * features[:, 6]
    if noise:
        rng = np.random.default_rng(seed + 1)
        targets = targets + rng.normal(0.0, noise, n_samples)
    return Dataset(features=features, targets=targets)


def listing_row(**overrides: Any) -> list[str]:
    """Build one CSV row in scraper layout; keyword overrides use header names."""
    row = {
        "property_code": "12345",
        "price": "250000",
        "size": "85",
        "floor": "3",
        "address": "Calle Mayor",
        "province": "Madrid",
        "municipality": "Madrid",
        "district": "Centro",
        "neighborhood": "Sol",
        "latitude": "40.4168",
        "longitude": "-3.7038",
        "has_lift": "true",
        "price_by_area": "2941",
        "rooms": "3",
        "bathrooms": "2",
        "swimming_pool": "false",
        "garden": "false",
        "garage": "true",
        "url": "https://example.com/12345",
    }
    row.update({k: str(v) for k, v in overrides.items()})
    return [row[name] for name in CSV_HEADER]


def write_listings_csv(path: Path, rows: list[list[str]], header: bool = True) -> Path:
    """Write rows to a CSV file in scraper layout."""
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        if header:
            writer.writerow(CSV_HEADER)
        writer.writerows(rows)
    return path


def dataset_rows(dataset: Dataset) -> list[list[str]]:
    """Render a Dataset as CSV rows in scraper layout."""
    rows = []
    for features, target in zip(dataset.features, dataset.targets):
        size, floor, lat, lon, lift, ppa, rooms, baths, pool, garden, garage = features
        rows.append(
            listing_row(
                price=repr(float(target)),
                size=repr(float(size)),
                floor=int(floor),
                latitude=repr(float(lat)),
                longitude=repr(float(lon)),
                has_lift="true" if lift else "false",
                price_by_area=repr(float(ppa)),
                rooms=int(rooms),
                bathrooms=int(baths),
                swimming_pool="true" if pool else "false",
                garden="true" if garden else "false",
                garage="true" if garage else "false",
            )
        )
    return rows


@pytest.fixture
def noisy_dataset() -> Dataset:
    """20-row linear dataset with noise."""
    return linear_dataset(20, noise=50.0)


@pytest.fixture
def exact_dataset() -> Dataset:
    """60-row noiseless dataset: price = 100 * size + 5 * rooms."""
    return linear_dataset(60)


@pytest.fixture
def listings_csv(tmp_path: Path) -> Callable[..., Path]:
    """Factory writing a listings CSV from a Dataset into tmp_path."""

    def _write(dataset: Dataset, name: str = "listings.csv") -> Path:
        return write_listings_csv(tmp_path / name, dataset_rows(dataset))

    return _write


@pytest.fixture
def make_dataset() -> Callable[..., Dataset]:
    """Factory for linear datasets: make_dataset(n, noise=0.0, seed=42)."""
    return linear_dataset


@pytest.fixture
def make_row() -> Callable[..., list[str]]:
    """Factory for single CSV rows in scraper layout."""
    return listing_row


@pytest.fixture
def write_csv(tmp_path: Path) -> Callable[..., Path]:
    """Write raw rows to tmp_path/<name>: write_csv(rows, name=..., header=True)."""

    def _write(
        rows: list[list[str]], name: str = "listings.csv", header: bool = True
    ) -> Path:
        return write_listings_csv(tmp_path / name, rows, header=header)

    return _write
