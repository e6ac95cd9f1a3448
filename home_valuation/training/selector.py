"""
Elastic-net model selection by grid search with k-fold cross-validation.

Every (penalty, l1_ratio) pair in the grid is scored by mean R² over k
folds. The best candidate is refit on the entire dataset and returned
as a TrainedModel.

Usage:
    from home_valuation.training import select

    result = select(dataset, k_folds=5)
    print(result.candidate, result.cv_score)
    price = result.model.predict(features)
"""

from __future__ import annotations

import logging
import math
import numbers
import time
from collections.abc import Iterable, Iterator
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass

import numpy as np
from sklearn.linear_model import ElasticNet
from sklearn.model_selection import KFold

from ..data.models import Dataset
from ..errors import ConfigurationError
from ..models.models import TrainedModel
from .errors import MetricsError, NoViableModelError
from .metrics import calculate_metrics, r2_score
from .models import (
    CandidateResult,
    HyperparameterCandidate,
    SelectionBatch,
    SelectionResult,
)

logger = logging.getLogger(__name__)

DEFAULT_K_FOLDS = 10
DEFAULT_PENALTY_GRID: tuple[float, ...] = (0.01, 0.05, 0.1, 0.5, 1.0)
DEFAULT_L1_RATIO_GRID: tuple[float, ...] = (0.0, 0.25, 0.5, 0.75, 1.0)

# Errors raised by a fit or score that only invalidate one fold
_FOLD_ERRORS = (ValueError, ArithmeticError, MetricsError)

Folds = list[tuple[np.ndarray, np.ndarray]]


@dataclass(frozen=True)
class SelectorConfig:
    """Configuration for grid search."""

    max_iter: int = 10_000
    """Maximum coordinate descent iterations per fit."""

    tol: float = 1e-4
    """Coordinate descent convergence tolerance."""

    max_workers: int = 1
    """Threads used to score candidates. 1 = sequential."""

    shuffle: bool = False
    """Shuffle rows before splitting folds. Requires random_state to stay deterministic."""

    random_state: int | None = None
    """Seed for fold shuffling."""


def iter_candidates(
    penalties: Iterable[float],
    l1_ratios: Iterable[float],
) -> Iterator[HyperparameterCandidate]:
    """
    Yield every (penalty, l1_ratio) pair of the grid.

    Order: outer loop over penalties, inner loop over l1 ratios, both
    ascending. This order decides ties (first seen wins).

    Raises:
        ConfigurationError: If a grid is empty or holds out-of-range values
    """
    penalty_values = sorted(set(_check_grid(penalties, "penalty", 0.0, math.inf)))
    l1_values = sorted(set(_check_grid(l1_ratios, "l1_ratio", 0.0, 1.0)))

    for penalty in penalty_values:
        for l1_ratio in l1_values:
            yield HyperparameterCandidate(penalty=penalty, l1_ratio=l1_ratio)


def make_folds(n_samples: int, k_folds: int, config: SelectorConfig | None = None) -> Folds:
    """
    Split sample indices into k disjoint folds.

    Without shuffling, folds are contiguous blocks in row order, so the
    split is identical across runs.

    Returns:
        List of (train_indices, validation_indices) pairs

    Raises:
        ConfigurationError: If k_folds is not in [2, n_samples]
    """
    config = config or SelectorConfig()
    _check_fold_count(k_folds, n_samples)

    kfold = KFold(
        n_splits=k_folds,
        shuffle=config.shuffle,
        random_state=config.random_state if config.shuffle else None,
    )
    return list(kfold.split(np.arange(n_samples)))


def select(
    dataset: Dataset,
    k_folds: int = DEFAULT_K_FOLDS,
    penalty_grid: Iterable[float] = DEFAULT_PENALTY_GRID,
    l1_ratio_grid: Iterable[float] = DEFAULT_L1_RATIO_GRID,
    config: SelectorConfig | None = None,
) -> SelectionResult:
    """
    Pick the best elastic-net configuration and refit it on all data.

    Args:
        dataset: Training data
        k_folds: Number of cross-validation folds (2 <= k <= len(dataset))
        penalty_grid: Candidate regularization strengths
        l1_ratio_grid: Candidate L1/L2 mix ratios
        config: Solver and parallelism settings

    Returns:
        SelectionResult with the refit model and its CV score

    Raises:
        ConfigurationError: If fold count or grids are invalid
        NoViableModelError: If no candidate could be fitted and scored
    """
    config = config or SelectorConfig()
    candidates = list(iter_candidates(penalty_grid, l1_ratio_grid))
    folds = make_folds(len(dataset), k_folds, config)

    logger.info(
        f"Starting grid search: {len(candidates)} candidates, "
        f"{k_folds} folds, {len(dataset)} samples"
    )

    start_time = time.time()
    results = _evaluate_all(candidates, dataset, folds, config)
    batch = SelectionBatch(
        results=results,
        k_folds=k_folds,
        dataset_size=len(dataset),
        total_time_ms=(time.time() - start_time) * 1000,
    )

    if batch.failed_count:
        logger.warning(f"{batch.failed_count} candidates failed on every fold")

    for ranked in batch.get_ranking():
        try:
            estimator = _fit_estimator(
                ranked.candidate, dataset.features, dataset.targets, config
            )
        except _FOLD_ERRORS as e:
            logger.warning(f"Refit failed for {ranked.candidate}: {e}")
            continue

        model = TrainedModel.from_estimator(
            estimator,
            penalty=ranked.candidate.penalty,
            l1_ratio=ranked.candidate.l1_ratio,
        )
        metrics = calculate_metrics(dataset.targets, model.predict(dataset.features))

        logger.info(
            f"Best model found with {ranked.candidate} "
            f"(cv_r2={ranked.mean_score:.4f}, train_r2={metrics.r2}, "
            f"{batch.total_time_ms:.0f}ms)"
        )
        return SelectionResult(
            model=model,
            candidate=ranked.candidate,
            cv_score=ranked.mean_score,
            batch=batch,
            metrics=metrics,
        )

    raise NoViableModelError(
        f"No suitable model found: all {len(candidates)} candidates failed"
    )


def _evaluate_all(
    candidates: list[HyperparameterCandidate],
    dataset: Dataset,
    folds: Folds,
    config: SelectorConfig,
) -> list[CandidateResult]:
    """Score every candidate; results come back in grid order."""
    if config.max_workers <= 1:
        return [_evaluate_candidate(c, dataset, folds, config) for c in candidates]

    with ThreadPoolExecutor(
        max_workers=config.max_workers, thread_name_prefix="grid-search"
    ) as executor:
        return list(
            executor.map(
                lambda c: _evaluate_candidate(c, dataset, folds, config), candidates
            )
        )


def _evaluate_candidate(
    candidate: HyperparameterCandidate,
    dataset: Dataset,
    folds: Folds,
    config: SelectorConfig,
) -> CandidateResult:
    result = CandidateResult(candidate=candidate)
    features, targets = dataset.features, dataset.targets

    for fold_index, (train_idx, val_idx) in enumerate(folds):
        try:
            estimator = _fit_estimator(
                candidate, features[train_idx], targets[train_idx], config
            )
            score = r2_score(targets[val_idx], estimator.predict(features[val_idx]))
        except _FOLD_ERRORS as e:
            logger.warning(f"Skipping fold {fold_index} for {candidate}: {e}")
            result.failed_folds += 1
            continue
        result.fold_scores.append(score)

    if result.success:
        logger.debug(
            f"{candidate}: mean_r2={result.mean_score:.4f} "
            f"({len(result.fold_scores)}/{len(folds)} folds)"
        )
    else:
        logger.warning(f"Skipping {candidate}: every fold failed")

    return result


def _fit_estimator(
    candidate: HyperparameterCandidate,
    features: np.ndarray,
    targets: np.ndarray,
    config: SelectorConfig,
) -> ElasticNet:
    estimator = ElasticNet(
        alpha=candidate.penalty,
        l1_ratio=candidate.l1_ratio,
        max_iter=config.max_iter,
        tol=config.tol,
        selection="cyclic",
    )
    estimator.fit(features, targets)

    if not np.all(np.isfinite(estimator.coef_)) or not np.isfinite(
        estimator.intercept_
    ):
        raise ArithmeticError("fit produced non-finite coefficients")
    return estimator


def _check_fold_count(k_folds: int, n_samples: int) -> None:
    if not isinstance(k_folds, numbers.Integral) or isinstance(k_folds, bool):
        raise ConfigurationError(
            f"Fold count must be an integer, got {k_folds!r}", stage="select"
        )
    if k_folds < 2:
        raise ConfigurationError(
            f"Fold count must be >= 2, got {k_folds}", stage="select"
        )
    if k_folds > n_samples:
        raise ConfigurationError(
            f"Fold count {k_folds} exceeds sample count {n_samples}; "
            "use fewer folds than samples so each held-out fold can be scored",
            stage="select",
        )
    if k_folds == n_samples:
        logger.warning(
            f"Fold count {k_folds} equals sample count: single-row folds have no "
            "target variance and R² can't score them. Use fewer folds than samples."
        )


def _check_grid(
    values: Iterable[float], name: str, low: float, high: float
) -> list[float]:
    checked = [float(v) for v in values]
    if not checked:
        raise ConfigurationError(f"{name} grid is empty", stage="select")

    for value in checked:
        if not math.isfinite(value) or not (low <= value <= high):
            raise ConfigurationError(
                f"{name} value {value} outside [{low}, {high}]", stage="select"
            )
    return checked
