"""
Training module for elastic-net model selection.

This module provides:
- Grid search over (penalty, l1_ratio) with k-fold cross-validation
- R² scoring and fit diagnostics (MAE, RMSE)
- Deterministic winner selection (highest mean R², first in grid order on ties)

Usage:
    from home_valuation.training import select, SelectorConfig

    result = select(dataset, k_folds=10, config=SelectorConfig(max_workers=4))
    print(f"{result.candidate}: R² {result.cv_score:.3f}")
"""

from .errors import MetricsError, NoViableModelError, TrainingError
from .metrics import calculate_metrics, r2_score
from .models import (
    CandidateResult,
    FitMetrics,
    HyperparameterCandidate,
    SelectionBatch,
    SelectionResult,
)
from .selector import (
    DEFAULT_K_FOLDS,
    DEFAULT_L1_RATIO_GRID,
    DEFAULT_PENALTY_GRID,
    SelectorConfig,
    iter_candidates,
    make_folds,
    select,
)

__all__ = [
    # Selection (main entry point)
    "select",
    "SelectorConfig",
    "iter_candidates",
    "make_folds",
    "DEFAULT_K_FOLDS",
    "DEFAULT_PENALTY_GRID",
    "DEFAULT_L1_RATIO_GRID",
    # Metrics
    "r2_score",
    "calculate_metrics",
    # Models
    "HyperparameterCandidate",
    "CandidateResult",
    "SelectionBatch",
    "SelectionResult",
    "FitMetrics",
    # Errors
    "TrainingError",
    "NoViableModelError",
    "MetricsError",
]
