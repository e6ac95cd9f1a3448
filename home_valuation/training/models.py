"""Data models for training module."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..models.models import TrainedModel


@dataclass(frozen=True)
class HyperparameterCandidate:
    """
    One elastic-net configuration.

    l1_ratio=0 is pure L2 (ridge), l1_ratio=1 is pure L1 (lasso).
    """

    penalty: float  # Regularization strength, >= 0
    l1_ratio: float  # L1/L2 mix, in [0, 1]

    def __str__(self) -> str:
        return f"penalty={self.penalty}, l1_ratio={self.l1_ratio}"


@dataclass(frozen=True)
class FitMetrics:
    """Diagnostic metrics for a model's predictions."""

    mae: float  # Mean Absolute Error
    rmse: float  # Root Mean Squared Error
    r2: float | None  # None when ground truth has zero variance
    n_samples: int

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "mae": round(self.mae, 2),
            "rmse": round(self.rmse, 2),
            "r2": None if self.r2 is None else round(self.r2, 4),
            "n_samples": self.n_samples,
        }


@dataclass
class CandidateResult:
    """
    Cross-validation outcome for a single candidate.

    Only folds that fitted and scored successfully contribute to the mean.
    """

    candidate: HyperparameterCandidate
    fold_scores: list[float] = field(default_factory=list)
    failed_folds: int = 0

    @property
    def success(self) -> bool:
        """Success if at least one fold produced a score."""
        return len(self.fold_scores) > 0

    @property
    def mean_score(self) -> float | None:
        """Mean R² over successful folds, or None if every fold failed."""
        if not self.fold_scores:
            return None
        return sum(self.fold_scores) / len(self.fold_scores)

    def to_dict(self) -> dict[str, Any]:
        return {
            "penalty": self.candidate.penalty,
            "l1_ratio": self.candidate.l1_ratio,
            "success": self.success,
            "mean_r2": self.mean_score,
            "folds_scored": len(self.fold_scores),
            "folds_failed": self.failed_folds,
        }


@dataclass
class SelectionBatch:
    """
    Results of every candidate in a grid search, in grid order.

    Grid order is kept so ties resolve to the first-seen candidate.
    """

    results: list[CandidateResult] = field(default_factory=list)
    k_folds: int = 0
    dataset_size: int = 0
    total_time_ms: float = 0.0

    @property
    def successful_results(self) -> list[CandidateResult]:
        """Get only candidates with at least one scored fold."""
        return [r for r in self.results if r.success]

    @property
    def failed_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    def get_ranking(self) -> list[CandidateResult]:
        """
        Get successful candidates ranked by mean R² (highest first).

        Sorting is stable, so equal scores keep grid order.
        """
        return sorted(
            self.successful_results, key=lambda r: r.mean_score, reverse=True
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "k_folds": self.k_folds,
            "dataset_size": self.dataset_size,
            "total_time_ms": round(self.total_time_ms, 2),
            "failed_count": self.failed_count,
            "results": [r.to_dict() for r in self.results],
        }


@dataclass(frozen=True)
class SelectionResult:
    """Winning model of a grid search plus diagnostics."""

    model: TrainedModel
    candidate: HyperparameterCandidate
    cv_score: float  # Mean cross-validated R² of the winner
    batch: SelectionBatch
    metrics: FitMetrics | None = None  # In-sample metrics of the refit

    @property
    def penalty(self) -> float:
        return self.candidate.penalty

    @property
    def l1_ratio(self) -> float:
        return self.candidate.l1_ratio
