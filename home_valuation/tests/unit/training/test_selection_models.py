"""Tests for training data models."""

import pytest

from home_valuation.training import (
    CandidateResult,
    HyperparameterCandidate,
    SelectionBatch,
)


def _result(penalty: float, scores: list[float]) -> CandidateResult:
    return CandidateResult(
        candidate=HyperparameterCandidate(penalty=penalty, l1_ratio=0.5),
        fold_scores=scores,
        failed_folds=0 if scores else 3,
    )


class TestCandidateResult:
    """Tests for CandidateResult."""

    def test_mean_score(self) -> None:
        assert _result(0.1, [0.5, 0.7]).mean_score == pytest.approx(0.6)

    def test_failed_candidate(self) -> None:
        result = _result(0.1, [])

        assert not result.success
        assert result.mean_score is None

    def test_to_dict(self) -> None:
        data = _result(0.1, [0.8]).to_dict()

        assert data["penalty"] == 0.1
        assert data["mean_r2"] == 0.8
        assert data["folds_scored"] == 1


class TestSelectionBatch:
    """Tests for SelectionBatch reduction."""

    def test_ranking_starts_with_highest(self) -> None:
        batch = SelectionBatch(
            results=[_result(0.1, [0.5]), _result(0.5, [0.9]), _result(1.0, [0.7])]
        )

        assert batch.get_ranking()[0].candidate.penalty == 0.5

    def test_ranking_first_on_tie(self) -> None:
        batch = SelectionBatch(
            results=[_result(0.1, [0.5]), _result(0.5, [0.9]), _result(1.0, [0.9])]
        )

        assert batch.get_ranking()[0].candidate.penalty == 0.5

    def test_ranking_is_stable(self) -> None:
        batch = SelectionBatch(
            results=[_result(0.1, [0.9]), _result(0.5, [0.2]), _result(1.0, [0.9])]
        )

        ranking = [r.candidate.penalty for r in batch.get_ranking()]
        assert ranking == [0.1, 1.0, 0.5]

    def test_failed_candidates_excluded(self) -> None:
        batch = SelectionBatch(results=[_result(0.1, []), _result(0.5, [0.1])])

        assert batch.failed_count == 1
        assert [r.candidate.penalty for r in batch.get_ranking()] == [0.5]

    def test_ranking_empty_when_all_failed(self) -> None:
        batch = SelectionBatch(results=[_result(0.1, [])])

        assert batch.get_ranking() == []

    def test_to_dict(self) -> None:
        batch = SelectionBatch(results=[_result(0.1, [0.5])], k_folds=5, dataset_size=20)

        data = batch.to_dict()
        assert data["k_folds"] == 5
        assert data["dataset_size"] == 20
        assert len(data["results"]) == 1
