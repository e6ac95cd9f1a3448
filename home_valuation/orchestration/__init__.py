"""Orchestration of the train-or-load and predict flows."""

from .engine import ValuationEngine

__all__ = [
    "ValuationEngine",
]
