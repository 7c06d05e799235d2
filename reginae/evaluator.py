"""Weighted combination of pluggable scoring functions.

A scoring function receives the board (with the candidate move already
placed) and the index of the previous move, and returns a real number, by
convention in ``[0, 1]``. The evaluator combines all registered functions as

    raw = sum(f_i(board, last_move) * w_i) / sum(|w_i|)

clamps ``raw`` to ``(0, 1]`` and scales it onto the unsigned 64-bit range, so
candidate moves can be sorted by a plain integer key.
"""

from __future__ import annotations

import math
import sys
from dataclasses import dataclass
from typing import Callable, List, Protocol

from .board import Board

U64_MAX = 2**64 - 1
MIN_POSITIVE = sys.float_info.min


class ScoringFunction(Protocol):
    """Pure function from a board and the last move index to a real score."""

    def __call__(self, board: Board, last_move: int) -> float:
        ...


@dataclass(frozen=True)
class WeightedEvaluator:
    function: Callable[[Board, int], float]
    weight: float


class Evaluator:
    """Ordered collection of ``(scoring function, weight)`` pairs."""

    def __init__(self) -> None:
        self._evaluators: List[WeightedEvaluator] = []

    def __len__(self) -> int:
        return len(self._evaluators)

    @property
    def evaluators(self) -> List[WeightedEvaluator]:
        return list(self._evaluators)

    def inject_evaluator(self, function: Callable[[Board, int], float], weight: float) -> "Evaluator":
        self._evaluators.append(WeightedEvaluator(function, float(weight)))
        return self

    def reset(self) -> "Evaluator":
        self._evaluators.clear()
        return self

    def weighted(self, board: Board, last_move: int) -> float:
        """Return the combined score clamped to ``(0, 1]``.

        With no evaluators, or only zero weights, the denominator falls back
        to the smallest positive float and the result clamps to it.
        """
        total_weight = max(sum(abs(w.weight) for w in self._evaluators), MIN_POSITIVE)
        score = sum(w.function(board, last_move) * w.weight / total_weight for w in self._evaluators)
        if math.isnan(score):
            return MIN_POSITIVE
        return min(max(score, MIN_POSITIVE), 1.0)

    def score(self, board: Board, last_move: int) -> int:
        """Return the combined score scaled onto ``[0, 2**64 - 1]``."""
        return min(int(self.weighted(board, last_move) * float(U64_MAX)), U64_MAX)
