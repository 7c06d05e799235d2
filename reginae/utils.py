"""Validation helpers independent of the incremental board bookkeeping.

Positions here are flat indices ``row * width + column``; conflicts are
recounted from scratch so results can be checked against the attack flags
maintained by :class:`reginae.board.Board`.
"""

from __future__ import annotations

from collections import Counter
from typing import Iterable

from .board import Board


def conflicts(queens: Iterable[int], width: int) -> int:
    """Count attacking queen pairs in O(N) using per-line hash counters."""
    row_count: Counter[int] = Counter()
    column_count: Counter[int] = Counter()
    diag1: Counter[int] = Counter()
    diag2: Counter[int] = Counter()

    for index in queens:
        row, column = divmod(index, width)
        row_count[row] += 1
        column_count[column] += 1
        diag1[column - row] += 1
        diag2[row + column] += 1

    def _pairs(counter: Counter[int]) -> int:
        return sum(count * (count - 1) // 2 for count in counter.values() if count > 1)

    return _pairs(row_count) + _pairs(column_count) + _pairs(diag1) + _pairs(diag2)


def is_valid_solution(board: Board) -> bool:
    """Return True if ``board`` holds ``width`` mutually non-attacking queens."""
    queens = list(board.queens())
    if len(queens) != board.width:
        return False
    if any(not 0 <= q < board.width * board.width for q in queens):
        return False
    return conflicts(queens, board.width) == 0
