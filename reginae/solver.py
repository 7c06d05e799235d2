"""Heuristic-guided backtracking search with symmetry-aware dead-end memo.

Search outline
--------------
``Solver.solve(board)`` canonicalizes the board (see
:mod:`reginae.normalized`) and runs a depth-first search where each node:

1. forces a queen on index 0 when the board is empty (root only), or stops
   with success when the board holds ``width`` queens;
2. stops with failure, without counting a jump, when the node matches a
   recorded dead end (see "Memo key" below);
3. counts one jump and scores every free square: the candidate is placed,
   the evaluator scores the board against the previous move of the path
   (0 for an empty path) and the candidate is lifted again;
4. tries candidates from the highest score down (equal scores: the one listed
   last first), descending into each;
5. when every candidate failed, records the queen set of all four rotations
   of the current board as dead and reports failure.

The descent is driven by an explicit stack of :class:`_Frame` objects rather
than Python recursion; expansion order, jump count and dead-end records are
the same as the recursive formulation.

Cache scope
-----------
Dead ends live in a :class:`DepletedCache` keyed by ``(width, queens)``. With
``persistent=True`` (default) the cache and the jump counter survive across
``solve`` calls of one solver; with ``persistent=False`` both are reset at the
start of every call. :meth:`Solver.reset` clears them explicitly.

Memo key
--------
``memo_key="path"`` (default) probes the cache with the sorted moves pushed by
the search only, leaving out pre-placed and forced queens. ``memo_key="queens"``
probes with the sorted queens of the board, the same form that dead ends are
recorded in; it prunes far more, so jump counts differ between the two keys.

Contract
--------
- Input: a :class:`Board`; ownership passes to the solver, the returned board
  is the same object in the caller's orientation.
- Output: ``Solution(board, success, jumps)``. On failure the board carries
  the same queens it was given.
- The search always terminates: it either succeeds or exhausts every
  reachable state. It is not interruptible.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, NamedTuple, Optional, Set, Tuple, Union

from .board import Board
from .evaluator import Evaluator
from .normalized import NormalizedBoard

MEMO_KEYS = ("path", "queens")


class Solution(NamedTuple):
    board: Board
    success: bool
    jumps: int


class DepletedCache:
    """Set of queen configurations known to admit no completion."""

    def __init__(self) -> None:
        self._entries: Set[Tuple[int, Tuple[int, ...]]] = set()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: Tuple[int, Tuple[int, ...]]) -> bool:
        return key in self._entries

    def add(self, width: int, queens) -> None:
        self._entries.add((width, tuple(queens)))

    def contains(self, width: int, queens) -> bool:
        return (width, tuple(queens)) in self._entries

    def clear(self) -> None:
        self._entries.clear()


@dataclass
class _Frame:
    """Candidates still to try at one node, and the move currently applied."""

    candidates: List[int]
    applied: Optional[int] = None
    forced: Optional[int] = None


class Solver:
    """Backtracking solver owning an :class:`Evaluator` and a dead-end cache.

    Parameters
    ----------
    evaluator : Evaluator | None
        Scoring used to order candidate moves. A fresh, empty evaluator is
        created when omitted; candidates then keep ascending index order and
        are tried from the highest index down.
    persistent : bool, default True
        Keep the dead-end cache and the jump counter across ``solve`` calls.
    memo_key : {"path", "queens"}, default "path"
        What the dead-end cache is probed with at each node.

    A solver instance must not run two searches at once.
    """

    def __init__(self, evaluator: Optional[Evaluator] = None, persistent: bool = True, memo_key: str = "path"):
        if memo_key not in MEMO_KEYS:
            raise ValueError(f"Unknown memo key: {memo_key}. Expected one of {MEMO_KEYS}")
        self.evaluator = evaluator if evaluator is not None else Evaluator()
        self.persistent = persistent
        self.memo_key = memo_key
        self.cache = DepletedCache()
        self._jumps = 0

    @property
    def jumps(self) -> int:
        return self._jumps

    def with_evaluator(self, function: Callable[[Board, int], float], weight: float) -> "Solver":
        self.evaluator.inject_evaluator(function, weight)
        return self

    def reset(self) -> "Solver":
        """Forget every recorded dead end and zero the jump counter."""
        self.cache.clear()
        self._jumps = 0
        return self

    def solve(self, board: Board) -> Solution:
        if not self.persistent:
            self.reset()
        normalized = NormalizedBoard.from_board(board)
        success = self._search(normalized)
        return Solution(normalized.to_board(), success, self._jumps)

    # Search -----------------------------------------------------------------

    def _search(self, normalized: NormalizedBoard) -> bool:
        board = normalized.board
        path: List[int] = []

        forced = None
        if board.is_empty():
            board.toggle(0)
            forced = 0

        # solved check right after the forced queen, so width 1 succeeds with 0 jumps
        root = self._enter(normalized, path)
        if isinstance(root, bool):
            if not root and forced is not None:
                board.toggle(forced)
            return root
        root.forced = forced

        stack: List[_Frame] = [root]
        while stack:
            frame = stack[-1]
            if frame.applied is not None:
                path.pop()
                board.toggle(frame.applied)
                frame.applied = None

            if not frame.candidates:
                self._deplete(normalized)
                stack.pop()
                if frame.forced is not None:
                    board.toggle(frame.forced)
                continue

            move = frame.candidates.pop()
            frame.applied = move
            path.append(move)
            board.toggle(move)

            child = self._enter(normalized, path)
            if child is True:
                return True
            if child is False:
                continue
            stack.append(child)

        return False

    def _enter(self, normalized: NormalizedBoard, path: List[int]) -> Union[bool, _Frame]:
        """Evaluate a node: ``True`` solved, ``False`` known dead, else a frame."""
        board = normalized.board
        if board.is_solved():
            return True

        probe = board.queens() if self.memo_key == "queens" else sorted(path)
        if self.cache.contains(board.width, probe):
            return False

        self._jumps += 1
        return _Frame(self._frontier(board, path[-1] if path else 0))

    def _frontier(self, board: Board, last_move: int) -> List[int]:
        """Free squares sorted by ascending score (stable on index)."""
        scored = []
        for index in list(board.available()):
            with board.placed(index):
                scored.append((self.evaluator.score(board, last_move), index))
        scored.sort(key=lambda entry: entry[0])
        return [index for _, index in scored]

    def _deplete(self, normalized: NormalizedBoard) -> None:
        board = normalized.board
        for _ in range(4):
            normalized.rotate_clockwise()
            self.cache.add(board.width, board.queens())
