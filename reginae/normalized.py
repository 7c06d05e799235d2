"""Rotation canonicalization of boards.

A board and its three 90° rotations describe the same search problem. This
module folds them together: :class:`NormalizedBoard` rotates its board to a
canonical orientation and remembers how many clockwise quarter-turns it took,
so the caller's orientation can be restored exactly afterwards.

The canonical orientation is the one whose first queen shows up earliest in
the :func:`polar_scan` order. Ties go to the lowest rotation count.
"""

from __future__ import annotations

from typing import Iterator, List

from .board import Board


def polar_scan(width: int) -> Iterator[int]:
    """Enumerate every square once, ring by ring from the top-left corner.

    Ring ``r`` starts at ``(row=0, column=r)``, walks down column ``r`` to
    row ``r``, then walks left along row ``r`` to column 0.

    For width 5 the order is::

        0, 1, 6, 5, 2, 7, 12, 11, 10, 3, 8, 13, 18, 17, 16, 15,
        4, 9, 14, 19, 24, 23, 22, 21, 20
    """
    ring = column = row = 0
    while ring < width:
        yield row * width + column
        if column == 0:
            ring += 1
            column = ring
            row = 0
        elif row < ring:
            row += 1
        else:
            column -= 1


def rotated_index(index: int, width: int) -> int:
    """Index of ``index`` after one clockwise quarter-turn."""
    row = index // width
    term = 1 + index - row * width
    return width * term - row - 1


class NormalizedBoard:
    """A board plus the number of clockwise turns applied to it.

    ``rotations`` is always kept in ``[0, 3]``.
    """

    def __init__(self, board: Board, rotations: int = 0):
        self.board = board
        self._rotations = rotations % 4

    @classmethod
    def from_board(cls, board: Board) -> "NormalizedBoard":
        """Wrap ``board`` (taking ownership) and normalize it immediately."""
        normalized = cls(board)
        normalized.normalize()
        return normalized

    @property
    def rotations(self) -> int:
        return self._rotations

    @rotations.setter
    def rotations(self, value: int) -> None:
        self._rotations = value % 4

    @property
    def width(self) -> int:
        return self.board.width

    def __repr__(self) -> str:
        return f"NormalizedBoard({self.board!r}, rotations={self._rotations})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NormalizedBoard):
            return NotImplemented
        return self._rotations == other._rotations and self.board == other.board

    def merge(self, other: "NormalizedBoard") -> "NormalizedBoard":
        """Take ``other``'s board with both rotation counts summed."""
        return NormalizedBoard(other.board, self._rotations + other._rotations)

    def rotate_clockwise(self) -> "NormalizedBoard":
        """Turn the board 90° clockwise, rebuilding every attack flag.

        The rotation count is bookkeeping of :meth:`normalize` and is left
        unchanged here.
        """
        board = self.board
        width = board.width
        for queen in board.take_queens():
            board.toggle(rotated_index(queen, width))
        return self

    def normalize(self) -> "NormalizedBoard":
        if self.board.is_empty():
            return self

        distances: List[int] = []
        for _ in range(4):
            distances.append(self._first_queen_distance())
            self.rotate_clockwise()

        turns = distances.index(min(distances))
        for _ in range(turns):
            self.rotate_clockwise()
        self.rotations = self._rotations + turns
        return self

    def to_board(self) -> Board:
        """Restore the original orientation and return the underlying board."""
        for _ in range((4 - self._rotations) % 4):
            self.rotate_clockwise()
        self._rotations = 0
        return self.board

    def _first_queen_distance(self) -> int:
        board = self.board
        for position, index in enumerate(polar_scan(board.width)):
            if board.is_queen(index):
                return position
        raise ValueError("cannot measure an empty board")
