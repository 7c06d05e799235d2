"""Incremental N-Queens board with per-cell attack-line flags.

Representation
--------------
The board is a row-major list of ``width * width`` :class:`Cell` objects, so
index ``i`` sits on ``row = i // width`` and ``column = i % width``. Placed
queens are kept in an ascending, duplicate-free list for deterministic
iteration.

Attack tracking
---------------
Every row, column, principal diagonal (top-left to bottom-right) and
anti-diagonal (top-right to bottom-left) owns an integer reference count of
the queens standing on it. A line's flag is raised on all of its cells when
the count goes from 0 to 1 and lifted when it drops back to 0, so removing a
queen never clears a flag that another queen still justifies.

Line traversal uses :class:`Boundaries`, the first and last in-bounds index
of each of the four lines through a square.
"""

from __future__ import annotations

from bisect import bisect_left, insort
from contextlib import contextmanager
from dataclasses import dataclass
from itertools import chain
from typing import Iterator, List, Sequence, Tuple

from .cell import Cell


@dataclass(frozen=True)
class Boundaries:
    """Inclusive index bounds of the four attack lines through one square.

    Example
    -------
    For ``index=0`` on a board of width 8:

    - horizontal: 0..7, step 1
    - vertical: 0..56, step 8
    - principal: 0..63, step 9
    - antidiagonal: 0..0, step 7
    """

    width: int
    horizontal_min: int
    horizontal_max: int
    vertical_min: int
    vertical_max: int
    principal_min: int
    principal_max: int
    antidiagonal_min: int
    antidiagonal_max: int

    @classmethod
    def of(cls, index: int, width: int) -> "Boundaries":
        row, column = divmod(index, width)
        to_top_left = min(row, column)
        to_top_right = min(row, width - column - 1)
        to_bottom_left = min(column, width - row - 1)
        to_bottom_right = min(width - row - 1, width - column - 1)

        horizontal_min = row * width
        return cls(
            width=width,
            horizontal_min=horizontal_min,
            horizontal_max=horizontal_min + width - 1,
            vertical_min=column,
            vertical_max=column + width * (width - 1),
            principal_min=index - (width + 1) * to_top_left,
            principal_max=index + (width + 1) * to_bottom_right,
            antidiagonal_min=index - (width - 1) * to_top_right,
            antidiagonal_max=index + (width - 1) * to_bottom_left,
        )

    def horizontal(self) -> range:
        return range(self.horizontal_min, self.horizontal_max + 1)

    def vertical(self) -> range:
        return range(self.vertical_min, self.vertical_max + 1, self.width)

    def principal(self) -> range:
        return range(self.principal_min, self.principal_max + 1, self.width + 1)

    def antidiagonal(self) -> range:
        # width 1 has a zero step; the line is the single square anyway
        return range(self.antidiagonal_min, self.antidiagonal_max + 1, max(self.width - 1, 1))

    def as_tuple(self) -> Tuple[int, ...]:
        return (
            self.horizontal_min,
            self.horizontal_max,
            self.vertical_min,
            self.vertical_max,
            self.principal_min,
            self.principal_max,
            self.antidiagonal_min,
            self.antidiagonal_max,
        )


class Board:
    """N×N board mutated only through :meth:`toggle` and :meth:`clear`.

    Parameters
    ----------
    width : int
        Board dimension N (N >= 1).

    Raises
    ------
    ValueError
        If ``width`` is smaller than 1.
    """

    def __init__(self, width: int):
        if width < 1:
            raise ValueError(f"Board width must be positive, got {width}")
        self._width = width
        self._cells: List[Cell] = [Cell() for _ in range(width * width)]
        self._queens: List[int] = []
        self._row_counts = [0] * width
        self._column_counts = [0] * width
        self._principal_counts = [0] * (2 * width - 1)
        self._antidiagonal_counts = [0] * (2 * width - 1)

    # Introspection ---------------------------------------------------------

    @property
    def width(self) -> int:
        return self._width

    @property
    def queen_count(self) -> int:
        return len(self._queens)

    def __repr__(self) -> str:
        return f"Board(width={self._width}, queens={self._queens})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return (
            self._width == other._width
            and self._queens == other._queens
            and self._cells == other._cells
        )

    def is_solved(self) -> bool:
        return len(self._queens) == self._width

    def is_empty(self) -> bool:
        return not self._queens

    def is_queen(self, index: int) -> bool:
        return self._cell_at(index).is_queen()

    def cell(self, index: int) -> Cell:
        return self._cell_at(index)

    def cells(self) -> Iterator[Cell]:
        return iter(self._cells)

    def rows(self) -> Iterator[Sequence[Cell]]:
        """Yield each row as a tuple of cells, top to bottom."""
        width = self._width
        for start in range(0, width * width, width):
            yield tuple(self._cells[start:start + width])

    def queens(self) -> Iterator[int]:
        """Iterate over queen indices in ascending order."""
        return iter(tuple(self._queens))

    def available(self) -> Iterator[int]:
        """Iterate over free squares (no queen, no attack) in ascending order."""
        return (i for i, cell in enumerate(self._cells) if cell.is_free())

    def traverse_lines(self, index: int) -> Iterator[Tuple[int, Cell]]:
        """Walk the four attack lines through ``index``.

        The order is: full row, full column, full principal diagonal, full
        anti-diagonal, each clipped to the board. Squares shared by several
        lines (``index`` itself at least) are produced once per line. Every
        call returns a fresh iterator.
        """
        self._cell_at(index)
        bounds = Boundaries.of(index, self._width)
        cells = self._cells
        spans = (bounds.horizontal(), bounds.vertical(), bounds.principal(), bounds.antidiagonal())
        return ((i, cells[i]) for i in chain.from_iterable(spans))

    # Mutation ---------------------------------------------------------------

    def toggle(self, index: int) -> "Board":
        """Place a queen on a free square or lift an existing one.

        Squares that are only attacked are left untouched. Returns the board
        for chaining.
        """
        cell = self._cell_at(index)
        if cell.is_free():
            self._put_queen(index)
        elif cell.is_queen():
            self._remove_queen(index)
        return self

    def toggle_pair(self, column: int, row: int) -> "Board":
        if not (0 <= column < self._width and 0 <= row < self._width):
            raise IndexError(f"Square ({column}, {row}) is outside a board of width {self._width}")
        return self.toggle(row * self._width + column)

    def clear(self) -> "Board":
        for cell in self._cells:
            cell.clear()
        self._queens.clear()
        width = self._width
        self._row_counts = [0] * width
        self._column_counts = [0] * width
        self._principal_counts = [0] * (2 * width - 1)
        self._antidiagonal_counts = [0] * (2 * width - 1)
        return self

    def take_queens(self) -> List[int]:
        """Clear the board and hand back the queens it held (ascending)."""
        queens = list(self._queens)
        self.clear()
        return queens

    @contextmanager
    def placed(self, index: int) -> Iterator["Board"]:
        """Temporarily place a queen on ``index`` for inspection.

        The queen is lifted again when the block exits, even on error. If the
        square was not free nothing is placed and nothing is undone.
        """
        was_free = self._cell_at(index).is_free()
        if was_free:
            self._put_queen(index)
        try:
            yield self
        finally:
            if was_free:
                self._remove_queen(index)

    def copy(self) -> "Board":
        clone = Board.__new__(Board)
        clone._width = self._width
        clone._cells = [Cell(cell.content) for cell in self._cells]
        clone._queens = list(self._queens)
        clone._row_counts = list(self._row_counts)
        clone._column_counts = list(self._column_counts)
        clone._principal_counts = list(self._principal_counts)
        clone._antidiagonal_counts = list(self._antidiagonal_counts)
        return clone

    # Internals --------------------------------------------------------------

    def _cell_at(self, index: int) -> Cell:
        if not 0 <= index < len(self._cells):
            raise IndexError(f"Index {index} is outside a board of width {self._width}")
        return self._cells[index]

    def _line_table(self, index: int):
        """Return ``(flag, counts, key, span)`` for each line through ``index``."""
        width = self._width
        row, column = divmod(index, width)
        bounds = Boundaries.of(index, width)
        return (
            (Cell.HORIZONTAL, self._row_counts, row, bounds.horizontal()),
            (Cell.VERTICAL, self._column_counts, column, bounds.vertical()),
            (Cell.PRINCIPAL, self._principal_counts, column - row + width - 1, bounds.principal()),
            (Cell.ANTIDIAGONAL, self._antidiagonal_counts, row + column, bounds.antidiagonal()),
        )

    def _put_queen(self, index: int) -> None:
        self._cells[index].put_queen()
        insort(self._queens, index)
        cells = self._cells
        for flag, counts, key, span in self._line_table(index):
            counts[key] += 1
            if counts[key] == 1:
                for i in span:
                    cells[i].attack(flag)

    def _remove_queen(self, index: int) -> None:
        self._cells[index].remove_queen()
        del self._queens[bisect_left(self._queens, index)]
        cells = self._cells
        for flag, counts, key, span in self._line_table(index):
            counts[key] -= 1
            if counts[key] == 0:
                for i in span:
                    cells[i].lift(flag)
