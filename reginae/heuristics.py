"""Example scoring functions for the move-ordering evaluator.

Every function follows the evaluator contract: it takes the board (with the
candidate move already placed) and the index of the previous move, returns a
float in ``[0, 1]`` and leaves the board untouched.

Guidance
--------
- ``overlapping`` rewards moves whose neighbourhood is already covered by
  other lines, packing attacks instead of spreading them.
- ``ladder`` counts queens a knight's move away from the last move. It tends
  to help on odd widths and to hurt on even ones.
- ``wrapping_ladder`` does the same on a toroidal board. Paired with
  ``ladder`` under a negative weight it can offset the even-width penalty.
"""

from __future__ import annotations

from itertools import islice
from typing import Callable, Dict

from .board import Board

KNIGHT_OFFSETS = (
    (-2, -1),
    (-1, -2),
    (1, -2),
    (2, -1),
    (2, 1),
    (1, 2),
    (-1, 2),
    (-2, 1),
)


def overlapping(board: Board, last_move: int) -> float:
    """Share of cross-line attack bits along the lines of ``last_move``.

    The row contributes its vertical/principal/anti-diagonal bits, the column
    its horizontal/principal/anti-diagonal bits, and the next ``width``
    diagonal squares their horizontal/vertical bits plus the bit of the
    *other* diagonal. The total is divided by three times the number of
    squares inspected.
    """
    width = board.width
    lines = board.traverse_lines(last_move)
    count = 0

    horizontal = 0
    for _, cell in islice(lines, width):
        count += 1
        horizontal += cell.is_attacked_vertical() + cell.is_attacked_principal() + cell.is_attacked_antidiagonal()

    vertical = 0
    for _, cell in islice(lines, width):
        count += 1
        vertical += cell.is_attacked_horizontal() + cell.is_attacked_principal() + cell.is_attacked_antidiagonal()

    # the principal run is ascending; a drop in index means the anti-diagonal began
    is_principal = True
    last_diagonal = 0
    diagonal = 0
    for index, cell in islice(lines, width):
        count += 1
        if index < last_diagonal:
            is_principal = False
        last_diagonal = index
        crossing = cell.is_attacked_antidiagonal() if is_principal else cell.is_attacked_principal()
        diagonal += cell.is_attacked_horizontal() + cell.is_attacked_vertical() + crossing

    return (horizontal + vertical + diagonal) / (count * 3)


def ladder(board: Board, last_move: int) -> float:
    """Fraction of the eight knight-move squares around ``last_move`` holding a queen."""
    width = board.width
    row, column = divmod(last_move, width)
    count = 0
    for d_column, d_row in KNIGHT_OFFSETS:
        c, r = column + d_column, row + d_row
        if 0 <= c < width and 0 <= r < width:
            count += board.is_queen(r * width + c)
    return count / 8.0


def wrapping_ladder(board: Board, last_move: int) -> float:
    """Like :func:`ladder` on a toroidal board, wrapping flat indices modulo N²."""
    width = board.width
    cells = width * width
    count = 0
    for offset in (2 * width - 1, width - 2, 2 * width + 1, width + 2):
        count += board.is_queen((last_move - offset) % cells)
        count += board.is_queen((last_move + offset) % cells)
    return count / 8.0


HEURISTICS: Dict[str, Callable[[Board, int], float]] = {
    "overlapping": overlapping,
    "ladder": ladder,
    "wrapping_ladder": wrapping_ladder,
}


def get_heuristic(name: str) -> Callable[[Board, int], float]:
    """Return a built-in scoring function by name.

    Raises
    ------
    ValueError
        If ``name`` is not one of :data:`HEURISTICS`.
    """
    try:
        return HEURISTICS[name]
    except KeyError as exc:
        raise ValueError(f"Unknown heuristic: {name}. Available: {', '.join(sorted(HEURISTICS))}") from exc
