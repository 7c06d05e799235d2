"""Text input/output for boards: spec parsing, glyph rendering, result lines."""

from __future__ import annotations

from typing import List, Optional, Tuple

from .board import Board
from .solver import Solution

QUEEN = "█"
ATTACKED = "▓"
FREE = "░"


def parse_board_spec(text: str) -> Tuple[int, List[int]]:
    """Parse ``"<width>,<q1>,<q2>,..."`` into ``(width, queens)``.

    Every character other than digits and commas is discarded first, so
    whitespace and brackets are tolerated. Empty entries are skipped.

    Raises
    ------
    ValueError
        If no width is given, the width is 0, or a queen index falls outside
        the board.
    """
    cleaned = "".join(ch for ch in text if ch.isascii() and (ch.isdigit() or ch == ","))
    tokens = [token for token in cleaned.split(",") if token]
    if not tokens:
        raise ValueError("no width provided")
    width = int(tokens[0])
    if width < 1:
        raise ValueError(f"invalid width provided: {width}")
    queens = [int(token) for token in tokens[1:]]
    for queen in queens:
        if queen >= width * width:
            raise ValueError(f"queen index {queen} is outside a board of width {width}")
    return width, queens


def build_board(width: int, queens) -> Board:
    """Create a board and toggle each listed square in order."""
    board = Board(width)
    for queen in queens:
        board.toggle(queen)
    return board


def render_board(board: Board, cursor: Optional[Tuple[int, int]] = None) -> str:
    """Draw one glyph per square; ``cursor`` ``(column, row)`` is bracketed."""
    lines = []
    for row_index, row in enumerate(board.rows()):
        glyphs = []
        for column_index, cell in enumerate(row):
            if cell.is_queen():
                glyph = QUEEN
            elif cell.is_attacked():
                glyph = ATTACKED
            else:
                glyph = FREE
            if cursor == (column_index, row_index):
                glyph = f"[{glyph}]"
            glyphs.append(glyph)
        lines.append("".join(glyphs))
    return "\n".join(lines)


def format_solution(solution: Solution) -> str:
    board, success, jumps = solution
    return f"{str(success).lower()} with {jumps} jumps: {list(board.queens())}"
