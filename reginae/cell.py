"""Packed per-square state for the N-Queens board.

A cell is a small integer holding five independent flags: one queen bit and
one bit per attack line (horizontal, vertical, principal diagonal,
anti-diagonal). A square is *free* only when every bit is clear; a queen may
sit on a square that other queens' lines also cover.
"""

from __future__ import annotations


class Cell:
    """One board square encoded as a 5-bit integer."""

    __slots__ = ("content",)

    QUEEN = 1
    HORIZONTAL = 1 << 1
    VERTICAL = 1 << 2
    PRINCIPAL = 1 << 3
    ANTIDIAGONAL = 1 << 4

    def __init__(self, content: int = 0):
        self.content = content

    def __repr__(self) -> str:
        return f"Cell({self.content:#07b})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Cell):
            return NotImplemented
        return self.content == other.content

    def __hash__(self) -> int:
        return hash(self.content)

    # Predicates -------------------------------------------------------------

    def is_queen(self) -> bool:
        return bool(self.content & Cell.QUEEN)

    def is_attacked(self) -> bool:
        """True when any bit is set, queen included."""
        return self.content != 0

    def is_attacked_horizontal(self) -> bool:
        return bool(self.content & Cell.HORIZONTAL)

    def is_attacked_vertical(self) -> bool:
        return bool(self.content & Cell.VERTICAL)

    def is_attacked_principal(self) -> bool:
        return bool(self.content & Cell.PRINCIPAL)

    def is_attacked_antidiagonal(self) -> bool:
        return bool(self.content & Cell.ANTIDIAGONAL)

    def is_free(self) -> bool:
        return self.content == 0

    # Mutators (chainable) ---------------------------------------------------

    def clear(self) -> "Cell":
        self.content = 0
        return self

    def put_queen(self) -> "Cell":
        self.content |= Cell.QUEEN
        return self

    def remove_queen(self) -> "Cell":
        self.content &= ~Cell.QUEEN
        return self

    def attack(self, flag: int) -> "Cell":
        self.content |= flag
        return self

    def lift(self, flag: int) -> "Cell":
        self.content &= ~flag
        return self

    def attack_horizontal(self) -> "Cell":
        return self.attack(Cell.HORIZONTAL)

    def attack_vertical(self) -> "Cell":
        return self.attack(Cell.VERTICAL)

    def attack_principal(self) -> "Cell":
        return self.attack(Cell.PRINCIPAL)

    def attack_antidiagonal(self) -> "Cell":
        return self.attack(Cell.ANTIDIAGONAL)

    def lift_horizontal(self) -> "Cell":
        return self.lift(Cell.HORIZONTAL)

    def lift_vertical(self) -> "Cell":
        return self.lift(Cell.VERTICAL)

    def lift_principal(self) -> "Cell":
        return self.lift(Cell.PRINCIPAL)

    def lift_antidiagonal(self) -> "Cell":
        return self.lift(Cell.ANTIDIAGONAL)
