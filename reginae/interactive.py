"""Line-driven interactive board editor.

Reads one command per line from a text stream and redraws the board after
each one. Commands:

- ``h`` / ``j`` / ``k`` / ``l``: move the cursor left / down / up / right
- ``t`` (or an empty line): toggle a queen under the cursor
- ``t <column> <row>``: toggle a queen at the given square
- ``c``: clear the board
- ``r <width>``: start over on a new board
- ``x``: solve the current board with a fresh solver
- ``q``: quit
"""

from __future__ import annotations

import sys
from typing import Callable, List, Optional, TextIO

from .board import Board
from .render import render_board
from .solver import Solver

HELP = "hjkl - move; c - clear; r <w> - resize; x - solve; t [col row] - toggle queen; q - quit"


class InteractiveSession:
    """Board, cursor and message state of one interactive session."""

    def __init__(
        self,
        width: int = 8,
        solver_factory: Callable[[], Solver] = Solver,
        stdin: Optional[TextIO] = None,
        stdout: Optional[TextIO] = None,
    ):
        self.board = Board(width)
        self.cursor = (0, 0)
        self.messages: List[str] = []
        self.solver_factory = solver_factory
        self.stdin = stdin if stdin is not None else sys.stdin
        self.stdout = stdout if stdout is not None else sys.stdout

    def run(self) -> None:
        self.render()
        for line in self.stdin:
            if not self.handle(line.rstrip("\n")):
                break
            self.render()
        print("bye!", file=self.stdout)

    def render(self) -> None:
        print(render_board(self.board, self.cursor), file=self.stdout)
        print(HELP, file=self.stdout)
        for message in self.messages:
            print(message, file=self.stdout)

    def handle(self, line: str) -> bool:
        """Apply one command; return False when the session should end."""
        self.messages.clear()
        parts = line.split()
        command = parts[0] if parts else "t"
        last = self.board.width - 1
        column, row = self.cursor

        if command == "q":
            return False
        if command == "h":
            self.cursor = (max(column - 1, 0), row)
        elif command == "j":
            self.cursor = (column, min(row + 1, last))
        elif command == "k":
            self.cursor = (column, max(row - 1, 0))
        elif command == "l":
            self.cursor = (min(column + 1, last), row)
        elif command == "t":
            self._toggle(parts[1:])
        elif command == "c":
            self.board.clear()
        elif command == "x":
            self._solve()
        elif command == "r":
            self._resize(parts[1:])
        else:
            self.messages.append(f"unknown `{command}` command")
        return True

    def _toggle(self, args: List[str]) -> None:
        if args:
            try:
                column, row = (int(value) for value in args[:2])
                self.board.toggle_pair(column, row)
            except (ValueError, IndexError) as exc:
                self.messages.append(f"cannot toggle: {exc}")
                return
        else:
            self.board.toggle_pair(*self.cursor)
        if self.board.is_solved():
            self.messages.append("solved!")

    def _solve(self) -> None:
        board, success, jumps = self.solver_factory().solve(self.board.copy())
        if success:
            self.board = board
            self.messages.append(f"solved in {jumps} jumps!")
        else:
            self.messages.append(f"board exhausted in {jumps} jumps!")

    def _resize(self, args: List[str]) -> None:
        try:
            width = int(args[0]) if args else 0
            self.board = Board(width)
        except ValueError as exc:
            self.messages.append(str(exc))
            return
        self.cursor = (0, 0)
