"""Line-driven interactive editor."""

from io import StringIO
from pathlib import Path
import sys
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reginae.interactive import HELP, InteractiveSession


class InteractiveSessionTests(unittest.TestCase):

    def session(self, width=8, commands=""):
        return InteractiveSession(width=width, stdin=StringIO(commands), stdout=StringIO())

    def test_run_until_quit(self):
        session = self.session(commands="l\nt\nq\nt\n")
        session.run()
        self.assertEqual(list(session.board.queens()), [1])
        output = session.stdout.getvalue()
        self.assertIn(HELP, output)
        self.assertTrue(output.endswith("bye!\n"))

    def test_run_until_end_of_input(self):
        session = self.session(commands="j\n")
        session.run()
        self.assertEqual(session.cursor, (0, 1))
        self.assertTrue(session.stdout.getvalue().endswith("bye!\n"))

    def test_cursor_is_clamped(self):
        session = self.session(width=3)
        session.handle("h")
        session.handle("k")
        self.assertEqual(session.cursor, (0, 0))
        for _ in range(5):
            session.handle("l")
            session.handle("j")
        self.assertEqual(session.cursor, (2, 2))

    def test_empty_line_toggles(self):
        session = self.session()
        session.handle("")
        self.assertEqual(list(session.board.queens()), [0])
        session.handle("")
        self.assertTrue(session.board.is_empty())

    def test_toggle_at_square(self):
        session = self.session()
        session.handle("t 3 2")
        self.assertEqual(list(session.board.queens()), [19])

    def test_toggle_errors_are_reported(self):
        session = self.session()
        for line in ("t 9 9", "t x 1", "t 3"):
            with self.subTest(line=line):
                self.assertTrue(session.handle(line))
                self.assertTrue(session.messages[0].startswith("cannot toggle"))
        self.assertTrue(session.board.is_empty())

    def test_solved_message(self):
        session = self.session(width=1)
        session.handle("t")
        self.assertEqual(session.messages, ["solved!"])

    def test_clear(self):
        session = self.session()
        session.handle("t")
        session.handle("c")
        self.assertTrue(session.board.is_empty())

    def test_resize(self):
        session = self.session()
        session.handle("l")
        session.handle("r 5")
        self.assertEqual(session.board.width, 5)
        self.assertEqual(session.cursor, (0, 0))
        session.handle("r 0")
        self.assertEqual(session.board.width, 5)
        self.assertEqual(len(session.messages), 1)

    def test_solve(self):
        session = self.session(width=5)
        session.handle("x")
        self.assertTrue(session.board.is_solved())
        self.assertTrue(session.messages[0].startswith("solved in "))

    def test_solve_exhausted(self):
        session = self.session(width=3)
        session.handle("x")
        self.assertTrue(session.board.is_empty())
        self.assertTrue(session.messages[0].startswith("board exhausted in "))

    def test_unknown_command(self):
        session = self.session()
        self.assertTrue(session.handle("z"))
        self.assertEqual(session.messages, ["unknown `z` command"])

    def test_quit(self):
        self.assertFalse(self.session().handle("q"))


if __name__ == "__main__":
    unittest.main()
