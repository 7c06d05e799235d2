"""Binding of external scoring functions."""

from pathlib import Path
import sys
import tempfile
import textwrap
import unittest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reginae.board import Board
from reginae.heuristics import ladder
from reginae.loader import bind_evaluators, load_binding, parse_binding_spec
from reginae.solver import Solver


class ParseBindingSpecTests(unittest.TestCase):

    def test_default_weight(self):
        self.assertEqual(parse_binding_spec("pkg.mod:fn"), ("pkg.mod", "fn", 0.0))

    def test_explicit_weight(self):
        self.assertEqual(parse_binding_spec("pkg.mod:fn:-2.5"), ("pkg.mod", "fn", -2.5))

    def test_target_with_colons(self):
        self.assertEqual(parse_binding_spec("C:\\scores\\mine.py:half"), ("C:\\scores\\mine.py", "half", 0.0))
        self.assertEqual(parse_binding_spec("C:\\scores\\mine.py:half:2"), ("C:\\scores\\mine.py", "half", 2.0))

    def test_malformed(self):
        for spec in ("pkg.mod", "a:b:c:d", ":fn", "pkg.mod:", "pkg.mod:fn:heavy"):
            with self.subTest(spec=spec):
                with self.assertRaises(ValueError):
                    parse_binding_spec(spec)


class LoadBindingTests(unittest.TestCase):

    def setUp(self):
        self.tmpdir = tempfile.TemporaryDirectory()
        self.source = Path(self.tmpdir.name) / "scores.py"
        self.source.write_text(textwrap.dedent(
            """
            VALUE = 3


            def half(board, last_move):
                return 0.5
            """
        ))

    def tearDown(self):
        self.tmpdir.cleanup()

    def test_dotted_module(self):
        binding = load_binding("reginae.heuristics:ladder:1.5")
        self.assertIs(binding.function, ladder)
        self.assertEqual(binding.weight, 1.5)
        self.assertEqual(binding.module.__name__, "reginae.heuristics")

    def test_source_file(self):
        binding = load_binding(f"{self.source}:half:2")
        self.assertEqual(binding.function(Board(4), 0), 0.5)
        self.assertEqual(binding.weight, 2.0)
        self.assertIs(binding.module.half, binding.function)

    def test_missing_function(self):
        with self.assertRaises(ValueError):
            load_binding(f"{self.source}:missing")

    def test_not_callable(self):
        with self.assertRaises(ValueError):
            load_binding(f"{self.source}:VALUE")

    def test_missing_module(self):
        with self.assertRaises(ValueError):
            load_binding("reginae_no_such_module:fn")

    def test_broken_source_file(self):
        for name, body in (("syntax.py", "def half(:\n"), ("names.py", "undefined_name\n")):
            with self.subTest(source=name):
                source = Path(self.tmpdir.name) / name
                source.write_text(body)
                with self.assertRaises(ValueError):
                    load_binding(f"{source}:half")

    def test_missing_source_file(self):
        with self.assertRaises(ValueError):
            load_binding(f"{Path(self.tmpdir.name) / 'absent.py'}:half")

    def test_bind_evaluators_registers_in_order(self):
        solver = Solver()
        bindings = bind_evaluators(solver, ["reginae.heuristics:ladder:1", f"{self.source}:half:0.5"])
        self.assertEqual(len(bindings), 2)
        self.assertEqual([e.weight for e in solver.evaluator.evaluators], [1.0, 0.5])
        self.assertIs(solver.evaluator.evaluators[0].function, ladder)


if __name__ == "__main__":
    unittest.main()
