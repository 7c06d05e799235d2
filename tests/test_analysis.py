"""Benchmark runners, statistics, CSV export, plots and CLI wiring."""

import csv
import json
from contextlib import redirect_stderr, redirect_stdout
from io import StringIO
from pathlib import Path
import sys
import tempfile
import unittest
from unittest import mock

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from reginae.analysis import settings
from reginae.analysis.cli import (
    apply_configuration,
    main,
    parse_heuristic_spec,
    parse_profile_filters,
    run_solve,
)
from reginae.analysis.experiments import build_solver, run_benchmarks, run_benchmarks_parallel
from reginae.analysis.plots import plot_benchmarks
from reginae.analysis.reporting import build_suffix, save_raw_data_to_csv, save_results_to_csv
from reginae.analysis.stats import compute_detailed_statistics, summarize
from reginae.heuristics import ladder

PROFILES = {"plain": [], "ladder": [("ladder", 1.0)]}
SETTING_NAMES = ("WIDTHS", "PROFILES", "INITIAL_QUEENS", "PERSISTENT_CACHE", "MEMO_KEY", "OUT_DIR")


class SettingsGuard(unittest.TestCase):
    """Restore the mutable settings module after each test."""

    def setUp(self):
        self._saved = {name: getattr(settings, name) for name in SETTING_NAMES}
        self.tmpdir = tempfile.TemporaryDirectory()
        self.out_dir = self.tmpdir.name

    def tearDown(self):
        for name, value in self._saved.items():
            setattr(settings, name, value)
        self.tmpdir.cleanup()


class ExperimentTests(unittest.TestCase):

    def test_build_solver(self):
        solver, bindings = build_solver([("ladder", 2.0), ("reginae.heuristics:ladder", 0.5)], memo_key="queens")
        self.assertEqual(len(bindings), 1)
        self.assertEqual(solver.memo_key, "queens")
        self.assertEqual([(e.function, e.weight) for e in solver.evaluator.evaluators], [(ladder, 2.0), (ladder, 0.5)])

    def test_run_benchmarks(self):
        records = run_benchmarks([4, 5], PROFILES, validate=True)
        self.assertEqual([(r["width"], r["profile"]) for r in records], [(4, "plain"), (4, "ladder"), (5, "plain"), (5, "ladder")])
        by_width = {r["width"]: r for r in records if r["profile"] == "plain"}
        self.assertFalse(by_width[4]["success"])
        self.assertFalse(by_width[4]["valid"])
        self.assertTrue(by_width[5]["success"])
        self.assertTrue(by_width[5]["valid"])
        self.assertEqual(len(by_width[5]["queens"]), 5)

    def test_initial_queens(self):
        records = run_benchmarks([4], {"plain": []}, initial_queens={4: [1]}, validate=True)
        self.assertTrue(records[0]["success"])
        self.assertIn(1, records[0]["queens"])

    def test_parallel_matches_sequential(self):
        sequential = run_benchmarks([5, 6], PROFILES)
        parallel = run_benchmarks_parallel([5, 6], PROFILES)
        strip = lambda records: [(r["profile"], r["width"], r["success"], r["jumps"], r["queens"]) for r in records]
        self.assertEqual(strip(parallel), strip(sequential))


class StatsTests(unittest.TestCase):

    def test_detailed_statistics(self):
        stats = compute_detailed_statistics([1, 2, 3, 4])
        self.assertEqual(stats["count"], 4)
        self.assertEqual(stats["mean"], 2.5)
        self.assertEqual(stats["q25"], 2)
        self.assertEqual(stats["q75"], 4)
        self.assertEqual(stats["range"], 3)

    def test_empty_statistics(self):
        stats = compute_detailed_statistics([])
        self.assertEqual(stats["count"], 0)
        self.assertIsNone(stats["mean"])

    def test_summarize(self):
        records = [
            {"profile": "a", "width": 4, "success": False, "jumps": 10, "time": 0.1, "queens": [], "valid": None},
            {"profile": "a", "width": 5, "success": True, "jumps": 4, "time": 0.2, "queens": [0, 7, 14, 16, 23], "valid": None},
            {"profile": "b", "width": 5, "success": True, "jumps": 6, "time": 0.3, "queens": [0, 7, 14, 16, 23], "valid": None},
        ]
        summaries = summarize(records)
        self.assertEqual(list(summaries), ["a", "b"])
        self.assertEqual(summaries["a"]["successes"], 1)
        self.assertEqual(summaries["a"]["success_rate"], 0.5)
        self.assertEqual(summaries["a"]["widths"], [4, 5])
        self.assertEqual(summaries["a"]["jumps"]["mean"], 7)
        self.assertEqual(summaries["a"]["success_jumps"]["mean"], 4)


class OutputTests(SettingsGuard):

    def test_csv_files(self):
        records = run_benchmarks([4, 5], PROFILES)
        with mock.patch.object(settings, "DATE_IN_FILENAMES", False), mock.patch.object(settings, "RUN_TAG", "unit"):
            summary_path = save_results_to_csv(summarize(records), self.out_dir)
            raw_path = save_raw_data_to_csv(records, self.out_dir)
        self.assertEqual(Path(summary_path).name, "bench_summary_unit.csv")
        self.assertEqual(Path(raw_path).name, "bench_raw_unit.csv")

        with open(summary_path, newline="") as f:
            rows = list(csv.DictReader(f))
        self.assertEqual([row["profile"] for row in rows], ["plain", "ladder"])
        self.assertEqual(rows[0]["successes"], "1")
        self.assertEqual(rows[0]["widths"], "4 5")

        with open(raw_path, newline="") as f:
            rows = list(csv.DictReader(f))
        self.assertEqual(len(rows), 4)
        self.assertEqual(rows[0]["valid"], "")

    def test_suffix(self):
        with mock.patch.object(settings, "DATE_IN_FILENAMES", True), mock.patch.object(settings, "RUN_TAG", None), \
                mock.patch.object(settings, "RUN_ID", "20250101-000000"):
            self.assertEqual(build_suffix(), "_20250101-000000")
        with mock.patch.object(settings, "DATE_IN_FILENAMES", False), mock.patch.object(settings, "RUN_TAG", None):
            self.assertEqual(build_suffix(), "")

    def test_plots(self):
        records = run_benchmarks([4, 5, 6], PROFILES)
        paths = plot_benchmarks(records, self.out_dir)
        self.assertEqual(len(paths), 4)
        for path in paths:
            self.assertTrue(Path(path).stat().st_size > 0)

    def test_plots_without_records(self):
        self.assertEqual(plot_benchmarks([], self.out_dir), [])


class ConfigurationTests(SettingsGuard):

    def write_config(self, payload):
        path = Path(self.out_dir) / "config.json"
        path.write_text(json.dumps(payload))
        return str(path)

    def test_defaults_without_file(self):
        config_mgr, selected = apply_configuration(None)
        self.assertIsNone(config_mgr)
        self.assertEqual(selected, list(settings.PROFILES))

    def test_file_overrides_settings(self):
        path = self.write_config({
            "experiment_settings": {"widths": [5, 6], "output_dir": self.out_dir, "memo_key": "queens"},
            "profiles": {"solo": [{"function": "ladder", "weight": 1}]},
            "initial_queens": {"6": [1]},
        })
        _, selected = apply_configuration(path)
        self.assertEqual(selected, ["solo"])
        self.assertEqual(settings.WIDTHS, [5, 6])
        self.assertEqual(settings.MEMO_KEY, "queens")
        self.assertEqual(settings.INITIAL_QUEENS, {6: [1]})

    def test_filter(self):
        _, selected = apply_configuration(None, ["ladder", "plain"])
        self.assertEqual(selected, ["plain", "ladder"])

    def test_errors(self):
        with self.assertRaises(ValueError):
            apply_configuration(None, ["nope"])
        with self.assertRaises(ValueError):
            apply_configuration(self.write_config({"experiment_settings": {"widths": [0]}}))
        with self.assertRaises(ValueError):
            apply_configuration(self.write_config({"experiment_settings": {"widths": [4], "memo_key": "cells"}}))

    def test_parse_profile_filters(self):
        self.assertIsNone(parse_profile_filters(None))
        self.assertEqual(parse_profile_filters(["plain,ladder", "plain", " "]), ["plain", "ladder"])

    def test_parse_heuristic_spec(self):
        self.assertEqual(parse_heuristic_spec("ladder"), ("ladder", 1.0))
        self.assertEqual(parse_heuristic_spec("wrapping_ladder:-0.5"), ("wrapping_ladder", -0.5))
        for spec in ("nope", "ladder:heavy"):
            with self.subTest(spec=spec):
                with self.assertRaises(ValueError):
                    parse_heuristic_spec(spec)


class CommandLineTests(SettingsGuard):

    def test_run_solve(self):
        out = StringIO()
        run_solve("8\n", heuristic_specs=["ladder"], render=True, stdout=out)
        lines = out.getvalue().splitlines()
        self.assertTrue(lines[0].startswith("true with "))
        self.assertEqual(len(lines), 9)

    def test_run_solve_failure_keeps_queens(self):
        out = StringIO()
        run_solve("4,0", stdout=out)
        self.assertRegex(out.getvalue(), r"^false with \d+ jumps: \[0\]\n$")

    def test_run_solve_binds_evaluators(self):
        bindings = run_solve("6,1", evaluator_specs=["reginae.heuristics:overlapping:1"], memo_key="queens", stdout=StringIO())
        self.assertEqual(len(bindings), 1)

    def test_main_solve(self):
        out = StringIO()
        with mock.patch("sys.stdin", StringIO("5\n")), redirect_stdout(out):
            main(["--mode", "solve"])
        self.assertTrue(out.getvalue().startswith("true with "))

    def test_main_rejects_bad_input(self):
        with mock.patch("sys.stdin", StringIO("0\n")), redirect_stderr(StringIO()):
            with self.assertRaises(SystemExit) as cm:
                main([])
        self.assertEqual(cm.exception.code, 1)

    def test_main_bench(self):
        path = Path(self.out_dir) / "config.json"
        path.write_text(json.dumps({
            "experiment_settings": {"widths": [4, 5], "output_dir": self.out_dir},
            "profiles": {"plain": [], "ladder": [{"function": "ladder", "weight": 1}]},
        }))
        with redirect_stdout(StringIO()):
            main(["--mode", "bench", "--config", str(path), "-p", "plain", "--validate"])
        written = sorted(p.name for p in Path(self.out_dir).iterdir())
        self.assertTrue(any(name.startswith("bench_summary") for name in written))
        self.assertTrue(any(name.startswith("bench_raw") for name in written))
        self.assertTrue(any(name.startswith("04_time_vs_jumps") for name in written))

    def test_main_bench_unknown_profile(self):
        with redirect_stdout(StringIO()):
            with self.assertRaises(SystemExit) as cm:
                main(["--mode", "bench", "-p", "nope"])
        self.assertEqual(cm.exception.code, 1)


if __name__ == "__main__":
    unittest.main()
