"""Command-line interface and high-level pipelines for reginae.

This module wires together evaluator binding, board-spec parsing, the
benchmark pipeline (sequential or parallel), the interactive editor and a
quick regression check. It isolates I/O, argument parsing, and progress
reporting from the core search modules so that the rest of the codebase
remains easy to test programmatically.
"""
from __future__ import annotations

import argparse
import os
import sys
import tempfile
from pathlib import Path
from time import perf_counter
from typing import Dict, List, Optional, Sequence, TextIO, Tuple

from . import settings
from .experiments import run_benchmarks, run_benchmarks_parallel
from .plots import plot_benchmarks
from .reporting import save_raw_data_to_csv, save_results_to_csv
from .stats import summarize
from config_manager import ConfigManager
from reginae.heuristics import HEURISTICS, get_heuristic
from reginae.interactive import InteractiveSession
from reginae.loader import EvaluatorBinding, bind_evaluators
from reginae.render import build_board, format_solution, parse_board_spec, render_board
from reginae.solver import Solver
from reginae.utils import is_valid_solution


# ------------- Utils --------------------------------------------------------

def parse_profile_filters(profile_args: Optional[List[str]]) -> Optional[List[str]]:
    """Normalize profile filter CLI inputs into a flat list of names.

    Accepts repeated flags (e.g., ``-p plain -p ladder``) and comma-separated
    lists (e.g., ``-p plain,ladder``). Returns ``None`` when no filter is
    provided so that callers can fall back to every configured profile.
    """
    if not profile_args:
        return None
    selected: List[str] = []
    for entry in profile_args:
        for token in entry.split(","):
            token = token.strip()
            if token:
                selected.append(token)
    return list(dict.fromkeys(selected)) or None


def parse_heuristic_spec(spec: str) -> Tuple[str, float]:
    """Parse ``name[:weight]`` for a built-in heuristic; the weight defaults to 1.0."""
    name, _, weight = spec.partition(":")
    get_heuristic(name)
    if not weight:
        return name, 1.0
    try:
        return name, float(weight)
    except ValueError as exc:
        raise ValueError(f"Invalid heuristic spec '{spec}': failed parsing the weight: {exc}") from exc


def apply_configuration(
    config_path: Optional[str], profile_filter: Optional[List[str]] = None
) -> Tuple[Optional[ConfigManager], List[str]]:
    """Load configuration (when a path is given) and apply profile filtering.

    This function updates the global ``settings`` module in-place to reflect
    values from the JSON file. It returns the ``ConfigManager`` used (or
    ``None``) and the list of selected profile names.
    """
    config_mgr = ConfigManager(config_path) if config_path else None

    if config_mgr is not None:
        experiment_settings = config_mgr.get_experiment_settings()
        if experiment_settings:
            settings.WIDTHS = [int(w) for w in experiment_settings.get("widths", settings.WIDTHS)]
            settings.OUT_DIR = experiment_settings.get("output_dir", settings.OUT_DIR)
            settings.PERSISTENT_CACHE = bool(experiment_settings.get("persistent_cache", settings.PERSISTENT_CACHE))
            settings.MEMO_KEY = str(experiment_settings.get("memo_key", settings.MEMO_KEY))
        profiles = config_mgr.get_profiles()
        if profiles:
            settings.set_profiles(profiles)
        initial = config_mgr.get_initial_queens()
        if initial:
            settings.INITIAL_QUEENS = initial

    if settings.MEMO_KEY not in ("queens", "path"):
        raise ValueError(f"Invalid memo_key '{settings.MEMO_KEY}', must be 'queens' or 'path'")
    if any(w < 1 for w in settings.WIDTHS):
        raise ValueError(f"Board widths must be positive, got {settings.WIDTHS}")

    available = list(settings.PROFILES)
    if profile_filter:
        unknown = set(profile_filter).difference(available)
        if unknown:
            raise ValueError("Unknown profiles requested: " + ", ".join(sorted(unknown)))
        selected = [name for name in available if name in profile_filter]
    else:
        selected = available

    if not selected:
        raise ValueError("No profiles selected after applying filters.")
    return config_mgr, selected


# ------------- Solve --------------------------------------------------------

def run_solve(
    text: str,
    evaluator_specs: Sequence[str] = (),
    heuristic_specs: Sequence[str] = (),
    render: bool = False,
    memo_key: str = "path",
    stdout: Optional[TextIO] = None,
) -> List[EvaluatorBinding]:
    """Solve the board described by ``text`` and print the result line.

    Returns the evaluator bindings so the caller controls their lifetime.
    """
    stdout = stdout if stdout is not None else sys.stdout
    solver = Solver(memo_key=memo_key)
    for spec in heuristic_specs:
        name, weight = parse_heuristic_spec(spec)
        solver.with_evaluator(get_heuristic(name), weight)
    bindings = bind_evaluators(solver, evaluator_specs)

    width, queens = parse_board_spec(text)
    solution = solver.solve(build_board(width, queens))

    print(format_solution(solution), file=stdout)
    if render:
        print(render_board(solution.board), file=stdout)
    return bindings


# ------------- Pipeline: benchmarks ----------------------------------------

def main_bench(selected_profiles: List[str], parallel: bool = False, validate: bool = False) -> None:
    """Run the benchmark pipeline and write CSV files and charts."""
    start_total = perf_counter()
    profiles = {name: settings.PROFILES[name] for name in selected_profiles}

    print("=" * 70)
    print(f"BENCHMARK: widths {settings.WIDTHS}, profiles {selected_profiles}")
    print("=" * 70)

    runner = run_benchmarks_parallel if parallel else run_benchmarks
    records = runner(
        settings.WIDTHS,
        profiles,
        initial_queens=settings.INITIAL_QUEENS,
        progress_label="Benchmarks",
        validate=validate,
        persistent=settings.PERSISTENT_CACHE,
        memo_key=settings.MEMO_KEY,
    )

    summaries = summarize(records)
    save_results_to_csv(summaries, settings.OUT_DIR)
    save_raw_data_to_csv(records, settings.OUT_DIR)
    plot_benchmarks(records, settings.OUT_DIR)

    total_time = perf_counter() - start_total
    print("\nBenchmark pipeline completed!")
    print(f"Total time: {total_time:.1f}s")
    for name, summary in summaries.items():
        print(f"  {name}: {summary['successes']}/{summary['total_runs']} solved, mean jumps {summary['jumps']['mean']:.1f}")


# ------------- Quick regression -------------------------------------------

def run_quick_regression_tests() -> None:
    """Execute a fast, deterministic smoke test at width 8.

    Verifies that:
    - The solver finds a valid solution with no heuristic and with each
      built-in heuristic.
    - Two runs with the same configuration produce identical results.
    - The benchmark pipeline produces a non-empty CSV in a temporary folder.
    """
    print("Running quick regression tests (N=8) across all heuristics...")

    configurations: Dict[str, List[Tuple[str, float]]] = {"plain": []}
    for name in sorted(HEURISTICS):
        configurations[name] = [(name, 1.0)]

    for label, entries in configurations.items():
        outcomes = []
        for _ in range(2):
            solver = Solver()
            for name, weight in entries:
                solver.with_evaluator(get_heuristic(name), weight)
            board, success, jumps = solver.solve(build_board(8, []))
            if not success:
                raise AssertionError(f"{label} failed to find a solution for N=8.")
            if not is_valid_solution(board):
                raise AssertionError(f"{label} returned an invalid solution for N=8: {list(board.queens())}.")
            outcomes.append((list(board.queens()), jumps))
        if outcomes[0] != outcomes[1]:
            raise AssertionError(f"{label} is not deterministic: {outcomes}.")
        print(f"  [{label}] solution found, jumps={outcomes[0][1]}")

    records = run_benchmarks([8], configurations, validate=True)
    with tempfile.TemporaryDirectory() as tmpdir:
        csv_path = Path(save_raw_data_to_csv(records, tmpdir))
        if not csv_path.exists() or csv_path.stat().st_size == 0:
            raise AssertionError("Raw data CSV was not generated successfully during quick tests.")

    print("Quick regression tests passed.")


# ------------- CLI wiring --------------------------------------------------

def build_arg_parser() -> argparse.ArgumentParser:
    """Construct the argument parser for the CLI entry point."""
    parser = argparse.ArgumentParser(
        description="Solve N-Queens boards read from stdin (width followed by comma-separated queen indices)."
    )
    parser.add_argument(
        "--mode",
        choices=["solve", "bench", "play"],
        default="solve",
        help="solve a board from stdin (default), run the benchmark pipeline, or start the interactive editor.",
    )
    parser.add_argument(
        "--evaluator",
        "-e",
        action="append",
        default=[],
        metavar="TARGET:FUNCTION[:WEIGHT]",
        help="Bind a scoring function from a module or .py file (repeatable; weight defaults to 0).",
    )
    parser.add_argument(
        "--heuristic",
        "-H",
        action="append",
        default=[],
        metavar="NAME[:WEIGHT]",
        help=f"Bind a built-in heuristic ({', '.join(sorted(HEURISTICS))}); weight defaults to 1.",
    )
    parser.add_argument("--render", action="store_true", help="Print the final board after the result line.")
    parser.add_argument(
        "--memo-key",
        choices=["path", "queens"],
        default="path",
        help="Probe the dead-end cache with the search path (default) or with every queen on the board.",
    )
    parser.add_argument(
        "--profile",
        "-p",
        action="append",
        help="Filter benchmark profiles (accepts comma-separated values or multiple flags).",
    )
    parser.add_argument("--parallel", action="store_true", help="Run benchmarks on a process pool.")
    parser.add_argument("--config", default=None, help="Path to a JSON configuration file for benchmarks.")
    parser.add_argument("--validate", action="store_true", help="Re-check every benchmark solution from scratch.")
    parser.add_argument("--width", type=int, default=8, help="Initial board width for the interactive editor.")
    parser.add_argument("--quick-test", action="store_true", help="Run quick regression tests (N=8) and exit.")
    return parser


def main(argv: Optional[Sequence[str]] = None) -> None:
    """CLI entry point: parse arguments and dispatch to the chosen mode."""
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if args.quick_test:
        run_quick_regression_tests()
        return

    try:
        if args.mode == "solve":
            run_solve(sys.stdin.read(), args.evaluator, args.heuristic, render=args.render, memo_key=args.memo_key)
        elif args.mode == "play":
            InteractiveSession(width=args.width).run()
        else:
            try:
                _, selected = apply_configuration(args.config, parse_profile_filters(args.profile))
            except FileNotFoundError as exc:
                print(f"Configuration file not found: {exc}")
                raise SystemExit(1) from exc
            except ValueError as exc:
                print(f"Configuration error: {exc}")
                raise SystemExit(1) from exc
            print(f"Selected profiles: {selected}")
            print(f"Output directory: {os.path.abspath(settings.OUT_DIR)}")
            main_bench(selected, parallel=args.parallel, validate=args.validate)
    except KeyboardInterrupt:
        print("\nExecution interrupted by user.")
        raise SystemExit(130) from None
    except ValueError as exc:
        print(f"Input error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc
