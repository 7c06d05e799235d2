"""Benchmark runners (sequential and parallel) for evaluator profiles.

For every ``(width, profile)`` pair a fresh :class:`reginae.Solver` is built
with the profile's scoring functions and run once: the search is
deterministic, so repeated runs would only repeat the same jump count.

Outputs are lists of ``BenchRecord`` dictionaries suitable for CSV export and
plotting. Validation optionally re-checks each successful board from scratch.
"""
from __future__ import annotations

from concurrent.futures import ProcessPoolExecutor
from time import perf_counter
from typing import Dict, List, Optional, Sequence, Tuple

from . import settings
from .stats import BenchRecord, ProgressPrinter
from reginae.heuristics import get_heuristic
from reginae.loader import EvaluatorBinding, load_binding
from reginae.render import build_board
from reginae.solver import Solver
from reginae.utils import is_valid_solution

ProfileEntries = Sequence[Tuple[str, float]]


def build_solver(entries: ProfileEntries, persistent: bool = True, memo_key: str = "path") -> Tuple[Solver, List[EvaluatorBinding]]:
    """Create a solver for a profile.

    Entries naming a built-in heuristic are bound directly; entries of the
    form ``target:function`` go through :func:`reginae.loader.load_binding`.
    The returned bindings keep loaded modules referenced.
    """
    solver = Solver(persistent=persistent, memo_key=memo_key)
    bindings: List[EvaluatorBinding] = []
    for function, weight in entries:
        if ":" in function:
            binding = load_binding(f"{function}:{float(weight)!r}")
            bindings.append(binding)
            solver.with_evaluator(binding.function, binding.weight)
        else:
            solver.with_evaluator(get_heuristic(function), float(weight))
    return solver, bindings


def run_single_benchmark(params: Tuple[str, ProfileEntries, int, Sequence[int], bool, bool, str]) -> BenchRecord:
    """Worker wrapper to run one profile on one width (for parallel mapping)."""
    profile, entries, width, initial_queens, validate, persistent, memo_key = params
    solver, _bindings = build_solver(entries, persistent=persistent, memo_key=memo_key)
    board = build_board(width, initial_queens)

    start = perf_counter()
    result, success, jumps = solver.solve(board)
    elapsed = perf_counter() - start

    valid: Optional[bool] = None
    if validate:
        valid = is_valid_solution(result) if success else False
        if success and not valid:
            raise AssertionError(f"Profile {profile} reported an invalid solution for width {width}: {list(result.queens())}")

    return {
        "profile": profile,
        "width": width,
        "success": success,
        "jumps": jumps,
        "time": elapsed,
        "queens": list(result.queens()),
        "valid": valid,
    }


def _work_items(
    widths: List[int],
    profiles: Dict[str, List[Tuple[str, float]]],
    initial_queens: Optional[Dict[int, List[int]]],
    validate: bool,
    persistent: bool,
    memo_key: str,
) -> List[Tuple[str, ProfileEntries, int, Sequence[int], bool, bool, str]]:
    initial_queens = initial_queens or {}
    return [
        (name, entries, width, initial_queens.get(width, []), validate, persistent, memo_key)
        for width in widths
        for name, entries in profiles.items()
    ]


def run_benchmarks(
    widths: List[int],
    profiles: Dict[str, List[Tuple[str, float]]],
    initial_queens: Optional[Dict[int, List[int]]] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    persistent: bool = True,
    memo_key: str = "path",
) -> List[BenchRecord]:
    """Run every profile on every width sequentially, widths in the outer loop."""
    items = _work_items(widths, profiles, initial_queens, validate, persistent, memo_key)
    progress = ProgressPrinter(len(items), progress_label) if progress_label else None

    records: List[BenchRecord] = []
    for i, params in enumerate(items, 1):
        record = run_single_benchmark(params)
        records.append(record)
        if progress:
            outcome = "solved" if record["success"] else "exhausted"
            progress.update(i, f"N={record['width']} {record['profile']}: {outcome} in {record['jumps']} jumps")
    return records


def run_benchmarks_parallel(
    widths: List[int],
    profiles: Dict[str, List[Tuple[str, float]]],
    initial_queens: Optional[Dict[int, List[int]]] = None,
    progress_label: Optional[str] = None,
    validate: bool = False,
    persistent: bool = True,
    memo_key: str = "path",
) -> List[BenchRecord]:
    """Same as :func:`run_benchmarks`, spread over a process pool.

    Records come back in the same order as the sequential runner.
    """
    items = _work_items(widths, profiles, initial_queens, validate, persistent, memo_key)
    progress = ProgressPrinter(len(items), progress_label) if progress_label else None

    records: List[BenchRecord] = []
    with ProcessPoolExecutor(max_workers=settings.NUM_PROCESSES) as executor:
        for i, record in enumerate(executor.map(run_single_benchmark, items), 1):
            records.append(record)
            if progress:
                progress.update(i, f"N={record['width']} {record['profile']}")
    return records
