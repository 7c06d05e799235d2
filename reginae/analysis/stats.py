"""Typed result shapes and statistics helpers for the benchmark pipeline.

Defines ``TypedDict`` structures for benchmark outputs and provides utilities
to compute aggregate statistics per evaluator profile.
"""
from __future__ import annotations

import statistics
from typing import Dict, List, Optional, TypedDict


class StatsSummary(TypedDict, total=False):
    count: int
    mean: Optional[float]
    median: Optional[float]
    std: Optional[float]
    min: Optional[float]
    max: Optional[float]
    q25: Optional[float]
    q75: Optional[float]
    range: Optional[float]


class BenchRecord(TypedDict):
    profile: str
    width: int
    success: bool
    jumps: int
    time: float
    queens: List[int]
    valid: Optional[bool]


class ProfileSummary(TypedDict):
    profile: str
    total_runs: int
    successes: int
    success_rate: float
    widths: List[int]
    jumps: StatsSummary
    time: StatsSummary
    success_jumps: StatsSummary


class ProgressPrinter:
    """Minimal, stdout-only progress reporter for long-running loops.

    Parameters
    ----------
    total : int
        Total number of steps/items expected. Values <= 0 are coerced to 1 to
        avoid division by zero when reporting percentages.
    label : str
        Short label printed in front of the progress counters.
    """

    def __init__(self, total: int, label: str):
        self.total = max(1, total)
        self.label = label

    def update(self, index: int, detail: str = "") -> None:
        """Print a single-line progress update to stdout."""
        percent = (index / self.total) * 100
        suffix = f" - {detail}" if detail else ""
        print(f"[{self.label}] {index}/{self.total} ({percent:.0f}%)" + suffix)


def compute_detailed_statistics(values: List[float]) -> StatsSummary:
    """Compute summary statistics for a numeric sequence.

    Returns count, mean, median, population std, min, max, 25th and 75th
    percentiles (q25, q75) and range. When ``values`` is empty, all numeric
    fields are ``None`` and ``count`` is 0 to keep CSV/plot generation
    consistent.
    """
    if not values:
        return {
            "count": 0,
            "mean": None,
            "median": None,
            "std": None,
            "min": None,
            "max": None,
            "q25": None,
            "q75": None,
            "range": None,
        }

    sorted_vals = sorted(values)
    n = len(values)

    min_val = min(values)
    max_val = max(values)

    return {
        "count": n,
        "mean": statistics.mean(values),
        "median": statistics.median(values),
        "std": statistics.pstdev(values) if n > 1 else 0,
        "min": min_val,
        "max": max_val,
        "q25": sorted_vals[n // 4] if n >= 4 else min_val,
        "q75": sorted_vals[3 * n // 4] if n >= 4 else max_val,
        "range": max_val - min_val,
    }


def summarize(records: List[BenchRecord]) -> Dict[str, ProfileSummary]:
    """Aggregate benchmark records per profile, in first-seen profile order."""
    grouped: Dict[str, List[BenchRecord]] = {}
    for record in records:
        grouped.setdefault(record["profile"], []).append(record)

    summaries: Dict[str, ProfileSummary] = {}
    for profile, runs in grouped.items():
        successes = [r for r in runs if r["success"]]
        summaries[profile] = {
            "profile": profile,
            "total_runs": len(runs),
            "successes": len(successes),
            "success_rate": len(successes) / len(runs),
            "widths": sorted({r["width"] for r in runs}),
            "jumps": compute_detailed_statistics([r["jumps"] for r in runs]),
            "time": compute_detailed_statistics([r["time"] for r in runs]),
            "success_jumps": compute_detailed_statistics([r["jumps"] for r in successes]),
        }
    return summaries
