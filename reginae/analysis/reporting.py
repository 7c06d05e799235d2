"""CSV export utilities for benchmark outputs (aggregates and raw runs).

These helpers materialize a compact per-profile summary as well as the full
per-run raw data for downstream analysis or spreadsheet inspection.
"""
from __future__ import annotations

import csv
import os
from typing import Dict, List

from . import settings
from .stats import BenchRecord, ProfileSummary


def build_suffix() -> str:
    """Return the filename suffix from ``RUN_TAG`` and ``RUN_ID`` (or empty).

    The datestamp is appended only when ``DATE_IN_FILENAMES`` is enabled.
    """
    parts: List[str] = []
    run_tag = getattr(settings, "RUN_TAG", None)
    if run_tag:
        parts.append(str(run_tag))
    if getattr(settings, "DATE_IN_FILENAMES", False):
        run_id = getattr(settings, "RUN_ID", None)
        if run_id:
            parts.append(str(run_id))
    return ("_" + "_".join(parts)) if parts else ""


def _fmt(value) -> str:
    if value is None:
        return ""
    if isinstance(value, float):
        return f"{value:.6f}"
    return str(value)


def save_results_to_csv(summaries: Dict[str, ProfileSummary], out_dir: str) -> str:
    """Write one aggregate row per profile and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"bench_summary{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow([
            "profile",
            "total_runs",
            "successes",
            "success_rate",
            "widths",
            "jumps_mean",
            "jumps_median",
            "jumps_max",
            "success_jumps_mean",
            "time_mean_seconds",
            "time_max_seconds",
        ])
        for profile, summary in summaries.items():
            writer.writerow([
                profile,
                summary["total_runs"],
                summary["successes"],
                _fmt(summary["success_rate"]),
                " ".join(str(w) for w in summary["widths"]),
                _fmt(summary["jumps"].get("mean")),
                _fmt(summary["jumps"].get("median")),
                _fmt(summary["jumps"].get("max")),
                _fmt(summary["success_jumps"].get("mean")),
                _fmt(summary["time"].get("mean")),
                _fmt(summary["time"].get("max")),
            ])

    print(f"Saved summary CSV: {filename}")
    return filename


def save_raw_data_to_csv(records: List[BenchRecord], out_dir: str) -> str:
    """Write every benchmark run as one row and return the file path."""
    os.makedirs(out_dir, exist_ok=True)
    filename = os.path.join(out_dir, f"bench_raw{build_suffix()}.csv")

    with open(filename, "w", newline="") as f:
        writer = csv.writer(f)
        writer.writerow(["profile", "width", "success", "jumps", "time_seconds", "valid", "queens"])
        for record in records:
            writer.writerow([
                record["profile"],
                record["width"],
                record["success"],
                record["jumps"],
                _fmt(record["time"]),
                _fmt(record["valid"]),
                " ".join(str(q) for q in record["queens"]),
            ])

    print(f"Saved raw data CSV: {filename}")
    return filename
