"""Visualization utilities for benchmark outputs.

Overview
--------
Charts are generated from the raw ``BenchRecord`` list produced by
``reginae.analysis.experiments``. One line is drawn per evaluator profile.

Chart map
---------
- 01_success_vs_width.png: Solved (1) or exhausted (0) per width.
- 02_jumps_vs_width.png: Search-node expansions vs width (log scale).
    - Hardware-independent effort proxy for each profile.
- 03_time_vs_width.png: Wall-clock time vs width (log scale).
- 04_time_vs_jumps.png: Time vs jumps over all runs, with a least-squares
    trend line; near-linearity means per-node cost dominates.

Filenames carry the suffix from ``reporting.build_suffix``. Every function
writes PNG files into ``out_dir`` and returns the written paths.
"""
from __future__ import annotations

import os
from typing import Dict, List

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt  # noqa: E402
import numpy as np  # noqa: E402

from .reporting import build_suffix  # noqa: E402
from .stats import BenchRecord  # noqa: E402

MARKERS = ["o", "s", "^", "D", "v", "P", "X", "*"]


def _by_profile(records: List[BenchRecord]) -> Dict[str, List[BenchRecord]]:
    grouped: Dict[str, List[BenchRecord]] = {}
    for record in records:
        grouped.setdefault(record["profile"], []).append(record)
    for runs in grouped.values():
        runs.sort(key=lambda r: r["width"])
    return grouped


def _save(fname: str, what: str) -> str:
    plt.savefig(fname, bbox_inches="tight", dpi=150)
    plt.close()
    print(f"Saved {what} chart: {fname}")
    return fname


def plot_benchmarks(records: List[BenchRecord], out_dir: str) -> List[str]:
    """Write the four benchmark charts described in the module docstring."""
    if not records:
        print("Plotting skipped: no benchmark records.")
        return []
    os.makedirs(out_dir, exist_ok=True)
    suffix = build_suffix()
    grouped = _by_profile(records)
    widths = sorted({r["width"] for r in records})
    written: List[str] = []

    plt.figure(figsize=(12, 8))
    for i, (profile, runs) in enumerate(grouped.items()):
        plt.plot(
            [r["width"] for r in runs],
            [1.0 if r["success"] else 0.0 for r in runs],
            marker=MARKERS[i % len(MARKERS)],
            linewidth=2,
            markersize=8,
            label=profile,
        )
    plt.xlabel("N (board width)", fontsize=12)
    plt.ylabel("Solved", fontsize=12)
    plt.title("Solved vs Board Width\n(1 = solution found, 0 = search exhausted)", fontsize=14)
    plt.ylim(-0.05, 1.05)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(widths)
    written.append(_save(os.path.join(out_dir, f"01_success_vs_width{suffix}.png"), "success"))

    plt.figure(figsize=(12, 8))
    for i, (profile, runs) in enumerate(grouped.items()):
        plt.semilogy(
            [r["width"] for r in runs],
            [max(r["jumps"], 1) for r in runs],
            marker=MARKERS[i % len(MARKERS)],
            linewidth=2,
            markersize=8,
            label=profile,
        )
    plt.xlabel("N (board width)", fontsize=12)
    plt.ylabel("Jumps (log scale)", fontsize=12)
    plt.title("Search Expansions vs Board Width\n(Hardware-independent cost)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(widths)
    written.append(_save(os.path.join(out_dir, f"02_jumps_vs_width{suffix}.png"), "jumps"))

    plt.figure(figsize=(12, 8))
    for i, (profile, runs) in enumerate(grouped.items()):
        plt.semilogy(
            [r["width"] for r in runs],
            [max(r["time"], 1e-6) for r in runs],
            marker=MARKERS[i % len(MARKERS)],
            linewidth=2,
            markersize=8,
            label=profile,
        )
    plt.xlabel("N (board width)", fontsize=12)
    plt.ylabel("Time [s] (log scale)", fontsize=12)
    plt.title("Execution Time vs Board Width", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    plt.xticks(widths)
    written.append(_save(os.path.join(out_dir, f"03_time_vs_width{suffix}.png"), "execution-time"))

    jumps = np.array([r["jumps"] for r in records], dtype=float)
    times = np.array([r["time"] for r in records], dtype=float)
    plt.figure(figsize=(12, 8))
    plt.scatter(jumps, times, alpha=0.7, s=50, label="Runs")
    if len(np.unique(jumps)) >= 2:
        z = np.polyfit(jumps, times, 1)
        p = np.poly1d(z)
        x_trend = np.linspace(jumps.min(), jumps.max(), 100)
        plt.plot(x_trend, p(x_trend), "r--", alpha=0.8, label=f"Trend: {z[0]:.2e}s/jump")
    plt.xlabel("Jumps", fontsize=12)
    plt.ylabel("Time [s]", fontsize=12)
    plt.title("Time vs Jumps\n(Per-expansion cost)", fontsize=14)
    plt.legend(fontsize=11)
    plt.grid(True, alpha=0.7)
    written.append(_save(os.path.join(out_dir, f"04_time_vs_jumps{suffix}.png"), "time-vs-jumps"))

    return written
