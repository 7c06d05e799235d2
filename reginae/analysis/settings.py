"""Global settings for the benchmark pipeline.

This module centralizes tunable constants used across the orchestration code.
Values can be overridden at runtime via the configuration loader in
`reginae.analysis.cli.apply_configuration`.
"""
from __future__ import annotations

import multiprocessing
from datetime import datetime
from typing import Dict, List, Optional, Tuple

# Board widths to benchmark (in ascending order)
WIDTHS: List[int] = [4, 5, 6, 7, 8, 9, 10]

# Evaluator profiles: name -> list of (function, weight). A function is either
# a built-in heuristic name or a "target:function" binding.
PROFILES: Dict[str, List[Tuple[str, float]]] = {
    "plain": [],
    "overlapping": [("overlapping", 1.0)],
    "ladder": [("ladder", 1.0)],
    "ladder_mixed": [("ladder", 1.0), ("wrapping_ladder", -0.5)],
}

# Pre-placed queens per width (empty board when missing)
INITIAL_QUEENS: Dict[int, List[int]] = {}

# Keep the dead-end cache and jump counter across solve calls of one solver.
# Benchmarks create one solver per run, so this only matters for reuse.
PERSISTENT_CACHE: bool = True

# What the dead-end cache is probed with: "path" (moves pushed by the search)
# or "queens" (every queen on the board, prunes far more)
MEMO_KEY: str = "path"

# Output directory for CSV and charts
OUT_DIR: str = "results_reginae"

# Number of worker processes to use (leave one core for the OS)
NUM_PROCESSES: int = max(1, multiprocessing.cpu_count() - 1)

# Output naming policy --------------------------------------------------------

# When True, results and plots carry a datestamp suffix (e.g., _20251113-142530)
# shared by every artifact of the same run.
DATE_IN_FILENAMES: bool = True

# Unique run identifier used for filename stamping; set once at import time.
RUN_ID: str = datetime.now().strftime("%Y%m%d-%H%M%S")

# Optional run labeling to avoid overwriting outputs
RUN_TAG: Optional[str] = None


def set_profiles(profiles: Dict[str, List[Tuple[str, float]]]) -> None:
    """Replace the active evaluator profiles and print a short summary."""
    global PROFILES
    PROFILES = {name: [(str(fn), float(w)) for fn, w in entries] for name, entries in profiles.items()}

    print("Evaluator profiles configured:")
    for name, entries in PROFILES.items():
        described = ", ".join(f"{fn}*{w:g}" for fn, w in entries) or "no evaluators"
        print(f"   - {name}: {described}")
