"""
Benchmark and orchestration package for the reginae solver.

This package contains:
- settings: global knobs (widths, profiles, cache scope, output naming)
- stats: typed records and aggregation helpers
- experiments: sequential and parallel benchmark runners
- reporting: CSV exports of summaries and raw runs
- plots: benchmark charts
- cli: top-level pipeline entry points and argument parser
"""

from . import settings as settings  # re-export for convenience
from .stats import (
    StatsSummary,
    BenchRecord,
    ProfileSummary,
    compute_detailed_statistics,
    summarize,
    ProgressPrinter,
)

__all__ = [
    # types
    "StatsSummary",
    "BenchRecord",
    "ProfileSummary",
    # utils
    "compute_detailed_statistics",
    "summarize",
    "ProgressPrinter",
    # settings module
    "settings",
]
