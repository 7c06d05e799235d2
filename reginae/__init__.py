"""Heuristic-guided N-Queens backtracking search."""

from .board import Board, Boundaries
from .cell import Cell
from .evaluator import Evaluator, WeightedEvaluator
from .heuristics import HEURISTICS, get_heuristic, ladder, overlapping, wrapping_ladder
from .normalized import NormalizedBoard, polar_scan
from .solver import DepletedCache, Solution, Solver
from .utils import conflicts, is_valid_solution

__all__ = [
    "Board",
    "Boundaries",
    "Cell",
    "Evaluator",
    "WeightedEvaluator",
    "NormalizedBoard",
    "polar_scan",
    "Solver",
    "Solution",
    "DepletedCache",
    "HEURISTICS",
    "get_heuristic",
    "overlapping",
    "ladder",
    "wrapping_ladder",
    "conflicts",
    "is_valid_solution",
]
