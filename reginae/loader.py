"""Start-up binding of external scoring functions.

A binding spec has the form ``target:function[:weight]``:

- ``target`` is a dotted module name (``reginae.heuristics``) or a path to a
  Python source file (``./my_scores.py``);
- ``function`` is the attribute to bind; it must be callable as
  ``function(board, last_move) -> float``;
- ``weight`` is a float, ``0.0`` when omitted.

Each :class:`EvaluatorBinding` keeps a reference to the module it came from.
Callers own the bindings and must hold them while any bound function may
still be called.
"""

from __future__ import annotations

import importlib
import importlib.util
from dataclasses import dataclass
from pathlib import Path
from types import ModuleType
from typing import Callable, Iterable, List

from .board import Board
from .solver import Solver


@dataclass(frozen=True)
class EvaluatorBinding:
    spec: str
    module: ModuleType
    function: Callable[[Board, int], float]
    weight: float


def parse_binding_spec(spec: str):
    """Split ``spec`` into ``(target, function, weight)``.

    The spec is split from the right, so a source path may contain colons
    itself (``C:\\scores\\mine.py:half:2``).

    Raises
    ------
    ValueError
        If a part is missing, empty, or the weight is not a float.
    """
    parts = spec.rsplit(":", 2)
    if len(parts) < 2:
        raise ValueError(f"Invalid evaluator spec '{spec}': expected target:function[:weight]")
    weight = 0.0
    if len(parts) == 3:
        try:
            weight = float(parts[2])
        except ValueError as exc:
            head, _, last = spec.rpartition(":")
            # a path with a colon and no weight, e.g. C:\scores.py:half
            if not head.endswith(".py"):
                raise ValueError(f"Invalid evaluator spec '{spec}': failed parsing the weight: {exc}") from exc
            parts = [head, last]
    target, function = parts[0].strip(), parts[1].strip()
    if not target:
        raise ValueError(f"Invalid evaluator spec '{spec}': the target cannot be empty")
    if not function:
        raise ValueError(f"Invalid evaluator spec '{spec}': the function name cannot be empty")
    return target, function, weight


def load_module(target: str) -> ModuleType:
    """Import ``target`` either as a source file path or as a dotted module."""
    if target.endswith(".py"):
        path = Path(target)
        if not path.is_file():
            raise ValueError(f"Evaluator source not found: {target}")
        spec = importlib.util.spec_from_file_location(f"reginae_external_{path.stem}", str(path))
        if spec is None or spec.loader is None:
            raise ValueError(f"Cannot load evaluator source: {target}")
        module = importlib.util.module_from_spec(spec)
        try:
            spec.loader.exec_module(module)
        except Exception as exc:
            raise ValueError(f"Error while executing evaluator source '{target}': {exc}") from exc
        return module
    try:
        return importlib.import_module(target)
    except ImportError as exc:
        raise ValueError(f"Error while importing evaluator module '{target}': {exc}") from exc


def load_binding(spec: str) -> EvaluatorBinding:
    target, name, weight = parse_binding_spec(spec)
    module = load_module(target)
    function = getattr(module, name, None)
    if function is None:
        raise ValueError(f"Function '{name}' not found in '{target}'")
    if not callable(function):
        raise ValueError(f"'{name}' in '{target}' is not callable")
    return EvaluatorBinding(spec=spec, module=module, function=function, weight=weight)


def bind_evaluators(solver: Solver, specs: Iterable[str]) -> List[EvaluatorBinding]:
    """Load every spec and register it on ``solver`` in order."""
    bindings = [load_binding(spec) for spec in specs]
    for binding in bindings:
        solver.with_evaluator(binding.function, binding.weight)
    return bindings
