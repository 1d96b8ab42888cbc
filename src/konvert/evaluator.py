# -----------------------------------------------------------------------------
# Path evaluator
# Purpose: Apply a selected path's calculations, left to right, to a value.
# -----------------------------------------------------------------------------

from __future__ import annotations
from typing import Any, Dict, List, Tuple
from .types import Path

def evaluate(path: Path, value: float) -> float:
    # Rate multiplies, Formula applies its forward transform.
    # NaN/inf from a bad calculation propagate untouched.
    out = float(value)
    for edge in path:
        out = edge.apply(out)
    return out

def evaluate_steps(path: Path, value: float) -> Tuple[float, List[Dict[str, Any]]]:
    """
    Same fold as `evaluate`, but also returns one row per edge
    (from/to units, calculation text, value before and after) for traces.
    """
    rows: List[Dict[str, Any]] = []
    out = float(value)
    for edge in path:
        before = out
        out = edge.apply(out)
        rows.append({
            "from": edge.source_unit,
            "to": edge.target_unit,
            "calculation": edge.calculation.describe(),
            "input": before,
            "output": out,
        })
    return out, rows
