# -----------------------------------------------------------------------------
# Converter: End-to-end conversion pipeline
# Responsibilities:
#   • Check both units exist somewhere in the conversion set
#   • Find the shortest path (PathFinder) and evaluate it (evaluator)
#   • Optional pint cross-check of the result
#   • Structured result with path, human-readable steps, trace and errors
# -----------------------------------------------------------------------------

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence
from .evaluator import evaluate_steps
from .planner import PathFinder, SearchExhausted
from .table import ConversionTable
from .tracer import Tracer
from .types import Conversion, Path
from .verify import cross_check

class UnknownUnitError(Exception):
    def __init__(self, unit: str):
        super().__init__(f"Unknown unit: {unit}")
        self.unit = unit

class NoPathError(Exception):
    def __init__(self, source: str, target: str):
        super().__init__(f"No conversion path from {source} to {target}.")
        self.source = source
        self.target = target

@dataclass
class ConversionResult:
    # Structured response used by the CLI and API layers
    ok: bool
    value: float | None
    source: str
    target: str
    path: List[Dict[str, Any]] = field(default_factory=list)
    steps: List[str] = field(default_factory=list)
    full_trace: List[Dict[str, Any]] = field(default_factory=list)
    check: Dict[str, Any] | None = None
    error: str | None = None
    error_kind: str | None = None  # "unknown_unit" | "no_path" | "search_exhausted" | "evaluation"

    def to_dict(self) -> Dict[str, Any]:
        out = {
            "ok": self.ok,
            "value": self.value,
            "source": self.source,
            "target": self.target,
            "path": self.path,
            "steps": self.steps,
            "trace": self.full_trace,
        }
        if self.check is not None:
            out["check"] = self.check
        if not self.ok:
            out["error"] = self.error
            out["error_kind"] = self.error_kind
        return out

class Converter:
    def __init__(self, conversions: Sequence[Conversion], max_expansions: int | None = None):
        # conversions must already include inverses (see ConversionTable.conversions)
        self.finder = PathFinder(conversions, max_expansions=max_expansions)
        self._units = self.finder.units()

    @classmethod
    def from_table(cls, table: ConversionTable, max_expansions: int | None = None) -> "Converter":
        return cls(table.conversions(), max_expansions=max_expansions)

    def units(self) -> List[str]:
        return sorted(self._units)

    def has_unit(self, unit: str) -> bool:
        return unit in self._units

    def all_paths(self, source: str, target: str) -> List[Path]:
        # Every simple path, shortest first; ties keep discovery order.
        return sorted(self.finder.iter_paths(source, target), key=len)

    def _classify_error(self, e: Exception) -> str:
        """Map raised exceptions to a coarse error_kind for callers."""
        if isinstance(e, UnknownUnitError):
            return "unknown_unit"
        if isinstance(e, NoPathError):
            return "no_path"
        if isinstance(e, SearchExhausted):
            return "search_exhausted"
        return "evaluation"

    def convert(self, value: float, source: str, target: str, verify: bool = False) -> ConversionResult:
        """
        Main orchestration:
          1) Reject units that appear nowhere in the conversion set.
          2) Search for the shortest path; none → no_path.
          3) Fold the path over the value, recording one step per edge.
          4) Optionally cross-check the result with pint.
        """
        trace = Tracer()
        path_view: List[Dict[str, Any]] = []
        steps_view: List[str] = []
        trace.add("inputs", {"value": value, "source": source, "target": target})

        try:
            for unit in (source, target):
                if not self.has_unit(unit):
                    raise UnknownUnitError(unit)

            path = self.finder.find_path(source, target)
            trace.add("path_search", {"found": path is not None, "length": len(path) if path else 0})
            if path is None:
                raise NoPathError(source, target)

            path_view = [
                {"source": c.source_unit, "target": c.target_unit, "calculation": c.calculation.describe()}
                for c in path
            ]
            trace.add("path_selected", {"path": [str(c) for c in path]})

            out, rows = evaluate_steps(path, value)
            for r in rows:
                trace.add("evaluate_step", r)
                steps_view.append(f"{r['input']:g} {r['from']} -> {r['output']:g} {r['to']} ({r['calculation']})")

            check = None
            if verify:
                check = cross_check(value, source, target, out)
                trace.add("cross_check", check)

            trace.add("result", {"value": out})
            return ConversionResult(
                ok=True,
                value=out,
                source=source,
                target=target,
                path=path_view,
                steps=steps_view,
                full_trace=trace.steps(),
                check=check,
            )

        except Exception as e:
            # Uniform error funnel with typed error_kind and full trace
            kind = self._classify_error(e)
            trace.add("error", {"kind": kind, "message": str(e)})
            return ConversionResult(
                ok=False,
                value=None,
                source=source,
                target=target,
                path=path_view,
                steps=steps_view,
                full_trace=trace.steps(),
                error=str(e),
                error_kind=kind,
            )
