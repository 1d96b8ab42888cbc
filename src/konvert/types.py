# -----------------------------------------------------------------------------
# Types module: Shared dataclasses for the conversion core
# Purpose:
#   Define the calculation variants (Rate / Formula) and the directed
#   Conversion edge used across the table loader, path finder and evaluator.
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
from dataclasses import dataclass, field
from typing import Callable, List, Tuple, Union

Transform = Callable[[float], float]

@dataclass(frozen=True)
class Rate:
    """
    Multiplicative calculation: 1 source unit equals `rate` target units.
    Forward transform is x -> x * rate.
    """
    rate: float

    def apply(self, value: float) -> float:
        return value * self.rate

    def inverted(self) -> "Rate":
        # Zero rates are rejected by the table loader; keep float semantics here.
        if self.rate == 0:
            return Rate(math.inf)
        return Rate(1.0 / self.rate)

    def describe(self) -> str:
        return f"x * {self.rate:.12g}"

@dataclass(frozen=True)
class Formula:
    """
    Arbitrary pair of unary transforms for affine/non-linear relations
    (e.g., temperature scales).
    - forward: converts source -> target
    - reverse: converts target -> source
    The pair must be mutual inverses; this is not checked here.
    - expr / reverse_expr: optional source text, kept for display only
    """
    forward: Transform
    reverse: Transform
    expr: str | None = field(default=None, compare=False)
    reverse_expr: str | None = field(default=None, compare=False)

    def apply(self, value: float) -> float:
        return self.forward(value)

    def inverted(self) -> "Formula":
        return Formula(self.reverse, self.forward, self.reverse_expr, self.expr)

    def describe(self) -> str:
        return self.expr or getattr(self.forward, "__name__", "f(x)")

Calculation = Union[Rate, Formula]

@dataclass(frozen=True)
class Conversion:
    """
    Directed edge: source_unit -> target_unit with a Calculation.
    Equality and hashing use the (source_unit, target_unit) pair only, so two
    parallel edges with different calculations count as the same edge when a
    path checks for repeats.
    """
    source_unit: str
    calculation: Calculation = field(compare=False)
    target_unit: str

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source_unit, self.target_unit)

    def invert(self) -> "Conversion":
        return Conversion(self.target_unit, self.calculation.inverted(), self.source_unit)

    def apply(self, value: float) -> float:
        return self.calculation.apply(value)

    def __str__(self) -> str:
        return f"{self.source_unit}->{self.target_unit}"

# Ordered chain of edges from a query source to a query target.
Path = List[Conversion]

def with_inverses(conversions: List[Conversion]) -> List[Conversion]:
    """Base list followed by each edge's inverse, in the same order."""
    return list(conversions) + [c.invert() for c in conversions]
