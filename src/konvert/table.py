# -----------------------------------------------------------------------------
# Conversion table loader & accessor
# Purpose: Parse a YAML conversion table into Conversion edges and build the
# full conversion set (base edges followed by their inverses).
# - Entry shape is validated by .models.TableEntry (pydantic).
# - Formula entries are compiled by .safe_eval; a missing reverse is derived
#   with sympy.
# -----------------------------------------------------------------------------

from __future__ import annotations
import yaml
from dataclasses import dataclass
from importlib import resources
from typing import Any, Dict, List, Set
from pydantic import ValidationError
from .models import TableDoc, TableEntry
from .safe_eval import ExpressionError, compile_transform, derive_reverse
from .types import Conversion, Formula, Rate, with_inverses

# Domain-specific error to signal malformed tables, bad entries, etc.
class TableError(Exception): pass

def _edge_from_entry(e: TableEntry) -> Conversion:
    if e.rate is not None:
        return Conversion(e.source, Rate(float(e.rate)), e.target)
    # Forward text is whitelisted before sympy sees it.
    forward = compile_transform(e.forward)
    reverse_text = e.reverse or derive_reverse(e.forward)
    formula = Formula(
        forward=forward,
        reverse=compile_transform(reverse_text),
        expr=e.forward,
        reverse_expr=reverse_text,
    )
    return Conversion(e.source, formula, e.target)

@dataclass
class ConversionTable:
    # Base edges exactly as listed in the table (no inverses).
    base: List[Conversion]

    @staticmethod
    def from_yaml_dict(d: Dict[str, Any]) -> "ConversionTable":
        """
        Build a table from a pre-parsed YAML dictionary.
        Expected shape:
          conversions:
            - { source: kg, rate: 1000.0, target: g }
            - { source: C, target: F, forward: "x * 9/5 + 32", reverse: "(x - 32) * 5/9" }
        """
        if not isinstance(d, dict):
            raise TableError("Table must be a mapping with a 'conversions' list.")
        try:
            doc = TableDoc.model_validate(d)
        except ValidationError as e:
            raise TableError(f"Invalid conversion table: {e}")
        edges: List[Conversion] = []
        for i, entry in enumerate(doc.conversions):
            try:
                edges.append(_edge_from_entry(entry))
            except ExpressionError as e:
                raise TableError(f"Entry {i} ({entry.source}->{entry.target}): {e}")
        return ConversionTable(base=edges)

    @staticmethod
    def from_yaml_text(text: str) -> "ConversionTable":
        """
        Convenience: parse raw YAML string into a table.
        Uses yaml.safe_load (no arbitrary object constructors).
        """
        try:
            data = yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise TableError(f"YAML parse failed: {e}")
        return ConversionTable.from_yaml_dict(data or {})

    @staticmethod
    def from_file(path: str) -> "ConversionTable":
        try:
            with open(path, "r", encoding="utf-8") as f:
                return ConversionTable.from_yaml_text(f.read())
        except OSError as e:
            raise TableError(f"Could not read table {path}: {e}")

    @staticmethod
    def builtin() -> "ConversionTable":
        # Default table shipped as package data.
        text = resources.files("konvert").joinpath("data/conversions.yaml").read_text(encoding="utf-8")
        return ConversionTable.from_yaml_text(text)

    def conversions(self) -> List[Conversion]:
        """Full conversion set: base edges, then each edge's inverse."""
        return with_inverses(self.base)

    def units(self) -> Set[str]:
        out = set()
        for c in self.base:
            out.add(c.source_unit)
            out.add(c.target_unit)
        return out

    def list_conversions(self) -> List[Dict[str, Any]]:
        """Flattened listing of base edges (source, target, calculation text)."""
        return [
            {"source": c.source_unit, "target": c.target_unit, "calculation": c.calculation.describe()}
            for c in self.base
        ]
