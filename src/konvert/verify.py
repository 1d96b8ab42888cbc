# -----------------------------------------------------------------------------
# Result cross-check against pint
# Purpose:
#   Optionally recompute a conversion with pint and compare it to the value
#   produced by walking the conversion graph. Units pint does not know (or
#   knows under another dimension) are reported as "skipped", never failed.
# -----------------------------------------------------------------------------

from __future__ import annotations
import math
from typing import Any, Dict
from pint import UnitRegistry
from pint.errors import PintError

_UR = UnitRegistry(autoconvert_offset_to_baseunit=True)
_Q_ = _UR.Quantity

TOL = 1e-6

# Table names that pint spells differently (pint reads "C" as coulomb, etc.)
PINT_NAMES = {
    "C": "degC",
    "F": "degF",
    "K": "kelvin",
    "lbs": "lb",
    "floz": "fluid_ounce",
    "gal": "gallon",
    "l": "liter",
    "ml": "milliliter",
    "mi": "mile",
    "in": "inch",
}

def pint_name(unit: str) -> str:
    return PINT_NAMES.get(unit, unit)

def cross_check(value: float, source: str, target: str, result: float, tol: float = TOL) -> Dict[str, Any]:
    """
    Returns {"status": "passed"|"failed"|"skipped", "expected": float|None, "reason": str|None}.
    - passed/failed compare with a relative tolerance `tol`
    - skipped when pint cannot express the conversion
    """
    try:
        expected = _Q_(value, pint_name(source)).to(pint_name(target)).magnitude
    except (PintError, ValueError, AttributeError) as e:
        return {"status": "skipped", "expected": None, "reason": str(e)}
    ok = math.isclose(result, expected, rel_tol=tol, abs_tol=1e-9)
    return {
        "status": "passed" if ok else "failed",
        "expected": float(expected),
        "reason": None if ok else f"pint gives {expected!r}",
    }
