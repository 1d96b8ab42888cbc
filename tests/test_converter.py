import math
from konvert.converter import Converter
from konvert.table import ConversionTable
from konvert.types import Conversion, Rate, with_inverses

CONV = Converter.from_table(ConversionTable.builtin())

def test_concrete_kg_to_mg():
    res = CONV.convert(1.0, "kg", "mg")
    assert res.ok
    assert math.isclose(res.value, 1_000_000.0)
    assert [(p["source"], p["target"]) for p in res.path] == [("kg", "g"), ("g", "mg")]
    assert len(res.steps) == 2

def test_temperature_through_formulas():
    assert CONV.convert(0.0, "C", "F").value == 32.0
    assert math.isclose(CONV.convert(32.0, "F", "C").value, 0.0, abs_tol=1e-9)
    assert math.isclose(CONV.convert(-40.0, "F", "K").value, 233.15)

def test_unit_chain_across_imperial_and_metric():
    assert math.isclose(CONV.convert(1.0, "ft", "mm").value, 304.8)
    assert math.isclose(CONV.convert(1.0, "mi", "km").value, 1.609344)

def test_unknown_unit_is_typed():
    res = CONV.convert(1.0, "stone", "kg")
    assert not res.ok
    assert res.error_kind == "unknown_unit"
    assert res.value is None
    assert res.full_trace[-1]["kind"] == "error"

def test_no_path_between_dimensions():
    res = CONV.convert(1.0, "kg", "m")
    assert not res.ok
    assert res.error_kind == "no_path"

def test_same_unit_without_identity_path():
    conv = Converter([Conversion("kg", Rate(1000.0), "g")])
    res = conv.convert(1.0, "kg", "kg")
    assert res.error_kind == "no_path"

def test_same_unit_with_cycle():
    res = CONV.convert(3.0, "kg", "kg")
    assert res.ok and math.isclose(res.value, 3.0)

def test_search_exhausted_is_typed():
    conv = Converter(CONV.finder.conversions, max_expansions=1)
    res = conv.convert(1.0, "km", "mi")
    assert res.error_kind == "search_exhausted"

def test_evaluation_error_is_funnelled():
    def boom(x): raise ZeroDivisionError("division by zero")
    from konvert.types import Formula
    conv = Converter(with_inverses([Conversion("a", Formula(boom, boom), "b")]))
    res = conv.convert(1.0, "a", "b")
    assert not res.ok and res.error_kind == "evaluation"

def test_all_paths_shortest_first():
    paths = CONV.all_paths("kg", "mg")
    assert len(paths[0]) == 2
    assert [len(p) for p in paths] == sorted(len(p) for p in paths)

def test_verify_with_pint():
    res = CONV.convert(1.0, "kg", "lbs", verify=True)
    assert res.check["status"] == "passed"
    res = CONV.convert(100.0, "C", "F", verify=True)
    assert res.check["status"] == "passed"

def test_to_dict_shape():
    d = CONV.convert(1.0, "kg", "g").to_dict()
    assert d["ok"] is True and "error" not in d
    d = CONV.convert(1.0, "kg", "m").to_dict()
    assert d["ok"] is False and d["error_kind"] == "no_path"
