import pytest
from konvert.planner import PathFinder, SearchExhausted, find_path, is_valid_path, shortest
from konvert.types import Conversion, Rate, with_inverses

def edges(*triples):
    return [Conversion(s, Rate(r), t) for s, r, t in triples]

MASS = with_inverses(edges(("kg", 2.20462262, "lbs"), ("kg", 1000.0, "g"), ("g", 1000.0, "mg")))

def units_of(path):
    return [path[0].source_unit] + [c.target_unit for c in path]

def test_kg_to_mg_goes_through_grams():
    path = find_path("kg", "mg", MASS)
    assert units_of(path) == ["kg", "g", "mg"]
    assert is_valid_path(path, "kg", "mg")

def test_direct_edge_is_one_step():
    assert units_of(find_path("lbs", "kg", MASS)) == ["lbs", "kg"]

def test_shorter_of_two_disjoint_paths_wins():
    # long branch listed first so depth-first order would meet it first
    es = edges(("a", 1.0, "x"), ("x", 1.0, "y"), ("y", 1.0, "b"), ("a", 1.0, "z"), ("z", 1.0, "b"))
    assert units_of(find_path("a", "b", es)) == ["a", "z", "b"]

def test_tie_goes_to_first_found():
    es = edges(("a", 1.0, "x"), ("a", 1.0, "y"), ("x", 1.0, "b"), ("y", 1.0, "b"))
    assert units_of(find_path("a", "b", es)) == ["a", "x", "b"]
    es2 = edges(("a", 1.0, "y"), ("a", 1.0, "x"), ("x", 1.0, "b"), ("y", 1.0, "b"))
    assert units_of(find_path("a", "b", es2)) == ["a", "y", "b"]

def test_disconnected_units_have_no_path():
    es = with_inverses(edges(("kg", 1000.0, "g"), ("m", 100.0, "cm")))
    assert find_path("kg", "cm", es) is None

def test_unknown_units_have_no_path():
    assert find_path("stone", "kg", MASS) is None
    assert find_path("kg", "stone", MASS) is None

def test_empty_edge_set():
    assert find_path("a", "b", []) is None
    assert list(PathFinder([]).iter_paths("a", "b")) == []

def test_same_unit_needs_a_cycle():
    assert find_path("kg", "kg", edges(("kg", 1000.0, "g"))) is None
    path = find_path("kg", "kg", MASS)
    assert len(path) == 2
    assert path[0].source_unit == "kg" and path[-1].target_unit == "kg"

def test_directed_edges_only():
    assert find_path("g", "kg", edges(("kg", 1000.0, "g"))) is None

def test_iter_paths_are_all_valid_and_complete_at_target():
    paths = list(PathFinder(MASS).iter_paths("kg", "mg"))
    assert paths
    for p in paths:
        assert is_valid_path(p, "kg", "mg")
        # the goal is only ever reached by the last edge
        assert all(c.target_unit != "mg" for c in p[:-1])

def test_iter_paths_never_repeat_an_edge_pair():
    # parallel edges with different rates count as the same edge
    es = edges(("a", 1.0, "b"), ("a", 2.0, "b"), ("b", 1.0, "a"), ("b", 1.0, "c"))
    for p in PathFinder(es).iter_paths("a", "c"):
        assert len({c.key for c in p}) == len(p)

def test_bfs_matches_depth_first_selection():
    es = with_inverses(edges(
        ("a", 1.0, "b"), ("b", 1.0, "c"), ("c", 1.0, "d"),
        ("a", 1.0, "e"), ("e", 1.0, "d"), ("b", 1.0, "d"), ("e", 1.0, "c"),
    ))
    finder = PathFinder(es)
    for s in "abcde":
        for t in "abcde":
            expected = shortest(finder.iter_paths(s, t))
            got = finder.find_path(s, t)
            if expected is None:
                assert got is None
            else:
                assert [c.key for c in got] == [c.key for c in expected]

def test_shortest_of_nothing_is_none():
    assert shortest([]) is None

def test_budget_raises_search_exhausted():
    chain = with_inverses(edges(*[(str(i), 1.0, str(i + 1)) for i in range(20)]))
    with pytest.raises(SearchExhausted):
        PathFinder(chain, max_expansions=3).find_path("0", "20")
    with pytest.raises(SearchExhausted):
        list(PathFinder(chain, max_expansions=3).iter_paths("0", "20"))
    assert len(PathFinder(chain, max_expansions=1000).find_path("0", "20")) == 20

def test_is_valid_path_rejects_broken_chains():
    a_b, c_d = edges(("a", 1.0, "b"), ("c", 1.0, "d"))
    assert not is_valid_path([], "a", "b")
    assert not is_valid_path([a_b, c_d], "a", "d")
    assert not is_valid_path([a_b], "a", "c")
