# -----------------------------------------------------------------------------
# Planner: Path search over the conversion graph
# Goal: Given a conversion set, a source unit and a target unit, find the
#       shortest chain of edges (fewest conversions) linking them.
# Notes:
#   - Edge identity is the (source_unit, target_unit) pair; a path never
#     repeats a pair, even through parallel edges with other calculations.
#   - A path is complete as soon as an edge lands on the target; it is not
#     extended further. source == target needs a real cycle (no empty path).
#   - Ties between equally short paths go to the first one found by a
#     depth-first walk over the edges in table order.
# -----------------------------------------------------------------------------

from __future__ import annotations
from collections import deque
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Set, Tuple
from .types import Conversion, Path

class SearchExhausted(Exception):
    """Raised when a search exceeds its expansion budget."""
    def __init__(self, budget: int):
        super().__init__(f"Path search exceeded budget of {budget} expansions.")
        self.budget = budget

def shortest(paths: Iterable[Path]) -> Optional[Path]:
    """
    Selection policy: fewest edges wins; on a tie the earlier path is kept.
    Returns None for an empty iterable.
    """
    best: Optional[Path] = None
    for p in paths:
        if best is None or len(p) < len(best):
            best = p
    return best

class PathFinder:
    """
    Path search over a fixed conversion set.
      - find_path: breadth-first, returns the shortest path (or None)
      - iter_paths: depth-first enumeration of every complete simple path
    Both honour the same cycle-avoidance rule, and find_path returns exactly
    what shortest(iter_paths(...)) would.
    """
    def __init__(self, conversions: Sequence[Conversion], max_expansions: int | None = None):
        # Keep table order; it drives the tie-break.
        self.conversions = list(conversions)
        self.max_expansions = max_expansions
        self._outgoing: Dict[str, List[Conversion]] = {}
        for c in self.conversions:
            self._outgoing.setdefault(c.source_unit, []).append(c)

    def units(self) -> Set[str]:
        # Every unit named as a source or target anywhere in the set.
        out = set()
        for c in self.conversions:
            out.add(c.source_unit)
            out.add(c.target_unit)
        return out

    def outgoing(self, unit: str) -> List[Conversion]:
        return self._outgoing.get(unit, [])

    def _spend(self, used: int) -> int:
        used += 1
        if self.max_expansions is not None and used > self.max_expansions:
            raise SearchExhausted(self.max_expansions)
        return used

    def iter_paths(self, source: str, target: str) -> Iterator[Path]:
        """
        Exhaustive depth-first enumeration with an explicit stack.
        Yields complete paths in discovery order. Worst case is exponential
        in the number of edges; fine for hand-written tables.
        """
        used = 0
        # Each frame: (current unit, path so far, keys on that path)
        stack: List[Tuple[str, Path, frozenset]] = [(source, [], frozenset())]
        while stack:
            unit, path, keys = stack.pop()
            used = self._spend(used)
            children: List[Tuple[str, Path, frozenset]] = []
            for edge in self.outgoing(unit):
                if edge.key in keys:
                    continue
                new_path = path + [edge]
                if edge.target_unit == target:
                    # Completed paths are recorded, never extended.
                    yield new_path
                    continue
                children.append((edge.target_unit, new_path, keys | {edge.key}))
            # Push in reverse so the first edge is explored first.
            stack.extend(reversed(children))

    def find_path(self, source: str, target: str) -> Optional[Path]:
        """
        Breadth-first search for the shortest path.
        - Every edge costs 1, so the first completion found level by level is
          a shortest path; FIFO order keeps the depth-first tie-break.
        - A unit reached at an earlier level is never re-entered: any path
          through it again cannot be shorter.
        - Returns None if either unit is absent or unreachable.
        """
        if source not in self._outgoing:
            return None

        used = 0
        q = deque([(source, [])])
        # The source stays enterable so that source == target can close a cycle.
        seen = {source}
        while q:
            unit, path = q.popleft()
            used = self._spend(used)
            for edge in self.outgoing(unit):
                if edge.target_unit == target:
                    return path + [edge]
                if edge.target_unit in seen:
                    continue
                seen.add(edge.target_unit)
                q.append((edge.target_unit, path + [edge]))
        return None

def find_path(source: str, target: str, conversions: Sequence[Conversion]) -> Optional[Path]:
    """Convenience wrapper: one-off search over `conversions`."""
    return PathFinder(conversions).find_path(source, target)

def is_valid_path(path: Path, source: str, target: str) -> bool:
    """
    Check the path invariants: non-empty, chained endpoints, starts at source,
    ends at target, and no repeated (source_unit, target_unit) pair.
    """
    if not path:
        return False
    if path[0].source_unit != source or path[-1].target_unit != target:
        return False
    for a, b in zip(path, path[1:]):
        if a.target_unit != b.source_unit:
            return False
    return len({c.key for c in path}) == len(path)
