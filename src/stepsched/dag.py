# dag.py
from __future__ import annotations

from typing import Dict, Iterable, Set, Tuple

from .model import Constraint, ConstraintGraph, ConstraintLike, Step


def _as_pair(item: ConstraintLike) -> Tuple[Step, Step]:
    if isinstance(item, Constraint):
        return item.as_pair()
    if isinstance(item, (str, bytes)):
        raise ValueError(
            f"Constraint must be a (step, prerequisite) pair, got string: {item!r}"
        )
    try:
        step, prereq = item
    except (TypeError, ValueError):
        raise ValueError(
            f"Constraint must be a (step, prerequisite) pair, got: {item!r}"
        ) from None
    return step, prereq


def build_graph(constraints: Iterable[ConstraintLike]) -> ConstraintGraph:
    """
    Build the prerequisite map from (step, prerequisite) pairs.

    Every step named anywhere becomes a key, including prerequisites that
    never appear on the step side; those map to an empty set.
    """
    graph: ConstraintGraph = {}

    for item in constraints:
        step, prereq = _as_pair(item)
        graph.setdefault(step, set()).add(prereq)
        # leaf prerequisites still have to be schedulable
        graph.setdefault(prereq, set())

    return graph


def dependents(graph: ConstraintGraph) -> Tuple[Dict[Step, Set[Step]], Dict[Step, int]]:
    """
    Invert the prerequisite map.

    Returns:
      adj:   prerequisite -> steps waiting on it
      indeg: step -> number of distinct prerequisites
    """
    adj: Dict[Step, Set[Step]] = {n: set() for n in graph}
    indeg: Dict[Step, int] = {n: 0 for n in graph}

    for step, prereqs in graph.items():
        for prereq in prereqs:
            # edge prereq -> step
            adj.setdefault(prereq, set()).add(step)
            indeg[step] += 1

    return adj, indeg
