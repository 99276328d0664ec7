# src/stepsched/dsl.py
from __future__ import annotations

from typing import Iterable, List, Union

from .model import Constraint, ConstraintLike, Step


# ---------------------------------------------------------------------
# Constraint helpers
# ---------------------------------------------------------------------

def constraint(step: Step, prerequisite: Step) -> Constraint:
    """`prerequisite` must finish before `step` can begin."""
    return Constraint(step=step, prerequisite=prerequisite)


def after(step: Step, *prerequisites: Step) -> List[Constraint]:
    """
    One constraint per prerequisite:

        after("E", "B", "D", "F")
    """
    return [Constraint(step=step, prerequisite=p) for p in prerequisites]


# ---------------------------------------------------------------------
# Builder API
# ---------------------------------------------------------------------

class StepBuilder:
    def __init__(self, name: Step):
        self.name = name
        self._needs: list[Step] = []

    def needs(self, *prerequisites: Step):
        self._needs.extend(prerequisites)
        return self

    def build(self) -> List[Constraint]:
        if not self._needs:
            raise ValueError(
                f"Step '{self.name}' has no prerequisites; "
                "name it as a prerequisite of another step instead"
            )
        return after(self.name, *self._needs)


def step(name: Step) -> StepBuilder:
    """Convenience: step('E').needs('B', 'D').build()"""
    return StepBuilder(name)


# ---------------------------------------------------------------------
# Plan helper (single-file story)
# ---------------------------------------------------------------------

PlanItem = Union[ConstraintLike, Iterable[ConstraintLike]]


def as_constraint(item) -> Constraint:
    """
    Convert one Constraint, (step, prerequisite) tuple or [step, prerequisite]
    list into a Constraint. Steps may themselves be tuples.
    """
    if isinstance(item, Constraint):
        return item
    if isinstance(item, (tuple, list)) and len(item) == 2:
        if any(isinstance(x, Constraint) for x in item):
            raise TypeError(f"expected a (step, prerequisite) pair, got a group: {item!r}; wrap it in plan()")
        return Constraint(*item)
    raise TypeError(f"expected a constraint or (step, prerequisite) pair, got: {item!r}")


def plan(*items: PlanItem) -> List[Constraint]:
    """
    Flatten constraints, pairs and lists of either into one list.

    Any 2-item tuple is a single pair. Lists are groups (the output of
    after() or StepBuilder.build()), except a list of exactly two plain
    steps, which is read as a pair.

    Users can write:
        from stepsched import plan, after, constraint

        def constraints():
            return plan(
                constraint("A", "C"),
                after("E", "B", "D", "F"),
                ("F", "C"),
            )

    Or set CONSTRAINTS directly:
        CONSTRAINTS = plan(...)
    """
    out: List[Constraint] = []
    for item in items:
        if isinstance(item, (str, bytes)):
            raise TypeError(f"plan() expects constraints or pairs, got string {item!r}")
        if isinstance(item, list) and not _is_list_pair(item):
            out.extend(plan(*item))
        else:
            out.append(as_constraint(item))
    return out


def _is_list_pair(item: list) -> bool:
    return len(item) == 2 and not any(
        isinstance(x, (Constraint, tuple, list)) for x in item
    )
