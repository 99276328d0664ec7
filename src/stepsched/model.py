# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Hashable, List, Set, Tuple, Union

Step = Hashable

# step -> direct prerequisites
ConstraintGraph = Dict[Step, Set[Step]]


@dataclass(frozen=True)
class Constraint:
    """`prerequisite` must complete before `step` may start."""
    step: Step
    prerequisite: Step

    def as_pair(self) -> Tuple[Step, Step]:
        return self.step, self.prerequisite


# Anything the graph builder accepts as a single constraint.
ConstraintLike = Union[Constraint, Tuple[Step, Step]]


@dataclass(eq=False)
class CycleDetected(Exception):
    """
    Raised by the strict post-condition check when the scheduler ran dry
    while steps were still outstanding.

    Carries enough context for:
      - clean CLI output
      - inspecting how far scheduling got
    """
    remaining: List[Any]
    order: List[Any] = field(default_factory=list)

    def __str__(self) -> str:
        stuck = ", ".join(str(s) for s in self.remaining)
        lines = [f"CycleDetected: {len(self.remaining)} step(s) can never run: {stuck}"]
        if self.order:
            lines.append("scheduled=" + "".join(str(s) for s in self.order))
        return "\n".join(lines)
