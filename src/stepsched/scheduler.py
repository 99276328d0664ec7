# scheduler.py
from __future__ import annotations

import heapq
from typing import Callable, Dict, FrozenSet, List, Mapping, Optional, Set

from .dag import dependents
from .model import ConstraintGraph, CycleDetected, Step

STRATEGIES = ("scan", "ready-queue")


class SchedulerState:
    """
    Completion state for one scheduling run.

    Every call to perform_step() rescans the whole graph for eligible steps.
    Fine for tens of steps; use ReadyQueueState for large graphs.
    """

    def __init__(self, graph: Mapping[Step, Set[Step]]):
        self.graph: Dict[Step, FrozenSet[Step]] = {
            step: frozenset(prereqs) for step, prereqs in graph.items()
        }
        self.completed: Set[Step] = set()

    def eligible(self) -> List[Step]:
        """Steps not yet completed whose prerequisites are all completed."""
        return [
            step
            for step, prereqs in self.graph.items()
            if step not in self.completed and prereqs <= self.completed
        ]

    def perform_step(self) -> Optional[Step]:
        """
        Complete the smallest eligible step and return it.

        Returns None when nothing is eligible: either every step is done or
        the remaining steps can never run.
        """
        ready = self.eligible()
        if not ready:
            return None

        step = min(ready)
        self.completed.add(step)
        return step

    @property
    def done(self) -> bool:
        return len(self.completed) == len(self.graph)

    def remaining(self) -> List[Step]:
        return sorted(s for s in self.graph if s not in self.completed)


class ReadyQueueState(SchedulerState):
    """
    Incremental variant: in-degree counters plus a min-heap of ready steps.

    Produces exactly the same order as SchedulerState.
    """

    def __init__(self, graph: Mapping[Step, Set[Step]]):
        super().__init__(graph)
        adj, indeg = dependents(self.graph)
        self._adj = adj
        self._indeg = dict(indeg)  # copy (we mutate it)
        self._ready: List[Step] = [n for n, d in self._indeg.items() if d == 0]
        heapq.heapify(self._ready)

    def eligible(self) -> List[Step]:
        return sorted(self._ready)

    def perform_step(self) -> Optional[Step]:
        if not self._ready:
            return None

        step = heapq.heappop(self._ready)
        self.completed.add(step)

        for child in self._adj.get(step, ()):
            self._indeg[child] -= 1
            if self._indeg[child] == 0:
                heapq.heappush(self._ready, child)

        return step


def make_state(graph: ConstraintGraph, strategy: str = "scan") -> SchedulerState:
    if strategy == "scan":
        return SchedulerState(graph)
    if strategy == "ready-queue":
        return ReadyQueueState(graph)
    raise ValueError(f"Unknown strategy {strategy!r}. Known strategies: {list(STRATEGIES)}")


def execution_order(
    state: SchedulerState,
    on_step: Optional[Callable[[int, Step], None]] = None,
) -> List[Step]:
    """
    Drive perform_step() until it returns None.

    on_step, if given, is called with (1-based position, step) after each pick.
    """
    order: List[Step] = []
    while True:
        step = state.perform_step()
        if step is None:
            return order
        order.append(step)
        if on_step is not None:
            on_step(len(order), step)


def check_complete(state: SchedulerState, order: Optional[List[Step]] = None) -> None:
    """Raise CycleDetected if any step was left unscheduled."""
    if not state.done:
        raise CycleDetected(remaining=state.remaining(), order=list(order or []))


def render_order(order: List[Step], separator: str = "") -> str:
    return separator.join(str(s) for s in order)
