# runner.py
from __future__ import annotations

import runpy
from pathlib import Path
from typing import Callable, Iterable, List, Optional

from .dag import build_graph
from .dsl import as_constraint
from .model import Constraint, ConstraintGraph, ConstraintLike, Step
from .scheduler import check_complete, execution_order, make_state
from .ui.console import get_console


# ----------------------------------------------------------------------
# Plan loading (local file)
# ----------------------------------------------------------------------

def load_plan(path: str | Path) -> List[Constraint]:
    """
    Load a plan from a python file path.

    The file must define either:
      - constraints() -> list of constraints / (step, prerequisite) pairs
      - CONSTRAINTS = [...]

    Returns:
      List[Constraint]
    """
    plan_path = Path(path).expanduser().resolve()
    if not plan_path.exists():
        raise FileNotFoundError(f"Plan file not found: {plan_path}")
    if plan_path.suffix != ".py":
        raise ValueError(f"Plan must be a .py file, got: {plan_path.name}")

    module_name = f"stepsched_plan_{plan_path.stem}"
    globals_dict = runpy.run_path(str(plan_path), run_name=module_name)

    raw = None
    if "constraints" in globals_dict and callable(globals_dict["constraints"]):
        raw = globals_dict["constraints"]()
    elif "CONSTRAINTS" in globals_dict:
        raw = globals_dict["CONSTRAINTS"]

    if not isinstance(raw, (list, tuple)):
        raise TypeError(
            "Plan must return/define a list of constraints. "
            "Define constraints() -> list or CONSTRAINTS = [...]."
        )

    # one entry per constraint; nested groups belong in plan()
    try:
        return [as_constraint(item) for item in raw]
    except TypeError as e:
        raise TypeError(f"Plan {plan_path.name} contains an invalid constraint: {e}") from e


# ----------------------------------------------------------------------
# Public API
# ----------------------------------------------------------------------

def schedule_graph(
    graph: ConstraintGraph,
    *,
    strategy: str = "scan",
    strict: bool = False,
    on_step: Optional[Callable[[int, Step], None]] = None,
) -> List[Step]:
    """
    Drive the scheduler over an already-built graph to exhaustion.

    With strict=True a run that stops short of every step raises
    CycleDetected; otherwise the partial order is returned as-is.
    """
    state = make_state(graph, strategy)
    order = execution_order(state, on_step=on_step)

    if strict:
        check_complete(state, order)
    return order


def schedule(
    constraints: Iterable[ConstraintLike],
    *,
    strategy: str = "scan",
    strict: bool = False,
    on_step: Optional[Callable[[int, Step], None]] = None,
) -> List[Step]:
    """Build the graph from constraint pairs, then schedule_graph() it."""
    return schedule_graph(
        build_graph(constraints),
        strategy=strategy,
        strict=strict,
        on_step=on_step,
    )


def run_plan(
    path: str | Path,
    *,
    strategy: str = "scan",
    strict: bool = True,
    trace: bool = False,
) -> List[Step]:
    console = get_console()
    constraints = load_plan(path)
    graph = build_graph(constraints)

    console.print_run_started(
        plan=Path(path).name,
        step_count=len(graph),
        strategy=strategy,
    )
    console.print_debug(f"Loaded {len(constraints)} constraint(s) from {path}")

    return schedule_graph(
        graph,
        strategy=strategy,
        strict=strict,
        on_step=console.print_step if trace else None,
    )
