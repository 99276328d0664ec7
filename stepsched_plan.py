# stepsched_plan.py
# Example plan: `stepsched run` in this directory prints CABDFE
from __future__ import annotations
from stepsched import plan, after, constraint, step


def constraints():
    return plan(
        constraint("A", "C"),
        constraint("F", "C"),
        after("B", "A"),
        after("D", "A"),
        # E waits on three branches
        step("E").needs("B", "D").needs("F").build(),
    )
