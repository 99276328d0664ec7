from .dsl import constraint, after, step, plan, StepBuilder
from .dag import build_graph
from .model import Constraint, CycleDetected
from .runner import schedule, schedule_graph, load_plan
from .scheduler import SchedulerState, ReadyQueueState, execution_order, render_order

__all__ = [
    "constraint", "after", "step", "plan", "StepBuilder", "build_graph",
    "Constraint", "CycleDetected", "schedule", "schedule_graph", "load_plan",
    "SchedulerState", "ReadyQueueState", "execution_order", "render_order",
]
