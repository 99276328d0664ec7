"""Tests for both scheduler strategies and the run driver."""

import pytest

from stepsched.dag import build_graph
from stepsched.model import CycleDetected
from stepsched.runner import schedule, schedule_graph
from stepsched.scheduler import (
    ReadyQueueState,
    SchedulerState,
    check_complete,
    execution_order,
    make_state,
    render_order,
)

STRATEGY_NAMES = ["scan", "ready-queue"]


@pytest.fixture(params=[SchedulerState, ReadyQueueState], ids=STRATEGY_NAMES)
def state_cls(request):
    return request.param


class TestPerformStep:
    def test_empty_graph_returns_none(self, state_cls):
        state = state_cls({})
        assert state.perform_step() is None
        assert state.done

    def test_single_constraint(self, state_cls):
        state = state_cls(build_graph([("B", "A")]))
        assert state.perform_step() == "A"
        assert state.perform_step() == "B"
        assert state.perform_step() is None

    def test_selected_step_is_recorded_as_completed(self, state_cls):
        state = state_cls(build_graph([("B", "A")]))
        state.perform_step()
        assert state.completed == {"A"}

    def test_smallest_eligible_step_wins(self, state_cls):
        # Z and M both become eligible once A is done
        state = state_cls(build_graph([("Z", "A"), ("M", "A")]))
        assert state.perform_step() == "A"
        assert sorted(state.eligible()) == ["M", "Z"]
        assert state.perform_step() == "M"
        assert state.perform_step() == "Z"

    def test_tie_break_across_rounds(self, state_cls):
        # B becomes eligible after A, but C was eligible from the start
        state = state_cls(build_graph([("B", "A"), ("D", "C")]))
        assert execution_order(state) == ["A", "B", "C", "D"]

    def test_cycle_returns_none_immediately(self, state_cls, cycle_pairs):
        state = state_cls(build_graph(cycle_pairs))
        assert state.perform_step() is None
        assert not state.done
        assert state.remaining() == ["A", "B"]

    def test_cycle_downstream_of_runnable_steps(self, state_cls):
        state = state_cls(build_graph([("B", "A"), ("C", "B"), ("B", "C")]))
        assert execution_order(state) == ["A"]
        assert state.remaining() == ["B", "C"]

    def test_self_loop_strands_only_that_step(self, state_cls):
        state = state_cls(build_graph([("A", "A"), ("B", "C")]))
        assert execution_order(state) == ["C", "B"]
        assert state.remaining() == ["A"]

    def test_graph_is_copied(self, state_cls):
        graph = build_graph([("B", "A")])
        state = state_cls(graph)
        graph["B"].add("Q")
        assert execution_order(state) == ["A", "B"]


class TestExecutionOrder:
    def test_example(self, state_cls, example_pairs):
        state = state_cls(build_graph(example_pairs))
        assert render_order(execution_order(state)) == "CABDFE"

    def test_validity(self, state_cls, example_pairs):
        graph = build_graph(example_pairs)
        order = execution_order(state_cls(graph))
        position = {s: i for i, s in enumerate(order)}
        for s, prereqs in graph.items():
            for p in prereqs:
                assert position[p] < position[s]

    def test_completeness(self, state_cls, example_pairs):
        graph = build_graph(example_pairs)
        order = execution_order(state_cls(graph))
        assert sorted(order) == sorted(graph)
        assert len(order) == len(set(order))

    def test_on_step_sees_each_pick_in_order(self, state_cls, example_pairs):
        seen = []
        state = state_cls(build_graph(example_pairs))
        order = execution_order(state, on_step=lambda i, s: seen.append((i, s)))
        assert seen == list(enumerate(order, start=1))

    def test_integer_steps_use_numeric_order(self, state_cls):
        state = state_cls(build_graph([(10, 2), (9, 2)]))
        assert execution_order(state) == [2, 9, 10]

    def test_strategies_agree_on_larger_graph(self):
        letters = "ABCDEFGHIJKLMNOPQRSTUVWXYZ"
        pairs = [
            (letters[i], letters[j])
            for i in range(len(letters))
            for j in range(i)
            if (i * 7 + j * 3) % 5 == 0
        ]
        graph = build_graph(pairs)
        scan = execution_order(SchedulerState(graph))
        queue = execution_order(ReadyQueueState(graph))
        assert scan == queue
        assert len(scan) == len(graph)


class TestMakeState:
    def test_known_strategies(self):
        assert type(make_state({}, "scan")) is SchedulerState
        assert type(make_state({}, "ready-queue")) is ReadyQueueState

    def test_unknown_strategy(self):
        with pytest.raises(ValueError, match="Unknown strategy"):
            make_state({}, "random")


class TestCheckComplete:
    def test_complete_run_passes(self, example_pairs):
        state = SchedulerState(build_graph(example_pairs))
        execution_order(state)
        check_complete(state)

    def test_cycle_raises(self, cycle_pairs):
        state = SchedulerState(build_graph(cycle_pairs))
        execution_order(state)
        with pytest.raises(CycleDetected) as exc_info:
            check_complete(state)
        assert exc_info.value.remaining == ["A", "B"]
        assert "can never run" in str(exc_info.value)


class TestSchedule:
    @pytest.mark.parametrize("strategy", STRATEGY_NAMES)
    @pytest.mark.parametrize(
        "pairs, expected",
        [
            ([("A", "C"), ("F", "C"), ("B", "A"), ("D", "A"),
              ("E", "B"), ("E", "D"), ("E", "F")], "CABDFE"),
            ([], ""),
            ([("B", "A")], "AB"),
            ([("A", "B"), ("B", "A")], ""),
        ],
    )
    def test_scenarios(self, strategy, pairs, expected):
        assert render_order(schedule(pairs, strategy=strategy)) == expected

    def test_deterministic(self, example_pairs):
        runs = {render_order(schedule(example_pairs)) for _ in range(5)}
        assert runs == {"CABDFE"}

    def test_strict_cycle_raises_with_partial_order(self):
        with pytest.raises(CycleDetected) as exc_info:
            schedule([("B", "A"), ("C", "B"), ("B", "C")], strict=True)
        assert exc_info.value.order == ["A"]
        assert exc_info.value.remaining == ["B", "C"]

    def test_strict_acyclic_does_not_raise(self, example_pairs):
        assert schedule(example_pairs, strict=True) == list("CABDFE")

    @pytest.mark.parametrize("strategy", STRATEGY_NAMES)
    def test_schedule_graph_takes_prebuilt_graph(self, strategy, example_pairs):
        graph = build_graph(example_pairs)
        assert schedule_graph(graph, strategy=strategy, strict=True) == list("CABDFE")

    def test_on_step_callback(self, example_pairs):
        seen = []
        schedule(example_pairs, on_step=lambda i, s: seen.append((i, s)))
        assert seen == list(enumerate("CABDFE", start=1))


class TestRenderOrder:
    def test_separator(self):
        assert render_order(["C", "A", "B"], separator="->") == "C->A->B"

    def test_non_string_steps(self):
        assert render_order([1, 2, 3], separator=",") == "1,2,3"
