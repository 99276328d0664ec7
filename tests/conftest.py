"""Shared fixtures for the stepsched test suite."""

import pytest

from stepsched.ui.console import Console, set_console


@pytest.fixture
def example_pairs():
    """The seven-constraint example whose order is CABDFE."""
    return [
        ("A", "C"),
        ("F", "C"),
        ("B", "A"),
        ("D", "A"),
        ("E", "B"),
        ("E", "D"),
        ("E", "F"),
    ]


@pytest.fixture
def cycle_pairs():
    return [("A", "B"), ("B", "A")]


@pytest.fixture(autouse=True)
def quiet_console():
    """Reset the process-wide console between tests."""
    set_console(Console())
    yield
    set_console(Console())


@pytest.fixture
def write_plan(tmp_path):
    """Write a plan file into tmp_path and return its path."""
    def _write(body, name="stepsched_plan.py"):
        path = tmp_path / name
        path.write_text(body)
        return path
    return _write
