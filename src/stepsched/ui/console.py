"""Console output formatting utilities for stepsched."""

from __future__ import annotations

import sys
from typing import Any, Iterable, Mapping, Optional


class Console:
    """Centralized console output formatting."""

    def __init__(self, debug: bool = False):
        """
        Initialize console formatter.

        Args:
            debug: If True, show detailed output including stack traces
        """
        self.debug = debug

    def print_header(self, title: str) -> None:
        """Print a section header."""
        print(f"\n{title}")
        print("-" * len(title))

    def print_run_started(
        self,
        plan: str,
        step_count: int,
        strategy: str,
    ) -> None:
        """Print run start information."""
        print("\nRUN STARTED")
        print(f"Plan: {plan}")
        print(f"Steps: {step_count}")
        print(f"Strategy: {strategy}")
        print()

    def print_step(self, index: int, step: Any) -> None:
        """Print one scheduled step."""
        print(f"STEP {index}: {step}")

    def print_order(self, rendered: str) -> None:
        """Print the final execution order."""
        print(rendered)

    def print_graph(self, graph: Mapping[Any, Iterable[Any]]) -> None:
        """Print each step with its prerequisites."""
        for name in sorted(graph):
            prereqs = sorted(graph[name])
            if prereqs:
                print(f"  {name} <- {', '.join(str(p) for p in prereqs)}")
            else:
                print(f"  {name} (no prerequisites)")

    def print_error(
        self,
        title: str,
        message: str,
        details: Optional[list[str]] = None,
        suggestion: Optional[str] = None,
    ) -> None:
        """
        Print structured error message.

        Args:
            title: Error title
            message: Main error message
            details: Optional list of detail lines
            suggestion: Optional suggestion for user
        """
        print(f"\nERROR: {title}", file=sys.stderr)
        print(f"{message}", file=sys.stderr)
        if details:
            for detail in details:
                print(f"  {detail}", file=sys.stderr)
        if suggestion:
            print(f"\n{suggestion}", file=sys.stderr)

    def print_exception(self, exc: Exception) -> None:
        """Print exception, with full traceback only in debug mode."""
        if self.debug:
            import traceback
            traceback.print_exception(type(exc), exc, exc.__traceback__)
        else:
            print(f"Error: {exc}", file=sys.stderr)

    def print_debug(self, message: str) -> None:
        """Print debug message (only if debug mode enabled)."""
        if self.debug:
            print(f"[DEBUG] {message}", file=sys.stderr)


# Global console instance (will be initialized by CLI)
_console: Optional[Console] = None


def get_console() -> Console:
    """Get the global console instance."""
    global _console
    if _console is None:
        _console = Console()
    return _console


def set_console(console: Console) -> None:
    """Set the global console instance."""
    global _console
    _console = console
