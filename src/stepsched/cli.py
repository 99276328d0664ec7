# cli.py
from __future__ import annotations

import sys
from pathlib import Path

import click

from stepsched import config
from stepsched.dag import build_graph
from stepsched.model import CycleDetected
from stepsched.runner import load_plan, run_plan
from stepsched.scheduler import STRATEGIES, render_order
from stepsched.ui.console import Console, set_console, get_console


def find_plan_files() -> list[Path]:
    """
    Find all plan files in the current directory.

    Returns:
        List of Path objects for plan files
    """
    plan_files = []
    current_dir = Path(".")

    default_plan = current_dir / config.PLAN_FILE
    if default_plan.exists():
        plan_files.append(default_plan)

    for path in current_dir.glob("*_plan.py"):
        if path != default_plan:
            plan_files.append(path)

    return sorted(plan_files)


def discover_plan(plan_arg: str | None) -> Path:
    """
    Discover plan file from argument or default.

    Raises:
        SystemExit: If the plan cannot be found or several plans exist
    """
    console = get_console()

    if plan_arg:
        plan_path = Path(plan_arg)
        if not plan_path.exists() and plan_path.suffix != ".py":
            plan_path = Path(str(plan_path) + ".py")
        if not plan_path.exists():
            console.print_error(
                "Plan file not found",
                f"Could not find plan file: {plan_arg}",
                suggestion="Create a plan file or specify a different path:\n  stepsched run --plan my_plan.py",
            )
            sys.exit(1)
        return plan_path

    plan_files = find_plan_files()

    if len(plan_files) == 0:
        console.print_error(
            "No plan file found",
            "Could not find any plan files.",
            details=[
                "Looked for:",
                f"  {config.PLAN_FILE}",
                "  *_plan.py",
            ],
            suggestion=f"Create a plan file:\n  {config.PLAN_FILE}\n\nOr specify a plan explicitly:\n  stepsched run --plan my_plan.py",
        )
        sys.exit(1)

    if len(plan_files) > 1:
        file_list = "\n".join(f"  {f}" for f in plan_files)
        console.print_error(
            "Multiple plan files found",
            "Found multiple plan files. Please specify which one to use:",
            details=[file_list],
            suggestion=f"Specify a plan explicitly:\n  stepsched run --plan {plan_files[0]}",
        )
        sys.exit(1)

    return plan_files[0]


@click.group()
@click.option(
    "--debug",
    is_flag=True,
    default=False,
    help="Enable debug mode (show stack traces and detailed output)",
)
@click.pass_context
def cli(ctx, debug):
    """stepsched: deterministic prerequisite-ordered step scheduler."""
    console = Console(debug=debug)
    set_console(console)
    ctx.ensure_object(dict)
    ctx.obj["debug"] = debug


@cli.command()
@click.option("--plan", "plan_arg", default=None, help=f"Plan file path (defaults to {config.PLAN_FILE} if present)")
@click.option(
    "--strategy",
    type=click.Choice(STRATEGIES),
    default=config.STRATEGY,
    show_default=True,
    help="Eligible-set scan or incremental ready queue",
)
@click.option("--strict/--no-strict", default=config.STRICT, show_default=True, help="Fail if some steps can never run")
@click.option("--separator", default=config.SEPARATOR, help="Text placed between steps in the printed order")
@click.option("--trace/--no-trace", default=False, help="Print each step as it is scheduled")
@click.pass_context
def run(ctx, plan_arg, strategy, strict, separator, trace):
    """Schedule a plan and print its execution order."""
    console = get_console()

    plan_path = discover_plan(plan_arg)

    try:
        order = run_plan(plan_path, strategy=strategy, strict=strict, trace=trace)
        console.print_order(render_order(order, separator))
    except CycleDetected as e:
        console.print_error(
            "Unschedulable steps",
            "Scheduling stopped before every step ran (cyclic prerequisites?).",
            details=[
                "Stuck: " + ", ".join(str(s) for s in e.remaining),
                "Scheduled: " + (render_order(e.order, separator) or "(nothing)"),
            ],
            suggestion="Break the cycle, or rerun with --no-strict to print the partial order.",
        )
        sys.exit(1)
    except Exception as e:
        console.print_exception(e)
        sys.exit(1)


@cli.command()
@click.option("--plan", "plan_arg", default=None, help=f"Plan file path (defaults to {config.PLAN_FILE} if present)")
@click.pass_context
def graph(ctx, plan_arg):
    """Print every step with its direct prerequisites."""
    console = get_console()

    plan_path = discover_plan(plan_arg)

    try:
        constraints = load_plan(plan_path)
    except Exception as e:
        console.print_error(
            "Failed to load plan",
            f"Could not load plan from {plan_path}",
            details=[str(e)],
        )
        if ctx.obj.get("debug", False):
            console.print_exception(e)
        sys.exit(1)

    prereq_map = build_graph(constraints)
    console.print_header(f"{plan_path.name}: {len(prereq_map)} step(s)")
    console.print_graph(prereq_map)


if __name__ == "__main__":
    cli()
