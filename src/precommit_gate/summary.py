"""
Summary - Human-readable end-of-run output.
"""

from __future__ import annotations

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from precommit_gate.runner import GateReport


def show_summary(report: GateReport, console: Console) -> None:
    """Print the per-step table and the completion notice."""
    table = Table(title="Pre-commit Gate")
    table.add_column("Step", style="cyan")
    table.add_column("Command")
    table.add_column("Result")
    table.add_column("Exit", justify="right")

    for outcome in report.outcomes:
        result = "[green]passed[/green]" if outcome.passed else "[red]failed[/red]"
        exit_code = "-" if outcome.exit_code is None else str(outcome.exit_code)
        table.add_row(escape(outcome.step.name), escape(outcome.step.command_line), result, exit_code)

    console.print(table)

    if report.passed:
        console.print("[green]✓[/green] Gate run completed: all checks passed")
    else:
        console.print(
            f"[red]✗[/red] Gate run completed: {len(report.failed_steps)} failed "
            f"({escape(', '.join(report.failed_steps))})"
        )
