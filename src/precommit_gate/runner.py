"""
GateRunner - Run the verification steps and aggregate their results.

Responsibilities:
- Run every step in declared order, each to completion
- Never stop early: a failing step only marks the run as failed
- Let step output pass straight through to the terminal
- Reduce per-step outcomes to a single exit code
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import structlog
from rich.console import Console
from rich.markup import escape

from precommit_gate.observability import ensure_logging
from precommit_gate.steps import WARNINGS_AS_ERRORS, EnvironmentOverrides, Step

logger = structlog.get_logger()

EXIT_OK = 0
EXIT_FAILED = 1


class RunState(str, Enum):
    """Lifecycle of a single gate run."""

    NOT_STARTED = "not_started"
    RUNNING = "running"
    COMPLETED = "completed"


@dataclass(frozen=True)
class StepOutcome:
    """Result of running a single step."""

    step: Step
    passed: bool
    exit_code: int | None = None  # None when the step could not be started


@dataclass
class GateReport:
    """Aggregate result of a gate run."""

    outcomes: list[StepOutcome] = field(default_factory=list)
    passed: bool = True

    def record(self, outcome: StepOutcome) -> None:
        self.outcomes.append(outcome)
        # Once failed, always failed
        if not outcome.passed:
            self.passed = False

    @property
    def failed_steps(self) -> list[str]:
        return [o.step.name for o in self.outcomes if not o.passed]

    @property
    def exit_code(self) -> int:
        return EXIT_OK if self.passed else EXIT_FAILED


class GateRunner:
    """
    Runs a fixed, ordered list of steps and aggregates their outcomes.

    The environment overrides are merged once, before the first step, and
    handed to every child process explicitly. A runner instance runs once.
    """

    def __init__(
        self,
        env: EnvironmentOverrides = WARNINGS_AS_ERRORS,
        cwd: Path | None = None,
        console: Console | None = None,
    ) -> None:
        self.env = env
        self.cwd = cwd or Path.cwd()
        # Command echo goes to stderr so stdout holds only tool output
        self.console = console or Console(stderr=True, highlight=False)
        self.state = RunState.NOT_STARTED
        self.step_index: int | None = None
        ensure_logging()

    def run(self, steps: Sequence[Step]) -> GateReport:
        """Run every step in order and return the aggregate report."""
        if self.state is not RunState.NOT_STARTED:
            raise RuntimeError(f"GateRunner already {self.state.value}")

        steps = tuple(steps)
        if not steps:
            raise ValueError("At least one step is required")

        child_env = self.env.apply()
        report = GateReport()

        logger.info(
            "Gate run started",
            steps=len(steps),
            cwd=str(self.cwd),
            overrides=dict(self.env.values),
        )

        self.state = RunState.RUNNING
        for index, step in enumerate(steps):
            self.step_index = index
            outcome = self.run_step(step, child_env)
            report.record(outcome)

        self.state = RunState.COMPLETED

        logger.info(
            "Gate run completed",
            passed=report.passed,
            failed=report.failed_steps,
        )
        return report

    def run_step(self, step: Step, env: dict[str, str]) -> StepOutcome:
        """
        Run one step to completion.

        stdout/stderr are inherited, never captured. A step that cannot be
        started counts as a failed step.
        """
        self.console.print(f"[dim]+[/dim] {escape(step.command_line)}", soft_wrap=True)
        logger.debug("Running step", step=step.name, index=self.step_index, argv=step.argv)

        try:
            completed = subprocess.run(step.argv, cwd=self.cwd, env=env, check=False)
        except OSError as e:
            logger.error("Step could not be started", step=step.name, error=str(e))
            self.console.print(f"[red]✗[/red] {escape(step.name)}: {escape(str(e))}")
            return StepOutcome(step=step, passed=False)

        # Negative return codes mean the child was killed by a signal
        exit_code = completed.returncode
        passed = exit_code == 0

        if passed:
            logger.debug("Step passed", step=step.name)
        else:
            logger.warning("Step failed", step=step.name, exit_code=exit_code)
            self.console.print(f"[red]✗[/red] {escape(step.name)} exited with {exit_code}")

        return StepOutcome(step=step, passed=passed, exit_code=exit_code)


def run(
    steps: Sequence[Step],
    env: EnvironmentOverrides = WARNINGS_AS_ERRORS,
    cwd: Path | None = None,
    console: Console | None = None,
) -> int:
    """Run ``steps`` and return the process exit code."""
    runner = GateRunner(env=env, cwd=cwd, console=console)
    return runner.run(steps).exit_code
