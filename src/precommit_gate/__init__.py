"""
Pre-commit Gate: run a fixed sequence of verification commands and
report one aggregate pass/fail status.

- Every step runs, whatever earlier steps did
- Warnings are escalated to errors for every step
- Exit code 0 means every step passed
"""

__version__ = "0.1.0"

from precommit_gate.runner import GateReport, GateRunner, StepOutcome, run
from precommit_gate.steps import DEFAULT_STEPS, WARNINGS_AS_ERRORS, EnvironmentOverrides, Step

__all__ = [
    "GateRunner",
    "GateReport",
    "StepOutcome",
    "Step",
    "EnvironmentOverrides",
    "DEFAULT_STEPS",
    "WARNINGS_AS_ERRORS",
    "run",
]
