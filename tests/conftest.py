"""Shared fixtures."""

import sys
from collections.abc import Callable, Generator
from pathlib import Path

import pytest
import structlog
from rich.console import Console

from precommit_gate.steps import Step


@pytest.fixture(autouse=True)
def reset_structlog() -> Generator[None, None, None]:
    """The CLI configures structlog against the current stderr; undo it."""
    yield
    structlog.reset_defaults()


@pytest.fixture
def console() -> Console:
    """Quiet console for runner output."""
    return Console(quiet=True)


@pytest.fixture
def python_step() -> Callable[..., Step]:
    """Build a step that runs a Python snippet in a child interpreter."""

    def _make(name: str, code: str) -> Step:
        return Step(name=name, executable=sys.executable, args=("-c", code))

    return _make


@pytest.fixture
def recording_step(tmp_path: Path, python_step: Callable[..., Step]) -> Callable[..., Step]:
    """
    Build a step that appends its name to ``tmp_path/attempts.log`` and
    then exits with ``exit_code``.
    """
    log_path = tmp_path / "attempts.log"

    def _make(name: str, exit_code: int = 0) -> Step:
        code = (
            "import sys\n"
            f"with open({str(log_path)!r}, 'a') as f:\n"
            f"    f.write({name!r} + '\\n')\n"
            f"sys.exit({exit_code})\n"
        )
        return python_step(name, code)

    return _make


@pytest.fixture
def attempts(tmp_path: Path) -> Callable[[], list[str]]:
    """Read back the names written by recording steps, in order."""

    def _read() -> list[str]:
        log_path = tmp_path / "attempts.log"
        if not log_path.exists():
            return []
        return log_path.read_text().splitlines()

    return _read
