"""
Steps - The fixed verification pipeline.

A step is an argv record, never a shell string: it is spawned directly
without a shell so there is no quoting to get wrong.
"""

from __future__ import annotations

import os
import shlex
from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(frozen=True)
class Step:
    """A single verification command."""

    name: str
    executable: str
    args: tuple[str, ...] = ()

    @classmethod
    def parse(cls, command_line: str, name: str | None = None) -> Step:
        """Build a step from a command line, e.g. ``"cargo fmt --check"``."""
        argv = shlex.split(command_line)
        if not argv:
            raise ValueError("Empty command line")
        return cls(name=name or command_line, executable=argv[0], args=tuple(argv[1:]))

    @property
    def argv(self) -> list[str]:
        return [self.executable, *self.args]

    @property
    def command_line(self) -> str:
        return shlex.join(self.argv)


@dataclass(frozen=True)
class EnvironmentOverrides:
    """
    Environment variables applied to every step.

    Never written to ``os.environ``; merged into a fresh child environment
    instead.
    """

    values: Mapping[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "values", MappingProxyType(dict(self.values)))

    def apply(self, base: Mapping[str, str] | None = None) -> dict[str, str]:
        """Return ``base`` (default: the current process env) with overrides on top."""
        env = dict(os.environ if base is None else base)
        env.update(self.values)
        return env


# Fail on warnings
WARNINGS_AS_ERRORS = EnvironmentOverrides({"RUSTFLAGS": "-Dwarnings"})

DEFAULT_STEPS: tuple[Step, ...] = (
    Step.parse("cargo fmt --check", name="fmt"),
    Step.parse("cargo check --all-targets", name="check"),
    Step.parse("cargo clippy", name="clippy"),
    Step.parse("cargo test --all-targets", name="test"),
)
