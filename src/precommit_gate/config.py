"""
Gate Configuration - Ambient settings for a gate run.

Loaded from an optional YAML file with environment variable override
support. The step list and the warnings-as-errors override are fixed and
cannot be configured here.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

from precommit_gate.steps import DEFAULT_STEPS, WARNINGS_AS_ERRORS, EnvironmentOverrides, Step

DEFAULT_CONFIG_PATH = Path(".precommit-gate.yaml")
LOG_LEVEL_ENV = "PRECOMMIT_GATE_LOG_LEVEL"
LOG_LEVELS = ("debug", "info", "warning", "error")


class ConfigError(ValueError):
    """Raised when the config file is malformed."""


@dataclass
class GateConfig:
    """Settings for one gate run."""

    log_level: str = "info"
    working_dir: Path = field(default_factory=Path.cwd)

    # Compiled in
    steps: tuple[Step, ...] = DEFAULT_STEPS
    env: EnvironmentOverrides = WARNINGS_AS_ERRORS

    @classmethod
    def load(cls, config_path: Path = DEFAULT_CONFIG_PATH) -> GateConfig:
        """Load configuration from YAML file, then apply env overrides."""
        data: dict[str, Any] = {}

        if config_path.exists():
            try:
                with open(config_path, encoding="utf-8") as f:
                    data = yaml.safe_load(f) or {}
            except (OSError, UnicodeDecodeError, yaml.YAMLError) as e:
                raise ConfigError(f"{config_path}: {e}") from e

            if not isinstance(data, dict):
                raise ConfigError(f"{config_path}: expected a mapping at top level")

        env_level = os.environ.get(LOG_LEVEL_ENV)
        if env_level:
            data = {**data, "log_level": env_level}

        return cls.from_dict(data, config_path)

    @classmethod
    def from_dict(cls, data: dict[str, Any], config_path: Path | None = None) -> GateConfig:
        """Create config from dictionary."""
        data = dict(data or {})

        unknown = sorted(set(data) - {"log_level", "working_dir"})
        if unknown:
            raise ConfigError(f"Unknown config keys: {', '.join(unknown)}")

        log_level = str(data.get("log_level", "info")).lower()
        if log_level not in LOG_LEVELS:
            raise ConfigError(
                f"Invalid log_level {log_level!r} (expected one of {', '.join(LOG_LEVELS)})"
            )

        working_dir = Path.cwd()
        if data.get("working_dir"):
            if not isinstance(data["working_dir"], str):
                raise ConfigError(f"working_dir must be a path string, got {data['working_dir']!r}")
            working_dir = Path(data["working_dir"])
            # Relative paths are relative to the config file
            if not working_dir.is_absolute() and config_path is not None:
                working_dir = config_path.resolve().parent / working_dir
            if not working_dir.is_dir():
                raise ConfigError(f"working_dir does not exist: {working_dir}")

        return cls(log_level=log_level, working_dir=working_dir)
