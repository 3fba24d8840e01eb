"""
Pre-commit Gate CLI - Main entry point.

Runs the fixed verification pipeline against the current source tree:

    cargo fmt --check
    cargo check --all-targets
    cargo clippy
    cargo test --all-targets

with RUSTFLAGS=-Dwarnings. Exits 0 when every step passed, 1 otherwise.
"""

import click
from rich.console import Console
from rich.markup import escape

from precommit_gate import __version__
from precommit_gate.config import DEFAULT_CONFIG_PATH, ConfigError, GateConfig
from precommit_gate.observability import configure_logging
from precommit_gate.runner import GateRunner
from precommit_gate.summary import show_summary

console = Console(highlight=False)


@click.command()
@click.version_option(version=__version__)
def main() -> None:
    """Pre-commit Gate - run every check, fail if any failed."""
    try:
        config = GateConfig.load(DEFAULT_CONFIG_PATH)
    except ConfigError as e:
        console.print(f"[red]Config error:[/red] {escape(str(e))}")
        raise SystemExit(2) from e

    configure_logging(config.log_level)

    runner = GateRunner(env=config.env, cwd=config.working_dir)
    report = runner.run(config.steps)

    show_summary(report, console)
    raise SystemExit(report.exit_code)


if __name__ == "__main__":
    main()
