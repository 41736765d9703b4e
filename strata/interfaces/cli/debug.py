"""Debug Click group for inspecting a Strata project.

Available subcommands:

- ``pid`` – print the process id recorded by the last start-up.
- ``paths`` – print the conventional project paths.
"""

from __future__ import annotations

import click
from rich.console import Console

from strata.app import Strata
from strata.infrastructure.diagnostics import PID_FILENAME, read_pid

from .context import CLIContext

console = Console()


@click.group()
def debug() -> None:
    """Debugging tools for Strata projects."""


@debug.command(name="pid")
@click.pass_obj
def pid_cmd(cli_context: CLIContext) -> None:
    """Print the process id saved in tmp/pid."""
    path = Strata(cli_context.root, cli=True).tmp_path / PID_FILENAME
    pid = read_pid(path)
    if pid is None:
        console.print(f"[yellow](No process id recorded in {path})[/yellow]")
        return
    click.echo(str(pid))


@debug.command(name="paths")
@click.pass_obj
def paths_cmd(cli_context: CLIContext) -> None:
    """Print where Strata looks for configuration, sources and translations."""
    strata = Strata(cli_context.root, cli=True)
    for label, path in (
        ("root", strata.root),
        ("config", strata.config_path),
        ("src", strata.src_path),
        ("tmp", strata.tmp_path),
        ("locale", strata.locale_path),
    ):
        exists = "" if path.exists() else " (missing)"
        click.echo(f"{label}: {path}{exists}")
