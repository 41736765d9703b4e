"""Command listing middleware candidates and the active middleware."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from .context import CLIContext

console = Console()


@click.command()
@click.pass_obj
def middleware(cli_context: CLIContext) -> None:
    """Show which middleware packages were found and activated."""
    strata = cli_context.strata(run=True)
    registry = strata.middleware_registry
    candidates = registry.candidates() if registry is not None else {}
    active = strata.get_middlewares()
    if not candidates:
        console.print("[yellow](No middleware packages found)[/yellow]")
        return

    table = Table(title="Middleware")
    table.add_column("Identifier")
    table.add_column("Module")
    table.add_column("Active")
    for identifier, module in sorted(candidates.items()):
        table.add_row(identifier, module, "yes" if identifier in active else "no")
    console.print(table)
