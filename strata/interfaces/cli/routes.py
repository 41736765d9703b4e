"""Command listing the routes declared in the project configuration."""

from __future__ import annotations

import click
from rich.console import Console
from rich.table import Table

from .context import CLIContext

console = Console()


@click.command()
@click.pass_obj
def routes(cli_context: CLIContext) -> None:
    """Print every route mounted from the ``routes`` configuration key."""
    strata = cli_context.strata(run=True)
    declared = strata.router.routes if strata.router is not None else []
    if not declared:
        console.print("[yellow](No routes declared)[/yellow]")
        return

    table = Table(title="Routes")
    table.add_column("Methods")
    table.add_column("Path")
    table.add_column("Endpoint")
    for route in declared:
        table.add_row("|".join(route.methods), route.path, route.endpoint)
    console.print(table)
