"""Click group for inspecting the project configuration."""

from __future__ import annotations

import json

import click
from rich.console import Console

from strata.config import ABSENT
from strata.infrastructure.diagnostics import describe_config

from .context import CLIContext

console = Console()


@click.group()
def config() -> None:
    """Inspect the normalized project configuration."""


@config.command(name="get")
@click.argument("key")
@click.pass_obj
def get_cmd(cli_context: CLIContext, key: str) -> None:
    """Print the value stored at dot-notation KEY as JSON."""
    strata = cli_context.strata()
    value = strata.get_config(key)
    if value is ABSENT:
        console.print(f"[yellow]{key} is not set[/yellow]")
        raise click.exceptions.Exit(1)
    click.echo(json.dumps(value, indent=2, sort_keys=True, default=str))


@config.command(name="show")
@click.option("--flat", is_flag=True, help="Print one dot-notation key per line.")
@click.pass_obj
def show_cmd(cli_context: CLIContext, flat: bool) -> None:
    """Print the whole configuration tree."""
    strata = cli_context.strata()
    if not flat:
        click.echo(json.dumps(strata.config, indent=2, sort_keys=True, default=str))
        return
    for row in describe_config(strata.config):
        click.echo(f"{row['key']} = {json.dumps(row['value'], default=str)}")
