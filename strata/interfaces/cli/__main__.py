"""Entry point for running the Strata CLI.

This module defines a top-level Click group that aggregates all subcommands
defined in the ``strata.interfaces.cli`` package. Executing
``python -m strata.interfaces.cli`` (or the ``strata`` console script) will
invoke this group and present the available commands.
"""

import click

from strata.app.config import ROOT_ENV_VAR
from strata.infrastructure.observability import configure_logging

from .config import config
from .context import build_cli_context
from .debug import debug
from .middleware import middleware
from .routes import routes
from .serve import serve


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option(
    "--root",
    type=click.Path(file_okay=False, path_type=str),
    envvar=ROOT_ENV_VAR,
    default=None,
    help="Project root containing config/strata.json (defaults to the cwd).",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    show_default=True,
    help="Log level for the bootstrap output.",
)
@click.pass_context
def cli(ctx: click.Context, root: str | None, log_level: str) -> None:
    """Strata command-line interface."""
    configure_logging(level=log_level)
    ctx.obj = build_cli_context(root)


cli.add_command(config)
cli.add_command(middleware)
cli.add_command(routes)
cli.add_command(serve)
cli.add_command(debug)


if __name__ == "__main__":
    cli()
