"""Command serving the composed application with uvicorn."""

from __future__ import annotations

import click
import uvicorn

from .context import CLIContext


@click.command()
@click.option("--host", default="127.0.0.1", show_default=True)
@click.option("--port", default=8000, show_default=True, type=int)
@click.pass_obj
def serve(cli_context: CLIContext, host: str, port: int) -> None:
    """Bootstrap the project and serve it over HTTP."""
    strata = cli_context.strata(run=True)
    uvicorn.run(strata.build_app(), host=host, port=port)
