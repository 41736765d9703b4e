"""ASGI entry point for a Strata project.

Run with ``uvicorn strata.app.api:create_app --factory``; the project root
is taken from ``$STRATA_ROOT`` or the current directory.
"""

from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI

from strata.infrastructure.observability import configure_logging

from .context import Strata


def create_app(root: Path | str | None = None) -> FastAPI:
    """Bootstrap a ``Strata`` context and return its composed application."""
    configure_logging()
    strata = Strata(root)
    strata.run()
    return strata.build_app()


__all__ = ["create_app"]
