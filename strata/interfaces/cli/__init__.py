"""CLI interface facades for Strata.

This package is the canonical home for all Click commands. Use the
``strata.interfaces.cli`` namespace for imports and module execution.
"""

from .__main__ import cli
from .config import config
from .debug import debug
from .middleware import middleware
from .routes import routes
from .serve import serve

__all__ = [
    "cli",
    "config",
    "debug",
    "middleware",
    "routes",
    "serve",
]
