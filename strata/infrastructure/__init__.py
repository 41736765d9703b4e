"""Infrastructure layer for Strata.

Holds the adapters the application context leans on: logging and the
diagnostics helpers loaded during start-up.
"""

from . import diagnostics, observability

__all__ = ["diagnostics", "observability"]
