"""Middleware discovery and activation.

Middleware packages live under the reserved ``strata_middleware`` namespace
and expose an ``Initializer`` type. Candidates reach the registry in two
ways:

* explicitly, through ``MiddlewareRegistry.register()`` at start-up;
* through the ``strata.middleware`` entry point group of installed
  distributions, e.g. in a middleware package's ``pyproject.toml``::

      [project.entry-points."strata.middleware"]
      cache = "strata_middleware.cache"

Activation imports every candidate that passes the namespace check, looks up
its ``Initializer`` and instantiates it without arguments. Candidates failing
either check are skipped; that is expected and never an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from importlib import import_module, metadata
from typing import Any, Callable

from strata.infrastructure.observability import get_logger, log_skip

MIDDLEWARE_NAMESPACE = "strata_middleware"
ENTRY_POINT_GROUP = "strata.middleware"
ENTRY_POINT_NAME = "Initializer"

MiddlewareFactory = Callable[[], Any]

_logger = get_logger(__name__)


@dataclass(frozen=True)
class MiddlewareCandidate:
    """A package that may provide a middleware."""

    identifier: str
    module: str
    factory: MiddlewareFactory | None = None

    @property
    def in_namespace(self) -> bool:
        return self.module == MIDDLEWARE_NAMESPACE or self.module.startswith(
            MIDDLEWARE_NAMESPACE + "."
        )

    def resolve(self) -> MiddlewareFactory | None:
        """Return the entry point type, or None when the package has none.

        A package that is not installed has no entry point either. Import
        errors raised from inside an installed package propagate.
        """
        if self.factory is not None:
            return self.factory
        try:
            module = import_module(self.module)
        except ModuleNotFoundError as exc:
            if not self._is_own_module(exc.name):
                raise
            return None
        entry = getattr(module, ENTRY_POINT_NAME, None)
        return entry if callable(entry) else None

    def _is_own_module(self, name: str | None) -> bool:
        if not name:
            return False
        return self.module == name or self.module.startswith(name + ".")


class MiddlewareRegistry:
    """Tracks middleware candidates and the instances activated from them."""

    def __init__(self, *, use_entry_points: bool = True) -> None:
        self._use_entry_points = use_entry_points
        self._candidates: dict[str, MiddlewareCandidate] = {}
        self._middlewares: dict[str, Any] = {}
        self._initialized = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    def register(
        self,
        identifier: str,
        module: str,
        factory: MiddlewareFactory | None = None,
    ) -> None:
        """Declare ``module`` as a middleware candidate named ``identifier``."""
        self._candidates[identifier] = MiddlewareCandidate(identifier, module, factory)

    def discover(self) -> list[str]:
        """Add candidates declared by installed distributions.

        Explicit registrations take precedence over entry points with the
        same identifier. Returns the identifiers that were added.
        """
        if not self._use_entry_points:
            return []
        added: list[str] = []
        for entry_point in metadata.entry_points(group=ENTRY_POINT_GROUP):
            if entry_point.name in self._candidates:
                continue
            self._candidates[entry_point.name] = MiddlewareCandidate(
                entry_point.name, entry_point.module
            )
            added.append(entry_point.name)
        _logger.debug("Discovered %d middleware candidates", len(added))
        return added

    def candidates(self) -> dict[str, str]:
        return {ident: c.module for ident, c in self._candidates.items()}

    def initialize(self) -> dict[str, Any]:
        """Discover and activate middleware. Runs once per registry."""
        if self._initialized:
            return self.get_middlewares()

        self.discover()
        for identifier, candidate in self._candidates.items():
            if not candidate.in_namespace:
                log_skip(
                    _logger,
                    "Skipping %s: %s is outside the %s namespace",
                    identifier,
                    candidate.module,
                    MIDDLEWARE_NAMESPACE,
                    middleware=identifier,
                )
                continue
            factory = candidate.resolve()
            if factory is None:
                log_skip(
                    _logger,
                    "Skipping %s: no %s in %s",
                    identifier,
                    ENTRY_POINT_NAME,
                    candidate.module,
                    middleware=identifier,
                )
                continue
            self._middlewares[identifier] = factory()
            _logger.info("Activated middleware %s", identifier)

        self._initialized = True
        return self.get_middlewares()

    def get_middlewares(self) -> dict[str, Any]:
        return dict(self._middlewares)


__all__ = [
    "ENTRY_POINT_GROUP",
    "ENTRY_POINT_NAME",
    "MIDDLEWARE_NAMESPACE",
    "MiddlewareCandidate",
    "MiddlewareFactory",
    "MiddlewareRegistry",
]
