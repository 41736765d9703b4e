"""Running Strata application context.

``Strata`` owns the configuration store, the readiness flag and every
subsystem brought online during start-up. One instance is built at process
entry and handed to whatever needs configuration or lifecycle state; there
is no module-level singleton.

Start-up happens in two phases::

    strata = Strata(root="/srv/site")
    strata.init()   # logger, utils, configuration, timezone, i18n, registry
    strata.run()    # router, content types, routes, middleware, security

``run()`` calls ``init()`` itself when the context is not ready yet, so it is
a valid entry point on its own.
"""

from __future__ import annotations

import functools
import os
import time
from enum import Enum
from pathlib import Path
from typing import Any, Callable
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from fastapi import FastAPI

from strata import __version__
from strata.config import ABSENT, ConfigStore
from strata.i18n import DEFAULT_DOMAIN, DEFAULT_LOCALE, I18n
from strata.infrastructure.diagnostics import PID_FILENAME, debug, write_pid_file
from strata.infrastructure.observability import (
    DEFAULT_LOG_CONTEXT,
    StrataLogger,
    get_logger,
    log_ignored,
    log_skip,
)
from strata.middleware import MiddlewareRegistry
from strata.middleware.loader import MiddlewareFactory
from strata.model.content_types import (
    CONFIG_KEY as CONTENT_TYPES_KEY,
    ContentTypeLoader,
    ContentTypeRegistrar,
)
from strata.routing import Router
from strata.security import Security

from .config import config_path_for, load_config, resolve_root
from .errors import ConfigurationError, SubsystemInitializationError
from .namespace import DEFAULT_NAMESPACE, ClassLoader, ImportPathLoader, bind_project_namespace

DEFAULT_TIMEZONE = "America/New_York"

_logger = get_logger(__name__)


class LifecycleState(Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZING = "initializing"
    READY = "ready"
    RUNNING = "running"


class Strata:
    """Application context and start-up orchestrator."""

    def __init__(
        self,
        root: Path | str | None = None,
        *,
        namespace: str = DEFAULT_NAMESPACE,
        loader: ClassLoader | None = None,
        router_factory: Callable[[], Router] = Router.url_routing,
        content_type_registrar: ContentTypeRegistrar | None = None,
        use_entry_points: bool = True,
        cli: bool = False,
    ) -> None:
        self.root = resolve_root(root)
        self.namespace = namespace
        self.cli = cli
        self.state = LifecycleState.UNINITIALIZED
        self.ready = False
        self.timezone: str | None = None
        self.pid: int | None = None

        self.i18n: I18n | None = None
        self.router: Router | None = None
        self.security: Security | None = None
        self.content_types: ContentTypeLoader | None = None

        self._store = ConfigStore()
        self._loader: ClassLoader = loader if loader is not None else ImportPathLoader()
        self._router_factory = router_factory
        self._content_type_registrar = content_type_registrar
        self._use_entry_points = use_entry_points
        self._registrations: dict[str, tuple[str, MiddlewareFactory | None]] = {}
        self._middleware_registry: MiddlewareRegistry | None = None
        self._logger: StrataLogger | None = None
        self._app: FastAPI | None = None
        self.debug: Callable[[Any], str] = debug

    # ------------------------------------------------------------------
    # Paths
    # ------------------------------------------------------------------

    @property
    def config_path(self) -> Path:
        return config_path_for(self.root)

    @property
    def src_path(self) -> Path:
        return self.root / "src"

    @property
    def tmp_path(self) -> Path:
        return self.root / "tmp"

    @property
    def locale_path(self) -> Path:
        return self.root / "locale"

    @property
    def loader(self) -> ClassLoader:
        return self._loader

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def init(self) -> None:
        """Prepare the context for its run.

        Every step is redone on each call. Readiness is only set once all of
        them succeed; any exception propagates to the caller.

        Raises:
            ConfigurationError: if the project configuration cannot be loaded.
            SubsystemInitializationError: if logging, timezone or
                localization set-up fails.
        """
        self.ready = False
        self.state = LifecycleState.INITIALIZING
        try:
            self.configure_logger()
            self.include_utils()
            self.load_configuration()
            self.set_timezone()
            self.localize()
            self._middleware_registry = self._build_middleware_registry()
        except Exception:
            self.state = LifecycleState.UNINITIALIZED
            raise
        self.ready = True
        self.state = LifecycleState.READY

    def run(self) -> None:
        """Compose the router, content types, routes, middleware and security."""
        if not self.ready:
            self.init()

        self.configure_router()
        self.configure_content_types()
        self.add_app_routes()
        self.load_middleware()
        self.improve_security()
        self._app = None
        self.state = LifecycleState.RUNNING

    def build_app(self) -> FastAPI:
        """Return the FastAPI application serving this context."""
        if self.state is not LifecycleState.RUNNING:
            self.run()
        if self._app is None:
            app = FastAPI(
                title=str(self.get_config("name", "Strata application")),
                version=__version__,
            )
            app.state.strata = self
            app.include_router(self.router.api_router)
            self.security.apply(app)
            self._app = app
        return self._app

    # ------------------------------------------------------------------
    # Configuration
    # ------------------------------------------------------------------

    def load_configuration(self) -> None:
        self._store.normalize(load_config(self.config_path))
        self._apply_logger_settings()
        bind_project_namespace(self._loader, self.namespace, self.src_path)

    def get_config(self, key: str, default: Any = ABSENT) -> Any:
        """Fetch a dot-notation ``key`` from the configuration."""
        return self._store.get(key, default)

    def set_config(self, key: str, value: Any) -> None:
        """Merge ``value`` at dot-notation ``key``; sibling keys are kept."""
        self._store.set(key, value)

    @property
    def config(self) -> dict[Any, Any]:
        return self._store.as_dict()

    # ------------------------------------------------------------------
    # Middleware
    # ------------------------------------------------------------------

    def register_middleware(
        self, identifier: str, module: str, factory: MiddlewareFactory | None = None
    ) -> None:
        """Declare a middleware candidate ahead of activation."""
        self._registrations[identifier] = (module, factory)
        if self._middleware_registry is not None and not self._middleware_registry.initialized:
            self._middleware_registry.register(identifier, module, factory)

    @property
    def middleware_registry(self) -> MiddlewareRegistry | None:
        return self._middleware_registry

    def get_middlewares(self) -> dict[str, Any]:
        if self._middleware_registry is None:
            return {}
        return self._middleware_registry.get_middlewares()

    def load_middleware(self) -> None:
        if self._middleware_registry is not None:
            self._middleware_registry.initialize()

    def _build_middleware_registry(self) -> MiddlewareRegistry:
        registry = MiddlewareRegistry(use_entry_points=self._use_entry_points)
        for identifier, (module, factory) in self._registrations.items():
            registry.register(identifier, module, factory)
        return registry

    # ------------------------------------------------------------------
    # Logging
    # ------------------------------------------------------------------

    def configure_logger(self) -> None:
        self._logger = StrataLogger()

    def log(self, message: str, context: str = DEFAULT_LOG_CONTEXT) -> None:
        if self._logger is not None:
            self._logger.log(message, context)

    def _apply_logger_settings(self) -> None:
        level = self.get_config("logger.level", None)
        if level is None or self._logger is None:
            return
        try:
            self._logger.set_level(level)
        except ValueError as exc:
            raise SubsystemInitializationError(str(exc)) from exc

    # ------------------------------------------------------------------
    # Utilities
    # ------------------------------------------------------------------

    def include_utils(self) -> None:
        self._save_current_pid()
        if self._logger is not None:
            self.debug = functools.partial(debug, logger=self._logger.logger)

    def _save_current_pid(self) -> None:
        """Record the process id so a runaway process can be found later."""
        pid = os.getpid()
        if not self.cli:
            self.log(f"Loaded and running with process ID {pid}")
        try:
            self.pid = write_pid_file(self.tmp_path / PID_FILENAME, pid)
        except OSError as exc:
            self.pid = None
            log_ignored(_logger, "Could not save the process id", exc, path=self.tmp_path)

    # ------------------------------------------------------------------
    # Subsystems
    # ------------------------------------------------------------------

    def set_timezone(self) -> None:
        timezone = self.get_config("timezone", None)
        if timezone is None:
            timezone = DEFAULT_TIMEZONE
        if not isinstance(timezone, str):
            raise SubsystemInitializationError(f"Invalid timezone: {timezone!r}")
        try:
            ZoneInfo(timezone)
        except (ZoneInfoNotFoundError, ValueError) as exc:
            raise SubsystemInitializationError(f"Unknown timezone: {timezone}") from exc

        os.environ["TZ"] = timezone
        if hasattr(time, "tzset"):
            time.tzset()
        self.timezone = timezone

    def localize(self) -> None:
        locale = self.get_config("i18n.locale", DEFAULT_LOCALE)
        domain = self.get_config("i18n.domain", DEFAULT_DOMAIN)
        if not isinstance(locale, str) or not isinstance(domain, str):
            raise SubsystemInitializationError("i18n.locale and i18n.domain must be strings")
        try:
            self.i18n = I18n(self.locale_path, locale, domain)
            self.i18n.initialize()
        except OSError as exc:
            raise SubsystemInitializationError(f"Could not load translations: {exc}") from exc

    def configure_router(self) -> None:
        self.router = self._router_factory()

    def configure_content_types(self) -> None:
        try:
            self.content_types = ContentTypeLoader(
                self.get_config(CONTENT_TYPES_KEY), self._content_type_registrar
            )
        except ValueError as exc:
            raise ConfigurationError(f"Invalid {CONTENT_TYPES_KEY} declaration: {exc}") from exc
        self.content_types.load()

    def add_app_routes(self) -> None:
        routes = self.get_config("routes")
        if isinstance(routes, (list, tuple)):
            try:
                self.router.add_routes(routes)
            except (ValueError, TypeError, ImportError, AttributeError) as exc:
                raise ConfigurationError(f"Invalid route: {exc}") from exc
        elif routes is not ABSENT:
            log_skip(_logger, "Ignoring routes: expected a list, got %s", type(routes).__name__)

    def improve_security(self) -> None:
        options = self.get_config("security", {})
        self.security = Security(options if isinstance(options, dict) else {})
        self.security.add_measures()

    def __repr__(self) -> str:
        return f"Strata(root={str(self.root)!r}, state={self.state.value})"


__all__ = ["DEFAULT_TIMEZONE", "LifecycleState", "Strata"]
