"""Security hardening applied to the composed application.

Adds a fixed set of response headers, strips the ``Server`` header and, when
``security.cors_origins`` is configured, enables CORS for those origins.
Header values can be overridden or disabled (``null``) through
``security.headers`` in the project configuration.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from strata.infrastructure.observability import get_logger

DEFAULT_HEADERS: dict[str, str] = {
    "X-Content-Type-Options": "nosniff",
    "X-Frame-Options": "SAMEORIGIN",
    "Referrer-Policy": "strict-origin-when-cross-origin",
    "X-XSS-Protection": "1; mode=block",
}

_logger = get_logger(__name__)


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    def __init__(self, app: Any, headers: Mapping[str, str], hide_server: bool = True) -> None:
        super().__init__(app)
        self._headers = dict(headers)
        self._hide_server = hide_server

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for name, value in self._headers.items():
            response.headers.setdefault(name, value)
        if self._hide_server and "server" in response.headers:
            del response.headers["server"]
        return response


class Security:
    """Collects the hardening measures and installs them on an application."""

    def __init__(self, options: Mapping[str, Any] | None = None) -> None:
        self._options = dict(options or {})
        self.headers: dict[str, str] = {}
        self.cors_origins: list[str] = []
        self.hide_server = True
        self.measures_added = False

    def add_measures(self) -> None:
        headers: dict[str, Any] = dict(DEFAULT_HEADERS)
        overrides = self._options.get("headers")
        if isinstance(overrides, Mapping):
            headers.update(overrides)
        self.headers = {name: str(value) for name, value in headers.items() if value is not None}

        origins = self._options.get("cors_origins")
        if isinstance(origins, str):
            origins = [o.strip() for o in origins.split(",") if o.strip()]
        self.cors_origins = list(origins) if isinstance(origins, (list, tuple)) else []

        self.hide_server = bool(self._options.get("hide_server", True))
        self.measures_added = True
        _logger.debug("Security measures prepared: %s", sorted(self.headers))

    def apply(self, app: FastAPI) -> FastAPI:
        """Install the prepared measures on ``app``."""
        if not self.measures_added:
            self.add_measures()
        app.add_middleware(
            SecurityHeadersMiddleware,
            headers=self.headers,
            hide_server=self.hide_server,
        )
        if self.cors_origins:
            app.add_middleware(
                CORSMiddleware,
                allow_origins=self.cors_origins,
                allow_credentials=True,
                allow_methods=["*"],
                allow_headers=["*"],
            )
        return app


__all__ = ["DEFAULT_HEADERS", "Security", "SecurityHeadersMiddleware"]
