"""URL router facade.

``Router`` collects declarative route descriptors from the project
configuration and mounts them on a FastAPI ``APIRouter``; path matching
itself is left to FastAPI. A descriptor is either a mapping::

    {"path": "/posts/{slug}", "methods": ["GET"], "endpoint": "app.posts:show"}

or the short ``[methods, path, endpoint]`` form::

    ["GET|POST", "/contact", "app.contact:submit"]
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from importlib import import_module
from typing import Any, Callable

from fastapi import APIRouter
from pydantic import BaseModel, ConfigDict, field_validator

from strata.infrastructure.observability import get_logger

_logger = get_logger(__name__)


class RouteDescriptor(BaseModel):
    model_config = ConfigDict(extra="forbid")

    path: str
    endpoint: str
    methods: list[str] = ["GET"]
    name: str | None = None

    @field_validator("path")
    @classmethod
    def _check_path(cls, value: str) -> str:
        if not value.startswith("/"):
            raise ValueError("route path must start with '/'")
        return value

    @field_validator("methods", mode="before")
    @classmethod
    def _split_methods(cls, value: Any) -> Any:
        if isinstance(value, str):
            value = value.split("|")
        if isinstance(value, (list, tuple)):
            return [str(method).strip().upper() for method in value if str(method).strip()]
        return value

    @field_validator("endpoint")
    @classmethod
    def _check_endpoint(cls, value: str) -> str:
        module, sep, attr = value.partition(":")
        if not sep or not module or not attr:
            raise ValueError("endpoint must look like 'package.module:callable'")
        return value

    @classmethod
    def from_raw(cls, raw: Any) -> "RouteDescriptor":
        """Build a descriptor from either supported configuration form."""
        if isinstance(raw, RouteDescriptor):
            return raw
        if isinstance(raw, Mapping):
            return cls.model_validate(dict(raw))
        if isinstance(raw, Sequence) and not isinstance(raw, str) and len(raw) == 3:
            methods, path, endpoint = raw
            return cls(methods=methods, path=path, endpoint=endpoint)
        raise ValueError(f"Unsupported route descriptor: {raw!r}")


def resolve_endpoint(target: str) -> Callable[..., Any]:
    """Import the callable named by a ``module:attribute`` string."""
    module_name, _, attr_path = target.partition(":")
    obj: Any = import_module(module_name)
    for attr in attr_path.split("."):
        obj = getattr(obj, attr)
    if not callable(obj):
        raise TypeError(f"Route endpoint {target} is not callable")
    return obj


class Router:
    """Holds the routes of one application and the APIRouter serving them."""

    def __init__(self, api_router: APIRouter | None = None) -> None:
        self.api_router = api_router if api_router is not None else APIRouter()
        self._routes: list[RouteDescriptor] = []

    @classmethod
    def url_routing(cls) -> "Router":
        """Return a router dedicated to URL-mapped routes."""
        return cls(APIRouter())

    @property
    def routes(self) -> list[RouteDescriptor]:
        return list(self._routes)

    def add_routes(self, routes: Sequence[Any]) -> list[RouteDescriptor]:
        """Validate, resolve and mount every descriptor in ``routes``."""
        added: list[RouteDescriptor] = []
        for raw in routes:
            descriptor = RouteDescriptor.from_raw(raw)
            self.api_router.add_api_route(
                descriptor.path,
                resolve_endpoint(descriptor.endpoint),
                methods=descriptor.methods,
                name=descriptor.name,
            )
            self._routes.append(descriptor)
            added.append(descriptor)
        _logger.debug("Mounted %d routes", len(added))
        return added


__all__ = ["RouteDescriptor", "Router", "resolve_endpoint"]
