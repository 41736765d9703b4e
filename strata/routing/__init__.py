"""Routing facades."""

from .router import RouteDescriptor, Router, resolve_endpoint

__all__ = ["RouteDescriptor", "Router", "resolve_endpoint"]
