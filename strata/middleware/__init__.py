"""Middleware registry facades."""

from .loader import (
    ENTRY_POINT_GROUP,
    ENTRY_POINT_NAME,
    MIDDLEWARE_NAMESPACE,
    MiddlewareCandidate,
    MiddlewareRegistry,
)

__all__ = [
    "ENTRY_POINT_GROUP",
    "ENTRY_POINT_NAME",
    "MIDDLEWARE_NAMESPACE",
    "MiddlewareCandidate",
    "MiddlewareRegistry",
]
