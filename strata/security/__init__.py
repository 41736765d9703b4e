"""Security facades."""

from .headers import DEFAULT_HEADERS, Security, SecurityHeadersMiddleware

__all__ = ["DEFAULT_HEADERS", "Security", "SecurityHeadersMiddleware"]
