"""Exceptions raised while bootstrapping a Strata application."""

from __future__ import annotations


class StrataError(Exception):
    """Base class for all Strata bootstrap errors."""


class ConfigurationError(StrataError):
    """Raised when the project configuration source is missing or malformed."""


class SubsystemInitializationError(StrataError):
    """Raised when logger, timezone or localization set-up fails."""


__all__ = ["ConfigurationError", "StrataError", "SubsystemInitializationError"]
