"""Observability and logging facades."""

from .logging import (
    DEFAULT_LOG_CONTEXT,
    StrataLogger,
    configure_logging,
    get_logger,
    log_context,
    log_ignored,
    log_skip,
)

__all__ = [
    "DEFAULT_LOG_CONTEXT",
    "StrataLogger",
    "configure_logging",
    "get_logger",
    "log_context",
    "log_ignored",
    "log_skip",
]
