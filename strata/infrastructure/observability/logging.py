"""Logging utilities for Strata.

This module provides centralised logging configuration and helpers for
structured, contextual logging throughout the framework, along with the
``StrataLogger`` sink the application context writes its own messages to.
"""

from __future__ import annotations

import logging
import sys
from contextlib import contextmanager
from contextvars import ContextVar
from typing import Any, Iterator

DEFAULT_LOG_CONTEXT = "[Strata]"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


# ---------------------------------------------------------------------------
# Context variables for structured logging
# ---------------------------------------------------------------------------

_log_context: ContextVar[dict[str, Any]] = ContextVar(
    "log_context", default={})


class ContextualFormatter(logging.Formatter):
    """Formatter that appends context fields to log messages."""

    def format(self, record: logging.LogRecord) -> str:
        ctx = _log_context.get()
        if ctx:
            # Work on a copy; other handlers see the same record.
            record = logging.makeLogRecord(record.__dict__)
            ctx_str = " ".join(f"{k}={v}" for k, v in ctx.items())
            record.msg = f"{record.getMessage()} [{ctx_str}]"
            record.args = None
        return super().format(record)


@contextmanager
def log_context(**fields: Any) -> Iterator[None]:
    """Temporarily add context fields to all log messages.

    Usage::

        with log_context(middleware="strata_middleware.cache"):
            logger.info("Activating")  # message includes context

    Fields are merged with any existing context and restored on exit.
    """
    current = _log_context.get()
    merged = {**current, **fields}
    token = _log_context.set(merged)
    try:
        yield
    finally:
        _log_context.reset(token)


# ---------------------------------------------------------------------------
# Logging configuration
# ---------------------------------------------------------------------------

_configured = False


def resolve_level(level: int | str | None, default: int = logging.INFO) -> int:
    """Translate a level name such as ``"debug"`` into its numeric value.

    Raises:
        ValueError: if ``level`` is a string that is not a known level name.
    """
    if level is None:
        return default
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ValueError(f"Unknown log level: {level!r}")
    return resolved


def configure_logging(
    level: int | str = logging.INFO,
    third_party_level: int = logging.WARNING,
) -> None:
    """Configure application-wide logging.

    Call this once at startup (CLI main, ASGI server entry, etc.) to set up
    consistent logging across the application. Later calls are ignored.

    Args:
        level: Log level for application loggers (default INFO).
        third_party_level: Log level for third-party libraries (default WARNING).
    """
    global _configured
    if _configured:
        return
    _configured = True

    root = logging.getLogger()
    root.setLevel(resolve_level(level))

    # Remove any existing handlers to avoid duplicates
    for handler in root.handlers[:]:
        root.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(ContextualFormatter(LOG_FORMAT))
    root.addHandler(handler)

    # Quieten noisy third-party loggers
    for name in ("httpx", "httpcore", "asyncio", "uvicorn.access"):
        logging.getLogger(name).setLevel(third_party_level)


def get_logger(name: str) -> logging.Logger:
    """Return a logger for the given name.

    If configure_logging() has not been called, a basic fallback configuration
    is applied to ensure the logger is usable.
    """
    logger = logging.getLogger(name)
    if not _configured and not logger.handlers and not logging.getLogger().handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(ContextualFormatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.setLevel(logging.INFO)
    return logger


# ---------------------------------------------------------------------------
# Application sink
# ---------------------------------------------------------------------------


class StrataLogger:
    """Two-argument logging sink used by the application context.

    ``log(message, context)`` records ``message`` tagged with ``context``.
    Nothing is returned; whether the record is emitted depends on the
    configured level.
    """

    def __init__(self, name: str = "strata", level: int | str | None = None) -> None:
        self._logger = get_logger(name)
        if level is not None:
            self._logger.setLevel(resolve_level(level))

    @property
    def logger(self) -> logging.Logger:
        return self._logger

    def set_level(self, level: int | str) -> None:
        self._logger.setLevel(resolve_level(level))

    def log(self, message: str, context: str = DEFAULT_LOG_CONTEXT) -> None:
        with log_context(source=context):
            self._logger.info(message)


# ---------------------------------------------------------------------------
# Convenience helpers
# ---------------------------------------------------------------------------


def log_skip(logger: logging.Logger, message: str, *args: Any, **context: Any) -> None:
    """Record an expected condition that was skipped on purpose."""
    with log_context(skip=True, **context):
        logger.info(message, *args)


def log_ignored(
    logger: logging.Logger,
    message: str,
    exc: BaseException,
    **context: Any,
) -> None:
    """Record a best-effort operation whose failure was ignored."""
    with log_context(ignored=type(exc).__name__, **context):
        logger.warning(f"{message}: {exc}")
