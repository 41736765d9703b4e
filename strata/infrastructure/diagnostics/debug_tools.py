"""Debug utilities for Strata.

This module provides helpers to inspect a running Strata process: the
process-identifier file written on every start-up, a flattened view of the
configuration tree and a pretty-printer that routes values through logging.
"""

from __future__ import annotations

import logging
import os
import pprint
from collections.abc import Mapping
from pathlib import Path
from typing import Any

PID_FILENAME = "pid"


def write_pid_file(path: Path | str, pid: int | None = None) -> int:
    """Overwrite ``path`` with the decimal process identifier.

    Raises:
        OSError: if the file cannot be written.
    """
    pid = os.getpid() if pid is None else pid
    Path(path).write_text(str(pid), encoding="utf-8")
    return pid


def read_pid(path: Path | str) -> int | None:
    """Return the identifier stored in ``path`` or None if unavailable."""
    try:
        raw = Path(path).read_text(encoding="utf-8").strip()
    except OSError:
        return None
    try:
        return int(raw)
    except ValueError:
        return None


def describe_config(tree: Mapping[Any, Any], prefix: str = "") -> list[dict[str, Any]]:
    """Flatten a nested configuration tree into ``{"key", "value"}`` rows."""
    rows: list[dict[str, Any]] = []
    for key, value in tree.items():
        dotted = f"{prefix}.{key}" if prefix else str(key)
        if isinstance(value, Mapping) and value:
            rows.extend(describe_config(value, dotted))
        else:
            rows.append({"key": dotted, "value": value})
    return rows


def debug(value: Any, logger: logging.Logger | None = None) -> str:
    """Pretty-print ``value`` at DEBUG level and return the rendered text."""
    rendered = pprint.pformat(value, indent=2, sort_dicts=True)
    (logger or logging.getLogger("strata.debug")).debug(rendered)
    return rendered


__all__ = ["PID_FILENAME", "debug", "describe_config", "read_pid", "write_pid_file"]
