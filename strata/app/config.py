"""Configuration utilities for Strata.

Provides helper functions for locating and parsing the project
configuration file, ``config/strata.json`` under the project root.
"""

from __future__ import annotations

import json
import os
from pathlib import Path
from typing import Any, Dict

from .errors import ConfigurationError

CONFIG_DIRNAME = "config"
CONFIG_FILENAME = "strata.json"
ROOT_ENV_VAR = "STRATA_ROOT"


def resolve_root(root: Path | str | None = None) -> Path:
    """Return the project root, falling back to ``$STRATA_ROOT`` then the cwd."""
    if root is None:
        root = os.environ.get(ROOT_ENV_VAR) or Path.cwd()
    return Path(root).expanduser().resolve()


def config_path_for(root: Path | str) -> Path:
    return Path(root) / CONFIG_DIRNAME / CONFIG_FILENAME


def load_config(path: Path | str) -> Dict[str, Any]:
    """Load the project configuration from a JSON file.

    Args:
        path: Path to the JSON configuration file.

    Returns:
        A dictionary of configuration values.

    Raises:
        ConfigurationError: if the file is missing, is not valid JSON or does
            not hold a JSON object.
    """
    path = Path(path)
    try:
        with open(path, "r", encoding="utf-8") as f:
            values = json.load(f)
    except FileNotFoundError as exc:
        raise ConfigurationError(
            f"Using the Strata bootstrapper requires a file named "
            f"'{CONFIG_DIRNAME}/{CONFIG_FILENAME}' (looked for {path})."
        ) from exc
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(f"Could not parse {path}: {exc}") from exc

    if not isinstance(values, dict):
        raise ConfigurationError(
            f"{path} must declare a JSON object, got {type(values).__name__}"
        )
    return values


__all__ = [
    "CONFIG_DIRNAME",
    "CONFIG_FILENAME",
    "ROOT_ENV_VAR",
    "config_path_for",
    "load_config",
    "resolve_root",
]
