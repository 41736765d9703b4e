"""Hierarchical configuration store with dot-notation access.

The canonical form of the configuration is a single nested dictionary.
Dot-notation keys such as ``"logger.level"`` are only a way of addressing
values inside that dictionary; they are expanded on the way in and never
stored as-is.

Usage::

    store = ConfigStore()
    store.normalize({"logger.level": "DEBUG", "routes": []})
    store.get("logger.level")          # "DEBUG"
    store.get("logger.missing")        # ABSENT
    store.set("logger.format", "short")
"""

from __future__ import annotations

import copy
from collections.abc import Mapping
from typing import Any

SEPARATOR = "."


class _Absent:
    """Marker type for configuration keys that do not resolve to a value."""

    _instance: "_Absent | None" = None

    def __new__(cls) -> "_Absent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "ABSENT"

    def __bool__(self) -> bool:
        return False

    def __copy__(self) -> "_Absent":
        return self

    def __deepcopy__(self, memo: dict[int, Any]) -> "_Absent":
        return self


ABSENT = _Absent()


def _expand(key: Any, value: Any) -> tuple[Any, Any]:
    """Turn ``("a.b.c", v)`` into ``("a", {"b": {"c": v}})``."""
    if not isinstance(key, str) or SEPARATOR not in key:
        return key, value
    head, *rest = key.split(SEPARATOR)
    for segment in reversed(rest):
        value = {segment: value}
    return head, value


def _deep_merge(current: dict[Any, Any], updates: Mapping[Any, Any]) -> dict[Any, Any]:
    for key, value in updates.items():
        existing = current.get(key)
        if isinstance(existing, dict) and isinstance(value, Mapping):
            current[key] = _deep_merge(existing, value)
        else:
            current[key] = copy.deepcopy(value)
    return current


def normalize(values: Mapping[Any, Any]) -> dict[Any, Any]:
    """Return ``values`` as a fully nested dictionary without dotted keys."""
    result: dict[Any, Any] = {}
    for key, value in values.items():
        if isinstance(value, Mapping):
            value = normalize(value)
        head, expanded = _expand(key, value)
        _deep_merge(result, {head: expanded})
    return result


def get(data: Mapping[Any, Any], key: Any, default: Any = ABSENT) -> Any:
    """Look up a dot-notation ``key`` inside ``data``.

    Returns ``default`` (``ABSENT`` unless given) when a segment is missing or
    when a non-mapping is reached before the path is exhausted. Malformed keys
    degrade to ``default`` as well; this function never raises.
    """
    if not isinstance(key, str) or key == "":
        return default
    node: Any = data
    for segment in key.split(SEPARATOR):
        if not isinstance(node, Mapping) or segment not in node:
            return default
        node = node[segment]
    return node


def merge(current: Mapping[Any, Any], updates: Mapping[Any, Any]) -> dict[Any, Any]:
    """Deep-merge ``updates`` onto ``current`` and return a new dictionary.

    Dot-notation keys in ``updates`` are expanded first. When both sides hold
    a mapping for the same key the two are merged recursively; in every other
    case the value from ``updates`` wins. Neither argument is mutated.
    """
    return _deep_merge(copy.deepcopy(dict(current)), normalize(updates))


class ConfigStore:
    """Owner of the canonical configuration tree."""

    def __init__(self, values: Mapping[Any, Any] | None = None) -> None:
        self._data: dict[Any, Any] = {}
        if values:
            self.normalize(values)

    def normalize(self, values: Mapping[Any, Any]) -> dict[Any, Any]:
        """Replace the tree with the normalized form of ``values``.

        An empty input leaves the current tree untouched.
        """
        if values:
            self._data = normalize(values)
        return self.as_dict()

    def get(self, key: Any, default: Any = ABSENT) -> Any:
        value = get(self._data, key, default)
        if value is default:
            return value
        return copy.deepcopy(value)

    def has(self, key: Any) -> bool:
        return get(self._data, key) is not ABSENT

    def merge(self, updates: Mapping[Any, Any]) -> dict[Any, Any]:
        self._data = merge(self._data, updates)
        return self.as_dict()

    def set(self, key: str, value: Any) -> None:
        """Merge a single dot-notation ``key``; sibling keys are preserved."""
        self.merge({key: value})

    def as_dict(self) -> dict[Any, Any]:
        """Return a deep copy of the tree."""
        return copy.deepcopy(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        return self.has(key)

    def __repr__(self) -> str:
        return f"ConfigStore({self._data!r})"


__all__ = ["ABSENT", "ConfigStore", "get", "merge", "normalize"]
