"""Configuration store facades."""

from .store import ABSENT, ConfigStore, get, merge, normalize

__all__ = ["ABSENT", "ConfigStore", "get", "merge", "normalize"]
