"""Binding of the project's source directory to an import namespace.

A Strata project keeps its own code under ``<root>/src``. During
configuration loading that directory is registered against the project
namespace (``app`` by default) so ``import app.controllers`` resolves to
``<root>/src/controllers``.
"""

from __future__ import annotations

import importlib.abc
import importlib.machinery
import importlib.util
import sys
from pathlib import Path
from typing import Protocol, Sequence

DEFAULT_NAMESPACE = "app"


class ClassLoader(Protocol):
    """Anything able to map a namespace prefix onto a directory."""

    def set_namespace_path(self, prefix: str, path: Path | str) -> None: ...


class ImportPathLoader(importlib.abc.MetaPathFinder):
    """Meta path finder resolving registered namespace prefixes.

    Only the prefix itself is resolved here; submodules are found by the
    regular path finder through the package ``__path__``.
    """

    def __init__(self) -> None:
        self._paths: dict[str, list[str]] = {}

    @property
    def paths(self) -> dict[str, list[str]]:
        return {prefix: list(dirs) for prefix, dirs in self._paths.items()}

    def set_namespace_path(self, prefix: str, path: Path | str) -> None:
        prefix = prefix.strip(".")
        if not prefix:
            raise ValueError("Namespace prefix must not be empty")
        self._paths[prefix] = [str(Path(path))]
        self.install()

    def install(self) -> None:
        if self not in sys.meta_path:
            sys.meta_path.insert(0, self)

    def uninstall(self) -> None:
        if self in sys.meta_path:
            sys.meta_path.remove(self)

    def find_spec(
        self,
        fullname: str,
        path: Sequence[str] | None = None,
        target: object | None = None,
    ) -> importlib.machinery.ModuleSpec | None:
        dirs = self._paths.get(fullname)
        if dirs is None:
            return None
        init_file = Path(dirs[0]) / "__init__.py"
        if init_file.is_file():
            return importlib.util.spec_from_file_location(
                fullname, init_file, submodule_search_locations=list(dirs)
            )
        spec = importlib.machinery.ModuleSpec(fullname, None, is_package=True)
        spec.submodule_search_locations = list(dirs)
        return spec


def bind_project_namespace(
    loader: ClassLoader | None, namespace: str, src_path: Path | str
) -> bool:
    """Register ``src_path`` under ``namespace`` with ``loader``.

    Returns False when no loader was supplied.
    """
    if loader is None:
        return False
    loader.set_namespace_path(namespace, src_path)
    return True


__all__ = [
    "DEFAULT_NAMESPACE",
    "ClassLoader",
    "ImportPathLoader",
    "bind_project_namespace",
]
