"""Shared fixtures for the Strata test suite."""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import Any, Callable, Iterator

import pytest

from strata.app import Strata
from strata.app.namespace import ImportPathLoader

PAGES_MODULE = '''
def home():
    return {"page": "home"}


def contact():
    return {"page": "contact"}
'''

MIDDLEWARE_WITH_ENTRY = '''
class Initializer:
    instances = 0

    def __init__(self):
        type(self).instances += 1
        self.active = True
'''

MIDDLEWARE_WITHOUT_ENTRY = '''
VALUE = "no initializer here"
'''


def _purge_modules(*prefixes: str) -> None:
    for name in list(sys.modules):
        if any(name == p or name.startswith(p + ".") for p in prefixes):
            del sys.modules[name]


@pytest.fixture(autouse=True)
def _restore_timezone(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TZ", "UTC")


@pytest.fixture(autouse=True)
def _restore_meta_path() -> Iterator[None]:
    saved = list(sys.meta_path)
    yield
    sys.meta_path[:] = saved


@pytest.fixture
def write_project(tmp_path: Path) -> Callable[..., Path]:
    """Return a helper writing a Strata project skeleton under ``tmp_path``."""

    def _write(config: Any = None, *, with_tmp: bool = True, raw: str | None = None) -> Path:
        root = tmp_path / "project"
        (root / "config").mkdir(parents=True, exist_ok=True)
        (root / "src").mkdir(exist_ok=True)
        (root / "src" / "pages.py").write_text(PAGES_MODULE, encoding="utf-8")
        if with_tmp:
            (root / "tmp").mkdir(exist_ok=True)
        content = raw if raw is not None else json.dumps({} if config is None else config)
        (root / "config" / "strata.json").write_text(content, encoding="utf-8")
        return root

    return _write


@pytest.fixture
def make_strata() -> Iterator[Callable[..., Strata]]:
    """Build ``Strata`` contexts whose import hooks are removed afterwards."""
    loaders: list[ImportPathLoader] = []
    namespaces: set[str] = set()

    def _make(root: Path, **kwargs: Any) -> Strata:
        kwargs.setdefault("use_entry_points", False)
        loader = kwargs.setdefault("loader", ImportPathLoader())
        if isinstance(loader, ImportPathLoader):
            loaders.append(loader)
        strata = Strata(root, **kwargs)
        namespaces.add(strata.namespace)
        return strata

    yield _make

    for loader in loaders:
        loader.uninstall()
    _purge_modules(*namespaces)


@pytest.fixture
def middleware_packages(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Iterator[Path]:
    """Create importable middleware packages on ``sys.path``.

    * ``strata_middleware.cache`` exposes an ``Initializer``.
    * ``strata_middleware.plain`` has no ``Initializer``.
    * ``rogue_middleware`` exposes an ``Initializer`` outside the namespace.
    """
    site = tmp_path / "site-packages"
    cache = site / "strata_middleware" / "cache"
    plain = site / "strata_middleware" / "plain"
    rogue = site / "rogue_middleware"
    for package in (cache, plain, rogue):
        package.mkdir(parents=True)
    (cache / "__init__.py").write_text(MIDDLEWARE_WITH_ENTRY, encoding="utf-8")
    (plain / "__init__.py").write_text(MIDDLEWARE_WITHOUT_ENTRY, encoding="utf-8")
    (rogue / "__init__.py").write_text(MIDDLEWARE_WITH_ENTRY, encoding="utf-8")

    _purge_modules("strata_middleware", "rogue_middleware")
    monkeypatch.syspath_prepend(str(site))
    yield site
    _purge_modules("strata_middleware", "rogue_middleware")
