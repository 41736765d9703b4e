"""Content type declarations read from the ``custom-post-types`` key.

The host runtime owns the actual registration; this loader only turns the
configuration value into ``ContentTypeDeclaration`` objects and hands each
one to the host's registration callable. Accepted shapes::

    "custom-post-types": "song"
    "custom-post-types": ["song", "album"]
    "custom-post-types": {"song": {"has_archive": true}, "album": {}}
    "custom-post-types": [{"name": "song", "options": {"has_archive": true}}]
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from typing import Any, Callable

from pydantic import BaseModel, ConfigDict, Field

from strata.infrastructure.observability import get_logger

CONFIG_KEY = "custom-post-types"

_logger = get_logger(__name__)


class ContentTypeDeclaration(BaseModel):
    model_config = ConfigDict(extra="forbid")

    name: str = Field(min_length=1)
    options: dict[str, Any] = Field(default_factory=dict)


ContentTypeRegistrar = Callable[[ContentTypeDeclaration], None]


def coerce_declarations(value: Any) -> list[ContentTypeDeclaration]:
    """Cast any supported configuration value to a list of declarations.

    A lone scalar counts as a one-item list and is used as the type name.
    Options that are not a mapping are dropped.
    """
    if not value:
        return []
    if isinstance(value, Mapping):
        return [
            ContentTypeDeclaration(name=str(name), options=_options(options))
            for name, options in value.items()
        ]
    if isinstance(value, str) or not isinstance(value, Iterable):
        value = [value]
    declarations: list[ContentTypeDeclaration] = []
    for item in value:
        if isinstance(item, Mapping):
            declarations.append(ContentTypeDeclaration.model_validate(dict(item)))
        else:
            declarations.append(ContentTypeDeclaration(name=str(item)))
    return declarations


def _options(options: Any) -> dict[str, Any]:
    return dict(options) if isinstance(options, Mapping) else {}


class ContentTypeLoader:
    def __init__(
        self,
        value: Any,
        registrar: ContentTypeRegistrar | None = None,
    ) -> None:
        self._declarations = coerce_declarations(value)
        self._registrar = registrar
        self.registered: list[ContentTypeDeclaration] = []

    @property
    def declarations(self) -> list[ContentTypeDeclaration]:
        return list(self._declarations)

    def load(self) -> list[ContentTypeDeclaration]:
        for declaration in self._declarations:
            if self._registrar is not None:
                self._registrar(declaration)
            self.registered.append(declaration)
        if self.registered:
            _logger.info("Registered %d content types", len(self.registered))
        return list(self.registered)


__all__ = [
    "CONFIG_KEY",
    "ContentTypeDeclaration",
    "ContentTypeLoader",
    "ContentTypeRegistrar",
    "coerce_declarations",
]
