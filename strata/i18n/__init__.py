"""Localization bootstrap.

Translations are plain ``gettext`` catalogues stored under
``<root>/locale/<locale>/LC_MESSAGES/<domain>.mo``. A missing catalogue is
not an error: lookups then return the original message.
"""

from __future__ import annotations

import gettext
from pathlib import Path

from strata.infrastructure.observability import get_logger

DEFAULT_LOCALE = "en_US"
DEFAULT_DOMAIN = "strata"

_logger = get_logger(__name__)


class I18n:
    """Loads the project's message catalogue for one locale."""

    def __init__(
        self,
        localedir: Path | str,
        locale: str = DEFAULT_LOCALE,
        domain: str = DEFAULT_DOMAIN,
    ) -> None:
        self.localedir = Path(localedir)
        self.locale = locale
        self.domain = domain
        self._translations: gettext.NullTranslations | None = None

    @property
    def initialized(self) -> bool:
        return self._translations is not None

    @property
    def translations(self) -> gettext.NullTranslations:
        if self._translations is None:
            raise RuntimeError("I18n.initialize() has not been called")
        return self._translations

    def initialize(self) -> gettext.NullTranslations:
        self._translations = gettext.translation(
            self.domain,
            localedir=str(self.localedir),
            languages=[self.locale],
            fallback=True,
        )
        if type(self._translations) is gettext.NullTranslations:
            _logger.debug("No %s catalogue for %s, using source strings", self.domain, self.locale)
        return self._translations

    def gettext(self, message: str) -> str:
        return self.translations.gettext(message)

    def ngettext(self, singular: str, plural: str, n: int) -> str:
        return self.translations.ngettext(singular, plural, n)

    _ = gettext


__all__ = ["DEFAULT_DOMAIN", "DEFAULT_LOCALE", "I18n"]
