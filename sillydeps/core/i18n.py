"""
Message translation for the terminal output.

Messages live in ``sillydeps/core/data/locales/<locale>.json`` as nested
objects addressed with dotted keys (``summary.title``). Lookups fall back
to English, then to the key itself.
"""

from __future__ import annotations

import logging
import os

from sillydeps.core.data import LOCALES, DataRegistry

logger = logging.getLogger(__name__)

DEFAULT_LOCALE = "en"


def resolve_locale(explicit: str | None = None, configured: str | None = None) -> str:
    """Choose a supported locale.

    Precedence: explicit flag > settings > ``LANG`` env var > English.
    """
    for candidate in (explicit, configured):
        if candidate in LOCALES:
            return candidate
        if candidate:
            logger.warning("Unsupported locale '%s'; ignoring", candidate)

    system = os.environ.get("LANG", "")
    return "es" if system.lower().startswith("es") else DEFAULT_LOCALE


class Translator:
    """Looks up localized messages for one locale."""

    def __init__(self, locale: str = DEFAULT_LOCALE, registry: DataRegistry | None = None):
        self.locale = locale if locale in LOCALES else DEFAULT_LOCALE
        self._registry = registry or DataRegistry()

    def _find(self, messages: dict, key: str) -> str | None:
        node: object = messages
        for part in key.split("."):
            if not isinstance(node, dict) or part not in node:
                return None
            node = node[part]
        return node if isinstance(node, str) else None

    def __call__(self, key: str, **params: object) -> str:
        """Translate ``key``, formatting ``{name}`` placeholders."""
        text = self._find(self._registry.locale_messages(self.locale), key)
        if text is None and self.locale != DEFAULT_LOCALE:
            text = self._find(self._registry.locale_messages(DEFAULT_LOCALE), key)
        if text is None:
            logger.debug("Missing message '%s' for locale '%s'", key, self.locale)
            return key
        return text.format(**params) if params else text
