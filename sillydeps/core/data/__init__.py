"""
Central data registry for bundled static data.

Loads the trivial-package catalog and the locale message files from
``sillydeps/core/data/`` on first access and caches them for the
lifetime of the registry instance.

Usage::

    from sillydeps.core.data import DataRegistry

    registry = DataRegistry()
    source = registry.catalog_source        # {category: {package: suggestion}}
    messages = registry.locale_messages("es")
"""

from __future__ import annotations

import json
import logging
from functools import cached_property
from pathlib import Path

logger = logging.getLogger(__name__)

_DATA_DIR = Path(__file__).parent

CATALOG_FILE = "catalogs/silly_db.json"
LOCALES = ("en", "es")


def _load_json(relative_path: str) -> dict:
    """Load a JSON object relative to the data directory.

    A missing file yields an empty dict; callers decide whether
    that is fatal.
    """
    path = _DATA_DIR / relative_path
    if not path.exists():
        logger.warning("Data file not found: %s", path)
        return {}
    with open(path, encoding="utf-8") as f:
        return json.load(f)


class DataRegistry:
    """Registry for the bundled catalog and locale files."""

    def __init__(self) -> None:
        self._locales: dict[str, dict] = {}

    @cached_property
    def catalog_source(self) -> dict[str, dict[str, str]]:
        """Raw bundled catalog: category → package → suggestion."""
        data = _load_json(CATALOG_FILE)
        logger.debug("Loaded bundled catalog with %d categories", len(data))
        return data

    def locale_messages(self, locale: str) -> dict:
        """Nested message dict for a locale (empty for unknown locales)."""
        if locale not in LOCALES:
            return {}
        if locale not in self._locales:
            self._locales[locale] = _load_json(f"locales/{locale}.json")
            logger.debug("Loaded locale '%s'", locale)
        return self._locales[locale]
