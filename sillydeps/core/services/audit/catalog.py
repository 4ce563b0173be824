"""
Trivial-package catalog: curated knowledge base of silly dependencies.

Maps category → package name → suggested inline alternative, e.g.::

    {"padding": {"left-pad": "Use String.prototype.padStart()"}}

A catalog is a plain value: load it once and pass it to whatever needs
it. Nothing here keeps module-level state, so tests and locales can use
as many catalogs as they like.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterator, Mapping
from pathlib import Path
from types import MappingProxyType
from typing import Any

from sillydeps.core.errors import CatalogLoadError
from sillydeps.core.models.result import OTHER_CATEGORY

logger = logging.getLogger(__name__)


class Catalog:
    """Immutable category → package → suggestion lookup table.

    Categories keep their declaration order. A package name that appears
    in more than one category resolves to the first one declared.
    """

    __slots__ = ("_categories",)

    def __init__(self, categories: Mapping[str, Mapping[str, str]]):
        self._categories: Mapping[str, Mapping[str, str]] = MappingProxyType({
            category: MappingProxyType(dict(entries))
            for category, entries in categories.items()
        })

    # ── Loading ─────────────────────────────────────────────────

    @classmethod
    def load(cls, source: Any) -> Catalog:
        """Validate a ``{category: {package: suggestion}}`` mapping.

        Raises:
            CatalogLoadError: If the source is not a non-empty mapping of
                mappings from package names to suggestion strings, or
                uses the reserved ``other`` category.
        """
        if not isinstance(source, Mapping):
            raise CatalogLoadError(
                f"Catalog must be a mapping of categories, got {type(source).__name__}"
            )
        if not source:
            raise CatalogLoadError("Catalog is empty")

        for category, entries in source.items():
            if not isinstance(category, str) or not category:
                raise CatalogLoadError(f"Invalid category name: {category!r}")
            if category == OTHER_CATEGORY:
                raise CatalogLoadError(
                    f"Category name '{OTHER_CATEGORY}' is reserved for review candidates"
                )
            if not isinstance(entries, Mapping):
                raise CatalogLoadError(
                    f"Category '{category}' must map package names to suggestions, "
                    f"got {type(entries).__name__}"
                )
            for name, suggestion in entries.items():
                if not isinstance(name, str) or not isinstance(suggestion, str):
                    raise CatalogLoadError(
                        f"Invalid entry in category '{category}': {name!r} → {suggestion!r}"
                    )

        catalog = cls(source)
        logger.debug(
            "Catalog loaded: %d categories, %d packages",
            len(catalog.categories), len(catalog),
        )
        return catalog

    @classmethod
    def from_file(cls, path: Path) -> Catalog:
        """Load a catalog from a JSON file.

        Raises:
            CatalogLoadError: If the file is missing, unreadable or invalid.
        """
        if not path.is_file():
            raise CatalogLoadError(f"Catalog file not found: {path}")
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise CatalogLoadError(f"Cannot read {path}: {e}") from e
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise CatalogLoadError(f"Invalid JSON in {path}: {e}") from e

        logger.debug("Loading catalog from %s", path)
        return cls.load(data)

    # ── Lookup ──────────────────────────────────────────────────

    def lookup(self, name: str) -> tuple[str, str] | None:
        """Return ``(category, suggestion)`` for a package, or None."""
        for category, entries in self._categories.items():
            suggestion = entries.get(name)
            if suggestion is not None:
                return category, suggestion
        return None

    @property
    def categories(self) -> tuple[str, ...]:
        return tuple(self._categories)

    def entries(self, category: str) -> Mapping[str, str]:
        """Package → suggestion map of one category (empty if unknown)."""
        return self._categories.get(category, MappingProxyType({}))

    def categories_summary(self) -> dict[str, int]:
        """Count packages per category."""
        return {category: len(entries) for category, entries in self._categories.items()}

    def to_dict(self) -> dict[str, dict[str, str]]:
        return {category: dict(entries) for category, entries in self._categories.items()}

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self.lookup(name) is not None

    def __len__(self) -> int:
        return sum(len(entries) for entries in self._categories.values())

    def __iter__(self) -> Iterator[str]:
        return iter(self._categories)

    def __repr__(self) -> str:
        return f"Catalog(categories={len(self._categories)}, packages={len(self)})"


def load_bundled_catalog() -> Catalog:
    """Load the catalog shipped with the package.

    Raises:
        CatalogLoadError: If the bundled data is missing or malformed.
    """
    from sillydeps.core.data import DataRegistry

    return Catalog.load(DataRegistry().catalog_source)
