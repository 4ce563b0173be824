"""
Audit result model: the contract handed to every presentation layer.

A result is frozen once built. ``to_dict()`` flattens it to plain
dicts, lists, strings and ints so renderers, JSON export and the cache
never need the model types.
"""

from __future__ import annotations

from collections.abc import Mapping
from types import MappingProxyType
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Synthetic category for unmatched short names
OTHER_CATEGORY = "other"

DependencyKind = Literal["direct", "indirect"]


class ClassifiedItem(BaseModel):
    """One dependency matched to a category."""

    model_config = ConfigDict(frozen=True)

    name: str
    category: str
    suggestion: str
    kind: DependencyKind
    via: str | None = None  # set iff kind == "indirect"


class PackagesByKind(BaseModel):
    model_config = ConfigDict(frozen=True)

    direct: tuple[str, ...] = ()
    indirect: tuple[str, ...] = ()


class AuditResult(BaseModel):
    """Categorized audit findings.

    ``direct_count + indirect_count`` equals the number of items in the
    real catalog categories. The ``other`` category holds review
    candidates and is not counted.
    """

    model_config = ConfigDict(frozen=True)

    direct_count: int = 0
    indirect_count: int = 0
    packages_by_kind: PackagesByKind = Field(default_factory=PackagesByKind)
    by_category: Mapping[str, tuple[ClassifiedItem, ...]] = Field(
        default_factory=dict, validate_default=True,
    )

    @field_validator("by_category", mode="after")
    @classmethod
    def _freeze_categories(
        cls, value: Mapping[str, tuple[ClassifiedItem, ...]],
    ) -> Mapping[str, tuple[ClassifiedItem, ...]]:
        return MappingProxyType(dict(value))

    @field_serializer("by_category")
    def _dump_categories(self, value: Mapping[str, tuple[ClassifiedItem, ...]]) -> dict:
        return dict(value)

    @property
    def found(self) -> bool:
        """True when any category holds at least one item."""
        return any(self.by_category.values())

    @property
    def total(self) -> int:
        return self.direct_count + self.indirect_count

    def non_empty_categories(self) -> dict[str, tuple[ClassifiedItem, ...]]:
        return {name: items for name, items in self.by_category.items() if items}

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "direct_count": self.direct_count,
            "indirect_count": self.indirect_count,
            "packages_by_kind": {
                "direct": list(self.packages_by_kind.direct),
                "indirect": list(self.packages_by_kind.indirect),
            },
            "by_category": {
                category: [item.model_dump(exclude_none=True) for item in items]
                for category, items in self.by_category.items()
            },
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AuditResult:
        """Rebuild a result from ``to_dict()`` output (e.g. the cache)."""
        return cls.model_validate(data)
