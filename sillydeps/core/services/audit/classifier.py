"""
Classifier: match a dependency set against the catalog.

Catalog matches land in their category and are counted per kind
(direct / indirect). Unmatched packages with short names land in the
synthetic ``other`` category as review candidates without being
counted; everything else is left out of the result.

Classification is pure: the same inputs always give the same result.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator

from sillydeps.core.models.dependency import NormalizedDependencySet
from sillydeps.core.models.result import (
    OTHER_CATEGORY,
    AuditResult,
    ClassifiedItem,
    DependencyKind,
    PackagesByKind,
)
from sillydeps.core.services.audit.catalog import Catalog

logger = logging.getLogger(__name__)

DEFAULT_SHORT_NAME_THRESHOLD = 12
DEFAULT_OTHER_SUGGESTION = "Check whether this package is really needed"


class ShortNameHeuristic:
    """Flags names at or below ``max_length`` characters as review candidates.

    Short names are a rough proxy for single-purpose utilities.
    """

    def __init__(self, max_length: int = DEFAULT_SHORT_NAME_THRESHOLD):
        self.max_length = max_length

    def __call__(self, name: str) -> bool:
        return len(name) <= self.max_length

    def __repr__(self) -> str:
        return f"ShortNameHeuristic(max_length={self.max_length})"


def _iter_dependencies(
    dep_set: NormalizedDependencySet,
) -> Iterator[tuple[str, DependencyKind, str | None]]:
    """Yield ``(name, kind, via)``, direct dependencies first."""
    for name in dep_set.direct:
        yield name, "direct", None
    for dep in dep_set.indirect:
        yield dep.name, "indirect", dep.parent


class Classifier:
    """Turns a ``NormalizedDependencySet`` into an ``AuditResult``.

    Args:
        candidate: Predicate deciding whether an unmatched name goes to
            ``other``. Defaults to ``ShortNameHeuristic()``.
        other_suggestion: Suggestion text attached to ``other`` items.
    """

    def __init__(
        self,
        candidate: Callable[[str], bool] | None = None,
        other_suggestion: str = DEFAULT_OTHER_SUGGESTION,
    ):
        self.candidate = candidate or ShortNameHeuristic()
        self.other_suggestion = other_suggestion

    def classify(
        self,
        dep_set: NormalizedDependencySet,
        catalog: Catalog,
        category_filter: str | None = None,
    ) -> AuditResult:
        """Classify every dependency, optionally keeping one category.

        With ``category_filter`` set, only items of that category are
        emitted and counted (``"other"`` selects the review candidates).
        """
        by_category: dict[str, list[ClassifiedItem]] = {
            category: [] for category in catalog.categories
        }
        by_category.setdefault(OTHER_CATEGORY, [])
        counts: dict[str, int] = {"direct": 0, "indirect": 0}
        packages: dict[str, list[str]] = {"direct": [], "indirect": []}

        for name, kind, via in _iter_dependencies(dep_set):
            match = catalog.lookup(name)
            if match is not None:
                category, suggestion = match
                if not category_filter or category_filter == category:
                    counts[kind] += 1
                    packages[kind].append(name)
                    by_category[category].append(ClassifiedItem(
                        name=name, category=category, suggestion=suggestion, kind=kind, via=via,
                    ))
                continue

            if (not category_filter or category_filter == OTHER_CATEGORY) and self.candidate(name):
                by_category[OTHER_CATEGORY].append(ClassifiedItem(
                    name=name,
                    category=OTHER_CATEGORY,
                    suggestion=self.other_suggestion,
                    kind=kind,
                    via=via,
                ))

        logger.debug(
            "Classified %d direct / %d indirect matches (filter=%s)",
            counts["direct"], counts["indirect"], category_filter or "none",
        )

        return AuditResult(
            direct_count=counts["direct"],
            indirect_count=counts["indirect"],
            packages_by_kind=PackagesByKind(
                direct=tuple(packages["direct"]),
                indirect=tuple(packages["indirect"]),
            ),
            by_category={category: tuple(items) for category, items in by_category.items()},
        )


def classify(
    dep_set: NormalizedDependencySet,
    catalog: Catalog,
    category_filter: str | None = None,
) -> AuditResult:
    """Classify with the default short-name heuristic and suggestion."""
    return Classifier().classify(dep_set, catalog, category_filter)
