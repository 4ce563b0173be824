"""
Scan use case: run one audit from settings to result.

Wires the audit engine to its collaborators:

    settings → catalog → manifest → npm tree → build → classify
             → history + cache sinks → ScanResult

Catalog and manifest failures stop the scan with ``ScanResult.error``.
A missing tree only degrades it (direct dependencies only) and is
reported in ``ScanResult.warnings``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from sillydeps.core.errors import (
    CatalogLoadError,
    ManifestError,
    ResolvedTreeUnavailable,
)
from sillydeps.core.models.dependency import ManifestDependencies, NormalizedDependencySet
from sillydeps.core.models.result import OTHER_CATEGORY, AuditResult
from sillydeps.core.models.settings import Settings
from sillydeps.core.persistence.cache import save_cached_result
from sillydeps.core.persistence.history import HistoryEntry, HistoryWriter
from sillydeps.core.services.audit import (
    DEFAULT_OTHER_SUGGESTION,
    Catalog,
    Classifier,
    DependencyTreeBuilder,
    ShortNameHeuristic,
    load_bundled_catalog,
    read_manifest,
)
from sillydeps.core.services.npm_tree import NpmTreeResolver, load_tree_file

logger = logging.getLogger(__name__)


@dataclass
class ScanResult:
    """Outcome of one scan."""

    result: AuditResult | None = None
    dependency_set: NormalizedDependencySet | None = None
    manifest: ManifestDependencies | None = None
    project_root: Path | None = None
    category: str | None = None
    warnings: list[str] = field(default_factory=list)
    error: str | None = None
    history_saved: bool = False
    cache_saved: bool = False

    @property
    def degraded(self) -> bool:
        return bool(self.dependency_set and self.dependency_set.degraded)

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        if self.error:
            return {"error": self.error}

        data: dict[str, Any] = {
            "project_root": str(self.project_root) if self.project_root else "",
            "category": self.category,
            "degraded": self.degraded,
            "warnings": list(self.warnings),
        }
        if self.dependency_set:
            data["dependencies"] = {
                "direct": len(self.dependency_set.direct),
                "indirect": len(self.dependency_set.indirect),
            }
        if self.result:
            data["result"] = self.result.to_dict()
        return data


def load_catalog(settings: Settings, project_root: Path) -> Catalog:
    """Custom catalog from settings, else the bundled one.

    Raises:
        CatalogLoadError: If the catalog is missing or malformed.
    """
    path = settings.catalog_path(project_root)
    if path is None:
        return load_bundled_catalog()
    return Catalog.from_file(path)


def is_known_category(category: str, catalog: Catalog) -> bool:
    return category == OTHER_CATEGORY or category in catalog.categories


def _save(scan: ScanResult, settings: Settings, project_root: Path) -> None:
    """Record the scan in history and the last-result cache."""
    assert scan.result is not None

    writer = HistoryWriter(path=settings.history_path(project_root))
    scan.history_saved = writer.write(HistoryEntry(
        project=project_root.name,
        direct=scan.result.direct_count,
        indirect=scan.result.indirect_count,
        category=scan.category,
        degraded=scan.degraded,
    ))

    cache_path = settings.cache_path(project_root)
    try:
        save_cached_result(scan.result.to_dict(), cache_path)
        scan.cache_saved = True
    except OSError as e:
        logger.warning("Could not cache result to %s: %s", cache_path, e)


def run_scan(
    project_root: Path,
    settings: Settings | None = None,
    *,
    category: str | None = None,
    tree_file: Path | None = None,
    save: bool = True,
    catalog: Catalog | None = None,
    resolver: NpmTreeResolver | None = None,
    other_suggestion: str = DEFAULT_OTHER_SUGGESTION,
) -> ScanResult:
    """Audit a project's dependencies.

    Args:
        project_root: Directory holding the manifest.
        settings: Loaded settings (defaults if None).
        category: Restrict the result to one category.
        tree_file: Pre-computed ``npm ls --json`` output to use instead
            of running npm.
        save: Record the scan in history and the cache.
        catalog: Catalog to classify against (else from settings).
        resolver: Tree resolver (else npm per settings).
        other_suggestion: Text attached to ``other`` items.

    Returns:
        ScanResult with the audit result, or ``error`` set.
    """
    settings = settings or Settings()
    scan = ScanResult(project_root=project_root, category=category or None)

    try:
        if catalog is None:
            catalog = load_catalog(settings, project_root)
        manifest = read_manifest(settings.manifest_path(project_root))
    except (CatalogLoadError, ManifestError) as e:
        logger.error("Scan aborted: %s", e)
        scan.error = str(e)
        return scan
    scan.manifest = manifest

    tree: dict | None
    try:
        if tree_file is not None:
            tree = load_tree_file(tree_file)
        else:
            resolver = resolver or NpmTreeResolver(
                npm_command=settings.npm_command,
                timeout=settings.resolver_timeout,
            )
            tree = resolver.resolve(project_root)
    except ResolvedTreeUnavailable as e:
        logger.warning("Dependency tree unavailable: %s", e)
        scan.warnings.append(str(e))
        tree = None

    dep_set = DependencyTreeBuilder().build(manifest, tree)
    if tree is not None:
        scan.warnings.extend(dep_set.warnings)
    scan.dependency_set = dep_set

    classifier = Classifier(
        candidate=ShortNameHeuristic(settings.short_name_threshold),
        other_suggestion=other_suggestion,
    )
    scan.result = classifier.classify(dep_set, catalog, scan.category)
    logger.info(
        "Scan of %s: %d direct, %d indirect silly dependencies",
        project_root.name, scan.result.direct_count, scan.result.indirect_count,
    )

    if save and settings.save_history:
        _save(scan, settings, project_root)

    return scan
