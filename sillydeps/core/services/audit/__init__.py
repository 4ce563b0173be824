"""
Audit engine: dependency resolution and classification.

Public API:
    Catalog.load(source)                    → Catalog
    load_bundled_catalog()                  → Catalog shipped with the package
    read_manifest(path)                     → ManifestDependencies
    DependencyTreeBuilder().build(m, tree)  → NormalizedDependencySet
    Classifier().classify(deps, catalog)    → AuditResult

Pipeline:
    manifest + raw tree → build → classify (+ catalog) → AuditResult
"""

from sillydeps.core.services.audit.catalog import Catalog, load_bundled_catalog
from sillydeps.core.services.audit.classifier import (
    DEFAULT_OTHER_SUGGESTION,
    DEFAULT_SHORT_NAME_THRESHOLD,
    Classifier,
    ShortNameHeuristic,
    classify,
)
from sillydeps.core.services.audit.manifest import read_manifest
from sillydeps.core.services.audit.tree_builder import (
    DependencyTreeBuilder,
    build_dependency_set,
)

__all__ = [
    "DEFAULT_OTHER_SUGGESTION",
    "DEFAULT_SHORT_NAME_THRESHOLD",
    "Catalog",
    "Classifier",
    "DependencyTreeBuilder",
    "ShortNameHeuristic",
    "build_dependency_set",
    "classify",
    "load_bundled_catalog",
    "read_manifest",
]
