"""
Domain models: Pydantic types for the audit pipeline.

All models are re-exported here for convenient access:

    from sillydeps.core.models import AuditResult, IndirectDependency, Settings
"""

from sillydeps.core.models.dependency import (
    ROOT_PARENT,
    IndirectDependency,
    ManifestDependencies,
    NormalizedDependencySet,
)
from sillydeps.core.models.result import (
    OTHER_CATEGORY,
    AuditResult,
    ClassifiedItem,
    PackagesByKind,
)
from sillydeps.core.models.settings import Settings

__all__ = [
    # dependency.py
    "ROOT_PARENT",
    "IndirectDependency",
    "ManifestDependencies",
    "NormalizedDependencySet",
    # result.py
    "OTHER_CATEGORY",
    "AuditResult",
    "ClassifiedItem",
    "PackagesByKind",
    # settings.py
    "Settings",
]
