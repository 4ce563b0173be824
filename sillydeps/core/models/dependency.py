"""
Dependency models: what a project declares and what npm installed.

Direct dependencies are bare names taken from the manifest. Indirect
ones carry provenance: the package that pulled them in.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict

from sillydeps.core.errors import ManifestError

# Parent recorded for packages sitting directly under the tree root
ROOT_PARENT = "root"


class ManifestDependencies(BaseModel):
    """Names declared in a manifest's dependency fields.

    Version specs are dropped: only the existence of a declaration
    matters to the audit.
    """

    model_config = ConfigDict(frozen=True)

    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()

    @property
    def direct(self) -> tuple[str, ...]:
        """Merged names, dependencies first, duplicates removed."""
        return tuple(dict.fromkeys(self.dependencies + self.dev_dependencies))

    def is_dev(self, name: str) -> bool:
        """True when the name is declared only as a dev dependency."""
        return name in self.dev_dependencies and name not in self.dependencies

    @classmethod
    def from_manifest(cls, data: Any) -> ManifestDependencies:
        """Build from parsed manifest content (``package.json`` shape).

        Raises:
            ManifestError: If the content or its dependency fields
                are not objects.
        """
        if not isinstance(data, Mapping):
            raise ManifestError(
                f"Expected a JSON object in manifest, got {type(data).__name__}"
            )

        fields: dict[str, tuple[str, ...]] = {}
        for key, attr in (("dependencies", "dependencies"), ("devDependencies", "dev_dependencies")):
            declared = data.get(key)
            if declared is None:
                declared = {}
            if not isinstance(declared, Mapping):
                raise ManifestError(
                    f"Manifest field '{key}' must be an object, got {type(declared).__name__}"
                )
            fields[attr] = tuple(str(name) for name in declared)

        return cls(**fields)


class IndirectDependency(BaseModel):
    """A package installed only because another package needs it."""

    model_config = ConfigDict(frozen=True)

    name: str
    parent: str = ROOT_PARENT
    version: str = ""
    resolved: str | None = None


class NormalizedDependencySet(BaseModel):
    """Direct names plus first-seen indirect dependencies.

    ``direct`` and ``indirect`` never share a name.
    """

    model_config = ConfigDict(frozen=True)

    direct: tuple[str, ...] = ()
    indirect: tuple[IndirectDependency, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def degraded(self) -> bool:
        """True when the installed tree could not be used."""
        return bool(self.warnings)

    def indirect_names(self) -> list[str]:
        return [dep.name for dep in self.indirect]
