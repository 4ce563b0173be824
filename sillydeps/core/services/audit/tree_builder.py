"""
Dependency tree builder: normalize declared + installed dependencies.

Input is the manifest and the raw tree printed by ``npm ls --json --all``::

    {"dependencies": {"chalk": {"version": "4.0.0",
                                "dependencies": {"ansi-styles": {...}}}}}

Output is a ``NormalizedDependencySet``: direct names from the manifest,
plus each other installed package once, tagged with the package that
pulled it in first (depth-first order).

An unusable tree never raises. The set comes back with no indirect
dependencies and a warning, so the audit still covers direct ones.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sillydeps.core.models.dependency import (
    ROOT_PARENT,
    IndirectDependency,
    ManifestDependencies,
    NormalizedDependencySet,
)

logger = logging.getLogger(__name__)

TREE_UNAVAILABLE = "Resolved dependency tree unavailable"


def _root_dependencies(raw_tree: Any) -> tuple[Mapping[str, Any], str | None]:
    """Extract the root ``dependencies`` mapping, or a warning."""
    if raw_tree is None:
        return {}, f"{TREE_UNAVAILABLE}: no tree supplied"
    if not isinstance(raw_tree, Mapping):
        return {}, f"{TREE_UNAVAILABLE}: expected an object, got {type(raw_tree).__name__}"

    deps = raw_tree.get("dependencies")
    if deps is None:
        # npm omits the key for projects with nothing installed
        return {}, None
    if not isinstance(deps, Mapping):
        return {}, (
            f"{TREE_UNAVAILABLE}: 'dependencies' must be an object, "
            f"got {type(deps).__name__}"
        )
    return deps, None


class DependencyTreeBuilder:
    """Builds the direct/indirect dependency set for one audit."""

    def build(
        self,
        manifest: ManifestDependencies | Mapping[str, Any],
        raw_tree: Any,
    ) -> NormalizedDependencySet:
        """Compute direct names and first-seen indirect dependencies.

        Args:
            manifest: Parsed manifest, or raw ``package.json`` content.
            raw_tree: Parsed tree listing; ``None`` or malformed data
                degrades to an empty tree.

        Raises:
            ManifestError: If ``manifest`` is raw content that is malformed.
        """
        if not isinstance(manifest, ManifestDependencies):
            manifest = ManifestDependencies.from_manifest(manifest)

        direct = manifest.direct
        root_deps, warning = _root_dependencies(raw_tree)
        if warning:
            logger.warning("%s; auditing direct dependencies only", warning)

        indirect = self._walk(root_deps, frozenset(direct))
        logger.debug("Built dependency set: %d direct, %d indirect", len(direct), len(indirect))

        return NormalizedDependencySet(
            direct=direct,
            indirect=tuple(indirect),
            warnings=(warning,) if warning else (),
        )

    @staticmethod
    def _walk(
        root_deps: Mapping[str, Any],
        direct: frozenset[str],
    ) -> list[IndirectDependency]:
        """Depth-first pre-order walk over the tree with an explicit stack.

        Each ``dependencies`` mapping is expanded once, so shared or
        self-referencing structures cannot loop.
        """
        indirect: list[IndirectDependency] = []
        recorded: set[str] = set()
        expanded: set[int] = {id(root_deps)}

        # Reversed pushes keep declaration order when popping
        stack: list[tuple[str, Any, str]] = [
            (name, node, ROOT_PARENT) for name, node in reversed(list(root_deps.items()))
        ]

        while stack:
            name, node, parent = stack.pop()
            if not isinstance(name, str) or not isinstance(node, Mapping):
                logger.debug("Skipping malformed tree node '%s' under '%s'", name, parent)
                continue

            if name not in direct and name not in recorded:
                recorded.add(name)
                version = node.get("version")
                resolved = node.get("resolved")
                indirect.append(IndirectDependency(
                    name=name,
                    parent=parent,
                    version=str(version) if version is not None else "",
                    resolved=str(resolved) if resolved is not None else None,
                ))

            children = node.get("dependencies")
            if isinstance(children, Mapping) and children and id(children) not in expanded:
                expanded.add(id(children))
                stack.extend(
                    (child, child_node, name)
                    for child, child_node in reversed(list(children.items()))
                )

        return indirect


def build_dependency_set(
    manifest: ManifestDependencies | Mapping[str, Any],
    raw_tree: Any,
) -> NormalizedDependencySet:
    """Convenience wrapper around ``DependencyTreeBuilder().build``."""
    return DependencyTreeBuilder().build(manifest, raw_tree)
