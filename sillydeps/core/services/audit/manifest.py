"""
Manifest reader: declared dependencies from ``package.json``.

Unlike the tree listing, a manifest failure is fatal: without it there
are no direct dependencies to audit.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path

from sillydeps.core.errors import ManifestError
from sillydeps.core.models.dependency import ManifestDependencies

logger = logging.getLogger(__name__)

MANIFEST_FILE = "package.json"


def read_manifest(path: Path) -> ManifestDependencies:
    """Parse a ``package.json`` into its declared dependency names.

    Raises:
        ManifestError: If the file is missing, unreadable, not JSON, or
            its dependency fields are not objects.
    """
    if not path.is_file():
        raise ManifestError(f"Manifest not found: {path}")

    try:
        raw = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e

    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise ManifestError(f"Invalid JSON in {path}: {e}") from e

    manifest = ManifestDependencies.from_manifest(data)
    logger.info(
        "Read %s: %d dependencies, %d dev dependencies",
        path.name, len(manifest.dependencies), len(manifest.dev_dependencies),
    )
    return manifest
