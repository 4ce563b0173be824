"""
Error taxonomy for the audit pipeline.

Catalog, manifest and config failures are fatal to a scan.
``ResolvedTreeUnavailable`` is the one recoverable failure: the scan
continues with direct dependencies only.
"""

from __future__ import annotations


class SillyDepsError(Exception):
    """Base class for every error raised by sillydeps."""


class CatalogLoadError(SillyDepsError):
    """Raised when the catalog source is missing or malformed."""


class ManifestError(SillyDepsError):
    """Raised when the project manifest is missing, unreadable or malformed."""


class ResolvedTreeUnavailable(SillyDepsError):
    """Raised when the installed dependency tree cannot be obtained."""


class ConfigError(SillyDepsError):
    """Raised when the settings file is invalid."""
