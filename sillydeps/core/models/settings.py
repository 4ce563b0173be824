"""
Settings model: loaded from an optional ``.sillydeps.yml``.

Every field has a default so a project without a settings file
still scans.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field

from sillydeps.core.persistence.cache import default_cache_path


class Settings(BaseModel):
    """Per-project audit settings."""

    locale: Literal["en", "es"] | None = None
    catalog: str | None = None                 # custom catalog JSON, else bundled
    manifest: str = "package.json"
    npm_command: str = "npm"
    resolver_timeout: int = Field(default=120, gt=0)
    short_name_threshold: int = Field(default=12, ge=0)
    history_file: str = ".sillydeps/history.ndjson"
    cache_file: str | None = None              # None → <tmp>/silly-cache.json
    save_history: bool = True

    def resolve_path(self, value: str, project_root: Path) -> Path:
        """Resolve a settings path against the project root."""
        path = Path(value).expanduser()
        return path if path.is_absolute() else project_root / path

    def manifest_path(self, project_root: Path) -> Path:
        return self.resolve_path(self.manifest, project_root)

    def history_path(self, project_root: Path) -> Path:
        return self.resolve_path(self.history_file, project_root)

    def catalog_path(self, project_root: Path) -> Path | None:
        if not self.catalog:
            return None
        return self.resolve_path(self.catalog, project_root)

    def cache_path(self, project_root: Path) -> Path:
        if not self.cache_file:
            return default_cache_path()
        return self.resolve_path(self.cache_file, project_root)
