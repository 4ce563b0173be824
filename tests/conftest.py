"""
Shared test fixtures and configuration.
"""

import json
import textwrap
from pathlib import Path

import pytest

from sillydeps.core.services.audit.catalog import Catalog


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    """Keep locale and logging env vars from leaking into tests."""
    for var in ("LANG", "SILLYDEPS_LOG_LEVEL", "SILLYDEPS_LOG_FILE", "SILLYDEPS_LOG_FILE_LEVEL"):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture
def scenario_catalog() -> Catalog:
    """Single-entry catalog used by the reference scenario."""
    return Catalog.load({"padding": {"left-pad": "Use String.prototype.padStart"}})


@pytest.fixture
def scenario_manifest() -> dict:
    return {
        "name": "demo",
        "dependencies": {"left-pad": "^1.3.0"},
        "devDependencies": {"express": "^4.18.0"},
    }


@pytest.fixture
def scenario_tree() -> dict:
    return {
        "name": "demo",
        "dependencies": {
            "left-pad": {"version": "1.3.0"},
            "chalk": {
                "version": "4.0.0",
                "dependencies": {"ansi-styles": {"version": "4.3.0"}},
            },
        },
    }


@pytest.fixture
def npm_project(tmp_path: Path, scenario_manifest: dict, scenario_tree: dict) -> Path:
    """A project dir with package.json, a saved tree, and local settings.

    Settings keep history and cache inside the project so tests never
    touch the real temp-dir cache.
    """
    (tmp_path / "package.json").write_text(json.dumps(scenario_manifest))
    (tmp_path / "npm-ls.json").write_text(json.dumps(scenario_tree))
    (tmp_path / ".sillydeps.yml").write_text(textwrap.dedent("""\
        locale: en
        cache_file: .sillydeps/cache.json
    """))
    return tmp_path
