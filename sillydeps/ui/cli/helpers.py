"""
Shared helpers for CLI commands: project root, settings, translator.
"""

from __future__ import annotations

import json
import sys
from pathlib import Path
from typing import NoReturn

import click

from sillydeps.core.config.loader import load_settings
from sillydeps.core.errors import ConfigError
from sillydeps.core.i18n import Translator, resolve_locale
from sillydeps.core.models.settings import Settings


def resolve_project_root(project_dir: Path | None = None) -> Path:
    """Project root from ``--project-dir`` or CWD."""
    return (project_dir or Path.cwd()).resolve()


def fail(message: str, as_json: bool = False) -> NoReturn:
    """Print an error (plain or JSON) and exit 1."""
    if as_json:
        click.echo(json.dumps({"error": message}, indent=2, ensure_ascii=False))
    else:
        click.secho(f"❌ {message}", fg="red")
    sys.exit(1)


def get_settings(ctx: click.Context, project_root: Path, as_json: bool = False) -> Settings:
    """Load settings from ``--config`` or by searching up from the project root."""
    try:
        return load_settings(ctx.obj.get("config_path"), start_dir=project_root)
    except ConfigError as e:
        fail(str(e), as_json)


def get_translator(ctx: click.Context, settings: Settings) -> Translator:
    return Translator(resolve_locale(ctx.obj.get("lang"), settings.locale))
