"""
sillydeps CLI entrypoint.

Usage:
    sillydeps --help
    sillydeps scan
    sillydeps config check
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from sillydeps import __version__
from sillydeps.core.observability.logging_config import configure_cli_logging
from sillydeps.ui.cli.helpers import (
    fail,
    get_settings,
    get_translator,
    resolve_project_root,
)


@click.group()
@click.version_option(version=__version__, prog_name="sillydeps")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Path to .sillydeps.yml (default: auto-detect).",
)
@click.option("--no-color", is_flag=True, help="Disable colored output.")
@click.option("--lang", type=click.Choice(["en", "es"]), default=None, help="Output language.")
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    no_color: bool,
    lang: str | None,
) -> None:
    """sillydeps: find trivial dependencies you could inline."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["lang"] = lang
    if no_color:
        ctx.color = False

    configure_cli_logging(debug=debug, verbose=verbose, quiet=quiet)


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--project-dir", "-d",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)
@click.pass_context
def categories(ctx: click.Context, as_json: bool, project_dir: Path | None) -> None:
    """List catalog categories and how many packages each holds."""
    from sillydeps.core.errors import CatalogLoadError
    from sillydeps.core.use_cases.scan import load_catalog

    project_root = resolve_project_root(project_dir)
    settings = get_settings(ctx, project_root, as_json)
    t = get_translator(ctx, settings)

    try:
        catalog = load_catalog(settings, project_root)
    except CatalogLoadError as e:
        fail(str(e), as_json)

    summary = catalog.categories_summary()
    if as_json:
        click.echo(json.dumps({"categories": summary, "total": len(catalog)}, indent=2))
        return

    click.secho(f"📚 {t('categories.title')} ({len(catalog)})", fg="cyan", bold=True)
    for name, count in summary.items():
        click.echo(f"   {name:<20} {count}")
    click.echo()


@cli.group()
def config() -> None:
    """Settings file commands."""


@config.command("check")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--project-dir", "-d",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)
@click.pass_context
def config_check(ctx: click.Context, as_json: bool, project_dir: Path | None) -> None:
    """Validate .sillydeps.yml and show the effective settings."""
    from sillydeps.core.config.loader import find_settings_file

    project_root = resolve_project_root(project_dir)
    settings = get_settings(ctx, project_root, as_json)
    source = ctx.obj.get("config_path") or find_settings_file(project_root)

    if as_json:
        click.echo(json.dumps({
            "valid": True,
            "path": str(source) if source else None,
            "settings": settings.model_dump(mode="json"),
        }, indent=2))
        return

    click.secho("✅ Settings are valid", fg="green", bold=True)
    click.echo(f"   File: {source or '(defaults)'}")
    for key, value in settings.model_dump(mode="json").items():
        click.echo(f"   {key}: {value}")
    click.echo()


# ── Register commands from sillydeps/ui/cli/ ──────────────────────

from sillydeps.ui.cli.history import history  # noqa: E402
from sillydeps.ui.cli.scan import last, scan  # noqa: E402

cli.add_command(scan)
cli.add_command(last)
cli.add_command(history)


if __name__ == "__main__":
    cli()
