"""
CLI commands for scanning: ``scan`` and ``last``.

Thin wrappers over ``sillydeps.core.use_cases.scan``.

Usage::

    sillydeps scan
    sillydeps scan --category padding --json
    sillydeps scan --tree-file npm-ls.json --out report.json
    sillydeps last
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from sillydeps.ui.cli.helpers import (
    fail,
    get_settings,
    get_translator,
    resolve_project_root,
)
from sillydeps.ui.cli.render import render_result


@click.command()
@click.option("--category", default=None, help="Only report this category (or 'other').")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--out", "out_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Also write the result as JSON to this file.",
)
@click.option(
    "--tree-file",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    default=None,
    help="Use saved 'npm ls --json --all' output instead of running npm.",
)
@click.option(
    "--project-dir", "-d",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)
@click.option("--no-save", is_flag=True, help="Don't record the scan in history or cache.")
@click.pass_context
def scan(
    ctx: click.Context,
    category: str | None,
    as_json: bool,
    out_file: Path | None,
    tree_file: Path | None,
    project_dir: Path | None,
    no_save: bool,
) -> None:
    """Find trivial dependencies that could be inlined.

    Examples:

        sillydeps scan

        sillydeps scan --category padding

        sillydeps scan --tree-file npm-ls.json --json
    """
    from sillydeps.core.errors import CatalogLoadError
    from sillydeps.core.models.result import OTHER_CATEGORY
    from sillydeps.core.use_cases.scan import is_known_category, load_catalog, run_scan

    project_root = resolve_project_root(project_dir)
    settings = get_settings(ctx, project_root, as_json)
    t = get_translator(ctx, settings)

    manifest_path = settings.manifest_path(project_root)
    if not manifest_path.is_file():
        fail(t("errors.noPackage", path=project_root), as_json)

    try:
        catalog = load_catalog(settings, project_root)
    except CatalogLoadError as e:
        fail(str(e), as_json)

    if category and not is_known_category(category, catalog):
        valid = ", ".join([*catalog.categories, OTHER_CATEGORY])
        fail(t("categories.unknown", name=category, valid=valid), as_json)

    result = run_scan(
        project_root,
        settings,
        category=category,
        tree_file=tree_file,
        save=not no_save,
        catalog=catalog,
        other_suggestion=t("checkIfNeeded"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
        if result.error:
            sys.exit(1)
    elif result.error:
        fail(result.error)
    else:
        assert result.result is not None
        render_result(
            result.result,
            t,
            verbose=ctx.obj.get("verbose", False),
            warnings=result.warnings,
        )

    if out_file and result.result is not None:
        try:
            out_file.write_text(
                json.dumps(result.result.to_dict(), indent=2, ensure_ascii=False) + "\n",
                encoding="utf-8",
            )
        except OSError as e:
            fail(f"Cannot write {out_file}: {e}", as_json)
        if not as_json:
            click.secho(f"✔ {t('results.savedTo')} {out_file}", fg="green")


@click.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--project-dir", "-d",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)
@click.pass_context
def last(ctx: click.Context, as_json: bool, project_dir: Path | None) -> None:
    """Show the result of the last saved scan."""
    from pydantic import ValidationError

    from sillydeps.core.models.result import AuditResult
    from sillydeps.core.persistence.cache import load_cached_result

    project_root = resolve_project_root(project_dir)
    settings = get_settings(ctx, project_root, as_json)
    t = get_translator(ctx, settings)

    data = load_cached_result(settings.cache_path(project_root))
    if data is None:
        fail(t("last.empty"), as_json)

    if as_json:
        click.echo(json.dumps(data, indent=2, ensure_ascii=False))
        return

    try:
        cached = AuditResult.from_dict(data)
    except ValidationError:
        fail(t("last.empty"))
    render_result(cached, t, verbose=ctx.obj.get("verbose", False))
