"""
CLI command for the scan history ledger.

Thin wrapper over ``sillydeps.core.persistence.history``.
"""

from __future__ import annotations

import json
from pathlib import Path

import click

from sillydeps.ui.cli.helpers import get_settings, get_translator, resolve_project_root


@click.command()
@click.option("--limit", "-n", default=20, show_default=True, help="Number of entries to show.")
@click.option("--clear", is_flag=True, help="Delete the history file.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.option(
    "--project-dir", "-d",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project directory (default: current directory).",
)
@click.pass_context
def history(
    ctx: click.Context,
    limit: int,
    clear: bool,
    as_json: bool,
    project_dir: Path | None,
) -> None:
    """Show recent scans recorded for this project."""
    from sillydeps.core.persistence.history import HistoryWriter

    project_root = resolve_project_root(project_dir)
    settings = get_settings(ctx, project_root, as_json)
    t = get_translator(ctx, settings)
    writer = HistoryWriter(path=settings.history_path(project_root))

    if clear:
        writer.clear()
        if as_json:
            click.echo(json.dumps({"cleared": True, "path": str(writer.path)}, indent=2))
        else:
            click.secho(f"✔ {t('history.cleared')}", fg="green")
        return

    entries = writer.read_recent(limit)

    if as_json:
        click.echo(json.dumps(
            {
                "entries": [e.model_dump(mode="json") for e in entries],
                "total": writer.entry_count(),
            },
            indent=2,
        ))
        return

    if not entries:
        click.secho(t("history.empty"), fg="yellow")
        return

    click.secho(f"📜 {t('history.title')} ({len(entries)}/{writer.entry_count()})", fg="cyan", bold=True)
    for entry in reversed(entries):
        category = f" [{entry.category}]" if entry.category else ""
        degraded = " ⚠️" if entry.degraded else ""
        click.echo(
            f"   {entry.timestamp}  "
            f"{t('summary.direct')}: {entry.direct:<4} "
            f"{t('summary.indirect')}: {entry.indirect:<4}{category}{degraded}"
        )
    click.echo()
