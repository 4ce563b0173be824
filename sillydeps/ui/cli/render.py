"""
Terminal rendering of audit results.

Colors go through ``click.secho`` so ``--no-color`` (or a non-TTY
stdout) strips them without extra handling here.
"""

from __future__ import annotations

import click

from sillydeps.core.i18n import Translator
from sillydeps.core.models.result import AuditResult


def render_result(
    result: AuditResult,
    t: Translator,
    *,
    verbose: bool = False,
    warnings: list[str] | None = None,
) -> None:
    """Print the summary, then each non-empty category with its items."""
    click.secho(f"=== {t('summary.title')} ===", fg="cyan", bold=True)
    click.echo(f"{t('summary.direct')}: {result.direct_count}")
    click.echo(f"{t('summary.indirect')}: {result.indirect_count}")
    click.echo()

    if warnings:
        click.secho(f"⚠️  {t('warnings.treeUnavailable')}", fg="yellow")
        if verbose:
            for warning in warnings:
                click.echo(f"   {warning}")
        click.echo()

    if not result.found:
        click.secho(f"✅ {t('noneFound')}", fg="green")
        click.echo()
        return

    for category, items in result.non_empty_categories().items():
        click.secho(f"{category.upper()} ({len(items)})", fg="yellow", bold=True)
        for item in items:
            click.echo(f"- {item.name}: ", nl=False)
            click.secho(item.suggestion, fg="green")
            if item.kind == "indirect":
                click.secho(f"  ({t('includedBy')}: {item.via})", fg="magenta")
            if verbose:
                color = "blue" if item.kind == "direct" else "magenta"
                click.echo(f"  {t('type.label')}: ", nl=False)
                click.secho(t(f"type.{item.kind}"), fg=color)
        click.echo()
