"""Command: overall progress statistics."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bundlevalley.commands._base import BvCommand

if TYPE_CHECKING:
    from bundlevalley.commands._context import AppContext


@click.command(
    cls=BvCommand,
    examples="""\
  bundlevalley stats
  bundlevalley --json stats
  bundlevalley -q stats""",
)
@click.pass_obj
def stats(app: AppContext) -> None:
    """Show delivered/collected counts, completed bundles and percentage."""
    from bundlevalley.services.progress import ProgressService

    app.emit(ProgressService(app.store).get_progress_stats())
