"""Command: list rooms."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bundlevalley.commands._base import BvCommand

if TYPE_CHECKING:
    from bundlevalley.commands._context import AppContext


@click.command(
    cls=BvCommand,
    examples="""\
  bundlevalley rooms
  bundlevalley -q rooms""",
)
@click.pass_obj
def rooms(app: AppContext) -> None:
    """List the rooms bundles are grouped under."""
    from bundlevalley.services.progress import ProgressService

    app.emit(ProgressService(app.store).list_rooms())
