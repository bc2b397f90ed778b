"""Command: list bundles with their items and live status."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bundlevalley.commands._base import BvCommand

if TYPE_CHECKING:
    from bundlevalley.commands._context import AppContext


@click.command(
    cls=BvCommand,
    examples="""\
  bundlevalley bundles
  bundlevalley bundles --room Pantry
  bundlevalley --json bundles --room "Fish Tank"
  bundlevalley -q bundles""",
)
@click.option("--room", default=None, help="Only show bundles in this room.")
@click.pass_obj
def bundles(app: AppContext, room: str | None) -> None:
    """List bundles with their items, ordered by room and name."""
    from bundlevalley.services.progress import ProgressService

    app.emit(ProgressService(app.store).list_bundles(room=room))
