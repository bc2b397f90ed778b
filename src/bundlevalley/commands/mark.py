"""Command: set an item's delivery status."""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bundlevalley.commands._base import BvCommand

if TYPE_CHECKING:
    from bundlevalley.commands._context import AppContext


@click.command(
    cls=BvCommand,
    examples="""\
  bundlevalley mark spring_parsnip collected
  bundlevalley mark spring_parsnip delivered
  bundlevalley --json mark quality_melon missing""",
)
@click.argument("item_id")
@click.argument("status")
@click.pass_obj
def mark(app: AppContext, item_id: str, status: str) -> None:
    """Set ITEM_ID to STATUS (missing, collected or delivered)."""
    from bundlevalley.services.progress import ProgressService

    # STATUS is validated by the store so a bad value yields INVALID_INPUT.
    app.emit(ProgressService(app.store).update_item_status(item_id, status))
