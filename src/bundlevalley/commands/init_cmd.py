"""Command: store initialization (named init_cmd to avoid shadowing builtins)."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import click

from bundlevalley.commands._base import BvCommand

if TYPE_CHECKING:
    from bundlevalley.commands._context import AppContext

_INIT_EXAMPLES = """\
  bundlevalley init
  bundlevalley --data-dir ~/.local/share/bundlevalley init
  bundlevalley init --catalog my_catalog.toml
  bundlevalley init --repair"""


@click.command("init", cls=BvCommand, examples=_INIT_EXAMPLES)
@click.option(
    "--catalog",
    "catalog_path",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Seed from this TOML catalog instead of the configured one.",
)
@click.option(
    "--repair",
    is_flag=True,
    help="Re-offer every catalog row to fill in a partially seeded store.",
)
@click.pass_obj
def init_cmd(app: AppContext, catalog_path: Path | None, repair: bool) -> None:
    """Create the store and seed it from the catalog."""
    from bundlevalley.services.catalog import CatalogService

    store = app.open_store(seed=False)
    app.emit(
        CatalogService(store).seed(
            catalog_path=catalog_path or app.settings.catalog_path,
            repair=repair,
        )
    )
