"""Catalog loading and one-time seeding of an empty store.

:func:`load_catalog` turns a TOML payload into a validated
:class:`~bundlevalley.catalog.models.Catalog`.  :func:`seed` pushes it
into a :class:`~bundlevalley.infrastructure.store.BundleStore` through
the store's insert-or-ignore operations.

Seeding is not transactional: a failure part-way through leaves the
rows inserted so far.  Because every insert ignores existing keys,
``seed(..., repair=True)`` re-offers the whole catalog and fills in
only what is missing.
"""

from __future__ import annotations

import logging
import tomllib
from importlib import resources
from pathlib import Path
from typing import TYPE_CHECKING, Any

from pydantic import ValidationError

from bundlevalley.catalog.models import Catalog
from bundlevalley.domain.models import SeedReport
from bundlevalley.errors import CatalogError

if TYPE_CHECKING:
    from bundlevalley.infrastructure.store import BundleStore

logger = logging.getLogger(__name__)

DEFAULT_CATALOG = "community_center.toml"


def parse_catalog(data: dict[str, Any]) -> Catalog:
    """Validate a decoded catalog mapping.

    Raises:
        CatalogError: If the payload violates the catalog schema.
    """
    try:
        return Catalog.model_validate(data)
    except ValidationError as exc:
        msg = f"Invalid catalog: {exc}"
        raise CatalogError(msg) from exc


def load_catalog(path: Path | None = None) -> Catalog:
    """Load a catalog from *path*, or the packaged Community Center catalog.

    Raises:
        CatalogError: If the file is missing, is not valid TOML, or fails
            schema validation.
    """
    if path is None:
        raw = resources.files("bundlevalley.catalog").joinpath(DEFAULT_CATALOG).read_text(
            encoding="utf-8"
        )
        source = DEFAULT_CATALOG
    else:
        if not path.is_file():
            raise CatalogError(f"Catalog file not found: {path}")
        raw = path.read_text(encoding="utf-8")
        source = str(path)

    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError as exc:
        msg = f"Invalid TOML in {source}: {exc}"
        raise CatalogError(msg) from exc

    catalog = parse_catalog(data)
    logger.debug(
        "Loaded catalog %s: %d bundles, %d items",
        source,
        catalog.bundle_count,
        catalog.item_count,
    )
    return catalog


def seed(store: BundleStore, catalog: Catalog, *, repair: bool = False) -> SeedReport:
    """Populate *store* with every bundle and item in *catalog*.

    A store that already holds bundles is left untouched unless
    *repair* is set.  Insert errors propagate as ``StorageFailure``
    with no rollback of rows already written.
    """
    if not repair and store.list_bundles():
        logger.info("Store already seeded, skipping")
        return SeedReport(skipped=True)

    bundles_inserted = 0
    items_inserted = 0
    for bundle, bundle_items in catalog.entries():
        bundles_inserted += store.insert_bundle(bundle)
        for item in bundle_items:
            items_inserted += store.insert_item(item)

    partial = catalog.partial_bundles()
    for key in partial:
        # Completion still requires every listed item to be delivered.
        logger.debug("Bundle %s requires fewer items than it lists", key)

    logger.info(
        "Seeded store: %d bundles, %d items inserted",
        bundles_inserted,
        items_inserted,
    )
    return SeedReport(
        bundles_inserted=bundles_inserted,
        items_inserted=items_inserted,
        partial_bundles=partial,
    )
