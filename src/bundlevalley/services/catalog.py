"""CatalogService — seeding the store from a catalog payload."""

from __future__ import annotations

from typing import TYPE_CHECKING

from bundlevalley.catalog.loader import load_catalog, seed
from bundlevalley.errors import CatalogError, StorageFailure
from bundlevalley.services.base import BaseService
from bundlevalley.services.result import ServiceResult

if TYPE_CHECKING:
    from pathlib import Path


class CatalogService(BaseService):
    """Loads a catalog and seeds the store with it."""

    def seed(self, *, catalog_path: Path | None = None, repair: bool = False) -> ServiceResult:
        """Seed the store once; ``repair`` re-offers every row to heal a partial seed.

        A store that already holds bundles is reported as ``skipped``
        unless *repair* is set.
        """
        op = "seed"
        try:
            catalog = load_catalog(catalog_path)
        except CatalogError as exc:
            return ServiceResult.failure(
                op,
                "INVALID_CATALOG",
                str(exc),
                path=str(catalog_path) if catalog_path else None,
            )

        try:
            report = seed(self._store, catalog, repair=repair)
        except StorageFailure as exc:
            return self._storage_failure(op, exc)

        self._log.info(
            "catalog_seeded",
            skipped=report.skipped,
            bundles_inserted=report.bundles_inserted,
            items_inserted=report.items_inserted,
        )
        data = report.model_dump()
        data["catalog_bundles"] = catalog.bundle_count
        data["catalog_items"] = catalog.item_count
        return ServiceResult(ok=True, op=op, data=data)
