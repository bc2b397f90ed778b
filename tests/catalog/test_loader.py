"""Tests for catalog loading and store seeding."""

from __future__ import annotations

from pathlib import Path

import pytest
from sqlalchemy import func, select

from bundlevalley.catalog import Catalog, load_catalog, parse_catalog, seed
from bundlevalley.domain.models import Item
from bundlevalley.errors import CatalogError, StorageFailure
from bundlevalley.infrastructure.database.schema import bundles, items
from bundlevalley.infrastructure.store import BundleStore

_SMALL_TOML = """\
[[rooms]]
name = "Pantry"

[[rooms.bundles]]
id = "test"
name = "Test Bundle"
required_items = 2
items = [
    { id = "x", name = "X" },
    { id = "y", name = "Y", quality = "gold" },
]
"""


def _snapshot(store: BundleStore) -> tuple[list[tuple], list[tuple]]:
    with store.engine.connect() as conn:
        b = conn.execute(select(bundles).order_by(bundles.c.id)).fetchall()
        i = conn.execute(select(items).order_by(items.c.id)).fetchall()
    return [tuple(r) for r in b], [tuple(r) for r in i]


class TestLoadCatalog:
    def test_packaged_catalog(self, community_catalog: Catalog) -> None:
        assert [room.name for room in community_catalog.rooms] == [
            "Pantry",
            "Crafts Room",
            "Fish Tank",
            "Boiler Room",
            "Bulletin Board",
            "Vault",
        ]
        assert community_catalog.bundle_count == 30
        assert community_catalog.item_count == 129

    def test_packaged_catalog_quality_items(self, community_catalog: Catalog) -> None:
        qualities = {
            item.id: item.quality
            for _, records in community_catalog.entries()
            for item in records
            if item.quality
        }
        assert qualities == {
            "quality_parsnip": "gold",
            "quality_melon": "gold",
            "quality_pumpkin": "gold",
            "quality_corn": "gold",
        }

    def test_packaged_catalog_has_partial_bundles(self, community_catalog: Catalog) -> None:
        partial = community_catalog.partial_bundles()
        assert "artisan" in partial
        assert "spring_crops" not in partial

    def test_load_from_path(self, tmp_path: Path) -> None:
        path = tmp_path / "catalog.toml"
        path.write_text(_SMALL_TOML, encoding="utf-8")
        catalog = load_catalog(path)
        assert catalog.bundle_count == 1
        assert catalog.item_count == 2

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(CatalogError, match="not found"):
            load_catalog(tmp_path / "absent.toml")

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.toml"
        path.write_text("[[rooms]\nname = ", encoding="utf-8")
        with pytest.raises(CatalogError, match="Invalid TOML"):
            load_catalog(path)


class TestSeed:
    def test_seeds_empty_store(self, store: BundleStore, community_catalog: Catalog) -> None:
        report = seed(store, community_catalog)
        assert report.skipped is False
        assert report.bundles_inserted == 30
        assert report.items_inserted == 129
        stats = store.compute_progress_stats()
        assert stats.total_bundles == 30
        assert stats.total_items == 129
        assert stats.delivered_items == 0

    def test_seed_twice_equals_seed_once(
        self, store: BundleStore, community_catalog: Catalog
    ) -> None:
        seed(store, community_catalog)
        once = _snapshot(store)
        report = seed(store, community_catalog)
        assert report.skipped is True
        assert _snapshot(store) == once

    def test_non_empty_store_untouched(self, store: BundleStore) -> None:
        small = parse_catalog({"rooms": [{"name": "Vault", "bundles": []}]})
        seed(store, load_catalog())
        store.update_item_status("spring_parsnip", "delivered")
        before = _snapshot(store)

        seed(store, small)
        assert _snapshot(store) == before

    def test_seed_keeps_status(self, store: BundleStore, community_catalog: Catalog) -> None:
        seed(store, community_catalog)
        store.update_item_status("fish_eel", "delivered")
        seed(store, community_catalog, repair=True)
        assert store.compute_progress_stats().delivered_items == 1

    def test_repair_fills_partial_seed(
        self, store: BundleStore, community_catalog: Catalog
    ) -> None:
        [(first_bundle, first_items), *_] = community_catalog.entries()
        store.insert_bundle(first_bundle)
        store.insert_item(first_items[0])

        # The emptiness guard sees a non-empty store and skips.
        assert seed(store, community_catalog).skipped is True

        report = seed(store, community_catalog, repair=True)
        assert report.bundles_inserted == 29
        assert report.items_inserted == 128
        assert store.compute_progress_stats().total_items == 129

    def test_reports_partial_bundles(self, store: BundleStore, community_catalog: Catalog) -> None:
        report = seed(store, community_catalog)
        assert set(report.partial_bundles) == set(community_catalog.partial_bundles())

    def test_insert_failure_propagates_without_rollback(
        self, store: BundleStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        catalog = parse_catalog(
            {
                "rooms": [
                    {
                        "name": "Pantry",
                        "bundles": [
                            {
                                "id": "a",
                                "name": "A",
                                "required_items": 1,
                                "items": [{"id": "a1", "name": "A1"}],
                            },
                            {
                                "id": "b",
                                "name": "B",
                                "required_items": 1,
                                "items": [{"id": "b1", "name": "B1"}],
                            },
                        ],
                    }
                ]
            }
        )
        original = store.insert_item

        def failing_insert(item: Item) -> bool:
            if item.id == "b1":
                raise StorageFailure("disk full")
            return original(item)

        monkeypatch.setattr(store, "insert_item", failing_insert)
        with pytest.raises(StorageFailure, match="disk full"):
            seed(store, catalog)

        with store.engine.connect() as conn:
            assert conn.execute(select(func.count()).select_from(items)).scalar_one() == 1
