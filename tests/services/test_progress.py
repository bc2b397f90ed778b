"""Tests for ProgressService."""

from __future__ import annotations

import pytest

from bundlevalley.errors import StorageFailure
from bundlevalley.infrastructure.store import BundleStore
from bundlevalley.services.progress import ProgressService


class TestListBundles:
    def test_all_bundles(self, seeded_store: BundleStore) -> None:
        result = ProgressService(seeded_store).list_bundles()
        assert result.ok
        assert result.op == "list_bundles"
        assert result.data["count"] == 30
        first = result.data["bundles"][0]
        assert {"id", "name", "room", "required_items", "items"} <= set(first)
        assert first["delivered_count"] == 0
        assert first["complete"] is False

    def test_room_filter(self, seeded_store: BundleStore) -> None:
        result = ProgressService(seeded_store).list_bundles(room="Vault")
        assert result.ok
        assert result.data["count"] == 4
        assert {b["room"] for b in result.data["bundles"]} == {"Vault"}

    def test_unknown_room(self, seeded_store: BundleStore) -> None:
        result = ProgressService(seeded_store).list_bundles(room="Attic")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "NOT_FOUND"

    def test_complete_flag_follows_items(self, seeded_store: BundleStore) -> None:
        service = ProgressService(seeded_store)
        bundle = service.list_bundles(room="Vault").data["bundles"][0]
        for item in bundle["items"]:
            service.update_item_status(item["id"], "delivered")

        refreshed = {
            b["id"]: b for b in service.list_bundles(room="Vault").data["bundles"]
        }[bundle["id"]]
        assert refreshed["complete"] is True
        assert refreshed["delivered_count"] == len(bundle["items"])

    def test_storage_failure(
        self, seeded_store: BundleStore, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        def boom() -> None:
            raise StorageFailure("database is locked")

        monkeypatch.setattr(seeded_store, "list_bundles_with_items", boom)
        result = ProgressService(seeded_store).list_bundles()
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "STORAGE_FAILURE"
        assert "database is locked" in result.error.message


class TestListRooms:
    def test_rooms_in_display_order(self, seeded_store: BundleStore) -> None:
        result = ProgressService(seeded_store).list_rooms()
        assert result.ok
        assert result.data["rooms"] == sorted(result.data["rooms"])
        assert result.data["count"] == 6
        assert "Bulletin Board" in result.data["rooms"]

    def test_empty_store(self, store: BundleStore) -> None:
        result = ProgressService(store).list_rooms()
        assert result.data == {"rooms": [], "count": 0}


class TestUpdateItemStatus:
    def test_update(self, seeded_store: BundleStore) -> None:
        result = ProgressService(seeded_store).update_item_status("spring_parsnip", "collected")
        assert result.ok
        assert result.data == {"id": "spring_parsnip", "status": "collected", "matched": True}
        assert result.warnings == []

    def test_invalid_status(self, seeded_store: BundleStore) -> None:
        result = ProgressService(seeded_store).update_item_status("spring_parsnip", "lost")
        assert not result.ok
        assert result.error is not None
        assert result.error.code == "INVALID_INPUT"
        assert result.error.detail == {"status": "lost"}

    def test_unknown_item_warns(self, seeded_store: BundleStore) -> None:
        result = ProgressService(seeded_store).update_item_status("nope", "delivered")
        assert result.ok
        assert result.data["matched"] is False
        assert result.warnings == ["No item with ID nope; nothing changed"]


class TestProgressStats:
    def test_fresh_catalog(self, seeded_store: BundleStore) -> None:
        result = ProgressService(seeded_store).get_progress_stats()
        assert result.ok
        assert result.op == "progress_stats"
        assert result.data == {
            "total_items": 129,
            "collected_items": 0,
            "delivered_items": 0,
            "progress_percentage": 0.0,
            "bundles_completed": 0,
            "total_bundles": 30,
        }

    def test_after_delivery(self, seeded_store: BundleStore) -> None:
        service = ProgressService(seeded_store)
        service.update_item_status("spring_parsnip", "delivered")
        data = service.get_progress_stats().data
        assert data["delivered_items"] == 1
        assert data["progress_percentage"] == pytest.approx(100 / 129)
