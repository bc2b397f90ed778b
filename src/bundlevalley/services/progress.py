"""ProgressService — the read/update surface used by the command layer.

Wraps the three external operations of the store (full catalog read,
status update, progress statistics) plus room-level views.
"""

from __future__ import annotations

from typing import Any

from bundlevalley.domain.models import Bundle
from bundlevalley.errors import InvalidInputError, StorageFailure
from bundlevalley.services.base import BaseService
from bundlevalley.services.result import ServiceResult


def _bundle_payload(bundle: Bundle) -> dict[str, Any]:
    payload = bundle.model_dump(mode="json", exclude_none=True)
    payload["delivered_count"] = bundle.delivered_count
    payload["complete"] = bundle.is_complete
    return payload


class ProgressService(BaseService):
    """Lists bundles, updates item status and reports progress."""

    def list_bundles(self, *, room: str | None = None) -> ServiceResult:
        """All bundles with items, optionally restricted to one *room*."""
        op = "list_bundles"
        try:
            bundles = self._store.list_bundles_with_items()
        except StorageFailure as exc:
            return self._storage_failure(op, exc)

        if room is not None:
            bundles = [b for b in bundles if b.room == room]
            if not bundles:
                return ServiceResult.failure(op, "NOT_FOUND", f"No bundles in room: {room}")

        return ServiceResult(
            ok=True,
            op=op,
            data={
                "bundles": [_bundle_payload(b) for b in bundles],
                "count": len(bundles),
            },
        )

    def list_rooms(self) -> ServiceResult:
        """Distinct rooms in display order."""
        op = "list_rooms"
        try:
            bundles = self._store.list_bundles()
        except StorageFailure as exc:
            return self._storage_failure(op, exc)

        rooms: list[str] = []
        for bundle in bundles:
            if bundle.room not in rooms:
                rooms.append(bundle.room)
        return ServiceResult(ok=True, op=op, data={"rooms": rooms, "count": len(rooms)})

    def update_item_status(self, item_id: str, status: str) -> ServiceResult:
        """Set *item_id* to *status*.  An unknown item is a successful no-op."""
        op = "update_item_status"
        try:
            matched = self._store.update_item_status(item_id, status)
        except InvalidInputError as exc:
            return ServiceResult.failure(op, "INVALID_INPUT", str(exc), status=status)
        except StorageFailure as exc:
            return self._storage_failure(op, exc)

        warnings: list[str] = []
        if matched:
            self._log.info("item_status_updated", item_id=item_id, status=status)
        else:
            warnings.append(f"No item with ID {item_id}; nothing changed")

        return ServiceResult(
            ok=True,
            op=op,
            data={"id": item_id, "status": status, "matched": matched},
            warnings=warnings,
        )

    def get_progress_stats(self) -> ServiceResult:
        """Aggregate counts and completion percentage, recomputed now."""
        op = "progress_stats"
        try:
            stats = self._store.compute_progress_stats()
        except StorageFailure as exc:
            return self._storage_failure(op, exc)
        return ServiceResult(ok=True, op=op, data=stats.model_dump())
