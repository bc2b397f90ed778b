"""Pydantic models for the catalog payload.

The catalog is pure data: rooms own bundles, bundles own items.  It
carries no behavior beyond validation and flattening into the
:class:`~bundlevalley.domain.models.Bundle` / ``Item`` records the store
inserts.
"""

from __future__ import annotations

from collections.abc import Iterator

from pydantic import BaseModel, Field, model_validator

from bundlevalley.domain.models import Bundle, Item


class CatalogItem(BaseModel):
    """One item entry inside a catalog bundle."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    quality: str | None = None


class CatalogBundle(BaseModel):
    """One bundle entry: its key, display name, required count and items."""

    model_config = {"frozen": True, "extra": "forbid"}

    id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    required_items: int = Field(ge=1)
    items: list[CatalogItem] = Field(min_length=1)

    @model_validator(mode="after")
    def _required_within_items(self) -> CatalogBundle:
        if self.required_items > len(self.items):
            msg = (
                f"Bundle {self.id!r} requires {self.required_items} items "
                f"but lists only {len(self.items)}"
            )
            raise ValueError(msg)
        return self


class CatalogRoom(BaseModel):
    """A room grouping bundles under a display label."""

    model_config = {"frozen": True, "extra": "forbid"}

    name: str = Field(min_length=1)
    bundles: list[CatalogBundle] = Field(default_factory=list)


class Catalog(BaseModel):
    """The complete room/bundle/item definition used to seed a store."""

    model_config = {"frozen": True, "extra": "forbid"}

    rooms: list[CatalogRoom] = Field(default_factory=list)

    @model_validator(mode="after")
    def _unique_keys(self) -> Catalog:
        seen_bundles: set[str] = set()
        seen_items: set[str] = set()
        for room in self.rooms:
            for bundle in room.bundles:
                if bundle.id in seen_bundles:
                    raise ValueError(f"Duplicate bundle key: {bundle.id!r}")
                seen_bundles.add(bundle.id)
                for item in bundle.items:
                    if item.id in seen_items:
                        raise ValueError(f"Duplicate item key: {item.id!r}")
                    seen_items.add(item.id)
        return self

    def entries(self) -> Iterator[tuple[Bundle, list[Item]]]:
        """Yield each bundle record with its item records, grouped by room.

        Items start as ``missing``; bundles come back without ``items``
        populated, ready for ``BundleStore.insert_bundle``.
        """
        for room in self.rooms:
            for entry in room.bundles:
                bundle = Bundle(
                    id=entry.id,
                    name=entry.name,
                    room=room.name,
                    required_items=entry.required_items,
                )
                records = [
                    Item(id=item.id, bundle_id=entry.id, name=item.name, quality=item.quality)
                    for item in entry.items
                ]
                yield bundle, records

    def partial_bundles(self) -> list[str]:
        """Keys of bundles completable with a strict subset of their items."""
        return [
            entry.id
            for room in self.rooms
            for entry in room.bundles
            if entry.required_items < len(entry.items)
        ]

    @property
    def bundle_count(self) -> int:
        return sum(len(room.bundles) for room in self.rooms)

    @property
    def item_count(self) -> int:
        return sum(len(entry.items) for room in self.rooms for entry in room.bundles)
