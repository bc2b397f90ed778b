"""Bundle, Item, and ProgressStats value objects.

Bundles and items mirror the persisted rows.  ``ProgressStats`` is
derived on every query and never stored.
"""

from __future__ import annotations

from pydantic import BaseModel, Field

from bundlevalley.domain.types import ItemStatus


class Item(BaseModel):
    """A single trackable object belonging to one bundle."""

    model_config = {"frozen": True}

    id: str
    bundle_id: str
    name: str
    status: ItemStatus = ItemStatus.MISSING
    quality: str | None = None


class Bundle(BaseModel):
    """A named collection of items tied to a room.

    ``items`` is None when the bundle was listed without its items
    (see ``BundleStore.list_bundles``).
    """

    model_config = {"frozen": True}

    id: str
    name: str
    room: str
    required_items: int
    items: list[Item] | None = None

    @property
    def delivered_count(self) -> int:
        """Number of populated items with status ``delivered``."""
        return sum(1 for item in self.items or [] if item.status == ItemStatus.DELIVERED)

    @property
    def is_partial(self) -> bool:
        """True when fewer items are required than are listed ("pick N of M")."""
        return self.items is not None and self.required_items < len(self.items)

    @property
    def is_complete(self) -> bool:
        """All-delivered rule: at least one item and every item delivered.

        Matches the aggregation in ``BundleStore.compute_progress_stats``;
        ``required_items`` is deliberately not consulted.
        """
        if not self.items:
            return False
        return all(item.status == ItemStatus.DELIVERED for item in self.items)


class ProgressStats(BaseModel):
    """Aggregate completion snapshot, recomputed from item rows on demand.

    ``progress_percentage`` is a Python float (double precision) and is
    never rounded; 1 of 3 delivered gives ``100 / 3``.  Renderers round
    for display only.
    """

    model_config = {"frozen": True}

    total_items: int = 0
    collected_items: int = 0
    delivered_items: int = 0
    progress_percentage: float = 0.0
    bundles_completed: int = 0
    total_bundles: int = 0

    @classmethod
    def from_counts(
        cls,
        *,
        total_items: int,
        collected_items: int,
        delivered_items: int,
        bundles_completed: int,
        total_bundles: int,
    ) -> ProgressStats:
        """Build stats from raw counts, guarding the percentage against zero items."""
        percentage = delivered_items * 100.0 / total_items if total_items > 0 else 0.0
        return cls(
            total_items=total_items,
            collected_items=collected_items,
            delivered_items=delivered_items,
            progress_percentage=percentage,
            bundles_completed=bundles_completed,
            total_bundles=total_bundles,
        )


class SeedReport(BaseModel):
    """Outcome of a catalog seeding pass."""

    model_config = {"frozen": True}

    skipped: bool = False
    bundles_inserted: int = 0
    items_inserted: int = 0
    partial_bundles: list[str] = Field(default_factory=list)
