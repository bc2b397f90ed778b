"""SQLAlchemy Core table definitions for the bundlevalley database.

Two record sets: ``bundles`` and ``items``.  The status CHECK constraint
keeps the item status domain closed at the storage level; the indexes
on ``items.bundle_id`` and ``items.status`` exist only to keep the
aggregation queries cheap.
"""

from __future__ import annotations

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    Table,
    Text,
)

from bundlevalley.domain.types import ItemStatus

metadata = MetaData()

bundles = Table(
    "bundles",
    metadata,
    Column("id", Text, primary_key=True),
    Column("name", Text, nullable=False),
    Column("room", Text, nullable=False),
    Column("required_items", Integer, nullable=False),
)

_STATUS_DOMAIN = ", ".join(f"'{s.value}'" for s in ItemStatus)

items = Table(
    "items",
    metadata,
    Column("id", Text, primary_key=True),
    Column("bundle_id", Text, ForeignKey("bundles.id"), nullable=False),
    Column("name", Text, nullable=False),
    Column(
        "status",
        Text,
        nullable=False,
        default=ItemStatus.MISSING.value,
        server_default=ItemStatus.MISSING.value,
    ),
    Column("quality", Text),  # NULL = any quality accepted
    CheckConstraint(f"status IN ({_STATUS_DOMAIN})", name="ck_items_status"),
)

# ---------------------------------------------------------------------------
# Lookup indexes for aggregation
# ---------------------------------------------------------------------------

Index("idx_items_bundle", items.c.bundle_id)
Index("idx_items_status", items.c.status)
