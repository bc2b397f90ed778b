"""Item status enum and status-domain helpers."""

from __future__ import annotations

from enum import StrEnum


class ItemStatus(StrEnum):
    """Tri-state delivery status for a bundle item.

    The progression is ordered: missing -> collected -> delivered.
    Updates are not restricted to forward moves.
    """

    MISSING = "missing"
    COLLECTED = "collected"
    DELIVERED = "delivered"


VALID_STATUSES: frozenset[str] = frozenset(s.value for s in ItemStatus)


def is_valid_status(value: str) -> bool:
    """Return True if *value* is one of the three recognized statuses."""
    return value in VALID_STATUSES
