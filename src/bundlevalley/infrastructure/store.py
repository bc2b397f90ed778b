"""BundleStore — the storage engine for bundles and items.

The store owns the single SQLAlchemy engine.  Every operation runs
inside :meth:`BundleStore._lease`, which holds a process-wide lock and a
transaction for the operation's full duration and releases both on
every exit path.  Concurrent callers are serialized one at a time.

Completion is never stored: :meth:`compute_progress_stats` recomputes
all counts from the item rows on every call.

Errors:

- :class:`~bundlevalley.errors.InvalidInputError` — unknown status value
  passed to :meth:`update_item_status`.  Raised before the lease is taken.
- :class:`~bundlevalley.errors.StorageFailure` — any SQLAlchemy error,
  re-raised with the original as ``__cause__``.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import TYPE_CHECKING

from sqlalchemy import distinct, func, select, update
from sqlalchemy.dialects.sqlite import insert as sqlite_insert
from sqlalchemy.exc import SQLAlchemyError

from bundlevalley.domain.models import Bundle, Item, ProgressStats
from bundlevalley.domain.types import VALID_STATUSES, ItemStatus, is_valid_status
from bundlevalley.errors import InvalidInputError, StorageFailure
from bundlevalley.infrastructure.database.engine import DEFAULT_DB_FILENAME, init_database
from bundlevalley.infrastructure.database.schema import bundles, items

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from sqlalchemy import Connection
    from sqlalchemy.engine import Engine

logger = logging.getLogger(__name__)


class BundleStore:
    """Mediates all reads and writes of bundles and items.

    Construct with an initialized engine, or use :meth:`open` to create
    the database under a data root.  No caller touches the engine
    directly for catalog data.
    """

    def __init__(self, engine: Engine) -> None:
        self._engine = engine
        self._lock = threading.Lock()

    @classmethod
    def open(
        cls,
        data_root: Path,
        *,
        db_filename: str = DEFAULT_DB_FILENAME,
        wal: bool = True,
    ) -> BundleStore:
        """Open or create the store under *data_root* (idempotent)."""
        try:
            engine = init_database(data_root, db_filename=db_filename, wal=wal)
        except (SQLAlchemyError, OSError) as exc:
            raise StorageFailure(f"Cannot initialize database: {exc}") from exc
        return cls(engine)

    @property
    def engine(self) -> Engine:
        """The underlying SQLAlchemy engine (for tests and diagnostics)."""
        return self._engine

    def close(self) -> None:
        """Release pooled connections."""
        self._engine.dispose()

    @contextmanager
    def _lease(self) -> Iterator[Connection]:
        """Exclusive, transactional access for one operation.

        The lock is held until the transaction commits or rolls back.
        SQLAlchemy errors raised inside the block surface as
        :class:`StorageFailure`.
        """
        with self._lock:
            try:
                with self._engine.begin() as conn:
                    yield conn
            except SQLAlchemyError as exc:
                raise StorageFailure(str(exc)) from exc

    # ------------------------------------------------------------------
    # Inserts (insert-or-ignore: keep existing, discard incoming)
    # ------------------------------------------------------------------

    def insert_bundle(self, bundle: Bundle) -> bool:
        """Insert *bundle* unless its key already exists.

        Returns True if a row was written, False if the key was taken
        (existing row kept, incoming discarded).
        """
        stmt = (
            sqlite_insert(bundles)
            .values(
                id=bundle.id,
                name=bundle.name,
                room=bundle.room,
                required_items=bundle.required_items,
            )
            .on_conflict_do_nothing(index_elements=[bundles.c.id])
        )
        with self._lease() as conn:
            return conn.execute(stmt).rowcount > 0

    def insert_item(self, item: Item) -> bool:
        """Insert *item* unless its key already exists.  Same contract as
        :meth:`insert_bundle`, scoped to item keys."""
        stmt = (
            sqlite_insert(items)
            .values(
                id=item.id,
                bundle_id=item.bundle_id,
                name=item.name,
                status=item.status.value,
                quality=item.quality,
            )
            .on_conflict_do_nothing(index_elements=[items.c.id])
        )
        with self._lease() as conn:
            return conn.execute(stmt).rowcount > 0

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def list_bundles(self) -> list[Bundle]:
        """All bundles ordered by (room, name), items not populated."""
        with self._lease() as conn:
            return self._select_bundles(conn)

    def list_bundles_with_items(self) -> list[Bundle]:
        """All bundles with their items, items ordered by name.

        Bundles and items are read inside one lease, so the result is a
        single consistent snapshot.
        """
        with self._lease() as conn:
            bundle_rows = self._select_bundles(conn)
            item_rows = conn.execute(
                select(items).order_by(items.c.name, items.c.id)
            ).mappings().all()

        by_bundle: dict[str, list[Item]] = {b.id: [] for b in bundle_rows}
        for row in item_rows:
            by_bundle.setdefault(row["bundle_id"], []).append(Item.model_validate(dict(row)))

        return [b.model_copy(update={"items": by_bundle[b.id]}) for b in bundle_rows]

    @staticmethod
    def _select_bundles(conn: Connection) -> list[Bundle]:
        stmt = select(bundles).order_by(bundles.c.room, bundles.c.name, bundles.c.id)
        rows = conn.execute(stmt).mappings().all()
        return [Bundle.model_validate(dict(row)) for row in rows]

    # ------------------------------------------------------------------
    # Status mutation
    # ------------------------------------------------------------------

    def update_item_status(self, item_id: str, status: str) -> bool:
        """Set the status of one item.

        Raises InvalidInputError for a status outside the three recognized
        values; nothing is touched in that case.  An unknown *item_id* is
        a successful no-op.  Returns True if an item row matched.
        """
        if not is_valid_status(status):
            msg = f"Invalid status: {status!r}. Expected one of {sorted(VALID_STATUSES)}"
            raise InvalidInputError(msg)

        stmt = update(items).where(items.c.id == item_id).values(status=status)
        with self._lease() as conn:
            matched = conn.execute(stmt).rowcount > 0

        if matched:
            logger.debug("Item %s set to %s", item_id, status)
        else:
            logger.debug("Status update for unknown item %s ignored", item_id)
        return matched

    # ------------------------------------------------------------------
    # Aggregation
    # ------------------------------------------------------------------

    def compute_progress_stats(self) -> ProgressStats:
        """Recompute progress from the current item rows.

        A bundle counts as completed when it has at least one item and
        none of its items is in a non-delivered state.
        """
        delivered = ItemStatus.DELIVERED.value
        incomplete = select(items.c.bundle_id).distinct().where(items.c.status != delivered)

        with self._lease() as conn:
            total_items = conn.execute(select(func.count()).select_from(items)).scalar_one()
            collected_items = conn.execute(
                select(func.count())
                .select_from(items)
                .where(items.c.status == ItemStatus.COLLECTED.value)
            ).scalar_one()
            delivered_items = conn.execute(
                select(func.count()).select_from(items).where(items.c.status == delivered)
            ).scalar_one()
            total_bundles = conn.execute(select(func.count()).select_from(bundles)).scalar_one()
            bundles_completed = conn.execute(
                select(func.count(distinct(items.c.bundle_id))).where(
                    items.c.bundle_id.not_in(incomplete)
                )
            ).scalar_one()

        return ProgressStats.from_counts(
            total_items=int(total_items),
            collected_items=int(collected_items),
            delivered_items=int(delivered_items),
            bundles_completed=int(bundles_completed),
            total_bundles=int(total_bundles),
        )
