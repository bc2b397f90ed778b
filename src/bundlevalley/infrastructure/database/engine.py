"""Database engine setup for SQLite.

SQLite is the persistence layer: WAL mode for concurrent readers and
foreign keys enforced on every connection.  The DB is stored at
``{data_root}/.bundlevalley/{db_filename}``.

SQLAlchemy Core (not ORM) is used: the store issues a handful of
fixed statements and has no use for sessions or identity maps.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine

from bundlevalley.infrastructure.database.schema import metadata

logger = logging.getLogger(__name__)

DATA_DIRNAME = ".bundlevalley"
DEFAULT_DB_FILENAME = "bundle-valley.db"


def create_db_engine(db_path: Path, *, wal: bool = True) -> Engine:
    """Create a SQLite engine with foreign keys (and optionally WAL) enabled."""
    engine = create_engine(f"sqlite:///{db_path}", echo=False)

    @event.listens_for(engine, "connect")
    def _set_sqlite_pragma(dbapi_conn: Any, _: Any) -> None:
        cursor = dbapi_conn.cursor()
        if wal:
            cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    return engine


def init_database(
    data_root: Path,
    *,
    db_filename: str = DEFAULT_DB_FILENAME,
    wal: bool = True,
) -> Engine:
    """Initialize the database at ``{data_root}/.bundlevalley/{db_filename}``.

    Creates the data directory, both tables and their indexes.
    Idempotent — safe to call on an existing store; existing rows are
    left untouched.

    Returns the engine ready for use.
    """
    data_dir = data_root / DATA_DIRNAME
    data_dir.mkdir(parents=True, exist_ok=True)

    db_path = data_dir / db_filename
    logger.debug("Opening database at %s", db_path)
    engine = create_db_engine(db_path, wal=wal)

    metadata.create_all(engine)
    return engine
