"""SQLite database engine and schema via SQLAlchemy Core."""

from bundlevalley.infrastructure.database.engine import create_db_engine, init_database
from bundlevalley.infrastructure.database.schema import bundles, items, metadata

__all__ = [
    "bundles",
    "create_db_engine",
    "init_database",
    "items",
    "metadata",
]
