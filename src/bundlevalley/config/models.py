"""Pydantic configuration models with code-baked defaults.

Sparse TOML contract: defaults baked here, bundlevalley.toml only
contains overrides.  A fresh install needs no config file at all.
"""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel

from bundlevalley.infrastructure.database.engine import DEFAULT_DB_FILENAME

# --- bundlevalley.toml sections ---


class StorageConfig(BaseModel):
    """[storage] section."""

    model_config = {"frozen": True}

    db_filename: str = DEFAULT_DB_FILENAME
    wal: bool = True


class CatalogConfig(BaseModel):
    """[catalog] section.

    ``path`` of None selects the packaged Community Center catalog.
    """

    model_config = {"frozen": True}

    path: Path | None = None
    auto_seed: bool = True
