"""Shared pytest fixtures for bundlevalley tests."""

from __future__ import annotations

from collections.abc import Iterator
from pathlib import Path

import pytest
from click.testing import CliRunner
from sqlalchemy.engine import Engine

from bundlevalley.catalog import Catalog, load_catalog
from bundlevalley.catalog.loader import seed
from bundlevalley.infrastructure.database.engine import init_database
from bundlevalley.infrastructure.store import BundleStore


@pytest.fixture
def cli_runner() -> CliRunner:
    """Provide a Click CLI test runner."""
    return CliRunner()


@pytest.fixture
def db_engine(tmp_path: Path) -> Iterator[Engine]:
    """Initialized SQLite engine with both tables created."""
    engine = init_database(tmp_path)
    try:
        yield engine
    finally:
        engine.dispose()


@pytest.fixture
def store(tmp_path: Path) -> Iterator[BundleStore]:
    """Empty bundle store on a temp directory."""
    s = BundleStore.open(tmp_path)
    try:
        yield s
    finally:
        s.close()


@pytest.fixture
def community_catalog() -> Catalog:
    """The packaged Community Center catalog."""
    return load_catalog()


@pytest.fixture
def seeded_store(store: BundleStore, community_catalog: Catalog) -> BundleStore:
    """Store seeded with the packaged catalog."""
    seed(store, community_catalog)
    return store


@pytest.fixture
def _isolated_data_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Change CWD to a temp dir so the CLI creates an isolated store.

    Use via ``@pytest.mark.usefixtures("_isolated_data_dir")`` on command
    test classes.
    """
    monkeypatch.delenv("BUNDLEVALLEY_CONFIG", raising=False)
    monkeypatch.chdir(tmp_path)
