"""AppContext — shared Click context for all commands.

Created once by the root CLI group and flows to all subcommands via
``@click.pass_obj``.  Opens the bundle store lazily, seeds it on first
use, and centralizes result emission (stdout/stderr routing + exit codes).
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import click

from bundlevalley.output.formatters import OutputSettings, format_result

if TYPE_CHECKING:
    from bundlevalley.config.settings import BvSettings
    from bundlevalley.infrastructure.store import BundleStore
    from bundlevalley.services.result import ServiceResult


class AppContext:
    """Shared context flowing through Click's command hierarchy.

    The store is opened on first use so ``--help`` and ``--version``
    never touch the database.
    """

    def __init__(self, settings: BvSettings) -> None:
        self.settings = settings
        self._store: BundleStore | None = None

        from bundlevalley.config.logging import configure_logging

        configure_logging(
            verbose=settings.verbose,
            quiet=settings.quiet,
            log_json=settings.log_json,
        )

    @property
    def store(self) -> BundleStore:
        """The bundle store, seeded from the configured catalog if empty."""
        return self.open_store(seed=self.settings.catalog.auto_seed)

    def open_store(self, *, seed: bool = True) -> BundleStore:
        """Open the store (once) and optionally run the first-use seed.

        A failed open or seed is emitted as an error and exits 1.
        """
        if self._store is None:
            from bundlevalley.errors import StorageFailure
            from bundlevalley.infrastructure.store import BundleStore
            from bundlevalley.services.result import ServiceResult

            storage = self.settings.storage
            try:
                self._store = BundleStore.open(
                    self.settings.data_root,
                    db_filename=storage.db_filename,
                    wal=storage.wal,
                )
            except StorageFailure as exc:
                self.emit(ServiceResult.failure("open_store", "STORAGE_FAILURE", str(exc)))

            if seed:
                from bundlevalley.services.catalog import CatalogService

                result = CatalogService(self._store).seed(catalog_path=self.settings.catalog_path)
                if not result.ok:
                    self.emit(result)
        assert self._store is not None
        return self._store

    def close(self) -> None:
        """Dispose of the store's connection pool, if it was opened."""
        if self._store is not None:
            self._store.close()
            self._store = None

    def emit(self, result: ServiceResult) -> None:
        """Format and output a ServiceResult with correct exit semantics.

        * Success (``result.ok``): writes to stdout, returns normally.
          Warnings go to stderr so they don't pollute piped output.
        * Failure: writes to stderr, exits with code 1.
        """
        settings = OutputSettings(
            json_output=self.settings.json_output,
            quiet=self.settings.quiet,
            verbose=self.settings.verbose,
        )
        output = format_result(result, settings=settings)
        if result.ok:
            click.echo(output)
            if settings.quiet and not settings.json_output:
                for warning in result.warnings:
                    click.echo(f"WARNING: {warning}", err=True)
        else:
            click.echo(output, err=True)
            raise SystemExit(1)
