"""BaseService — shared foundation for bundlevalley services.

Every service receives a :class:`BundleStore` at construction time and
performs all data access through it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from bundlevalley.config.logging import get_logger
from bundlevalley.services.result import ServiceResult

if TYPE_CHECKING:
    from bundlevalley.errors import StorageFailure
    from bundlevalley.infrastructure.store import BundleStore


class BaseService:
    """Base for service-layer classes.

    Usage::

        class ProgressService(BaseService):
            def get_progress_stats(self) -> ServiceResult:
                try:
                    stats = self._store.compute_progress_stats()
                except StorageFailure as exc:
                    return self._storage_failure("progress_stats", exc)
                ...
    """

    def __init__(self, store: BundleStore) -> None:
        self._store = store
        self._log = get_logger(type(self).__module__)

    def _storage_failure(self, op: str, exc: StorageFailure) -> ServiceResult:
        """Log and wrap a storage error.  The caller may retry the operation."""
        self._log.error("storage_failure", op=op, error=str(exc))
        return ServiceResult.failure(op, "STORAGE_FAILURE", f"Storage failure: {exc}")
