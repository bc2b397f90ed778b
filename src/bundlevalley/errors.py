"""Typed errors raised by the storage engine and catalog loader.

Callers (services, CLI) translate these into ``ServiceResult`` errors.
Only :class:`InvalidInputError` and :class:`StorageFailure` cross the
store boundary.
"""

from __future__ import annotations


class BundleValleyError(Exception):
    """Base class for all bundlevalley errors."""


class InvalidInputError(BundleValleyError, ValueError):
    """A caller-supplied value is outside its accepted domain.

    Raised before any row is touched, so no state is mutated.
    """


class CatalogError(InvalidInputError):
    """The catalog payload is malformed or violates a key/count rule."""


class StorageFailure(BundleValleyError):
    """Wraps any underlying persistence error (I/O, corruption, constraints)."""
