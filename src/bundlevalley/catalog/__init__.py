"""Catalog payload models, loading, and store seeding."""

from bundlevalley.catalog.loader import load_catalog, parse_catalog, seed
from bundlevalley.catalog.models import Catalog, CatalogBundle, CatalogItem, CatalogRoom

__all__ = [
    "Catalog",
    "CatalogBundle",
    "CatalogItem",
    "CatalogRoom",
    "load_catalog",
    "parse_catalog",
    "seed",
]
