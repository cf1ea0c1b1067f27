"""Catalog use cases: mapping mutations with cascade, and catalog queries."""

from access_admin.application.use_cases.catalog.catalog_operations import (
    CatalogService,
    remove_catalog_entries,
)
from access_admin.application.use_cases.catalog.catalog_queries import (
    CatalogQueryService,
)

__all__ = [
    "CatalogQueryService",
    "CatalogService",
    "remove_catalog_entries",
]
