"""Use cases: grants, catalog, users."""

from access_admin.application.use_cases.catalog import (
    CatalogQueryService,
    CatalogService,
)
from access_admin.application.use_cases.grants import AccessQueryService, GrantService
from access_admin.application.use_cases.users import UserService

__all__ = [
    "AccessQueryService",
    "CatalogQueryService",
    "CatalogService",
    "GrantService",
    "UserService",
]
