"""Grant use cases: reconciliation mutations and access queries."""

from access_admin.application.use_cases.grants.access_queries import AccessQueryService
from access_admin.application.use_cases.grants.grant_operations import (
    GrantService,
    ensure_licensed,
)

__all__ = [
    "AccessQueryService",
    "GrantService",
    "ensure_licensed",
]
