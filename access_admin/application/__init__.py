"""Application layer: DTOs, interfaces, services, use cases.

Depends only on domain, shared, and protocol definitions (DIP).
Infrastructure implements the interfaces (repositories, identity, cache).
"""

from access_admin.application.services.audit_recorder import AuditRecorder
from access_admin.application.use_cases import (
    AccessQueryService,
    CatalogQueryService,
    CatalogService,
    GrantService,
    UserService,
)

__all__ = [
    "AccessQueryService",
    "AuditRecorder",
    "CatalogQueryService",
    "CatalogService",
    "GrantService",
    "UserService",
]
