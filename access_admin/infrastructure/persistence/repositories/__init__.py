"""SQLAlchemy implementations of the application repository interfaces."""

from access_admin.infrastructure.persistence.repositories.audit_log_repo import (
    AuditLogRepository,
)
from access_admin.infrastructure.persistence.repositories.catalog_repo import (
    CatalogRepository,
)
from access_admin.infrastructure.persistence.repositories.directory_repo import (
    DirectoryRepository,
)
from access_admin.infrastructure.persistence.repositories.grant_repo import (
    GrantRepository,
)

__all__ = [
    "AuditLogRepository",
    "CatalogRepository",
    "DirectoryRepository",
    "GrantRepository",
]
