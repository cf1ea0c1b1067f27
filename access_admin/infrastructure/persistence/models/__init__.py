"""Persistence models: ORM entities and mixins."""

from access_admin.infrastructure.persistence.models.audit_log import AccessAuditLog
from access_admin.infrastructure.persistence.models.catalog import (
    CatalogEntry,
    DashboardBinding,
)
from access_admin.infrastructure.persistence.models.grant import AccessGrant
from access_admin.infrastructure.persistence.models.master import (
    Application,
    Brand,
    DashboardType,
    Platform,
)
from access_admin.infrastructure.persistence.models.mixins import (
    CuidMixin,
    StatusMixin,
    TimestampMixin,
)
from access_admin.infrastructure.persistence.models.user import User

__all__ = [
    "AccessAuditLog",
    "AccessGrant",
    "Application",
    "Brand",
    "CatalogEntry",
    "CuidMixin",
    "DashboardBinding",
    "DashboardType",
    "Platform",
    "StatusMixin",
    "TimestampMixin",
    "User",
]
