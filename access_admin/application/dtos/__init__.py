"""Application DTOs (no ORM dependency)."""

from access_admin.application.dtos.access import (
    AppAccessCheck,
    AppNode,
    BrandNode,
    BrandPlatform,
    BrandPlatforms,
    Delta,
    GrantChangeResult,
    GrantRow,
    PlatformNode,
    ScopeRemovalResult,
    UserAppBrands,
)
from access_admin.application.dtos.audit_log import (
    AuditContext,
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogPage,
    AuditLogResult,
)
from access_admin.application.dtos.catalog import (
    CatalogEntryResult,
    CombinationCheck,
    DashboardBindingInput,
    DashboardBindingResult,
    MappedBrand,
    MappedPlatform,
    MappingChangeResult,
    MappingDeletionResult,
    MappingDetails,
)
from access_admin.application.dtos.directory import (
    AppResult,
    BrandResult,
    DashboardTypeResult,
    PlatformResult,
    UserPage,
    UserResult,
)

__all__ = [
    "AppAccessCheck",
    "AppNode",
    "AppResult",
    "AuditContext",
    "AuditLogEntryCreate",
    "AuditLogFilters",
    "AuditLogPage",
    "AuditLogResult",
    "BrandNode",
    "BrandPlatform",
    "BrandPlatforms",
    "BrandResult",
    "CatalogEntryResult",
    "CombinationCheck",
    "DashboardBindingInput",
    "DashboardBindingResult",
    "DashboardTypeResult",
    "Delta",
    "GrantChangeResult",
    "GrantRow",
    "MappedBrand",
    "MappedPlatform",
    "MappingChangeResult",
    "MappingDeletionResult",
    "MappingDetails",
    "PlatformNode",
    "PlatformResult",
    "ScopeRemovalResult",
    "UserAppBrands",
    "UserPage",
    "UserResult",
]
