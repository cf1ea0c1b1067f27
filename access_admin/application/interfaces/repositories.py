"""Repository interfaces (ports) for the application layer.

Protocols define contracts that infrastructure implementations must fulfill (DIP).
All types reference application DTOs only; no infrastructure imports.

Services never hold a session or engine. They receive a StoresFactory and open
one unit of work per operation:

    async with stores_factory() as stores:
        await stores.grants.add_many(...)

The unit of work commits on normal exit and rolls back on any exception.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from contextlib import AbstractAsyncContextManager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from access_admin.application.dtos.access import BrandPlatform, GrantRow
    from access_admin.application.dtos.audit_log import (
        AuditLogEntryCreate,
        AuditLogFilters,
        AuditLogResult,
    )
    from access_admin.application.dtos.catalog import (
        CatalogEntryResult,
        DashboardBindingInput,
        DashboardBindingResult,
        MappedBrand,
    )
    from access_admin.application.dtos.directory import (
        AppResult,
        BrandResult,
        DashboardTypeResult,
        PlatformResult,
        UserResult,
    )


class IGrantRepository(Protocol):
    """Grant Store: (user, application, brand, platform) tuples."""

    async def list_platform_ids(
        self, user_id: str, app_id: str, brand_id: str
    ) -> set[str]:
        """Return platform ids granted to user for (app, brand)."""

    async def list_pairs(self, user_id: str, app_id: str) -> set[BrandPlatform]:
        """Return (brand_id, platform_id) pairs granted to user under app."""

    async def has_any(self, user_id: str, app_id: str) -> bool:
        """Return True if user holds at least one grant under app."""

    async def add_many(
        self,
        user_id: str,
        app_id: str,
        pairs: Iterable[BrandPlatform],
        granted_by: str,
    ) -> int:
        """Insert grants; raise DuplicateAssignmentException on an existing tuple."""

    async def remove_many(
        self, user_id: str, app_id: str, pairs: Iterable[BrandPlatform]
    ) -> int:
        """Delete the given grants; return number deleted."""

    async def remove_scope(
        self, user_id: str, app_id: str, brand_id: str | None = None
    ) -> list[BrandPlatform]:
        """Delete every grant for user under app (optionally one brand); return removed pairs."""

    async def remove_for_catalog(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str] | None = None
    ) -> list[str]:
        """Delete grants of all users for (app, brand[, platforms]); return user id per deleted row."""

    async def list_rows(
        self, user_id: str, app_id: str | None = None
    ) -> list[GrantRow]:
        """Return joined grant rows ordered by application, brand, platform name."""


class ICatalogRepository(Protocol):
    """Master Catalog: licensed (application, brand, platform) entries and dashboard bindings."""

    async def list_platform_ids(
        self, app_id: str, brand_id: str, *, active_only: bool = False
    ) -> set[str]:
        """Return platform ids with a catalog entry for (app, brand)."""

    async def add_entries(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str], actor_id: str
    ) -> int:
        """Insert ACTIVE entries; raise DuplicateAssignmentException on an existing tuple."""

    async def activate_entries(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str], actor_id: str
    ) -> int:
        """Set non-ACTIVE entries among platform_ids to ACTIVE; return number changed."""

    async def remove_entries(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str] | None = None
    ) -> int:
        """Delete entries for (app, brand[, platforms]); return number deleted."""

    async def list_entries(self, app_id: str) -> list[CatalogEntryResult]:
        """Return all entries for app with their dashboard binding (if any)."""

    async def list_bindings(
        self, app_id: str, brand_id: str
    ) -> list[DashboardBindingResult]:
        """Return dashboard bindings for (app, brand)."""

    async def add_bindings(
        self,
        app_id: str,
        brand_id: str,
        bindings: Iterable[DashboardBindingInput],
        type_names: dict[str, str],
        actor_id: str,
    ) -> int:
        """Insert dashboard bindings; type_names maps dashboard_type_id to its name."""

    async def remove_bindings(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str] | None = None
    ) -> int:
        """Delete dashboard bindings for (app, brand[, platforms]); return number deleted."""

    async def list_mapped_brands(self, app_id: str) -> list[MappedBrand]:
        """Return brands with ACTIVE entries under app, with platforms and dashboard flags."""

    async def list_unmapped_brands(self, app_id: str) -> list[BrandResult]:
        """Return active brands with zero ACTIVE entries under app."""

    async def list_licensed_brands(self, app_id: str) -> list[BrandResult]:
        """Return brands with at least one ACTIVE entry under app."""

    async def list_licensed_platforms(
        self, app_id: str, brand_id: str
    ) -> list[PlatformResult]:
        """Return platforms with an ACTIVE entry for (app, brand)."""


class IDirectoryRepository(Protocol):
    """Read access to applications, brand/platform registries, dashboard types; user status."""

    async def get_app(self, app_id: str) -> AppResult | None: ...

    async def list_apps(self, *, active_only: bool = True) -> list[AppResult]: ...

    async def get_brand(self, brand_id: str) -> BrandResult | None: ...

    async def list_platforms(self, *, active_only: bool = True) -> list[PlatformResult]: ...

    async def get_existing_platform_ids(self, platform_ids: Iterable[str]) -> set[str]:
        """Return the subset of platform_ids present in the platform registry."""

    async def list_dashboard_types(self) -> list[DashboardTypeResult]: ...

    async def get_dashboard_type_names(
        self, dashboard_type_ids: Iterable[str]
    ) -> dict[str, str]:
        """Return {id: name} for the dashboard types that exist."""

    async def get_user(self, user_id: str) -> UserResult | None: ...

    async def list_users(
        self, *, search: str | None, offset: int, limit: int
    ) -> tuple[list[UserResult], int]:
        """Return (page of users, total matching) ordered newest first."""

    async def update_user_status(self, user_id: str, status: str) -> UserResult | None:
        """Set user status; return updated user or None if missing."""


class IAuditLogRepository(Protocol):
    """Append-only audit trail."""

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult: ...

    async def list(
        self, filters: AuditLogFilters, *, limit: int
    ) -> list[AuditLogResult]:
        """Return matching records newest first, at most limit."""


@dataclass(frozen=True)
class AccessStores:
    """Repositories bound to one open transaction."""

    grants: IGrantRepository
    catalog: ICatalogRepository
    directory: IDirectoryRepository
    audit_log: IAuditLogRepository


# Opens one transaction per call; commit on exit, rollback on exception.
StoresFactory = Callable[[], AbstractAsyncContextManager[AccessStores]]
