"""Read-only catalog and master-list queries.

Unknown applications or brands yield empty catalog results ("nothing mapped
yet"), except where a single entity is requested by id.
"""

from __future__ import annotations

from collections.abc import Iterable

from access_admin.application.dtos.catalog import (
    CatalogEntryResult,
    CombinationCheck,
    MappedBrand,
    MappingDetails,
)
from access_admin.application.dtos.directory import (
    AppResult,
    BrandResult,
    DashboardTypeResult,
    PlatformResult,
)
from access_admin.application.interfaces.repositories import StoresFactory
from access_admin.application.services.reconciliation import check_combination
from access_admin.domain.exceptions import ResourceNotFoundException


class CatalogQueryService:
    def __init__(self, stores_factory: StoresFactory) -> None:
        self._stores = stores_factory

    async def list_apps(self) -> list[AppResult]:
        """Active applications."""
        async with self._stores() as stores:
            return await stores.directory.list_apps(active_only=True)

    async def get_app(self, app_id: str) -> AppResult:
        async with self._stores() as stores:
            app = await stores.directory.get_app(app_id)
        if app is None:
            raise ResourceNotFoundException("application", app_id)
        return app

    async def list_platforms(self) -> list[PlatformResult]:
        """Active platforms from the master registry."""
        async with self._stores() as stores:
            return await stores.directory.list_platforms(active_only=True)

    async def list_dashboard_types(self) -> list[DashboardTypeResult]:
        async with self._stores() as stores:
            return await stores.directory.list_dashboard_types()

    async def list_entries(self, app_id: str) -> list[CatalogEntryResult]:
        """Every catalog entry of the application with its dashboard binding."""
        async with self._stores() as stores:
            return await stores.catalog.list_entries(app_id)

    async def list_mapped_brands(self, app_id: str) -> list[MappedBrand]:
        async with self._stores() as stores:
            return await stores.catalog.list_mapped_brands(app_id)

    async def list_unmapped_brands(self, app_id: str) -> list[BrandResult]:
        """Active brands with zero ACTIVE catalog entries under the application."""
        async with self._stores() as stores:
            return await stores.catalog.list_unmapped_brands(app_id)

    async def validate_combination(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str]
    ) -> CombinationCheck:
        """Report which platforms lack an ACTIVE entry for (application, brand)."""
        async with self._stores() as stores:
            licensed = await stores.catalog.list_platform_ids(
                app_id, brand_id, active_only=True
            )
        return check_combination(licensed, platform_ids)

    async def get_mapping_details(self, app_id: str, brand_id: str) -> MappingDetails:
        """Licensed platform ids and dashboard bindings for the edit view."""
        async with self._stores() as stores:
            platform_ids = await stores.catalog.list_platform_ids(
                app_id, brand_id, active_only=True
            )
            dashboards = await stores.catalog.list_bindings(app_id, brand_id)
        return MappingDetails(
            app_id=app_id,
            brand_id=brand_id,
            platform_ids=sorted(platform_ids),
            dashboards=dashboards,
        )

    async def list_licensed_platforms(
        self, app_id: str, brand_id: str
    ) -> list[PlatformResult]:
        """Platforms that may be granted for (application, brand).

        Raises:
            ResourceNotFoundException: Brand missing.
        """
        async with self._stores() as stores:
            if await stores.directory.get_brand(brand_id) is None:
                raise ResourceNotFoundException("brand", brand_id)
            return await stores.catalog.list_licensed_platforms(app_id, brand_id)
