"""Read-only grant queries: access checks, per-application brands, full access tree."""

from __future__ import annotations

from access_admin.application.dtos.access import AppAccessCheck, AppNode, UserAppBrands
from access_admin.application.dtos.directory import BrandResult, PlatformResult
from access_admin.application.interfaces.repositories import AccessStores, StoresFactory
from access_admin.application.services.access_tree_builder import (
    build_access_tree,
    group_brands,
)
from access_admin.domain.exceptions import (
    AccessNotFoundException,
    ResourceNotFoundException,
)


class AccessQueryService:
    """Answer what a user holds. Unknown users or applications raise NotFound."""

    def __init__(self, stores_factory: StoresFactory) -> None:
        self._stores = stores_factory

    @staticmethod
    async def _require_user_and_app(stores: AccessStores, user_id: str, app_id: str):
        user = await stores.directory.get_user(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        app = await stores.directory.get_app(app_id)
        if app is None:
            raise ResourceNotFoundException("application", app_id)
        return user, app

    async def check_app_access(self, user_id: str, app_id: str) -> AppAccessCheck:
        async with self._stores() as stores:
            user, app = await self._require_user_and_app(stores, user_id, app_id)
            has_access = await stores.grants.has_any(user_id, app_id)
        return AppAccessCheck(
            user_id=user.id,
            user_name=user.full_name,
            app_id=app.id,
            app_name=app.name,
            has_access=has_access,
        )

    async def get_user_app_brands(self, user_id: str, app_id: str) -> UserAppBrands:
        """Brands with their platforms granted under one application.

        Raises:
            AccessNotFoundException: The user holds nothing under the application.
        """
        async with self._stores() as stores:
            _, app = await self._require_user_and_app(stores, user_id, app_id)
            rows = await stores.grants.list_rows(user_id, app_id)
        if not rows:
            raise AccessNotFoundException(user_id, app_id)
        return UserAppBrands(
            user_id=user_id, app_id=app.id, app_name=app.name, brands=group_brands(rows)
        )

    async def get_access_tree(self, user_id: str) -> list[AppNode]:
        """Applications, brands, platforms for the user; empty list when nothing is held."""
        async with self._stores() as stores:
            if await stores.directory.get_user(user_id) is None:
                raise ResourceNotFoundException("user", user_id)
            rows = await stores.grants.list_rows(user_id)
        return build_access_tree(rows)

    async def list_available_brands(self, user_id: str, app_id: str) -> list[BrandResult]:
        """Brands licensed under the application that the user holds no grant for."""
        async with self._stores() as stores:
            await self._require_user_and_app(stores, user_id, app_id)
            licensed = await stores.catalog.list_licensed_brands(app_id)
            granted = {brand_id for brand_id, _ in await stores.grants.list_pairs(user_id, app_id)}
        return [b for b in licensed if b.id not in granted]

    async def list_granted_brands(self, user_id: str, app_id: str) -> list[BrandResult]:
        """Brands the user holds at least one grant for under the application."""
        async with self._stores() as stores:
            await self._require_user_and_app(stores, user_id, app_id)
            rows = await stores.grants.list_rows(user_id, app_id)
        return [
            BrandResult(id=node.brand_id, name=node.brand_name, logo_url=node.logo_url)
            for node in group_brands(rows)
        ]

    async def list_assigned_platforms(
        self, user_id: str, app_id: str, brand_id: str
    ) -> list[PlatformResult]:
        async with self._stores() as stores:
            await self._require_user_and_app(stores, user_id, app_id)
            rows = await stores.grants.list_rows(user_id, app_id)
        return [
            PlatformResult(
                id=row.platform_id, name=row.platform_name, logo_url=row.platform_logo_url
            )
            for row in rows
            if row.brand_id == brand_id
        ]
