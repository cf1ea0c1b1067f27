"""Catalog repository: licensed combinations and dashboard bindings. Implements ICatalogRepository."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import and_, delete, exists, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from access_admin.application.dtos.catalog import (
    CatalogEntryResult,
    DashboardBindingInput,
    DashboardBindingResult,
    MappedBrand,
    MappedPlatform,
)
from access_admin.application.dtos.directory import BrandResult, PlatformResult
from access_admin.domain.enums import RecordStatus
from access_admin.domain.exceptions import DuplicateAssignmentException
from access_admin.infrastructure.persistence.models.catalog import (
    CatalogEntry,
    DashboardBinding,
)
from access_admin.infrastructure.persistence.models.master import Brand, Platform

_ACTIVE = RecordStatus.ACTIVE.value


def _binding_to_result(row: DashboardBinding) -> DashboardBindingResult:
    return DashboardBindingResult(
        id=row.id,
        app_id=row.app_id,
        brand_id=row.brand_id,
        platform_id=row.platform_id,
        dashboard_type_id=row.dashboard_type_id,
        dashboard_type=row.dashboard_type,
        url=row.url,
        workspace_id=row.workspace_id,
        report_id=row.report_id,
        dataset_id=row.dataset_id,
    )


def _brand_to_result(row: Brand) -> BrandResult:
    return BrandResult(
        id=row.id,
        name=row.name,
        company_name=row.company_name,
        logo_url=row.logo_url,
        status=row.status,
    )


def _binding_join():
    return and_(
        DashboardBinding.app_id == CatalogEntry.app_id,
        DashboardBinding.brand_id == CatalogEntry.brand_id,
        DashboardBinding.platform_id == CatalogEntry.platform_id,
    )


def _licensed(app_id: str):
    """Correlated EXISTS: brand has an ACTIVE entry under app."""
    return exists().where(
        CatalogEntry.app_id == app_id,
        CatalogEntry.brand_id == Brand.id,
        CatalogEntry.status == _ACTIVE,
    )


class CatalogRepository:
    """Master Catalog backed by catalog_entry and dashboard_binding."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_platform_ids(
        self, app_id: str, brand_id: str, *, active_only: bool = False
    ) -> set[str]:
        stmt = select(CatalogEntry.platform_id).where(
            CatalogEntry.app_id == app_id, CatalogEntry.brand_id == brand_id
        )
        if active_only:
            stmt = stmt.where(CatalogEntry.status == _ACTIVE)
        result = await self.db.execute(stmt)
        return set(result.scalars().all())

    async def add_entries(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str], actor_id: str
    ) -> int:
        rows = [
            CatalogEntry(
                app_id=app_id,
                brand_id=brand_id,
                platform_id=platform_id,
                status=_ACTIVE,
                created_by=actor_id,
                updated_by=actor_id,
            )
            for platform_id in sorted(platform_ids)
        ]
        if not rows:
            return 0
        try:
            self.db.add_all(rows)
            await self.db.flush()
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Platform already licensed for this brand",
                assignment_type="catalog_entry",
                details_extra={"app_id": app_id, "brand_id": brand_id},
            ) from None
        return len(rows)

    async def activate_entries(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str], actor_id: str
    ) -> int:
        scope = list(platform_ids)
        if not scope:
            return 0
        result = await self.db.execute(
            update(CatalogEntry)
            .where(
                CatalogEntry.app_id == app_id,
                CatalogEntry.brand_id == brand_id,
                CatalogEntry.platform_id.in_(scope),
                CatalogEntry.status != _ACTIVE,
            )
            .values(status=_ACTIVE, updated_by=actor_id)
            .returning(CatalogEntry.id)
        )
        return len(result.all())

    async def remove_entries(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str] | None = None
    ) -> int:
        conditions = [CatalogEntry.app_id == app_id, CatalogEntry.brand_id == brand_id]
        if platform_ids is not None:
            scope = list(platform_ids)
            if not scope:
                return 0
            conditions.append(CatalogEntry.platform_id.in_(scope))
        result = await self.db.execute(
            delete(CatalogEntry).where(*conditions).returning(CatalogEntry.id)
        )
        return len(result.all())

    async def list_entries(self, app_id: str) -> list[CatalogEntryResult]:
        stmt = (
            select(CatalogEntry, DashboardBinding)
            .outerjoin(DashboardBinding, _binding_join())
            .where(CatalogEntry.app_id == app_id)
            .order_by(CatalogEntry.brand_id, CatalogEntry.platform_id)
        )
        result = await self.db.execute(stmt)
        return [
            CatalogEntryResult(
                id=entry.id,
                app_id=entry.app_id,
                brand_id=entry.brand_id,
                platform_id=entry.platform_id,
                status=entry.status,
                dashboard=_binding_to_result(binding) if binding is not None else None,
            )
            for entry, binding in result.all()
        ]

    async def list_bindings(
        self, app_id: str, brand_id: str
    ) -> list[DashboardBindingResult]:
        result = await self.db.execute(
            select(DashboardBinding)
            .where(
                DashboardBinding.app_id == app_id, DashboardBinding.brand_id == brand_id
            )
            .order_by(DashboardBinding.platform_id)
        )
        return [_binding_to_result(r) for r in result.scalars().all()]

    async def add_bindings(
        self,
        app_id: str,
        brand_id: str,
        bindings: Iterable[DashboardBindingInput],
        type_names: dict[str, str],
        actor_id: str,
    ) -> int:
        rows = [
            DashboardBinding(
                app_id=app_id,
                brand_id=brand_id,
                platform_id=b.platform_id,
                dashboard_type_id=b.dashboard_type_id,
                dashboard_type=type_names[b.dashboard_type_id],
                url=b.url,
                workspace_id=b.workspace_id,
                report_id=b.report_id,
                dataset_id=b.dataset_id,
                created_by=actor_id,
            )
            for b in bindings
        ]
        if not rows:
            return 0
        try:
            self.db.add_all(rows)
            await self.db.flush()
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Dashboard already bound for this platform",
                assignment_type="dashboard_binding",
                details_extra={"app_id": app_id, "brand_id": brand_id},
            ) from None
        return len(rows)

    async def remove_bindings(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str] | None = None
    ) -> int:
        conditions = [
            DashboardBinding.app_id == app_id,
            DashboardBinding.brand_id == brand_id,
        ]
        if platform_ids is not None:
            scope = list(platform_ids)
            if not scope:
                return 0
            conditions.append(DashboardBinding.platform_id.in_(scope))
        result = await self.db.execute(
            delete(DashboardBinding).where(*conditions).returning(DashboardBinding.id)
        )
        return len(result.all())

    async def list_mapped_brands(self, app_id: str) -> list[MappedBrand]:
        stmt = (
            select(Brand, Platform, DashboardBinding)
            .select_from(CatalogEntry)
            .join(Brand, Brand.id == CatalogEntry.brand_id)
            .join(Platform, Platform.id == CatalogEntry.platform_id)
            .outerjoin(DashboardBinding, _binding_join())
            .where(CatalogEntry.app_id == app_id, CatalogEntry.status == _ACTIVE)
            .order_by(Brand.name, Platform.name)
        )
        result = await self.db.execute(stmt)
        brands: dict[str, MappedBrand] = {}
        for brand, platform, binding in result.all():
            node = brands.get(brand.id)
            if node is None:
                node = MappedBrand(
                    brand_id=brand.id,
                    brand_name=brand.name,
                    company_name=brand.company_name,
                    logo_url=brand.logo_url,
                )
                brands[brand.id] = node
            node.platforms.append(
                MappedPlatform(
                    platform_id=platform.id,
                    platform_name=platform.name,
                    logo_url=platform.logo_url,
                    has_dashboard=binding is not None,
                    dashboard_name=binding.dashboard_type if binding is not None else None,
                )
            )
        return list(brands.values())

    async def list_unmapped_brands(self, app_id: str) -> list[BrandResult]:
        result = await self.db.execute(
            select(Brand)
            .where(Brand.status == _ACTIVE, ~_licensed(app_id))
            .order_by(Brand.name)
        )
        return [_brand_to_result(b) for b in result.scalars().all()]

    async def list_licensed_brands(self, app_id: str) -> list[BrandResult]:
        result = await self.db.execute(
            select(Brand).where(_licensed(app_id)).order_by(Brand.name)
        )
        return [_brand_to_result(b) for b in result.scalars().all()]

    async def list_licensed_platforms(
        self, app_id: str, brand_id: str
    ) -> list[PlatformResult]:
        result = await self.db.execute(
            select(Platform)
            .join(CatalogEntry, CatalogEntry.platform_id == Platform.id)
            .where(
                CatalogEntry.app_id == app_id,
                CatalogEntry.brand_id == brand_id,
                CatalogEntry.status == _ACTIVE,
            )
            .order_by(Platform.name)
        )
        return [
            PlatformResult(id=p.id, name=p.name, logo_url=p.logo_url, status=p.status)
            for p in result.scalars().all()
        ]
