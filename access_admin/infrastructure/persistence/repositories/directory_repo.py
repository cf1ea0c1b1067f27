"""Directory repository: applications, master registries and users. Implements IDirectoryRepository."""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from access_admin.application.dtos.directory import (
    AppResult,
    BrandResult,
    DashboardTypeResult,
    PlatformResult,
    UserResult,
)
from access_admin.domain.enums import RecordStatus
from access_admin.infrastructure.persistence.models.master import (
    Application,
    Brand,
    DashboardType,
    Platform,
)
from access_admin.infrastructure.persistence.models.user import User


def _user_to_result(row: User) -> UserResult:
    """Map ORM to application DTO."""
    return UserResult(
        id=row.id,
        email=row.email,
        first_name=row.first_name,
        last_name=row.last_name,
        user_type=row.user_type,
        organisation=row.organisation,
        status=row.status,
        created_at=row.created_at,
        last_login_at=row.last_login_at,
    )


def _platform_to_result(row: Platform) -> PlatformResult:
    return PlatformResult(id=row.id, name=row.name, logo_url=row.logo_url, status=row.status)


class DirectoryRepository:
    """Read-mostly access to the master registries; users allow a status change."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def get_app(self, app_id: str) -> AppResult | None:
        row = await self.db.get(Application, app_id)
        return AppResult(id=row.id, name=row.name, status=row.status) if row else None

    async def list_apps(self, *, active_only: bool = True) -> list[AppResult]:
        stmt = select(Application).order_by(Application.name)
        if active_only:
            stmt = stmt.where(Application.status == RecordStatus.ACTIVE.value)
        result = await self.db.execute(stmt)
        return [
            AppResult(id=a.id, name=a.name, status=a.status)
            for a in result.scalars().all()
        ]

    async def get_brand(self, brand_id: str) -> BrandResult | None:
        row = await self.db.get(Brand, brand_id)
        if row is None:
            return None
        return BrandResult(
            id=row.id,
            name=row.name,
            company_name=row.company_name,
            logo_url=row.logo_url,
            status=row.status,
        )

    async def list_platforms(self, *, active_only: bool = True) -> list[PlatformResult]:
        stmt = select(Platform).order_by(Platform.name)
        if active_only:
            stmt = stmt.where(Platform.status == RecordStatus.ACTIVE.value)
        result = await self.db.execute(stmt)
        return [_platform_to_result(p) for p in result.scalars().all()]

    async def get_existing_platform_ids(self, platform_ids: Iterable[str]) -> set[str]:
        scope = list(platform_ids)
        if not scope:
            return set()
        result = await self.db.execute(select(Platform.id).where(Platform.id.in_(scope)))
        return set(result.scalars().all())

    async def list_dashboard_types(self) -> list[DashboardTypeResult]:
        result = await self.db.execute(
            select(DashboardType)
            .where(DashboardType.status == RecordStatus.ACTIVE.value)
            .order_by(DashboardType.name)
        )
        return [
            DashboardTypeResult(id=t.id, name=t.name, color=t.color)
            for t in result.scalars().all()
        ]

    async def get_dashboard_type_names(
        self, dashboard_type_ids: Iterable[str]
    ) -> dict[str, str]:
        scope = list(dashboard_type_ids)
        if not scope:
            return {}
        result = await self.db.execute(
            select(DashboardType.id, DashboardType.name).where(
                DashboardType.id.in_(scope)
            )
        )
        return {type_id: name for type_id, name in result.all()}

    async def get_user(self, user_id: str) -> UserResult | None:
        row = await self.db.get(User, user_id)
        return _user_to_result(row) if row else None

    async def list_users(
        self, *, search: str | None, offset: int, limit: int
    ) -> tuple[list[UserResult], int]:
        """Case-insensitive search over email and names; newest first."""
        conditions = []
        if search:
            pattern = f"%{search.strip()}%"
            conditions.append(
                or_(
                    User.email.ilike(pattern),
                    User.first_name.ilike(pattern),
                    User.last_name.ilike(pattern),
                )
            )
        total = (
            await self.db.execute(select(func.count(User.id)).where(*conditions))
        ).scalar_one()
        result = await self.db.execute(
            select(User)
            .where(*conditions)
            .order_by(User.created_at.desc(), User.id)
            .offset(offset)
            .limit(limit)
        )
        return [_user_to_result(u) for u in result.scalars().all()], int(total)

    async def update_user_status(self, user_id: str, status: str) -> UserResult | None:
        result = await self.db.execute(
            update(User)
            .where(User.id == user_id)
            .values(status=status)
            .returning(User.id)
        )
        if result.scalar_one_or_none() is None:
            return None
        row = await self.db.get(User, user_id, populate_existing=True)
        return _user_to_result(row) if row else None
