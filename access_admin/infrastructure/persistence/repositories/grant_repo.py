"""Grant repository: (user, application, brand, platform) tuples. Implements IGrantRepository.

Grants are hard-deleted; the audit log keeps their history.
"""

from __future__ import annotations

from collections.abc import Iterable

from sqlalchemy import delete, exists, select, tuple_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from access_admin.application.dtos.access import BrandPlatform, GrantRow
from access_admin.domain.exceptions import DuplicateAssignmentException
from access_admin.infrastructure.persistence.models.grant import AccessGrant
from access_admin.infrastructure.persistence.models.master import (
    Application,
    Brand,
    Platform,
)


class GrantRepository:
    """Grant Store backed by the access_grant table."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def list_platform_ids(
        self, user_id: str, app_id: str, brand_id: str
    ) -> set[str]:
        result = await self.db.execute(
            select(AccessGrant.platform_id).where(
                AccessGrant.user_id == user_id,
                AccessGrant.app_id == app_id,
                AccessGrant.brand_id == brand_id,
            )
        )
        return set(result.scalars().all())

    async def list_pairs(self, user_id: str, app_id: str) -> set[BrandPlatform]:
        result = await self.db.execute(
            select(AccessGrant.brand_id, AccessGrant.platform_id).where(
                AccessGrant.user_id == user_id, AccessGrant.app_id == app_id
            )
        )
        return {(brand_id, platform_id) for brand_id, platform_id in result.all()}

    async def has_any(self, user_id: str, app_id: str) -> bool:
        stmt = select(
            exists().where(
                AccessGrant.user_id == user_id, AccessGrant.app_id == app_id
            )
        )
        return bool((await self.db.execute(stmt)).scalar())

    async def add_many(
        self,
        user_id: str,
        app_id: str,
        pairs: Iterable[BrandPlatform],
        granted_by: str,
    ) -> int:
        """Insert one row per pair. An existing tuple raises DuplicateAssignmentException."""
        rows = [
            AccessGrant(
                user_id=user_id,
                app_id=app_id,
                brand_id=brand_id,
                platform_id=platform_id,
                granted_by=granted_by,
            )
            for brand_id, platform_id in sorted(pairs)
        ]
        if not rows:
            return 0
        try:
            self.db.add_all(rows)
            await self.db.flush()
        except IntegrityError:
            raise DuplicateAssignmentException(
                "Access already granted",
                assignment_type="access_grant",
                details_extra={"user_id": user_id, "app_id": app_id},
            ) from None
        return len(rows)

    async def remove_many(
        self, user_id: str, app_id: str, pairs: Iterable[BrandPlatform]
    ) -> int:
        wanted = list(pairs)
        if not wanted:
            return 0
        result = await self.db.execute(
            delete(AccessGrant)
            .where(
                AccessGrant.user_id == user_id,
                AccessGrant.app_id == app_id,
                tuple_(AccessGrant.brand_id, AccessGrant.platform_id).in_(wanted),
            )
            .returning(AccessGrant.id)
        )
        return len(result.all())

    async def remove_scope(
        self, user_id: str, app_id: str, brand_id: str | None = None
    ) -> list[BrandPlatform]:
        conditions = [AccessGrant.user_id == user_id, AccessGrant.app_id == app_id]
        if brand_id is not None:
            conditions.append(AccessGrant.brand_id == brand_id)
        result = await self.db.execute(
            delete(AccessGrant)
            .where(*conditions)
            .returning(AccessGrant.brand_id, AccessGrant.platform_id)
        )
        return [(b, p) for b, p in result.all()]

    async def remove_for_catalog(
        self, app_id: str, brand_id: str, platform_ids: Iterable[str] | None = None
    ) -> list[str]:
        """Delete grants of every user for the catalog scope; one user id per deleted row."""
        conditions = [AccessGrant.app_id == app_id, AccessGrant.brand_id == brand_id]
        if platform_ids is not None:
            scope = list(platform_ids)
            if not scope:
                return []
            conditions.append(AccessGrant.platform_id.in_(scope))
        result = await self.db.execute(
            delete(AccessGrant).where(*conditions).returning(AccessGrant.user_id)
        )
        return list(result.scalars().all())

    async def list_rows(
        self, user_id: str, app_id: str | None = None
    ) -> list[GrantRow]:
        """Joined rows ordered by application, brand and platform name."""
        stmt = (
            select(
                AccessGrant.user_id,
                AccessGrant.app_id,
                Application.name,
                AccessGrant.brand_id,
                Brand.name,
                AccessGrant.platform_id,
                Platform.name,
                Brand.logo_url,
                Platform.logo_url,
            )
            .join(Application, Application.id == AccessGrant.app_id)
            .join(Brand, Brand.id == AccessGrant.brand_id)
            .join(Platform, Platform.id == AccessGrant.platform_id)
            .where(AccessGrant.user_id == user_id)
            .order_by(Application.name, Brand.name, Platform.name)
        )
        if app_id is not None:
            stmt = stmt.where(AccessGrant.app_id == app_id)
        result = await self.db.execute(stmt)
        return [
            GrantRow(
                user_id=row[0],
                app_id=row[1],
                app_name=row[2],
                brand_id=row[3],
                brand_name=row[4],
                platform_id=row[5],
                platform_name=row[6],
                brand_logo_url=row[7],
                platform_logo_url=row[8],
            )
            for row in result.all()
        ]
