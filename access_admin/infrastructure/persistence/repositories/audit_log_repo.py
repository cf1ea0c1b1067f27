"""Access audit log repository. Append-only; implements IAuditLogRepository."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from access_admin.application.dtos.audit_log import (
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogResult,
)
from access_admin.infrastructure.persistence.models.audit_log import AccessAuditLog
from access_admin.shared.utils.datetime import ensure_utc
from access_admin.shared.utils.generators import generate_cuid


def _orm_to_result(row: AccessAuditLog) -> AuditLogResult:
    """Map ORM to application DTO."""
    return AuditLogResult(
        id=row.id,
        action=row.action,
        status=row.status,
        performed_by=row.performed_by,
        performed_at=row.performed_at,
        user_id=row.user_id,
        app_id=row.app_id,
        brand_id=row.brand_id,
        platform_id=row.platform_id,
        action_details=row.action_details,
        request_body=row.request_body,
        error_message=row.error_message,
        ip_address=row.ip_address,
        user_agent=row.user_agent,
        request_id=row.request_id,
    )


class AuditLogRepository:
    """Append-only audit log repository. No update/delete."""

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def create(self, entry: AuditLogEntryCreate) -> AuditLogResult:
        """Append one audit log entry; return created record."""
        row = AccessAuditLog(
            id=generate_cuid(),
            action=entry.action,
            status=entry.status,
            performed_by=entry.performed_by,
            user_id=entry.user_id,
            app_id=entry.app_id,
            brand_id=entry.brand_id,
            platform_id=entry.platform_id,
            action_details=entry.action_details,
            request_body=entry.request_body,
            error_message=entry.error_message,
            ip_address=entry.ip_address,
            user_agent=entry.user_agent,
            request_id=entry.request_id,
        )
        self.db.add(row)
        await self.db.flush()
        await self.db.refresh(row)
        return _orm_to_result(row)

    async def list(
        self, filters: AuditLogFilters, *, limit: int
    ) -> list[AuditLogResult]:
        """List entries matching every given filter (newest first)."""
        conditions = []
        if filters.user_id is not None:
            conditions.append(AccessAuditLog.user_id == filters.user_id)
        if filters.app_id is not None:
            conditions.append(AccessAuditLog.app_id == filters.app_id)
        if filters.brand_id is not None:
            conditions.append(AccessAuditLog.brand_id == filters.brand_id)
        if filters.action is not None:
            conditions.append(AccessAuditLog.action == filters.action)
        if filters.status is not None:
            conditions.append(AccessAuditLog.status == filters.status)
        if filters.start is not None:
            conditions.append(AccessAuditLog.performed_at >= ensure_utc(filters.start))
        if filters.end is not None:
            conditions.append(AccessAuditLog.performed_at <= ensure_utc(filters.end))

        stmt = (
            select(AccessAuditLog)
            .where(*conditions)
            .order_by(AccessAuditLog.performed_at.desc(), AccessAuditLog.id.desc())
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        return [_orm_to_result(r) for r in result.scalars().all()]
