"""Audit recorder: one append-only record per attempted mutation.

Each record is written in its own transaction, after the business transaction
has committed (success) or rolled back (failure). Writing is best-effort:
log_success / log_failure never raise, a lost audit entry is reported on the
service log only and never reverses the mutation it describes.
"""

from __future__ import annotations

import logging

from access_admin.application.dtos.audit_log import (
    AuditContext,
    AuditLogEntryCreate,
    AuditLogFilters,
    AuditLogPage,
)
from access_admin.application.interfaces.repositories import StoresFactory
from access_admin.core.constants import AUDIT_SCOPED_DEFAULT_LIMIT
from access_admin.domain.exceptions import AccessAdminException, ValidationException
from access_admin.shared.enums import AuditOutcome
from access_admin.shared.utils.datetime import ensure_utc
from access_admin.shared.utils.redaction import redact_secrets

logger = logging.getLogger(__name__)


def describe_error(exc: BaseException) -> str:
    """Message stored in error_message: domain message, else exception text or type."""
    if isinstance(exc, AccessAdminException):
        return exc.message
    return str(exc) or type(exc).__name__


class AuditRecorder:
    """Append and query audit records through the injected stores factory."""

    def __init__(
        self,
        stores_factory: StoresFactory,
        *,
        default_limit: int = 100,
        max_limit: int = 1000,
    ) -> None:
        self._stores = stores_factory
        self._default_limit = default_limit
        self._max_limit = max_limit

    async def log_success(self, context: AuditContext, details: str | None = None) -> None:
        """Record a successful mutation. Never raises."""
        await self._append(context, AuditOutcome.SUCCESS, details=details)

    async def log_failure(self, context: AuditContext, error: BaseException) -> None:
        """Record a rejected or failed mutation. Never raises."""
        await self._append(
            context,
            AuditOutcome.FAILED,
            details=f"{context.action} failed",
            error_message=describe_error(error),
        )

    async def _append(
        self,
        context: AuditContext,
        outcome: AuditOutcome,
        *,
        details: str | None = None,
        error_message: str | None = None,
    ) -> None:
        entry = AuditLogEntryCreate(
            action=context.action,
            status=outcome.value,
            performed_by=context.performed_by,
            user_id=context.user_id,
            app_id=context.app_id,
            brand_id=context.brand_id,
            platform_id=context.platform_id,
            action_details=details,
            request_body=redact_secrets(context.request_body)
            if context.request_body is not None
            else None,
            error_message=error_message,
            ip_address=context.ip_address,
            user_agent=context.user_agent,
            request_id=context.request_id,
        )
        try:
            async with self._stores() as stores:
                await stores.audit_log.create(entry)
        except Exception as e:
            logger.warning(
                "Failed to write audit log (action=%s, status=%s): %s",
                context.action,
                outcome.value,
                e,
                exc_info=True,
            )

    def clamp_limit(self, limit: int | None) -> int:
        """Return limit bounded to [1, max_limit]; None means the default."""
        if limit is None:
            return self._default_limit
        return max(1, min(limit, self._max_limit))

    async def get_logs(
        self, filters: AuditLogFilters | None = None, limit: int | None = None
    ) -> AuditLogPage:
        """Return matching records newest first. Store errors propagate."""
        filters = filters or AuditLogFilters()
        if filters.start and filters.end and ensure_utc(filters.start) > ensure_utc(filters.end):
            raise ValidationException("start must not be after end", field="start")
        bounded = self.clamp_limit(limit)
        async with self._stores() as stores:
            logs = await stores.audit_log.list(filters, limit=bounded)
        return AuditLogPage(logs=logs, filters=filters, limit=bounded)

    async def get_user_logs(
        self, user_id: str, limit: int = AUDIT_SCOPED_DEFAULT_LIMIT
    ) -> AuditLogPage:
        """Records whose subject is user_id."""
        return await self.get_logs(AuditLogFilters(user_id=user_id), limit)

    async def get_action_logs(
        self, action: str, limit: int = AUDIT_SCOPED_DEFAULT_LIMIT
    ) -> AuditLogPage:
        """Records of one action kind."""
        return await self.get_logs(AuditLogFilters(action=action), limit)
