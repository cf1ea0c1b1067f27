"""Audit log API: who changed which access scope, when, and with what outcome."""

from datetime import datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Query

from access_admin.api.v1.dependencies import CurrentAdmin, get_audit_recorder
from access_admin.application.dtos.audit_log import AuditLogFilters, AuditLogPage
from access_admin.application.services.audit_recorder import AuditRecorder
from access_admin.core.constants import AUDIT_SCOPED_DEFAULT_LIMIT
from access_admin.schemas.audit_log import AuditLogEntryResponse, AuditLogListResponse

router = APIRouter()


def _list_response(page: AuditLogPage) -> AuditLogListResponse:
    return AuditLogListResponse(
        logs=[AuditLogEntryResponse.model_validate(e) for e in page.logs],
        total=page.total,
        limit=page.limit,
        filters=page.filters.as_dict(),
    )


@router.get("", response_model=AuditLogListResponse)
async def list_audit_logs(
    _: CurrentAdmin,
    recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    user_id: str | None = Query(None),
    app_id: str | None = Query(None),
    brand_id: str | None = Query(None),
    action: str | None = Query(None),
    status: str | None = Query(None, description="SUCCESS or FAILED"),
    start: datetime | None = Query(None, description="From (inclusive) ISO8601"),
    end: datetime | None = Query(None, description="To (inclusive) ISO8601"),
    limit: int | None = Query(None, description="Clamped to [1, AUDIT_MAX_LIMIT]"),
):
    """Audit entries matching every given filter, newest first."""
    filters = AuditLogFilters(
        user_id=user_id,
        app_id=app_id,
        brand_id=brand_id,
        action=action,
        status=status,
        start=start,
        end=end,
    )
    return _list_response(await recorder.get_logs(filters, limit))


@router.get("/users/{user_id}", response_model=AuditLogListResponse)
async def list_user_audit_logs(
    user_id: str,
    _: CurrentAdmin,
    recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    limit: int = Query(AUDIT_SCOPED_DEFAULT_LIMIT),
):
    return _list_response(await recorder.get_user_logs(user_id, limit))


@router.get("/actions/{action}", response_model=AuditLogListResponse)
async def list_action_audit_logs(
    action: str,
    _: CurrentAdmin,
    recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    limit: int = Query(AUDIT_SCOPED_DEFAULT_LIMIT),
):
    return _list_response(await recorder.get_action_logs(action, limit))
