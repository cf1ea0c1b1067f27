"""Access audit log API schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict


class AuditLogEntryResponse(BaseModel):
    """Single audit log entry (read)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    action: str
    status: str
    performed_by: str
    performed_at: datetime
    user_id: str | None = None
    app_id: str | None = None
    brand_id: str | None = None
    platform_id: str | None = None
    action_details: str | None = None
    request_body: dict[str, Any] | None = None
    error_message: str | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None


class AuditLogListResponse(BaseModel):
    """Audit log entries (newest first) with the applied filters."""

    logs: list[AuditLogEntryResponse]
    total: int
    limit: int
    filters: dict[str, Any]
