"""DTOs for the access audit trail."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(frozen=True)
class AuditContext:
    """Who did what to which scope; built before the mutation runs."""

    action: str
    performed_by: str
    user_id: str | None = None
    app_id: str | None = None
    brand_id: str | None = None
    platform_id: str | None = None
    request_body: dict[str, Any] | None = None
    ip_address: str | None = None
    user_agent: str | None = None
    request_id: str | None = None


@dataclass(frozen=True)
class AuditLogEntryCreate:
    """Input for appending one audit record. Append-only; no update."""

    action: str
    status: str
    performed_by: str
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


@dataclass(frozen=True)
class AuditLogResult:
    """Single audit record (read-model for list queries)."""

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


@dataclass(frozen=True)
class AuditLogFilters:
    """Optional filters for audit queries; None means 'any'."""

    user_id: str | None = None
    app_id: str | None = None
    brand_id: str | None = None
    action: str | None = None
    status: str | None = None
    start: datetime | None = None
    end: datetime | None = None

    def as_dict(self) -> dict[str, Any]:
        return {k: v for k, v in self.__dict__.items() if v is not None}


@dataclass(frozen=True)
class AuditLogPage:
    logs: list[AuditLogResult] = field(default_factory=list)
    filters: AuditLogFilters = field(default_factory=AuditLogFilters)
    limit: int = 100

    @property
    def total(self) -> int:
        return len(self.logs)
