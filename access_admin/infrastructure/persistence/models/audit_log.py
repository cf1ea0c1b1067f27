"""Access audit log ORM model. Append-only record of every attempted mutation."""

from datetime import datetime
from typing import Any

from sqlalchemy import Connection, DateTime, Index, String, Text, event, text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, Mapper, mapped_column

from access_admin.infrastructure.persistence.database import Base
from access_admin.shared.utils.generators import generate_cuid


class AccessAuditLog(Base):
    """Who changed which access scope, when, and with what outcome. No update/delete.

    Scope columns carry no foreign keys so records survive deletion of the
    user, application, brand or platform they describe.
    """

    __tablename__ = "access_audit_log"

    id: Mapped[str] = mapped_column(String, primary_key=True, default=generate_cuid)
    user_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    app_id: Mapped[str | None] = mapped_column(String, nullable=True, index=True)
    brand_id: Mapped[str | None] = mapped_column(String, nullable=True)
    platform_id: Mapped[str | None] = mapped_column(String, nullable=True)
    action: Mapped[str] = mapped_column(String, nullable=False, index=True)
    action_details: Mapped[str | None] = mapped_column(Text, nullable=True)
    request_body: Mapped[dict[str, Any] | None] = mapped_column(JSONB, nullable=True)
    status: Mapped[str] = mapped_column(String, nullable=False)
    error_message: Mapped[str | None] = mapped_column(Text, nullable=True)
    performed_by: Mapped[str] = mapped_column(String, nullable=False)
    performed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=text("now()"), nullable=False
    )
    ip_address: Mapped[str | None] = mapped_column(String, nullable=True)
    user_agent: Mapped[str | None] = mapped_column(Text, nullable=True)
    request_id: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        Index("ix_access_audit_log_performed_at", "performed_at"),
    )


@event.listens_for(AccessAuditLog, "before_update")
def _prevent_audit_log_updates(
    _mapper: Mapper[Any], _connection: Connection, _target: AccessAuditLog
) -> None:
    """Audit log entries are append-only; updates are forbidden."""
    raise ValueError("Audit log entries are immutable and cannot be updated.")


@event.listens_for(AccessAuditLog, "before_delete")
def _prevent_audit_log_deletes(
    _mapper: Mapper[Any], _connection: Connection, _target: AccessAuditLog
) -> None:
    """Audit log entries cannot be deleted."""
    raise ValueError("Audit log entries cannot be deleted.")
