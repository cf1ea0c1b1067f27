"""AccessGrant ORM model. Table: access_grant. Hard-deleted; history is in the audit log."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from access_admin.infrastructure.persistence.database import Base
from access_admin.infrastructure.persistence.models.mixins import CuidMixin


class AccessGrant(CuidMixin, Base):
    """Held access right: (user, application, brand, platform)."""

    __tablename__ = "access_grant"

    user_id: Mapped[str] = mapped_column(
        String, ForeignKey("app_user.id", ondelete="CASCADE"), nullable=False
    )
    app_id: Mapped[str] = mapped_column(
        String, ForeignKey("application.id", ondelete="CASCADE"), nullable=False
    )
    brand_id: Mapped[str] = mapped_column(
        String, ForeignKey("brand.id", ondelete="CASCADE"), nullable=False
    )
    platform_id: Mapped[str] = mapped_column(
        String, ForeignKey("platform.id", ondelete="CASCADE"), nullable=False
    )
    granted_by: Mapped[str | None] = mapped_column(String, nullable=True)
    granted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )

    __table_args__ = (
        UniqueConstraint(
            "user_id", "app_id", "brand_id", "platform_id", name="uq_access_grant"
        ),
        Index("ix_access_grant_user_app", "user_id", "app_id"),
        Index("ix_access_grant_catalog", "app_id", "brand_id", "platform_id"),
    )
