"""Master catalog ORM models: CatalogEntry and DashboardBinding."""

from sqlalchemy import ForeignKey, Index, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from access_admin.infrastructure.persistence.database import Base
from access_admin.infrastructure.persistence.models.mixins import (
    CuidMixin,
    StatusMixin,
    TimestampMixin,
)


class CatalogEntry(CuidMixin, StatusMixin, TimestampMixin, Base):
    """Licensed (application, brand, platform). Table: catalog_entry."""

    __tablename__ = "catalog_entry"

    app_id: Mapped[str] = mapped_column(
        String, ForeignKey("application.id", ondelete="CASCADE"), nullable=False
    )
    brand_id: Mapped[str] = mapped_column(
        String, ForeignKey("brand.id", ondelete="CASCADE"), nullable=False
    )
    platform_id: Mapped[str] = mapped_column(
        String, ForeignKey("platform.id", ondelete="CASCADE"), nullable=False
    )
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)
    updated_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "app_id", "brand_id", "platform_id", name="uq_catalog_entry_combination"
        ),
        Index("ix_catalog_entry_app_brand", "app_id", "brand_id"),
    )


class DashboardBinding(CuidMixin, TimestampMixin, Base):
    """Dashboard metadata for one licensed platform. Table: dashboard_binding."""

    __tablename__ = "dashboard_binding"

    app_id: Mapped[str] = mapped_column(
        String, ForeignKey("application.id", ondelete="CASCADE"), nullable=False
    )
    brand_id: Mapped[str] = mapped_column(
        String, ForeignKey("brand.id", ondelete="CASCADE"), nullable=False
    )
    platform_id: Mapped[str] = mapped_column(
        String, ForeignKey("platform.id", ondelete="CASCADE"), nullable=False
    )
    dashboard_type_id: Mapped[str] = mapped_column(
        String, ForeignKey("dashboard_type.id", ondelete="RESTRICT"), nullable=False
    )
    # Name snapshot so listings need no join.
    dashboard_type: Mapped[str] = mapped_column(String, nullable=False)
    url: Mapped[str | None] = mapped_column(Text, nullable=True)
    workspace_id: Mapped[str | None] = mapped_column(String, nullable=True)
    report_id: Mapped[str | None] = mapped_column(String, nullable=True)
    dataset_id: Mapped[str | None] = mapped_column(String, nullable=True)
    created_by: Mapped[str | None] = mapped_column(String, nullable=True)

    __table_args__ = (
        UniqueConstraint(
            "app_id", "brand_id", "platform_id", name="uq_dashboard_binding_combination"
        ),
    )
