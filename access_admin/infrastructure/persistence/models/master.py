"""Application and master registry ORM models (Brand, Platform, DashboardType).

Brands, platforms and dashboard types mirror external registries and are
read-only for this service.
"""

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from access_admin.infrastructure.persistence.database import Base
from access_admin.infrastructure.persistence.models.mixins import (
    CuidMixin,
    StatusMixin,
    TimestampMixin,
)


class Application(CuidMixin, StatusMixin, TimestampMixin, Base):
    """Top-level access scope. Table: application."""

    __tablename__ = "application"

    name: Mapped[str] = mapped_column(String, nullable=False)


class Brand(CuidMixin, StatusMixin, TimestampMixin, Base):
    """Brand (company). Table: brand."""

    __tablename__ = "brand"

    name: Mapped[str] = mapped_column(String, nullable=False)
    company_name: Mapped[str | None] = mapped_column(String, nullable=True)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)


class Platform(CuidMixin, StatusMixin, TimestampMixin, Base):
    """Platform (channel/medium). Table: platform."""

    __tablename__ = "platform"

    name: Mapped[str] = mapped_column(String, nullable=False)
    logo_url: Mapped[str | None] = mapped_column(Text, nullable=True)


class DashboardType(CuidMixin, StatusMixin, Base):
    """Master dashboard kind. Table: dashboard_type."""

    __tablename__ = "dashboard_type"

    name: Mapped[str] = mapped_column(String, nullable=False)
    color: Mapped[str | None] = mapped_column(String, nullable=True)
