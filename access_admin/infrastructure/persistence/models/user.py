"""User ORM model. Table: app_user. Users are the subjects of grants."""

from datetime import datetime

from sqlalchemy import DateTime, String
from sqlalchemy.orm import Mapped, mapped_column

from access_admin.infrastructure.persistence.database import Base
from access_admin.infrastructure.persistence.models.mixins import (
    CuidMixin,
    StatusMixin,
    TimestampMixin,
)


class User(CuidMixin, StatusMixin, TimestampMixin, Base):
    """User that access is granted to. Credentials live in the identity service."""

    __tablename__ = "app_user"

    email: Mapped[str] = mapped_column(String, nullable=False, unique=True)
    first_name: Mapped[str | None] = mapped_column(String, nullable=True)
    last_name: Mapped[str | None] = mapped_column(String, nullable=True)
    user_type: Mapped[str | None] = mapped_column(String, nullable=True)
    organisation: Mapped[str | None] = mapped_column(String, nullable=True)
    last_login_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True
    )
