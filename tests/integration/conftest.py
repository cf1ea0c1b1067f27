"""Seed rows for repository integration tests (rolled back with db_session)."""

from dataclasses import dataclass

import pytest

from access_admin.infrastructure.persistence.models import (
    Application,
    Brand,
    DashboardType,
    Platform,
    User,
)
from access_admin.shared.utils.generators import generate_cuid


@dataclass
class MasterRows:
    app: Application
    brands: list[Brand]
    platforms: list[Platform]
    users: list[User]
    dashboard_type: DashboardType


@pytest.fixture
async def master(db_session) -> MasterRows:
    """One application, two brands, three platforms, two users, one dashboard type."""
    suffix = generate_cuid()[:8]
    app = Application(name=f"App {suffix}")
    brands = [Brand(name=f"Brand {n} {suffix}") for n in ("A", "B")]
    platforms = [Platform(name=f"Platform {n} {suffix}") for n in (1, 2, 3)]
    users = [User(email=f"user{n}-{suffix}@example.com", first_name=f"User{n}") for n in (1, 2)]
    dashboard_type = DashboardType(name=f"Power BI {suffix}")
    db_session.add_all([app, *brands, *platforms, *users, dashboard_type])
    await db_session.flush()
    return MasterRows(
        app=app, brands=brands, platforms=platforms, users=users, dashboard_type=dashboard_type
    )
