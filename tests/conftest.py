"""Pytest configuration and fixtures for access-admin.

HTTP tests use access_admin.main:app with the composition-root dependencies
overridden by in-memory fakes (tests/fakes.py). DB-dependent fixtures skip
when DATABASE_URL is not configured.
"""

import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from access_admin.api.v1.dependencies import (
    get_cache_invalidator,
    get_current_admin,
    get_stores_factory,
)
from access_admin.application.services.audit_recorder import AuditRecorder
from access_admin.core.limiter import limiter
from access_admin.infrastructure.persistence import database
from access_admin.main import app
from access_admin.shared.context import ActorContext
from tests.fakes import InMemoryStoresFactory, RecordingCacheInvalidator

ADMIN = ActorContext(
    admin_id="admin-1", ip_address="10.0.0.1", user_agent="pytest", request_id="req-1"
)


@pytest.fixture
def stores() -> InMemoryStoresFactory:
    """Empty in-memory store; seed via stores.state."""
    return InMemoryStoresFactory()


@pytest.fixture
def cache_invalidator() -> RecordingCacheInvalidator:
    return RecordingCacheInvalidator()


@pytest.fixture
def audit_recorder(stores: InMemoryStoresFactory) -> AuditRecorder:
    return AuditRecorder(stores, default_limit=100, max_limit=1000)


@pytest.fixture
def admin() -> ActorContext:
    return ADMIN


@pytest.fixture
async def client() -> AsyncClient:
    """Async HTTP client against the FastAPI app (ASGI), no overrides."""
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
async def api_client(
    stores: InMemoryStoresFactory, cache_invalidator: RecordingCacheInvalidator
) -> AsyncClient:
    """Client with an authenticated admin and in-memory stores."""
    app.dependency_overrides[get_stores_factory] = lambda: stores
    app.dependency_overrides[get_cache_invalidator] = lambda: cache_invalidator
    app.dependency_overrides[get_current_admin] = lambda: ADMIN
    limiter.reset()
    transport = ASGITransport(app=app)
    try:
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac
    finally:
        app.dependency_overrides.clear()


@pytest.fixture
async def db_session() -> AsyncSession:
    """Database session for repository/integration tests. Rolls back after test.

    Requires DATABASE_URL with migrations applied (alembic upgrade head).
    Skips when Postgres is not configured; run without DB via
    pytest -m 'not requires_db'.
    """
    try:
        session_factory = database.get_session_factory()
    except Exception:
        pytest.skip("Postgres not configured: set DATABASE_URL, then run: alembic upgrade head")
    async with session_factory() as session:
        yield session
        await session.rollback()
