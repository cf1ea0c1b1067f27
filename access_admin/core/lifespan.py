"""Application lifespan: startup and shutdown.

Wiring of infrastructure only (HTTP client, Redis, cache invalidator,
telemetry, DB engine dispose); no business logic here.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI

from access_admin.core.config import get_settings
from access_admin.infrastructure.cache import CacheService, create_cache_invalidator
from access_admin.infrastructure.persistence import database
from access_admin.shared.telemetry import (
    instrument_app,
    setup_logging,
    setup_tracing,
    shutdown_tracing,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup order: logging, shared HTTP client, Redis (if enabled), cache
    invalidator, telemetry (if enabled). Shutdown order: HTTP client close,
    Redis disconnect, telemetry shutdown, SQL engine dispose.
    """
    settings = get_settings()
    setup_logging()

    # ---- Startup ----
    # Shared client for the identity service and HTTP cache invalidation.
    app.state.http_client = httpx.AsyncClient(timeout=settings.central_auth_timeout_seconds)

    cache: CacheService | None = None
    if settings.redis_enabled:
        cache = CacheService(settings=settings)
        await cache.connect()
    app.state.cache = cache

    app.state.cache_invalidator = create_cache_invalidator(
        settings.cache_invalidation_backend,
        cache=cache,
        http_client=app.state.http_client,
        base_url=settings.cache_invalidation_url,
    )
    logger.info(
        "Cache invalidation backend: %s", type(app.state.cache_invalidator).__name__
    )

    app.state.tracer_provider = setup_tracing(settings)
    if app.state.tracer_provider is not None:
        instrument_app(
            app,
            app.state.tracer_provider,
            engine=database.get_engine(),
            redis=cache is not None,
        )

    yield

    # ---- Shutdown ----
    await app.state.http_client.aclose()
    app.state.http_client = None
    logger.info("HTTP client closed")

    if app.state.cache is not None:
        await app.state.cache.disconnect()
        app.state.cache = None

    shutdown_tracing(app.state.tracer_provider)
    app.state.tracer_provider = None

    await database.dispose_engine()
