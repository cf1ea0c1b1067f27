"""Presentation-layer dependency injection (composition root).

Provides FastAPI Depends() for the stores factory, collaborators and
application services. Routes depend only on these dependencies, not on
infrastructure directly. Tests replace them via app.dependency_overrides.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from access_admin.application.interfaces.repositories import StoresFactory
from access_admin.application.interfaces.services import (
    ICacheInvalidator,
    IIdentityProvider,
)
from access_admin.application.services.audit_recorder import AuditRecorder
from access_admin.application.use_cases import (
    AccessQueryService,
    CatalogQueryService,
    CatalogService,
    GrantService,
    UserService,
)
from access_admin.core.config import get_settings
from access_admin.domain.exceptions import AuthenticationException
from access_admin.infrastructure.cache import NullCacheInvalidator
from access_admin.infrastructure.persistence.database import get_session_factory
from access_admin.infrastructure.persistence.transaction import SqlAccessStoreFactory
from access_admin.infrastructure.security import CentralAuthClient, JwtIdentityProvider
from access_admin.shared.context import ActorContext
from access_admin.shared.request_audit import get_audit_request_context

_http_bearer = HTTPBearer(auto_error=False)


def get_stores_factory() -> StoresFactory:
    """SQL unit of work; raises SqlNotConfiguredException when DATABASE_URL is unset."""
    return SqlAccessStoreFactory(get_session_factory())


def get_cache_invalidator(request: Request) -> ICacheInvalidator:
    """Invalidator built at startup (lifespan); no-op before startup."""
    invalidator = getattr(request.app.state, "cache_invalidator", None)
    return invalidator if invalidator is not None else NullCacheInvalidator()


def get_audit_recorder(
    stores_factory: Annotated[StoresFactory, Depends(get_stores_factory)],
) -> AuditRecorder:
    settings = get_settings()
    return AuditRecorder(
        stores_factory,
        default_limit=settings.audit_default_limit,
        max_limit=settings.audit_max_limit,
    )


def get_grant_service(
    stores_factory: Annotated[StoresFactory, Depends(get_stores_factory)],
    audit_recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    cache_invalidator: Annotated[ICacheInvalidator, Depends(get_cache_invalidator)],
) -> GrantService:
    return GrantService(stores_factory, audit_recorder, cache_invalidator)


def get_catalog_service(
    stores_factory: Annotated[StoresFactory, Depends(get_stores_factory)],
    audit_recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    cache_invalidator: Annotated[ICacheInvalidator, Depends(get_cache_invalidator)],
) -> CatalogService:
    return CatalogService(stores_factory, audit_recorder, cache_invalidator)


def get_user_service(
    stores_factory: Annotated[StoresFactory, Depends(get_stores_factory)],
    audit_recorder: Annotated[AuditRecorder, Depends(get_audit_recorder)],
    cache_invalidator: Annotated[ICacheInvalidator, Depends(get_cache_invalidator)],
) -> UserService:
    return UserService(stores_factory, audit_recorder, cache_invalidator)


def get_access_query_service(
    stores_factory: Annotated[StoresFactory, Depends(get_stores_factory)],
) -> AccessQueryService:
    return AccessQueryService(stores_factory)


def get_catalog_query_service(
    stores_factory: Annotated[StoresFactory, Depends(get_stores_factory)],
) -> CatalogQueryService:
    return CatalogQueryService(stores_factory)


def get_identity_provider(request: Request) -> IIdentityProvider:
    """Identity backend selected by AUTH_BACKEND."""
    settings = get_settings()
    if settings.auth_backend == "jwt":
        return JwtIdentityProvider(settings)
    return CentralAuthClient(getattr(request.app.state, "http_client", None), settings)


async def get_current_admin(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(_http_bearer)],
    identity_provider: Annotated[IIdentityProvider, Depends(get_identity_provider)],
) -> ActorContext:
    """Authenticate the bearer token and return the actor for audit records.

    Raises:
        AuthenticationException: Missing or rejected token (401).
        AuthorizationException: Token holder is not an administrator (403).
    """
    if credentials is None or not credentials.credentials:
        raise AuthenticationException("Missing bearer token")
    identity = await identity_provider.authenticate(credentials.credentials)
    request_id, ip_address, user_agent = get_audit_request_context(request)
    return ActorContext(
        admin_id=identity.admin_id,
        ip_address=ip_address,
        user_agent=user_agent,
        request_id=request_id,
    )


CurrentAdmin = Annotated[ActorContext, Depends(get_current_admin)]
