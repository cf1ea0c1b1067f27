"""Base for audited mutations: one transaction, one audit record, then cache invalidation."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from access_admin.application.dtos.audit_log import AuditContext
from access_admin.application.interfaces.repositories import AccessStores, StoresFactory
from access_admin.application.interfaces.services import ICacheInvalidator
from access_admin.application.services.audit_recorder import AuditRecorder
from access_admin.domain.exceptions import ResourceNotFoundException
from access_admin.shared.context import ActorContext

T = TypeVar("T")


class AuditedService:
    """Runs each mutation through _mutate.

    The mutation body gets the repositories of one open transaction. On any
    exception the transaction rolls back, a FAILED record is appended and the
    exception propagates unchanged. After commit a SUCCESS record is appended
    and the invalidation callback runs.
    """

    def __init__(
        self,
        stores_factory: StoresFactory,
        audit_recorder: AuditRecorder,
        cache_invalidator: ICacheInvalidator,
    ) -> None:
        self._stores = stores_factory
        self._audit = audit_recorder
        self._cache = cache_invalidator

    @staticmethod
    def _audit_context(
        actor: ActorContext,
        action: str,
        *,
        user_id: str | None = None,
        app_id: str | None = None,
        brand_id: str | None = None,
        platform_id: str | None = None,
        request_body: dict[str, Any] | None = None,
    ) -> AuditContext:
        return AuditContext(
            action=action,
            performed_by=actor.admin_id,
            user_id=user_id,
            app_id=app_id,
            brand_id=brand_id,
            platform_id=platform_id,
            request_body=request_body,
            ip_address=actor.ip_address,
            user_agent=actor.user_agent,
            request_id=actor.request_id,
        )

    async def _mutate(
        self,
        context: AuditContext,
        operation: Callable[[AccessStores], Awaitable[T]],
        describe: Callable[[T], str],
        invalidate: Callable[[T], Awaitable[None]] | None = None,
    ) -> T:
        try:
            async with self._stores() as stores:
                result = await operation(stores)
        except Exception as exc:
            await self._audit.log_failure(context, exc)
            raise
        await self._audit.log_success(context, describe(result))
        if invalidate is not None:
            await invalidate(result)
        return result

    @staticmethod
    async def _require_user(stores: AccessStores, user_id: str):
        user = await stores.directory.get_user(user_id)
        if user is None:
            raise ResourceNotFoundException("user", user_id)
        return user

    @staticmethod
    async def _require_app(stores: AccessStores, app_id: str):
        app = await stores.directory.get_app(app_id)
        if app is None:
            raise ResourceNotFoundException("application", app_id)
        return app

    @staticmethod
    async def _require_brand(stores: AccessStores, brand_id: str):
        brand = await stores.directory.get_brand(brand_id)
        if brand is None:
            raise ResourceNotFoundException("brand", brand_id)
        return brand
