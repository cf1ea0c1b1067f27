"""User directory use cases: paged listing, lookup, and audited status changes."""

from __future__ import annotations

from access_admin.application.dtos.directory import UserPage, UserResult
from access_admin.application.interfaces.repositories import AccessStores
from access_admin.application.use_cases.audited import AuditedService
from access_admin.domain.enums import RecordStatus
from access_admin.domain.exceptions import ResourceNotFoundException, ValidationException
from access_admin.shared.context import ActorContext
from access_admin.shared.enums import AccessAction

MAX_PAGE_SIZE = 100


class UserService(AuditedService):
    """Users that grants are issued to. Creation and credentials live in the identity service."""

    async def list_users(
        self, search: str | None = None, page: int = 1, limit: int = 10
    ) -> UserPage:
        """Return one page of users; search matches name or email (case-insensitive)."""
        if page < 1:
            raise ValidationException("page must be >= 1", field="page")
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationException(
                f"limit must be between 1 and {MAX_PAGE_SIZE}", field="limit"
            )
        term = search.strip() if search else None
        async with self._stores() as stores:
            items, total = await stores.directory.list_users(
                search=term or None, offset=(page - 1) * limit, limit=limit
            )
        return UserPage(items=items, total=total, page=page, limit=limit)

    async def get_user(self, user_id: str) -> UserResult:
        async with self._stores() as stores:
            return await self._require_user(stores, user_id)

    async def update_user_status(
        self, actor: ActorContext, user_id: str, status: str
    ) -> UserResult:
        """Set ACTIVE/INACTIVE; audited and invalidates the user's cached access."""
        context = self._audit_context(
            actor,
            AccessAction.UPDATE_USER_STATUS.value,
            user_id=user_id,
            request_body={"status": status},
        )

        async def operation(stores: AccessStores) -> UserResult:
            if status not in RecordStatus.values():
                raise ValidationException(
                    f"status must be one of {RecordStatus.values()}", field="status"
                )
            updated = await stores.directory.update_user_status(user_id, status)
            if updated is None:
                raise ResourceNotFoundException("user", user_id)
            return updated

        async def invalidate(result: UserResult) -> None:
            await self._cache.invalidate_user(result.id)

        return await self._mutate(
            context,
            operation,
            lambda r: f"User status changed to {r.status}",
            invalidate,
        )
