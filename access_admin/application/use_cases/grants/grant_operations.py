"""Grant mutations: grant, reconcile, and remove user access.

Every operation validates the whole request before writing anything, runs in
one transaction, and appends exactly one audit record (SUCCESS or FAILED).
Additions are checked against ACTIVE catalog entries; a single unlicensed
platform rejects the entire call.
"""

from __future__ import annotations

from collections.abc import Iterable

from access_admin.application.dtos.access import (
    BrandPlatforms,
    GrantChangeResult,
    ScopeRemovalResult,
)
from access_admin.application.interfaces.repositories import AccessStores
from access_admin.application.services.reconciliation import (
    check_combination,
    compute_delta,
    flatten_brand_platforms,
    group_by_brand,
    normalize_ids,
)
from access_admin.application.use_cases.audited import AuditedService
from access_admin.domain.exceptions import (
    AccessNotFoundException,
    DuplicateAssignmentException,
    PlatformNotLicensedException,
    ValidationException,
)
from access_admin.shared.context import ActorContext
from access_admin.shared.enums import AccessAction


def _brands_body(brands: Iterable[BrandPlatforms]) -> list[dict[str, object]]:
    return [
        {"brand_id": b.brand_id, "platform_ids": sorted(b.platform_ids)} for b in brands
    ]


async def ensure_licensed(
    stores: AccessStores, app_id: str, brand_id: str, platform_ids: Iterable[str]
) -> None:
    """Raise PlatformNotLicensedException unless every platform has an ACTIVE entry."""
    requested = frozenset(platform_ids)
    if not requested:
        return
    licensed = await stores.catalog.list_platform_ids(app_id, brand_id, active_only=True)
    check = check_combination(licensed, requested)
    if not check.valid:
        raise PlatformNotLicensedException(app_id, brand_id, sorted(check.invalid))


class GrantService(AuditedService):
    """Grant reconciliation for one user, scoped to a brand or a whole application."""

    async def _invalidate_user(self, result: GrantChangeResult | ScopeRemovalResult) -> None:
        await self._cache.invalidate_user(result.user_id)

    async def grant_app_access(
        self,
        actor: ActorContext,
        user_id: str,
        app_id: str,
        brands: list[BrandPlatforms],
    ) -> GrantChangeResult:
        """First-time grant of an application to a user.

        Raises:
            ValidationException: No brands, a brand without platforms, or a repeated brand.
            ResourceNotFoundException: User, application or brand missing.
            DuplicateAssignmentException: User already holds a grant under the application.
            PlatformNotLicensedException: A requested platform is not licensed.
        """
        context = self._audit_context(
            actor,
            AccessAction.GRANT_APP_ACCESS.value,
            user_id=user_id,
            app_id=app_id,
            request_body={"brands": _brands_body(brands)},
        )

        async def operation(stores: AccessStores) -> GrantChangeResult:
            if not brands:
                raise ValidationException("At least one brand is required", field="brands")
            for item in brands:
                if not item.platform_ids:
                    raise ValidationException(
                        f"Brand {item.brand_id} requires at least one platform",
                        field="platform_ids",
                    )
            pairs = flatten_brand_platforms(brands)
            await self._require_user(stores, user_id)
            await self._require_app(stores, app_id)
            if await stores.grants.has_any(user_id, app_id):
                raise DuplicateAssignmentException(
                    "User already has access to this application",
                    assignment_type="access_grant",
                    details_extra={"user_id": user_id, "app_id": app_id},
                )
            for brand_id, platform_ids in group_by_brand(pairs).items():
                await self._require_brand(stores, brand_id)
                await ensure_licensed(stores, app_id, brand_id, platform_ids)
            await stores.grants.add_many(user_id, app_id, pairs, actor.admin_id)
            return GrantChangeResult(
                user_id=user_id, app_id=app_id, added=pairs, removed=frozenset()
            )

        return await self._mutate(
            context,
            operation,
            lambda r: f"Granted application access: {r.summary()}",
            self._invalidate_user,
        )

    async def set_app_access(
        self,
        actor: ActorContext,
        user_id: str,
        app_id: str,
        brands: list[BrandPlatforms],
    ) -> GrantChangeResult:
        """Reconcile all of a user's grants under an application to exactly `brands`.

        A brand omitted from `brands` (or given with no platforms) loses all its grants.
        """
        context = self._audit_context(
            actor,
            AccessAction.SET_APP_ACCESS.value,
            user_id=user_id,
            app_id=app_id,
            request_body={"brands": _brands_body(brands)},
        )

        async def operation(stores: AccessStores) -> GrantChangeResult:
            desired = flatten_brand_platforms(brands)
            await self._require_user(stores, user_id)
            await self._require_app(stores, app_id)
            current = await stores.grants.list_pairs(user_id, app_id)
            delta = compute_delta(current, desired)
            for brand_id, platform_ids in group_by_brand(delta.to_add).items():
                await self._require_brand(stores, brand_id)
                await ensure_licensed(stores, app_id, brand_id, platform_ids)
            await stores.grants.remove_many(user_id, app_id, delta.to_remove)
            await stores.grants.add_many(user_id, app_id, delta.to_add, actor.admin_id)
            return GrantChangeResult(
                user_id=user_id,
                app_id=app_id,
                added=delta.to_add,
                removed=delta.to_remove,
                unchanged=frozenset(current) & desired,
            )

        return await self._mutate(
            context, operation, lambda r: r.summary(), self._invalidate_user
        )

    async def add_brand_access(
        self,
        actor: ActorContext,
        user_id: str,
        app_id: str,
        brand_id: str,
        platform_ids: Iterable[str],
    ) -> GrantChangeResult:
        """Additive grant for one brand; platforms already held are reported as unchanged."""
        requested = list(platform_ids)
        context = self._audit_context(
            actor,
            AccessAction.ADD_BRAND_ACCESS.value,
            user_id=user_id,
            app_id=app_id,
            brand_id=brand_id,
            request_body={"platform_ids": sorted(requested)},
        )

        async def operation(stores: AccessStores) -> GrantChangeResult:
            if not requested:
                raise ValidationException(
                    "At least one platform is required", field="platform_ids"
                )
            wanted = normalize_ids(requested, "platform_ids")
            await self._require_user(stores, user_id)
            await self._require_app(stores, app_id)
            await self._require_brand(stores, brand_id)
            await ensure_licensed(stores, app_id, brand_id, wanted)
            current = await stores.grants.list_platform_ids(user_id, app_id, brand_id)
            to_add = wanted - current
            await stores.grants.add_many(
                user_id, app_id, ((brand_id, p) for p in to_add), actor.admin_id
            )
            return GrantChangeResult(
                user_id=user_id,
                app_id=app_id,
                added=frozenset((brand_id, p) for p in to_add),
                removed=frozenset(),
                unchanged=frozenset((brand_id, p) for p in wanted & current),
            )

        return await self._mutate(
            context,
            operation,
            lambda r: f"{r.summary()},unchanged:{len(r.unchanged)}",
            self._invalidate_user,
        )

    async def set_brand_platforms(
        self,
        actor: ActorContext,
        user_id: str,
        app_id: str,
        brand_id: str,
        platform_ids: Iterable[str],
    ) -> GrantChangeResult:
        """Reconcile a user's platforms for one brand to exactly `platform_ids`.

        An empty set unassigns every platform of the brand and succeeds even when
        nothing was held.
        """
        requested = list(platform_ids)
        context = self._audit_context(
            actor,
            AccessAction.UPDATE_BRAND_PLATFORMS.value,
            user_id=user_id,
            app_id=app_id,
            brand_id=brand_id,
            request_body={"platform_ids": sorted(requested)},
        )

        async def operation(stores: AccessStores) -> GrantChangeResult:
            desired = normalize_ids(requested, "platform_ids")
            await self._require_user(stores, user_id)
            await self._require_app(stores, app_id)
            await self._require_brand(stores, brand_id)
            current = await stores.grants.list_platform_ids(user_id, app_id, brand_id)
            delta = compute_delta(current, desired)
            await ensure_licensed(stores, app_id, brand_id, delta.to_add)
            await stores.grants.remove_many(
                user_id, app_id, [(brand_id, p) for p in delta.to_remove]
            )
            await stores.grants.add_many(
                user_id, app_id, [(brand_id, p) for p in delta.to_add], actor.admin_id
            )
            return GrantChangeResult(
                user_id=user_id,
                app_id=app_id,
                added=frozenset((brand_id, p) for p in delta.to_add),
                removed=frozenset((brand_id, p) for p in delta.to_remove),
                unchanged=frozenset((brand_id, p) for p in current & desired),
            )

        return await self._mutate(
            context, operation, lambda r: r.summary(), self._invalidate_user
        )

    async def remove_brand_access(
        self, actor: ActorContext, user_id: str, app_id: str, brand_id: str
    ) -> ScopeRemovalResult:
        """Delete every grant of the user for (application, brand).

        Raises:
            AccessNotFoundException: The user held nothing for the brand.
        """
        context = self._audit_context(
            actor,
            AccessAction.REMOVE_BRAND_ACCESS.value,
            user_id=user_id,
            app_id=app_id,
            brand_id=brand_id,
        )

        async def operation(stores: AccessStores) -> ScopeRemovalResult:
            await self._require_user(stores, user_id)
            await self._require_app(stores, app_id)
            removed = await stores.grants.remove_scope(user_id, app_id, brand_id)
            if not removed:
                raise AccessNotFoundException(user_id, app_id, brand_id)
            return ScopeRemovalResult(
                user_id=user_id,
                app_id=app_id,
                brand_id=brand_id,
                brands_removed=1,
                platforms_removed=len(removed),
            )

        return await self._mutate(
            context,
            operation,
            lambda r: f"Removed brand access: {r.platforms_removed} platform(s)",
            self._invalidate_user,
        )

    async def remove_app_access(
        self, actor: ActorContext, user_id: str, app_id: str
    ) -> ScopeRemovalResult:
        """Delete every grant of the user under the application.

        Raises:
            AccessNotFoundException: The user held nothing under the application.
        """
        context = self._audit_context(
            actor,
            AccessAction.REMOVE_APP_ACCESS.value,
            user_id=user_id,
            app_id=app_id,
        )

        async def operation(stores: AccessStores) -> ScopeRemovalResult:
            await self._require_user(stores, user_id)
            await self._require_app(stores, app_id)
            removed = await stores.grants.remove_scope(user_id, app_id)
            if not removed:
                raise AccessNotFoundException(user_id, app_id)
            return ScopeRemovalResult(
                user_id=user_id,
                app_id=app_id,
                brand_id=None,
                brands_removed=len({brand_id for brand_id, _ in removed}),
                platforms_removed=len(removed),
            )

        return await self._mutate(
            context,
            operation,
            lambda r: (
                f"Removed application access: {r.brands_removed} brand(s), "
                f"{r.platforms_removed} platform(s)"
            ),
            self._invalidate_user,
        )
