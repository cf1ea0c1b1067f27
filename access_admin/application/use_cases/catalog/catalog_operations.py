"""Catalog mutations: create, reconcile, and delete (application, brand) mappings.

Removing a licensed platform always runs remove_catalog_entries, which deletes
in a fixed order (dashboard bindings, catalog entries, user grants) inside the
caller's transaction, so no grant outlives the entry that licensed it.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace

from access_admin.application.dtos.catalog import (
    DashboardBindingInput,
    MappingChangeResult,
    MappingDeletionResult,
)
from access_admin.application.interfaces.repositories import AccessStores
from access_admin.application.services.reconciliation import compute_delta, normalize_ids
from access_admin.application.use_cases.audited import AuditedService
from access_admin.domain.exceptions import (
    DuplicateAssignmentException,
    ResourceNotFoundException,
    ValidationException,
)
from access_admin.shared.context import ActorContext
from access_admin.shared.enums import AccessAction


async def remove_catalog_entries(
    stores: AccessStores,
    app_id: str,
    brand_id: str,
    platform_ids: Iterable[str] | None = None,
) -> MappingDeletionResult:
    """Cascade for (app, brand[, platforms]): bindings, then entries, then grants.

    platform_ids=None removes the whole mapping.
    """
    scope = None if platform_ids is None else list(platform_ids)
    dashboards_removed = await stores.catalog.remove_bindings(app_id, brand_id, scope)
    entries_removed = await stores.catalog.remove_entries(app_id, brand_id, scope)
    revoked_users = await stores.grants.remove_for_catalog(app_id, brand_id, scope)
    return MappingDeletionResult(
        app_id=app_id,
        brand_id=brand_id,
        dashboards_removed=dashboards_removed,
        entries_removed=entries_removed,
        grants_removed=len(revoked_users),
        affected_user_ids=frozenset(revoked_users),
    )


def _dashboards_body(dashboards: Iterable[DashboardBindingInput]) -> list[dict[str, object]]:
    return [
        {
            "platform_id": d.platform_id,
            "dashboard_type_id": d.dashboard_type_id,
            "url": d.url,
            "workspace_id": d.workspace_id,
            "report_id": d.report_id,
            "dataset_id": d.dataset_id,
        }
        for d in dashboards
    ]


class CatalogService(AuditedService):
    """Catalog reconciliation for one (application, brand)."""

    async def _invalidate_all(self, _result: object) -> None:
        await self._cache.invalidate_all()

    async def _validate_mapping(
        self,
        stores: AccessStores,
        app_id: str,
        brand_id: str,
        platform_ids: frozenset[str],
        dashboards: list[DashboardBindingInput],
    ) -> dict[str, str]:
        """Check app, brand, platforms and dashboards; return dashboard type names by id."""
        await self._require_app(stores, app_id)
        await self._require_brand(stores, brand_id)
        known = await stores.directory.get_existing_platform_ids(platform_ids)
        unknown = sorted(platform_ids - known)
        if unknown:
            raise ResourceNotFoundException("platform", ", ".join(unknown))
        seen: set[str] = set()
        for binding in dashboards:
            if binding.platform_id not in platform_ids:
                raise ValidationException(
                    f"Dashboard platform {binding.platform_id} is not among the mapped platforms",
                    field="dashboards",
                )
            if binding.platform_id in seen:
                raise ValidationException(
                    f"Platform {binding.platform_id} has more than one dashboard",
                    field="dashboards",
                )
            seen.add(binding.platform_id)
        type_ids = {d.dashboard_type_id for d in dashboards}
        type_names = await stores.directory.get_dashboard_type_names(type_ids)
        missing = sorted(type_ids - set(type_names))
        if missing:
            raise ResourceNotFoundException("dashboard_type", ", ".join(missing))
        return type_names

    async def _reconcile_entries(
        self,
        stores: AccessStores,
        actor: ActorContext,
        app_id: str,
        brand_id: str,
        current: frozenset[str],
        wanted: frozenset[str],
        bindings: list[DashboardBindingInput],
        type_names: dict[str, str],
    ) -> MappingChangeResult:
        """Converge stored entries to wanted; dropped platforms cascade, bindings are replaced."""
        delta = compute_delta(current, wanted)
        cascade = await remove_catalog_entries(stores, app_id, brand_id, delta.to_remove)
        await stores.catalog.remove_bindings(app_id, brand_id)
        await stores.catalog.activate_entries(
            app_id, brand_id, wanted & current, actor.admin_id
        )
        await stores.catalog.add_entries(app_id, brand_id, delta.to_add, actor.admin_id)
        created = await stores.catalog.add_bindings(
            app_id, brand_id, bindings, type_names, actor.admin_id
        )
        return MappingChangeResult(
            app_id=app_id,
            brand_id=brand_id,
            added=delta.to_add,
            removed=delta.to_remove,
            dashboards=created,
            grants_revoked=cascade.grants_removed,
            affected_user_ids=cascade.affected_user_ids,
        )

    async def create_mapping(
        self,
        actor: ActorContext,
        app_id: str,
        brand_id: str,
        platform_ids: Iterable[str],
        dashboards: list[DashboardBindingInput] | None = None,
    ) -> MappingChangeResult:
        """License platforms (and optional dashboards) for a brand not yet mapped.

        A brand whose entries are all inactive counts as unmapped; those rows are
        reactivated when requested again and cascaded away otherwise.

        Raises:
            ValidationException: Empty platforms or inconsistent dashboards.
            ResourceNotFoundException: Application, brand, platform or dashboard type missing.
            DuplicateAssignmentException: The brand is already mapped for the application.
        """
        requested = list(platform_ids)
        bindings = list(dashboards or [])
        context = self._audit_context(
            actor,
            AccessAction.CREATE_BRAND_MAPPING.value,
            app_id=app_id,
            brand_id=brand_id,
            request_body={
                "platform_ids": sorted(requested),
                "dashboards": _dashboards_body(bindings),
            },
        )

        async def operation(stores: AccessStores) -> MappingChangeResult:
            if not requested:
                raise ValidationException(
                    "At least one platform is required", field="platform_ids"
                )
            wanted = normalize_ids(requested, "platform_ids")
            type_names = await self._validate_mapping(
                stores, app_id, brand_id, wanted, bindings
            )
            if await stores.catalog.list_platform_ids(app_id, brand_id, active_only=True):
                raise DuplicateAssignmentException(
                    "Brand is already mapped for this application",
                    assignment_type="catalog_entry",
                    details_extra={"app_id": app_id, "brand_id": brand_id},
                )
            # Inactive leftovers are reused or cascaded away, never duplicated.
            stale = await stores.catalog.list_platform_ids(app_id, brand_id)
            result = await self._reconcile_entries(
                stores, actor, app_id, brand_id, stale, wanted, bindings, type_names
            )
            return replace(result, added=wanted)

        return await self._mutate(
            context, operation, lambda r: r.summary(), self._invalidate_all
        )

    async def update_mapping(
        self,
        actor: ActorContext,
        app_id: str,
        brand_id: str,
        platform_ids: Iterable[str],
        dashboards: list[DashboardBindingInput] | None = None,
    ) -> MappingChangeResult:
        """Reconcile a mapping to exactly these platforms; replace all dashboard bindings.

        Platforms dropped from the mapping cascade: their user grants are revoked
        in the same transaction. An empty platform set removes the whole mapping.

        Raises:
            ValidationException: Blank ids or inconsistent dashboards.
            ResourceNotFoundException: Mapping (or referenced entity) missing.
        """
        requested = list(platform_ids)
        bindings = list(dashboards or [])
        context = self._audit_context(
            actor,
            AccessAction.UPDATE_BRAND_MAPPING.value,
            app_id=app_id,
            brand_id=brand_id,
            request_body={
                "platform_ids": sorted(requested),
                "dashboards": _dashboards_body(bindings),
            },
        )

        async def operation(stores: AccessStores) -> MappingChangeResult:
            wanted = normalize_ids(requested, "platform_ids")
            current = await stores.catalog.list_platform_ids(app_id, brand_id)
            if not current:
                raise ResourceNotFoundException("brand_mapping", f"{app_id}/{brand_id}")
            type_names = await self._validate_mapping(
                stores, app_id, brand_id, wanted, bindings
            )
            return await self._reconcile_entries(
                stores, actor, app_id, brand_id, current, wanted, bindings, type_names
            )

        return await self._mutate(
            context, operation, lambda r: r.summary(), self._invalidate_all
        )

    async def delete_mapping(
        self, actor: ActorContext, app_id: str, brand_id: str
    ) -> MappingDeletionResult:
        """Remove the whole mapping and every grant it licensed.

        Raises:
            ResourceNotFoundException: The brand is not mapped for the application.
        """
        context = self._audit_context(
            actor,
            AccessAction.DELETE_BRAND_MAPPING.value,
            app_id=app_id,
            brand_id=brand_id,
        )

        async def operation(stores: AccessStores) -> MappingDeletionResult:
            if not await stores.catalog.list_platform_ids(app_id, brand_id):
                raise ResourceNotFoundException("brand_mapping", f"{app_id}/{brand_id}")
            return await remove_catalog_entries(stores, app_id, brand_id)

        return await self._mutate(
            context,
            operation,
            lambda r: (
                f"Deleted mapping: dashboards:{r.dashboards_removed},"
                f"entries:{r.entries_removed},grants:{r.grants_removed}"
            ),
            self._invalidate_all,
        )
