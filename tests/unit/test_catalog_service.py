"""CatalogService tests: mapping lifecycle and the grant cascade."""

import pytest

from access_admin.application.dtos.catalog import DashboardBindingInput
from access_admin.application.use_cases.catalog.catalog_operations import CatalogService
from access_admin.domain.exceptions import (
    DuplicateAssignmentException,
    ResourceNotFoundException,
    ValidationException,
)
from access_admin.shared.enums import AccessAction


@pytest.fixture
def service(stores, audit_recorder, cache_invalidator) -> CatalogService:
    state = stores.state
    state.add_app("A", "Analytics")
    state.add_app("A2", "Reporting")
    state.add_brand("B", "Brand B")
    state.add_brand("C", "Brand C")
    for platform_id in ("P1", "P2", "P3"):
        state.add_platform(platform_id)
    state.add_dashboard_type("DT1", "Power BI")
    state.add_user("U1")
    state.add_user("U2")
    return CatalogService(stores, audit_recorder, cache_invalidator)


def _dashboard(platform_id: str, type_id: str = "DT1") -> DashboardBindingInput:
    return DashboardBindingInput(
        platform_id=platform_id,
        dashboard_type_id=type_id,
        url="https://reports.example.com/r/1",
        workspace_id="ws-1",
        report_id="rep-1",
    )


async def test_create_mapping_licenses_platforms_and_binds_dashboards(
    service, stores, admin, cache_invalidator
) -> None:
    result = await service.create_mapping(admin, "A", "B", ["P1", "P2"], [_dashboard("P1")])

    assert result.added == {"P1", "P2"}
    assert result.dashboards == 1
    assert stores.state.catalog == {("A", "B", "P1"): "ACTIVE", ("A", "B", "P2"): "ACTIVE"}
    binding = stores.state.bindings[("A", "B", "P1")]
    assert binding.dashboard_type == "Power BI"
    assert binding.workspace_id == "ws-1"
    assert stores.state.audit[-1].action == AccessAction.CREATE_BRAND_MAPPING.value
    assert stores.state.audit[-1].status == "SUCCESS"
    assert cache_invalidator.all_calls == 1


async def test_create_mapping_conflicts_when_brand_already_mapped(service, stores, admin) -> None:
    stores.state.license("A", "B", "P1")

    with pytest.raises(DuplicateAssignmentException):
        await service.create_mapping(admin, "A", "B", ["P2"])
    assert stores.state.catalog == {("A", "B", "P1"): "ACTIVE"}
    assert stores.state.audit[-1].status == "FAILED"


async def test_create_mapping_requires_platforms(service, admin) -> None:
    with pytest.raises(ValidationException):
        await service.create_mapping(admin, "A", "B", [])


async def test_create_mapping_over_inactive_entries(service, stores, admin) -> None:
    stores.state.license("A", "B", "P1", "P2", status="INACTIVE")
    stores.state.grant("U1", "A", "B", "P2")
    async with stores() as s:
        assert [b.id for b in await s.catalog.list_unmapped_brands("A")] == ["B", "C"]

    result = await service.create_mapping(admin, "A", "B", ["P1", "P3"])

    assert result.added == {"P1", "P3"}
    assert result.removed == {"P2"}
    assert stores.state.catalog == {
        ("A", "B", "P1"): "ACTIVE",
        ("A", "B", "P3"): "ACTIVE",
    }
    assert stores.state.grants == set()
    assert stores.state.audit[-1].status == "SUCCESS"


async def test_create_mapping_rejects_dashboard_for_unmapped_platform(service, stores, admin) -> None:
    with pytest.raises(ValidationException) as exc_info:
        await service.create_mapping(admin, "A", "B", ["P1"], [_dashboard("P2")])
    assert exc_info.value.details == {"field": "dashboards"}
    assert stores.state.catalog == {}


async def test_create_mapping_rejects_two_dashboards_for_one_platform(service, admin) -> None:
    with pytest.raises(ValidationException):
        await service.create_mapping(
            admin, "A", "B", ["P1"], [_dashboard("P1"), _dashboard("P1")]
        )


async def test_create_mapping_unknown_dashboard_type(service, admin) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.create_mapping(admin, "A", "B", ["P1"], [_dashboard("P1", "DT404")])
    assert exc_info.value.details["resource_type"] == "dashboard_type"


async def test_create_mapping_unknown_platform(service, admin) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.create_mapping(admin, "A", "B", ["P1", "P404"])
    assert exc_info.value.details == {"resource_type": "platform", "resource_id": "P404"}


async def test_update_mapping_cascades_only_dropped_platform(service, stores, admin) -> None:
    state = stores.state
    state.license("A", "B", "P1", "P2")
    state.license("A", "C", "P1")
    state.license("A2", "B", "P1")
    state.grant("U1", "A", "B", "P1", "P2")
    state.grant("U2", "A", "B", "P1")
    state.grant("U1", "A", "C", "P1")
    state.grant("U1", "A2", "B", "P1")

    result = await service.update_mapping(admin, "A", "B", ["P2", "P3"])

    assert result.added == {"P3"}
    assert result.removed == {"P1"}
    assert result.grants_revoked == 2
    assert result.affected_user_ids == {"U1", "U2"}
    assert state.grants == {
        ("U1", "A", "B", "P2"),
        ("U1", "A", "C", "P1"),
        ("U1", "A2", "B", "P1"),
    }
    assert state.catalog[("A", "B", "P3")] == "ACTIVE"
    assert ("A", "B", "P1") not in state.catalog
    assert state.audit[-1].action_details == (
        "Added: P3, Removed: P1, dashboards: 0, grants revoked: 2"
    )


async def test_update_mapping_replaces_dashboards(service, stores, admin) -> None:
    await service.create_mapping(admin, "A", "B", ["P1", "P2"], [_dashboard("P1")])

    result = await service.update_mapping(admin, "A", "B", ["P1", "P2"], [_dashboard("P2")])

    assert result.dashboards == 1
    assert not result.added and not result.removed
    assert set(stores.state.bindings) == {("A", "B", "P2")}


async def test_update_mapping_reactivates_inactive_entries(service, stores, admin) -> None:
    stores.state.license("A", "B", "P1", status="INACTIVE")
    stores.state.license("A", "B", "P2")

    await service.update_mapping(admin, "A", "B", ["P1", "P2"])

    assert stores.state.catalog[("A", "B", "P1")] == "ACTIVE"


async def test_update_mapping_to_no_platforms_revokes_everything(
    service, stores, admin, cache_invalidator
) -> None:
    stores.state.license("A", "B", "P1", "P2")
    stores.state.grant("U1", "A", "B", "P1")
    stores.state.grant("U2", "A", "B", "P1", "P2")

    result = await service.update_mapping(admin, "A", "B", [])

    assert result.removed == {"P1", "P2"}
    assert result.grants_revoked == 3
    assert result.affected_user_ids == {"U1", "U2"}
    assert stores.state.catalog == {}
    assert stores.state.grants == set()
    assert stores.state.audit[-1].status == "SUCCESS"
    assert cache_invalidator.all_calls == 1


async def test_update_mapping_unmapped_brand_is_not_found(service, stores, admin) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await service.update_mapping(admin, "A", "B", ["P1"])
    assert exc_info.value.details["resource_type"] == "brand_mapping"
    assert stores.state.catalog == {}


async def test_failed_update_leaves_grants_intact(service, stores, admin) -> None:
    stores.state.license("A", "B", "P1", "P2")
    stores.state.grant("U1", "A", "B", "P1")

    with pytest.raises(ResourceNotFoundException):
        await service.update_mapping(admin, "A", "B", ["P2"], [_dashboard("P2", "DT404")])

    assert stores.state.grants == {("U1", "A", "B", "P1")}
    assert ("A", "B", "P1") in stores.state.catalog


async def test_delete_mapping_removes_bindings_entries_and_grants(
    service, stores, admin, cache_invalidator
) -> None:
    await service.create_mapping(admin, "A", "B", ["P1", "P2"], [_dashboard("P1")])
    stores.state.grant("U1", "A", "B", "P1", "P2")
    stores.state.grant("U2", "A", "B", "P2")
    stores.state.license("A", "C", "P1")
    stores.state.grant("U2", "A", "C", "P1")

    result = await service.delete_mapping(admin, "A", "B")

    assert result.dashboards_removed == 1
    assert result.entries_removed == 2
    assert result.grants_removed == 3
    assert result.affected_user_ids == {"U1", "U2"}
    assert stores.state.bindings == {}
    assert stores.state.catalog == {("A", "C", "P1"): "ACTIVE"}
    assert stores.state.grants == {("U2", "A", "C", "P1")}
    assert stores.state.audit[-1].action_details == (
        "Deleted mapping: dashboards:1,entries:2,grants:3"
    )
    assert cache_invalidator.all_calls == 2


async def test_delete_mapping_not_found(service, stores, admin, cache_invalidator) -> None:
    with pytest.raises(ResourceNotFoundException):
        await service.delete_mapping(admin, "A", "B")
    assert stores.state.audit[-1].action == AccessAction.DELETE_BRAND_MAPPING.value
    assert stores.state.audit[-1].status == "FAILED"
    assert cache_invalidator.all_calls == 0
