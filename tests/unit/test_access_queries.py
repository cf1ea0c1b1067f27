"""Read-side tests for AccessQueryService and CatalogQueryService."""

import pytest

from access_admin.application.use_cases.catalog.catalog_queries import CatalogQueryService
from access_admin.application.use_cases.grants.access_queries import AccessQueryService
from access_admin.domain.exceptions import (
    AccessNotFoundException,
    ResourceNotFoundException,
)


@pytest.fixture
def seeded(stores):
    state = stores.state
    state.add_user("U", "Ada", "Lovelace")
    state.add_app("A", "Analytics")
    state.add_app("A2", "Billing")
    state.add_app("OLD", "Legacy", status="INACTIVE")
    state.add_brand("B", "Acme")
    state.add_brand("C", "Bolt")
    state.add_brand("D", "Crux")
    state.add_platform("P1", "Email")
    state.add_platform("P2", "Web")
    state.add_dashboard_type("DT1", "Power BI")
    state.license("A", "B", "P1", "P2")
    state.license("A", "C", "P1")
    state.license("A", "D", "P2", status="INACTIVE")
    state.grant("U", "A", "B", "P1", "P2")
    return stores


@pytest.fixture
def queries(seeded) -> AccessQueryService:
    return AccessQueryService(seeded)


@pytest.fixture
def catalog(seeded) -> CatalogQueryService:
    return CatalogQueryService(seeded)


async def test_check_app_access(queries) -> None:
    granted = await queries.check_app_access("U", "A")
    assert granted.has_access is True
    assert granted.user_name == "Ada Lovelace"
    assert granted.app_name == "Analytics"

    assert (await queries.check_app_access("U", "A2")).has_access is False


async def test_check_app_access_unknown_application(queries) -> None:
    with pytest.raises(ResourceNotFoundException) as exc_info:
        await queries.check_app_access("U", "nope")
    assert exc_info.value.details["resource_type"] == "application"


async def test_get_user_app_brands(queries) -> None:
    result = await queries.get_user_app_brands("U", "A")

    assert result.app_name == "Analytics"
    assert [b.brand_name for b in result.brands] == ["Acme"]
    assert [p.platform_name for p in result.brands[0].platforms] == ["Email", "Web"]
    assert result.total_brands == 1
    assert result.total_platforms == 2


async def test_get_user_app_brands_without_grants(queries) -> None:
    with pytest.raises(AccessNotFoundException):
        await queries.get_user_app_brands("U", "A2")


async def test_get_access_tree(seeded, queries) -> None:
    seeded.state.license("A2", "C", "P1")
    seeded.state.grant("U", "A2", "C", "P1")

    tree = await queries.get_access_tree("U")

    assert [a.app_name for a in tree] == ["Analytics", "Billing"]
    assert [b.brand_id for b in tree[1].brands] == ["C"]


async def test_get_access_tree_empty_for_user_without_grants(seeded, queries) -> None:
    seeded.state.add_user("U2")

    assert await queries.get_access_tree("U2") == []


async def test_get_access_tree_unknown_user(queries) -> None:
    with pytest.raises(ResourceNotFoundException):
        await queries.get_access_tree("ghost")


async def test_available_and_granted_brands(queries) -> None:
    available = await queries.list_available_brands("U", "A")
    granted = await queries.list_granted_brands("U", "A")

    # D only has an inactive entry, so it is not offered.
    assert [b.id for b in available] == ["C"]
    assert [b.id for b in granted] == ["B"]


async def test_list_assigned_platforms(queries) -> None:
    platforms = await queries.list_assigned_platforms("U", "A", "B")
    assert [p.id for p in platforms] == ["P1", "P2"]

    assert await queries.list_assigned_platforms("U", "A", "C") == []


async def test_catalog_lists_only_active_apps(catalog) -> None:
    assert [a.id for a in await catalog.list_apps()] == ["A", "A2"]


async def test_catalog_get_app_not_found(catalog) -> None:
    with pytest.raises(ResourceNotFoundException):
        await catalog.get_app("missing")


async def test_validate_combination_reports_invalid_platforms(catalog) -> None:
    ok = await catalog.validate_combination("A", "B", ["P1", "P2"])
    assert ok.valid is True

    bad = await catalog.validate_combination("A", "C", ["P1", "P2"])
    assert bad.valid is False
    assert bad.invalid == {"P2"}


async def test_validate_combination_ignores_inactive_entries(catalog) -> None:
    check = await catalog.validate_combination("A", "D", ["P2"])
    assert check.invalid == {"P2"}


async def test_mapped_and_unmapped_brands(catalog) -> None:
    mapped = await catalog.list_mapped_brands("A")
    unmapped = await catalog.list_unmapped_brands("A")

    assert [m.brand_id for m in mapped] == ["B", "C"]
    assert [p.platform_name for p in mapped[0].platforms] == ["Email", "Web"]
    assert [b.id for b in unmapped] == ["D"]


async def test_unknown_application_has_nothing_mapped(catalog) -> None:
    assert await catalog.list_mapped_brands("nope") == []
    assert await catalog.list_entries("nope") == []


async def test_mapping_details(catalog) -> None:
    details = await catalog.get_mapping_details("A", "B")
    assert details.platform_ids == ["P1", "P2"]
    assert details.dashboards == []


async def test_list_licensed_platforms(catalog) -> None:
    platforms = await catalog.list_licensed_platforms("A", "B")
    assert [p.name for p in platforms] == ["Email", "Web"]

    with pytest.raises(ResourceNotFoundException):
        await catalog.list_licensed_platforms("A", "nope")
