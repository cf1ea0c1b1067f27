"""Tests for the access-tree builder (flat grant rows to nested views)."""

from access_admin.application.dtos.access import GrantRow
from access_admin.application.services.access_tree_builder import (
    build_access_tree,
    group_brands,
)


def _row(app: str, brand: str, platform: str, user: str = "U1") -> GrantRow:
    return GrantRow(
        user_id=user,
        app_id=app,
        app_name=f"{app} name",
        brand_id=brand,
        brand_name=f"{brand} name",
        platform_id=platform,
        platform_name=f"{platform} name",
    )


def test_build_access_tree_groups_by_app_then_brand() -> None:
    rows = [_row("A1", "B1", "P1"), _row("A1", "B1", "P2"), _row("A1", "B2", "P1")]

    tree = build_access_tree(rows)

    assert len(tree) == 1
    app = tree[0]
    assert app.app_id == "A1"
    assert app.app_name == "A1 name"
    assert [b.brand_id for b in app.brands] == ["B1", "B2"]
    assert [p.platform_id for p in app.brands[0].platforms] == ["P1", "P2"]
    assert [p.platform_id for p in app.brands[1].platforms] == ["P1"]


def test_build_access_tree_empty_input_returns_empty_list() -> None:
    assert build_access_tree([]) == []


def test_build_access_tree_keeps_first_occurrence_order() -> None:
    rows = [_row("A2", "B9", "P1"), _row("A1", "B1", "P1"), _row("A2", "B3", "P2")]

    tree = build_access_tree(rows)

    assert [a.app_id for a in tree] == ["A2", "A1"]
    assert [b.brand_id for b in tree[0].brands] == ["B9", "B3"]


def test_build_access_tree_same_brand_under_two_apps_is_separate() -> None:
    tree = build_access_tree([_row("A1", "B1", "P1"), _row("A2", "B1", "P2")])

    assert [p.platform_id for p in tree[0].brands[0].platforms] == ["P1"]
    assert [p.platform_id for p in tree[1].brands[0].platforms] == ["P2"]


def test_build_access_tree_does_not_collapse_duplicate_rows() -> None:
    tree = build_access_tree([_row("A1", "B1", "P1"), _row("A1", "B1", "P1")])

    assert [p.platform_id for p in tree[0].brands[0].platforms] == ["P1", "P1"]


def test_build_access_tree_carries_logo_urls() -> None:
    row = GrantRow(
        user_id="U1",
        app_id="A1",
        app_name="App",
        brand_id="B1",
        brand_name="Brand",
        platform_id="P1",
        platform_name="Platform",
        brand_logo_url="https://cdn.example.com/b1.png",
        platform_logo_url="https://cdn.example.com/p1.png",
    )

    brand = build_access_tree([row])[0].brands[0]

    assert brand.logo_url == "https://cdn.example.com/b1.png"
    assert brand.platforms[0].logo_url == "https://cdn.example.com/p1.png"


def test_group_brands_single_level() -> None:
    brands = group_brands([_row("A1", "B1", "P1"), _row("A1", "B2", "P3"), _row("A1", "B1", "P2")])

    assert [b.brand_id for b in brands] == ["B1", "B2"]
    assert [p.platform_id for p in brands[0].platforms] == ["P1", "P2"]
