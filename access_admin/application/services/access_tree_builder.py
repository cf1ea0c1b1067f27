"""Access-tree builder: flat grant rows to nested application/brand/platform views.

Stateless. Groups by first occurrence of each application id, then brand id
within it; platforms keep input order. Duplicate rows are not collapsed, so
a repeated (application, brand, platform) row yields the platform twice.
"""

from __future__ import annotations

from collections.abc import Iterable

from access_admin.application.dtos.access import (
    AppNode,
    BrandNode,
    GrantRow,
    PlatformNode,
)


def _platform(row: GrantRow) -> PlatformNode:
    return PlatformNode(
        platform_id=row.platform_id,
        platform_name=row.platform_name,
        logo_url=row.platform_logo_url,
    )


def group_brands(rows: Iterable[GrantRow]) -> list[BrandNode]:
    """Group rows by brand id (one level); used for a single application."""
    brands: dict[str, BrandNode] = {}
    for row in rows:
        node = brands.get(row.brand_id)
        if node is None:
            node = BrandNode(
                brand_id=row.brand_id,
                brand_name=row.brand_name,
                logo_url=row.brand_logo_url,
            )
            brands[row.brand_id] = node
        node.platforms.append(_platform(row))
    return list(brands.values())


def build_access_tree(rows: Iterable[GrantRow]) -> list[AppNode]:
    """Return application nodes, each with brand nodes holding platform nodes.

    Empty input returns an empty list.
    """
    apps: dict[str, AppNode] = {}
    brands: dict[tuple[str, str], BrandNode] = {}
    for row in rows:
        app = apps.get(row.app_id)
        if app is None:
            app = AppNode(app_id=row.app_id, app_name=row.app_name)
            apps[row.app_id] = app
        key = (row.app_id, row.brand_id)
        brand = brands.get(key)
        if brand is None:
            brand = BrandNode(
                brand_id=row.brand_id,
                brand_name=row.brand_name,
                logo_url=row.brand_logo_url,
            )
            brands[key] = brand
            app.brands.append(brand)
        brand.platforms.append(_platform(row))
    return list(apps.values())
