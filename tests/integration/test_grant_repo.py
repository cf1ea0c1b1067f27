"""Grant repository integration tests. Require Postgres; session is rolled back after each test."""

import pytest

from access_admin.domain.exceptions import DuplicateAssignmentException
from access_admin.infrastructure.persistence.repositories import GrantRepository


@pytest.mark.requires_db
async def test_add_and_list_grants(db_session, master) -> None:
    repo = GrantRepository(db_session)
    user, app = master.users[0], master.app
    brand = master.brands[0]
    p1, p2, _ = master.platforms

    added = await repo.add_many(user.id, app.id, [(brand.id, p1.id), (brand.id, p2.id)], "admin-1")

    assert added == 2
    assert await repo.has_any(user.id, app.id)
    assert await repo.list_platform_ids(user.id, app.id, brand.id) == {p1.id, p2.id}
    assert await repo.list_pairs(user.id, app.id) == {(brand.id, p1.id), (brand.id, p2.id)}


@pytest.mark.requires_db
async def test_add_duplicate_grant_raises(db_session, master) -> None:
    repo = GrantRepository(db_session)
    user, app, brand, platform = master.users[0], master.app, master.brands[0], master.platforms[0]
    await repo.add_many(user.id, app.id, [(brand.id, platform.id)], "admin-1")

    with pytest.raises(DuplicateAssignmentException):
        async with db_session.begin_nested():
            await repo.add_many(user.id, app.id, [(brand.id, platform.id)], "admin-1")


@pytest.mark.requires_db
async def test_remove_many_only_named_pairs(db_session, master) -> None:
    repo = GrantRepository(db_session)
    user, app, brand = master.users[0], master.app, master.brands[0]
    p1, p2, p3 = master.platforms
    await repo.add_many(user.id, app.id, [(brand.id, p.id) for p in (p1, p2, p3)], "admin-1")

    removed = await repo.remove_many(user.id, app.id, [(brand.id, p1.id), (brand.id, p3.id)])

    assert removed == 2
    assert await repo.list_platform_ids(user.id, app.id, brand.id) == {p2.id}
    assert await repo.remove_many(user.id, app.id, []) == 0


@pytest.mark.requires_db
async def test_remove_scope_brand_and_app(db_session, master) -> None:
    repo = GrantRepository(db_session)
    user, app = master.users[0], master.app
    brand_a, brand_b = master.brands
    p1, p2, _ = master.platforms
    await repo.add_many(
        user.id,
        app.id,
        [(brand_a.id, p1.id), (brand_a.id, p2.id), (brand_b.id, p1.id)],
        "admin-1",
    )

    brand_removed = await repo.remove_scope(user.id, app.id, brand_a.id)
    assert sorted(brand_removed) == sorted([(brand_a.id, p1.id), (brand_a.id, p2.id)])

    app_removed = await repo.remove_scope(user.id, app.id)
    assert app_removed == [(brand_b.id, p1.id)]
    assert not await repo.has_any(user.id, app.id)


@pytest.mark.requires_db
async def test_remove_for_catalog_spans_users(db_session, master) -> None:
    repo = GrantRepository(db_session)
    u1, u2 = master.users
    app, brand_a, brand_b = master.app, *master.brands
    p1, p2, _ = master.platforms
    await repo.add_many(u1.id, app.id, [(brand_a.id, p1.id), (brand_a.id, p2.id)], "admin-1")
    await repo.add_many(u2.id, app.id, [(brand_a.id, p1.id), (brand_b.id, p1.id)], "admin-1")

    revoked = await repo.remove_for_catalog(app.id, brand_a.id, [p1.id])

    assert sorted(revoked) == sorted([u1.id, u2.id])
    assert await repo.list_pairs(u1.id, app.id) == {(brand_a.id, p2.id)}
    assert await repo.list_pairs(u2.id, app.id) == {(brand_b.id, p1.id)}
    assert await repo.remove_for_catalog(app.id, brand_a.id, []) == []


@pytest.mark.requires_db
async def test_list_rows_joins_names(db_session, master) -> None:
    repo = GrantRepository(db_session)
    user, app, brand = master.users[0], master.app, master.brands[0]
    p1, p2, _ = master.platforms
    await repo.add_many(user.id, app.id, [(brand.id, p2.id), (brand.id, p1.id)], "admin-1")

    rows = await repo.list_rows(user.id, app.id)

    assert [r.platform_name for r in rows] == [p1.name, p2.name]
    assert {r.app_name for r in rows} == {app.name}
    assert {r.brand_name for r in rows} == {brand.name}
