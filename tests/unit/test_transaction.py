"""SqlAccessStoreFactory tests with a stub session (no database)."""

import pytest
from sqlalchemy.exc import OperationalError

from access_admin.domain.exceptions import PersistenceException, ValidationException
from access_admin.infrastructure.persistence.repositories import GrantRepository
from access_admin.infrastructure.persistence.transaction import SqlAccessStoreFactory


class _StubTransaction:
    def __init__(self, session: "_StubSession") -> None:
        self.session = session

    async def __aenter__(self) -> "_StubTransaction":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        self.session.outcome = "rollback" if exc_type else "commit"


class _StubSession:
    def __init__(self) -> None:
        self.outcome: str | None = None
        self.closed = False

    async def __aenter__(self) -> "_StubSession":
        return self

    async def __aexit__(self, *exc) -> None:
        self.closed = True

    def begin(self) -> _StubTransaction:
        return _StubTransaction(self)


@pytest.fixture
def session() -> _StubSession:
    return _StubSession()


@pytest.fixture
def factory(session) -> SqlAccessStoreFactory:
    return SqlAccessStoreFactory(lambda: session)


async def test_commits_and_binds_repositories_to_one_session(factory, session) -> None:
    async with factory() as stores:
        assert isinstance(stores.grants, GrantRepository)
        assert stores.grants.db is session
        assert stores.catalog.db is session
        assert stores.audit_log.db is session

    assert session.outcome == "commit"
    assert session.closed


async def test_driver_error_becomes_persistence_exception(factory, session) -> None:
    with pytest.raises(PersistenceException) as exc_info:
        async with factory():
            raise OperationalError("SELECT 1", {}, Exception("server closed the connection"))

    assert session.outcome == "rollback"
    assert exc_info.value.details["operation"] == "transaction"


async def test_domain_exception_passes_through_after_rollback(factory, session) -> None:
    with pytest.raises(ValidationException):
        async with factory():
            raise ValidationException("bad", field="platform_ids")

    assert session.outcome == "rollback"
