"""Unit of work: one session and transaction per call, exposed as AccessStores."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from access_admin.application.interfaces.repositories import AccessStores
from access_admin.domain.exceptions import PersistenceException
from access_admin.infrastructure.persistence.repositories import (
    AuditLogRepository,
    CatalogRepository,
    DirectoryRepository,
    GrantRepository,
)

logger = logging.getLogger(__name__)


class SqlAccessStoreFactory:
    """StoresFactory backed by an async_sessionmaker.

    Begins a transaction, commits on success, rolls back on exception.
    Driver errors surface as PersistenceException; domain exceptions pass through.
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @asynccontextmanager
    async def __call__(self) -> AsyncIterator[AccessStores]:
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    yield AccessStores(
                        grants=GrantRepository(session),
                        catalog=CatalogRepository(session),
                        directory=DirectoryRepository(session),
                        audit_log=AuditLogRepository(session),
                    )
        except SQLAlchemyError as e:
            logger.error("Database transaction failed: %s", e, exc_info=True)
            raise PersistenceException("transaction", str(e)) from e
