"""Unit of Work for async database operations.

A UnitOfWork owns one session for the duration of one service call. Multi-row
writes are staged inside ``transaction()`` so they commit together or not at
all.

Usage:
    async with UnitOfWork(AsyncSessionLocal) as uow:
        async with uow.transaction():
            uow.session.add(...)
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

logger = logging.getLogger(__name__)


class UnitOfWork:
    """Explicit transaction scope handed to every service operation."""

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession] | None = None,
        session: AsyncSession | None = None,
    ):
        if session_factory is None and session is None:
            raise ValueError("UnitOfWork needs a session factory or a session")
        self._session_factory = session_factory
        self._session = session
        self._owns_session = session is None

    async def __aenter__(self) -> "UnitOfWork":
        if self._session is None:
            self._session = self._session_factory()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._session is None:
            return
        if exc_type is not None:
            await self.rollback()
        if self._owns_session:
            await self._session.close()
            self._session = None

    @property
    def session(self) -> AsyncSession:
        if self._session is None:
            raise RuntimeError("UnitOfWork is not active; use 'async with'")
        return self._session

    async def commit(self) -> None:
        await self.session.commit()

    async def release_connection(self) -> None:
        """End the open read so its pooled connection goes back to the pool.

        Call this before slow I/O such as sending email. Loaded objects keep
        their state because sessions are created with ``expire_on_commit=False``.
        """
        if self.session.in_transaction():
            await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()
        logger.debug("Transaction rolled back")

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        """Commit everything staged in the block, or roll all of it back."""
        try:
            yield self.session
            await self.session.commit()
        except Exception:
            await self.rollback()
            raise
