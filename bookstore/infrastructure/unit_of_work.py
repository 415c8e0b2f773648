"""Unit of Work — atomic transaction boundary around a block of repository calls.

Invariants:
    - Commit only on normal exit; any exception rolls back and is re-raised
    - Never swallows errors, never retries
    - Cache eviction belongs AFTER the transaction block, so a cache failure can
      never roll back committed work

Design Decisions:
    - Wraps the request's AsyncSession: the same session is shared by every
      repository taking part in the unit of work
    - transaction() is the primary API; run(action) wraps a coroutine function
      for callers that prefer passing the work in
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Awaitable, Callable, TypeVar

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)

T = TypeVar("T")


class UnitOfWork:
    """Begin → execute → commit, or rollback and re-raise."""

    def __init__(self, session: AsyncSession):
        self._session = session

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[AsyncSession]:
        # AsyncSession autobegins; finish any read-only implicit transaction
        # so the block below owns a fresh one.
        if self._session.in_transaction():
            await self._session.commit()
        try:
            yield self._session
            await self._session.commit()
        except Exception:
            logger.warning("Transaction rolled back", exc_info=True)
            await self._session.rollback()
            raise

    async def run(self, action: Callable[[], Awaitable[T]]) -> T:
        async with self.transaction():
            return await action()
