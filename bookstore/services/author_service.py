"""Author Service — author creation and cached reads.

Invariants:
    - (first_name, last_name) is unique: pre-checked, and a concurrent insert
      caught as IntegrityError is reported as Conflict too
    - authors_all is evicted after every successful create, never before commit
    - get_by_id of a missing author is ok(None); the route turns it into 404
"""

import logging
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core import cache_keys
from bookstore.core.domain_types import AuthorId
from bookstore.core.errors import ConflictError, ValidationFailureError
from bookstore.core.result import Result
from bookstore.infrastructure.cache import ReadThroughCache
from bookstore.infrastructure.unit_of_work import UnitOfWork
from bookstore.models.author import Author
from bookstore.repositories.author_repository import AuthorRepository
from bookstore.schemas.summaries import AuthorSummary
from bookstore.services.views import author_summary

logger = logging.getLogger(__name__)


class AuthorService:
    def __init__(self, session: AsyncSession, cache: ReadThroughCache):
        self._uow = UnitOfWork(session)
        self._authors = AuthorRepository(session)
        self._cache = cache

    async def create(self, first_name: str, last_name: str) -> Result[AuthorSummary]:
        if not first_name.strip() or not last_name.strip():
            return Result.fail(ValidationFailureError("Author first and last name are required"))
        if await self._authors.exists_by_name(first_name, last_name):
            return Result.fail(_duplicate(first_name, last_name))

        try:
            async with self._uow.transaction():
                author = self._authors.add(
                    Author(first_name=first_name, last_name=last_name),
                )
        except IntegrityError:
            return Result.fail(_duplicate(first_name, last_name))

        self._cache.invalidate(cache_keys.AUTHORS_ALL)
        logger.info(
            f"Created author {first_name} {last_name}",
            extra={"entity_id": str(author.id)},
        )
        return Result.ok(author_summary(author))

    async def get_all(self) -> Result[list[AuthorSummary]]:
        async def load():
            return [author_summary(a) for a in await self._authors.get_all_ordered()]

        return Result.ok(await self._cache.get_or_compute(cache_keys.AUTHORS_ALL, load))

    async def get_by_id(self, author_id: AuthorId) -> Result[AuthorSummary]:
        author = await self._authors.get_by_id(author_id)
        return Result.ok(author_summary(author) if author else None)


def _duplicate(first_name: str, last_name: str) -> ConflictError:
    return ConflictError(f"Author '{first_name} {last_name}' already exists")
