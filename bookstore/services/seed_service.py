"""Seed Service — one-shot population of an empty catalog from a JSON file.

Invariants:
    - A catalog holding any book, author or store is never written to
    - The whole file loads in one transaction: all rows or none
    - Missing file → fail(ResourceNotFoundError); anything else → fail(SeedFailureError)
    - The cache is cleared after a successful load
"""

import logging
from pathlib import Path

from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core.errors import ResourceNotFoundError, SeedFailureError
from bookstore.core.result import Result
from bookstore.infrastructure.cache import ReadThroughCache
from bookstore.infrastructure.unit_of_work import UnitOfWork
from bookstore.repositories.seed_repository import SeedRepository
from bookstore.schemas.seed import SeedData

logger = logging.getLogger(__name__)

ALREADY_SEEDED = "Database already seeded."
SEEDED = "Database seeded."


class SeedService:
    def __init__(self, session: AsyncSession, cache: ReadThroughCache, seed_file: Path):
        self._uow = UnitOfWork(session)
        self._seed = SeedRepository(session)
        self._cache = cache
        self._seed_file = Path(seed_file)

    async def seed(self) -> Result[str]:
        try:
            if await self._seed.is_seeded():
                logger.info("Seed skipped: catalog is not empty")
                return Result.ok(ALREADY_SEEDED)

            if not self._seed_file.is_file():
                logger.error(f"Seed data file not found at path '{self._seed_file}'")
                return Result.fail(ResourceNotFoundError("Seed data file", str(self._seed_file)))

            data = SeedData.model_validate_json(self._seed_file.read_bytes())
            async with self._uow.transaction():
                counts = await self._seed.load(data)
        except ValidationError as e:
            logger.error(f"Invalid seed data file: {e}")
            return Result.fail(SeedFailureError(f"invalid seed data: {e}"))
        except Exception as e:
            logger.error(f"Seeding failed: {e}", exc_info=True)
            return Result.fail(SeedFailureError(str(e)))

        self._cache.clear()
        logger.info(f"Database seeded: {counts}")
        return Result.ok(SEEDED)
