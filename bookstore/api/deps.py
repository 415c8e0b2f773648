"""Service Dependencies — one service per request, bound to the request's session.

Invariants:
    - Services share the request's AsyncSession and the process-wide cache
    - Tests swap storage and cache by overriding get_db / get_cache only
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.config import Settings, get_settings
from bookstore.infrastructure.cache import ReadThroughCache, get_cache
from bookstore.infrastructure.database import get_db
from bookstore.services.author_service import AuthorService
from bookstore.services.book_service import BookService
from bookstore.services.seed_service import SeedService
from bookstore.services.store_service import StoreService


def get_author_service(
    db: AsyncSession = Depends(get_db), cache: ReadThroughCache = Depends(get_cache),
) -> AuthorService:
    return AuthorService(db, cache)


def get_book_service(
    db: AsyncSession = Depends(get_db), cache: ReadThroughCache = Depends(get_cache),
) -> BookService:
    return BookService(db, cache)


def get_store_service(
    db: AsyncSession = Depends(get_db), cache: ReadThroughCache = Depends(get_cache),
) -> StoreService:
    return StoreService(db, cache)


def get_seed_service(
    db: AsyncSession = Depends(get_db),
    cache: ReadThroughCache = Depends(get_cache),
    settings: Settings = Depends(get_settings),
) -> SeedService:
    return SeedService(db, cache, settings.seed_file_path)
