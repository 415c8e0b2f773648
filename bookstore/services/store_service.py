"""Store Service — store creation, cached store views and stock assignment.

Invariants:
    - assign_book upserts: a (store, book) pair never gets a second row
    - assign_book does not check the book exists; a dangling id is rejected by
      the foreign key and surfaces as a storage fault
    - Stock changes evict the store's detail and stock views and the book's
      detail view, after commit
"""

import logging
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core import cache_keys
from bookstore.core.domain_types import BookId, StoreId
from bookstore.core.errors import NotLinkedError, ResourceNotFoundError, ValidationFailureError
from bookstore.core.result import Result
from bookstore.infrastructure.cache import ReadThroughCache
from bookstore.infrastructure.unit_of_work import UnitOfWork
from bookstore.models.store import Store
from bookstore.repositories.store_repository import StoreRepository, find_book_link
from bookstore.schemas.store import StockedBook, StoreDetails
from bookstore.schemas.summaries import StoreSummary
from bookstore.services.views import stocked_books, store_details, store_summary

logger = logging.getLogger(__name__)


class StoreService:
    def __init__(self, session: AsyncSession, cache: ReadThroughCache):
        self._uow = UnitOfWork(session)
        self._stores = StoreRepository(session)
        self._cache = cache

    async def create(self, name: str, location: str | None = None) -> Result[StoreSummary]:
        async with self._uow.transaction():
            store = self._stores.add(Store(name=name, location=location))

        self._cache.invalidate(cache_keys.STORES_ALL, *cache_keys.store_views(store.id))
        logger.info(f"Created store {name}", extra={"entity_id": str(store.id)})
        return Result.ok(store_summary(store))

    async def get_all(self) -> Result[list[StoreSummary]]:
        async def load():
            return [store_summary(s) for s in await self._stores.get_all_ordered()]

        return Result.ok(await self._cache.get_or_compute(cache_keys.STORES_ALL, load))

    async def get_by_id(self, store_id: StoreId) -> Result[StoreDetails]:
        async def load():
            store = await self._stores.get_with_books(store_id)
            return store_details(store) if store else None

        return Result.ok(
            await self._cache.get_or_compute(cache_keys.store_details(store_id), load),
        )

    async def get_books(self, store_id: StoreId) -> Result[list[StockedBook]]:
        async def load():
            store = await self._stores.get_with_books(store_id)
            return stocked_books(store) if store else None

        books = await self._cache.get_or_compute(cache_keys.store_books(store_id), load)
        if books is None:
            return Result.fail(ResourceNotFoundError("Store", str(store_id)))
        return Result.ok(books)

    async def assign_book(
        self, store_id: StoreId, book_id: BookId, quantity: int,
    ) -> Result[StoreDetails]:
        if quantity < 0:
            return Result.fail(ValidationFailureError("Quantity cannot be negative", field="quantity"))
        store = await self._stores.get_with_books(store_id)
        if store is None:
            return Result.fail(ResourceNotFoundError("Store", str(store_id)))

        async with self._uow.transaction():
            self._stores.upsert_book(store, book_id, quantity)

        self._evict(store_id, book_id)
        logger.info(
            f"Stocked book {book_id} x{quantity}", extra={"entity_id": str(store_id)},
        )
        return Result.ok(await self._fresh_details(store_id))

    async def remove_book(
        self, store_id: StoreId, book_id: BookId,
    ) -> Result[StoreDetails]:
        store = await self._stores.get_with_books(store_id)
        if store is None:
            return Result.fail(ResourceNotFoundError("Store", str(store_id)))

        link = find_book_link(store, book_id)
        if link is None:
            return Result.fail(NotLinkedError("Book", str(book_id), "Store", str(store_id)))

        async with self._uow.transaction():
            self._stores.remove_book_link(store, link)

        self._evict(store_id, book_id)
        return Result.ok(await self._fresh_details(store_id))

    async def _fresh_details(self, store_id: StoreId) -> StoreDetails | None:
        store = await self._stores.get_with_books(store_id)
        return store_details(store) if store else None

    def _evict(self, store_id: StoreId, book_id: BookId) -> None:
        self._cache.invalidate(
            *cache_keys.store_views(store_id), cache_keys.book_details(book_id),
        )
