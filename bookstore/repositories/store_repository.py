"""Store Repository — store reads with eager-loaded stock and StoreBook upserts.

Invariants:
    - get_with_books always reflects the database (populate_existing)
    - upsert_book never creates a second row for the same (store, book)
"""

import uuid

from sqlalchemy.orm import selectinload

from bookstore.models.store import Store
from bookstore.models.store_book import StoreBook
from bookstore.repositories.base import Repository


class StoreRepository(Repository[Store]):
    model = Store

    async def get_all_ordered(self) -> list[Store]:
        return await self.find(order_by=(Store.name,))

    async def get_with_books(self, store_id: uuid.UUID) -> Store | None:
        return await self.get_by_id(
            store_id,
            selectinload(Store.book_links).selectinload(StoreBook.book),
        )

    def upsert_book(
        self, store: Store, book_id: uuid.UUID, quantity: int,
    ) -> StoreBook:
        """Set quantity on the existing link or create it. store.book_links must be loaded."""
        existing = find_book_link(store, book_id)
        if existing is not None:
            self._stage_update(existing, quantity=quantity)
            return existing
        return self.add_book_link(store.id, book_id, quantity)

    def add_book_link(
        self, store_id: uuid.UUID, book_id: uuid.UUID, quantity: int = 0,
    ) -> StoreBook:
        return self._stage_add(StoreBook(store_id=store_id, book_id=book_id, quantity=quantity))

    def remove_book_link(self, store: Store, link: StoreBook) -> None:
        # delete-orphan cascade turns the removal into a DELETE on flush
        store.book_links.remove(link)
        self._audit.deleted(link)


def find_book_link(store: Store, book_id: uuid.UUID) -> StoreBook | None:
    return next((sb for sb in store.book_links if sb.book_id == book_id), None)
