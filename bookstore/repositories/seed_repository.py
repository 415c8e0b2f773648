"""Seed Repository — emptiness check and bulk load of a parsed seed document.

Invariants:
    - is_seeded is True as soon as any Book, Author or Store row exists
    - load() stages base entities, flushes for real ids, then stages join rows
    - Links whose file-local ids do not resolve are skipped
    - Never commits: the caller's UnitOfWork owns the transaction
"""

import logging

from sqlalchemy import exists, select
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.models.author import Author
from bookstore.models.book import Book
from bookstore.models.store import Store
from bookstore.repositories.audit import AuditRecorder
from bookstore.repositories.author_repository import AuthorRepository
from bookstore.repositories.book_repository import BookRepository
from bookstore.repositories.store_repository import StoreRepository
from bookstore.schemas.seed import SeedData

logger = logging.getLogger(__name__)


class SeedRepository:
    def __init__(self, session: AsyncSession):
        self._session = session
        audit = AuditRecorder(session)
        self._authors = AuthorRepository(session, audit)
        self._books = BookRepository(session, audit)
        self._stores = StoreRepository(session, audit)

    async def is_seeded(self) -> bool:
        for model in (Book, Author, Store):
            if await self._session.scalar(select(exists().select_from(model))):
                return True
        return False

    async def load(self, data: SeedData) -> dict[str, int]:
        """Stage every entity and link in data. Returns per-collection counts."""
        author_map = {
            a.id: self._authors.add(Author(first_name=a.first_name, last_name=a.last_name))
            for a in data.authors
        }
        store_map = {
            s.id: self._stores.add(Store(name=s.name, location=s.location))
            for s in data.stores
        }
        book_map = {
            b.id: self._books.add(Book(isbn=b.isbn, title=b.title, description=b.description))
            for b in data.books
        }
        await self._session.flush()

        book_authors = 0
        for link in data.book_authors:
            book = book_map.get(link.book_id)
            author = author_map.get(link.author_id)
            if book is None or author is None:
                logger.warning(
                    f"Skipping book-author link {link.book_id}/{link.author_id}: unresolved id",
                )
                continue
            self._books.add_author_link(book.id, author.id)
            book_authors += 1

        store_books = 0
        for link in data.store_books:
            store = store_map.get(link.store_id)
            book = book_map.get(link.book_id)
            if store is None or book is None:
                logger.warning(
                    f"Skipping store-book link {link.store_id}/{link.book_id}: unresolved id",
                )
                continue
            self._stores.add_book_link(store.id, book.id, link.quantity)
            store_books += 1

        await self._session.flush()
        return {
            "authors": len(author_map),
            "stores": len(store_map),
            "books": len(book_map),
            "book_authors": book_authors,
            "store_books": store_books,
        }
