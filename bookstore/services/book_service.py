"""Book Service — book lifecycle and the Book <-> Author / Book <-> Store links.

Invariants:
    - Every mutation runs in one UnitOfWork transaction; cache keys are evicted
      only after it commits
    - author_ids / store_ids of None leave links untouched; a list (even empty)
      replaces the whole set
    - Unresolvable author/store ids are skipped; duplicates collapse to one link
    - A book mutation evicts its own detail view and the detail/stock views of
      every store it was or is now attached to
    - get_books_paged is never cached

Design Decisions:
    - Returns Result for expected failures (not found, not linked, conflict);
      storage faults propagate as exceptions
    - Mutations return the detail view re-read after commit, never the staged
      in-memory graph
"""

import logging
from typing import Iterable, Sequence

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from bookstore.core import cache_keys
from bookstore.core.domain_types import AuthorId, BookFilter, BookId, StoreId
from bookstore.core.errors import (
    ConflictError, NotLinkedError, ResourceNotFoundError, ValidationFailureError,
)
from bookstore.core.result import Result
from bookstore.infrastructure.cache import ReadThroughCache
from bookstore.infrastructure.unit_of_work import UnitOfWork
from bookstore.models.book import Book
from bookstore.repositories.audit import AuditRecorder
from bookstore.repositories.author_repository import AuthorRepository
from bookstore.repositories.book_repository import BookRepository
from bookstore.repositories.store_repository import StoreRepository
from bookstore.schemas.book import BookDetails
from bookstore.schemas.common import PagedResult
from bookstore.schemas.summaries import BookSummary
from bookstore.services.views import book_details, book_summary

logger = logging.getLogger(__name__)


class BookService:
    def __init__(self, session: AsyncSession, cache: ReadThroughCache):
        audit = AuditRecorder(session)
        self._uow = UnitOfWork(session)
        self._books = BookRepository(session, audit)
        self._authors = AuthorRepository(session, audit)
        self._stores = StoreRepository(session, audit)
        self._cache = cache

    # ─── Reads ───────────────────────────────────────────────────

    async def get_by_id(self, book_id: BookId) -> Result[BookDetails]:
        return Result.ok(await self._cached_details(book_id))

    async def get_books_paged(self, criteria: BookFilter) -> Result[PagedResult[BookSummary]]:
        books, total = await self._books.get_paged(criteria)
        return Result.ok(PagedResult[BookSummary](
            items=[book_summary(b) for b in books],
            page=criteria.page,
            page_size=criteria.page_size,
            total=total,
        ))

    # ─── Lifecycle ───────────────────────────────────────────────

    async def create(
        self,
        isbn: str,
        title: str,
        description: str | None = None,
        author_ids: Sequence[AuthorId] | None = None,
        store_ids: Sequence[StoreId] | None = None,
    ) -> Result[BookDetails]:
        if not isbn.strip():
            return Result.fail(ValidationFailureError("ISBN is required", field="isbn"))
        if await self._books.get_by_isbn(isbn) is not None:
            return Result.fail(_duplicate_isbn(isbn))

        try:
            async with self._uow.transaction():
                book = self._books.add(
                    Book(isbn=isbn, title=title, description=description),
                )
                await self._attach_authors(book, author_ids or ())
                attached_stores = await self._attach_stores(book, store_ids or ())
        except IntegrityError:
            return Result.fail(_duplicate_isbn(isbn))

        self._evict(book.id, attached_stores)
        logger.info(f"Created book {isbn}", extra={"entity_id": str(book.id)})
        return Result.ok(await self._fresh_details(book.id))

    async def update(
        self,
        book_id: BookId,
        title: str,
        description: str | None = None,
        author_ids: Sequence[AuthorId] | None = None,
        store_ids: Sequence[StoreId] | None = None,
    ) -> Result[BookDetails]:
        book = await self._books.get_details(book_id)
        if book is None:
            return Result.fail(ResourceNotFoundError("Book", str(book_id)))

        affected_stores = {link.store_id for link in book.store_links}
        async with self._uow.transaction():
            self._books.update(book, title=title, description=description)
            if author_ids is not None:
                await self._books.clear_author_links(book)
                await self._attach_authors(book, author_ids)
            if store_ids is not None:
                await self._books.clear_store_links(book)
                affected_stores |= await self._attach_stores(book, store_ids)

        self._evict(book_id, affected_stores)
        logger.info("Updated book", extra={"entity_id": str(book_id)})
        return Result.ok(await self._fresh_details(book_id))

    async def delete(self, book_id: BookId) -> Result[bool]:
        book = await self._books.get_details(book_id)
        if book is None:
            return Result.fail(ResourceNotFoundError("Book", str(book_id)))

        affected_stores = {link.store_id for link in book.store_links}
        async with self._uow.transaction():
            await self._books.delete_with_links(book)

        self._evict(book_id, affected_stores)
        logger.info("Deleted book", extra={"entity_id": str(book_id)})
        return Result.ok(True)

    # ─── Author links ────────────────────────────────────────────

    async def assign_author(
        self, book_id: BookId, author_id: AuthorId,
    ) -> Result[BookDetails]:
        book = await self._books.get_with_authors(book_id)
        if book is None:
            return Result.fail(ResourceNotFoundError("Book", str(book_id)))
        if await self._authors.get_by_id(author_id) is None:
            return Result.fail(ResourceNotFoundError("Author", str(author_id)))

        if any(link.author_id == author_id for link in book.author_links):
            logger.debug(
                f"Author {author_id} already assigned", extra={"entity_id": str(book_id)},
            )
        else:
            async with self._uow.transaction():
                self._books.add_author_link(book_id, author_id)
            self._evict(book_id)

        return Result.ok(await self._fresh_details(book_id))

    async def remove_author(
        self, book_id: BookId, author_id: AuthorId,
    ) -> Result[BookDetails]:
        book = await self._books.get_with_authors(book_id)
        if book is None:
            return Result.fail(ResourceNotFoundError("Book", str(book_id)))

        link = next((a for a in book.author_links if a.author_id == author_id), None)
        if link is None:
            return Result.fail(NotLinkedError("Author", str(author_id), "Book", str(book_id)))

        async with self._uow.transaction():
            self._books.remove_author_link(book, link)

        self._evict(book_id)
        return Result.ok(await self._fresh_details(book_id))

    # ─── Helpers ─────────────────────────────────────────────────

    async def _attach_authors(self, book: Book, author_ids: Iterable[AuthorId]) -> None:
        for author in await self._authors.get_by_ids(author_ids):
            self._books.add_author_link(book.id, author.id)

    async def _attach_stores(
        self, book: Book, store_ids: Iterable[StoreId],
    ) -> set[StoreId]:
        stores = await self._stores.get_by_ids(store_ids)
        for store in stores:
            self._books.add_store_link(book.id, store.id)
        return {StoreId(s.id) for s in stores}

    async def _cached_details(self, book_id: BookId) -> BookDetails | None:
        async def load():
            book = await self._books.get_details(book_id)
            return book_details(book) if book else None

        return await self._cache.get_or_compute(cache_keys.book_details(book_id), load)

    async def _fresh_details(self, book_id: BookId) -> BookDetails | None:
        book = await self._books.get_details(book_id)
        return book_details(book) if book else None

    def _evict(self, book_id: BookId, store_ids: Iterable[StoreId] = ()) -> None:
        keys = [cache_keys.book_details(book_id)]
        for store_id in store_ids:
            keys.extend(cache_keys.store_views(store_id))
        self._cache.invalidate(*keys)


def _duplicate_isbn(isbn: str) -> ConflictError:
    return ConflictError(f"A book with ISBN '{isbn}' already exists")
