"""Book Repository — ISBN lookups, eager-loaded detail reads, paging and join rows.

Invariants:
    - Detail reads load authors and stores through their join rows in one round
      trip each (selectinload), and always reflect the database
    - total in get_paged is counted on the filtered query before offset/limit
    - Join-row writes go through the audited helpers of the base repository

Design Decisions:
    - Title filter is case-insensitive (ILIKE); author filter matches a
      substring of "first last"
    - Filter text is matched literally: % and _ are escaped, never wildcards
    - Sort ties broken by id so pages never overlap
"""

import uuid

from sqlalchemy import func, select
from sqlalchemy.orm import selectinload

from bookstore.core.domain_types import BookFilter, BookSortKey
from bookstore.models.author import Author
from bookstore.models.book import Book
from bookstore.models.book_author import BookAuthor
from bookstore.models.store_book import StoreBook
from bookstore.repositories.base import Repository

_SORT_COLUMNS = {
    BookSortKey.ISBN: Book.isbn,
    BookSortKey.CREATED_AT: Book.created_at,
    BookSortKey.TITLE: Book.title,
}


class BookRepository(Repository[Book]):
    model = Book

    async def get_by_isbn(self, isbn: str) -> Book | None:
        result = await self._session.execute(select(Book).where(Book.isbn == isbn))
        return result.scalar_one_or_none()

    async def get_details(self, book_id: uuid.UUID) -> Book | None:
        return await self.get_by_id(
            book_id,
            selectinload(Book.author_links).selectinload(BookAuthor.author),
            selectinload(Book.store_links).selectinload(StoreBook.store),
        )

    async def get_with_authors(self, book_id: uuid.UUID) -> Book | None:
        return await self.get_by_id(
            book_id,
            selectinload(Book.author_links).selectinload(BookAuthor.author),
        )

    async def get_paged(self, criteria: BookFilter) -> tuple[list[Book], int]:
        stmt = select(Book)
        if criteria.title and criteria.title.strip():
            stmt = stmt.where(Book.title.icontains(criteria.title.strip(), autoescape=True))
        if criteria.author_name and criteria.author_name.strip():
            full_name = Author.first_name + " " + Author.last_name
            name_match = full_name.contains(criteria.author_name.strip(), autoescape=True)
            stmt = stmt.where(Book.author_links.any(BookAuthor.author.has(name_match)))

        total = await self._session.scalar(
            select(func.count()).select_from(stmt.subquery()),
        )

        column = _SORT_COLUMNS[criteria.sort_key]
        order = (column.desc(), Book.id.desc()) if criteria.desc else (column.asc(), Book.id.asc())
        result = await self._session.execute(
            stmt.order_by(*order).offset(criteria.offset).limit(criteria.page_size),
        )
        return list(result.scalars().all()), int(total or 0)

    # ─── Join rows ───────────────────────────────────────────────

    def add_author_link(self, book_id: uuid.UUID, author_id: uuid.UUID) -> BookAuthor:
        return self._stage_add(BookAuthor(book_id=book_id, author_id=author_id))

    def add_store_link(self, book_id: uuid.UUID, store_id: uuid.UUID) -> StoreBook:
        return self._stage_add(StoreBook(store_id=store_id, book_id=book_id, quantity=0))

    def remove_author_link(self, book: Book, link: BookAuthor) -> None:
        # delete-orphan cascade turns the removal into a DELETE on flush
        book.author_links.remove(link)
        self._audit.deleted(link)

    async def clear_author_links(self, book: Book) -> None:
        """book.author_links must be loaded. Flushes so re-added links can reuse keys."""
        for link in list(book.author_links):
            self.remove_author_link(book, link)
        await self.flush()

    async def clear_store_links(self, book: Book) -> None:
        """book.store_links must be loaded. Flushes so re-added links can reuse keys."""
        for link in list(book.store_links):
            book.store_links.remove(link)
            self._audit.deleted(link)
        await self.flush()

    async def delete_with_links(self, book: Book) -> None:
        """Delete a book loaded via get_details, auditing each join row it owned."""
        for link in [*book.author_links, *book.store_links]:
            self._audit.deleted(link)
        await self._stage_delete(book)
