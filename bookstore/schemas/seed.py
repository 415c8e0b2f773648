"""Seed Document Schema — the five ordered collections of the seed JSON file.

Invariants:
    - Entities are referenced by file-local string ids, never database ids
    - Keys are accepted in camelCase ("firstName", "bookAuthors") or snake_case
"""

from pydantic import Field

from bookstore.schemas.common import CamelModel


class SeedAuthor(CamelModel):
    id: str
    first_name: str
    last_name: str


class SeedStore(CamelModel):
    id: str
    name: str
    location: str | None = None


class SeedBook(CamelModel):
    id: str
    isbn: str
    title: str
    description: str | None = None


class SeedBookAuthor(CamelModel):
    book_id: str
    author_id: str


class SeedStoreBook(CamelModel):
    store_id: str
    book_id: str
    quantity: int = Field(0, ge=0)


class SeedData(CamelModel):
    authors: list[SeedAuthor] = []
    stores: list[SeedStore] = []
    books: list[SeedBook] = []
    book_authors: list[SeedBookAuthor] = []
    store_books: list[SeedStoreBook] = []
