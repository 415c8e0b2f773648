"""Book Schemas — create/update payloads, detail view and assignment payload.

Invariants:
    - author_ids / store_ids: None (omitted or null) means "leave links alone",
      [] means "remove every link" — the two must never be conflated
    - isbn and title are stripped and non-empty
"""

from uuid import UUID

from pydantic import Field, field_validator

from bookstore.core.domain_types import AuthorId, BookId, StoreId
from bookstore.schemas.common import CamelModel, ViewModel
from bookstore.schemas.summaries import AuthorSummary, StoreSummary


class _BookFields(CamelModel):
    title: str = Field(min_length=1, max_length=300)
    description: str | None = Field(None, max_length=5000)
    author_ids: list[AuthorId] | None = None
    store_ids: list[StoreId] | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("title cannot be empty or whitespace")
        return v


class BookCreate(_BookFields):
    isbn: str = Field(min_length=1, max_length=32)

    @field_validator("isbn")
    @classmethod
    def strip_isbn(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("isbn cannot be empty or whitespace")
        return v


class BookUpdate(_BookFields):
    pass


class BookDetails(ViewModel):
    id: UUID
    isbn: str
    title: str
    description: str | None = None
    authors: list[AuthorSummary]
    stores: list[StoreSummary]


class AssignAuthorToBook(CamelModel):
    book_id: BookId
    author_id: AuthorId
