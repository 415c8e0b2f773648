"""Store Schemas — creation payload, detail view, stock listing, assignment payload."""

from uuid import UUID

from pydantic import Field

from bookstore.core.domain_types import BookId, StoreId
from bookstore.schemas.common import CamelModel, ViewModel
from bookstore.schemas.summaries import BookSummary


class StoreCreate(CamelModel):
    name: str = Field(min_length=1, max_length=200)
    location: str | None = Field(None, max_length=300)


class StoreDetails(ViewModel):
    id: UUID
    name: str
    location: str | None = None
    books: list[BookSummary]


class StockedBook(BookSummary):
    """A book as stocked by one store."""
    quantity: int


class AssignBookToStore(CamelModel):
    store_id: StoreId
    book_id: BookId
    quantity: int = Field(0, ge=0)
