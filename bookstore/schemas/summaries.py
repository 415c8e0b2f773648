"""Summary views — lightweight projections used inside detail views.

Invariants:
    - Summaries never carry back-references (no recursive nesting)
"""

from uuid import UUID

from bookstore.schemas.common import ViewModel


class AuthorSummary(ViewModel):
    id: UUID
    first_name: str
    last_name: str


class StoreSummary(ViewModel):
    id: UUID
    name: str
    location: str | None = None


class BookSummary(ViewModel):
    id: UUID
    isbn: str
    title: str
    description: str | None = None
