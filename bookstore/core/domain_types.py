"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - AuthorId, BookId, StoreId wrap UUIDs: service signatures and request
      payloads take them, routes wrap path parameters before calling services
    - Join rows have no identity of their own; audits record NIL_ENTITY_ID for them
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from dataclasses import dataclass
from enum import Enum
from typing import NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

AuthorId = NewType("AuthorId", UUID)
BookId = NewType("BookId", UUID)
StoreId = NewType("StoreId", UUID)

NIL_ENTITY_ID = UUID(int=0)


# ─── Enums ───────────────────────────────────────────────────────

class AuditAction(str, Enum):
    """Transition kinds captured by the audit trail."""
    ADDED = "Added"
    MODIFIED = "Modified"
    DELETED = "Deleted"


class BookSortKey(str, Enum):
    """Sort keys accepted by the paged book listing."""
    ISBN = "isbn"
    CREATED_AT = "createdat"
    TITLE = "title"

    @classmethod
    def parse(cls, raw: str | None) -> "BookSortKey":
        """Case-insensitive lookup; anything unknown falls back to TITLE."""
        if not raw or not raw.strip():
            return cls.TITLE
        try:
            return cls(raw.strip().lower())
        except ValueError:
            return cls.TITLE


# ─── Query Types ─────────────────────────────────────────────────

@dataclass(frozen=True)
class BookFilter:
    """Paged book listing criteria. page is 1-based."""
    title: str | None = None
    author_name: str | None = None
    page: int = 1
    page_size: int = 20
    sort_by: str | None = None
    desc: bool = False

    @property
    def sort_key(self) -> BookSortKey:
        return BookSortKey.parse(self.sort_by)

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size
