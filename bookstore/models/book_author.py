"""BookAuthor ORM — membership row of the Book <-> Author relationship.

Invariants:
    - Composite primary key (book_id, author_id): existence = membership
    - No own id; audited with the nil UUID
"""

import uuid

from sqlalchemy import ForeignKey, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.db.base import Base


class BookAuthor(Base):
    """Join row linking a book to one of its authors."""
    __tablename__ = "book_authors"

    book_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True,
    )
    author_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("authors.id", ondelete="CASCADE"), primary_key=True,
    )

    book: Mapped["Book"] = relationship("Book", back_populates="author_links")
    author: Mapped["Author"] = relationship("Author")
