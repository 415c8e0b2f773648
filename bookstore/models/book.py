"""Book ORM — the catalog's central entity.

Invariants:
    - isbn is globally unique (ix_books_isbn)
    - Owns its BookAuthor and StoreBook rows: deleting a book removes them,
      never the Author or Store on the other side

Design Decisions:
    - Collections are not lazy-loaded: repositories eager-load with selectinload
      because AsyncSession cannot lazy-load on attribute access
    - ondelete=CASCADE on the join FKs plus ORM delete-orphan cascade
"""

import uuid

from sqlalchemy import String, Text, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.db.base import Base, TimestampMixin


class Book(TimestampMixin, Base):
    """Book entity — owns its author and store links."""
    __tablename__ = "books"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    isbn: Mapped[str] = mapped_column(
        String(32), nullable=False, unique=True, index=True,
    )
    title: Mapped[str] = mapped_column(String(300), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    author_links: Mapped[list["BookAuthor"]] = relationship(
        "BookAuthor", back_populates="book",
        cascade="all, delete-orphan", passive_deletes=True,
    )
    store_links: Mapped[list["StoreBook"]] = relationship(
        "StoreBook", back_populates="book",
        cascade="all, delete-orphan", passive_deletes=True,
    )
