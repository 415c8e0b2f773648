"""StoreBook ORM — membership row of the Store <-> Book relationship plus stock.

Invariants:
    - Composite primary key (store_id, book_id)
    - quantity >= 0 (ck_store_books_quantity_non_negative), default 0
"""

import uuid

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.db.base import Base


class StoreBook(Base):
    """Join row stocking a book at a store."""
    __tablename__ = "store_books"
    __table_args__ = (
        CheckConstraint("quantity >= 0", name="ck_store_books_quantity_non_negative"),
    )

    store_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("stores.id", ondelete="CASCADE"), primary_key=True,
    )
    book_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("books.id", ondelete="CASCADE"), primary_key=True,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    store: Mapped["Store"] = relationship("Store", back_populates="book_links")
    book: Mapped["Book"] = relationship("Book", back_populates="store_links")
