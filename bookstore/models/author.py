"""Author ORM — a person credited on books.

Invariants:
    - (first_name, last_name) is unique (uq_authors_first_last)
    - No delete operation is exposed; authors outlive every book they wrote
"""

import uuid

from sqlalchemy import String, UniqueConstraint, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from bookstore.db.base import Base, TimestampMixin


class Author(TimestampMixin, Base):
    """Author entity."""
    __tablename__ = "authors"
    __table_args__ = (
        UniqueConstraint("first_name", "last_name", name="uq_authors_first_last"),
    )

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
