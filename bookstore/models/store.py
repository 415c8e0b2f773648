"""Store ORM — a physical or online shop stocking books."""

import uuid

from sqlalchemy import String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from bookstore.db.base import Base, TimestampMixin


class Store(TimestampMixin, Base):
    """Store entity — owns its StoreBook rows."""
    __tablename__ = "stores"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    name: Mapped[str] = mapped_column(String(200), nullable=False)
    location: Mapped[str | None] = mapped_column(String(300), nullable=True)

    book_links: Mapped[list["StoreBook"]] = relationship(
        "StoreBook", back_populates="store",
        cascade="all, delete-orphan", passive_deletes=True,
    )
