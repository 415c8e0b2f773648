"""ORM Models — SQLAlchemy declarative models for all catalog entities.

Invariants:
    - All models inherit from Base (db/base.py)
    - Book and Store own their join-row collections; Author owns none

Design Decisions:
    - One file per entity for locality
    - All models imported here so SQLAlchemy resolves string-based relationship()
      references before any query runs
"""

from bookstore.models.author import Author  # noqa: F401
from bookstore.models.book import Book  # noqa: F401
from bookstore.models.store import Store  # noqa: F401
from bookstore.models.book_author import BookAuthor  # noqa: F401
from bookstore.models.store_book import StoreBook  # noqa: F401
from bookstore.models.audit_log import AuditLog  # noqa: F401
