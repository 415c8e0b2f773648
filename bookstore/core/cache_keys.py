"""Cache Keys — deterministic keys for every cached read path.

Invariants:
    - Same operation + parameters always yields the same key
    - Paged/filtered book queries have no key (never cached)
"""

from uuid import UUID

AUTHORS_ALL = "authors_all"
STORES_ALL = "stores_all"


def book_details(book_id: UUID) -> str:
    return f"book_details_{book_id}"


def store_details(store_id: UUID) -> str:
    return f"store_details_{store_id}"


def store_books(store_id: UUID) -> str:
    return f"store_books_{store_id}"


def store_views(store_id: UUID) -> tuple[str, str]:
    """Both keys whose shape depends on a store's stocked books."""
    return store_details(store_id), store_books(store_id)
