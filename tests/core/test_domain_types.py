"""Domain Types — verifies sort key parsing, paging arithmetic and cache keys."""

from uuid import uuid4

import pytest

from bookstore.core import cache_keys
from bookstore.core.domain_types import (
    AuditAction, BookFilter, BookId, BookSortKey, NIL_ENTITY_ID,
)


def test_identity_types_wrap_uuid():
    uid = uuid4()
    assert BookId(uid) == uid


def test_nil_entity_id_is_all_zeroes():
    assert str(NIL_ENTITY_ID) == "00000000-0000-0000-0000-000000000000"


def test_audit_actions():
    assert [a.value for a in AuditAction] == ["Added", "Modified", "Deleted"]


@pytest.mark.parametrize("raw,expected", [
    ("isbn", BookSortKey.ISBN),
    ("ISBN", BookSortKey.ISBN),
    ("createdAt", BookSortKey.CREATED_AT),
    ("CreatedAt", BookSortKey.CREATED_AT),
    ("title", BookSortKey.TITLE),
    ("price", BookSortKey.TITLE),
    ("", BookSortKey.TITLE),
    (None, BookSortKey.TITLE),
])
def test_sort_key_parse(raw, expected):
    assert BookSortKey.parse(raw) is expected


def test_book_filter_defaults():
    criteria = BookFilter()
    assert criteria.page == 1
    assert criteria.page_size == 20
    assert criteria.offset == 0
    assert criteria.sort_key is BookSortKey.TITLE
    assert criteria.desc is False


def test_book_filter_offset_is_one_based():
    assert BookFilter(page=3, page_size=10).offset == 20


def test_cache_keys_are_deterministic():
    uid = uuid4()
    assert cache_keys.book_details(uid) == f"book_details_{uid}"
    assert cache_keys.store_details(uid) == f"store_details_{uid}"
    assert cache_keys.store_books(uid) == f"store_books_{uid}"
    assert cache_keys.store_views(uid) == (
        cache_keys.store_details(uid), cache_keys.store_books(uid),
    )
    assert cache_keys.AUTHORS_ALL == "authors_all"
    assert cache_keys.STORES_ALL == "stores_all"
