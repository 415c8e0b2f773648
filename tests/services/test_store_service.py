"""Store Service — verifies stock upserts, removal and store view caching."""

import uuid

import pytest
from sqlalchemy.exc import IntegrityError

from bookstore.core import cache_keys
from bookstore.core.errors import NotLinkedError, ResourceNotFoundError, ValidationFailureError
from bookstore.services.book_service import BookService
from bookstore.services.store_service import StoreService


@pytest.fixture
def stores(test_db, cache):
    return StoreService(test_db, cache)


@pytest.fixture
async def downtown(stores):
    return (await stores.create("Downtown Books", "Main St")).value


@pytest.fixture
async def emma(test_db, cache):
    return (await BookService(test_db, cache).create("978-1", "Emma")).value


async def test_create_and_list_ordered_by_name(stores):
    await stores.create("Zebra Books")
    await stores.create("Alpha Books", "Harbour")
    names = [s.name for s in (await stores.get_all()).value]
    assert names == ["Alpha Books", "Zebra Books"]


async def test_create_evicts_store_list(stores, cache):
    await stores.get_all()
    assert cache.get(cache_keys.STORES_ALL) == []
    await stores.create("Downtown Books")
    assert cache.get(cache_keys.STORES_ALL) is None


async def test_get_by_id_missing_is_ok_none(stores):
    result = await stores.get_by_id(uuid.uuid4())
    assert result.success
    assert result.value is None


async def test_get_books_of_missing_store_is_not_found(stores):
    assert isinstance((await stores.get_books(uuid.uuid4())).error, ResourceNotFoundError)


async def test_assign_book_sets_quantity(stores, downtown, emma):
    details = (await stores.assign_book(downtown.id, emma.id, 5)).value
    assert [b.id for b in details.books] == [emma.id]
    stock = (await stores.get_books(downtown.id)).value
    assert [(b.title, b.quantity) for b in stock] == [("Emma", 5)]


async def test_assign_book_twice_upserts_quantity(stores, downtown, emma):
    await stores.assign_book(downtown.id, emma.id, 5)
    details = (await stores.assign_book(downtown.id, emma.id, 9)).value
    assert len(details.books) == 1
    stock = (await stores.get_books(downtown.id)).value
    assert [b.quantity for b in stock] == [9]


async def test_assign_book_to_missing_store_is_not_found(stores, emma):
    result = await stores.assign_book(uuid.uuid4(), emma.id, 1)
    assert isinstance(result.error, ResourceNotFoundError)


async def test_assign_unknown_book_fails_in_storage(stores, downtown):
    with pytest.raises(IntegrityError):
        await stores.assign_book(downtown.id, uuid.uuid4(), 1)


async def test_assign_book_evicts_book_details(stores, downtown, emma, test_db, cache):
    books = BookService(test_db, cache)
    assert (await books.get_by_id(emma.id)).value.stores == []

    await stores.assign_book(downtown.id, emma.id, 2)

    assert [s.id for s in (await books.get_by_id(emma.id)).value.stores] == [downtown.id]


async def test_remove_book(stores, downtown, emma):
    await stores.assign_book(downtown.id, emma.id, 5)
    details = (await stores.remove_book(downtown.id, emma.id)).value
    assert details.books == []
    assert (await stores.get_books(downtown.id)).value == []


async def test_remove_unstocked_book_is_not_linked(stores, downtown, emma):
    result = await stores.remove_book(downtown.id, emma.id)
    assert isinstance(result.error, NotLinkedError)


async def test_remove_book_from_missing_store(stores, emma):
    result = await stores.remove_book(uuid.uuid4(), emma.id)
    assert isinstance(result.error, ResourceNotFoundError)


async def test_no_stale_store_views_after_stock_changes(stores, downtown, emma):
    await stores.get_by_id(downtown.id)
    await stores.get_books(downtown.id)

    await stores.assign_book(downtown.id, emma.id, 3)

    assert [b.id for b in (await stores.get_by_id(downtown.id)).value.books] == [emma.id]
    assert [b.quantity for b in (await stores.get_books(downtown.id)).value] == [3]


async def test_negative_quantity_is_validation_failure(stores, downtown, emma):
    result = await stores.assign_book(downtown.id, emma.id, -1)
    assert isinstance(result.error, ValidationFailureError)
    assert (await stores.get_books(downtown.id)).value == []
