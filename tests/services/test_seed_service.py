"""Seed Service — verifies one-shot loading, link resolution and failure modes."""

import json

import pytest
from sqlalchemy import func, select

from bookstore.config import Settings
from bookstore.core.errors import ResourceNotFoundError, SeedFailureError
from bookstore.models.audit_log import AuditLog
from bookstore.models.author import Author
from bookstore.models.book import Book
from bookstore.models.book_author import BookAuthor
from bookstore.models.store_book import StoreBook
from bookstore.services.author_service import AuthorService
from bookstore.services.seed_service import ALREADY_SEEDED, SEEDED, SeedService

SEED = {
    "authors": [
        {"id": "a1", "firstName": "Jane", "lastName": "Austen"},
        {"id": "a2", "firstName": "Charles", "lastName": "Dickens"},
    ],
    "stores": [{"id": "s1", "name": "Downtown Books", "location": "Main St"}],
    "books": [
        {"id": "b1", "isbn": "978-1", "title": "Emma"},
        {"id": "b2", "isbn": "978-2", "title": "Bleak House", "description": "Fog."},
    ],
    "bookAuthors": [
        {"bookId": "b1", "authorId": "a1"},
        {"bookId": "b2", "authorId": "a2"},
        {"bookId": "b2", "authorId": "missing"},
    ],
    "storeBooks": [
        {"storeId": "s1", "bookId": "b1", "quantity": 4},
        {"storeId": "nowhere", "bookId": "b2", "quantity": 1},
    ],
}


@pytest.fixture
def seed_file(tmp_path):
    path = tmp_path / "seed-data.json"
    path.write_text(json.dumps(SEED))
    return path


async def _count(session, model) -> int:
    return await session.scalar(select(func.count()).select_from(model))


async def test_seed_loads_entities_and_resolvable_links(test_db, cache, seed_file):
    result = await SeedService(test_db, cache, seed_file).seed()
    assert result.value == SEEDED
    assert await _count(test_db, Author) == 2
    assert await _count(test_db, Book) == 2
    assert await _count(test_db, BookAuthor) == 2
    assert await _count(test_db, StoreBook) == 1


async def test_seed_twice_reports_already_seeded_without_writes(test_db, cache, seed_file):
    service = SeedService(test_db, cache, seed_file)
    await service.seed()
    audits = await _count(test_db, AuditLog)

    result = await service.seed()

    assert result.value == ALREADY_SEEDED
    assert await _count(test_db, Author) == 2
    assert await _count(test_db, AuditLog) == audits


async def test_seed_skipped_when_any_entity_exists(test_db, cache, seed_file):
    await AuthorService(test_db, cache).create("Someone", "Else")
    result = await SeedService(test_db, cache, seed_file).seed()
    assert result.value == ALREADY_SEEDED
    assert await _count(test_db, Book) == 0


async def test_missing_file_is_not_found(test_db, cache, tmp_path):
    result = await SeedService(test_db, cache, tmp_path / "nope.json").seed()
    assert isinstance(result.error, ResourceNotFoundError)


async def test_invalid_file_is_seed_failure(test_db, cache, tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("{not json")
    result = await SeedService(test_db, cache, path).seed()
    assert isinstance(result.error, SeedFailureError)
    assert result.error.message.startswith("Failed to seed database: ")
    assert await _count(test_db, Author) == 0


async def test_storage_failure_rolls_back_everything(test_db, cache, tmp_path):
    duplicated = dict(SEED, books=[
        {"id": "b1", "isbn": "978-1", "title": "Emma"},
        {"id": "b2", "isbn": "978-1", "title": "Emma again"},
    ])
    path = tmp_path / "dup.json"
    path.write_text(json.dumps(duplicated))

    result = await SeedService(test_db, cache, path).seed()

    assert isinstance(result.error, SeedFailureError)
    assert await _count(test_db, Author) == 0
    assert await _count(test_db, AuditLog) == 0


async def test_seed_clears_cache(test_db, cache, seed_file):
    cache.set("authors_all", [])
    await SeedService(test_db, cache, seed_file).seed()
    assert cache.get("authors_all") is None


async def test_bundled_seed_file_loads(test_db, cache):
    result = await SeedService(test_db, cache, Settings().seed_file_path).seed()
    assert result.value == SEEDED
    assert await _count(test_db, Book) == 6
