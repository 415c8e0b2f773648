"""Book Routes — verifies CRUD statuses, omitted-vs-empty ids and paging params."""

from uuid import uuid4

import pytest


@pytest.fixture
async def jane(client):
    return (await client.post(
        "/api/authors", json={"firstName": "Jane", "lastName": "Austen"},
    )).json()


@pytest.fixture
async def emma(client, jane):
    return (await client.post("/api/books", json={
        "isbn": "978-1", "title": "Emma", "authorIds": [jane["id"]],
    })).json()


async def test_create_book_returns_details(client, emma, jane):
    assert emma["isbn"] == "978-1"
    assert [a["id"] for a in emma["authors"]] == [jane["id"]]
    assert emma["stores"] == []


async def test_duplicate_isbn_returns_409(client, emma):
    res = await client.post("/api/books", json={"isbn": "978-1", "title": "Persuasion"})
    assert res.status_code == 409


async def test_create_without_isbn_returns_400(client):
    res = await client.post("/api/books", json={"title": "Emma"})
    assert res.status_code == 400


async def test_put_without_author_ids_keeps_authors(client, emma, jane):
    res = await client.put(f"/api/books/{emma['id']}", json={"title": "Emma II"})
    assert res.status_code == 200
    assert res.json()["title"] == "Emma II"
    assert [a["id"] for a in res.json()["authors"]] == [jane["id"]]


async def test_put_with_empty_author_ids_clears_authors(client, emma):
    res = await client.put(f"/api/books/{emma['id']}", json={"title": "Emma", "authorIds": []})
    assert res.status_code == 200
    assert res.json()["authors"] == []


async def test_put_missing_book_returns_404(client):
    res = await client.put(f"/api/books/{uuid4()}", json={"title": "Ghost"})
    assert res.status_code == 404


async def test_delete_book_returns_204_then_404(client, emma):
    res = await client.delete(f"/api/books/{emma['id']}")
    assert res.status_code == 204
    assert (await client.get(f"/api/books/{emma['id']}")).status_code == 404
    assert (await client.delete(f"/api/books/{emma['id']}")).status_code == 404


async def test_assign_author_twice_is_idempotent(client, jane):
    book = (await client.post("/api/books", json={"isbn": "978-2", "title": "Persuasion"})).json()
    payload = {"bookId": book["id"], "authorId": jane["id"]}
    first = await client.post("/api/books/assign-author", json=payload)
    second = await client.post("/api/books/assign-author", json=payload)
    assert first.status_code == second.status_code == 200
    assert len(second.json()["authors"]) == 1


async def test_assign_unknown_author_returns_404(client, emma):
    res = await client.post(
        "/api/books/assign-author", json={"bookId": emma["id"], "authorId": str(uuid4())},
    )
    assert res.status_code == 404


async def test_remove_author(client, emma, jane):
    res = await client.delete(f"/api/books/{emma['id']}/authors/{jane['id']}")
    assert res.status_code == 200
    assert res.json()["authors"] == []


async def test_remove_unlinked_author_returns_404_not_linked(client, emma):
    other = (await client.post(
        "/api/authors", json={"firstName": "Charles", "lastName": "Dickens"},
    )).json()
    res = await client.delete(f"/api/books/{emma['id']}/authors/{other['id']}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "NOT_LINKED"


async def test_list_books_query_parameters(client):
    for i in range(5):
        await client.post("/api/books", json={"isbn": f"978-{i}", "title": f"Book {i}"})
    res = await client.get(
        "/api/books", params={"page": 2, "pageSize": 2, "sortBy": "isbn", "desc": "true"},
    )
    assert res.status_code == 200
    body = res.json()
    assert [b["isbn"] for b in body["items"]] == ["978-2", "978-1"]
    assert body["total"] == 5
    assert body["page"] == 2
    assert body["pageSize"] == 2


async def test_list_books_rejects_page_zero(client):
    res = await client.get("/api/books", params={"page": 0})
    assert res.status_code == 400
