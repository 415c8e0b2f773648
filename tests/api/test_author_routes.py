"""Author Routes — verifies status codes and camelCase payloads."""

from uuid import uuid4


async def test_create_author_returns_201_camel_case(client):
    res = await client.post("/api/authors", json={"firstName": "Jane", "lastName": "Austen"})
    assert res.status_code == 201
    body = res.json()
    assert body["firstName"] == "Jane"
    assert body["lastName"] == "Austen"
    assert "id" in body


async def test_duplicate_author_returns_409(client):
    payload = {"firstName": "Jane", "lastName": "Austen"}
    await client.post("/api/authors", json=payload)
    res = await client.post("/api/authors", json=payload)
    assert res.status_code == 409
    assert res.json()["error"]["code"] == "CONFLICT"


async def test_blank_name_returns_400(client):
    res = await client.post("/api/authors", json={"firstName": "  ", "lastName": "Austen"})
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


async def test_list_authors(client):
    await client.post("/api/authors", json={"firstName": "Charles", "lastName": "Dickens"})
    await client.post("/api/authors", json={"firstName": "Jane", "lastName": "Austen"})
    res = await client.get("/api/authors")
    assert res.status_code == 200
    assert [a["lastName"] for a in res.json()] == ["Austen", "Dickens"]


async def test_get_author_by_id(client):
    created = (await client.post(
        "/api/authors", json={"firstName": "Jane", "lastName": "Austen"},
    )).json()
    res = await client.get(f"/api/authors/{created['id']}")
    assert res.status_code == 200
    assert res.json() == created


async def test_get_missing_author_returns_404(client):
    res = await client.get(f"/api/authors/{uuid4()}")
    assert res.status_code == 404
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_malformed_author_id_returns_400(client):
    res = await client.get("/api/authors/not-a-uuid")
    assert res.status_code == 400
