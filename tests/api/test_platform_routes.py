"""Seed, health, correlation id and the uniform 500 envelope."""

from uuid import UUID, uuid4

import pytest

from bookstore.api.deps import get_author_service
from bookstore.config import Settings, get_settings
from bookstore.main import app


async def test_seed_then_already_seeded(client):
    first = await client.get("/api/database/seed")
    assert first.status_code == 200
    assert first.json() == {"message": "Database seeded."}

    second = await client.get("/api/database/seed")
    assert second.json() == {"message": "Database already seeded."}

    authors = (await client.get("/api/authors")).json()
    assert "Austen" in [a["lastName"] for a in authors]


async def test_seed_missing_file_returns_500(client, tmp_path):
    app.dependency_overrides[get_settings] = lambda: Settings(
        seed_file_path=tmp_path / "missing.json",
    )
    res = await client.get("/api/database/seed")
    assert res.status_code == 500
    assert res.json()["error"]["code"] == "RESOURCE_NOT_FOUND"


async def test_health_liveness(client):
    res = await client.get("/api/health/")
    assert res.status_code == 200
    assert res.json()["status"] == "healthy"


async def test_health_readiness(client):
    res = await client.get("/api/health/ready")
    assert res.status_code == 200
    assert res.json()["status"] == "ready"


async def test_correlation_id_echoed_when_valid(client):
    cid = str(uuid4())
    res = await client.get("/api/authors", headers={"X-Correlation-Id": cid})
    assert res.headers["X-Correlation-Id"] == cid


async def test_correlation_id_generated_when_missing_or_invalid(client):
    for headers in ({}, {"X-Correlation-Id": "not-a-uuid"}):
        res = await client.get("/api/authors", headers=headers)
        UUID(res.headers["X-Correlation-Id"])
        assert res.headers["X-Correlation-Id"] != "not-a-uuid"


@pytest.fixture
def exploding_service():
    class _Exploding:
        async def get_all(self):
            raise RuntimeError("database on fire")

    app.dependency_overrides[get_author_service] = lambda: _Exploding()


async def test_unhandled_error_returns_uniform_envelope(client, exploding_service):
    cid = str(uuid4())
    res = await client.get("/api/authors", headers={"X-Correlation-Id": cid})
    assert res.status_code == 500
    assert res.json() == {
        "type": "https://httpstatuses.com/500",
        "title": "An unexpected error occurred.",
        "status": 500,
        "traceId": cid,
    }
    assert res.headers["X-Correlation-Id"] == cid
    assert "fire" not in res.text


def test_unhandled_errors_are_left_to_the_correlation_middleware():
    assert Exception not in app.exception_handlers
