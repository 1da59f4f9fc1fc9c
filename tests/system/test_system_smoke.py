"""
System smoke test: the HTTP surface in-process over SQLite.
Verifies health, role management, course CRUD, filters, bans and the
error body returned for each failure kind.
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from catalog.api.deps import get_catalog_service
from catalog.kernel.identity.jwt import create_access_token
from catalog.main import app


def auth(principal: str) -> dict:
    token, _, _ = create_access_token(principal)
    return {"Authorization": f"Bearer {token}"}


@pytest_asyncio.fixture
async def client(service):
    """Async client wired to a per-test catalog service."""
    app.dependency_overrides[get_catalog_service] = lambda: service
    try:
        async with AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as ac:
            yield ac
    finally:
        app.dependency_overrides.pop(get_catalog_service, None)


@pytest.mark.asyncio
async def test_health(client: AsyncClient):
    r = await client.get("/health")
    assert r.status_code == 200
    data = r.json()
    assert data["status"] == "ok"
    assert data["course_count"] == 0
    assert data["next_course_id"] == 0
    assert "X-Request-ID" in r.headers


@pytest.mark.asyncio
async def test_request_id_echoed(client: AsyncClient):
    r = await client.get("/health", headers={"X-Request-ID": "abc123"})
    assert r.headers["X-Request-ID"] == "abc123"


@pytest.mark.asyncio
async def test_missing_token_is_401(client: AsyncClient, sample_course_data):
    r = await client.post("/api/v1/courses", json=sample_course_data)
    assert r.status_code == 401

    r = await client.post(
        "/api/v1/courses",
        json=sample_course_data,
        headers={"Authorization": "Bearer garbage"},
    )
    assert r.status_code == 401


@pytest.mark.asyncio
async def test_end_to_end_flow(client: AsyncClient, sample_course_data):
    r = await client.put("/api/v1/access/admin", json={"address": "A"}, headers=auth("A"))
    assert r.status_code == 200
    assert r.json()["admin"] == "A"

    r = await client.post("/api/v1/access/moderators", json={"address": "M"}, headers=auth("A"))
    assert r.status_code == 201
    assert r.json()["moderators"] == ["M"]

    r = await client.post("/api/v1/courses", json=sample_course_data, headers=auth("U"))
    assert r.status_code == 201
    course = r.json()
    assert course["id"] == 0
    assert course["creator_address"] == "U"
    assert course["updated_at"] is None

    r = await client.patch("/api/v1/courses/0", json={"title": "y"}, headers=auth("M"))
    assert r.status_code == 200
    assert r.json()["title"] == "y"
    assert r.json()["body"] == sample_course_data["body"]
    assert r.json()["updated_at"] is not None

    r = await client.delete("/api/v1/courses/0", headers=auth("V"))
    assert r.status_code == 403
    body = r.json()
    assert body["kind"] == "unauthorized"
    assert body["operation"] == "delete_record"
    assert body["subject"] == 0
    assert body["request_id"]

    r = await client.get("/api/v1/courses/0")
    assert r.status_code == 200
    assert r.json()["title"] == "y"


@pytest.mark.asyncio
async def test_validation_failures(client: AsyncClient, sample_course_data):
    r = await client.post(
        "/api/v1/courses",
        json={**sample_course_data, "title": ""},
        headers=auth("U"),
    )
    assert r.status_code == 422
    assert r.json()["kind"] == "invalid_argument"

    missing = dict(sample_course_data)
    del missing["contact"]
    r = await client.post("/api/v1/courses", json=missing, headers=auth("U"))
    assert r.status_code == 422
    assert r.json()["kind"] == "invalid_argument"

    r = await client.post("/api/v1/courses/filter/and", json={})
    assert r.status_code == 422
    assert r.json()["operation"] == "filter_records_and"


@pytest.mark.asyncio
async def test_not_found(client: AsyncClient):
    r = await client.get("/api/v1/courses/99")
    assert r.status_code == 404
    assert r.json()["kind"] == "not_found"

    r = await client.delete("/api/v1/courses/mine", headers=auth("U"))
    assert r.status_code == 404

    r = await client.post("/api/v1/courses/filter/or", json={"keyword": "nothing"})
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_filters(client: AsyncClient, sample_course_data):
    for keyword, category in [("rust", "programming"), ("python", "programming"), ("rust", "systems")]:
        r = await client.post(
            "/api/v1/courses",
            json={**sample_course_data, "keyword": keyword, "category": category},
            headers=auth("U"),
        )
        assert r.status_code == 201

    criteria = {"keyword": "rust", "category": "programming"}
    r = await client.post("/api/v1/courses/filter/and", json=criteria)
    assert r.status_code == 200
    assert [c["id"] for c in r.json()["items"]] == [0]

    r = await client.post("/api/v1/courses/filter/or", json=criteria)
    assert r.json()["total"] == 3


@pytest.mark.asyncio
async def test_moderator_capacity_and_duplicate(client: AsyncClient):
    await client.put("/api/v1/access/admin", json={"address": "A"}, headers=auth("A"))
    for i in range(5):
        r = await client.post(
            "/api/v1/access/moderators", json={"address": f"M{i}"}, headers=auth("A")
        )
        assert r.status_code == 201

    r = await client.post("/api/v1/access/moderators", json={"address": "M0"}, headers=auth("A"))
    assert r.status_code == 409
    assert r.json()["kind"] == "capacity_exceeded"

    r = await client.delete("/api/v1/access/moderators/M4", headers=auth("A"))
    assert r.status_code == 200
    r = await client.post("/api/v1/access/moderators", json={"address": "M0"}, headers=auth("A"))
    assert r.status_code == 409
    assert r.json()["kind"] == "duplicate"


@pytest.mark.asyncio
async def test_ban_and_unban(client: AsyncClient, sample_course_data):
    await client.put("/api/v1/access/admin", json={"address": "A"}, headers=auth("A"))
    await client.post("/api/v1/courses", json=sample_course_data, headers=auth("U"))
    await client.post("/api/v1/courses", json=sample_course_data, headers=auth("U"))

    r = await client.post("/api/v1/access/banned", json={"address": "U"}, headers=auth("A"))
    assert r.status_code == 200
    assert r.json()["total"] == 2

    r = await client.post("/api/v1/courses", json=sample_course_data, headers=auth("U"))
    assert r.status_code == 403
    assert r.json()["kind"] == "banned"

    r = await client.get("/api/v1/access")
    assert r.json()["banned"] == ["U"]

    r = await client.delete("/api/v1/access/banned/U", headers=auth("A"))
    assert r.status_code == 200
    assert r.json()["banned"] == []

    r = await client.post("/api/v1/courses", json=sample_course_data, headers=auth("U"))
    assert r.status_code == 201
    assert r.json()["id"] == 2


@pytest.mark.asyncio
async def test_bulk_deletes(client: AsyncClient, sample_course_data):
    await client.post("/api/v1/courses", json=sample_course_data, headers=auth("U"))
    await client.post("/api/v1/courses", json=sample_course_data, headers=auth("V"))

    r = await client.delete("/api/v1/courses/by-creator/V", headers=auth("U"))
    assert r.status_code == 403

    r = await client.delete("/api/v1/courses/by-creator/V", headers=auth("V"))
    assert r.status_code == 200
    assert r.json()["total"] == 1

    r = await client.delete("/api/v1/courses/mine", headers=auth("U"))
    assert r.status_code == 200
    assert [c["id"] for c in r.json()["items"]] == [0]


@pytest.mark.asyncio
async def test_course_id_bounds(client: AsyncClient):
    r = await client.get(f"/api/v1/courses/{2**64 - 1}")
    assert r.status_code == 404
    assert r.json()["kind"] == "not_found"

    r = await client.delete(f"/api/v1/courses/{2**63}", headers=auth("U"))
    assert r.status_code == 404

    r = await client.get("/api/v1/courses/-1")
    assert r.status_code == 422

    r = await client.get(f"/api/v1/courses/{2**64}")
    assert r.status_code == 422
