"""
API tests: рубрики, теги, пользователи, health, rate limit.
"""

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from src.infrastructure.config.database import get_db_session
from tests.factories import add_article, add_category, add_tag, make_test_app


# =============================================================================
# Рубрики
# =============================================================================

@pytest.mark.asyncio
async def test_category_tree_endpoint(client, session):
    news = await add_category(session, "সংবাদ", "news", name_en="News")
    await add_category(session, "জাতীয়", "national", parent_id=news.id)

    response = await client.get("/api/categories")

    data = response.json()["data"]
    assert data[0]["nameEn"] == "News"
    assert data[0]["children"][0]["slug"] == "national"
    assert data[0]["children"][0]["parentId"] == news.id


@pytest.mark.asyncio
async def test_category_counts_endpoint(client, session):
    sports = await add_category(session, "Sports", "sports")
    await add_article(session, "match", category_id=sports.id)

    response = await client.get("/api/categories/with-count")

    assert [(c["slug"], c["articleCount"]) for c in response.json()["data"]] == [("sports", 1)]


@pytest.mark.asyncio
async def test_category_delete_guard(client, session):
    sports = await add_category(session, "খেলা", "sports")
    await add_article(session, "match", category_id=sports.id)

    response = await client.delete(f"/api/categories/{sports.id}")
    still_there = await client.get("/api/categories/sports")

    assert response.status_code == 409
    assert response.json() == {
        "success": False,
        "message": "Cannot delete category",
        "errors": ["Category has articles associated with it"],
    }
    assert still_there.status_code == 200


@pytest.mark.asyncio
async def test_create_category_requires_name(client):
    response = await client.post("/api/categories", json={"slug": "no-name"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "name"


@pytest.mark.asyncio
async def test_create_and_move_category(client):
    parent = (await client.post("/api/categories", json={"name": "News"})).json()["data"]
    child = (await client.post("/api/categories", json={"name": "Dhaka", "parentId": parent["id"]})).json()["data"]

    cycle = await client.put(f"/api/categories/{parent['id']}", json={"parentId": child["id"]})

    assert child["parentId"] == parent["id"]
    assert cycle.status_code == 400
    assert cycle.json()["errors"][0]["field"] == "parentId"


# =============================================================================
# Теги
# =============================================================================

@pytest.mark.asyncio
async def test_tag_endpoints(client, session):
    tag = await add_tag(session, "Budget")
    await add_article(session, "budget-2024", tag_ids=[tag.id])

    listed = await client.get("/api/tags")
    blocked = await client.delete(f"/api/tags/{tag.id}")
    created = await client.post("/api/tags", json={"name": "Weather", "nameBn": "আবহাওয়া"})
    duplicate = await client.post("/api/tags", json={"name": "Weather"})

    assert listed.json()["data"][0]["articleCount"] == 1
    assert blocked.status_code == 409
    assert created.status_code == 201
    assert created.json()["data"]["slug"] == "weather"
    assert duplicate.status_code == 409


# =============================================================================
# Пользователи
# =============================================================================

@pytest.mark.asyncio
async def test_create_user_hides_password(client):
    response = await client.post(
        "/api/users",
        json={"email": "editor@example.com", "password": "s3cret-pass", "name": "Editor", "role": "editor"},
    )
    duplicate = await client.post(
        "/api/users",
        json={"email": "Editor@example.com", "password": "another-pass", "name": "Copy"},
    )

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["role"] == "editor"
    assert "password" not in data
    assert "passwordHash" not in data
    assert duplicate.status_code == 409


@pytest.mark.asyncio
async def test_invalid_role_rejected(client):
    response = await client.post(
        "/api/users",
        json={"email": "x@example.com", "password": "long-enough", "name": "X", "role": "superuser"},
    )

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "role"


# =============================================================================
# Health
# =============================================================================

@pytest.mark.asyncio
async def test_health_ok(client):
    response = await client.get("/health")

    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "Service is healthy"
    assert body["data"]["database"] == "connected"
    assert body["data"]["status"] == "ok"


@pytest.mark.asyncio
async def test_health_database_down(session_factory):
    app = make_test_app(session_factory)
    broken = AsyncMock()
    broken.execute.side_effect = ConnectionRefusedError("db is down")

    async def _broken_session():
        yield broken

    app.dependency_overrides[get_db_session] = _broken_session

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        response = await client.get("/api/health")

    assert response.status_code == 503
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Service is unhealthy"
    assert body["data"]["database"] == "disconnected"


# =============================================================================
# Rate limit
# =============================================================================

@pytest.mark.asyncio
async def test_rate_limit_blocks_after_max(session_factory):
    """Тест: третий запрос в окне получает 429, health не ограничивается."""
    app = make_test_app(session_factory, rate_limit_enabled=True, rate_limit_max_requests=2)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        responses = [await client.get("/api/tags") for _ in range(3)]
        health = await client.get("/health")
        other_client = await client.get("/api/tags", headers={"x-forwarded-for": "192.0.2.1"})

    assert [r.status_code for r in responses] == [200, 200, 429]
    assert responses[0].headers["X-RateLimit-Limit"] == "2"
    assert responses[0].headers["X-RateLimit-Remaining"] == "1"
    assert responses[2].json() == {"success": False, "message": "Too many requests. Please try again later."}
    assert "X-RateLimit-Reset" in responses[2].headers
    assert health.status_code == 200
    assert other_client.status_code == 200


@pytest.mark.asyncio
async def test_request_id_header(client):
    response = await client.get("/health", headers={"X-Request-ID": "abc-123"})

    assert response.headers["X-Request-ID"] == "abc-123"
