"""
API tests: /api/articles (конверт ответа, фильтры, учёт просмотров).
"""

import pytest
from sqlalchemy import func, select

from src.infrastructure.persistence.models import ArticleModel, PageViewModel
from tests.factories import add_article, add_category, add_tag


@pytest.mark.asyncio
async def test_breaking_article_view_is_counted(client, session_factory, session):
    """
    Срочная новость: попадает в /breaking, просмотр отдаёт статью
    и увеличивает счётчик в фоне.
    """
    sports = await add_category(session, "খেলা", "sports")
    await add_article(session, "team-wins", title="Team Wins!", is_published=True, is_breaking=True, category_id=sports.id)

    breaking = await client.get("/api/articles/breaking")
    detail = await client.get("/api/articles/team-wins", headers={"x-forwarded-for": "203.0.113.9", "referer": "https://t.co"})

    assert breaking.status_code == 200
    body = breaking.json()
    assert [item["slug"] for item in body["data"]] == ["team-wins"]
    assert body["data"][0]["category"] == {"id": sports.id, "name": "খেলা", "slug": "sports"}
    assert "meta" not in body

    assert detail.status_code == 200
    assert detail.json()["data"]["viewCount"] == 1

    async with session_factory() as read_session:
        view_count = await read_session.scalar(select(ArticleModel.view_count).where(ArticleModel.slug == "team-wins"))
        view = (await read_session.execute(select(PageViewModel))).scalar_one()
    assert view_count == 1
    assert view.ip_address == "203.0.113.9"
    assert view.referrer == "https://t.co"


@pytest.mark.asyncio
async def test_create_then_fetch(client):
    created = await client.post(
        "/api/articles",
        json={"title": "Team Wins!", "titleBn": "দল জিতেছে!", "content": "<p>Report</p>", "viewCount": 999},
    )
    fetched = await client.get("/api/articles/team-wins")

    assert created.status_code == 201
    body = created.json()
    assert body["success"] is True
    assert body["message"] == "Article created successfully"
    assert body["data"]["slug"] == "team-wins"
    assert body["data"]["status"] == "draft"
    assert body["data"]["viewCount"] == 0

    data = fetched.json()["data"]
    assert data["id"] == body["data"]["id"]
    assert data["titleBn"] == "দল জিতেছে!"
    assert data["isPublished"] is False


@pytest.mark.asyncio
async def test_create_validation_errors(client):
    response = await client.post("/api/articles", json={"title": "", "priority": 11})

    assert response.status_code == 400
    body = response.json()
    assert body["success"] is False
    assert body["message"] == "Validation failed"
    assert {error["field"] for error in body["errors"]} == {"title", "content", "priority"}


@pytest.mark.asyncio
async def test_duplicate_slug_conflict(client, session):
    await add_article(session, "team-wins")

    response = await client.post("/api/articles", json={"title": "Team Wins!", "content": "Again"})

    assert response.status_code == 409
    assert response.json()["message"] == "Article with this slug already exists"


@pytest.mark.asyncio
async def test_unknown_slug_is_404(client):
    response = await client.get("/api/articles/no-such-story")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "message": "Article not found",
        "errors": ["Article with this slug does not exist"],
    }


@pytest.mark.asyncio
async def test_list_clamps_pagination(client, session):
    await add_article(session, "only-story")

    response = await client.get("/api/articles", params={"limit": 500, "page": 0})

    assert response.status_code == 200
    assert response.json()["meta"] == {"page": 1, "limit": 100, "total": 1, "totalPages": 1}


@pytest.mark.asyncio
async def test_list_filters_by_tags_and_flags(client, session):
    election = await add_tag(session, "Election")
    await add_article(session, "vote-count", tag_ids=[election.id], is_published=True, is_featured=False)
    await add_article(session, "featured-vote", tag_ids=[election.id], is_published=True, is_featured=True)
    await add_article(session, "weather", is_published=True)

    response = await client.get(
        "/api/articles", params={"tags": str(election.id), "featured": "false", "published": "true"}
    )

    body = response.json()
    assert [item["slug"] for item in body["data"]] == ["vote-count"]
    assert body["data"][0]["tags"] == [{"id": election.id, "name": "Election", "slug": "election"}]
    assert body["meta"]["total"] == 1


@pytest.mark.asyncio
async def test_invalid_tag_ids_rejected(client):
    response = await client.get("/api/articles", params={"tags": "1,abc"})

    assert response.status_code == 400
    assert response.json()["errors"][0]["field"] == "tags"


@pytest.mark.asyncio
async def test_search_query_alias(client, session):
    await add_article(session, "padma-bridge", title="Padma Bridge opens")
    await add_article(session, "cricket")

    response = await client.get("/api/articles", params={"q": "padma"})

    assert [item["slug"] for item in response.json()["data"]] == ["padma-bridge"]


@pytest.mark.asyncio
async def test_update_and_delete(client, session):
    article = await add_article(session, "story")

    updated = await client.put(f"/api/articles/{article.id}", json={"isPublished": True, "status": "published"})
    deleted = await client.delete(f"/api/articles/{article.id}")
    missing = await client.delete(f"/api/articles/{article.id}")

    assert updated.status_code == 200
    assert updated.json()["data"]["publishedAt"] is not None
    assert deleted.status_code == 200
    assert deleted.json() == {"success": True, "message": "Article deleted successfully"}
    assert missing.status_code == 404


@pytest.mark.asyncio
async def test_update_rejects_null_for_required_fields(client, session):
    article = await add_article(session, "story", priority=7)

    response = await client.put(
        f"/api/articles/{article.id}", json={"priority": None, "status": None, "isPublished": None}
    )
    fetched = await client.get("/api/articles/story")

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert {error["field"] for error in body["errors"]} == {"priority", "status", "isPublished"}
    assert fetched.json()["data"]["priority"] == 7
    assert fetched.json()["data"]["isPublished"] is False


@pytest.mark.asyncio
async def test_category_articles_endpoint(client, session):
    sports = await add_category(session, "Sports", "sports")
    await add_article(session, "match", category_id=sports.id, is_published=True)

    response = await client.get("/api/categories/sports/articles")

    assert response.status_code == 200
    assert [item["slug"] for item in response.json()["data"]] == ["match"]


@pytest.mark.asyncio
async def test_missing_article_view_not_recorded(client, session_factory):
    await client.get("/api/articles/ghost")

    async with session_factory() as read_session:
        views = await read_session.scalar(select(func.count(PageViewModel.id)))
    assert views == 0
