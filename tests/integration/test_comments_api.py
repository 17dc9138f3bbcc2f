"""
API tests: /api/comments и ветки /api/articles/{id}/comments.
"""

import pytest

from tests.factories import add_article, add_comment, add_user


@pytest.mark.asyncio
async def test_comment_moderation_flow(client, session):
    """Комментарий читателя появляется в ветке только после одобрения."""
    article = await add_article(session, "team-wins", is_published=True)
    editor = await add_user(session, role="editor")

    created = await client.post(
        "/api/comments",
        json={"articleId": article.id, "authorName": "করিম", "content": "দারুণ খেলা!"},
        headers={"x-real-ip": "198.51.100.4"},
    )
    comment_id = created.json()["data"]["id"]
    hidden = await client.get(f"/api/articles/{article.id}/comments")
    pending = await client.get("/api/comments/pending")
    approved = await client.post(
        f"/api/comments/{comment_id}/moderate", json={"action": "approve", "moderatorId": editor.id}
    )
    visible = await client.get(f"/api/articles/{article.id}/comments")

    assert created.status_code == 201
    assert created.json()["data"]["isApproved"] is False
    assert hidden.json()["data"] == []
    assert [item["id"] for item in pending.json()["data"]] == [comment_id]
    assert approved.status_code == 200
    assert approved.json()["message"] == "Comment approved successfully"
    assert approved.json()["data"]["moderatedBy"] == editor.id
    assert [item["content"] for item in visible.json()["data"]] == ["দারুণ খেলা!"]
    assert visible.json()["meta"]["total"] == 1


@pytest.mark.asyncio
async def test_reject_comment(client, session):
    article = await add_article(session, "story")
    editor = await add_user(session)
    comment = await add_comment(session, article.id, is_approved=True)

    response = await client.post(
        f"/api/comments/{comment.id}/moderate", json={"action": "reject", "moderatorId": editor.id}
    )

    assert response.status_code == 200
    assert response.json()["message"] == "Comment rejected successfully"
    assert response.json()["data"]["isApproved"] is False


@pytest.mark.asyncio
async def test_invalid_moderation_action(client, session):
    article = await add_article(session, "story")
    comment = await add_comment(session, article.id)

    response = await client.post(f"/api/comments/{comment.id}/moderate", json={"action": "delete", "moderatorId": 1})

    assert response.status_code == 400
    body = response.json()
    assert body["message"] == "Validation failed"
    assert body["errors"][0]["field"] == "action"


@pytest.mark.asyncio
async def test_threads_in_response(client, session):
    article = await add_article(session, "story")
    parent = await add_comment(session, article.id, "parent", is_approved=True, minutes=1)
    await add_comment(session, article.id, "reply", parent_id=parent.id, is_approved=True, minutes=2)

    response = await client.get(f"/api/articles/{article.id}/comments")

    data = response.json()["data"]
    assert data[0]["content"] == "parent"
    assert data[0]["replies"][0]["content"] == "reply"
    assert data[0]["replies"][0]["replies"] == []


@pytest.mark.asyncio
async def test_reply_to_foreign_parent(client, session):
    first = await add_article(session, "first")
    second = await add_article(session, "second")
    parent = await add_comment(session, first.id)

    response = await client.post(
        "/api/comments",
        json={"articleId": second.id, "parentId": parent.id, "authorName": "A", "content": "B"},
    )

    assert response.status_code == 400
    assert response.json()["errors"] == [
        {"field": "parentId", "message": "parent comment must belong to the same article"}
    ]


@pytest.mark.asyncio
async def test_moderation_list_with_article(client, session):
    article = await add_article(session, "story", title="Story")
    await add_comment(session, article.id, "reported", is_reported=True)
    await add_comment(session, article.id, "fine")

    response = await client.get("/api/comments", params={"reported": "true"})

    body = response.json()
    assert [item["content"] for item in body["data"]] == ["reported"]
    assert body["data"][0]["article"] == {"id": article.id, "title": "Story", "titleBn": None, "slug": "story"}


@pytest.mark.asyncio
async def test_report_and_delete(client, session):
    article = await add_article(session, "story")
    comment = await add_comment(session, article.id)

    reported = await client.post(f"/api/comments/{comment.id}/report")
    deleted = await client.delete(f"/api/comments/{comment.id}")
    again = await client.delete(f"/api/comments/{comment.id}")

    assert reported.json()["data"]["isReported"] is True
    assert deleted.status_code == 200
    assert again.status_code == 404
