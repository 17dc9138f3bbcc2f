"""
Integration tests для CommentService: ветки, модерация, очередь.
"""

import pytest
from sqlalchemy import select

from src.application.commands.comment_commands import (
    CreateCommentCommand, ModerateCommentCommand, UpdateCommentCommand
)
from src.application.queries.list_queries import CommentFilters, PageRequest
from src.application.services.comment_service import CommentService
from src.domain.value_objects.moderation_action import ModerationAction
from src.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
from src.infrastructure.persistence.comment_repository_impl import CommentRepositoryImpl
from src.infrastructure.persistence.models import CommentModel
from tests.factories import add_article, add_comment, add_user


def make_service(session, auto_approve: bool = False) -> CommentService:
    return CommentService(
        session,
        CommentRepositoryImpl(session),
        ArticleRepositoryImpl(session),
        auto_approve=auto_approve,
    )


@pytest.mark.asyncio
async def test_new_comment_is_pending_and_hidden(session):
    """Тест: новый комментарий не виден, пока его не одобрят."""
    article = await add_article(session, "team-wins", is_published=True)
    moderator = await add_user(session, role="editor")
    service = make_service(session)

    created = await service.create_comment(
        CreateCommentCommand(article_id=article.id, author_name="Karim", content="অভিনন্দন!")
    )
    before = await service.get_article_comments(article.id, PageRequest())
    await service.moderate_comment(
        ModerateCommentCommand(comment_id=created.data.id, action=ModerationAction.APPROVE, moderator_id=moderator.id)
    )
    after = await service.get_article_comments(article.id, PageRequest())

    assert created.status_code == 201
    assert created.data.is_approved is False
    assert before.data == []
    assert before.meta.total == 0
    assert [node.content for node in after.data] == ["অভিনন্দন!"]


@pytest.mark.asyncio
async def test_auto_approve_setting(session):
    article = await add_article(session, "auto")

    result = await make_service(session, auto_approve=True).create_comment(
        CreateCommentCommand(article_id=article.id, author_name="Karim", content="Hi")
    )

    assert result.data.is_approved is True


@pytest.mark.asyncio
async def test_comment_on_missing_article(session):
    result = await make_service(session).create_comment(
        CreateCommentCommand(article_id=999, author_name="Karim", content="Hi")
    )

    assert result.status_code == 400
    assert result.errors[0]["field"] == "articleId"


@pytest.mark.asyncio
async def test_reply_must_share_article(session):
    first = await add_article(session, "first")
    second = await add_article(session, "second")
    parent = await add_comment(session, first.id, is_approved=True)

    result = await make_service(session).create_comment(
        CreateCommentCommand(article_id=second.id, parent_id=parent.id, author_name="Karim", content="Hi")
    )

    assert result.status_code == 400
    assert result.errors[0]["field"] == "parentId"


@pytest.mark.asyncio
async def test_reply_increments_parent_reply_count(session_factory, session):
    article = await add_article(session, "story")
    parent = await add_comment(session, article.id, is_approved=True)

    result = await make_service(session).create_comment(
        CreateCommentCommand(article_id=article.id, parent_id=parent.id, author_name="Rahim", content="Agreed")
    )

    async with session_factory() as read_session:
        reply_count = await read_session.scalar(
            select(CommentModel.reply_count).where(CommentModel.id == parent.id)
        )
    assert result.success is True
    assert reply_count == 1


@pytest.mark.asyncio
async def test_threads_show_only_approved_replies(session):
    article = await add_article(session, "story")
    older = await add_comment(session, article.id, "older", is_approved=True, minutes=1)
    newer = await add_comment(session, article.id, "newer", is_approved=True, minutes=2)
    await add_comment(session, article.id, "reply 1", parent_id=older.id, is_approved=True, minutes=3)
    await add_comment(session, article.id, "hidden reply", parent_id=older.id, is_approved=False, minutes=4)
    reply = await add_comment(session, article.id, "reply 2", parent_id=older.id, is_approved=True, minutes=5)
    await add_comment(session, article.id, "nested", parent_id=reply.id, is_approved=True, minutes=6)

    result = await make_service(session).get_article_comments(article.id, PageRequest(page=1, limit=10))

    assert [node.id for node in result.data] == [newer.id, older.id]
    assert [r.content for r in result.data[1].replies] == ["reply 1", "reply 2"]
    assert result.data[1].replies[1].replies[0].content == "nested"
    assert result.meta.total == 2


@pytest.mark.asyncio
async def test_threads_paginate_top_level_only(session):
    article = await add_article(session, "story")
    for minute in range(3):
        await add_comment(session, article.id, f"top {minute}", is_approved=True, minutes=minute)

    result = await make_service(session).get_article_comments(article.id, PageRequest(page=2, limit=2))

    assert [node.content for node in result.data] == ["top 0"]
    assert (result.meta.total, result.meta.total_pages) == (3, 2)


@pytest.mark.asyncio
async def test_pending_queue_oldest_first_without_reported(session):
    article = await add_article(session, "story")
    late = await add_comment(session, article.id, "late", minutes=30)
    early = await add_comment(session, article.id, "early", minutes=10)
    await add_comment(session, article.id, "reported", minutes=20, is_reported=True)
    await add_comment(session, article.id, "approved", minutes=5, is_approved=True)

    result = await make_service(session).get_pending(PageRequest())

    assert [item.id for item in result.data] == [early.id, late.id]
    assert result.data[0].article.slug == "story"


@pytest.mark.asyncio
async def test_reject_records_moderator(session):
    article = await add_article(session, "story")
    moderator = await add_user(session, name="Editor")
    comment = await add_comment(session, article.id, is_approved=True)

    result = await make_service(session).moderate_comment(
        ModerateCommentCommand(comment_id=comment.id, action=ModerationAction.REJECT, moderator_id=moderator.id)
    )

    assert result.message == "Comment rejected successfully"
    assert result.data.is_approved is False
    assert result.data.moderated_by == moderator.id
    assert result.data.moderated_at is not None


@pytest.mark.asyncio
async def test_moderate_missing_comment(session):
    moderator = await add_user(session)

    result = await make_service(session).moderate_comment(
        ModerateCommentCommand(comment_id=404, action=ModerationAction.APPROVE, moderator_id=moderator.id)
    )

    assert result.status_code == 404


@pytest.mark.asyncio
async def test_report_keeps_moderation_state(session):
    article = await add_article(session, "story")
    comment = await add_comment(session, article.id, is_approved=True)

    result = await make_service(session).report_comment(comment.id)

    assert result.data.is_reported is True
    assert result.data.is_approved is True


@pytest.mark.asyncio
async def test_update_comment_text(session):
    article = await add_article(session, "story")
    comment = await add_comment(session, article.id, "typo")

    result = await make_service(session).update_comment(UpdateCommentCommand(comment_id=comment.id, content="fixed"))

    assert result.data.content == "fixed"


@pytest.mark.asyncio
async def test_moderation_list_filters(session):
    article = await add_article(session, "story")
    await add_comment(session, article.id, "a", is_approved=True)
    await add_comment(session, article.id, "b")

    result = await make_service(session).list_comments(CommentFilters(article_id=article.id, is_approved=False))

    assert [item.content for item in result.data] == ["b"]
    assert result.meta.total == 1


@pytest.mark.asyncio
async def test_delete_comment_cascades_replies(session_factory, session):
    article = await add_article(session, "story")
    parent = await add_comment(session, article.id, is_approved=True)
    await add_comment(session, article.id, parent_id=parent.id, is_approved=True)

    result = await make_service(session).delete_comment(parent.id)

    async with session_factory() as read_session:
        remaining = (await read_session.execute(select(CommentModel.id))).all()
    assert result.success is True
    assert remaining == []


@pytest.mark.asyncio
async def test_delete_reply_decrements_parent_reply_count(session_factory, session):
    article = await add_article(session, "story")
    parent = await add_comment(session, article.id, is_approved=True, reply_count=1)
    reply = await add_comment(session, article.id, parent_id=parent.id, is_approved=True)

    result = await make_service(session).delete_comment(reply.id)

    async with session_factory() as read_session:
        rows = (await read_session.execute(select(CommentModel.id, CommentModel.reply_count))).all()
    assert result.success is True
    assert [tuple(row) for row in rows] == [(parent.id, 0)]


@pytest.mark.asyncio
async def test_delete_missing_comment(session):
    result = await make_service(session).delete_comment(404)

    assert result.status_code == 404
