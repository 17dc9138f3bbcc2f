"""
Application Service для комментариев.

Публичная лента статьи показывает только одобренные комментарии
(ветками), модераторская - все, с фильтрами.
"""

import logging
from dataclasses import asdict

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.comment_commands import (
    CreateCommentCommand, ModerateCommentCommand, UpdateCommentCommand
)
from src.application.queries.list_queries import CommentFilters, PageRequest
from src.application.results import PageMeta, ServiceResult, service_operation
from src.domain.entities.comment import Comment
from src.domain.repositories.article_repository import IArticleRepository
from src.domain.repositories.comment_repository import ICommentRepository
from src.domain.services.tree_builder import build_comment_threads
from src.domain.value_objects.sort_order import SortOrder
from src.infrastructure.persistence.unit_of_work import UnitOfWork
from src.shared.exceptions.domain_exceptions import NotFoundError, ValidationError
from src.shared.utils.text import utcnow

logger = logging.getLogger(__name__)


class CommentService:
    """Комментарии, ветки ответов, модерация."""

    def __init__(
        self,
        session: AsyncSession,
        repository: ICommentRepository,
        article_repository: IArticleRepository,
        auto_approve: bool = False
    ):
        self.session = session
        self.repository = repository
        self.article_repository = article_repository
        self.auto_approve = auto_approve

    @service_operation("Failed to retrieve comments")
    async def list_comments(self, filters: CommentFilters) -> ServiceResult:
        items, total = await self.repository.find_page(filters)
        return ServiceResult.ok(
            items,
            message="Comments retrieved successfully",
            meta=PageMeta.build(total, filters.page, filters.limit),
        )

    @service_operation("Failed to retrieve comments")
    async def get_article_comments(self, article_id: int, window: PageRequest) -> ServiceResult:
        """
        Одобренные комментарии статьи ветками.

        Пагинация и total - только по верхнему уровню. Ответы
        выбираются одним запросом и раскладываются в памяти.
        """
        parents, total = await self.repository.find_approved_top_level(article_id, window)
        replies = await self.repository.find_approved_replies(article_id) if parents else []
        return ServiceResult.ok(
            build_comment_threads(parents, replies),
            message="Article comments retrieved successfully",
            meta=PageMeta.build(total, window.page, window.limit),
        )

    @service_operation("Failed to retrieve pending comments")
    async def get_pending(self, window: PageRequest) -> ServiceResult:
        """Очередь модерации: не одобренные и без жалоб, старые первыми."""
        filters = CommentFilters(
            is_approved=False,
            is_reported=False,
            sort_by="createdAt",
            sort_order=SortOrder.ASC,
            page=window.page,
            limit=window.limit,
        )
        items, total = await self.repository.find_page(filters)
        return ServiceResult.ok(
            items,
            message="Pending comments retrieved successfully",
            meta=PageMeta.build(total, filters.page, filters.limit),
        )

    @service_operation("Failed to create comment")
    async def create_comment(self, command: CreateCommentCommand) -> ServiceResult:
        comment = Comment(
            article_id=command.article_id,
            parent_id=command.parent_id,
            author_name=command.author_name,
            author_email=command.author_email,
            author_avatar=command.author_avatar,
            content=command.content,
            content_bn=command.content_bn,
            is_approved=self.auto_approve,
            ip_address=command.ip_address,
            user_agent=command.user_agent,
        )

        if await self.article_repository.find_by_id(command.article_id) is None:
            raise ValidationError.single("articleId", "article does not exist")

        if command.parent_id is not None:
            parent = await self.repository.find_by_id(command.parent_id)
            if parent is None or parent.article_id != command.article_id:
                raise ValidationError.single("parentId", "parent comment must belong to the same article")

        # Ответ и счётчик родителя - одна транзакция
        async with UnitOfWork(self.session):
            created = await self.repository.add(comment)
            if command.parent_id is not None:
                await self.repository.change_reply_count(command.parent_id, 1)

        return ServiceResult.ok(created, message="Comment created successfully", status_code=201)

    @service_operation("Failed to update comment")
    async def update_comment(self, command: UpdateCommentCommand) -> ServiceResult:
        comment = await self.repository.find_by_id(command.comment_id)
        if comment is None:
            raise NotFoundError("Comment", "Comment with this ID does not exist")

        values = asdict(comment)
        if command.content is not None:
            values["content"] = command.content
        if command.content_bn is not None:
            values["content_bn"] = command.content_bn
        values["updated_at"] = utcnow()
        edited = Comment(**values)

        async with UnitOfWork(self.session):
            updated = await self.repository.update(edited)

        return ServiceResult.ok(updated, message="Comment updated successfully")

    @service_operation("Failed to delete comment")
    async def delete_comment(self, comment_id: int) -> ServiceResult:
        """Ответы удаляются каскадно, у родителя уменьшается reply_count."""
        comment = await self.repository.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", "Comment with this ID does not exist")

        async with UnitOfWork(self.session):
            await self.repository.delete(comment_id)
            if comment.parent_id is not None:
                await self.repository.change_reply_count(comment.parent_id, -1)
        return ServiceResult.ok(message="Comment deleted successfully")

    @service_operation("Failed to moderate comment")
    async def moderate_comment(self, command: ModerateCommentCommand) -> ServiceResult:
        """
        approve → is_approved=True, reject → False.

        Обе операции фиксируют модератора и время; повторная
        модерация перезаписывает предыдущее решение.
        """
        comment = await self.repository.find_by_id(command.comment_id)
        if comment is None:
            raise NotFoundError("Comment", "Comment with this ID does not exist")

        comment.moderate(command.action, command.moderator_id)
        async with UnitOfWork(self.session):
            updated = await self.repository.update(comment)

        logger.info(f"Comment {updated.id} {command.action.past_tense} by user {command.moderator_id}")
        return ServiceResult.ok(updated, message=f"Comment {command.action.past_tense} successfully")

    @service_operation("Failed to report comment")
    async def report_comment(self, comment_id: int) -> ServiceResult:
        comment = await self.repository.find_by_id(comment_id)
        if comment is None:
            raise NotFoundError("Comment", "Comment with this ID does not exist")

        comment.report()
        async with UnitOfWork(self.session):
            updated = await self.repository.update(comment)

        return ServiceResult.ok(updated, message="Comment reported successfully")
