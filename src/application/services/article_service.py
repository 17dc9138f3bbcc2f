"""
Application Service для управления статьями.
"""

import logging
from dataclasses import replace
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.article_commands import CreateArticleCommand, UpdateArticleCommand
from src.application.handlers.article_command_handler import ArticleCommandHandler
from src.application.queries.list_queries import ArticleFilters
from src.application.results import PageMeta, ServiceResult, service_operation
from src.domain.repositories.article_repository import IArticleRepository
from src.domain.repositories.category_repository import ICategoryRepository
from src.infrastructure.persistence.unit_of_work import UnitOfWork
from src.shared.exceptions.domain_exceptions import NotFoundError

logger = logging.getLogger(__name__)

FEATURED_LIMIT = 5
BREAKING_LIMIT = 3


class ArticleService:
    """
    Application Service для статей.

    Координирует работу между handlers и repositories.
    Каждый публичный метод возвращает ServiceResult.
    """

    def __init__(
        self,
        session: AsyncSession,
        repository: IArticleRepository,
        category_repository: ICategoryRepository,
        command_handler: ArticleCommandHandler
    ):
        self.session = session
        self.repository = repository
        self.category_repository = category_repository
        self.command_handler = command_handler

    @service_operation("Failed to retrieve articles")
    async def list_articles(self, filters: ArticleFilters) -> ServiceResult:
        """Страница статей по фильтрам + meta пагинации."""
        items, total = await self.repository.find_page(filters)
        return ServiceResult.ok(
            items,
            message="Articles retrieved successfully",
            meta=PageMeta.build(total, filters.page, filters.limit),
        )

    @service_operation("Failed to retrieve article")
    async def get_article_by_slug(self, slug: str) -> ServiceResult:
        """Полная статья со связями."""
        detail = await self.repository.get_detail(slug)
        if detail is None:
            raise NotFoundError("Article", "Article with this slug does not exist")
        return ServiceResult.ok(detail, message="Article retrieved successfully")

    @service_operation("Failed to create article")
    async def create_article(self, command: CreateArticleCommand) -> ServiceResult:
        """Создать статью и вернуть её в полном виде."""
        article = await self.command_handler.handle_create_article(command)
        detail = await self.repository.get_detail(article.slug)
        return ServiceResult.ok(detail, message="Article created successfully", status_code=201)

    @service_operation("Failed to update article")
    async def update_article(self, command: UpdateArticleCommand) -> ServiceResult:
        article = await self.command_handler.handle_update_article(command)
        detail = await self.repository.get_detail(article.slug)
        return ServiceResult.ok(detail, message="Article updated successfully")

    @service_operation("Failed to delete article")
    async def delete_article(self, article_id: int) -> ServiceResult:
        async with UnitOfWork(self.session):
            deleted = await self.repository.delete(article_id)
        if not deleted:
            raise NotFoundError("Article", "Article with this ID does not exist")
        logger.info(f"Article deleted: {article_id}")
        return ServiceResult.ok(message="Article deleted successfully")

    @service_operation("Failed to update view count")
    async def increment_view_count(
        self,
        article_id: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        referrer: Optional[str] = None
    ) -> ServiceResult:
        """Счётчик просмотров + строка page_views в одной транзакции."""
        async with UnitOfWork(self.session):
            recorded = await self.repository.record_view(article_id, ip_address, user_agent, referrer)
        if not recorded:
            raise NotFoundError("Article", "Article with this ID does not exist")
        return ServiceResult.ok(message="View count updated")

    async def get_featured(self, limit: int = FEATURED_LIMIT) -> ServiceResult:
        """Избранные опубликованные статьи, новые первыми."""
        return await self._preset(ArticleFilters(is_featured=True, is_published=True, limit=limit))

    async def get_breaking(self, limit: int = BREAKING_LIMIT) -> ServiceResult:
        """Срочные новости."""
        return await self._preset(ArticleFilters(is_breaking=True, is_published=True, limit=limit))

    async def _preset(self, filters: ArticleFilters) -> ServiceResult:
        result = await self.list_articles(filters)
        if result.success:
            result.meta = None
        return result

    @service_operation("Failed to retrieve articles")
    async def list_by_category(self, category_slug: str, filters: ArticleFilters) -> ServiceResult:
        """Опубликованные статьи рубрики (рубрика ищется по slug)."""
        category = await self.category_repository.find_by_slug(category_slug)
        if category is None:
            raise NotFoundError("Category", "Category with this slug does not exist")

        filters = replace(filters, category_id=category.id, is_published=True)
        items, total = await self.repository.find_page(filters)
        return ServiceResult.ok(
            items,
            message="Articles retrieved successfully",
            meta=PageMeta.build(total, filters.page, filters.limit),
        )
