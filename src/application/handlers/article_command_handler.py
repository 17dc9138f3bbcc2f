"""
Command Handler для статей.
"""

import logging
from typing import Iterable, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.article_commands import CreateArticleCommand, UpdateArticleCommand
from src.domain.entities.article import Article
from src.domain.repositories.article_repository import IArticleRepository
from src.domain.repositories.tag_repository import ITagRepository
from src.domain.value_objects.article_status import ArticleStatus
from src.infrastructure.persistence.unit_of_work import UnitOfWork
from src.shared.exceptions.domain_exceptions import ConflictError, NotFoundError, ValidationError
from src.shared.utils.text import slugify, to_naive_utc

logger = logging.getLogger(__name__)


class ArticleCommandHandler:
    """Handler для команд работы со статьями."""

    def __init__(
        self,
        session: AsyncSession,
        repository: IArticleRepository,
        tag_repository: ITagRepository
    ):
        self.session = session
        self.repository = repository
        self.tag_repository = tag_repository

    async def handle_create_article(self, command: CreateArticleCommand) -> Article:
        """
        Обработка команды создания статьи.

        Args:
            command: Команда создания

        Returns:
            Созданная статья

        Raises:
            ValidationError: Нарушены инварианты или переданы несуществующие теги
            ConflictError: Если статья с таким slug уже существует
        """
        slug = command.slug.strip() if command.slug else slugify(command.title)

        # Создание сущности (валидирует все поля сразу)
        article = Article(
            title=command.title,
            title_bn=command.title_bn,
            slug=slug,
            excerpt=command.excerpt,
            excerpt_bn=command.excerpt_bn,
            content=command.content,
            content_bn=command.content_bn,
            featured_image=command.featured_image,
            image_caption=command.image_caption,
            gallery=list(command.gallery),
            category_id=command.category_id,
            author_id=command.author_id,
            editor_id=command.editor_id,
            status=command.status or ArticleStatus.DRAFT,
            is_published=command.is_published,
            published_at=to_naive_utc(command.published_at),
            scheduled_at=to_naive_utc(command.scheduled_at),
            meta_title=command.meta_title,
            meta_description=command.meta_description,
            keywords=command.keywords,
            is_featured=command.is_featured,
            is_breaking=command.is_breaking,
            is_urgent=command.is_urgent,
            priority=command.priority,
            location=command.location,
            location_bn=command.location_bn,
            source=command.source,
        )

        # Проверка на дубликат
        if await self.repository.exists_by_slug(article.slug):
            raise ConflictError(
                "Article with this slug already exists",
                errors=[{"field": "slug", "message": f"slug '{article.slug}' is already taken"}],
            )
        await self._ensure_tags_exist(command.tag_ids)

        # Статья и связи с тегами - одна транзакция
        async with UnitOfWork(self.session):
            created = await self.repository.add(article)
            if command.tag_ids:
                await self.repository.replace_tags(created.id, command.tag_ids)

        logger.info(f"Article created: id={created.id}, slug='{created.slug}'")
        return created

    async def handle_update_article(self, command: UpdateArticleCommand) -> Article:
        """
        Частичное обновление статьи.

        Raises:
            NotFoundError: Статьи нет
            ConflictError: Новый slug занят другой статьёй
            ValidationError: Нарушены инварианты
        """
        article = await self.repository.find_by_id(command.article_id)
        if article is None:
            raise NotFoundError("Article", "Article with this ID does not exist")

        changes = dict(command.changes)
        for name in ("published_at", "scheduled_at"):
            if name in changes:
                changes[name] = to_naive_utc(changes[name])

        new_slug = changes.get("slug")
        if new_slug is not None:
            changes["slug"] = new_slug.strip()
            if changes["slug"] != article.slug and await self.repository.exists_by_slug(
                changes["slug"], exclude_id=article.id
            ):
                raise ConflictError(
                    "Article with this slug already exists",
                    errors=[{"field": "slug", "message": f"slug '{changes['slug']}' is already taken"}],
                )

        article.apply_changes(changes)
        if command.tag_ids is not None:
            await self._ensure_tags_exist(command.tag_ids)

        async with UnitOfWork(self.session):
            updated = await self.repository.update(article)
            if command.tag_ids is not None:
                await self.repository.replace_tags(updated.id, command.tag_ids)

        return updated

    async def _ensure_tags_exist(self, tag_ids: Optional[Iterable[int]]) -> None:
        requested = list(dict.fromkeys(tag_ids or ()))
        if not requested:
            return
        existing = await self.tag_repository.get_existing_ids(requested)
        missing = [tag_id for tag_id in requested if tag_id not in existing]
        if missing:
            raise ValidationError.single(
                "tagIds",
                f"unknown tag ids: {', '.join(str(tag_id) for tag_id in missing)}",
            )
