"""
Application Service для тегов.
"""

import logging
from dataclasses import asdict

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.tag_commands import CreateTagCommand, UpdateTagCommand
from src.application.queries.list_queries import TagListQuery
from src.application.results import PageMeta, ServiceResult, service_operation
from src.domain.entities.tag import Tag
from src.domain.repositories.tag_repository import ITagRepository
from src.infrastructure.persistence.unit_of_work import UnitOfWork
from src.shared.exceptions.domain_exceptions import ConflictError, NotFoundError
from src.shared.utils.text import slugify

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "name_bn", "slug", "description", "color", "is_active")


class TagService:
    """Плоские теги статей."""

    def __init__(self, session: AsyncSession, repository: ITagRepository):
        self.session = session
        self.repository = repository

    @service_operation("Failed to retrieve tags")
    async def list_tags(self, params: TagListQuery) -> ServiceResult:
        items, total = await self.repository.find_page(params)
        return ServiceResult.ok(
            items,
            message="Tags retrieved successfully",
            meta=PageMeta.build(total, params.page, params.limit),
        )

    @service_operation("Failed to retrieve popular tags")
    async def get_popular(self, limit: int = 20) -> ServiceResult:
        tags = await self.repository.find_popular(limit)
        return ServiceResult.ok(tags, message="Popular tags retrieved successfully")

    @service_operation("Failed to retrieve tag")
    async def get_by_slug(self, slug: str) -> ServiceResult:
        tag = await self.repository.find_by_slug_with_count(slug)
        if tag is None:
            raise NotFoundError("Tag", "Tag with this slug does not exist")
        return ServiceResult.ok(tag, message="Tag retrieved successfully")

    @service_operation("Failed to create tag")
    async def create_tag(self, command: CreateTagCommand) -> ServiceResult:
        tag = Tag(
            name=command.name,
            name_bn=command.name_bn,
            slug=command.slug.strip() if command.slug else slugify(command.name),
            description=command.description,
            color=command.color,
            is_active=command.is_active,
        )
        if await self.repository.exists_by_slug_or_name(tag.slug, tag.name):
            raise ConflictError("Tag with this name or slug already exists")

        async with UnitOfWork(self.session):
            created = await self.repository.add(tag)
        return ServiceResult.ok(created, message="Tag created successfully", status_code=201)

    @service_operation("Failed to update tag")
    async def update_tag(self, command: UpdateTagCommand) -> ServiceResult:
        tag = await self.repository.find_by_id(command.tag_id)
        if tag is None:
            raise NotFoundError("Tag", "Tag with this ID does not exist")

        values = asdict(tag)
        values.update({k: v for k, v in command.changes.items() if k in EDITABLE_FIELDS})
        edited = Tag(**values)

        if (edited.slug, edited.name) != (tag.slug, tag.name) and await self.repository.exists_by_slug_or_name(
            edited.slug, edited.name, exclude_id=tag.id
        ):
            raise ConflictError("Tag with this name or slug already exists")

        async with UnitOfWork(self.session):
            updated = await self.repository.update(edited)
        return ServiceResult.ok(updated, message="Tag updated successfully")

    @service_operation("Failed to delete tag")
    async def delete_tag(self, tag_id: int) -> ServiceResult:
        """Тег, привязанный к статьям, не удаляется (409)."""
        tag = await self.repository.find_by_id(tag_id)
        if tag is None:
            raise NotFoundError("Tag", "Tag with this ID does not exist")
        if await self.repository.count_articles(tag_id) > 0:
            raise ConflictError("Cannot delete tag", errors=["Tag has articles associated with it"])

        async with UnitOfWork(self.session):
            await self.repository.delete(tag_id)
        logger.info(f"Tag deleted: {tag.slug}")
        return ServiceResult.ok(message="Tag deleted successfully")
