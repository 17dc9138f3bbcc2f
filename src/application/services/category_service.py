"""
Application Service для рубрик.
"""

import logging
from dataclasses import asdict
from typing import Dict, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.category_commands import CreateCategoryCommand, UpdateCategoryCommand
from src.application.results import ServiceResult, service_operation
from src.domain.entities.category import Category
from src.domain.read_models import CategoryDetail
from src.domain.repositories.category_repository import ICategoryRepository
from src.domain.services.tree_builder import build_category_tree
from src.infrastructure.persistence.unit_of_work import UnitOfWork
from src.shared.exceptions.domain_exceptions import ConflictError, NotFoundError, ValidationError
from src.shared.utils.text import slugify, utcnow

logger = logging.getLogger(__name__)

EDITABLE_FIELDS = ("name", "name_en", "slug", "description", "parent_id", "display_order", "is_active")


class CategoryService:
    """Дерево рубрик, счётчики статей, CRUD с защитой удаления."""

    def __init__(self, session: AsyncSession, repository: ICategoryRepository):
        self.session = session
        self.repository = repository

    @service_operation("Failed to retrieve categories")
    async def get_tree(self) -> ServiceResult:
        """Активные рубрики деревом (один запрос + сборка в памяти)."""
        categories = await self.repository.find_active()
        return ServiceResult.ok(build_category_tree(categories), message="Categories retrieved successfully")

    @service_operation("Failed to retrieve categories")
    async def get_with_counts(self) -> ServiceResult:
        categories = await self.repository.find_active_with_counts()
        return ServiceResult.ok(categories, message="Categories with counts retrieved successfully")

    @service_operation("Failed to retrieve popular categories")
    async def get_popular(self, limit: int = 10) -> ServiceResult:
        categories = await self.repository.find_active_with_counts(most_popular_first=True, limit=limit)
        return ServiceResult.ok(categories, message="Popular categories retrieved successfully")

    @service_operation("Failed to retrieve category")
    async def get_by_slug(self, slug: str) -> ServiceResult:
        """Рубрика + родитель + прямые потомки."""
        category = await self.repository.find_by_slug(slug)
        if category is None:
            raise NotFoundError("Category", "Category with this slug does not exist")

        parent = None
        if category.parent_id is not None:
            parent = await self.repository.find_by_id(category.parent_id)
        children = await self.repository.find_children(category.id)

        detail = CategoryDetail(**asdict(category), parent=parent, children=children)
        return ServiceResult.ok(detail, message="Category retrieved successfully")

    @service_operation("Failed to create category")
    async def create_category(self, command: CreateCategoryCommand) -> ServiceResult:
        category = Category(
            name=command.name,
            name_en=command.name_en,
            slug=command.slug.strip() if command.slug else slugify(command.name),
            description=command.description,
            parent_id=command.parent_id,
            display_order=command.display_order,
            is_active=command.is_active,
        )

        await self._ensure_slug_free(category.slug)
        if category.parent_id is not None:
            await self._ensure_valid_parent(None, category.parent_id)

        async with UnitOfWork(self.session):
            created = await self.repository.add(category)

        logger.info(f"Category created: id={created.id}, slug='{created.slug}'")
        return ServiceResult.ok(created, message="Category created successfully", status_code=201)

    @service_operation("Failed to update category")
    async def update_category(self, command: UpdateCategoryCommand) -> ServiceResult:
        category = await self.repository.find_by_id(command.category_id)
        if category is None:
            raise NotFoundError("Category", "Category with this ID does not exist")

        changes = {k: v for k, v in command.changes.items() if k in EDITABLE_FIELDS}
        if changes.get("slug") is not None:
            changes["slug"] = changes["slug"].strip()
            if changes["slug"] != category.slug:
                await self._ensure_slug_free(changes["slug"], exclude_id=category.id)
        if changes.get("parent_id") is not None:
            await self._ensure_valid_parent(category.id, changes["parent_id"])

        for name, value in changes.items():
            setattr(category, name, value)
        category.updated_at = utcnow()
        category.validate()

        async with UnitOfWork(self.session):
            updated = await self.repository.update(category)

        return ServiceResult.ok(updated, message="Category updated successfully")

    @service_operation("Failed to delete category")
    async def delete_category(self, category_id: int) -> ServiceResult:
        """
        Удалить рубрику.

        Рубрика со статьями или подрубриками не удаляется (409),
        строка остаётся нетронутой.
        """
        category = await self.repository.find_by_id(category_id)
        if category is None:
            raise NotFoundError("Category", "Category with this ID does not exist")

        if await self.repository.count_articles(category_id) > 0:
            raise ConflictError("Cannot delete category", errors=["Category has articles associated with it"])
        if await self.repository.count_children(category_id) > 0:
            raise ConflictError("Cannot delete category", errors=["Category has subcategories"])

        async with UnitOfWork(self.session):
            await self.repository.delete(category_id)

        logger.info(f"Category deleted: id={category_id}")
        return ServiceResult.ok(message="Category deleted successfully")

    async def _ensure_slug_free(self, slug: str, exclude_id: Optional[int] = None) -> None:
        if await self.repository.exists_by_slug(slug, exclude_id=exclude_id):
            raise ConflictError(
                "Category with this slug already exists",
                errors=[{"field": "slug", "message": f"slug '{slug}' is already taken"}],
            )

    async def _ensure_valid_parent(self, category_id: Optional[int], parent_id: int) -> None:
        """
        Родитель должен существовать и не быть самой рубрикой
        или её потомком (иначе дерево получит цикл).
        """
        parent_of: Dict[int, Optional[int]] = await self.repository.find_parent_map()
        if parent_id not in parent_of:
            raise ValidationError.single("parentId", "parent category does not exist")
        if category_id is None:
            return

        seen = set()
        current: Optional[int] = parent_id
        while current is not None and current not in seen:
            if current == category_id:
                raise ValidationError.single("parentId", "category cannot be moved under itself or its descendant")
            seen.add(current)
            current = parent_of.get(current)
