"""
PostgreSQL Repository реализация для рубрик.
"""

from typing import Dict, List, Optional

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.entities.category import Category
from src.domain.read_models import CategoryWithCount
from src.domain.repositories.category_repository import ICategoryRepository
from src.infrastructure.persistence.mappers import (
    CATEGORY_FIELDS, category_to_entity, copy_category_to_model
)
from src.infrastructure.persistence.models import ArticleModel, CategoryModel


class CategoryRepositoryImpl(ICategoryRepository):
    """Адаптер рубрик."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_active(self) -> List[Category]:
        result = await self.session.execute(
            select(CategoryModel)
            .where(CategoryModel.is_active.is_(True))
            .order_by(CategoryModel.display_order.asc(), CategoryModel.name.asc())
        )
        return [category_to_entity(model) for model in result.scalars().all()]

    async def find_active_with_counts(
        self,
        most_popular_first: bool = False,
        limit: Optional[int] = None
    ) -> List[CategoryWithCount]:
        """Один запрос: LEFT JOIN статей и GROUP BY рубрики."""
        article_count = func.count(ArticleModel.id).label("article_count")
        query = (
            select(CategoryModel, article_count)
            .outerjoin(ArticleModel, ArticleModel.category_id == CategoryModel.id)
            .where(CategoryModel.is_active.is_(True))
            .group_by(CategoryModel.id)
        )

        if most_popular_first:
            query = query.order_by(article_count.desc(), CategoryModel.display_order.asc(), CategoryModel.name.asc())
        else:
            query = query.order_by(CategoryModel.display_order.asc(), CategoryModel.name.asc())

        if limit is not None:
            query = query.limit(limit)

        result = await self.session.execute(query)
        return [
            CategoryWithCount(
                **{name: getattr(model, name) for name in CATEGORY_FIELDS},
                article_count=count,
            )
            for model, count in result.all()
        ]

    async def find_by_id(self, category_id: int) -> Optional[Category]:
        model = await self.session.get(CategoryModel, category_id)
        return category_to_entity(model) if model else None

    async def find_by_slug(self, slug: str) -> Optional[Category]:
        result = await self.session.execute(
            select(CategoryModel).where(CategoryModel.slug == slug).limit(1)
        )
        model = result.scalar_one_or_none()
        return category_to_entity(model) if model else None

    async def find_children(self, category_id: int) -> List[Category]:
        result = await self.session.execute(
            select(CategoryModel)
            .where(CategoryModel.parent_id == category_id)
            .order_by(CategoryModel.display_order.asc(), CategoryModel.name.asc())
        )
        return [category_to_entity(model) for model in result.scalars().all()]

    async def find_parent_map(self) -> Dict[int, Optional[int]]:
        result = await self.session.execute(select(CategoryModel.id, CategoryModel.parent_id))
        return {category_id: parent_id for category_id, parent_id in result.all()}

    async def exists_by_slug(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        query = select(func.count(CategoryModel.id)).where(CategoryModel.slug == slug)
        if exclude_id is not None:
            query = query.where(CategoryModel.id != exclude_id)
        return (await self.session.execute(query)).scalar() > 0

    async def count_articles(self, category_id: int) -> int:
        result = await self.session.execute(
            select(func.count(ArticleModel.id)).where(ArticleModel.category_id == category_id)
        )
        return result.scalar() or 0

    async def count_children(self, category_id: int) -> int:
        result = await self.session.execute(
            select(func.count(CategoryModel.id)).where(CategoryModel.parent_id == category_id)
        )
        return result.scalar() or 0

    async def add(self, category: Category) -> Category:
        model = CategoryModel()
        copy_category_to_model(category, model)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return category_to_entity(model)

    async def update(self, category: Category) -> Category:
        model = await self.session.get(CategoryModel, category.id)
        copy_category_to_model(category, model)
        await self.session.flush()
        await self.session.refresh(model)
        return category_to_entity(model)

    async def delete(self, category_id: int) -> bool:
        model = await self.session.get(CategoryModel, category_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True
