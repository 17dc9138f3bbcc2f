"""
PostgreSQL Repository реализация для тегов.
"""

from typing import Iterable, List, Optional, Set, Tuple

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.queries.list_queries import TagListQuery
from src.domain.entities.tag import Tag
from src.domain.read_models import TagWithCount
from src.domain.repositories.tag_repository import ITagRepository
from src.infrastructure.persistence.mappers import TAG_FIELDS, copy_tag_to_model, tag_to_entity
from src.infrastructure.persistence.models import ArticleTagModel, TagModel
from src.infrastructure.persistence.query_builder import build_tag_count_query, build_tag_page_query


def _with_count(model: TagModel, count: int) -> TagWithCount:
    return TagWithCount(**{name: getattr(model, name) for name in TAG_FIELDS}, article_count=count or 0)


class TagRepositoryImpl(ITagRepository):
    """Адаптер тегов."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_page(self, params: TagListQuery) -> Tuple[List[TagWithCount], int]:
        rows = (await self.session.execute(build_tag_page_query(params))).all()
        total = (await self.session.execute(build_tag_count_query(params))).scalar() or 0
        return [_with_count(model, count) for model, count in rows], total

    async def find_popular(self, limit: int) -> List[TagWithCount]:
        article_count = func.count(ArticleTagModel.article_id).label("article_count")
        result = await self.session.execute(
            select(TagModel, article_count)
            .outerjoin(ArticleTagModel, TagModel.id == ArticleTagModel.tag_id)
            .where(TagModel.is_active.is_(True))
            .group_by(TagModel.id)
            .order_by(article_count.desc(), TagModel.name.asc())
            .limit(limit)
        )
        return [_with_count(model, count) for model, count in result.all()]

    async def find_by_slug_with_count(self, slug: str) -> Optional[TagWithCount]:
        result = await self.session.execute(
            select(TagModel, func.count(ArticleTagModel.article_id))
            .outerjoin(ArticleTagModel, TagModel.id == ArticleTagModel.tag_id)
            .where(TagModel.slug == slug)
            .group_by(TagModel.id)
        )
        row = result.first()
        return _with_count(row[0], row[1]) if row else None

    async def find_by_id(self, tag_id: int) -> Optional[Tag]:
        model = await self.session.get(TagModel, tag_id)
        return tag_to_entity(model) if model else None

    async def exists_by_slug_or_name(
        self,
        slug: str,
        name: str,
        exclude_id: Optional[int] = None
    ) -> bool:
        query = select(func.count(TagModel.id)).where(or_(TagModel.slug == slug, TagModel.name == name))
        if exclude_id is not None:
            query = query.where(TagModel.id != exclude_id)
        return (await self.session.execute(query)).scalar() > 0

    async def get_existing_ids(self, tag_ids: Iterable[int]) -> Set[int]:
        """
        Массовая проверка существования тегов.

        Один запрос для всех id, результат как Set для быстрого lookup.
        """
        ids = list(tag_ids)
        if not ids:
            return set()
        result = await self.session.execute(select(TagModel.id).where(TagModel.id.in_(ids)))
        return set(result.scalars().all())

    async def count_articles(self, tag_id: int) -> int:
        result = await self.session.execute(
            select(func.count(ArticleTagModel.id)).where(ArticleTagModel.tag_id == tag_id)
        )
        return result.scalar() or 0

    async def add(self, tag: Tag) -> Tag:
        model = TagModel()
        copy_tag_to_model(tag, model)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return tag_to_entity(model)

    async def update(self, tag: Tag) -> Tag:
        model = await self.session.get(TagModel, tag.id)
        copy_tag_to_model(tag, model)
        await self.session.flush()
        await self.session.refresh(model)
        return tag_to_entity(model)

    async def delete(self, tag_id: int) -> bool:
        model = await self.session.get(TagModel, tag_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True
