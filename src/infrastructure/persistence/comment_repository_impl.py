"""
PostgreSQL Repository реализация для комментариев.
"""

from typing import List, Optional, Tuple

from sqlalchemy import and_, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.queries.list_queries import CommentFilters, PageRequest
from src.domain.entities.comment import Comment
from src.domain.read_models import ArticleSummary, AuthorSummary, CommentListItem
from src.domain.repositories.comment_repository import ICommentRepository
from src.infrastructure.persistence.mappers import (
    COMMENT_FIELDS, comment_to_entity, copy_comment_to_model
)
from src.infrastructure.persistence.models import CommentModel
from src.infrastructure.persistence.query_builder import (
    build_comment_count_query, build_comment_page_query, paginate
)


class CommentRepositoryImpl(ICommentRepository):
    """Адаптер комментариев."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_page(self, filters: CommentFilters) -> Tuple[List[CommentListItem], int]:
        rows = (await self.session.execute(build_comment_page_query(filters))).all()
        total = (await self.session.execute(build_comment_count_query(filters))).scalar() or 0

        items = []
        for row in rows:
            model = row.CommentModel
            article = None
            if row.article_slug is not None:
                article = ArticleSummary(
                    id=model.article_id,
                    title=row.article_title,
                    title_bn=row.article_title_bn,
                    slug=row.article_slug,
                )
            moderator = None
            if model.moderated_by is not None:
                moderator = AuthorSummary(id=model.moderated_by, name=row.moderator_name or "")

            items.append(
                CommentListItem(
                    **{name: getattr(model, name) for name in COMMENT_FIELDS},
                    article=article,
                    moderator=moderator,
                )
            )
        return items, total

    def _approved_top_level(self, article_id: int):
        return and_(
            CommentModel.article_id == article_id,
            CommentModel.is_approved.is_(True),
            CommentModel.parent_id.is_(None),
        )

    async def find_approved_top_level(
        self,
        article_id: int,
        window: PageRequest
    ) -> Tuple[List[Comment], int]:
        query = (
            select(CommentModel)
            .where(self._approved_top_level(article_id))
            .order_by(CommentModel.created_at.desc(), CommentModel.id.desc())
        )
        result = await self.session.execute(paginate(query, window))
        parents = [comment_to_entity(model) for model in result.scalars().all()]

        total = (
            await self.session.execute(
                select(func.count(CommentModel.id)).where(self._approved_top_level(article_id))
            )
        ).scalar() or 0
        return parents, total

    async def find_approved_replies(self, article_id: int) -> List[Comment]:
        result = await self.session.execute(
            select(CommentModel)
            .where(
                and_(
                    CommentModel.article_id == article_id,
                    CommentModel.is_approved.is_(True),
                    CommentModel.parent_id.is_not(None),
                )
            )
            .order_by(CommentModel.created_at.asc(), CommentModel.id.asc())
        )
        return [comment_to_entity(model) for model in result.scalars().all()]

    async def find_by_id(self, comment_id: int) -> Optional[Comment]:
        model = await self.session.get(CommentModel, comment_id)
        return comment_to_entity(model) if model else None

    async def add(self, comment: Comment) -> Comment:
        model = CommentModel()
        copy_comment_to_model(comment, model)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return comment_to_entity(model)

    async def update(self, comment: Comment) -> Comment:
        model = await self.session.get(CommentModel, comment.id)
        copy_comment_to_model(comment, model)
        await self.session.flush()
        await self.session.refresh(model)
        return comment_to_entity(model)

    async def delete(self, comment_id: int) -> bool:
        model = await self.session.get(CommentModel, comment_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    async def change_reply_count(self, comment_id: int, delta: int) -> None:
        await self.session.execute(
            update(CommentModel)
            .where(CommentModel.id == comment_id, CommentModel.reply_count + delta >= 0)
            .values(reply_count=CommentModel.reply_count + delta, updated_at=CommentModel.updated_at)
            .execution_options(synchronize_session=False)
        )
