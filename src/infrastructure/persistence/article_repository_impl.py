# -*- coding: utf-8 -*-
"""
PostgreSQL Repository реализация для статей.

Списки строятся компилятором фильтров (query_builder), связи
подгружаются гидратором (hydrator). Запись не коммитит:
транзакцией управляет UnitOfWork сервиса.
"""

from dataclasses import asdict
from typing import List, Optional, Sequence, Tuple

from sqlalchemy import and_, delete, func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.queries.list_queries import ArticleFilters
from src.domain.entities.article import Article
from src.domain.read_models import ArticleDetail, ArticleListItem
from src.domain.repositories.article_repository import IArticleRepository
from src.infrastructure.persistence.hydrator import hydrate_article_rows
from src.infrastructure.persistence.mappers import (
    USER_PUBLIC_COLUMNS,
    article_to_entity,
    article_to_model,
    category_to_entity,
    copy_article_to_model,
    row_to_user_public,
    tag_to_entity,
)
from src.infrastructure.persistence.models import (
    ArticleModel, ArticleTagModel, CategoryModel, CommentModel, PageViewModel, TagModel, UserModel
)
from src.infrastructure.persistence.query_builder import (
    build_article_count_query, build_article_page_query
)


class ArticleRepositoryImpl(IArticleRepository):
    """
    Реализация repository для PostgreSQL.

    Адаптер в Hexagonal Architecture.
    Преобразует доменные сущности Article в SQLAlchemy модели и обратно.
    """

    def __init__(self, session: AsyncSession):
        """
        Инициализация репозитория.

        Аргументы:
            session: Асинхронная сессия SQLAlchemy
        """
        self.session = session

    # =========================================================================
    # Запись
    # =========================================================================

    async def add(self, article: Article) -> Article:
        """Добавить статью (flush для получения id)."""
        model = article_to_model(article)
        self.session.add(model)
        await self.session.flush()
        await self.session.refresh(model)
        return article_to_entity(model)

    async def update(self, article: Article) -> Article:
        model = await self.session.get(ArticleModel, article.id)
        copy_article_to_model(article, model)
        await self.session.flush()
        await self.session.refresh(model)
        return article_to_entity(model)

    async def delete(self, article_id: int) -> bool:
        """Удалить статью по ID."""
        model = await self.session.get(ArticleModel, article_id)
        if model is None:
            return False
        await self.session.delete(model)
        await self.session.flush()
        return True

    async def replace_tags(self, article_id: int, tag_ids: Sequence[int]) -> None:
        """Заменить теги: удалить текущие связи и вставить новые."""
        await self.session.execute(
            delete(ArticleTagModel).where(ArticleTagModel.article_id == article_id)
        )
        for tag_id in dict.fromkeys(tag_ids):
            self.session.add(ArticleTagModel(article_id=article_id, tag_id=tag_id))
        await self.session.flush()

    async def record_view(
        self,
        article_id: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        referrer: Optional[str] = None
    ) -> bool:
        """Атомарный инкремент счётчика на стороне БД + строка аналитики."""
        result = await self.session.execute(
            update(ArticleModel)
            .where(ArticleModel.id == article_id)
            .values(view_count=ArticleModel.view_count + 1, updated_at=ArticleModel.updated_at)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            return False

        self.session.add(
            PageViewModel(
                article_id=article_id,
                ip_address=ip_address,
                user_agent=user_agent,
                referrer=referrer,
            )
        )
        await self.session.flush()
        return True

    # =========================================================================
    # Чтение
    # =========================================================================

    async def find_by_id(self, article_id: int) -> Optional[Article]:
        """Найти статью по ID."""
        model = await self.session.get(ArticleModel, article_id)
        return article_to_entity(model) if model else None

    async def find_by_slug(self, slug: str) -> Optional[Article]:
        """Найти статью по slug."""
        result = await self.session.execute(
            select(ArticleModel).where(ArticleModel.slug == slug).limit(1)
        )
        model = result.scalar_one_or_none()
        return article_to_entity(model) if model else None

    async def exists_by_slug(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        query = select(func.count(ArticleModel.id)).where(ArticleModel.slug == slug)
        if exclude_id is not None:
            query = query.where(ArticleModel.id != exclude_id)
        result = await self.session.execute(query)
        return result.scalar() > 0

    async def find_page(self, filters: ArticleFilters) -> Tuple[List[ArticleListItem], int]:
        """
        Страница статей + total.

        Всего три запроса независимо от размера страницы:
        страница (с JOIN рубрики и автора), подсчёт, теги страницы.
        """
        rows = (await self.session.execute(build_article_page_query(filters))).all()
        total = (await self.session.execute(build_article_count_query(filters))).scalar() or 0
        items = await hydrate_article_rows(self.session, rows)
        return items, total

    async def get_detail(self, slug: str) -> Optional[ArticleDetail]:
        """
        Полная статья по slug.

        Подзапросы (рубрика, автор, редактор, теги, число одобренных
        комментариев) независимы: конкурентное изменение между ними
        может дать слегка устаревший результат.
        """
        article = await self.find_by_slug(slug)
        if article is None:
            return None

        category = None
        if article.category_id is not None:
            model = await self.session.get(CategoryModel, article.category_id)
            category = category_to_entity(model) if model else None

        author = await self._find_user_public(article.author_id)
        editor = await self._find_user_public(article.editor_id)

        tag_result = await self.session.execute(
            select(TagModel)
            .join(ArticleTagModel, ArticleTagModel.tag_id == TagModel.id)
            .where(ArticleTagModel.article_id == article.id)
            .order_by(TagModel.name)
        )
        tags = [tag_to_entity(model) for model in tag_result.scalars().all()]

        count_result = await self.session.execute(
            select(func.count(CommentModel.id)).where(
                and_(CommentModel.article_id == article.id, CommentModel.is_approved.is_(True))
            )
        )

        return ArticleDetail(
            **asdict(article),
            category=category,
            author=author,
            editor=editor,
            tags=tags,
            approved_comment_count=count_result.scalar() or 0,
        )

    async def _find_user_public(self, user_id: Optional[int]):
        if user_id is None:
            return None
        result = await self.session.execute(
            select(*USER_PUBLIC_COLUMNS).where(UserModel.id == user_id).limit(1)
        )
        row = result.first()
        return row_to_user_public(row) if row else None
