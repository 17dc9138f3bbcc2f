# -*- coding: utf-8 -*-
"""
Relation Hydrator — подгрузка связей для страницы статей.

Рубрика и автор приходят из LEFT JOIN базового запроса. Теги всей
страницы загружаются ОДНИМ дополнительным запросом по набору id
и группируются на стороне приложения. Число запросов не зависит
от размера страницы.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Sequence

from sqlalchemy import select
from sqlalchemy.engine import Row
from sqlalchemy.ext.asyncio import AsyncSession

from src.domain.read_models import ArticleListItem, AuthorSummary, CategorySummary, TagSummary
from src.domain.value_objects.article_status import ArticleStatus
from src.infrastructure.persistence.models import ArticleTagModel, TagModel

logger = logging.getLogger(__name__)


async def fetch_tag_summaries(
    session: AsyncSession,
    article_ids: Iterable[int]
) -> Dict[int, List[TagSummary]]:
    """
    Теги для набора статей одним запросом.

    Аргументы:
        session: Сессия БД
        article_ids: id статей страницы

    Возвращает:
        article_id → список тегов (пустой набор id → без запроса)
    """
    ids = list(dict.fromkeys(article_ids))
    if not ids:
        return {}

    result = await session.execute(
        select(
            ArticleTagModel.article_id,
            TagModel.id,
            TagModel.name,
            TagModel.slug,
        )
        .join(TagModel, ArticleTagModel.tag_id == TagModel.id)
        .where(ArticleTagModel.article_id.in_(ids))
        .order_by(ArticleTagModel.article_id, TagModel.name)
    )

    grouped: Dict[int, List[TagSummary]] = defaultdict(list)
    for article_id, tag_id, name, slug in result.all():
        grouped[article_id].append(TagSummary(id=tag_id, name=name, slug=slug))
    return dict(grouped)


def row_to_list_item(row: Row) -> ArticleListItem:
    """Строка базового запроса (статья + рубрика + автор) → ArticleListItem."""
    category = None
    if row.category_ref_id is not None:
        category = CategorySummary(
            id=row.category_ref_id,
            name=row.category_name or "",
            slug=row.category_slug or "",
        )

    author = None
    if row.author_ref_id is not None:
        author = AuthorSummary(
            id=row.author_ref_id,
            name=row.author_name or "",
            avatar=row.author_avatar,
        )

    return ArticleListItem(
        id=row.id,
        title=row.title,
        title_bn=row.title_bn,
        slug=row.slug,
        excerpt=row.excerpt,
        excerpt_bn=row.excerpt_bn,
        featured_image=row.featured_image,
        image_caption=row.image_caption,
        status=ArticleStatus(row.status),
        is_published=row.is_published,
        published_at=row.published_at,
        is_featured=row.is_featured,
        is_breaking=row.is_breaking,
        is_urgent=row.is_urgent,
        priority=row.priority,
        view_count=row.view_count or 0,
        like_count=row.like_count or 0,
        share_count=row.share_count or 0,
        comment_count=row.comment_count or 0,
        location=row.location,
        location_bn=row.location_bn,
        created_at=row.created_at,
        updated_at=row.updated_at,
        category=category,
        author=author,
    )


async def hydrate_article_rows(session: AsyncSession, rows: Sequence[Row]) -> List[ArticleListItem]:
    """Собрать элементы списка и прикрепить теги (один запрос на страницу)."""
    items = [row_to_list_item(row) for row in rows]
    tags_by_article = await fetch_tag_summaries(session, (item.id for item in items))

    for item in items:
        item.tags = tags_by_article.get(item.id, [])

    logger.debug(f"Hydrated {len(items)} articles with tags for {len(tags_by_article)} of them")
    return items
