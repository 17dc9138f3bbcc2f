# -*- coding: utf-8 -*-
"""
Компилятор фильтров: объект запроса → параметризованный SELECT.

Из фильтров строятся:
- набор предикатов (общий для страницы и для подсчёта)
- план join'ов (рубрика и автор через LEFT JOIN, теги через EXISTS)
- сортировка по полю из белого списка, id как tie-breaker
- окно пагинации (limit/offset)

Фильтр по тегам реализован через EXISTS, поэтому строки не
размножаются и дедупликация не требует GROUP BY. Подсчёт всё равно
идёт по COUNT(DISTINCT articles.id).
"""

from typing import List

from sqlalchemy import Select, and_, distinct, exists, func, select
from sqlalchemy.sql.elements import ColumnElement

from src.application.queries.list_queries import (
    ArticleFilters, CommentFilters, PageRequest, TagListQuery
)
from src.domain.value_objects.sort_order import SortOrder
from src.infrastructure.persistence.models import (
    ArticleModel, ArticleTagModel, CategoryModel, CommentModel, TagModel, UserModel
)

# Колонки статьи для списка (без полного контента)
ARTICLE_LIST_COLUMNS = (
    ArticleModel.id,
    ArticleModel.title,
    ArticleModel.title_bn,
    ArticleModel.slug,
    ArticleModel.excerpt,
    ArticleModel.excerpt_bn,
    ArticleModel.featured_image,
    ArticleModel.image_caption,
    ArticleModel.status,
    ArticleModel.is_published,
    ArticleModel.published_at,
    ArticleModel.is_featured,
    ArticleModel.is_breaking,
    ArticleModel.is_urgent,
    ArticleModel.priority,
    ArticleModel.view_count,
    ArticleModel.like_count,
    ArticleModel.share_count,
    ArticleModel.comment_count,
    ArticleModel.location,
    ArticleModel.location_bn,
    ArticleModel.created_at,
    ArticleModel.updated_at,
)


def _ordered(column, order: SortOrder):
    clause = column.asc() if order == SortOrder.ASC else column.desc()
    return clause.nulls_last()


def paginate(query: Select, window: PageRequest) -> Select:
    """Применить окно пагинации."""
    return query.limit(window.limit).offset(window.offset)


# =============================================================================
# Статьи
# =============================================================================

def article_conditions(filters: ArticleFilters) -> List[ColumnElement]:
    """
    Предикаты WHERE для списка статей.

    Трёхзначные булевы фильтры добавляются только если заданы явно
    (None = без ограничения, False = только False).
    """
    conditions: List[ColumnElement] = []

    if filters.query:
        conditions.append(
            ArticleModel.title.icontains(filters.query, autoescape=True)
            | ArticleModel.content.icontains(filters.query, autoescape=True)
        )

    if filters.category_id is not None:
        conditions.append(ArticleModel.category_id == filters.category_id)

    if filters.author_id is not None:
        conditions.append(ArticleModel.author_id == filters.author_id)

    if filters.status:
        conditions.append(ArticleModel.status == filters.status)

    if filters.is_published is not None:
        conditions.append(ArticleModel.is_published == filters.is_published)

    if filters.is_featured is not None:
        conditions.append(ArticleModel.is_featured == filters.is_featured)

    if filters.is_breaking is not None:
        conditions.append(ArticleModel.is_breaking == filters.is_breaking)

    if filters.date_from is not None:
        conditions.append(ArticleModel.published_at >= filters.date_from)

    if filters.date_to is not None:
        conditions.append(ArticleModel.published_at <= filters.date_to)

    if filters.tag_ids:
        conditions.append(
            exists().where(
                and_(
                    ArticleTagModel.article_id == ArticleModel.id,
                    ArticleTagModel.tag_id.in_(filters.tag_ids),
                )
            )
        )

    return conditions


def article_order_by(filters: ArticleFilters) -> list:
    """Сортировка: поле из белого списка + id для детерминизма."""
    column = getattr(ArticleModel, filters.sort_by)
    return [_ordered(column, filters.sort_order), _ordered(ArticleModel.id, filters.sort_order)]


def build_article_page_query(filters: ArticleFilters) -> Select:
    """
    Запрос страницы статей с рубрикой и автором через LEFT JOIN.

    Статья может не иметь рубрики или автора, тогда колонки связи NULL.
    """
    query = (
        select(
            *ARTICLE_LIST_COLUMNS,
            CategoryModel.id.label("category_ref_id"),
            CategoryModel.name.label("category_name"),
            CategoryModel.slug.label("category_slug"),
            UserModel.id.label("author_ref_id"),
            UserModel.name.label("author_name"),
            UserModel.avatar.label("author_avatar"),
        )
        .select_from(ArticleModel)
        .outerjoin(CategoryModel, ArticleModel.category_id == CategoryModel.id)
        .outerjoin(UserModel, ArticleModel.author_id == UserModel.id)
        .where(*article_conditions(filters))
        .order_by(*article_order_by(filters))
    )
    return paginate(query, filters.window)


def build_article_count_query(filters: ArticleFilters) -> Select:
    """Подсчёт по тем же предикатам, COUNT(DISTINCT id)."""
    return (
        select(func.count(distinct(ArticleModel.id)))
        .select_from(ArticleModel)
        .where(*article_conditions(filters))
    )


# =============================================================================
# Комментарии
# =============================================================================

def comment_conditions(filters: CommentFilters) -> List[ColumnElement]:
    conditions: List[ColumnElement] = []

    if filters.article_id is not None:
        conditions.append(CommentModel.article_id == filters.article_id)

    if filters.is_approved is not None:
        conditions.append(CommentModel.is_approved == filters.is_approved)

    if filters.is_reported is not None:
        conditions.append(CommentModel.is_reported == filters.is_reported)

    return conditions


def build_comment_page_query(filters: CommentFilters) -> Select:
    """Страница комментариев со статьёй и модератором (LEFT JOIN)."""
    column = getattr(CommentModel, filters.sort_by)
    query = (
        select(
            CommentModel,
            ArticleModel.title.label("article_title"),
            ArticleModel.title_bn.label("article_title_bn"),
            ArticleModel.slug.label("article_slug"),
            UserModel.name.label("moderator_name"),
        )
        .select_from(CommentModel)
        .outerjoin(ArticleModel, CommentModel.article_id == ArticleModel.id)
        .outerjoin(UserModel, CommentModel.moderated_by == UserModel.id)
        .where(*comment_conditions(filters))
        .order_by(_ordered(column, filters.sort_order), _ordered(CommentModel.id, filters.sort_order))
    )
    return paginate(query, filters.window)


def build_comment_count_query(filters: CommentFilters) -> Select:
    return select(func.count(CommentModel.id)).where(*comment_conditions(filters))


# =============================================================================
# Теги
# =============================================================================

def tag_conditions(params: TagListQuery) -> List[ColumnElement]:
    conditions: List[ColumnElement] = [TagModel.is_active.is_(True)]
    if params.query:
        conditions.append(TagModel.name.icontains(params.query, autoescape=True))
    return conditions


def build_tag_page_query(params: TagListQuery) -> Select:
    """Страница тегов с числом статей (LEFT JOIN + GROUP BY тега)."""
    column = getattr(TagModel, params.sort_by)
    query = (
        select(TagModel, func.count(ArticleTagModel.article_id).label("article_count"))
        .select_from(TagModel)
        .outerjoin(ArticleTagModel, TagModel.id == ArticleTagModel.tag_id)
        .where(*tag_conditions(params))
        .group_by(TagModel.id)
        .order_by(_ordered(column, params.sort_order), _ordered(TagModel.id, params.sort_order))
    )
    return paginate(query, params.window)


def build_tag_count_query(params: TagListQuery) -> Select:
    return select(func.count(TagModel.id)).where(*tag_conditions(params))
