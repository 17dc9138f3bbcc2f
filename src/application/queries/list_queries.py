"""
CQRS Queries: фильтры списков.

Иммутабельные объекты запросов. Пагинация нормализуется при создании:
page >= 1, limit в диапазоне [1, 100]. Булевы фильтры трёхзначные:
None означает "без ограничения" и отличается от False.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Tuple

from src.domain.value_objects.sort_order import SortOrder
from src.shared.utils.text import to_naive_utc

MAX_PAGE_SIZE = 100

# Допустимые поля сортировки: внешнее имя → имя атрибута модели
ARTICLE_SORT_FIELDS = {
    "publishedAt": "published_at",
    "viewCount": "view_count",
    "createdAt": "created_at",
    "priority": "priority",
}
COMMENT_SORT_FIELDS = {
    "createdAt": "created_at",
    "likeCount": "like_count",
    "replyCount": "reply_count",
}
TAG_SORT_FIELDS = {
    "name": "name",
    "nameBn": "name_bn",
    "createdAt": "created_at",
}


def clamp_page(page: Optional[int]) -> int:
    """Номер страницы (1-based), всё меньше 1 → 1."""
    if page is None:
        return 1
    return max(1, int(page))


def clamp_limit(limit: Optional[int], default: int = 10) -> int:
    """Размер страницы в пределах [1, MAX_PAGE_SIZE]."""
    if limit is None:
        limit = default
    return min(MAX_PAGE_SIZE, max(1, int(limit)))


def resolve_sort_field(sort_by: Optional[str], allowed: dict, default: str) -> str:
    """
    Выбрать поле сортировки только из белого списка.

    Принимает camelCase ("viewCount") и snake_case ("view_count").
    Неизвестное значение → default. Клиентский ввод никогда
    не попадает в запрос напрямую.
    """
    if sort_by:
        if sort_by in allowed:
            return allowed[sort_by]
        if sort_by in allowed.values():
            return sort_by
    return allowed[default]


@dataclass(frozen=True)
class PageRequest:
    """Окно пагинации."""

    page: int = 1
    limit: int = 10

    def __post_init__(self):
        object.__setattr__(self, "page", clamp_page(self.page))
        object.__setattr__(self, "limit", clamp_limit(self.limit))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit


@dataclass(frozen=True)
class ArticleFilters:
    """Запрос списка статей."""

    query: Optional[str] = None
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    status: Optional[str] = None
    is_published: Optional[bool] = None
    is_featured: Optional[bool] = None
    is_breaking: Optional[bool] = None
    date_from: Optional[datetime] = None
    date_to: Optional[datetime] = None
    tag_ids: Tuple[int, ...] = ()
    sort_by: str = "publishedAt"
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = 10

    def __post_init__(self):
        object.__setattr__(self, "page", clamp_page(self.page))
        object.__setattr__(self, "limit", clamp_limit(self.limit))
        object.__setattr__(self, "sort_by", resolve_sort_field(self.sort_by, ARTICLE_SORT_FIELDS, "publishedAt"))
        object.__setattr__(self, "sort_order", SortOrder.parse(self.sort_order))
        object.__setattr__(self, "tag_ids", tuple(dict.fromkeys(self.tag_ids or ())))
        object.__setattr__(self, "date_from", to_naive_utc(self.date_from))
        object.__setattr__(self, "date_to", to_naive_utc(self.date_to))
        if self.query is not None:
            object.__setattr__(self, "query", self.query.strip() or None)

    @property
    def window(self) -> PageRequest:
        return PageRequest(self.page, self.limit)


@dataclass(frozen=True)
class CommentFilters:
    """Запрос списка комментариев (модерация видит все)."""

    article_id: Optional[int] = None
    is_approved: Optional[bool] = None
    is_reported: Optional[bool] = None
    sort_by: str = "createdAt"
    sort_order: SortOrder = SortOrder.DESC
    page: int = 1
    limit: int = 20

    def __post_init__(self):
        object.__setattr__(self, "page", clamp_page(self.page))
        object.__setattr__(self, "limit", clamp_limit(self.limit, default=20))
        object.__setattr__(self, "sort_by", resolve_sort_field(self.sort_by, COMMENT_SORT_FIELDS, "createdAt"))
        object.__setattr__(self, "sort_order", SortOrder.parse(self.sort_order))

    @property
    def window(self) -> PageRequest:
        return PageRequest(self.page, self.limit)


@dataclass(frozen=True)
class TagListQuery:
    """Запрос списка тегов."""

    query: Optional[str] = None
    sort_by: str = "name"
    sort_order: SortOrder = SortOrder.ASC
    page: int = 1
    limit: int = 50

    def __post_init__(self):
        object.__setattr__(self, "page", clamp_page(self.page))
        object.__setattr__(self, "limit", clamp_limit(self.limit, default=50))
        object.__setattr__(self, "sort_by", resolve_sort_field(self.sort_by, TAG_SORT_FIELDS, "name"))
        object.__setattr__(self, "sort_order", SortOrder.parse(self.sort_order))

    @property
    def window(self) -> PageRequest:
        return PageRequest(self.page, self.limit)
