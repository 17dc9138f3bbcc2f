"""
Pydantic schemas для API статей.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field, field_validator

from src.api.schemas.category_schemas import CategoryResponse
from src.api.schemas.common import CamelModel
from src.api.schemas.tag_schemas import TagResponse
from src.api.schemas.user_schemas import UserPublicResponse
from src.domain.entities.article import NON_NULLABLE_FIELDS
from src.domain.value_objects.article_status import ArticleStatus


class CreateArticleRequest(CamelModel):
    """
    Запрос на создание статьи.

    Счётчики вовлечённости (viewCount и т.п.) сюда не входят
    и игнорируются, если клиент их передал.
    """

    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    slug: Optional[str] = Field(None, max_length=500)
    title_bn: Optional[str] = None
    excerpt: Optional[str] = None
    excerpt_bn: Optional[str] = None
    content_bn: Optional[str] = None
    featured_image: Optional[str] = None
    image_caption: Optional[str] = None
    gallery: List[str] = []
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    editor_id: Optional[int] = None
    status: Optional[ArticleStatus] = None
    is_published: bool = False
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    is_featured: bool = False
    is_breaking: bool = False
    is_urgent: bool = False
    priority: int = Field(5, ge=1, le=10)
    location: Optional[str] = None
    location_bn: Optional[str] = None
    source: Optional[str] = None
    tag_ids: List[int] = []


class UpdateArticleRequest(CamelModel):
    """Частичное обновление: в изменения попадают только переданные поля."""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    content: Optional[str] = Field(None, min_length=1)
    slug: Optional[str] = Field(None, min_length=1, max_length=500)
    title_bn: Optional[str] = None
    excerpt: Optional[str] = None
    excerpt_bn: Optional[str] = None
    content_bn: Optional[str] = None
    featured_image: Optional[str] = None
    image_caption: Optional[str] = None
    gallery: Optional[List[str]] = None
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    editor_id: Optional[int] = None
    status: Optional[ArticleStatus] = None
    is_published: Optional[bool] = None
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    is_featured: Optional[bool] = None
    is_breaking: Optional[bool] = None
    is_urgent: Optional[bool] = None
    priority: Optional[int] = Field(None, ge=1, le=10)
    location: Optional[str] = None
    location_bn: Optional[str] = None
    source: Optional[str] = None
    tag_ids: Optional[List[int]] = None

    @field_validator(*NON_NULLABLE_FIELDS)
    @classmethod
    def reject_null(cls, value):
        """Поле можно не передавать, но нельзя обнулить."""
        if value is None:
            raise ValueError("must not be null")
        return value


class CategorySummarySchema(CamelModel):
    id: int
    name: str
    slug: str


class AuthorSummarySchema(CamelModel):
    id: int
    name: str
    avatar: Optional[str] = None


class TagSummarySchema(CamelModel):
    id: int
    name: str
    slug: str


class ArticleListItemResponse(CamelModel):
    """Элемент списка: без полного контента."""

    id: int
    title: str
    title_bn: Optional[str] = None
    slug: str
    excerpt: Optional[str] = None
    excerpt_bn: Optional[str] = None
    featured_image: Optional[str] = None
    image_caption: Optional[str] = None
    status: ArticleStatus
    is_published: bool
    published_at: Optional[datetime] = None
    is_featured: bool
    is_breaking: bool
    is_urgent: bool
    priority: int
    view_count: int
    like_count: int
    share_count: int
    comment_count: int
    location: Optional[str] = None
    location_bn: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    category: Optional[CategorySummarySchema] = None
    author: Optional[AuthorSummarySchema] = None
    tags: List[TagSummarySchema] = []


class ArticleDetailResponse(CamelModel):
    """Полная статья со связями."""

    id: int
    title: str
    title_bn: Optional[str] = None
    slug: str
    excerpt: Optional[str] = None
    excerpt_bn: Optional[str] = None
    content: str
    content_bn: Optional[str] = None
    featured_image: Optional[str] = None
    image_caption: Optional[str] = None
    gallery: List[str] = []
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    editor_id: Optional[int] = None
    status: ArticleStatus
    is_published: bool
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    view_count: int
    like_count: int
    share_count: int
    comment_count: int
    is_featured: bool
    is_breaking: bool
    is_urgent: bool
    priority: int
    location: Optional[str] = None
    location_bn: Optional[str] = None
    source: Optional[str] = None
    created_at: datetime
    updated_at: datetime
    category: Optional[CategoryResponse] = None
    author: Optional[UserPublicResponse] = None
    editor: Optional[UserPublicResponse] = None
    tags: List[TagResponse] = []
    approved_comment_count: int = 0
