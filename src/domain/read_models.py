# -*- coding: utf-8 -*-
"""
Read models — проекции для чтения.

Собираются репозиториями из нескольких запросов (гидрация связей)
и не участвуют в записи.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional

from src.domain.entities.article import Article
from src.domain.entities.category import Category
from src.domain.entities.comment import Comment
from src.domain.entities.tag import Tag
from src.domain.value_objects.article_status import ArticleStatus
from src.domain.value_objects.user_role import UserRole


# =============================================================================
# Краткие проекции связей
# =============================================================================

@dataclass
class CategorySummary:
    id: int
    name: str
    slug: str


@dataclass
class AuthorSummary:
    id: int
    name: str
    avatar: Optional[str] = None


@dataclass
class TagSummary:
    id: int
    name: str
    slug: str


@dataclass
class ArticleSummary:
    id: int
    title: str
    title_bn: Optional[str]
    slug: str


@dataclass
class UserPublic:
    """Публичная проекция пользователя (без пароля)."""

    id: int
    email: str
    name: str
    name_bn: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole = UserRole.REPORTER
    created_at: Optional[datetime] = None


# =============================================================================
# Статьи
# =============================================================================

@dataclass
class ArticleListItem:
    """Элемент списка статей: без полного контента, со связями."""

    id: int
    title: str
    title_bn: Optional[str]
    slug: str
    excerpt: Optional[str]
    excerpt_bn: Optional[str]
    featured_image: Optional[str]
    image_caption: Optional[str]
    status: ArticleStatus
    is_published: bool
    published_at: Optional[datetime]
    is_featured: bool
    is_breaking: bool
    is_urgent: bool
    priority: int
    view_count: int
    like_count: int
    share_count: int
    comment_count: int
    location: Optional[str]
    location_bn: Optional[str]
    created_at: datetime
    updated_at: datetime
    category: Optional[CategorySummary] = None
    author: Optional[AuthorSummary] = None
    tags: List[TagSummary] = field(default_factory=list)


@dataclass
class ArticleDetail(Article):
    """Полная статья со связями и числом одобренных комментариев."""

    category: Optional[Category] = None
    author: Optional[UserPublic] = None
    editor: Optional[UserPublic] = None
    tags: List[Tag] = field(default_factory=list)
    approved_comment_count: int = 0


# =============================================================================
# Рубрики
# =============================================================================

@dataclass
class CategoryNode(Category):
    """Узел дерева рубрик."""

    children: List["CategoryNode"] = field(default_factory=list)


@dataclass
class CategoryWithCount(Category):
    article_count: int = 0


@dataclass
class CategoryDetail(Category):
    """Рубрика с родителем и прямыми потомками."""

    parent: Optional[Category] = None
    children: List[Category] = field(default_factory=list)


# =============================================================================
# Теги
# =============================================================================

@dataclass
class TagWithCount(Tag):
    article_count: int = 0


# =============================================================================
# Комментарии
# =============================================================================

@dataclass
class CommentNode(Comment):
    """Комментарий с вложенными ответами."""

    replies: List["CommentNode"] = field(default_factory=list)


@dataclass
class CommentListItem(Comment):
    """Комментарий для модерации: со статьёй и модератором."""

    article: Optional[ArticleSummary] = None
    moderator: Optional[AuthorSummary] = None
