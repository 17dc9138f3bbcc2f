# -*- coding: utf-8 -*-
"""
Доменная сущность: Статья (Article)

Двуязычная новостная статья: основные поля + необязательные
бенгальские варианты (*_bn). Счётчики вовлечённости ведёт сервер.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

from src.domain.value_objects.article_status import ArticleStatus
from src.shared.exceptions.domain_exceptions import ValidationError
from src.shared.utils.text import utcnow

# Поля, которые клиент может менять через update
EDITABLE_FIELDS = (
    "title", "title_bn", "slug", "excerpt", "excerpt_bn", "content", "content_bn",
    "featured_image", "image_caption", "gallery",
    "category_id", "author_id", "editor_id",
    "status", "is_published", "published_at", "scheduled_at",
    "meta_title", "meta_description", "keywords",
    "is_featured", "is_breaking", "is_urgent", "priority",
    "location", "location_bn", "source",
)

# Колонки NOT NULL: явный null в update недопустим
NON_NULLABLE_FIELDS = (
    "title", "slug", "content", "gallery", "status",
    "is_published", "is_featured", "is_breaking", "is_urgent", "priority",
)


@dataclass
class Article:
    """
    Доменная сущность статьи.

    Инварианты:
    - Заголовок и контент не пустые, заголовок не длиннее 500 символов
    - slug не пустой (уникальность обеспечивает хранилище)
    - Приоритет: 1-10
    - is_published=True => published_at заполнен
    - Счётчики неотрицательны
    """

    # =========================================================================
    # Идентификация
    # =========================================================================
    id: Optional[int] = None
    slug: str = ""

    # =========================================================================
    # Контент
    # =========================================================================
    title: str = ""
    title_bn: Optional[str] = None
    excerpt: Optional[str] = None
    excerpt_bn: Optional[str] = None
    content: str = ""
    content_bn: Optional[str] = None

    # =========================================================================
    # Медиа
    # =========================================================================
    featured_image: Optional[str] = None
    image_caption: Optional[str] = None
    gallery: List[str] = field(default_factory=list)

    # =========================================================================
    # Связи
    # =========================================================================
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    editor_id: Optional[int] = None

    # =========================================================================
    # Публикация
    # =========================================================================
    status: ArticleStatus = ArticleStatus.DRAFT
    is_published: bool = False
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None

    # =========================================================================
    # SEO
    # =========================================================================
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None

    # =========================================================================
    # Вовлечённость (ведёт сервер)
    # =========================================================================
    view_count: int = 0
    like_count: int = 0
    share_count: int = 0
    comment_count: int = 0

    # =========================================================================
    # Размещение
    # =========================================================================
    is_featured: bool = False
    is_breaking: bool = False
    is_urgent: bool = False
    priority: int = 5

    location: Optional[str] = None
    location_bn: Optional[str] = None
    source: Optional[str] = None

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        """Валидация инвариантов после инициализации."""
        if isinstance(self.status, str):
            self.status = ArticleStatus(self.status)
        self.ensure_publication_date()
        self.validate()

    def collect_errors(self) -> List[Dict[str, str]]:
        """Собрать все нарушения инвариантов (не останавливаясь на первом)."""
        errors = []

        if not self.title or not self.title.strip():
            errors.append({"field": "title", "message": "title is required"})
        elif len(self.title) > 500:
            errors.append({"field": "title", "message": "title must be at most 500 characters long"})

        if not self.slug or not self.slug.strip():
            errors.append({"field": "slug", "message": "slug is required"})

        if not self.content or not self.content.strip():
            errors.append({"field": "content", "message": "content is required"})

        if not 1 <= self.priority <= 10:
            errors.append({"field": "priority", "message": "priority must be between 1 and 10"})

        for counter in ("view_count", "like_count", "share_count", "comment_count"):
            if getattr(self, counter) < 0:
                errors.append({"field": counter, "message": f"{counter} cannot be negative"})

        return errors

    def validate(self) -> None:
        """
        Проверка инвариантов сущности.

        Исключения:
            ValidationError: Со списком всех нарушенных полей
        """
        errors = self.collect_errors()
        if errors:
            raise ValidationError(errors)

    # =========================================================================
    # Бизнес-логика
    # =========================================================================

    def ensure_publication_date(self) -> None:
        """Опубликованная статья всегда имеет дату публикации."""
        if self.is_published and self.published_at is None:
            self.published_at = utcnow()

    def apply_changes(self, changes: Dict[str, Any]) -> None:
        """
        Применить частичное обновление.

        Аргументы:
            changes: Только явно переданные клиентом поля

        Исключения:
            ValidationError: Смена slug у опубликованной статьи,
                недопустимый переход статуса или нарушение инвариантов
        """
        errors = []

        for name in NON_NULLABLE_FIELDS:
            if name in changes and changes[name] is None:
                errors.append({"field": name, "message": f"{name} cannot be null"})

        new_slug = changes.get("slug")
        if new_slug is not None and new_slug != self.slug and self.is_published:
            errors.append({"field": "slug", "message": "slug cannot change once the article is published"})

        new_status = changes.get("status")
        if new_status is not None:
            new_status = ArticleStatus(new_status)
            if not self.status.can_transition_to(new_status):
                errors.append({
                    "field": "status",
                    "message": f"cannot move from {self.status.value} to {new_status.value}",
                })

        if errors:
            raise ValidationError(errors)

        for name, value in changes.items():
            if name not in EDITABLE_FIELDS:
                continue
            if name == "status" and value is not None:
                value = ArticleStatus(value)
            setattr(self, name, value)

        self.ensure_publication_date()
        self.updated_at = utcnow()
        self.validate()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Article):
            return False
        return self.id == other.id and self.slug == other.slug

    def __hash__(self) -> int:
        return hash((self.id, self.slug))

    def __repr__(self) -> str:
        return f"Article(id={self.id}, slug='{self.slug}', status={self.status.value})"
