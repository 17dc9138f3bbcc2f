"""
CQRS Commands: создание и изменение статей.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class CreateArticleCommand:
    """
    Команда создания статьи.

    Иммутабельна (frozen=True) - следует принципу CQRS.
    Счётчики вовлечённости в команду не входят.
    """

    # Required
    title: str
    content: str

    # Optional
    slug: Optional[str] = None
    title_bn: Optional[str] = None
    excerpt: Optional[str] = None
    excerpt_bn: Optional[str] = None
    content_bn: Optional[str] = None
    featured_image: Optional[str] = None
    image_caption: Optional[str] = None
    gallery: List[str] = None
    category_id: Optional[int] = None
    author_id: Optional[int] = None
    editor_id: Optional[int] = None
    status: Optional[str] = None
    is_published: bool = False
    published_at: Optional[datetime] = None
    scheduled_at: Optional[datetime] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    keywords: Optional[str] = None
    is_featured: bool = False
    is_breaking: bool = False
    is_urgent: bool = False
    priority: int = 5
    location: Optional[str] = None
    location_bn: Optional[str] = None
    source: Optional[str] = None
    tag_ids: Tuple[int, ...] = ()

    def __post_init__(self):
        """Установка значений по умолчанию для изменяемых типов."""
        if self.gallery is None:
            object.__setattr__(self, 'gallery', [])
        object.__setattr__(self, 'tag_ids', tuple(self.tag_ids or ()))


@dataclass(frozen=True)
class UpdateArticleCommand:
    """
    Частичное обновление статьи.

    changes содержит только поля, явно переданные клиентом.
    tag_ids=None означает "теги не трогать", пустой кортеж - снять все.
    """

    article_id: int
    changes: Dict[str, Any] = field(default_factory=dict)
    tag_ids: Optional[Tuple[int, ...]] = None
