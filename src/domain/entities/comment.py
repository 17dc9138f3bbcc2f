"""
Доменная сущность: Комментарий (Comment)

Комментарий принадлежит одной статье, может быть ответом на другой
комментарий (parent_id). Модерация: pending → approved | rejected,
повторная модерация перезаписывает решение.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from src.domain.value_objects.moderation_action import ModerationAction
from src.shared.exceptions.domain_exceptions import ValidationError
from src.shared.utils.text import utcnow


@dataclass
class Comment:
    """Комментарий читателя."""

    id: Optional[int] = None
    article_id: Optional[int] = None
    parent_id: Optional[int] = None

    author_name: str = ""
    author_email: Optional[str] = None
    author_avatar: Optional[str] = None

    content: str = ""
    content_bn: Optional[str] = None

    is_approved: bool = False
    is_reported: bool = False
    moderated_by: Optional[int] = None
    moderated_at: Optional[datetime] = None

    like_count: int = 0
    reply_count: int = 0

    ip_address: Optional[str] = None
    user_agent: Optional[str] = None

    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        errors: List[Dict[str, str]] = []
        if self.article_id is None:
            errors.append({"field": "articleId", "message": "articleId is required"})
        if not self.author_name or not self.author_name.strip():
            errors.append({"field": "authorName", "message": "authorName is required"})
        if not self.content or not self.content.strip():
            errors.append({"field": "content", "message": "content is required"})
        if errors:
            raise ValidationError(errors)

    def moderate(self, action: ModerationAction, moderator_id: int) -> None:
        """Применить решение модератора (last-write-wins)."""
        now = utcnow()
        self.is_approved = action.is_approved
        self.moderated_by = moderator_id
        self.moderated_at = now
        self.updated_at = now

    def report(self) -> None:
        """Пометить как жалобу; состояние модерации не меняется."""
        self.is_reported = True
        self.updated_at = utcnow()
