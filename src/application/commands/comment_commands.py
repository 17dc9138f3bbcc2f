"""
CQRS Commands: комментарии и модерация.
"""

from dataclasses import dataclass
from typing import Optional

from src.domain.value_objects.moderation_action import ModerationAction


@dataclass(frozen=True)
class CreateCommentCommand:
    """Новый комментарий читателя (или ответ, если задан parent_id)."""

    article_id: int
    author_name: str
    content: str
    parent_id: Optional[int] = None
    author_email: Optional[str] = None
    author_avatar: Optional[str] = None
    content_bn: Optional[str] = None
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass(frozen=True)
class UpdateCommentCommand:
    """Правка текста комментария. Модерацию меняет только ModerateCommentCommand."""

    comment_id: int
    content: Optional[str] = None
    content_bn: Optional[str] = None


@dataclass(frozen=True)
class ModerateCommentCommand:
    comment_id: int
    action: ModerationAction
    moderator_id: int
