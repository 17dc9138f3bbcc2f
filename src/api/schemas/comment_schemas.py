"""
Pydantic schemas: комментарии.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from src.api.schemas.common import CamelModel
from src.domain.value_objects.moderation_action import ModerationAction


class CreateCommentRequest(CamelModel):
    article_id: int
    parent_id: Optional[int] = None
    author_name: str = Field(..., min_length=1, max_length=255)
    author_email: Optional[str] = Field(None, max_length=320)
    author_avatar: Optional[str] = None
    content: str = Field(..., min_length=1)
    content_bn: Optional[str] = None


class UpdateCommentRequest(CamelModel):
    content: Optional[str] = Field(None, min_length=1)
    content_bn: Optional[str] = None


class ModerateCommentRequest(CamelModel):
    """action вне {approve, reject} отклоняется валидацией (400)."""

    action: ModerationAction
    moderator_id: int


class CommentResponse(CamelModel):
    id: int
    article_id: int
    parent_id: Optional[int] = None
    author_name: str
    author_email: Optional[str] = None
    author_avatar: Optional[str] = None
    content: str
    content_bn: Optional[str] = None
    is_approved: bool
    is_reported: bool
    moderated_by: Optional[int] = None
    moderated_at: Optional[datetime] = None
    like_count: int
    reply_count: int
    created_at: datetime
    updated_at: datetime


class CommentThreadResponse(CommentResponse):
    replies: List["CommentThreadResponse"] = []


class CommentArticleSchema(CamelModel):
    id: int
    title: str
    title_bn: Optional[str] = None
    slug: str


class CommentModeratorSchema(CamelModel):
    id: int
    name: str


class CommentListItemResponse(CommentResponse):
    """Для модерации: со статьёй и модератором."""

    article: Optional[CommentArticleSchema] = None
    moderator: Optional[CommentModeratorSchema] = None
