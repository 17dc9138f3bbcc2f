"""
Pydantic schemas: пользователи.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.api.schemas.common import CamelModel
from src.domain.value_objects.user_role import UserRole


class CreateUserRequest(CamelModel):
    email: str = Field(..., min_length=3, max_length=320)
    password: str = Field(..., min_length=8, max_length=128)
    name: str = Field(..., min_length=1, max_length=255)
    name_bn: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole = UserRole.REPORTER


class UserPublicResponse(CamelModel):
    """Публичный профиль: пароля здесь нет и быть не может."""

    id: int
    email: str
    name: str
    name_bn: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole
    created_at: Optional[datetime] = None
