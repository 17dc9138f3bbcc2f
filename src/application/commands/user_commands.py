"""
CQRS Commands: пользователи.
"""

from dataclasses import dataclass
from typing import Optional

from src.domain.value_objects.user_role import UserRole


@dataclass(frozen=True)
class CreateUserCommand:
    """Регистрация сотрудника. Пароль приходит открытым и сразу хэшируется."""

    email: str
    password: str
    name: str
    name_bn: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole = UserRole.REPORTER
