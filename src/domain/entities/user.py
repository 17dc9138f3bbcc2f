"""
Доменная сущность: Пользователь (User)

Автор, редактор или администратор. Пароль хранится только как хэш
и никогда не попадает в публичную проекцию.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from src.domain.value_objects.user_role import UserRole
from src.shared.exceptions.domain_exceptions import ValidationError
from src.shared.utils.text import utcnow

_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


@dataclass
class User:
    """Сотрудник редакции."""

    id: Optional[int] = None
    email: str = ""
    password_hash: str = ""
    name: str = ""
    name_bn: Optional[str] = None
    bio: Optional[str] = None
    avatar: Optional[str] = None
    role: UserRole = UserRole.REPORTER
    is_active: bool = True
    last_login_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        if isinstance(self.role, str):
            self.role = UserRole(self.role)

        errors: List[Dict[str, str]] = []
        if not self.email or not _EMAIL.match(self.email):
            errors.append({"field": "email", "message": "email must be a valid email address"})
        if not self.name or not self.name.strip():
            errors.append({"field": "name", "message": "name is required"})
        if not self.password_hash:
            errors.append({"field": "password", "message": "password is required"})
        if errors:
            raise ValidationError(errors)

    def __repr__(self) -> str:
        return f"User(id={self.id}, email='{self.email}', role={self.role.value})"
