"""
Value Object: UserRole

Роль сотрудника редакции.
"""

from enum import Enum


class UserRole(str, Enum):
    """Роли пользователей."""

    ADMIN = "admin"
    EDITOR = "editor"
    REPORTER = "reporter"
    CONTRIBUTOR = "contributor"
