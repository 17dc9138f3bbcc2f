"""
Repository Interface: IUserRepository
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.application.queries.list_queries import PageRequest
from src.domain.entities.user import User
from src.domain.read_models import UserPublic
from src.domain.value_objects.user_role import UserRole


class IUserRepository(ABC):
    """Интерфейс репозитория пользователей. Наружу отдаёт только UserPublic."""

    @abstractmethod
    async def add(self, user: User) -> UserPublic:
        pass

    @abstractmethod
    async def find_public_by_id(self, user_id: int) -> Optional[UserPublic]:
        pass

    @abstractmethod
    async def exists_by_email(self, email: str) -> bool:
        pass

    @abstractmethod
    async def find_page(
        self,
        window: PageRequest,
        role: Optional[UserRole] = None
    ) -> Tuple[List[UserPublic], int]:
        pass
