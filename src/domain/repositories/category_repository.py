"""
Repository Interface: ICategoryRepository
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Optional

from src.domain.entities.category import Category
from src.domain.read_models import CategoryWithCount


class ICategoryRepository(ABC):
    """Интерфейс репозитория рубрик."""

    @abstractmethod
    async def find_active(self) -> List[Category]:
        """Активные рубрики, упорядоченные по (display_order, name)."""
        pass

    @abstractmethod
    async def find_active_with_counts(
        self,
        most_popular_first: bool = False,
        limit: Optional[int] = None
    ) -> List[CategoryWithCount]:
        """
        Активные рубрики с числом статей.

        Args:
            most_popular_first: Сортировать по числу статей (убывание)
            limit: Ограничить выборку
        """
        pass

    @abstractmethod
    async def find_by_id(self, category_id: int) -> Optional[Category]:
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Category]:
        pass

    @abstractmethod
    async def find_children(self, category_id: int) -> List[Category]:
        pass

    @abstractmethod
    async def find_parent_map(self) -> Dict[int, Optional[int]]:
        """id → parent_id для всех рубрик (проверка циклов)."""
        pass

    @abstractmethod
    async def exists_by_slug(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        pass

    @abstractmethod
    async def count_articles(self, category_id: int) -> int:
        pass

    @abstractmethod
    async def count_children(self, category_id: int) -> int:
        pass

    @abstractmethod
    async def add(self, category: Category) -> Category:
        pass

    @abstractmethod
    async def update(self, category: Category) -> Category:
        pass

    @abstractmethod
    async def delete(self, category_id: int) -> bool:
        pass
