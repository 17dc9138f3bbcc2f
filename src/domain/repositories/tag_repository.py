"""
Repository Interface: ITagRepository
"""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional, Set, Tuple

from src.application.queries.list_queries import TagListQuery
from src.domain.entities.tag import Tag
from src.domain.read_models import TagWithCount


class ITagRepository(ABC):
    """Интерфейс репозитория тегов."""

    @abstractmethod
    async def find_page(self, params: TagListQuery) -> Tuple[List[TagWithCount], int]:
        pass

    @abstractmethod
    async def find_popular(self, limit: int) -> List[TagWithCount]:
        pass

    @abstractmethod
    async def find_by_slug_with_count(self, slug: str) -> Optional[TagWithCount]:
        pass

    @abstractmethod
    async def find_by_id(self, tag_id: int) -> Optional[Tag]:
        pass

    @abstractmethod
    async def exists_by_slug_or_name(
        self,
        slug: str,
        name: str,
        exclude_id: Optional[int] = None
    ) -> bool:
        pass

    @abstractmethod
    async def get_existing_ids(self, tag_ids: Iterable[int]) -> Set[int]:
        """
        Массовая проверка существования тегов одним запросом.

        Example:
            existing = await repo.get_existing_ids([1, 2, 99])
            # → {1, 2}
        """
        pass

    @abstractmethod
    async def count_articles(self, tag_id: int) -> int:
        pass

    @abstractmethod
    async def add(self, tag: Tag) -> Tag:
        pass

    @abstractmethod
    async def update(self, tag: Tag) -> Tag:
        pass

    @abstractmethod
    async def delete(self, tag_id: int) -> bool:
        pass
