"""
Repository Interface: ICommentRepository
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Tuple

from src.application.queries.list_queries import CommentFilters, PageRequest
from src.domain.entities.comment import Comment
from src.domain.read_models import CommentListItem


class ICommentRepository(ABC):
    """Интерфейс репозитория комментариев."""

    @abstractmethod
    async def find_page(self, filters: CommentFilters) -> Tuple[List[CommentListItem], int]:
        """
        Страница комментариев для модерации (без фильтра одобрения
        по умолчанию) + total.
        """
        pass

    @abstractmethod
    async def find_approved_top_level(
        self,
        article_id: int,
        window: PageRequest
    ) -> Tuple[List[Comment], int]:
        """
        Одобренные комментарии верхнего уровня, новые первыми.

        Returns:
            (страница, total верхнего уровня)
        """
        pass

    @abstractmethod
    async def find_approved_replies(self, article_id: int) -> List[Comment]:
        """Одобренные ответы той же статьи, по возрастанию даты."""
        pass

    @abstractmethod
    async def find_by_id(self, comment_id: int) -> Optional[Comment]:
        pass

    @abstractmethod
    async def add(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def update(self, comment: Comment) -> Comment:
        pass

    @abstractmethod
    async def delete(self, comment_id: int) -> bool:
        pass

    @abstractmethod
    async def change_reply_count(self, comment_id: int, delta: int) -> None:
        """Сдвинуть reply_count на delta (не ниже нуля)."""
        pass
