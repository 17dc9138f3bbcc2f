"""
Repository Interface: IArticleRepository

Порт (интерфейс) для работы с хранилищем статей.
Реализации (адаптеры) находятся в infrastructure layer.
"""

from abc import ABC, abstractmethod
from typing import List, Optional, Sequence, Tuple

from src.application.queries.list_queries import ArticleFilters
from src.domain.entities.article import Article
from src.domain.read_models import ArticleDetail, ArticleListItem


class IArticleRepository(ABC):
    """
    Интерфейс репозитория статей.

    Следует Repository Pattern и является портом в Hexagonal Architecture.
    Методы записи не коммитят, транзакцией управляет UnitOfWork.
    """

    @abstractmethod
    async def add(self, article: Article) -> Article:
        """
        Добавить статью.

        Args:
            article: Новая статья (id=None)

        Returns:
            Статья с присвоенным id
        """
        pass

    @abstractmethod
    async def update(self, article: Article) -> Article:
        """
        Сохранить изменения статьи.

        Args:
            article: Статья с изменёнными полями

        Returns:
            Обновлённая статья
        """
        pass

    @abstractmethod
    async def delete(self, article_id: int) -> bool:
        """
        Удалить статью (связи с тегами удаляются каскадно).

        Returns:
            True если удалена
        """
        pass

    @abstractmethod
    async def find_by_id(self, article_id: int) -> Optional[Article]:
        pass

    @abstractmethod
    async def find_by_slug(self, slug: str) -> Optional[Article]:
        pass

    @abstractmethod
    async def exists_by_slug(self, slug: str, exclude_id: Optional[int] = None) -> bool:
        """
        Проверить занятость slug.

        Args:
            slug: Проверяемый slug
            exclude_id: Не учитывать статью с этим id (для update)
        """
        pass

    @abstractmethod
    async def find_page(self, filters: ArticleFilters) -> Tuple[List[ArticleListItem], int]:
        """
        Страница статей по фильтрам + общее число совпадений.

        Args:
            filters: Нормализованные фильтры

        Returns:
            (элементы страницы со связями, total по тем же предикатам)
        """
        pass

    @abstractmethod
    async def get_detail(self, slug: str) -> Optional[ArticleDetail]:
        """
        Полная статья по slug со связями.

        Собирается несколькими независимыми запросами (не атомарно).

        Returns:
            ArticleDetail или None
        """
        pass

    @abstractmethod
    async def replace_tags(self, article_id: int, tag_ids: Sequence[int]) -> None:
        """Заменить набор тегов статьи."""
        pass

    @abstractmethod
    async def record_view(
        self,
        article_id: int,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        referrer: Optional[str] = None
    ) -> bool:
        """
        Увеличить view_count и добавить строку page_views.

        Returns:
            True если статья существует
        """
        pass
