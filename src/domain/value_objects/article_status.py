"""
Value Object: ArticleStatus

Редакционный статус статьи.
"""

from enum import Enum


class ArticleStatus(str, Enum):
    """Статусы жизненного цикла статьи."""

    DRAFT = "draft"                  # Черновик
    REVIEW = "review"                # На проверке у редактора
    PUBLISHED = "published"          # Опубликована
    ARCHIVED = "archived"            # В архиве

    def can_transition_to(self, new_status: "ArticleStatus") -> bool:
        """
        Проверка возможности перехода в новый статус.

        Статус носит рекомендательный характер (видимость определяет
        is_published), поэтому правила мягкие:
        - DRAFT -> REVIEW, PUBLISHED, ARCHIVED
        - REVIEW -> DRAFT, PUBLISHED, ARCHIVED
        - PUBLISHED -> REVIEW, ARCHIVED
        - ARCHIVED -> DRAFT, PUBLISHED (восстановление)
        Повторная установка текущего статуса разрешена.
        """
        if new_status == self:
            return True

        transitions = {
            ArticleStatus.DRAFT: [ArticleStatus.REVIEW, ArticleStatus.PUBLISHED, ArticleStatus.ARCHIVED],
            ArticleStatus.REVIEW: [ArticleStatus.DRAFT, ArticleStatus.PUBLISHED, ArticleStatus.ARCHIVED],
            ArticleStatus.PUBLISHED: [ArticleStatus.REVIEW, ArticleStatus.ARCHIVED],
            ArticleStatus.ARCHIVED: [ArticleStatus.DRAFT, ArticleStatus.PUBLISHED],
        }
        return new_status in transitions.get(self, [])
