"""
Value Object: ModerationAction

Решение модератора по комментарию.
"""

from enum import Enum


class ModerationAction(str, Enum):
    """Действия модерации (last-write-wins)."""

    APPROVE = "approve"
    REJECT = "reject"

    @property
    def is_approved(self) -> bool:
        """Значение флага is_approved после применения действия."""
        return self is ModerationAction.APPROVE

    @property
    def past_tense(self) -> str:
        return "approved" if self.is_approved else "rejected"
