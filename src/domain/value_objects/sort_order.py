"""
Value Object: SortOrder

Направление сортировки списков.
"""

from enum import Enum
from typing import Optional


class SortOrder(str, Enum):
    """Направление сортировки."""

    ASC = "asc"
    DESC = "desc"

    @classmethod
    def parse(cls, value: Optional[str]) -> "SortOrder":
        """Всё, кроме явного "asc", трактуется как DESC."""
        if value and value.lower() == cls.ASC.value:
            return cls.ASC
        return cls.DESC
