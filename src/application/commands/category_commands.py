"""
CQRS Commands: рубрики.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CreateCategoryCommand:
    """Создание рубрики. slug генерируется из name, если не передан."""

    name: str
    name_en: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    parent_id: Optional[int] = None
    display_order: int = 0
    is_active: bool = True


@dataclass(frozen=True)
class UpdateCategoryCommand:
    category_id: int
    changes: Dict[str, Any] = field(default_factory=dict)
