"""
Доменная сущность: Рубрика (Category)

Рубрики образуют дерево через parent_id.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from src.shared.exceptions.domain_exceptions import ValidationError
from src.shared.utils.text import utcnow


@dataclass
class Category:
    """Рубрика газеты (например, "খেলা" / Sports)."""

    id: Optional[int] = None
    name: str = ""
    name_en: Optional[str] = None
    slug: str = ""
    description: Optional[str] = None
    parent_id: Optional[int] = None
    display_order: int = 0
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)
    updated_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        errors: List[Dict[str, str]] = []
        if not self.name or not self.name.strip():
            errors.append({"field": "name", "message": "name is required"})
        if not self.slug or not self.slug.strip():
            errors.append({"field": "slug", "message": "slug is required"})
        if self.id is not None and self.parent_id == self.id:
            errors.append({"field": "parentId", "message": "category cannot be its own parent"})
        if errors:
            raise ValidationError(errors)
