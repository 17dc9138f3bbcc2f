"""
Доменная сущность: Тег (Tag)
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Dict, List, Optional

from src.shared.exceptions.domain_exceptions import ValidationError
from src.shared.utils.text import utcnow


@dataclass
class Tag:
    """Плоская метка статьи с уникальными name и slug."""

    id: Optional[int] = None
    name: str = ""
    name_bn: Optional[str] = None
    slug: str = ""
    description: Optional[str] = None
    color: Optional[str] = None
    is_active: bool = True
    created_at: datetime = field(default_factory=utcnow)

    def __post_init__(self):
        errors: List[Dict[str, str]] = []
        if not self.name or not self.name.strip():
            errors.append({"field": "name", "message": "name is required"})
        if not self.slug or not self.slug.strip():
            errors.append({"field": "slug", "message": "slug is required"})
        if errors:
            raise ValidationError(errors)
