"""
CQRS Commands: теги.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional


@dataclass(frozen=True)
class CreateTagCommand:
    name: str
    name_bn: Optional[str] = None
    slug: Optional[str] = None
    description: Optional[str] = None
    color: Optional[str] = None
    is_active: bool = True


@dataclass(frozen=True)
class UpdateTagCommand:
    tag_id: int
    changes: Dict[str, Any] = field(default_factory=dict)
