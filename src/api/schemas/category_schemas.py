"""
Pydantic schemas: рубрики.
"""

from datetime import datetime
from typing import List, Optional

from pydantic import Field

from src.api.schemas.common import CamelModel


class CreateCategoryRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_en: Optional[str] = None
    slug: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[int] = None
    display_order: int = 0
    is_active: bool = True


class UpdateCategoryRequest(CamelModel):
    """Все поля необязательны: меняются только переданные."""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    name_en: Optional[str] = None
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    parent_id: Optional[int] = None
    display_order: Optional[int] = None
    is_active: Optional[bool] = None


class CategoryResponse(CamelModel):
    id: int
    name: str
    name_en: Optional[str] = None
    slug: str
    description: Optional[str] = None
    parent_id: Optional[int] = None
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: datetime


class CategoryTreeResponse(CategoryResponse):
    children: List["CategoryTreeResponse"] = []


class CategoryWithCountResponse(CategoryResponse):
    article_count: int


class CategoryDetailResponse(CategoryResponse):
    parent: Optional[CategoryResponse] = None
    children: List[CategoryResponse] = []
