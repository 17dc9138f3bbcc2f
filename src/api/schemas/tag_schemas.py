"""
Pydantic schemas: теги.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from src.api.schemas.common import CamelModel


class CreateTagRequest(CamelModel):
    name: str = Field(..., min_length=1, max_length=255)
    name_bn: Optional[str] = None
    slug: Optional[str] = Field(None, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=32)
    is_active: bool = True


class UpdateTagRequest(CamelModel):
    name: Optional[str] = Field(None, min_length=1, max_length=255)
    name_bn: Optional[str] = None
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    color: Optional[str] = Field(None, max_length=32)
    is_active: Optional[bool] = None


class TagResponse(CamelModel):
    id: int
    name: str
    name_bn: Optional[str] = None
    slug: str
    description: Optional[str] = None
    color: Optional[str] = None
    is_active: bool
    created_at: datetime


class TagWithCountResponse(TagResponse):
    article_count: int
