"""
Общие Pydantic schemas.

Ключи JSON в camelCase; запросы принимают и camelCase, и snake_case.
"""

from typing import Any, List, Optional, Union

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """База для всех schemas API."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class FieldErrorSchema(CamelModel):
    field: str
    message: str


class PageMetaSchema(CamelModel):
    page: int
    limit: int
    total: int
    total_pages: int


class EnvelopeSchema(CamelModel):
    """Конверт ответа (для документации OpenAPI)."""

    success: bool
    message: str
    data: Optional[Any] = None
    errors: Optional[List[Union[str, FieldErrorSchema]]] = None
    meta: Optional[PageMetaSchema] = None
