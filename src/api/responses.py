"""
Конверт ответа API.

{success, message, data?, errors?, meta?{page, limit, total, totalPages}}
одинаков для всех endpoint'ов. Статус HTTP берётся из ServiceResult.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from src.application.results import PageMeta, ServiceResult
from src.shared.exceptions.domain_exceptions import AppError

logger = logging.getLogger(__name__)

# Части loc, которые не являются именем поля
_LOCATION_PREFIXES = {"body", "query", "path", "header", "cookie"}


def serialize(data: Any, schema: Optional[Type[BaseModel]] = None) -> Any:
    """Read model / сущность → JSON-совместимое значение через schema."""
    if schema is None:
        return jsonable_encoder(data)
    if isinstance(data, list):
        return [schema.model_validate(item).model_dump(mode="json", by_alias=True) for item in data]
    return schema.model_validate(data).model_dump(mode="json", by_alias=True)


def meta_to_dict(meta: PageMeta) -> Dict[str, int]:
    return {"page": meta.page, "limit": meta.limit, "total": meta.total, "totalPages": meta.total_pages}


def envelope(
    success: bool,
    message: str,
    data: Any = None,
    errors: Optional[List[Any]] = None,
    meta: Optional[PageMeta] = None
) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": success, "message": message}
    if data is not None:
        body["data"] = data
    if errors:
        body["errors"] = errors
    if meta is not None:
        body["meta"] = meta_to_dict(meta)
    return body


def to_response(result: ServiceResult, schema: Optional[Type[BaseModel]] = None) -> JSONResponse:
    """ServiceResult → JSONResponse со статусом результата."""
    data = serialize(result.data, schema) if result.success and result.data is not None else None
    return JSONResponse(
        status_code=result.status_code,
        content=envelope(result.success, result.message, data, result.errors, result.meta),
    )


def error_response(status_code: int, message: str, errors: Optional[List[Any]] = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content=envelope(False, message, errors=errors))


# =============================================================================
# Exception handlers
# =============================================================================

def _field_name(location) -> str:
    parts = [str(part) for part in location if str(part) not in _LOCATION_PREFIXES]
    return ".".join(parts) or "request"


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Все ошибки валидации запроса в одном ответе (400)."""
    errors = [
        {"field": _field_name(error.get("loc", ())), "message": error.get("msg", "Invalid value")}
        for error in exc.errors()
    ]
    return error_response(400, "Validation failed", errors)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    return error_response(exc.status_code, exc.message, exc.errors or None)


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return error_response(500, "Internal server error", ["An unexpected error occurred"])
