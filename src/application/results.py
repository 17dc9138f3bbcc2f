"""
Единый результат операций сервисов.

Сервисы не пробрасывают исключения наружу: любая ошибка превращается
в неуспешный ServiceResult со статусом и списком ошибок. HTTP слой
только переводит результат в JSON конверт.
"""

import functools
import logging
import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Union

from sqlalchemy.exc import SQLAlchemyError

from src.shared.exceptions.domain_exceptions import AppError
from src.shared.exceptions.infrastructure_exceptions import translate_database_error

logger = logging.getLogger(__name__)

ErrorItem = Union[str, Dict[str, str]]


@dataclass
class PageMeta:
    """Метаданные пагинации."""

    page: int
    limit: int
    total: int
    total_pages: int

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        return cls(
            page=page,
            limit=limit,
            total=total,
            total_pages=math.ceil(total / limit) if limit else 0,
        )


@dataclass
class ServiceResult:
    """
    Результат операции сервиса.

    Атрибуты:
        success: Успех операции
        message: Сообщение для клиента
        data: Полезная нагрузка (сущность, read model, список)
        errors: Строки или {field, message}
        meta: Пагинация для списков
        status_code: HTTP статус, в который отобразится результат
    """

    success: bool
    message: str
    data: Any = None
    errors: Optional[List[ErrorItem]] = None
    meta: Optional[PageMeta] = None
    status_code: int = 200

    @classmethod
    def ok(
        cls,
        data: Any = None,
        message: str = "OK",
        meta: Optional[PageMeta] = None,
        status_code: int = 200
    ) -> "ServiceResult":
        return cls(success=True, message=message, data=data, meta=meta, status_code=status_code)

    @classmethod
    def fail(
        cls,
        message: str,
        errors: Optional[List[ErrorItem]] = None,
        status_code: int = 400
    ) -> "ServiceResult":
        return cls(success=False, message=message, errors=errors, status_code=status_code)

    @classmethod
    def from_error(cls, error: AppError) -> "ServiceResult":
        errors = error.errors if error.errors else [error.message]
        return cls.fail(error.message, errors=errors, status_code=error.status_code)


def service_operation(failure_message: str):
    """
    Декоратор публичных методов сервиса.

    - AppError → неуспешный результат с его статусом
    - SQLAlchemyError → translate_database_error (409 / 400 / 500)
    - Любое другое исключение → 500 с failure_message (логируется с traceback)
    """

    def decorator(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs) -> ServiceResult:
            try:
                return await func(*args, **kwargs)
            except AppError as e:
                if e.status_code >= 500:
                    logger.error(f"{failure_message}: {e.message}")
                else:
                    logger.info(f"{func.__qualname__}: {e.message} ({e.status_code})")
                return ServiceResult.from_error(e)
            except SQLAlchemyError as e:
                translated = translate_database_error(e)
                logger.error(f"{failure_message}: {translated.message}")
                return ServiceResult.from_error(translated)
            except Exception as e:
                logger.exception(f"{failure_message}: {e}")
                return ServiceResult.fail(
                    failure_message,
                    errors=["An unexpected error occurred"],
                    status_code=500,
                )

        return wrapper

    return decorator
