"""
Infrastructure Exceptions

Исключения инфраструктурного слоя и перевод ошибок БД
в доменную таксономию.
"""

import logging

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from src.shared.exceptions.domain_exceptions import AppError, ConflictError

logger = logging.getLogger(__name__)


class InfrastructureException(AppError):
    """Базовое исключение инфраструктуры."""
    pass


class DatabaseError(InfrastructureException):
    """Ошибка работы с БД."""
    pass


def translate_database_error(error: SQLAlchemyError) -> AppError:
    """
    Преобразовать ошибку SQLAlchemy в исключение приложения.

    Сопоставление идёт по тексту исходной ошибки драйвера:
    - duplicate key / unique constraint → ConflictError (409)
    - foreign key constraint → 400 "Referenced resource not found"
    - всё остальное → DatabaseError (500)

    Текст ошибки драйвера остаётся в логе и клиенту не отдаётся.
    """
    original = getattr(error, "orig", None) or error
    text = str(original).lower()

    if isinstance(error, IntegrityError) or "constraint" in text:
        if "duplicate key" in text or "unique constraint" in text:
            return ConflictError("Resource already exists")
        if "foreign key constraint" in text:
            return AppError("Referenced resource not found", status_code=400)

    logger.error(f"Database error: {original}")
    return DatabaseError("Database operation failed", errors=["An unexpected error occurred"])
