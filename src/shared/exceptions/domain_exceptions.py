"""
Domain Exceptions

Исключения доменного и прикладного слоя.
Каждое исключение знает свой HTTP статус, чтобы API слой
мог построить конверт ответа без дополнительного маппинга.
"""

from typing import List, Optional, Union

FieldError = dict
ErrorItem = Union[str, FieldError]


class AppError(Exception):
    """Базовое исключение приложения (по умолчанию 500)."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        errors: Optional[List[ErrorItem]] = None
    ):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.errors: List[ErrorItem] = list(errors or [])


class ValidationError(AppError):
    """
    Ошибка валидации (400).

    Содержит список нарушений вида {"field": ..., "message": ...}.
    """

    status_code = 400

    def __init__(self, errors: List[FieldError], message: str = "Validation failed"):
        super().__init__(message, errors=errors)

    @classmethod
    def single(cls, field: str, message: str) -> "ValidationError":
        """Ошибка по одному полю."""
        return cls([{"field": field, "message": message}])


class NotFoundError(AppError):
    """Сущность не найдена (404)."""

    status_code = 404

    def __init__(self, resource: str, detail: Optional[str] = None):
        super().__init__(
            f"{resource} not found",
            errors=[detail] if detail else None
        )
        self.resource = resource


class ConflictError(AppError):
    """Конфликт состояния: дубликат или заблокированное удаление (409)."""

    status_code = 409

    def __init__(self, message: str, errors: Optional[List[ErrorItem]] = None):
        super().__init__(message, errors=errors)


class UnauthorizedError(AppError):
    """Не аутентифицирован (401)."""

    status_code = 401

    def __init__(self, message: str = "Unauthorized"):
        super().__init__(message)


class ForbiddenError(AppError):
    """Нет прав (403)."""

    status_code = 403

    def __init__(self, message: str = "Forbidden"):
        super().__init__(message)
