"""
Unit tests для ServiceResult, service_operation и перевода ошибок БД.
"""

from unittest.mock import AsyncMock

import pytest
from sqlalchemy.exc import IntegrityError, OperationalError

from src.application.results import PageMeta, ServiceResult, service_operation
from src.shared.exceptions.domain_exceptions import ConflictError, NotFoundError, ValidationError
from src.shared.exceptions.infrastructure_exceptions import DatabaseError, translate_database_error


def integrity_error(message: str) -> IntegrityError:
    return IntegrityError("INSERT INTO tags ...", {}, Exception(message))


def test_page_meta_total_pages():
    assert PageMeta.build(total=21, page=1, limit=10).total_pages == 3
    assert PageMeta.build(total=0, page=1, limit=10).total_pages == 0
    assert PageMeta.build(total=10, page=1, limit=10).total_pages == 1


def test_from_error_uses_message_when_no_errors():
    result = ServiceResult.from_error(NotFoundError("Article"))

    assert result.success is False
    assert result.status_code == 404
    assert result.message == "Article not found"
    assert result.errors == ["Article not found"]


def test_translate_unique_violation():
    error = translate_database_error(integrity_error('duplicate key value violates unique constraint "tags_slug_key"'))

    assert isinstance(error, ConflictError)
    assert error.status_code == 409


def test_translate_sqlite_unique_violation():
    error = translate_database_error(integrity_error("UNIQUE constraint failed: tags.slug"))

    assert error.status_code == 409


def test_translate_foreign_key_violation():
    error = translate_database_error(integrity_error("FOREIGN KEY constraint failed"))

    assert error.status_code == 400
    assert error.message == "Referenced resource not found"


def test_translate_other_database_error():
    error = translate_database_error(OperationalError("SELECT 1", {}, Exception("connection refused")))

    assert isinstance(error, DatabaseError)
    assert error.status_code == 500
    assert error.errors == ["An unexpected error occurred"]


class Service:
    def __init__(self, impl):
        self.impl = impl

    @service_operation("Failed to do work")
    async def work(self, value):
        return await self.impl(value)


@pytest.mark.asyncio
async def test_service_operation_passes_result():
    impl = AsyncMock(return_value=ServiceResult.ok({"id": 1}, "Done"))

    result = await Service(impl).work(5)

    impl.assert_awaited_once_with(5)
    assert result.success is True
    assert result.data == {"id": 1}


@pytest.mark.asyncio
async def test_service_operation_maps_app_error():
    impl = AsyncMock(side_effect=ValidationError.single("title", "title is required"))

    result = await Service(impl).work(5)

    assert result.status_code == 400
    assert result.message == "Validation failed"
    assert result.errors == [{"field": "title", "message": "title is required"}]


@pytest.mark.asyncio
async def test_service_operation_maps_database_error():
    impl = AsyncMock(side_effect=integrity_error("UNIQUE constraint failed: articles.slug"))

    result = await Service(impl).work(5)

    assert result.status_code == 409
    assert result.success is False


@pytest.mark.asyncio
async def test_service_operation_hides_unexpected_error():
    """Тест: неожиданное исключение → 500 без деталей."""
    impl = AsyncMock(side_effect=RuntimeError("secret internals"))

    result = await Service(impl).work(5)

    assert result.status_code == 500
    assert result.message == "Failed to do work"
    assert result.errors == ["An unexpected error occurred"]


@pytest.mark.asyncio
async def test_service_operation_conflict_errors_kept():
    impl = AsyncMock(side_effect=ConflictError("Cannot delete category", errors=["Category has subcategories"]))

    result = await Service(impl).work(1)

    assert result.status_code == 409
    assert result.errors == ["Category has subcategories"]


@pytest.mark.asyncio
async def test_service_operation_hides_driver_message():
    """Тест: текст ошибки драйвера не попадает в ответ."""
    impl = AsyncMock(side_effect=integrity_error("NOT NULL constraint failed: articles.is_published"))

    result = await Service(impl).work(5)

    assert result.status_code == 500
    assert result.message == "Database operation failed"
    assert result.errors == ["An unexpected error occurred"]
