"""
FastAPI Dependencies для DI.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.application.handlers.article_command_handler import ArticleCommandHandler
from src.application.services.article_service import ArticleService
from src.application.services.category_service import CategoryService
from src.application.services.comment_service import CommentService
from src.application.services.tag_service import TagService
from src.application.services.user_service import UserService
from src.infrastructure.config.database import AsyncSessionLocal, get_db_session
from src.infrastructure.config.settings import Settings, get_settings
from src.infrastructure.persistence.article_repository_impl import ArticleRepositoryImpl
from src.infrastructure.persistence.category_repository_impl import CategoryRepositoryImpl
from src.infrastructure.persistence.comment_repository_impl import CommentRepositoryImpl
from src.infrastructure.persistence.tag_repository_impl import TagRepositoryImpl
from src.infrastructure.persistence.user_repository_impl import UserRepositoryImpl


def get_session_factory() -> async_sessionmaker:
    """
    Фабрика сессий для фоновых задач.

    Сессия запроса закрывается до запуска BackgroundTasks,
    поэтому фоновая работа открывает свою.
    """
    return AsyncSessionLocal


def build_article_service(session: AsyncSession) -> ArticleService:
    """Собрать ArticleService поверх сессии (запрос или фоновая задача)."""
    repository = ArticleRepositoryImpl(session)
    command_handler = ArticleCommandHandler(session, repository, TagRepositoryImpl(session))
    return ArticleService(session, repository, CategoryRepositoryImpl(session), command_handler)


async def get_article_service(
    session: AsyncSession = Depends(get_db_session)
) -> ArticleService:
    """DI для service."""
    return build_article_service(session)


async def get_category_service(
    session: AsyncSession = Depends(get_db_session)
) -> CategoryService:
    return CategoryService(session, CategoryRepositoryImpl(session))


async def get_comment_service(
    session: AsyncSession = Depends(get_db_session),
    settings: Settings = Depends(get_settings)
) -> CommentService:
    return CommentService(
        session,
        CommentRepositoryImpl(session),
        ArticleRepositoryImpl(session),
        auto_approve=settings.comment_auto_approve,
    )


async def get_tag_service(
    session: AsyncSession = Depends(get_db_session)
) -> TagService:
    return TagService(session, TagRepositoryImpl(session))


async def get_user_service(
    session: AsyncSession = Depends(get_db_session)
) -> UserService:
    return UserService(session, UserRepositoryImpl(session))
