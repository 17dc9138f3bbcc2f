"""
Database configuration.

Пул соединений ограничен (pool_size + max_overflow): запросы ждут
свободное соединение не дольше pool_timeout. На PostgreSQL каждому
соединению выставляется statement_timeout.
"""

from typing import AsyncIterator

from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from src.infrastructure.config.settings import Settings, get_settings


def build_engine(settings: Settings) -> AsyncEngine:
    """Создать async engine по настройкам."""
    options = {"echo": settings.debug}

    if settings.is_postgres():
        options.update(
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            pool_timeout=settings.db_pool_timeout,
            pool_pre_ping=True,
            connect_args={
                "server_settings": {"statement_timeout": str(settings.db_statement_timeout_ms)}
            },
        )

    return create_async_engine(settings.get_async_database_url(), **options)


settings = get_settings()

engine = build_engine(settings)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False
)


async def get_db_session() -> AsyncIterator[AsyncSession]:
    """Dependency для получения DB session."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        finally:
            await session.close()


async def check_database_connection(session: AsyncSession) -> bool:
    """Проба соединения с БД (SELECT 1)."""
    result = await session.execute(text("SELECT 1"))
    return result.scalar() == 1
