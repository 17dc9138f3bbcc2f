"""
Unit of Work поверх AsyncSession.

Многострочные записи (статья + связи с тегами, ответ + счётчик
родителя) выполняются атомарно: commit при успехе, rollback при
любом исключении.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

logger = logging.getLogger(__name__)


class UnitOfWork:
    """
    Транзакционная граница для записи.

    Использование:
        async with UnitOfWork(session):
            await repo.add(article)
            await repo.replace_tags(article.id, tag_ids)
    """

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self) -> "UnitOfWork":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if exc_type is None:
            await self.session.commit()
            return

        logger.debug(f"Rolling back unit of work: {exc_type.__name__}")
        await self.session.rollback()
