"""
PostgreSQL Repository реализация для пользователей.

Пароль пишется, но никогда не читается наружу: все выборки
идут по колонкам публичной проекции.
"""

from typing import List, Optional, Tuple

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.queries.list_queries import PageRequest
from src.domain.entities.user import User
from src.domain.read_models import UserPublic
from src.domain.repositories.user_repository import IUserRepository
from src.domain.value_objects.user_role import UserRole
from src.infrastructure.persistence.mappers import USER_PUBLIC_COLUMNS, row_to_user_public
from src.infrastructure.persistence.models import UserModel
from src.infrastructure.persistence.query_builder import paginate


class UserRepositoryImpl(IUserRepository):
    """Адаптер пользователей."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def add(self, user: User) -> UserPublic:
        model = UserModel(
            email=user.email,
            password=user.password_hash,
            name=user.name,
            name_bn=user.name_bn,
            bio=user.bio,
            avatar=user.avatar,
            role=user.role.value,
            is_active=user.is_active,
            created_at=user.created_at,
            updated_at=user.updated_at,
        )
        self.session.add(model)
        await self.session.flush()
        return await self.find_public_by_id(model.id)

    async def find_public_by_id(self, user_id: int) -> Optional[UserPublic]:
        result = await self.session.execute(
            select(*USER_PUBLIC_COLUMNS).where(UserModel.id == user_id).limit(1)
        )
        row = result.first()
        return row_to_user_public(row) if row else None

    async def exists_by_email(self, email: str) -> bool:
        result = await self.session.execute(
            select(func.count(UserModel.id)).where(func.lower(UserModel.email) == email.lower())
        )
        return result.scalar() > 0

    async def find_page(
        self,
        window: PageRequest,
        role: Optional[UserRole] = None
    ) -> Tuple[List[UserPublic], int]:
        conditions = [UserModel.is_active.is_(True)]
        if role is not None:
            conditions.append(UserModel.role == role.value)

        query = select(*USER_PUBLIC_COLUMNS).where(*conditions).order_by(UserModel.name.asc(), UserModel.id.asc())
        rows = (await self.session.execute(paginate(query, window))).all()
        total = (await self.session.execute(select(func.count(UserModel.id)).where(*conditions))).scalar() or 0
        return [row_to_user_public(row) for row in rows], total
