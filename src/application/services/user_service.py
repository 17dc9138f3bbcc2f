"""
Application Service для пользователей.

Пароль хэшируется bcrypt до создания сущности; наружу
отдаётся только публичная проекция.
"""

import logging
from typing import Optional

import bcrypt
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.commands.user_commands import CreateUserCommand
from src.application.queries.list_queries import PageRequest
from src.application.results import PageMeta, ServiceResult, service_operation
from src.domain.entities.user import User
from src.domain.repositories.user_repository import IUserRepository
from src.domain.value_objects.user_role import UserRole
from src.infrastructure.persistence.unit_of_work import UnitOfWork
from src.shared.exceptions.domain_exceptions import ConflictError, NotFoundError, ValidationError

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


class UserService:
    """Сотрудники редакции."""

    def __init__(self, session: AsyncSession, repository: IUserRepository):
        self.session = session
        self.repository = repository

    @service_operation("Failed to retrieve users")
    async def list_users(self, window: PageRequest, role: Optional[UserRole] = None) -> ServiceResult:
        users, total = await self.repository.find_page(window, role=role)
        return ServiceResult.ok(
            users,
            message="Users retrieved successfully",
            meta=PageMeta.build(total, window.page, window.limit),
        )

    @service_operation("Failed to retrieve user")
    async def get_user(self, user_id: int) -> ServiceResult:
        user = await self.repository.find_public_by_id(user_id)
        if user is None:
            raise NotFoundError("User", "User with this ID does not exist")
        return ServiceResult.ok(user, message="User retrieved successfully")

    @service_operation("Failed to create user")
    async def create_user(self, command: CreateUserCommand) -> ServiceResult:
        if not command.password or len(command.password) < MIN_PASSWORD_LENGTH:
            raise ValidationError.single(
                "password", f"password must be at least {MIN_PASSWORD_LENGTH} characters long"
            )

        user = User(
            email=command.email.strip().lower(),
            password_hash=hash_password(command.password),
            name=command.name,
            name_bn=command.name_bn,
            bio=command.bio,
            avatar=command.avatar,
            role=command.role,
        )
        if await self.repository.exists_by_email(user.email):
            raise ConflictError(
                "User with this email already exists",
                errors=[{"field": "email", "message": "email is already registered"}],
            )

        async with UnitOfWork(self.session):
            created = await self.repository.add(user)

        logger.info(f"User created: id={created.id}, role={created.role.value}")
        return ServiceResult.ok(created, message="User created successfully", status_code=201)
