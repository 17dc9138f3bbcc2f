"""
FastAPI Routes для пользователей.
"""

from typing import Optional

from fastapi import APIRouter, Depends

from src.api.dependencies import get_user_service
from src.api.responses import to_response
from src.api.schemas.user_schemas import CreateUserRequest, UserPublicResponse
from src.application.commands.user_commands import CreateUserCommand
from src.application.queries.list_queries import PageRequest
from src.application.services.user_service import UserService
from src.domain.value_objects.user_role import UserRole

router = APIRouter(prefix="/users", tags=["users"])


@router.get("")
async def list_users(
    role: Optional[UserRole] = None,
    page: int = 1,
    limit: int = 10,
    service: UserService = Depends(get_user_service)
):
    result = await service.list_users(PageRequest(page, limit), role=role)
    return to_response(result, UserPublicResponse)


@router.get("/{user_id}")
async def get_user(user_id: int, service: UserService = Depends(get_user_service)):
    return to_response(await service.get_user(user_id), UserPublicResponse)


@router.post("", status_code=201)
async def create_user(request: CreateUserRequest, service: UserService = Depends(get_user_service)):
    command = CreateUserCommand(**request.model_dump())
    return to_response(await service.create_user(command), UserPublicResponse)
