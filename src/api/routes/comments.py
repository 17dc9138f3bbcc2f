"""
FastAPI Routes для комментариев и модерации.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, Request

from src.api.dependencies import get_comment_service
from src.api.middleware import client_id
from src.api.responses import to_response
from src.api.schemas.comment_schemas import (
    CommentListItemResponse,
    CommentResponse,
    CreateCommentRequest,
    ModerateCommentRequest,
    UpdateCommentRequest,
)
from src.application.commands.comment_commands import (
    CreateCommentCommand, ModerateCommentCommand, UpdateCommentCommand
)
from src.application.queries.list_queries import CommentFilters, PageRequest
from src.application.services.comment_service import CommentService
from src.infrastructure.config.settings import get_settings

router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("")
async def list_comments(
    article_id: Optional[int] = Query(None, alias="articleId"),
    approved: Optional[bool] = None,
    reported: Optional[bool] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: int = 1,
    limit: Optional[int] = None,
    service: CommentService = Depends(get_comment_service)
):
    """Все комментарии (для модерации)."""
    filters = CommentFilters(
        article_id=article_id,
        is_approved=approved,
        is_reported=reported,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit if limit is not None else get_settings().comment_page_size,
    )
    return to_response(await service.list_comments(filters), CommentListItemResponse)


@router.get("/pending")
async def list_pending_comments(
    page: int = 1,
    limit: Optional[int] = None,
    service: CommentService = Depends(get_comment_service)
):
    """Очередь модерации."""
    window = PageRequest(page, limit if limit is not None else get_settings().comment_page_size)
    return to_response(await service.get_pending(window), CommentListItemResponse)


@router.post("", status_code=201)
async def create_comment(
    body: CreateCommentRequest,
    request: Request,
    service: CommentService = Depends(get_comment_service)
):
    command = CreateCommentCommand(
        **body.model_dump(),
        ip_address=client_id(request),
        user_agent=request.headers.get("user-agent"),
    )
    return to_response(await service.create_comment(command), CommentResponse)


@router.put("/{comment_id}")
async def update_comment(
    comment_id: int,
    body: UpdateCommentRequest,
    service: CommentService = Depends(get_comment_service)
):
    command = UpdateCommentCommand(comment_id=comment_id, content=body.content, content_bn=body.content_bn)
    return to_response(await service.update_comment(command), CommentResponse)


@router.delete("/{comment_id}")
async def delete_comment(comment_id: int, service: CommentService = Depends(get_comment_service)):
    return to_response(await service.delete_comment(comment_id))


@router.post("/{comment_id}/moderate")
async def moderate_comment(
    comment_id: int,
    body: ModerateCommentRequest,
    service: CommentService = Depends(get_comment_service)
):
    """approve | reject (другое значение action → 400 до вызова сервиса)."""
    command = ModerateCommentCommand(comment_id=comment_id, action=body.action, moderator_id=body.moderator_id)
    return to_response(await service.moderate_comment(command), CommentResponse)


@router.post("/{comment_id}/report")
async def report_comment(comment_id: int, service: CommentService = Depends(get_comment_service)):
    return to_response(await service.report_comment(comment_id), CommentResponse)
