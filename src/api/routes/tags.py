"""
FastAPI Routes для тегов.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_tag_service
from src.api.responses import to_response
from src.api.schemas.tag_schemas import (
    CreateTagRequest, TagResponse, TagWithCountResponse, UpdateTagRequest
)
from src.application.commands.tag_commands import CreateTagCommand, UpdateTagCommand
from src.application.queries.list_queries import TagListQuery
from src.application.services.tag_service import TagService

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("")
async def list_tags(
    query: Optional[str] = None,
    q: Optional[str] = None,
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query("asc", alias="sortOrder"),
    page: int = 1,
    limit: int = 50,
    service: TagService = Depends(get_tag_service)
):
    params = TagListQuery(
        query=query or q,
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit,
    )
    return to_response(await service.list_tags(params), TagWithCountResponse)


@router.get("/popular")
async def get_popular_tags(
    limit: int = Query(20, ge=1, le=100),
    service: TagService = Depends(get_tag_service)
):
    return to_response(await service.get_popular(limit), TagWithCountResponse)


@router.get("/{slug}")
async def get_tag(slug: str, service: TagService = Depends(get_tag_service)):
    return to_response(await service.get_by_slug(slug), TagWithCountResponse)


@router.post("", status_code=201)
async def create_tag(request: CreateTagRequest, service: TagService = Depends(get_tag_service)):
    return to_response(await service.create_tag(CreateTagCommand(**request.model_dump())), TagResponse)


@router.put("/{tag_id}")
async def update_tag(
    tag_id: int,
    request: UpdateTagRequest,
    service: TagService = Depends(get_tag_service)
):
    command = UpdateTagCommand(tag_id=tag_id, changes=request.model_dump(exclude_unset=True))
    return to_response(await service.update_tag(command), TagResponse)


@router.delete("/{tag_id}")
async def delete_tag(tag_id: int, service: TagService = Depends(get_tag_service)):
    """Удалить тег (409, пока он привязан к статьям)."""
    return to_response(await service.delete_tag(tag_id))
