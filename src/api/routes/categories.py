"""
FastAPI Routes для рубрик.
"""

from datetime import datetime
from typing import List, Optional

from fastapi import APIRouter, Depends, Query

from src.api.dependencies import get_article_service, get_category_service
from src.api.responses import to_response
from src.api.routes.articles import parse_id_list
from src.api.schemas.article_schemas import ArticleListItemResponse
from src.api.schemas.category_schemas import (
    CategoryDetailResponse,
    CategoryResponse,
    CategoryTreeResponse,
    CategoryWithCountResponse,
    CreateCategoryRequest,
    UpdateCategoryRequest,
)
from src.application.commands.category_commands import CreateCategoryCommand, UpdateCategoryCommand
from src.application.queries.list_queries import ArticleFilters
from src.application.services.article_service import ArticleService
from src.application.services.category_service import CategoryService
from src.infrastructure.config.settings import get_settings

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("")
async def get_categories(service: CategoryService = Depends(get_category_service)):
    """Активные рубрики деревом."""
    return to_response(await service.get_tree(), CategoryTreeResponse)


@router.get("/with-count")
async def get_categories_with_count(service: CategoryService = Depends(get_category_service)):
    return to_response(await service.get_with_counts(), CategoryWithCountResponse)


@router.get("/popular")
async def get_popular_categories(
    limit: int = Query(10, ge=1, le=100),
    service: CategoryService = Depends(get_category_service)
):
    return to_response(await service.get_popular(limit), CategoryWithCountResponse)


@router.get("/{slug}")
async def get_category(slug: str, service: CategoryService = Depends(get_category_service)):
    return to_response(await service.get_by_slug(slug), CategoryDetailResponse)


@router.get("/{slug}/articles")
async def get_category_articles(
    slug: str,
    query: Optional[str] = None,
    q: Optional[str] = None,
    featured: Optional[bool] = None,
    breaking: Optional[bool] = None,
    date_from: Optional[datetime] = Query(None, alias="dateFrom"),
    date_to: Optional[datetime] = Query(None, alias="dateTo"),
    tags: Optional[List[str]] = Query(None),
    sort_by: Optional[str] = Query(None, alias="sortBy"),
    sort_order: Optional[str] = Query(None, alias="sortOrder"),
    page: int = 1,
    limit: Optional[int] = None,
    service: ArticleService = Depends(get_article_service)
):
    """Опубликованные статьи рубрики."""
    filters = ArticleFilters(
        query=query or q,
        is_featured=featured,
        is_breaking=breaking,
        date_from=date_from,
        date_to=date_to,
        tag_ids=parse_id_list(tags, "tags"),
        sort_by=sort_by,
        sort_order=sort_order,
        page=page,
        limit=limit if limit is not None else get_settings().default_page_size,
    )
    return to_response(await service.list_by_category(slug, filters), ArticleListItemResponse)


@router.post("", status_code=201)
async def create_category(
    request: CreateCategoryRequest,
    service: CategoryService = Depends(get_category_service)
):
    command = CreateCategoryCommand(**request.model_dump())
    return to_response(await service.create_category(command), CategoryResponse)


@router.put("/{category_id}")
async def update_category(
    category_id: int,
    request: UpdateCategoryRequest,
    service: CategoryService = Depends(get_category_service)
):
    command = UpdateCategoryCommand(category_id=category_id, changes=request.model_dump(exclude_unset=True))
    return to_response(await service.update_category(command), CategoryResponse)


@router.delete("/{category_id}")
async def delete_category(category_id: int, service: CategoryService = Depends(get_category_service)):
    """Удалить рубрику (409, если есть статьи или подрубрики)."""
    return to_response(await service.delete_category(category_id))
