"""
FastAPI Routes для статей.
"""

import logging
from datetime import datetime
from typing import List, Optional, Tuple

from fastapi import APIRouter, BackgroundTasks, Depends, Query, Request
from sqlalchemy.ext.asyncio import async_sessionmaker

from src.api.dependencies import (
    build_article_service, get_article_service, get_comment_service, get_session_factory
)
from src.api.middleware import client_id
from src.api.responses import to_response
from src.api.schemas.article_schemas import (
    ArticleDetailResponse, ArticleListItemResponse, CreateArticleRequest, UpdateArticleRequest
)
from src.api.schemas.comment_schemas import CommentThreadResponse
from src.application.commands.article_commands import CreateArticleCommand, UpdateArticleCommand
from src.application.queries.list_queries import ArticleFilters, PageRequest
from src.application.services.article_service import ArticleService
from src.application.services.comment_service import CommentService
from src.infrastructure.config.settings import get_settings
from src.shared.exceptions.domain_exceptions import ValidationError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/articles", tags=["articles"])


def parse_id_list(values: Optional[List[str]], field: str) -> Tuple[int, ...]:
    """Список id из повторяющегося параметра и/или через запятую: tags=1,2&tags=3."""
    ids = []
    for value in values or []:
        for part in value.split(","):
            part = part.strip()
            if not part:
                continue
            if not part.isdigit():
                raise ValidationError.single(field, f"'{part}' is not a valid id")
            ids.append(int(part))
    return tuple(ids)


async def record_article_view(
    session_factory: async_sessionmaker,
    article_id: int,
    ip_address: Optional[str],
    user_agent: Optional[str],
    referrer: Optional[str]
) -> None:
    """Фоновый инкремент просмотров. Ошибка не влияет на уже отданный ответ."""
    try:
        async with session_factory() as session:
            service = build_article_service(session)
            result = await service.increment_view_count(article_id, ip_address, user_agent, referrer)
        if not result.success:
            logger.warning(f"View count not updated for article {article_id}: {result.message}")
    except Exception as e:
        logger.error(f"View count update failed for article {article_id}: {e}")


@router.get("")
async def list_articles(
    query: Optional[str] = None,
    q: Optional[str] = None,
    category: Optional[int] = None,
    author: Optional[int] = None,
    status: Optional[str] = None,
    published: Optional[bool] = None,
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
    """Получить список статей (фильтры, сортировка, пагинация)."""
    filters = ArticleFilters(
        query=query or q,
        category_id=category,
        author_id=author,
        status=status,
        is_published=published,
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
    result = await service.list_articles(filters)
    return to_response(result, ArticleListItemResponse)


@router.get("/featured")
async def get_featured_articles(
    limit: int = 5,
    service: ArticleService = Depends(get_article_service)
):
    """Избранные статьи."""
    return to_response(await service.get_featured(limit), ArticleListItemResponse)


@router.get("/breaking")
async def get_breaking_news(
    limit: int = 3,
    service: ArticleService = Depends(get_article_service)
):
    """Срочные новости."""
    return to_response(await service.get_breaking(limit), ArticleListItemResponse)


@router.get("/{article_id}/comments")
async def get_article_comments(
    article_id: int,
    page: int = 1,
    limit: Optional[int] = None,
    service: CommentService = Depends(get_comment_service)
):
    """Одобренные комментарии статьи ветками."""
    window = PageRequest(page, limit if limit is not None else get_settings().comment_page_size)
    result = await service.get_article_comments(article_id, window)
    return to_response(result, CommentThreadResponse)


@router.get("/{slug}")
async def get_article(
    slug: str,
    request: Request,
    background_tasks: BackgroundTasks,
    service: ArticleService = Depends(get_article_service),
    session_factory: async_sessionmaker = Depends(get_session_factory)
):
    """Получить статью по slug и учесть просмотр."""
    result = await service.get_article_by_slug(slug)
    if result.success:
        # Ответ уже учитывает этот просмотр, запись в БД идёт в фоне
        result.data.view_count += 1
        background_tasks.add_task(
            record_article_view,
            session_factory,
            result.data.id,
            client_id(request),
            request.headers.get("user-agent"),
            request.headers.get("referer"),
        )
    return to_response(result, ArticleDetailResponse)


@router.post("", status_code=201)
async def create_article(
    request: CreateArticleRequest,
    service: ArticleService = Depends(get_article_service)
):
    """Создать статью."""
    values = request.model_dump(exclude={"tag_ids"})
    command = CreateArticleCommand(**values, tag_ids=tuple(request.tag_ids))
    return to_response(await service.create_article(command), ArticleDetailResponse)


@router.put("/{article_id}")
async def update_article(
    article_id: int,
    request: UpdateArticleRequest,
    service: ArticleService = Depends(get_article_service)
):
    """Частично обновить статью."""
    changes = request.model_dump(exclude_unset=True)
    tag_ids = changes.pop("tag_ids", None)
    command = UpdateArticleCommand(
        article_id=article_id,
        changes=changes,
        tag_ids=tuple(tag_ids) if tag_ids is not None else None,
    )
    return to_response(await service.update_article(command), ArticleDetailResponse)


@router.delete("/{article_id}")
async def delete_article(
    article_id: int,
    service: ArticleService = Depends(get_article_service)
):
    return to_response(await service.delete_article(article_id))
