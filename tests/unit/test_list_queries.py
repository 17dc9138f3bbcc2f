"""
Unit tests для объектов запросов списков.
"""

from datetime import datetime, timedelta, timezone

import pytest
from src.application.queries.list_queries import (
    ARTICLE_SORT_FIELDS, MAX_PAGE_SIZE, ArticleFilters, CommentFilters, PageRequest, TagListQuery,
    clamp_limit, clamp_page, resolve_sort_field
)
from src.domain.value_objects.sort_order import SortOrder


@pytest.mark.parametrize("page, expected", [(None, 1), (0, 1), (-3, 1), (1, 1), (7, 7)])
def test_clamp_page(page, expected):
    assert clamp_page(page) == expected


@pytest.mark.parametrize("limit, expected", [(None, 10), (0, 1), (-5, 1), (25, 25), (500, MAX_PAGE_SIZE)])
def test_clamp_limit(limit, expected):
    assert clamp_limit(limit) == expected


def test_page_request_offset():
    window = PageRequest(page=3, limit=20)

    assert window.offset == 40


def test_page_request_normalized():
    window = PageRequest(page=0, limit=500)

    assert (window.page, window.limit) == (1, 100)


def test_sort_field_from_allow_list():
    assert resolve_sort_field("viewCount", ARTICLE_SORT_FIELDS, "publishedAt") == "view_count"
    assert resolve_sort_field("view_count", ARTICLE_SORT_FIELDS, "publishedAt") == "view_count"


def test_unknown_sort_field_falls_back():
    """Тест: произвольный ввод не попадает в ORDER BY."""
    field = resolve_sort_field("title; DROP TABLE articles", ARTICLE_SORT_FIELDS, "publishedAt")

    assert field == "published_at"


def test_article_filters_defaults():
    filters = ArticleFilters()

    assert filters.sort_by == "published_at"
    assert filters.sort_order is SortOrder.DESC
    assert filters.is_featured is None
    assert filters.tag_ids == ()


def test_article_filters_normalization():
    filters = ArticleFilters(
        query="   ",
        tag_ids=[3, 1, 3],
        sort_order="ASC",
        page=-1,
        limit=1000,
    )

    assert filters.query is None
    assert filters.tag_ids == (3, 1)
    assert filters.sort_order is SortOrder.ASC
    assert (filters.page, filters.limit) == (1, 100)


def test_article_filters_dates_become_naive_utc():
    dhaka = timezone(timedelta(hours=6))
    filters = ArticleFilters(date_from=datetime(2024, 1, 1, 6, 0, tzinfo=dhaka))

    assert filters.date_from == datetime(2024, 1, 1, 0, 0)


def test_unknown_sort_order_is_desc():
    assert SortOrder.parse("sideways") is SortOrder.DESC
    assert SortOrder.parse(None) is SortOrder.DESC


def test_comment_and_tag_defaults():
    assert CommentFilters().limit == 20
    assert CommentFilters().sort_by == "created_at"
    assert TagListQuery().limit == 50
    assert TagListQuery().sort_order is SortOrder.ASC
