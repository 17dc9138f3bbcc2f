"""
Unit tests для Article entity.
"""

from datetime import datetime

import pytest
from src.domain.entities.article import Article
from src.domain.value_objects.article_status import ArticleStatus
from src.shared.exceptions.domain_exceptions import ValidationError


def test_article_creation():
    """Тест создания статьи."""
    article = Article(
        title="Team Wins!",
        slug="team-wins",
        content="Match report",
        title_bn="দল জিতেছে!"
    )

    assert article.title == "Team Wins!"
    assert article.title_bn == "দল জিতেছে!"
    assert article.status == ArticleStatus.DRAFT
    assert article.is_published is False
    assert article.published_at is None
    assert article.view_count == 0
    assert article.priority == 5
    assert article.gallery == []


def test_article_status_from_string():
    article = Article(title="T", slug="t", content="C", status="review")

    assert article.status is ArticleStatus.REVIEW


def test_article_validation_collects_all_errors():
    """Тест валидации - все нарушения сразу."""
    with pytest.raises(ValidationError) as exc_info:
        Article(title="", slug="", content="  ", priority=11)

    fields = [error["field"] for error in exc_info.value.errors]
    assert fields == ["title", "slug", "content", "priority"]
    assert exc_info.value.status_code == 400


def test_article_validation_title_too_long():
    with pytest.raises(ValidationError) as exc_info:
        Article(title="x" * 501, slug="long", content="C")

    assert exc_info.value.errors[0]["field"] == "title"


def test_article_negative_counter_rejected():
    with pytest.raises(ValidationError):
        Article(title="T", slug="t", content="C", view_count=-1)


def test_published_article_gets_publication_date():
    """Тест: опубликованная статья всегда имеет published_at."""
    article = Article(title="T", slug="t", content="C", is_published=True)

    assert article.published_at is not None


def test_explicit_publication_date_kept():
    published_at = datetime(2024, 3, 1, 9, 30)
    article = Article(title="T", slug="t", content="C", is_published=True, published_at=published_at)

    assert article.published_at == published_at


def test_apply_changes_publishes_article():
    article = Article(id=1, title="T", slug="t", content="C")

    article.apply_changes({"is_published": True, "status": "published"})

    assert article.is_published is True
    assert article.status is ArticleStatus.PUBLISHED
    assert article.published_at is not None


def test_apply_changes_rejects_slug_change_after_publication():
    """Тест: slug опубликованной статьи не меняется."""
    article = Article(id=1, title="T", slug="t", content="C", is_published=True)

    with pytest.raises(ValidationError) as exc_info:
        article.apply_changes({"slug": "other"})

    assert exc_info.value.errors[0]["field"] == "slug"
    assert article.slug == "t"


def test_apply_changes_same_slug_allowed_after_publication():
    article = Article(id=1, title="T", slug="t", content="C", is_published=True)

    article.apply_changes({"slug": "t", "title": "New title"})

    assert article.title == "New title"


def test_apply_changes_invalid_status_transition():
    """Тест недопустимого перехода статуса."""
    article = Article(id=1, title="T", slug="t", content="C", status=ArticleStatus.PUBLISHED)

    with pytest.raises(ValidationError) as exc_info:
        article.apply_changes({"status": "draft"})

    assert exc_info.value.errors[0]["field"] == "status"


def test_apply_changes_rejects_null_for_required_columns():
    """Тест: явный null для NOT NULL полей - ошибка по каждому полю."""
    article = Article(id=1, title="T", slug="t", content="C", priority=7)

    with pytest.raises(ValidationError) as exc_info:
        article.apply_changes({"priority": None, "status": None, "is_published": None, "title_bn": None})

    assert [error["field"] for error in exc_info.value.errors] == ["status", "is_published", "priority"]
    assert article.priority == 7
    assert article.status is ArticleStatus.DRAFT


def test_apply_changes_ignores_server_fields():
    article = Article(id=1, title="T", slug="t", content="C")

    article.apply_changes({"view_count": 1000, "title": "Updated"})

    assert article.view_count == 0
    assert article.title == "Updated"


def test_apply_changes_revalidates():
    article = Article(id=1, title="T", slug="t", content="C")

    with pytest.raises(ValidationError):
        article.apply_changes({"priority": 0})


@pytest.mark.parametrize(
    "current, target, allowed",
    [
        (ArticleStatus.DRAFT, ArticleStatus.PUBLISHED, True),
        (ArticleStatus.REVIEW, ArticleStatus.DRAFT, True),
        (ArticleStatus.PUBLISHED, ArticleStatus.ARCHIVED, True),
        (ArticleStatus.PUBLISHED, ArticleStatus.DRAFT, False),
        (ArticleStatus.ARCHIVED, ArticleStatus.REVIEW, False),
        (ArticleStatus.ARCHIVED, ArticleStatus.ARCHIVED, True),
    ],
)
def test_status_transitions(current, target, allowed):
    assert current.can_transition_to(target) is allowed
