# -*- coding: utf-8 -*-
"""
Маппинг SQLAlchemy модели ↔ доменные сущности.

Общий для нескольких репозиториев (деталь статьи читает рубрику,
пользователей, теги; список комментариев читает статью).
"""

from sqlalchemy.engine import Row

from src.domain.entities.article import Article
from src.domain.entities.category import Category
from src.domain.entities.comment import Comment
from src.domain.entities.tag import Tag
from src.domain.read_models import UserPublic
from src.domain.value_objects.article_status import ArticleStatus
from src.domain.value_objects.user_role import UserRole
from src.infrastructure.persistence.models import (
    ArticleModel, CategoryModel, CommentModel, TagModel, UserModel
)

# Колонки публичной проекции пользователя (без пароля)
USER_PUBLIC_COLUMNS = (
    UserModel.id,
    UserModel.email,
    UserModel.name,
    UserModel.name_bn,
    UserModel.bio,
    UserModel.avatar,
    UserModel.role,
    UserModel.created_at,
)

ARTICLE_FIELDS = [column.key for column in ArticleModel.__table__.columns]
CATEGORY_FIELDS = [column.key for column in CategoryModel.__table__.columns]
TAG_FIELDS = [column.key for column in TagModel.__table__.columns]
COMMENT_FIELDS = [column.key for column in CommentModel.__table__.columns]


# =============================================================================
# Статьи
# =============================================================================

def article_to_entity(model: ArticleModel) -> Article:
    """
    ArticleModel → Article.

    None в коллекциях и счётчиках заменяется значениями по умолчанию.
    """
    values = {name: getattr(model, name) for name in ARTICLE_FIELDS}
    values["status"] = ArticleStatus(model.status)
    values["gallery"] = model.gallery or []
    for counter in ("view_count", "like_count", "share_count", "comment_count"):
        values[counter] = values[counter] or 0
    return Article(**values)


def article_to_model(entity: Article) -> ArticleModel:
    model = ArticleModel()
    copy_article_to_model(entity, model)
    return model


def copy_article_to_model(entity: Article, model: ArticleModel) -> None:
    """Перенести поля сущности в модель (id не трогаем)."""
    for name in ARTICLE_FIELDS:
        if name == "id":
            continue
        value = getattr(entity, name)
        if name == "status":
            value = entity.status.value
        setattr(model, name, value)


# =============================================================================
# Рубрики, теги, комментарии
# =============================================================================

def category_to_entity(model: CategoryModel) -> Category:
    return Category(**{name: getattr(model, name) for name in CATEGORY_FIELDS})


def copy_category_to_model(entity: Category, model: CategoryModel) -> None:
    for name in CATEGORY_FIELDS:
        if name != "id":
            setattr(model, name, getattr(entity, name))


def tag_to_entity(model: TagModel) -> Tag:
    return Tag(**{name: getattr(model, name) for name in TAG_FIELDS})


def copy_tag_to_model(entity: Tag, model: TagModel) -> None:
    for name in TAG_FIELDS:
        if name != "id":
            setattr(model, name, getattr(entity, name))


def comment_to_entity(model: CommentModel) -> Comment:
    return Comment(**{name: getattr(model, name) for name in COMMENT_FIELDS})


def copy_comment_to_model(entity: Comment, model: CommentModel) -> None:
    for name in COMMENT_FIELDS:
        if name != "id":
            setattr(model, name, getattr(entity, name))


# =============================================================================
# Пользователи
# =============================================================================

def row_to_user_public(row: Row) -> UserPublic:
    """Строка из USER_PUBLIC_COLUMNS → UserPublic."""
    return UserPublic(
        id=row.id,
        email=row.email,
        name=row.name,
        name_bn=row.name_bn,
        bio=row.bio,
        avatar=row.avatar,
        role=UserRole(row.role),
        created_at=row.created_at,
    )
