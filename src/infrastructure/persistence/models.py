# -*- coding: utf-8 -*-
"""
SQLAlchemy модели — инфраструктурный слой.

Суррогатные integer ключи во всех таблицах. Локализованные варианты
полей хранятся рядом с основными (*_bn, name_en).
Время хранится как naive UTC.
"""

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Index, Integer, JSON, String, Text, UniqueConstraint
)
from sqlalchemy.orm import declarative_base

from src.shared.utils.text import utcnow

Base = declarative_base()


class CategoryModel(Base):
    """Рубрики (дерево через parent_id)."""

    __tablename__ = "categories"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(Text, nullable=False, index=True, comment="Название, например 'খেলা'")
    name_en = Column(Text)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text)
    parent_id = Column(Integer, ForeignKey("categories.id"), index=True)
    display_order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<CategoryModel(id={self.id}, slug='{self.slug}')>"


class UserModel(Base):
    """Авторы, редакторы, администраторы."""

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, autoincrement=True)
    email = Column(String(320), nullable=False, unique=True, index=True)
    password = Column(Text, nullable=False, comment="bcrypt хэш")
    name = Column(Text, nullable=False)
    name_bn = Column(Text)
    bio = Column(Text)
    avatar = Column(Text)
    role = Column(String(50), nullable=False, default="reporter", index=True)
    is_active = Column(Boolean, nullable=False, default=True)
    last_login_at = Column(DateTime)
    created_at = Column(DateTime, nullable=False, default=utcnow)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class TagModel(Base):
    """Теги статей."""

    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(255), nullable=False, unique=True, index=True)
    name_bn = Column(Text)
    slug = Column(String(255), nullable=False, unique=True, index=True)
    description = Column(Text)
    color = Column(String(32))
    is_active = Column(Boolean, nullable=False, default=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)


class ArticleModel(Base):
    """
    SQLAlchemy модель статьи.

    Счётчики вовлечённости меняются только сервером.
    """

    __tablename__ = "articles"

    # =========================================================================
    # Основные поля
    # =========================================================================
    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(Text, nullable=False)
    title_bn = Column(Text)
    slug = Column(String(500), nullable=False, unique=True, index=True)
    excerpt = Column(Text)
    excerpt_bn = Column(Text)
    content = Column(Text, nullable=False)
    content_bn = Column(Text)

    # =========================================================================
    # Медиа
    # =========================================================================
    featured_image = Column(Text)
    image_caption = Column(Text)
    gallery = Column(JSON, default=list, comment="URL изображений галереи")

    # =========================================================================
    # Связи
    # =========================================================================
    category_id = Column(Integer, ForeignKey("categories.id"), index=True)
    author_id = Column(Integer, ForeignKey("users.id"), index=True)
    editor_id = Column(Integer, ForeignKey("users.id"))

    # =========================================================================
    # Публикация
    # =========================================================================
    status = Column(String(20), nullable=False, default="draft", index=True)
    is_published = Column(Boolean, nullable=False, default=False)
    published_at = Column(DateTime)
    scheduled_at = Column(DateTime)

    # =========================================================================
    # SEO
    # =========================================================================
    meta_title = Column(Text)
    meta_description = Column(Text)
    keywords = Column(Text, comment="Через запятую")

    # =========================================================================
    # Вовлечённость
    # =========================================================================
    view_count = Column(Integer, nullable=False, default=0)
    like_count = Column(Integer, nullable=False, default=0)
    share_count = Column(Integer, nullable=False, default=0)
    comment_count = Column(Integer, nullable=False, default=0)

    # =========================================================================
    # Размещение
    # =========================================================================
    is_featured = Column(Boolean, nullable=False, default=False, index=True)
    is_breaking = Column(Boolean, nullable=False, default=False, index=True)
    is_urgent = Column(Boolean, nullable=False, default=False)
    priority = Column(Integer, nullable=False, default=5, comment="1-10, больше = важнее")

    location = Column(Text)
    location_bn = Column(Text)
    source = Column(Text)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)

    __table_args__ = (
        Index("articles_published_idx", "is_published", "published_at"),
    )

    def __repr__(self):
        return f"<ArticleModel(id={self.id}, slug='{self.slug}')>"


class ArticleTagModel(Base):
    """Связь статья ↔ тег. Удаление любой стороны каскадно удаляет связь."""

    __tablename__ = "article_tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True)
    tag_id = Column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), nullable=False, index=True)
    created_at = Column(DateTime, nullable=False, default=utcnow)

    __table_args__ = (
        UniqueConstraint("article_id", "tag_id", name="article_tags_article_tag_uq"),
    )


class CommentModel(Base):
    """Комментарии к статьям (с ответами через parent_id)."""

    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True)
    parent_id = Column(Integer, ForeignKey("comments.id", ondelete="CASCADE"), index=True)

    author_name = Column(Text, nullable=False)
    author_email = Column(Text)
    author_avatar = Column(Text)

    content = Column(Text, nullable=False)
    content_bn = Column(Text)

    is_approved = Column(Boolean, nullable=False, default=False, index=True)
    is_reported = Column(Boolean, nullable=False, default=False)
    moderated_by = Column(Integer, ForeignKey("users.id"))
    moderated_at = Column(DateTime)

    like_count = Column(Integer, nullable=False, default=0)
    reply_count = Column(Integer, nullable=False, default=0)

    ip_address = Column(String(64))
    user_agent = Column(Text)

    created_at = Column(DateTime, nullable=False, default=utcnow, index=True)
    updated_at = Column(DateTime, nullable=False, default=utcnow, onupdate=utcnow)


class PageViewModel(Base):
    """Просмотры статей. Только вставка, без обновлений."""

    __tablename__ = "page_views"

    id = Column(Integer, primary_key=True, autoincrement=True)
    article_id = Column(Integer, ForeignKey("articles.id", ondelete="CASCADE"), nullable=False, index=True)
    ip_address = Column(String(64))
    user_agent = Column(Text)
    referrer = Column(Text)
    country = Column(String(100))
    city = Column(String(100))
    device = Column(String(20), comment="mobile, desktop, tablet")
    session_id = Column(String(255), index=True)
    viewed_at = Column(DateTime, nullable=False, default=utcnow, index=True)
