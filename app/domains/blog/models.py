"""Blog 도메인 모델 정의"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Column, DateTime, ForeignKey, String, Table, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, TimestampMixin, UUIDPrimaryKeyMixin
from app.domains.authors.models import Author


class PostStatus(str, Enum):
    """게시글 상태"""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


blog_post_tags = Table(
    "blog_post_tags",
    Base.metadata,
    Column(
        "post_id",
        UUID(as_uuid=True),
        ForeignKey("blog_posts.id", ondelete="CASCADE"),
        primary_key=True,
        comment="게시글 ID",
    ),
    Column(
        "tag_id",
        UUID(as_uuid=True),
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
        comment="태그 ID",
    ),
)


class Category(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """블로그 카테고리 모델"""

    __tablename__ = "categories"

    name: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, comment="카테고리명"
    )
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True, comment="슬러그"
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="설명"
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, slug={self.slug})>"


class Tag(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """블로그 태그 모델"""

    __tablename__ = "tags"

    name: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="태그명"
    )
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True, comment="슬러그"
    )

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, slug={self.slug})>"


class BlogPost(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """블로그 게시글 모델"""

    __tablename__ = "blog_posts"

    title: Mapped[str] = mapped_column(
        String(500), nullable=False, comment="제목"
    )
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True, comment="슬러그"
    )
    excerpt: Mapped[str] = mapped_column(Text, nullable=False, comment="요약")
    content: Mapped[str] = mapped_column(Text, nullable=False, comment="본문")
    featured_image: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="대표 이미지 URL"
    )
    author_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("authors.id"),
        nullable=True,
        index=True,
        comment="저자 ID",
    )
    category_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("categories.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
        comment="카테고리 ID",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=PostStatus.DRAFT.value,
        server_default=PostStatus.DRAFT.value,
        index=True,
        comment="상태 (draft, published, archived)",
    )
    published_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="발행 일시"
    )
    meta_title: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="SEO 제목"
    )
    meta_description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="SEO 설명"
    )
    meta_keywords: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="SEO 키워드"
    )

    author: Mapped[Optional[Author]] = relationship(lazy="selectin")
    category: Mapped[Optional[Category]] = relationship(lazy="selectin")
    tags: Mapped[list[Tag]] = relationship(
        secondary=blog_post_tags, lazy="selectin"
    )

    def __repr__(self) -> str:
        return f"<BlogPost(id={self.id}, slug={self.slug}, status={self.status})>"
