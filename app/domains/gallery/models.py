"""Gallery 도메인 모델 정의"""

import uuid
from typing import Any, Optional

from sqlalchemy import Boolean, ForeignKey, Index, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class GalleryImageGroup(Base):
    """이미지-그룹 연결 (그룹 내 정렬 순서 포함)"""

    __tablename__ = "gallery_image_groups"

    image_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("gallery_images.id", ondelete="CASCADE"),
        primary_key=True,
        comment="이미지 ID",
    )
    group_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("gallery_groups.id", ondelete="CASCADE"),
        primary_key=True,
        comment="그룹 ID",
    )
    display_order: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0", comment="그룹 내 순서"
    )

    group: Mapped["GalleryGroup"] = relationship(lazy="selectin")


class GalleryImage(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """갤러리 이미지 모델"""

    __tablename__ = "gallery_images"
    __table_args__ = (
        Index("idx_gallery_images_is_available", "is_available"),
        Index("idx_gallery_images_is_featured", "is_featured"),
        Index("idx_gallery_images_display_order", "display_order"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="이름")
    alt_text: Mapped[str] = mapped_column(
        String(500), nullable=False, comment="대체 텍스트"
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="설명"
    )
    file_name: Mapped[str] = mapped_column(
        String(500), nullable=False, comment="원본 파일명"
    )
    original_url: Mapped[str] = mapped_column(
        String(1000), nullable=False, comment="원본 URL"
    )
    thumbnail_url: Mapped[Optional[str]] = mapped_column(
        String(1000), nullable=True, comment="썸네일 URL"
    )
    optimized_url: Mapped[Optional[str]] = mapped_column(
        String(1000), nullable=True, comment="최적화 이미지 URL"
    )
    file_size: Mapped[int] = mapped_column(
        Integer, nullable=False, comment="파일 크기 (bytes)"
    )
    width: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    height: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    mime_type: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="MIME 타입"
    )
    display_order: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0", comment="정렬 순서"
    )
    is_available: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true", comment="공개 여부"
    )
    is_featured: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, server_default="false", comment="추천 여부"
    )
    image_metadata: Mapped[Optional[dict[str, Any]]] = mapped_column(
        JSONB, nullable=True, comment="업로드 메타데이터"
    )

    group_links: Mapped[list[GalleryImageGroup]] = relationship(
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def groups(self) -> list["GalleryGroup"]:
        return [link.group for link in self.group_links]

    @property
    def group_ids(self) -> list[uuid.UUID]:
        return [link.group_id for link in self.group_links]

    def __repr__(self) -> str:
        return f"<GalleryImage(id={self.id}, name={self.name})>"


class GalleryGroup(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """갤러리 그룹 모델"""

    __tablename__ = "gallery_groups"

    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="이름")
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True, comment="슬러그"
    )
    description: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="설명"
    )
    cover_image_id: Mapped[Optional[uuid.UUID]] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("gallery_images.id", ondelete="SET NULL"),
        nullable=True,
        comment="커버 이미지 ID",
    )
    display_order: Mapped[int] = mapped_column(
        Integer, nullable=False, default=0, server_default="0", comment="정렬 순서"
    )
    is_active: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=True, server_default="true", comment="활성 여부"
    )

    def __repr__(self) -> str:
        return f"<GalleryGroup(id={self.id}, slug={self.slug})>"
