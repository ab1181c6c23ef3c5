"""Comments 도메인 모델 정의"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import Boolean, DateTime, Index, String, Text
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class CommentEntityType(str, Enum):
    """코멘트 대상 엔티티 유형"""

    CONTACT_SUBMISSION = "contact_submission"
    BLOG_POST = "blog_post"
    SERVICE = "service"
    GALLERY_IMAGE = "gallery_image"


class AdminComment(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """관리자 코멘트 모델 (Soft Delete)"""

    __tablename__ = "admin_comments"
    __table_args__ = (
        Index("idx_admin_comments_entity", "entity_type", "entity_id"),
    )

    entity_type: Mapped[str] = mapped_column(
        String(30),
        nullable=False,
        comment="대상 유형 (contact_submission, blog_post, service, gallery_image)",
    )
    entity_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, comment="대상 ID"
    )
    content: Mapped[str] = mapped_column(Text, nullable=False, comment="내용")
    author_name: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="작성자"
    )
    is_internal: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=True,
        server_default="true",
        comment="내부 메모 여부",
    )
    is_pinned: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
        comment="고정 여부",
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), nullable=True, comment="삭제 일시 (Soft Delete)"
    )

    def __repr__(self) -> str:
        return (
            f"<AdminComment(id={self.id}, entity_type={self.entity_type}, "
            f"entity_id={self.entity_id})>"
        )
