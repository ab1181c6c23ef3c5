"""Views 도메인 모델 정의"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import DateTime, Index, String, func
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, UUIDPrimaryKeyMixin


class ViewContentType(str, Enum):
    """조회 대상 콘텐츠 유형"""

    BLOG_POST = "blog_post"
    SERVICE = "service"


class ViewTracking(UUIDPrimaryKeyMixin, Base):
    """콘텐츠 조회 기록

    content_id는 content_type에 따라 blog_posts 또는 services를 가리키며
    외래 키는 두지 않습니다.
    """

    __tablename__ = "view_tracking"
    __table_args__ = (
        Index("idx_view_tracking_content", "content_type", "content_id"),
        Index("idx_view_tracking_viewed_at", "viewed_at"),
    )

    content_type: Mapped[str] = mapped_column(
        String(20), nullable=False, comment="콘텐츠 유형 (blog_post, service)"
    )
    content_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True), nullable=False, comment="콘텐츠 ID"
    )
    ip_address: Mapped[Optional[str]] = mapped_column(
        String(45), nullable=True, comment="방문자 IP"
    )
    user_agent: Mapped[Optional[str]] = mapped_column(
        String(1000), nullable=True, comment="User-Agent"
    )
    referer: Mapped[Optional[str]] = mapped_column(
        String(500), nullable=True, comment="Referer"
    )
    viewed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="조회 일시",
    )

    def __repr__(self) -> str:
        return (
            f"<ViewTracking(content_type={self.content_type}, "
            f"content_id={self.content_id})>"
        )
