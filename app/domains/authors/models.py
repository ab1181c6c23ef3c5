"""Authors 도메인 모델 정의"""

from typing import Optional

from sqlalchemy import String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Author(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """블로그 저자 모델"""

    __tablename__ = "authors"

    name: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        comment="저자 이름",
    )
    email: Mapped[str] = mapped_column(
        String(255),
        nullable=False,
        unique=True,
        comment="저자 이메일 (고유)",
    )
    bio: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="소개",
    )
    avatar_url: Mapped[Optional[str]] = mapped_column(
        Text,
        nullable=True,
        comment="프로필 이미지 URL",
    )

    def __repr__(self) -> str:
        return f"<Author(id={self.id}, email={self.email})>"
