"""Contact 도메인 모델 정의"""

from enum import Enum
from typing import Optional

from sqlalchemy import Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from app.core.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class SubmissionStatus(str, Enum):
    """문의 처리 상태"""

    NEW = "new"
    READ = "read"
    RESPONDED = "responded"


class ContactSubmission(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """문의 접수 모델"""

    __tablename__ = "contact_submissions"
    __table_args__ = (
        Index("idx_contact_submissions_status", "status"),
        Index("idx_contact_submissions_created_at", "created_at"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="이름")
    email: Mapped[str] = mapped_column(String(255), nullable=False, comment="이메일")
    company: Mapped[Optional[str]] = mapped_column(
        String(255), nullable=True, comment="회사"
    )
    phone: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, comment="전화번호"
    )
    subject: Mapped[str] = mapped_column(String(255), nullable=False, comment="제목")
    message: Mapped[str] = mapped_column(Text, nullable=False, comment="내용")
    project_type: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, comment="프로젝트 유형"
    )
    budget: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, comment="예산 범위"
    )
    timeline: Mapped[Optional[str]] = mapped_column(
        String(50), nullable=True, comment="희망 일정"
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=SubmissionStatus.NEW.value,
        server_default=SubmissionStatus.NEW.value,
        comment="처리 상태 (new, read, responded)",
    )
    ip_address: Mapped[Optional[str]] = mapped_column(
        String(45), nullable=True, comment="접수 IP"
    )
    user_agent: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="User-Agent"
    )

    def __repr__(self) -> str:
        return f"<ContactSubmission(id={self.id}, email={self.email}, status={self.status})>"
