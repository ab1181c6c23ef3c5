"""Services 도메인 모델 정의

서비스 본문과 하위 테이블(기능, 혜택, 결과물, 기술, 프로세스, 가격,
FAQ, 후기, 갤러리, 연관 서비스)을 정의합니다. 하위 테이블은 서비스 삭제 시
함께 삭제됩니다.
"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from sqlalchemy import (
    Boolean,
    DateTime,
    ForeignKey,
    Integer,
    String,
    Text,
    func,
)
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.database import Base, TimestampMixin, UUIDPrimaryKeyMixin


class ServiceStatus(str, Enum):
    """서비스 상태"""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class ServiceCategory(str, Enum):
    """서비스 분류"""

    DEVELOPMENT = "Development"
    DESIGN = "Design"
    CONSULTING = "Consulting"
    MARKETING = "Marketing"
    SUPPORT = "Support"


def _service_fk() -> Mapped[uuid.UUID]:
    return mapped_column(
        UUID(as_uuid=True),
        ForeignKey("services.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="서비스 ID",
    )


def _order_column() -> Mapped[int]:
    return mapped_column(
        Integer, nullable=False, default=0, server_default="0", comment="정렬 순서"
    )


def _created_at() -> Mapped[datetime]:
    return mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
        comment="생성 일시",
    )


class ServiceFeature(UUIDPrimaryKeyMixin, Base):
    """서비스 기능"""

    __tablename__ = "service_features"

    service_id: Mapped[uuid.UUID] = _service_fk()
    feature: Mapped[str] = mapped_column(Text, nullable=False, comment="기능")
    order: Mapped[int] = _order_column()
    created_at: Mapped[datetime] = _created_at()


class ServiceBenefit(UUIDPrimaryKeyMixin, Base):
    """서비스 혜택"""

    __tablename__ = "service_benefits"

    service_id: Mapped[uuid.UUID] = _service_fk()
    benefit: Mapped[str] = mapped_column(Text, nullable=False, comment="혜택")
    order: Mapped[int] = _order_column()
    created_at: Mapped[datetime] = _created_at()


class ServiceDeliverable(UUIDPrimaryKeyMixin, Base):
    """서비스 결과물"""

    __tablename__ = "service_deliverables"

    service_id: Mapped[uuid.UUID] = _service_fk()
    deliverable: Mapped[str] = mapped_column(
        Text, nullable=False, comment="결과물"
    )
    order: Mapped[int] = _order_column()
    created_at: Mapped[datetime] = _created_at()


class ServiceTechnology(UUIDPrimaryKeyMixin, Base):
    """서비스 사용 기술"""

    __tablename__ = "service_technologies"

    service_id: Mapped[uuid.UUID] = _service_fk()
    technology: Mapped[str] = mapped_column(
        String(255), nullable=False, comment="기술"
    )
    order: Mapped[int] = _order_column()
    created_at: Mapped[datetime] = _created_at()


class ServiceProcessStep(UUIDPrimaryKeyMixin, Base):
    """서비스 진행 단계"""

    __tablename__ = "service_process_steps"

    service_id: Mapped[uuid.UUID] = _service_fk()
    step: Mapped[int] = mapped_column(Integer, nullable=False, comment="단계 번호")
    title: Mapped[str] = mapped_column(String(255), nullable=False, comment="제목")
    description: Mapped[str] = mapped_column(Text, nullable=False, comment="설명")
    duration: Mapped[Optional[str]] = mapped_column(
        String(100), nullable=True, comment="소요 기간"
    )
    created_at: Mapped[datetime] = _created_at()


class ServicePricingFeature(UUIDPrimaryKeyMixin, Base):
    """가격 플랜 포함 항목"""

    __tablename__ = "service_pricing_features"

    pricing_tier_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("service_pricing_tiers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
        comment="가격 플랜 ID",
    )
    feature: Mapped[str] = mapped_column(Text, nullable=False, comment="항목")
    order: Mapped[int] = _order_column()
    created_at: Mapped[datetime] = _created_at()


class ServicePricingTier(UUIDPrimaryKeyMixin, Base):
    """서비스 가격 플랜"""

    __tablename__ = "service_pricing_tiers"

    service_id: Mapped[uuid.UUID] = _service_fk()
    name: Mapped[str] = mapped_column(String(255), nullable=False, comment="플랜명")
    price: Mapped[str] = mapped_column(String(100), nullable=False, comment="가격")
    description: Mapped[str] = mapped_column(Text, nullable=False, comment="설명")
    popular: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default="false",
        comment="추천 플랜 여부",
    )
    order: Mapped[int] = _order_column()
    created_at: Mapped[datetime] = _created_at()

    features: Mapped[list[ServicePricingFeature]] = relationship(
        lazy="selectin",
        order_by=ServicePricingFeature.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class ServiceFAQ(UUIDPrimaryKeyMixin, Base):
    """서비스 FAQ"""

    __tablename__ = "service_faqs"

    service_id: Mapped[uuid.UUID] = _service_fk()
    question: Mapped[str] = mapped_column(Text, nullable=False, comment="질문")
    answer: Mapped[str] = mapped_column(Text, nullable=False, comment="답변")
    order: Mapped[int] = _order_column()
    created_at: Mapped[datetime] = _created_at()


class ServiceTestimonial(UUIDPrimaryKeyMixin, Base):
    """서비스 고객 후기"""

    __tablename__ = "service_testimonials"

    service_id: Mapped[uuid.UUID] = _service_fk()
    quote: Mapped[str] = mapped_column(Text, nullable=False, comment="후기")
    author: Mapped[str] = mapped_column(String(255), nullable=False, comment="작성자")
    company: Mapped[str] = mapped_column(String(255), nullable=False, comment="회사")
    avatar: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="프로필 이미지 URL"
    )
    created_at: Mapped[datetime] = _created_at()


class ServiceGalleryImage(UUIDPrimaryKeyMixin, Base):
    """서비스 갤러리 이미지"""

    __tablename__ = "service_gallery_images"

    service_id: Mapped[uuid.UUID] = _service_fk()
    image_url: Mapped[str] = mapped_column(Text, nullable=False, comment="이미지 URL")
    order: Mapped[int] = _order_column()
    created_at: Mapped[datetime] = _created_at()


class ServiceRelated(Base):
    """연관 서비스 연결"""

    __tablename__ = "service_related"

    service_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("services.id", ondelete="CASCADE"),
        primary_key=True,
        comment="서비스 ID",
    )
    related_service_id: Mapped[uuid.UUID] = mapped_column(
        UUID(as_uuid=True),
        ForeignKey("services.id", ondelete="CASCADE"),
        primary_key=True,
        comment="연관 서비스 ID",
    )
    created_at: Mapped[datetime] = _created_at()


class Service(UUIDPrimaryKeyMixin, TimestampMixin, Base):
    """서비스 모델"""

    __tablename__ = "services"

    title: Mapped[str] = mapped_column(String(255), nullable=False, comment="제목")
    slug: Mapped[str] = mapped_column(
        String(255), nullable=False, unique=True, index=True, comment="슬러그"
    )
    short_description: Mapped[str] = mapped_column(
        Text, nullable=False, comment="짧은 설명"
    )
    full_description: Mapped[str] = mapped_column(
        Text, nullable=False, comment="상세 설명"
    )
    timeline: Mapped[str] = mapped_column(
        String(100), nullable=False, comment="진행 기간"
    )
    category: Mapped[str] = mapped_column(
        String(50),
        nullable=False,
        index=True,
        comment="분류 (Development, Design, Consulting, Marketing, Support)",
    )
    status: Mapped[str] = mapped_column(
        String(20),
        nullable=False,
        default=ServiceStatus.PUBLISHED.value,
        server_default=ServiceStatus.PUBLISHED.value,
        index=True,
        comment="상태 (draft, published, archived)",
    )
    featured_image: Mapped[Optional[str]] = mapped_column(
        Text, nullable=True, comment="대표 이미지 URL"
    )

    features: Mapped[list[ServiceFeature]] = relationship(
        lazy="selectin",
        order_by=ServiceFeature.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    benefits: Mapped[list[ServiceBenefit]] = relationship(
        lazy="selectin",
        order_by=ServiceBenefit.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    deliverables: Mapped[list[ServiceDeliverable]] = relationship(
        lazy="selectin",
        order_by=ServiceDeliverable.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    technologies: Mapped[list[ServiceTechnology]] = relationship(
        lazy="selectin",
        order_by=ServiceTechnology.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    process_steps: Mapped[list[ServiceProcessStep]] = relationship(
        lazy="selectin",
        order_by=ServiceProcessStep.step,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    pricing_tiers: Mapped[list[ServicePricingTier]] = relationship(
        lazy="selectin",
        order_by=ServicePricingTier.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    faqs: Mapped[list[ServiceFAQ]] = relationship(
        lazy="selectin",
        order_by=ServiceFAQ.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    testimonials: Mapped[list[ServiceTestimonial]] = relationship(
        lazy="selectin",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    gallery_images: Mapped[list[ServiceGalleryImage]] = relationship(
        lazy="selectin",
        order_by=ServiceGalleryImage.order,
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
    related_links: Mapped[list[ServiceRelated]] = relationship(
        lazy="selectin",
        foreign_keys=[ServiceRelated.service_id],
        cascade="all, delete-orphan",
        passive_deletes=True,
    )

    @property
    def testimonial(self) -> Optional[ServiceTestimonial]:
        return self.testimonials[0] if self.testimonials else None

    @property
    def related_service_ids(self) -> list[uuid.UUID]:
        return [link.related_service_id for link in self.related_links]

    def __repr__(self) -> str:
        return f"<Service(id={self.id}, slug={self.slug}, status={self.status})>"
