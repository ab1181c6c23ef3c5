"""Services 도메인 스키마 정의"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.core.schemas import BaseSchema
from app.domains.services.models import Service, ServiceCategory, ServiceStatus

# Request Schemas


class ProcessStepInput(BaseModel):
    """진행 단계 입력"""

    step: int = Field(..., ge=1, description="단계 번호")
    title: str = Field(..., min_length=1, max_length=255)
    description: str = Field(..., min_length=1)
    duration: Optional[str] = Field(None, max_length=100)


class PricingTierInput(BaseModel):
    """가격 플랜 입력"""

    name: str = Field(..., min_length=1, max_length=255)
    price: str = Field(..., min_length=1, max_length=100)
    description: str = Field(..., min_length=1)
    popular: bool = False
    features: list[str] = Field(default_factory=list)


class FAQInput(BaseModel):
    """FAQ 입력"""

    question: str = Field(..., min_length=1)
    answer: str = Field(..., min_length=1)


class TestimonialInput(BaseModel):
    """고객 후기 입력"""

    quote: str = Field(..., min_length=1)
    author: str = Field(..., min_length=1, max_length=255)
    company: str = Field(..., min_length=1, max_length=255)
    avatar: Optional[str] = None


class ServiceContentInput(BaseModel):
    """서비스 하위 항목 입력 (저장 시 전체 교체)"""

    features: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    deliverables: list[str] = Field(default_factory=list)
    process_steps: list[ProcessStepInput] = Field(default_factory=list)
    pricing_tiers: list[PricingTierInput] = Field(default_factory=list)
    faqs: list[FAQInput] = Field(default_factory=list)
    testimonial: Optional[TestimonialInput] = None
    gallery: list[str] = Field(default_factory=list, description="이미지 URL 목록")
    related_services: list[uuid.UUID] = Field(
        default_factory=list, description="연관 서비스 ID 목록"
    )


class ServiceCreateRequest(ServiceContentInput):
    """서비스 생성 요청"""

    title: str = Field(..., min_length=1, max_length=255, description="제목")
    slug: str = Field(..., min_length=1, max_length=255, description="슬러그")
    short_description: str = Field(..., min_length=1, description="짧은 설명")
    full_description: str = Field(..., min_length=1, description="상세 설명")
    timeline: str = Field(..., min_length=1, max_length=100, description="진행 기간")
    category: ServiceCategory = Field(..., description="분류")
    status: ServiceStatus = Field(ServiceStatus.PUBLISHED, description="상태")
    featured_image: Optional[str] = Field(None, description="대표 이미지 URL")


class ServiceUpdateRequest(ServiceContentInput):
    """서비스 수정 요청

    기본 필드는 지정된 값만 변경하고, 하위 항목은 요청 내용으로 전체 교체합니다.
    """

    title: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    short_description: Optional[str] = Field(None, min_length=1)
    full_description: Optional[str] = Field(None, min_length=1)
    timeline: Optional[str] = Field(None, min_length=1, max_length=100)
    category: Optional[ServiceCategory] = None
    status: Optional[ServiceStatus] = None
    featured_image: Optional[str] = None


# Response Schemas


class ServiceIdResponse(BaseModel):
    """생성된 서비스 ID"""

    id: uuid.UUID


class ProcessStepResponse(BaseSchema):
    step: int
    title: str
    description: str
    duration: Optional[str] = None


class PricingTierResponse(BaseModel):
    name: str
    price: str
    description: str
    popular: bool
    features: list[str] = Field(default_factory=list)


class FAQResponse(BaseSchema):
    question: str
    answer: str


class TestimonialResponse(BaseSchema):
    quote: str
    author: str
    company: str
    avatar: Optional[str] = None


class ServiceResponse(BaseModel):
    """서비스 응답 (하위 항목 포함)"""

    id: uuid.UUID
    title: str
    slug: str
    short_description: str
    full_description: str
    timeline: str
    category: str
    status: ServiceStatus
    featured_image: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    features: list[str] = Field(default_factory=list)
    benefits: list[str] = Field(default_factory=list)
    technologies: list[str] = Field(default_factory=list)
    deliverables: list[str] = Field(default_factory=list)
    process_steps: list[ProcessStepResponse] = Field(default_factory=list)
    pricing_tiers: list[PricingTierResponse] = Field(default_factory=list)
    faqs: list[FAQResponse] = Field(default_factory=list)
    testimonial: Optional[TestimonialResponse] = None
    gallery: list[str] = Field(default_factory=list)
    related_services: list[uuid.UUID] = Field(default_factory=list)

    @classmethod
    def from_service(cls, service: Service) -> "ServiceResponse":
        """ORM 서비스를 응답으로 변환"""
        testimonial = service.testimonial
        return cls(
            id=service.id,
            title=service.title,
            slug=service.slug,
            short_description=service.short_description,
            full_description=service.full_description,
            timeline=service.timeline,
            category=service.category,
            status=ServiceStatus(service.status),
            featured_image=service.featured_image,
            created_at=service.created_at,
            updated_at=service.updated_at,
            features=[f.feature for f in service.features],
            benefits=[b.benefit for b in service.benefits],
            technologies=[t.technology for t in service.technologies],
            deliverables=[d.deliverable for d in service.deliverables],
            process_steps=[
                ProcessStepResponse.model_validate(step)
                for step in service.process_steps
            ],
            pricing_tiers=[
                PricingTierResponse(
                    name=tier.name,
                    price=tier.price,
                    description=tier.description,
                    popular=tier.popular,
                    features=[f.feature for f in tier.features],
                )
                for tier in service.pricing_tiers
            ],
            faqs=[FAQResponse.model_validate(faq) for faq in service.faqs],
            testimonial=(
                TestimonialResponse.model_validate(testimonial)
                if testimonial
                else None
            ),
            gallery=[image.image_url for image in service.gallery_images],
            related_services=service.related_service_ids,
        )


class DeleteResult(BaseModel):
    """삭제 결과"""

    deleted: int
