"""AI 도메인 스키마 정의"""

import uuid
from typing import Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.domains.ai.types import (
    ContentLength,
    ContentTone,
    ContentType,
    ImageModel,
    ImageStyle,
)
from app.domains.blog.models import PostStatus
from app.domains.services.models import ServiceCategory
from app.domains.services.schemas import ServiceContentInput

# Content Generation


class ContentGenerateRequest(BaseModel):
    """콘텐츠 생성 요청

    유형별 추가 필드:
        - service-description: service_name, features
        - page-content: page_type, sections
        - email-template: email_type, purpose
        - marketing-copy: platform, call_to_action
    """

    type: ContentType = Field(..., description="콘텐츠 유형")
    tone: ContentTone = Field(ContentTone.PROFESSIONAL, description="문체")
    length: ContentLength = Field(ContentLength.MEDIUM, description="분량")
    topic: str = Field(..., min_length=1, max_length=500, description="주제")
    keywords: list[str] = Field(default_factory=list, description="키워드")
    target_audience: Optional[str] = Field(None, max_length=255)
    additional_instructions: Optional[str] = Field(None, max_length=2000)

    service_name: Optional[str] = Field(None, max_length=255)
    features: list[str] = Field(default_factory=list)
    page_type: Optional[str] = Field(None, max_length=100)
    sections: list[str] = Field(default_factory=list)
    email_type: Optional[str] = Field(None, max_length=100)
    purpose: Optional[str] = Field(None, max_length=500)
    platform: Optional[str] = Field(None, max_length=100)
    call_to_action: Optional[str] = Field(None, max_length=255)

    @model_validator(mode="after")
    def check_service_name(self):
        if self.type == ContentType.SERVICE_DESCRIPTION and not self.service_name:
            raise ValueError("service_name is required for service-description")
        return self


class ContentGenerateResponse(BaseModel):
    """콘텐츠 생성 응답"""

    content: str
    word_count: int
    generation_time_ms: int
    model: str
    tokens_used: int
    subject: Optional[str] = Field(None, description="이메일 제목 (email-template)")


class ContentRefineRequest(BaseModel):
    """기존 콘텐츠 개선 요청"""

    content: str = Field(..., min_length=1, description="원문")
    improvements: list[str] = Field(..., min_length=1, description="개선 요청 사항")
    tone: Optional[ContentTone] = None
    target_audience: Optional[str] = Field(None, max_length=255)
    maintain_structure: bool = Field(True, description="원문 구조 유지 여부")

    @field_validator("content")
    @classmethod
    def check_content(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("content must not be blank")
        return v

    @field_validator("improvements")
    @classmethod
    def drop_blank_improvements(cls, v: list[str]) -> list[str]:
        cleaned = [item.strip() for item in v if item.strip()]
        if not cleaned:
            raise ValueError("at least one improvement is required")
        return cleaned


class ContentRefineResponse(BaseModel):
    """콘텐츠 개선 응답"""

    content: str
    word_count: int
    generation_time_ms: int
    model: str
    tokens_used: int


# Image Generation


class ImageGenerateRequest(BaseModel):
    """이미지 생성 요청

    quality를 생략하면 모델 기본값(dall-e-3: standard, gpt-image-1: auto)을 사용합니다.
    """

    prompt: str = Field(..., min_length=1, max_length=4000, description="프롬프트")
    style: Optional[ImageStyle] = Field(None, description="스타일")
    size: str = Field("1024x1024", description="이미지 크기")
    quality: Optional[str] = Field(None, description="품질")
    model: Optional[ImageModel] = Field(None, description="모델 (기본: 설정값)")


class ImageGenerateResponse(BaseModel):
    """이미지 생성 응답"""

    url: Optional[str] = None
    base64: Optional[str] = None
    revised_prompt: Optional[str] = None
    model: str
    size: str


class ImagePromptRequest(BaseModel):
    """게시글 기반 이미지 프롬프트 생성 요청"""

    title: str = Field(..., min_length=1, max_length=500)
    excerpt: Optional[str] = None
    content: Optional[str] = None


class ImagePromptResponse(BaseModel):
    """이미지 프롬프트"""

    prompt: str


DEFAULT_VARIANT_STYLES = [
    ImageStyle.PHOTOGRAPHIC,
    ImageStyle.ILLUSTRATION,
    ImageStyle.MINIMALIST,
]


class ImageVariantsRequest(BaseModel):
    """게시글 대표 이미지 스타일 변형 생성 요청

    size를 생략하면 모델의 가로형 크기(dall-e-3: 1792x1024, gpt-image-1: 1536x1024)를 사용합니다.
    """

    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    excerpt: Optional[str] = None
    styles: list[ImageStyle] = Field(
        default_factory=lambda: list(DEFAULT_VARIANT_STYLES),
        min_length=1,
        max_length=6,
        description="생성할 스타일 목록",
    )
    model: Optional[ImageModel] = None
    size: Optional[str] = None
    quality: Optional[str] = None

    @field_validator("title", "content")
    @classmethod
    def check_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("must not be blank")
        return v

    @field_validator("styles")
    @classmethod
    def dedupe_styles(cls, v: list[ImageStyle]) -> list[ImageStyle]:
        return list(dict.fromkeys(v))


class ImageVariant(BaseModel):
    """스타일별 생성 결과 (실패 시 image는 null, error에 사유)"""

    style: ImageStyle
    prompt: str
    image: Optional[ImageGenerateResponse] = None
    error: Optional[str] = None


class ImageVariantsMetadata(BaseModel):
    total_generation_time_ms: int
    success_count: int
    error_count: int


class ImageVariantsResponse(BaseModel):
    """스타일 변형 생성 응답"""

    variants: list[ImageVariant]
    metadata: ImageVariantsMetadata


# Save


class BlogPostSaveRequest(BaseModel):
    """생성된 게시글 저장 요청

    category(이름)가 주어지고 category_id가 없으면 카테고리를 찾거나 만듭니다.
    """

    title: str = Field(..., min_length=1, max_length=500)
    content: str = Field(..., min_length=1)
    excerpt: str = Field(..., min_length=1)
    tags: list[str] = Field(default_factory=list, description="태그 이름 목록")
    meta_description: str = Field(..., min_length=1)
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_keywords: Optional[str] = None
    slug: Optional[str] = Field(None, max_length=255)
    category: Optional[str] = Field(None, max_length=255, description="카테고리 이름")
    category_id: Optional[uuid.UUID] = None
    author_id: Optional[uuid.UUID] = None
    status: PostStatus = Field(PostStatus.DRAFT)
    featured_image: Optional[str] = None


class ServiceSaveRequest(ServiceContentInput):
    """생성된 서비스 저장 요청 (항상 draft로 저장)"""

    title: str = Field(..., min_length=1, max_length=255)
    slug: Optional[str] = Field(None, max_length=255)
    short_description: str = Field(..., min_length=1)
    full_description: str = Field(..., min_length=1)
    timeline: str = Field(..., min_length=1, max_length=100)
    category: ServiceCategory
    featured_image: Optional[str] = None


class SaveResult(BaseModel):
    """저장 결과"""

    id: uuid.UUID
    slug: str
