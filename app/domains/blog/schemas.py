"""Blog 도메인 스키마 정의"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from app.core.schemas import BaseSchema
from app.core.utils.text import reading_time_minutes
from app.domains.blog.models import BlogPost, PostStatus

TEMP_TAG_PREFIX = "temp-"


def _parse_tag_ids(values: Optional[list[str]]) -> Optional[list[uuid.UUID]]:
    """임시 태그(temp-*)를 제외하고 UUID로 변환"""
    if values is None:
        return None
    parsed: list[uuid.UUID] = []
    for value in values:
        value = str(value).strip()
        if not value or value.startswith(TEMP_TAG_PREFIX):
            continue
        tag_id = uuid.UUID(value)
        if tag_id not in parsed:
            parsed.append(tag_id)
    return parsed


# Request Schemas


class BlogPostCreateRequest(BaseModel):
    """게시글 생성 요청"""

    title: str = Field(..., min_length=1, max_length=500, description="제목")
    slug: str = Field(..., min_length=1, max_length=255, description="슬러그")
    excerpt: str = Field(..., min_length=1, description="요약")
    content: str = Field(..., min_length=1, description="본문")
    featured_image: Optional[str] = Field(None, description="대표 이미지 URL")
    author_id: Optional[uuid.UUID] = Field(None, description="저자 ID")
    category_id: Optional[uuid.UUID] = Field(None, description="카테고리 ID")
    status: PostStatus = Field(PostStatus.DRAFT, description="상태")
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    tag_ids: list[uuid.UUID] = Field(
        default_factory=list,
        description="태그 ID 목록 (temp- 로 시작하는 값은 무시)",
    )

    @field_validator("tag_ids", mode="before")
    @classmethod
    def drop_temporary_tags(cls, v):
        return _parse_tag_ids(v) or []


class BlogPostUpdateRequest(BaseModel):
    """게시글 수정 요청 (부분 수정)"""

    title: Optional[str] = Field(None, min_length=1, max_length=500)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    excerpt: Optional[str] = Field(None, min_length=1)
    content: Optional[str] = Field(None, min_length=1)
    featured_image: Optional[str] = None
    author_id: Optional[uuid.UUID] = None
    category_id: Optional[uuid.UUID] = None
    status: Optional[PostStatus] = None
    meta_title: Optional[str] = Field(None, max_length=255)
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    tag_ids: Optional[list[uuid.UUID]] = Field(
        None, description="지정 시 태그 연결을 교체"
    )

    @field_validator("tag_ids", mode="before")
    @classmethod
    def drop_temporary_tags(cls, v):
        return _parse_tag_ids(v)


class CategoryCreateRequest(BaseModel):
    """카테고리 생성 요청"""

    name: str = Field(..., min_length=1, max_length=255, description="카테고리명")
    slug: Optional[str] = Field(
        None, max_length=255, description="슬러그 (미지정 시 이름에서 생성)"
    )
    description: Optional[str] = None


class CategoryUpdateRequest(BaseModel):
    """카테고리 수정 요청"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None


class TagCreateRequest(BaseModel):
    """태그 생성 요청"""

    name: str = Field(..., min_length=1, max_length=255, description="태그명")
    slug: Optional[str] = Field(
        None, max_length=255, description="슬러그 (미지정 시 이름에서 생성)"
    )


class TagUpdateRequest(BaseModel):
    """태그 수정 요청"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)


# Response Schemas


class AuthorSummary(BaseSchema):
    """게시글에 포함되는 저자 요약"""

    id: uuid.UUID
    name: str
    email: str
    avatar_url: Optional[str] = None


class CategoryResponse(BaseSchema):
    """카테고리 응답"""

    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class CategoryListItem(CategoryResponse):
    """카테고리 목록 항목 (게시글 수 포함)"""

    posts_count: int = 0


class TagResponse(BaseSchema):
    """태그 응답"""

    id: uuid.UUID
    name: str
    slug: str
    created_at: datetime


class TagListItem(TagResponse):
    """태그 목록 항목 (게시글 수 포함)"""

    posts_count: int = 0


class BlogPostResponse(BaseSchema):
    """게시글 응답 (저자, 카테고리, 태그 포함)"""

    id: uuid.UUID
    title: str
    slug: str
    excerpt: str
    content: str
    featured_image: Optional[str] = None
    author_id: Optional[uuid.UUID] = None
    category_id: Optional[uuid.UUID] = None
    status: PostStatus
    published_at: Optional[datetime] = None
    meta_title: Optional[str] = None
    meta_description: Optional[str] = None
    meta_keywords: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None
    author: Optional[AuthorSummary] = None
    category: Optional[CategoryResponse] = None
    tags: list[TagResponse] = Field(default_factory=list)
    tag_ids: list[uuid.UUID] = Field(default_factory=list)
    reading_time: int = Field(0, description="예상 읽기 시간 (분)")

    @classmethod
    def from_post(cls, post: BlogPost) -> "BlogPostResponse":
        """ORM 게시글을 응답으로 변환 (tag_ids, reading_time 계산 포함)"""
        response = cls.model_validate(post)
        return response.model_copy(
            update={
                "tag_ids": [tag.id for tag in post.tags],
                "reading_time": reading_time_minutes(post.content),
            }
        )


class DeleteResult(BaseModel):
    """삭제 결과"""

    deleted: int
