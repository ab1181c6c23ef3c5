"""Gallery 도메인 스키마 정의"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field

from app.core.schemas import BaseSchema


class BulkImageOperation(str, Enum):
    """이미지 벌크 작업"""

    AVAILABILITY = "availability"
    FEATURED = "featured"


# 그룹


class GalleryGroupCreateRequest(BaseModel):
    """그룹 생성 요청"""

    name: str = Field(..., min_length=1, max_length=255, description="이름")
    slug: Optional[str] = Field(
        None, max_length=255, description="슬러그 (미입력 시 이름에서 생성)"
    )
    description: Optional[str] = Field(None, description="설명")
    cover_image_id: Optional[uuid.UUID] = Field(None, description="커버 이미지 ID")
    display_order: int = Field(0, ge=0, description="정렬 순서")
    is_active: bool = Field(True, description="활성 여부")


class GalleryGroupUpdateRequest(BaseModel):
    """그룹 수정 요청"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    slug: Optional[str] = Field(None, min_length=1, max_length=255)
    description: Optional[str] = None
    cover_image_id: Optional[uuid.UUID] = None
    display_order: Optional[int] = Field(None, ge=0)
    is_active: Optional[bool] = None


class GalleryGroupResponse(BaseSchema):
    """그룹 응답"""

    id: uuid.UUID
    name: str
    slug: str
    description: Optional[str] = None
    cover_image_id: Optional[uuid.UUID] = None
    display_order: int
    is_active: bool
    created_at: datetime
    updated_at: Optional[datetime] = None


class GalleryGroupListItem(GalleryGroupResponse):
    """그룹 목록 항목 (이미지 수 포함)"""

    image_count: int = 0


# 이미지


class GalleryImageUpdateRequest(BaseModel):
    """이미지 수정 요청

    group_ids가 주어지면 그룹 연결을 교체합니다.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    alt_text: Optional[str] = Field(None, min_length=1, max_length=500)
    description: Optional[str] = None
    display_order: Optional[int] = Field(None, ge=0)
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None
    group_ids: Optional[list[uuid.UUID]] = None


class GalleryImageResponse(BaseSchema):
    """이미지 응답 (그룹 포함)"""

    id: uuid.UUID
    name: str
    alt_text: str
    description: Optional[str] = None
    file_name: str
    original_url: str
    thumbnail_url: Optional[str] = None
    optimized_url: Optional[str] = None
    file_size: int
    width: Optional[int] = None
    height: Optional[int] = None
    mime_type: str
    display_order: int
    is_available: bool
    is_featured: bool
    image_metadata: Optional[dict[str, Any]] = None
    groups: list[GalleryGroupResponse] = Field(default_factory=list)
    created_at: datetime
    updated_at: Optional[datetime] = None


class PublicGalleryImageResponse(BaseSchema):
    """공개 이미지 응답"""

    id: uuid.UUID
    name: str
    alt_text: str
    description: Optional[str] = None
    original_url: str
    thumbnail_url: Optional[str] = None
    optimized_url: Optional[str] = None
    width: Optional[int] = None
    height: Optional[int] = None
    is_featured: bool
    display_order: int


class PublicGalleryGroupResponse(BaseModel):
    """공개 그룹 상세 (이미지 포함)"""

    group: GalleryGroupResponse
    images: list[PublicGalleryImageResponse]


# 벌크


class GalleryBulkUpdateRequest(BaseModel):
    """이미지 벌크 변경 요청"""

    image_ids: list[uuid.UUID] = Field(default_factory=list, max_length=500)
    operation: str = Field(..., description="availability 또는 featured")
    value: bool


class GalleryBulkDeleteRequest(BaseModel):
    """이미지 벌크 삭제 요청"""

    image_ids: list[uuid.UUID] = Field(default_factory=list, max_length=500)


class BulkUpdateResult(BaseModel):
    updated: int


class DeleteResult(BaseModel):
    deleted: int
