"""Authors 도메인 스키마 정의"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.core.schemas import BaseSchema

# Request Schemas


class AuthorCreateRequest(BaseModel):
    """저자 생성 요청"""

    name: str = Field(..., min_length=1, max_length=255, description="이름")
    email: EmailStr = Field(..., description="이메일")
    bio: Optional[str] = Field(None, description="소개")
    avatar_url: Optional[str] = Field(None, description="프로필 이미지 URL")


class AuthorUpdateRequest(BaseModel):
    """저자 수정 요청 (부분 수정)"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    avatar_url: Optional[str] = None


# Response Schemas


class AuthorResponse(BaseSchema):
    """저자 응답"""

    id: uuid.UUID
    name: str
    email: str
    bio: Optional[str] = None
    avatar_url: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class AuthorListItem(AuthorResponse):
    """저자 목록 항목 (게시글 수 포함)"""

    posts_count: int = 0


class AuthorDeleteResponse(BaseModel):
    """저자 삭제 결과"""

    deleted: int
