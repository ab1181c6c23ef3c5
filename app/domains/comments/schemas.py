"""Comments 도메인 스키마 정의"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.core.schemas import BaseSchema
from app.domains.comments.models import CommentEntityType


class CommentCreateRequest(BaseModel):
    """코멘트 생성 요청"""

    entity_type: CommentEntityType = Field(..., description="대상 유형")
    entity_id: uuid.UUID = Field(..., description="대상 ID")
    content: str = Field(..., min_length=1, max_length=10000, description="내용")
    is_internal: bool = Field(True, description="내부 메모 여부")
    is_pinned: bool = Field(False, description="고정 여부")


class CommentUpdateRequest(BaseModel):
    """코멘트 수정 요청"""

    content: Optional[str] = Field(None, min_length=1, max_length=10000)
    is_pinned: Optional[bool] = None
    is_internal: Optional[bool] = None


class CommentResponse(BaseSchema):
    """코멘트 응답"""

    id: uuid.UUID
    entity_type: CommentEntityType
    entity_id: uuid.UUID
    content: str
    author_name: str
    is_internal: bool
    is_pinned: bool
    created_at: datetime
    updated_at: Optional[datetime] = None
