"""Uploads 도메인 스키마 정의"""

from pydantic import BaseModel, Field


class UploadResponse(BaseModel):
    """업로드 결과"""

    url: str = Field(..., description="공개 URL")
    pathname: str = Field(..., description="저장소 객체 키")
    size: int = Field(..., description="파일 크기 (bytes)")
    content_type: str = Field(..., description="MIME 타입")
