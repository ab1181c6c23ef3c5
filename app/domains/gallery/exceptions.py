"""Gallery 도메인 예외 정의"""

import uuid
from enum import Enum
from typing import Optional

from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
)


class GalleryErrorCode(str, Enum):
    """갤러리 도메인 에러 코드"""

    GALLERY_IMAGE_NOT_FOUND = "GALLERY_IMAGE_NOT_FOUND"
    GALLERY_IMAGES_NOT_FOUND = "GALLERY_IMAGES_NOT_FOUND"
    GALLERY_GROUP_NOT_FOUND = "GALLERY_GROUP_NOT_FOUND"
    GALLERY_GROUP_CONFLICT = "GALLERY_GROUP_CONFLICT"
    INVALID_GROUP_IDS = "INVALID_GROUP_IDS"
    INVALID_BULK_OPERATION = "INVALID_BULK_OPERATION"


class GalleryImageNotFoundException(NotFoundException):
    """이미지를 찾을 수 없는 경우"""

    def __init__(self, image_id: uuid.UUID):
        super().__init__(
            message="이미지를 찾을 수 없습니다.",
            error_code=GalleryErrorCode.GALLERY_IMAGE_NOT_FOUND,
            detail={"image_id": str(image_id)},
        )


class GalleryImagesNotFoundException(NotFoundException):
    """벌크 작업 대상 이미지가 하나도 없는 경우"""

    def __init__(self):
        super().__init__(
            message="해당 ID의 이미지를 찾을 수 없습니다.",
            error_code=GalleryErrorCode.GALLERY_IMAGES_NOT_FOUND,
        )


class GalleryGroupNotFoundException(NotFoundException):
    """그룹을 찾을 수 없는 경우"""

    def __init__(
        self, group_id: Optional[uuid.UUID] = None, slug: Optional[str] = None
    ):
        detail = {}
        if group_id:
            detail["group_id"] = str(group_id)
        if slug:
            detail["slug"] = slug
        super().__init__(
            message="갤러리 그룹을 찾을 수 없습니다.",
            error_code=GalleryErrorCode.GALLERY_GROUP_NOT_FOUND,
            detail=detail,
        )


class GalleryGroupConflictException(ConflictException):
    """그룹 슬러그 중복"""

    def __init__(self, slug: str):
        super().__init__(
            message=f"이미 사용 중인 슬러그입니다: {slug}",
            error_code=GalleryErrorCode.GALLERY_GROUP_CONFLICT,
            detail={"slug": slug},
        )


class InvalidGroupIdsException(BadRequestException):
    """group_ids 형식 오류 또는 존재하지 않는 그룹"""

    def __init__(self, reason: str):
        super().__init__(
            message=f"유효하지 않은 그룹 ID 목록입니다: {reason}",
            error_code=GalleryErrorCode.INVALID_GROUP_IDS,
        )


class InvalidBulkOperationException(BadRequestException):
    """지원하지 않는 벌크 작업"""

    def __init__(self, operation: str, allowed: list[str]):
        super().__init__(
            message=f"유효하지 않은 작업입니다: {operation}",
            error_code=GalleryErrorCode.INVALID_BULK_OPERATION,
            detail={"operation": operation, "allowed": allowed},
        )
