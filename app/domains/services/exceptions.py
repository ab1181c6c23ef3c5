"""Services 도메인 예외 정의"""

import uuid
from enum import Enum

from app.core.exceptions import ConflictException, NotFoundException


class ServiceErrorCode(str, Enum):
    """서비스 도메인 에러 코드"""

    SERVICE_NOT_FOUND = "SERVICE_NOT_FOUND"
    SERVICE_SLUG_EXISTS = "SERVICE_SLUG_EXISTS"


class ServiceNotFoundException(NotFoundException):
    """서비스를 찾을 수 없는 경우"""

    def __init__(
        self, service_id: uuid.UUID | None = None, slug: str | None = None
    ):
        detail = {}
        if service_id:
            detail["service_id"] = str(service_id)
        if slug:
            detail["slug"] = slug
        super().__init__(
            message="서비스를 찾을 수 없습니다.",
            error_code=ServiceErrorCode.SERVICE_NOT_FOUND,
            detail=detail,
        )


class ServiceSlugExistsException(ConflictException):
    """이미 사용 중인 서비스 슬러그"""

    def __init__(self, slug: str):
        super().__init__(
            message="이미 사용 중인 슬러그입니다.",
            error_code=ServiceErrorCode.SERVICE_SLUG_EXISTS,
            detail={"slug": slug},
        )
