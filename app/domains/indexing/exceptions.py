"""Indexing 도메인 예외 정의"""

from enum import Enum

from app.core.exceptions import BadRequestException, InternalServerException


class IndexingErrorCode(str, Enum):
    """인덱싱 도메인 에러 코드"""

    INDEXING_NOT_CONFIGURED = "INDEXING_NOT_CONFIGURED"
    INDEXING_AUTH_FAILED = "INDEXING_AUTH_FAILED"
    INDEXING_SLUG_REQUIRED = "INDEXING_SLUG_REQUIRED"
    INDEXING_INVALID_REQUEST = "INDEXING_INVALID_REQUEST"
    INDEXING_UNKNOWN_ACTION = "INDEXING_UNKNOWN_ACTION"


class IndexingNotConfiguredException(InternalServerException):
    """Google 서비스 계정 정보가 설정되지 않은 경우"""

    def __init__(self):
        super().__init__(
            message=(
                "Google Indexing이 설정되지 않았습니다. "
                "GOOGLE_CLIENT_EMAIL, GOOGLE_PRIVATE_KEY를 설정해주세요."
            ),
            error_code=IndexingErrorCode.INDEXING_NOT_CONFIGURED,
        )


class IndexingAuthException(InternalServerException):
    """서비스 계정 토큰 발급 실패"""

    def __init__(self, reason: str):
        super().__init__(
            message="Google 인증 토큰 발급에 실패했습니다.",
            error_code=IndexingErrorCode.INDEXING_AUTH_FAILED,
            detail={"reason": reason},
        )


class IndexingSlugRequiredException(BadRequestException):
    """슬러그가 필요한 액션에 슬러그가 없는 경우"""

    def __init__(self, action: str):
        super().__init__(
            message="슬러그가 필요합니다.",
            error_code=IndexingErrorCode.INDEXING_SLUG_REQUIRED,
            detail={"action": action},
        )


class IndexingInvalidRequestException(BadRequestException):
    """액션에 필요한 파라미터가 잘못된 경우"""

    def __init__(self, message: str):
        super().__init__(
            message=message,
            error_code=IndexingErrorCode.INDEXING_INVALID_REQUEST,
        )


class IndexingUnknownActionException(BadRequestException):
    """지원하지 않는 액션"""

    def __init__(self, action: str):
        super().__init__(
            message=f"알 수 없는 액션입니다: {action}",
            error_code=IndexingErrorCode.INDEXING_UNKNOWN_ACTION,
            detail={"action": action},
        )
