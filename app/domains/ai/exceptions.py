"""AI 도메인 예외 정의"""

from enum import Enum
from typing import Optional

from app.core.exceptions import BadRequestException, InternalServerException


class AIErrorCode(str, Enum):
    """AI 도메인 에러 코드"""

    CONTENT_GENERATION_FAILED = "CONTENT_GENERATION_FAILED"
    IMAGE_GENERATION_FAILED = "IMAGE_GENERATION_FAILED"
    INVALID_IMAGE_PARAMS = "INVALID_IMAGE_PARAMS"
    AI_NOT_CONFIGURED = "AI_NOT_CONFIGURED"
    STREAMING_NOT_SUPPORTED = "STREAMING_NOT_SUPPORTED"


class ContentGenerationFailedException(InternalServerException):
    """콘텐츠 생성 실패

    티어의 모든 모델 호출이 실패했을 때 발생합니다.
    """

    def __init__(self, content_type: str, detail_msg: Optional[str] = None):
        super().__init__(
            message="콘텐츠 생성에 실패했습니다.",
            error_code=AIErrorCode.CONTENT_GENERATION_FAILED,
            detail={"type": content_type, "info": detail_msg},
        )


class ImageGenerationFailedException(InternalServerException):
    """이미지 생성 실패"""

    def __init__(self, model: str, detail_msg: Optional[str] = None):
        super().__init__(
            message="이미지 생성에 실패했습니다.",
            error_code=AIErrorCode.IMAGE_GENERATION_FAILED,
            detail={"model": model, "info": detail_msg},
        )


class InvalidImageParamsException(BadRequestException):
    """모델이 지원하지 않는 크기/품질 조합"""

    def __init__(self, model: str, field: str, value: str, allowed: list[str]):
        super().__init__(
            message=f"{model} 모델에서 지원하지 않는 {field}입니다: {value}",
            error_code=AIErrorCode.INVALID_IMAGE_PARAMS,
            detail={"model": model, "field": field, "value": value, "allowed": allowed},
        )


class AINotConfiguredException(InternalServerException):
    """이미지 생성용 API 키 미설정"""

    def __init__(self):
        super().__init__(
            message="이미지 생성 API 키가 설정되지 않았습니다.",
            error_code=AIErrorCode.AI_NOT_CONFIGURED,
        )


class StreamingNotSupportedException(BadRequestException):
    """스트리밍을 지원하지 않는 콘텐츠 유형"""

    def __init__(self, content_type: str):
        super().__init__(
            message=f"{content_type} 유형은 스트리밍 생성을 지원하지 않습니다.",
            error_code=AIErrorCode.STREAMING_NOT_SUPPORTED,
            detail={"type": content_type},
        )
