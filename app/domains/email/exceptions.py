"""Email 도메인 예외 정의"""

from enum import Enum
from typing import Optional

from app.core.exceptions import BadRequestException, InternalServerException


class EmailErrorCode(str, Enum):
    """이메일 도메인 에러 코드"""

    EMAIL_DELIVERY_FAILED = "EMAIL_DELIVERY_FAILED"
    EMAIL_INVALID_PROPS = "EMAIL_INVALID_PROPS"
    EMAIL_NOT_CONFIGURED = "EMAIL_NOT_CONFIGURED"


class EmailDeliveryError(InternalServerException):
    """메일 발송 API 호출 실패

    재시도 루프에서 다음 시도로 넘어가기 위해 사용됩니다.
    """

    def __init__(self, reason: str, status_code: Optional[int] = None):
        self.reason = reason
        self.provider_status = status_code
        super().__init__(
            message=f"이메일 발송에 실패했습니다: {reason}",
            error_code=EmailErrorCode.EMAIL_DELIVERY_FAILED,
            detail={"reason": reason, "status_code": status_code},
        )


class InvalidTemplatePropsException(BadRequestException):
    """템플릿 필수 값 누락"""

    def __init__(self, template: str, missing: list[str]):
        self.missing = missing
        super().__init__(
            message=f"템플릿 필수 값이 누락되었습니다: {', '.join(missing)}",
            error_code=EmailErrorCode.EMAIL_INVALID_PROPS,
            detail={"template": template, "missing": missing},
        )
