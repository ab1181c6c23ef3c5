"""Contact 도메인 예외 정의"""

import uuid
from enum import Enum

from app.core.exceptions import (
    BadRequestException,
    NotFoundException,
    TooManyRequestsException,
)


class ContactErrorCode(str, Enum):
    """문의 도메인 에러 코드"""

    SUBMISSION_NOT_FOUND = "SUBMISSION_NOT_FOUND"
    CONTACT_RATE_LIMITED = "CONTACT_RATE_LIMITED"
    INVALID_ANALYTICS_PERIOD = "INVALID_ANALYTICS_PERIOD"


class SubmissionNotFoundException(NotFoundException):
    """문의를 찾을 수 없는 경우"""

    def __init__(self, submission_id: uuid.UUID):
        super().__init__(
            message="문의를 찾을 수 없습니다.",
            error_code=ContactErrorCode.SUBMISSION_NOT_FOUND,
            detail={"submission_id": str(submission_id)},
        )


class ContactRateLimitedException(TooManyRequestsException):
    """IP별 문의 접수 한도 초과"""

    def __init__(self, window_seconds: int):
        super().__init__(
            message="문의 접수가 너무 많습니다. 잠시 후 다시 시도해주세요.",
            error_code=ContactErrorCode.CONTACT_RATE_LIMITED,
            detail={"retry_after_seconds": window_seconds},
        )


class InvalidAnalyticsPeriodException(BadRequestException):
    """지원하지 않는 분석 기간"""

    def __init__(self, period: str, allowed: list[str]):
        super().__init__(
            message=(
                f"유효하지 않은 기간입니다: {period} "
                f"(허용: {', '.join(allowed)})"
            ),
            error_code=ContactErrorCode.INVALID_ANALYTICS_PERIOD,
            detail={"period": period, "allowed": allowed},
        )
