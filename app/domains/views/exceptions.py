"""Views 도메인 예외 정의"""

from enum import Enum

from app.core.exceptions import BadRequestException


class ViewsErrorCode(str, Enum):
    """조회/분석 도메인 에러 코드"""

    INVALID_ANALYTICS_PERIOD = "INVALID_ANALYTICS_PERIOD"


class InvalidAnalyticsPeriodException(BadRequestException):
    """지원하지 않는 분석 기간"""

    def __init__(self, period: str, allowed: list[str]):
        super().__init__(
            message=f"유효하지 않은 기간입니다: {period}",
            error_code=ViewsErrorCode.INVALID_ANALYTICS_PERIOD,
            detail={"period": period, "allowed": allowed},
        )
