"""공통 의존성 함수 정의

이 모듈은 FastAPI 엔드포인트에서 사용되는 공통 의존성 함수들을 정의합니다.
"""

import secrets
from typing import Optional

from fastapi import Header, Request

from app.core.config import settings
from app.core.exceptions import (
    ErrorCode,
    ForbiddenException,
    UnauthorizedException,
)


async def verify_admin_api_key(
    x_admin_api_key: Optional[str] = Header(None, alias="X-Admin-Api-Key"),
) -> None:
    """관리자 API Key 검증

    Args:
        x_admin_api_key: 요청 헤더의 X-Admin-Api-Key 값

    Raises:
        UnauthorizedException: API Key가 없는 경우 (401)
        ForbiddenException: API Key가 유효하지 않은 경우 (403)

    Example:
        @router.get("/blog", dependencies=[Depends(verify_admin_api_key)])
        async def list_posts():
            ...
    """
    if not x_admin_api_key:
        raise UnauthorizedException(
            message="관리자 인증이 필요합니다.",
            error_code=ErrorCode.MISSING_API_KEY,
        )
    if not secrets.compare_digest(x_admin_api_key, settings.admin_api_key):
        raise ForbiddenException(
            message="유효하지 않은 API 키입니다.",
            error_code=ErrorCode.INVALID_API_KEY,
        )


async def get_admin_user(
    x_admin_user: Optional[str] = Header(None, alias="X-Admin-User"),
) -> str:
    """요청한 관리자 이름 (코멘트 작성자 등 기록용)"""
    return (x_admin_user or "admin").strip()[:255] or "admin"


def resolve_client_ip(request: Request) -> Optional[str]:
    """클라이언트 IP 추출

    프록시 환경을 고려해 x-forwarded-for(첫 번째 홉), x-real-ip,
    소켓 주소 순으로 확인합니다.
    """
    forwarded_for = request.headers.get("x-forwarded-for")
    if forwarded_for:
        first_hop = forwarded_for.split(",")[0].strip()
        if first_hop:
            return first_hop

    real_ip = request.headers.get("x-real-ip")
    if real_ip:
        return real_ip.strip()

    return request.client.host if request.client else None


async def get_client_ip(request: Request) -> Optional[str]:
    """클라이언트 IP 의존성"""
    return resolve_client_ip(request)
