"""Views 도메인 라우터

공개 조회 기록 API와 관리자 대시보드 분석 API를 제공합니다.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Header, Query, status
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_client_ip, verify_admin_api_key
from app.core.schemas import APIResponse, create_response
from app.core.utils.datetime import AnalyticsPeriod
from app.domains.views.exceptions import InvalidAnalyticsPeriodException
from app.domains.views.schemas import (
    AnalyticsResponse,
    ViewRecordRequest,
    ViewResponse,
)
from app.domains.views.service import ViewService

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])
public_router = APIRouter()


def get_view_service(session: AsyncSession = Depends(get_db)) -> ViewService:
    """ViewService 의존성"""
    return ViewService(session)


@public_router.post(
    "",
    response_model=APIResponse[ViewResponse],
    status_code=status.HTTP_201_CREATED,
    responses={200: {"description": "오늘 이미 기록된 조회"}},
)
async def record_view(
    data: ViewRecordRequest,
    client_ip: Optional[str] = Depends(get_client_ip),
    user_agent: Optional[str] = Header(None, alias="User-Agent"),
    referer: Optional[str] = Header(None, alias="Referer"),
    service: ViewService = Depends(get_view_service),
):
    """콘텐츠 조회 기록 (IP당 하루 1회)"""
    view = await service.record_view(
        data.content_type,
        data.content_id,
        ip_address=client_ip,
        user_agent=user_agent,
        referer=referer,
    )
    if view is None:
        return JSONResponse(
            status_code=status.HTTP_200_OK,
            content=create_response(
                data=None, message="이미 기록된 조회입니다."
            ).model_dump(mode="json"),
        )
    return create_response(
        data=ViewResponse.model_validate(view), message="조회를 기록했습니다."
    )


@router.get("", response_model=APIResponse[AnalyticsResponse])
async def get_analytics(
    period: str = Query(
        AnalyticsPeriod.MONTH.value,
        description="기간 (today, week, month, quarter, year)",
    ),
    service: ViewService = Depends(get_view_service),
):
    """대시보드 분석 통계"""
    allowed = [p.value for p in AnalyticsPeriod]
    if period not in allowed:
        raise InvalidAnalyticsPeriodException(period, allowed)

    analytics = await service.get_analytics(AnalyticsPeriod(period))
    return create_response(data=analytics, message="분석 통계를 조회했습니다.")
