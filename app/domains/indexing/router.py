"""Indexing 도메인 라우터 (관리자)"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_admin_api_key
from app.core.schemas import APIResponse, create_response
from app.domains.indexing.client import GoogleIndexingClient, get_indexing_client
from app.domains.indexing.exceptions import (
    IndexingInvalidRequestException,
    IndexingNotConfiguredException,
    IndexingSlugRequiredException,
    IndexingUnknownActionException,
)
from app.domains.indexing.schemas import (
    IndexingAction,
    IndexingReportResponse,
    IndexingRequest,
    IndexingStatusResponse,
)
from app.domains.indexing.service import IndexingService

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])


def get_indexing_service(
    session: AsyncSession = Depends(get_db),
    client: GoogleIndexingClient = Depends(get_indexing_client),
) -> IndexingService:
    """IndexingService 의존성"""
    return IndexingService(session, client)


@router.get("", response_model=APIResponse[IndexingStatusResponse])
async def get_indexing_status(
    service: IndexingService = Depends(get_indexing_service),
):
    """인덱싱 설정 상태 조회"""
    return create_response(
        data=IndexingStatusResponse(
            is_configured=service.is_configured,
            has_client_email=bool(service.client.client_email),
            has_private_key=bool(service.client.private_key),
        ),
        message="인덱싱 설정 상태를 조회했습니다.",
    )


@router.post("", response_model=APIResponse[IndexingReportResponse])
async def notify_indexing(
    data: IndexingRequest,
    service: IndexingService = Depends(get_indexing_service),
):
    """검색 엔진 URL 알림

    - notify_all: 모든 공개 URL
    - notify_blog_post / notify_service: slug 필수
    - notify_site_settings: 정적 페이지
    - notify_urls: urls 필수
    - bulk_notify: content_type, content_ids 필수
    """
    if not service.is_configured:
        raise IndexingNotConfiguredException()

    try:
        action = IndexingAction(data.action)
    except ValueError:
        raise IndexingUnknownActionException(data.action)

    if action == IndexingAction.NOTIFY_ALL:
        report = await service.notify_all()
    elif action == IndexingAction.NOTIFY_BLOG_POST:
        if not data.slug:
            raise IndexingSlugRequiredException(action.value)
        report = await service.notify_blog_post(data.slug, data.operation)
    elif action == IndexingAction.NOTIFY_SERVICE:
        if not data.slug:
            raise IndexingSlugRequiredException(action.value)
        report = await service.notify_service(data.slug, data.operation)
    elif action == IndexingAction.NOTIFY_SITE_SETTINGS:
        report = await service.notify_site_settings()
    elif action == IndexingAction.NOTIFY_URLS:
        if not data.urls:
            raise IndexingInvalidRequestException("URL 목록이 필요합니다.")
        report = await service.notify_urls(data.urls, data.operation)
    else:
        if data.content_type is None or data.content_ids is None:
            raise IndexingInvalidRequestException(
                "content_type과 content_ids가 필요합니다."
            )
        report = await service.notify_bulk(
            data.content_type, data.content_ids, data.operation
        )

    return create_response(
        data=IndexingReportResponse.from_report(report),
        message=(
            f"{report.success_count}/{report.total_urls}개 URL을 알렸습니다."
        ),
    )
