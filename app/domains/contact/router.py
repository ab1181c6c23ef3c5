"""Contact 도메인 라우터

공개 문의 접수 API와 관리자 문의 관리 API를 제공합니다.
"""

import uuid
from datetime import date
from typing import Optional

from fastapi import APIRouter, BackgroundTasks, Depends, Header, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_client_ip, verify_admin_api_key
from app.core.schemas import (
    APIResponse,
    BulkActionRequest,
    BulkIdsRequest,
    BulkResult,
    create_response,
)
from app.core.utils.datetime import AnalyticsPeriod
from app.core.utils.pagination import PageParams, SortParams
from app.core.utils.rate_limit import InMemoryRateLimiter
from app.domains.comments.schemas import CommentResponse
from app.domains.contact.exceptions import (
    ContactRateLimitedException,
    InvalidAnalyticsPeriodException,
)
from app.domains.contact.models import SubmissionStatus
from app.domains.contact.repository import SubmissionFilters
from app.domains.contact.schemas import (
    ContactAnalyticsResponse,
    ContactSubmissionDetailResponse,
    ContactSubmissionListResponse,
    ContactSubmissionResponse,
    ContactSubmitRequest,
    ContactSubmitResponse,
    DeleteResult,
    SubmissionStatusUpdateRequest,
)
from app.domains.contact.service import ContactService, get_contact_rate_limiter
from app.domains.email.service import EmailService, get_email_service

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])
public_router = APIRouter()

SUBMIT_SUCCESS_MESSAGE = "문의가 접수되었습니다. 빠른 시일 내에 답변드리겠습니다."


def get_contact_service(
    session: AsyncSession = Depends(get_db),
    email_service: EmailService = Depends(get_email_service),
) -> ContactService:
    """ContactService 의존성"""
    return ContactService(session, email_service)


async def enforce_contact_rate_limit(
    client_ip: Optional[str] = Depends(get_client_ip),
    limiter: InMemoryRateLimiter = Depends(get_contact_rate_limiter),
) -> Optional[str]:
    """IP별 문의 접수 한도 확인

    Returns:
        클라이언트 IP

    Raises:
        ContactRateLimitedException: 한도 초과 시 (429)
    """
    if not limiter.check(client_ip or "unknown"):
        raise ContactRateLimitedException(int(limiter.window_seconds))
    return client_ip


# 공개


@public_router.post(
    "",
    response_model=APIResponse[ContactSubmitResponse],
    status_code=status.HTTP_201_CREATED,
)
async def submit_contact(
    data: ContactSubmitRequest,
    background_tasks: BackgroundTasks,
    client_ip: Optional[str] = Depends(enforce_contact_rate_limit),
    user_agent: Optional[str] = Header(None, alias="User-Agent"),
    session: AsyncSession = Depends(get_db),
    service: ContactService = Depends(get_contact_service),
):
    """문의 접수

    IP당 15분에 5회로 제한됩니다. 스팸으로 판별된 문의도 동일하게 응답합니다.
    알림 메일은 저장이 커밋된 뒤 응답과 별도로 발송됩니다.
    """
    submission = await service.submit(
        data, ip_address=client_ip, user_agent=user_agent
    )
    if submission is not None:
        props = service.notification_props(submission)
        # 메일 발송 전에 저장을 확정
        await session.commit()
        background_tasks.add_task(service.send_notifications, submission.id, props)
    return create_response(
        data=ContactSubmitResponse(
            submission_id=submission.id if submission else None
        ),
        message=SUBMIT_SUCCESS_MESSAGE,
    )


# 관리자


@router.get("", response_model=ContactSubmissionListResponse)
async def list_submissions(
    page_params: PageParams = Depends(),
    sort_params: SortParams = Depends(),
    status_filter: Optional[SubmissionStatus] = Query(
        None, alias="status", description="처리 상태"
    ),
    search: Optional[str] = Query(None, max_length=200, description="검색어"),
    project_type: Optional[str] = Query(None, description="프로젝트 유형"),
    budget: Optional[str] = Query(None, description="예산 범위"),
    date_from: Optional[date] = Query(None, description="시작일 (포함)"),
    date_to: Optional[date] = Query(None, description="종료일 (해당 일 전체 포함)"),
    service: ContactService = Depends(get_contact_service),
):
    """문의 목록 조회 (상태별 집계 포함)"""
    filters = SubmissionFilters(
        status=status_filter,
        search=search,
        project_type=project_type,
        budget=budget,
        date_from=date_from,
        date_to=date_to,
    )
    submissions, total, counts = await service.list_submissions(
        offset=page_params.offset,
        limit=page_params.limit,
        filters=filters,
        sort_by=sort_params.sort_by,
        sort_order=sort_params.sort_order,
    )
    return ContactSubmissionListResponse.build(
        data=[ContactSubmissionResponse.model_validate(s) for s in submissions],
        total=total,
        page=page_params.page,
        limit=page_params.limit,
        status_counts=counts,
        message="문의 목록을 조회했습니다.",
    )


@router.patch("", response_model=APIResponse[BulkResult])
async def bulk_update_submissions(
    data: BulkActionRequest,
    service: ContactService = Depends(get_contact_service),
):
    """문의 벌크 상태 변경 (mark-read, mark-responded, mark-new)"""
    affected = await service.bulk_action(data.ids, data.action)
    return create_response(
        data=BulkResult(affected=affected),
        message=f"{affected}건의 문의를 변경했습니다.",
    )


@router.delete("", response_model=APIResponse[DeleteResult])
async def bulk_delete_submissions(
    data: BulkIdsRequest,
    service: ContactService = Depends(get_contact_service),
):
    """문의 벌크 삭제"""
    deleted = await service.bulk_delete(data.ids)
    return create_response(
        data=DeleteResult(deleted=deleted),
        message=f"{deleted}건의 문의를 삭제했습니다.",
    )


@router.get("/analytics", response_model=APIResponse[ContactAnalyticsResponse])
async def get_contact_analytics(
    period: str = Query(
        AnalyticsPeriod.MONTH.value,
        description="기간 (today, week, month, quarter, year)",
    ),
    service: ContactService = Depends(get_contact_service),
):
    """문의 분석 통계"""
    allowed = [p.value for p in AnalyticsPeriod]
    if period not in allowed:
        raise InvalidAnalyticsPeriodException(period, allowed)

    analytics = await service.get_analytics(AnalyticsPeriod(period))
    return create_response(data=analytics, message="문의 분석을 조회했습니다.")


@router.get(
    "/{submission_id}",
    response_model=APIResponse[ContactSubmissionDetailResponse],
)
async def get_submission(
    submission_id: uuid.UUID,
    service: ContactService = Depends(get_contact_service),
):
    """문의 상세 조회 (new 상태는 read로 변경)"""
    submission, comments = await service.view_submission(submission_id)
    detail = ContactSubmissionDetailResponse.model_validate(
        {
            **ContactSubmissionResponse.model_validate(submission).model_dump(),
            "comments": [CommentResponse.model_validate(c) for c in comments],
        }
    )
    return create_response(data=detail, message="문의를 조회했습니다.")


@router.patch(
    "/{submission_id}", response_model=APIResponse[ContactSubmissionResponse]
)
async def update_submission_status(
    submission_id: uuid.UUID,
    data: SubmissionStatusUpdateRequest,
    service: ContactService = Depends(get_contact_service),
):
    """문의 상태 변경"""
    submission = await service.update_status(submission_id, data.status)
    return create_response(
        data=ContactSubmissionResponse.model_validate(submission),
        message="문의 상태를 변경했습니다.",
    )


@router.delete("/{submission_id}", response_model=APIResponse[None])
async def delete_submission(
    submission_id: uuid.UUID,
    service: ContactService = Depends(get_contact_service),
):
    """문의 삭제"""
    await service.delete_submission(submission_id)
    return create_response(data=None, message="문의를 삭제했습니다.")
