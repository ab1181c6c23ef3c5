"""Contact 도메인 서비스

공개 문의 접수(스팸 판별, 알림 메일)와 관리자 문의 관리/분석을 담당합니다.
"""

import uuid
from functools import lru_cache
from typing import Any, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.context import get_request_id
from app.core.exceptions import EmptyIdListException, InvalidBulkActionException
from app.core.logging import get_logger
from app.core.utils.datetime import (
    AnalyticsPeriod,
    now_utc,
    rolling_period_start,
)
from app.core.utils.pagination import SortOrder
from app.core.utils.rate_limit import InMemoryRateLimiter
from app.domains.comments.models import AdminComment, CommentEntityType
from app.domains.comments.repository import CommentRepository
from app.domains.contact.analytics import build_chart_data
from app.domains.contact.exceptions import SubmissionNotFoundException
from app.domains.contact.models import ContactSubmission, SubmissionStatus
from app.domains.contact.repository import (
    ContactSubmissionRepository,
    SubmissionFilters,
)
from app.domains.contact.schemas import (
    ContactAnalyticsResponse,
    ContactStats,
    ContactSubmitRequest,
    RecentSubmission,
    StatusCounts,
    ValueCount,
)
from app.domains.contact.spam import detect_spam
from app.domains.email.service import EmailService, get_email_service

logger = get_logger(__name__)

BULK_ACTIONS = {
    "mark-read": SubmissionStatus.READ,
    "mark-responded": SubmissionStatus.RESPONDED,
    "mark-new": SubmissionStatus.NEW,
}

TOP_VALUES_LIMIT = 5
RECENT_SUBMISSIONS_LIMIT = 10


class ContactService:
    """문의 서비스"""

    def __init__(
        self,
        session: AsyncSession,
        email_service: Optional[EmailService] = None,
    ):
        self.session = session
        self.repository = ContactSubmissionRepository(session)
        self.comment_repository = CommentRepository(session)
        self.email_service = email_service or get_email_service()

    async def submit(
        self,
        data: ContactSubmitRequest,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> Optional[ContactSubmission]:
        """공개 문의 접수

        스팸으로 판별되면 저장하지 않고 None을 반환합니다.
        (호출 측은 정상 접수와 동일하게 응답)

        Args:
            data: 문의 내용
            ip_address: 클라이언트 IP
            user_agent: 클라이언트 User-Agent

        Returns:
            저장된 문의 또는 None (스팸)
        """
        if detect_spam(data.name, str(data.email), data.message):
            logger.warning(
                "Spam contact submission dropped",
                extra={
                    "request_id": get_request_id(),
                    "ip_address": ip_address,
                    "email": str(data.email),
                },
            )
            return None

        submission = await self.repository.create(
            ContactSubmission(
                name=data.name,
                email=str(data.email),
                company=data.company,
                phone=data.phone,
                subject=data.subject,
                message=data.message,
                project_type=data.project_type.value if data.project_type else None,
                budget=data.budget.value if data.budget else None,
                timeline=data.timeline.value if data.timeline else None,
                status=SubmissionStatus.NEW.value,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        )

        logger.info(
            "Contact submission received",
            extra={
                "request_id": get_request_id(),
                "submission_id": str(submission.id),
            },
        )

        return submission

    def notification_props(self, submission: ContactSubmission) -> dict[str, Any]:
        """알림 메일 템플릿 변수 (세션 없이 쓸 수 있도록 값만 복사)"""
        site_url = settings.site_url.rstrip("/")
        return {
            "sender_name": submission.name,
            "sender_email": submission.email,
            "subject": submission.subject,
            "message": submission.message,
            "company": submission.company,
            "phone": submission.phone,
            "project_type": submission.project_type,
            "budget": submission.budget,
            "timeline": submission.timeline,
            "submitted_at": submission.created_at.isoformat(),
            "ip_address": submission.ip_address,
            "user_agent": submission.user_agent,
            "site_url": site_url,
            "form_url": f"{site_url}/admin/contact-submissions/{submission.id}",
        }

    async def send_notifications(
        self, submission_id: uuid.UUID, props: dict[str, Any]
    ) -> None:
        """관리자 알림 및 접수 확인 메일 (실패는 로그만 남김)

        응답 후 백그라운드 작업으로 실행되므로 DB 세션을 사용하지 않습니다.
        """
        try:
            results = await self.email_service.send_contact_notification(props)
            results.append(
                await self.email_service.send_contact_confirmation(
                    props["sender_email"], props
                )
            )
        except Exception as e:
            logger.warning(
                f"Contact notification emails failed: {e}",
                extra={
                    "request_id": get_request_id(),
                    "submission_id": str(submission_id),
                },
            )
            return

        for result in results:
            if not result.success:
                logger.warning(
                    "Contact notification email not delivered",
                    extra={
                        "request_id": get_request_id(),
                        "submission_id": str(submission_id),
                        "recipient": result.recipient,
                        "error": result.error,
                    },
                )

    async def list_submissions(
        self,
        offset: int = 0,
        limit: int = 10,
        filters: Optional[SubmissionFilters] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[Sequence[ContactSubmission], int, StatusCounts]:
        """문의 목록 조회

        Returns:
            (문의 목록, 필터 적용 전체 수, 전체 상태별 집계)
        """
        submissions = await self.repository.get_list(
            offset=offset,
            limit=limit,
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        total = await self.repository.count(filters)
        counts = await self.repository.count_by_status()
        return submissions, total, StatusCounts(**counts)

    async def get_submission(self, submission_id: uuid.UUID) -> ContactSubmission:
        """문의 조회

        Raises:
            SubmissionNotFoundException: 문의가 없는 경우
        """
        submission = await self.repository.get_by_id(submission_id)
        if submission is None:
            raise SubmissionNotFoundException(submission_id)
        return submission

    async def view_submission(
        self, submission_id: uuid.UUID
    ) -> tuple[ContactSubmission, Sequence[AdminComment]]:
        """관리자 문의 상세 조회

        new 상태의 문의는 조회 시 read로 변경됩니다.

        Returns:
            (문의, 코멘트 목록 - 고정 우선, 최신순)
        """
        submission = await self.get_submission(submission_id)
        if submission.status == SubmissionStatus.NEW.value:
            submission.status = SubmissionStatus.READ.value
            submission = await self.repository.update(submission)

        comments = await self.comment_repository.get_for_entity(
            CommentEntityType.CONTACT_SUBMISSION, submission_id
        )
        return submission, comments

    async def update_status(
        self, submission_id: uuid.UUID, status: SubmissionStatus
    ) -> ContactSubmission:
        """문의 상태 변경"""
        submission = await self.get_submission(submission_id)
        submission.status = status.value
        return await self.repository.update(submission)

    async def delete_submission(self, submission_id: uuid.UUID) -> None:
        """문의 삭제"""
        submission = await self.get_submission(submission_id)
        await self.repository.delete(submission)
        logger.info(
            "Contact submission deleted",
            extra={
                "request_id": get_request_id(),
                "submission_id": str(submission_id),
            },
        )

    async def bulk_action(
        self, submission_ids: list[uuid.UUID], action: str
    ) -> int:
        """문의 벌크 상태 변경 (mark-read, mark-responded, mark-new)

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
            InvalidBulkActionException: 지원하지 않는 액션
        """
        if not submission_ids:
            raise EmptyIdListException()
        status = BULK_ACTIONS.get(action)
        if status is None:
            raise InvalidBulkActionException(action, list(BULK_ACTIONS))

        affected = await self.repository.update_status_batch(submission_ids, status)
        logger.info(
            "Contact submissions bulk updated",
            extra={
                "request_id": get_request_id(),
                "action": action,
                "affected": affected,
            },
        )
        return affected

    async def bulk_delete(self, submission_ids: list[uuid.UUID]) -> int:
        """문의 벌크 삭제

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
        """
        if not submission_ids:
            raise EmptyIdListException()
        deleted = await self.repository.delete_batch(submission_ids)
        logger.info(
            "Contact submissions deleted",
            extra={"request_id": get_request_id(), "deleted": deleted},
        )
        return deleted

    async def get_analytics(
        self, period: AnalyticsPeriod = AnalyticsPeriod.MONTH
    ) -> ContactAnalyticsResponse:
        """문의 분석

        통계(전체/상태별/기간별 건수, 평균 응답 시간, 상위 항목, 최근 문의)와
        기간 차트 데이터를 반환합니다.
        """
        now = now_utc()
        counts = await self.repository.count_by_status()

        stats = ContactStats(
            total_submissions=sum(counts.values()),
            new_submissions=counts.get(SubmissionStatus.NEW.value, 0),
            read_submissions=counts.get(SubmissionStatus.READ.value, 0),
            responded_submissions=counts.get(SubmissionStatus.RESPONDED.value, 0),
            submissions_today=await self.repository.count_since(
                rolling_period_start(AnalyticsPeriod.TODAY, now)
            ),
            submissions_this_week=await self.repository.count_since(
                rolling_period_start(AnalyticsPeriod.WEEK, now)
            ),
            submissions_this_month=await self.repository.count_since(
                rolling_period_start(AnalyticsPeriod.MONTH, now)
            ),
            avg_response_time=round(
                await self.repository.average_response_hours(), 1
            ),
            top_project_types=[
                ValueCount(value=value, count=count)
                for value, count in await self.repository.top_values(
                    "project_type", TOP_VALUES_LIMIT
                )
            ],
            top_budget_ranges=[
                ValueCount(value=value, count=count)
                for value, count in await self.repository.top_values(
                    "budget", TOP_VALUES_LIMIT
                )
            ],
            recent_submissions=[
                RecentSubmission.model_validate(s)
                for s in await self.repository.get_recent(RECENT_SUBMISSIONS_LIMIT)
            ],
        )

        rows = await self.repository.get_created_between(
            rolling_period_start(period, now), now
        )
        return ContactAnalyticsResponse(
            stats=stats,
            chart_data=build_chart_data(rows, period),
            period=period,
        )


@lru_cache
def get_contact_rate_limiter() -> InMemoryRateLimiter:
    """문의 접수 IP별 rate limiter (애플리케이션 단위 싱글톤)"""
    return InMemoryRateLimiter(
        max_requests=settings.contact_rate_limit_count,
        window_seconds=settings.contact_rate_limit_window_seconds,
    )
