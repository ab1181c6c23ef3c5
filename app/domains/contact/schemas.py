"""Contact 도메인 스키마 정의"""

import uuid
from datetime import datetime
from enum import Enum
from typing import Optional

from pydantic import BaseModel, EmailStr, Field

from app.core.schemas import BaseSchema, ListAPIResponse, PageMeta
from app.core.utils.datetime import AnalyticsPeriod
from app.domains.comments.schemas import CommentResponse
from app.domains.contact.models import SubmissionStatus


class ProjectType(str, Enum):
    """프로젝트 유형"""

    WEB_DEVELOPMENT = "web-development"
    MOBILE_APP = "mobile-app"
    UI_UX_DESIGN = "ui-ux-design"
    CONSULTING = "consulting"
    MAINTENANCE = "maintenance"
    OTHER = "other"


class BudgetRange(str, Enum):
    """예산 범위"""

    UNDER_10K = "under-10k"
    FROM_10K_TO_25K = "10k-25k"
    FROM_25K_TO_50K = "25k-50k"
    FROM_50K_TO_100K = "50k-100k"
    OVER_100K = "100k+"
    NOT_SURE = "not-sure"


class ProjectTimeline(str, Enum):
    """희망 일정"""

    ASAP = "asap"
    ONE_TO_TWO_MONTHS = "1-2-months"
    THREE_TO_SIX_MONTHS = "3-6-months"
    SIX_TO_TWELVE_MONTHS = "6-12-months"
    FLEXIBLE = "flexible"


class ContactSubmitRequest(BaseModel):
    """문의 접수 요청 (공개)"""

    name: str = Field(..., min_length=2, max_length=100, description="이름")
    email: EmailStr = Field(..., description="이메일")
    subject: str = Field(..., min_length=1, max_length=255, description="제목")
    message: str = Field(..., min_length=10, max_length=5000, description="내용")
    company: Optional[str] = Field(None, max_length=255, description="회사")
    phone: Optional[str] = Field(
        None, max_length=50, pattern=r"^[\d\s()+-]+$", description="전화번호"
    )
    project_type: Optional[ProjectType] = Field(None, description="프로젝트 유형")
    budget: Optional[BudgetRange] = Field(None, description="예산 범위")
    timeline: Optional[ProjectTimeline] = Field(None, description="희망 일정")


class ContactSubmitResponse(BaseModel):
    """문의 접수 결과"""

    submission_id: Optional[uuid.UUID] = None


class SubmissionStatusUpdateRequest(BaseModel):
    """문의 상태 변경 요청"""

    status: SubmissionStatus


class ContactSubmissionResponse(BaseSchema):
    """문의 응답"""

    id: uuid.UUID
    name: str
    email: str
    company: Optional[str] = None
    phone: Optional[str] = None
    subject: str
    message: str
    project_type: Optional[str] = None
    budget: Optional[str] = None
    timeline: Optional[str] = None
    status: SubmissionStatus
    ip_address: Optional[str] = None
    user_agent: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class ContactSubmissionDetailResponse(ContactSubmissionResponse):
    """문의 상세 (관리자 코멘트 포함)"""

    comments: list[CommentResponse] = Field(default_factory=list)


class StatusCounts(BaseModel):
    """상태별 문의 수"""

    new: int = 0
    read: int = 0
    responded: int = 0


class ContactSubmissionListResponse(ListAPIResponse[ContactSubmissionResponse]):
    """문의 목록 응답 (상태별 집계 포함)"""

    status_counts: StatusCounts

    @classmethod
    def build(
        cls,
        data: list[ContactSubmissionResponse],
        total: int,
        page: int,
        limit: int,
        status_counts: StatusCounts,
        message: str,
    ) -> "ContactSubmissionListResponse":
        return cls(
            message=message,
            data=data,
            meta=PageMeta.build(total=total, page=page, limit=limit),
            status_counts=status_counts,
        )


class DeleteResult(BaseModel):
    """삭제 결과"""

    deleted: int


# 분석


class ValueCount(BaseModel):
    """값별 건수"""

    value: str
    count: int


class RecentSubmission(BaseSchema):
    """최근 문의 요약"""

    id: uuid.UUID
    name: str
    email: str
    subject: str
    status: SubmissionStatus
    created_at: datetime


class ContactStats(BaseModel):
    """문의 통계"""

    total_submissions: int
    new_submissions: int
    read_submissions: int
    responded_submissions: int
    submissions_today: int
    submissions_this_week: int
    submissions_this_month: int
    avg_response_time: float = Field(..., description="평균 응답 시간 (시간)")
    top_project_types: list[ValueCount]
    top_budget_ranges: list[ValueCount]
    recent_submissions: list[RecentSubmission]


class ContactChartPoint(BaseModel):
    """차트 버킷"""

    date: str
    submissions: int = 0
    new_submissions: int = 0
    responded_submissions: int = 0


class ContactAnalyticsResponse(BaseModel):
    """문의 분석 응답"""

    stats: ContactStats
    chart_data: list[ContactChartPoint]
    period: AnalyticsPeriod
