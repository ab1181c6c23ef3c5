"""Views 도메인 스키마 정의"""

import uuid
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.core.schemas import BaseSchema
from app.core.utils.datetime import AnalyticsPeriod
from app.domains.views.models import ViewContentType


class ViewRecordRequest(BaseModel):
    """조회 기록 요청"""

    content_type: ViewContentType = Field(..., description="blog_post 또는 service")
    content_id: uuid.UUID = Field(..., description="콘텐츠 ID")


class ViewResponse(BaseSchema):
    """조회 기록 응답"""

    id: uuid.UUID
    content_type: ViewContentType
    content_id: uuid.UUID
    viewed_at: datetime


class ContentViewStats(BaseModel):
    """콘텐츠별 조회 통계"""

    content_id: uuid.UUID
    content_type: ViewContentType
    title: str
    slug: str
    total_views: int
    unique_views: int
    views_today: int
    views_this_week: int
    views_this_month: int


class RecentView(BaseModel):
    """최근 조회"""

    id: uuid.UUID
    content_type: ViewContentType
    content_id: uuid.UUID
    title: Optional[str] = None
    ip_address: Optional[str] = None
    referer: Optional[str] = None
    viewed_at: datetime


class AnalyticsStats(BaseModel):
    """대시보드 통계"""

    total_blog_posts: int
    total_services: int
    total_views: int
    total_unique_views: int
    views_today: int
    views_this_week: int
    views_this_month: int
    top_blog_posts: list[ContentViewStats]
    top_services: list[ContentViewStats]
    recent_views: list[RecentView]


class AnalyticsChartPoint(BaseModel):
    """일별 조회수"""

    date: str
    views: int = 0
    blog_post_views: int = 0
    service_views: int = 0


class AnalyticsResponse(BaseModel):
    """대시보드 분석 응답"""

    stats: AnalyticsStats
    chart_data: list[AnalyticsChartPoint]
    period: AnalyticsPeriod
