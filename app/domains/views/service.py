"""Views 도메인 서비스

콘텐츠 조회 기록(IP당 하루 1회)과 관리자 대시보드 분석을 담당합니다.
"""

import uuid
from datetime import datetime
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.context import get_request_id
from app.core.logging import get_logger
from app.core.utils.datetime import (
    AnalyticsPeriod,
    calendar_period_start,
    iter_days,
    now_utc,
    start_of_day,
    start_of_month,
    start_of_week,
)
from app.domains.views.models import ViewContentType, ViewTracking
from app.domains.views.repository import TopContentRow, ViewTrackingRepository
from app.domains.views.schemas import (
    AnalyticsChartPoint,
    AnalyticsResponse,
    AnalyticsStats,
    ContentViewStats,
    RecentView,
)

logger = get_logger(__name__)

TOP_CONTENT_LIMIT = 5
RECENT_VIEWS_LIMIT = 10


class ViewService:
    """조회 기록/분석 서비스"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = ViewTrackingRepository(session)

    async def record_view(
        self,
        content_type: ViewContentType,
        content_id: uuid.UUID,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
        referer: Optional[str] = None,
    ) -> Optional[ViewTracking]:
        """조회 기록

        같은 IP가 오늘(UTC) 이미 조회한 콘텐츠면 기록하지 않습니다.

        Returns:
            생성된 조회 기록, 중복이면 None
        """
        if ip_address and await self.repository.exists_since(
            content_type, content_id, ip_address, start_of_day()
        ):
            logger.debug(
                "Duplicate view skipped",
                extra={
                    "request_id": get_request_id(),
                    "content_type": content_type.value,
                    "content_id": str(content_id),
                },
            )
            return None

        view = ViewTracking(
            content_type=content_type.value,
            content_id=content_id,
            ip_address=ip_address,
            user_agent=user_agent[:1000] if user_agent else None,
            referer=referer[:500] if referer else None,
        )
        return await self.repository.create(view)

    async def get_analytics(
        self, period: AnalyticsPeriod = AnalyticsPeriod.MONTH
    ) -> AnalyticsResponse:
        """대시보드 분석

        기간별 조회수는 달력 기준(오늘 자정, 일요일 시작 주, 월 1일)입니다.
        """
        now = now_utc()
        today_start = start_of_day(now)
        week_start = start_of_week(now)
        month_start = start_of_month(now)

        top_blog_posts = await self._top_content(
            ViewContentType.BLOG_POST, today_start, week_start, month_start
        )
        top_services = await self._top_content(
            ViewContentType.SERVICE, today_start, week_start, month_start
        )

        stats = AnalyticsStats(
            total_blog_posts=await self.repository.count_published_posts(),
            total_services=await self.repository.count_services(),
            total_views=await self.repository.count(),
            total_unique_views=await self.repository.count_unique_visitors(),
            views_today=await self.repository.count(since=today_start),
            views_this_week=await self.repository.count(since=week_start),
            views_this_month=await self.repository.count(since=month_start),
            top_blog_posts=top_blog_posts,
            top_services=top_services,
            recent_views=[
                RecentView(
                    id=view.id,
                    content_type=ViewContentType(view.content_type),
                    content_id=view.content_id,
                    title=title,
                    ip_address=view.ip_address,
                    referer=view.referer,
                    viewed_at=view.viewed_at,
                )
                for view, title in await self.repository.get_recent_with_titles(
                    RECENT_VIEWS_LIMIT
                )
            ],
        )

        period_start = calendar_period_start(period, now)
        daily = await self.repository.get_daily_counts(period_start)
        chart_data = []
        for day in iter_days(period_start.date(), now.date()):
            blog_views = daily.get((day, ViewContentType.BLOG_POST.value), 0)
            service_views = daily.get((day, ViewContentType.SERVICE.value), 0)
            chart_data.append(
                AnalyticsChartPoint(
                    date=day.isoformat(),
                    views=blog_views + service_views,
                    blog_post_views=blog_views,
                    service_views=service_views,
                )
            )

        return AnalyticsResponse(stats=stats, chart_data=chart_data, period=period)

    async def _top_content(
        self,
        content_type: ViewContentType,
        today_start: datetime,
        week_start: datetime,
        month_start: datetime,
    ) -> list[ContentViewStats]:
        rows: list[TopContentRow] = await self.repository.get_top_content(
            content_type,
            today_start=today_start,
            week_start=week_start,
            month_start=month_start,
            limit=TOP_CONTENT_LIMIT,
        )
        return [
            ContentViewStats(
                content_id=row.content_id,
                content_type=content_type,
                title=row.title,
                slug=row.slug,
                total_views=row.total_views,
                unique_views=row.unique_views,
                views_today=row.views_today,
                views_this_week=row.views_this_week,
                views_this_month=row.views_this_month,
            )
            for row in rows
        ]
