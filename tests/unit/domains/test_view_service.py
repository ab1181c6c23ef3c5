"""ViewService 단위 테스트"""

import uuid
from datetime import date, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from app.core.utils.datetime import UTC, AnalyticsPeriod
from app.domains.views.models import ViewContentType, ViewTracking
from app.domains.views.repository import TopContentRow
from app.domains.views.service import ViewService

# 2025-05-14는 수요일
NOW = datetime(2025, 5, 14, 15, 0, tzinfo=UTC)


@pytest.fixture
def view_service():
    service = ViewService(MagicMock())
    service.repository = MagicMock()
    return service


class TestRecordView:
    """조회 기록"""

    @pytest.mark.asyncio
    async def test_duplicate_same_day_skipped(self, view_service):
        view_service.repository.exists_since = AsyncMock(return_value=True)
        view_service.repository.create = AsyncMock()

        result = await view_service.record_view(
            ViewContentType.BLOG_POST, uuid.uuid4(), ip_address="1.2.3.4"
        )

        assert result is None
        view_service.repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_without_ip_always_recorded(self, view_service):
        """IP가 없으면 중복 검사 없이 기록"""
        view_service.repository.exists_since = AsyncMock()
        view_service.repository.create = AsyncMock(side_effect=lambda view: view)

        result = await view_service.record_view(ViewContentType.SERVICE, uuid.uuid4())

        assert isinstance(result, ViewTracking)
        assert result.content_type == "service"
        view_service.repository.exists_since.assert_not_called()

    @pytest.mark.asyncio
    async def test_truncates_user_agent_and_referer(self, view_service):
        view_service.repository.exists_since = AsyncMock(return_value=False)
        view_service.repository.create = AsyncMock(side_effect=lambda view: view)

        result = await view_service.record_view(
            ViewContentType.BLOG_POST,
            uuid.uuid4(),
            ip_address="1.2.3.4",
            user_agent="u" * 1500,
            referer="r" * 800,
        )

        assert len(result.user_agent) == 1000
        assert len(result.referer) == 500


class TestAnalytics:
    """대시보드 분석"""

    def _stub_repository(self, view_service, daily):
        repo = view_service.repository
        post_id = uuid.uuid4()
        repo.get_top_content = AsyncMock(
            side_effect=lambda content_type, **kwargs: (
                [
                    TopContentRow(
                        content_id=post_id,
                        title="Popular post",
                        slug="popular-post",
                        total_views=9,
                        unique_views=4,
                        views_today=1,
                        views_this_week=3,
                        views_this_month=9,
                    )
                ]
                if content_type == ViewContentType.BLOG_POST
                else []
            )
        )
        repo.count_published_posts = AsyncMock(return_value=3)
        repo.count_services = AsyncMock(return_value=2)
        repo.count = AsyncMock(return_value=12)
        repo.count_unique_visitors = AsyncMock(return_value=5)
        repo.get_recent_with_titles = AsyncMock(return_value=[])
        repo.get_daily_counts = AsyncMock(return_value=daily)
        return repo

    @pytest.mark.asyncio
    async def test_week_chart_fills_missing_days(self, view_service):
        """주 시작(일요일)부터 오늘까지 날짜별로 0을 채움"""
        repo = self._stub_repository(
            view_service,
            {
                (date(2025, 5, 12), "blog_post"): 2,
                (date(2025, 5, 12), "service"): 1,
                (date(2025, 5, 14), "service"): 4,
            },
        )

        with patch("app.domains.views.service.now_utc", return_value=NOW):
            result = await view_service.get_analytics(AnalyticsPeriod.WEEK)

        assert [p.date for p in result.chart_data] == [
            "2025-05-11",
            "2025-05-12",
            "2025-05-13",
            "2025-05-14",
        ]
        assert [p.views for p in result.chart_data] == [0, 3, 0, 4]
        assert result.chart_data[1].blog_post_views == 2
        assert result.chart_data[3].service_views == 4
        repo.get_daily_counts.assert_awaited_once_with(
            datetime(2025, 5, 11, tzinfo=UTC)
        )

    @pytest.mark.asyncio
    async def test_stats_use_calendar_boundaries(self, view_service):
        repo = self._stub_repository(view_service, {})

        with patch("app.domains.views.service.now_utc", return_value=NOW):
            result = await view_service.get_analytics(AnalyticsPeriod.MONTH)

        since_values = [c.kwargs.get("since") for c in repo.count.await_args_list]
        assert since_values == [
            None,
            datetime(2025, 5, 14, tzinfo=UTC),
            datetime(2025, 5, 11, tzinfo=UTC),
            datetime(2025, 5, 1, tzinfo=UTC),
        ]
        assert result.stats.total_blog_posts == 3
        assert result.stats.top_blog_posts[0].slug == "popular-post"
        assert result.stats.top_blog_posts[0].content_type == ViewContentType.BLOG_POST
        assert result.stats.top_services == []
        assert len(result.chart_data) == 14
        assert result.period == AnalyticsPeriod.MONTH
