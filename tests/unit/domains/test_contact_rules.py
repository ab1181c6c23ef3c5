"""문의 스팸 판별 및 분석 차트 집계 테스트"""

from datetime import datetime

import pytest

from app.core.utils.datetime import UTC, AnalyticsPeriod
from app.domains.contact.analytics import bucket_key, build_chart_data
from app.domains.contact.spam import detect_spam

LEGIT_MESSAGE = "We would like a quote for redesigning our marketing website."


class TestDetectSpam:
    """스팸 휴리스틱 테스트"""

    def test_legitimate_message(self):
        assert detect_spam("Jane Doe", "jane@example.com", LEGIT_MESSAGE) is False

    @pytest.mark.parametrize(
        "name, email, message",
        [
            ("Jane", "jane@example.com", "Try our CASINO bonus for your website today"),
            ("Lottery Winner", "jane@example.com", LEGIT_MESSAGE),
            ("Jane", "jane@example.com", "Click here to claim your discount now"),
            ("Jane", "jane@example.com", "It is 100% free for the first month"),
        ],
    )
    def test_keywords(self, name, email, message):
        """금지 키워드는 이름/이메일/본문 어디든 스팸"""
        assert detect_spam(name, email, message) is True

    def test_url_limit(self):
        """URL 2개까지는 허용, 3개부터 스팸"""
        two = "See https://a.example and http://b.example for references please"
        three = two + " and https://c.example"

        assert detect_spam("Jane", "jane@example.com", two) is False
        assert detect_spam("Jane", "jane@example.com", three) is True

    def test_repetitive_message(self):
        """10단어 초과 본문에서 고유 단어 비율이 0.5 미만이면 스팸"""
        message = "buy now " * 6

        assert detect_spam("Jane", "jane@example.com", message) is True

    def test_short_repetitive_message_allowed(self):
        """10단어 이하는 반복 검사 제외"""
        assert detect_spam("Jane", "jane@example.com", "hello " * 10) is False


class TestChartBuckets:
    """기간별 버킷 키 테스트"""

    created_at = datetime(2025, 5, 14, 15, 42, tzinfo=UTC)

    @pytest.mark.parametrize(
        "period, expected",
        [
            (AnalyticsPeriod.TODAY, "2025-05-14T15:00"),
            (AnalyticsPeriod.WEEK, "2025-05-14"),
            (AnalyticsPeriod.MONTH, "2025-05-14"),
            (AnalyticsPeriod.QUARTER, "2025-05-11"),
            (AnalyticsPeriod.YEAR, "2025-05"),
        ],
    )
    def test_bucket_key(self, period, expected):
        assert bucket_key(self.created_at, period) == expected

    def test_naive_datetime_treated_as_utc(self):
        assert bucket_key(datetime(2025, 1, 2, 3, 4), AnalyticsPeriod.TODAY) == (
            "2025-01-02T03:00"
        )

    def test_build_chart_data_counts_and_order(self):
        """버킷별 전체/new/responded 집계, 키 오름차순"""
        rows = [
            (datetime(2025, 5, 14, 9, tzinfo=UTC), "new"),
            (datetime(2025, 5, 12, 9, tzinfo=UTC), "responded"),
            (datetime(2025, 5, 14, 18, tzinfo=UTC), "read"),
            (datetime(2025, 5, 14, 20, tzinfo=UTC), "responded"),
        ]

        points = build_chart_data(rows, AnalyticsPeriod.MONTH)

        assert [p.date for p in points] == ["2025-05-12", "2025-05-14"]
        assert points[0].submissions == 1
        assert points[0].responded_submissions == 1
        assert points[1].submissions == 3
        assert points[1].new_submissions == 1
        assert points[1].responded_submissions == 1

    def test_build_chart_data_empty(self):
        assert build_chart_data([], AnalyticsPeriod.WEEK) == []
