"""문의 분석 차트 집계"""

from datetime import datetime
from typing import Iterable

from app.core.utils.datetime import AnalyticsPeriod, ensure_utc, start_of_week
from app.domains.contact.models import SubmissionStatus
from app.domains.contact.schemas import ContactChartPoint


def bucket_key(created_at: datetime, period: AnalyticsPeriod) -> str:
    """기간별 차트 버킷 키 (UTC)

    - today: 시간 단위 (YYYY-MM-DDTHH:00)
    - week, month: 일 단위 (YYYY-MM-DD)
    - quarter: 주 단위, 일요일 시작 (YYYY-MM-DD)
    - year: 월 단위 (YYYY-MM)
    """
    dt = ensure_utc(created_at)
    if period == AnalyticsPeriod.TODAY:
        return dt.strftime("%Y-%m-%dT%H:00")
    if period == AnalyticsPeriod.QUARTER:
        return start_of_week(dt).strftime("%Y-%m-%d")
    if period == AnalyticsPeriod.YEAR:
        return dt.strftime("%Y-%m")
    return dt.strftime("%Y-%m-%d")


def build_chart_data(
    rows: Iterable[tuple[datetime, str]], period: AnalyticsPeriod
) -> list[ContactChartPoint]:
    """(created_at, status) 목록을 버킷별로 집계 (버킷 키 오름차순)"""
    buckets: dict[str, ContactChartPoint] = {}
    for created_at, status in rows:
        key = bucket_key(created_at, period)
        point = buckets.setdefault(key, ContactChartPoint(date=key))
        point.submissions += 1
        if status == SubmissionStatus.NEW.value:
            point.new_submissions += 1
        elif status == SubmissionStatus.RESPONDED.value:
            point.responded_submissions += 1

    return [buckets[key] for key in sorted(buckets)]
