"""날짜/시간 유틸리티

모든 계산은 UTC 기준입니다.
"""

import calendar
from datetime import date, datetime, timedelta, timezone
from enum import Enum
from typing import Optional

UTC = timezone.utc


class AnalyticsPeriod(str, Enum):
    """분석 조회 기간"""

    TODAY = "today"
    WEEK = "week"
    MONTH = "month"
    QUARTER = "quarter"
    YEAR = "year"


def now_utc() -> datetime:
    """현재 UTC 시간 반환"""
    return datetime.now(UTC)


def ensure_utc(dt: datetime) -> datetime:
    """naive datetime은 UTC로 간주"""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=UTC)
    return dt.astimezone(UTC)


def start_of_day(dt: Optional[datetime] = None) -> datetime:
    """해당 날짜의 시작 시간 (00:00:00)"""
    if dt is None:
        dt = now_utc()
    return dt.replace(hour=0, minute=0, second=0, microsecond=0)


def start_of_week(dt: Optional[datetime] = None) -> datetime:
    """해당 주의 시작 (일요일 00:00)"""
    day = start_of_day(dt)
    # weekday(): 월=0 ... 일=6
    return day - timedelta(days=(day.weekday() + 1) % 7)


def start_of_month(dt: Optional[datetime] = None) -> datetime:
    """해당 월의 1일 00:00"""
    return start_of_day(dt).replace(day=1)


def start_of_quarter(dt: Optional[datetime] = None) -> datetime:
    """해당 분기의 첫 날 00:00"""
    first = start_of_month(dt)
    quarter_month = ((first.month - 1) // 3) * 3 + 1
    return first.replace(month=quarter_month)


def start_of_year(dt: Optional[datetime] = None) -> datetime:
    """해당 연도의 1월 1일 00:00"""
    return start_of_month(dt).replace(month=1)


def subtract_months(dt: datetime, months: int) -> datetime:
    """n개월 전 같은 시각 (말일 초과 시 해당 월 말일로 보정)"""
    month_index = dt.month - 1 - months
    year = dt.year + month_index // 12
    month = month_index % 12 + 1
    day = min(dt.day, calendar.monthrange(year, month)[1])
    return dt.replace(year=year, month=month, day=day)


def rolling_period_start(
    period: AnalyticsPeriod, now: Optional[datetime] = None
) -> datetime:
    """현재 시점 기준 롤링 기간의 시작

    today는 자정, week는 7일 전, month/quarter/year는 1/3/12개월 전입니다.
    """
    now = now or now_utc()
    if period == AnalyticsPeriod.TODAY:
        return start_of_day(now)
    if period == AnalyticsPeriod.WEEK:
        return now - timedelta(days=7)
    if period == AnalyticsPeriod.MONTH:
        return subtract_months(now, 1)
    if period == AnalyticsPeriod.QUARTER:
        return subtract_months(now, 3)
    return subtract_months(now, 12)


def calendar_period_start(
    period: AnalyticsPeriod, now: Optional[datetime] = None
) -> datetime:
    """달력 기준 기간의 시작 (오늘 자정, 주 시작, 월 1일, 분기 시작, 1월 1일)"""
    now = now or now_utc()
    if period == AnalyticsPeriod.TODAY:
        return start_of_day(now)
    if period == AnalyticsPeriod.WEEK:
        return start_of_week(now)
    if period == AnalyticsPeriod.MONTH:
        return start_of_month(now)
    if period == AnalyticsPeriod.QUARTER:
        return start_of_quarter(now)
    return start_of_year(now)


def iter_days(start: date, end: date) -> list[date]:
    """start부터 end까지(포함) 날짜 목록"""
    if start > end:
        return []
    return [start + timedelta(days=i) for i in range((end - start).days + 1)]
