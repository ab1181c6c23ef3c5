"""날짜/시간 유틸리티 테스트"""

from datetime import date, datetime, timedelta, timezone

import pytest

from app.core.utils.datetime import (
    UTC,
    AnalyticsPeriod,
    calendar_period_start,
    ensure_utc,
    iter_days,
    rolling_period_start,
    start_of_day,
    start_of_month,
    start_of_quarter,
    start_of_week,
    start_of_year,
    subtract_months,
)

# 2025-05-14는 수요일
NOW = datetime(2025, 5, 14, 15, 30, 45, 123, tzinfo=UTC)


def test_ensure_utc_naive():
    """naive datetime은 UTC로 간주"""
    assert ensure_utc(datetime(2025, 1, 1, 9)).tzinfo == UTC


def test_ensure_utc_converts_offset():
    """다른 타임존은 UTC로 변환"""
    kst = timezone(timedelta(hours=9))
    converted = ensure_utc(datetime(2025, 1, 1, 9, tzinfo=kst))

    assert converted == datetime(2025, 1, 1, 0, tzinfo=UTC)


def test_start_of_day():
    assert start_of_day(NOW) == datetime(2025, 5, 14, tzinfo=UTC)


def test_start_of_week_is_sunday():
    """주의 시작은 일요일"""
    assert start_of_week(NOW) == datetime(2025, 5, 11, tzinfo=UTC)


def test_start_of_week_on_sunday():
    """일요일 당일은 그 날이 주의 시작"""
    sunday = datetime(2025, 5, 11, 23, 0, tzinfo=UTC)
    assert start_of_week(sunday) == datetime(2025, 5, 11, tzinfo=UTC)


def test_start_of_month_quarter_year():
    assert start_of_month(NOW) == datetime(2025, 5, 1, tzinfo=UTC)
    assert start_of_quarter(NOW) == datetime(2025, 4, 1, tzinfo=UTC)
    assert start_of_year(NOW) == datetime(2025, 1, 1, tzinfo=UTC)


@pytest.mark.parametrize(
    "dt, months, expected",
    [
        (datetime(2025, 3, 31, tzinfo=UTC), 1, datetime(2025, 2, 28, tzinfo=UTC)),
        (datetime(2024, 3, 31, tzinfo=UTC), 1, datetime(2024, 2, 29, tzinfo=UTC)),
        (datetime(2025, 1, 15, tzinfo=UTC), 3, datetime(2024, 10, 15, tzinfo=UTC)),
        (datetime(2025, 5, 14, tzinfo=UTC), 12, datetime(2024, 5, 14, tzinfo=UTC)),
    ],
)
def test_subtract_months(dt, months, expected):
    """월 단위 빼기 (말일 보정, 연도 경계)"""
    assert subtract_months(dt, months) == expected


def test_rolling_period_start():
    """롤링 기간 시작"""
    assert rolling_period_start(AnalyticsPeriod.TODAY, NOW) == start_of_day(NOW)
    assert rolling_period_start(AnalyticsPeriod.WEEK, NOW) == NOW - timedelta(days=7)
    assert rolling_period_start(AnalyticsPeriod.MONTH, NOW) == NOW.replace(month=4)
    assert rolling_period_start(AnalyticsPeriod.QUARTER, NOW) == NOW.replace(month=2)
    assert rolling_period_start(AnalyticsPeriod.YEAR, NOW) == NOW.replace(year=2024)


def test_calendar_period_start():
    """달력 기준 기간 시작"""
    assert calendar_period_start(AnalyticsPeriod.WEEK, NOW) == datetime(
        2025, 5, 11, tzinfo=UTC
    )
    assert calendar_period_start(AnalyticsPeriod.MONTH, NOW) == datetime(
        2025, 5, 1, tzinfo=UTC
    )
    assert calendar_period_start(AnalyticsPeriod.YEAR, NOW) == datetime(
        2025, 1, 1, tzinfo=UTC
    )


def test_iter_days_inclusive():
    """시작일과 종료일 포함"""
    days = iter_days(date(2025, 2, 27), date(2025, 3, 2))

    assert days == [
        date(2025, 2, 27),
        date(2025, 2, 28),
        date(2025, 3, 1),
        date(2025, 3, 2),
    ]


def test_iter_days_single_and_reversed():
    assert iter_days(date(2025, 1, 1), date(2025, 1, 1)) == [date(2025, 1, 1)]
    assert iter_days(date(2025, 1, 2), date(2025, 1, 1)) == []
