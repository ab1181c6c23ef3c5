"""텍스트 통계 및 페이지네이션 유틸리티 테스트"""

from sqlalchemy import column

from app.core.schemas import PageMeta
from app.core.utils.pagination import SortOrder, build_order_by
from app.core.utils.text import count_words, reading_time_minutes


def test_count_words():
    assert count_words("one two  three\nfour") == 4
    assert count_words("") == 0
    assert count_words(None) == 0


def test_reading_time_rounds_up():
    """분당 200단어, 올림"""
    assert reading_time_minutes(" ".join(["word"] * 200)) == 1
    assert reading_time_minutes(" ".join(["word"] * 201)) == 2
    assert reading_time_minutes("") == 0


class TestPageMeta:
    """페이지네이션 메타 계산"""

    def test_middle_page(self):
        meta = PageMeta.build(total=25, page=2, limit=10)

        assert meta.total_pages == 3
        assert meta.has_next is True
        assert meta.has_prev is True

    def test_last_page(self):
        meta = PageMeta.build(total=25, page=3, limit=10)

        assert meta.has_next is False
        assert meta.has_prev is True

    def test_empty(self):
        meta = PageMeta.build(total=0, page=1, limit=10)

        assert meta.total_pages == 0
        assert meta.has_next is False
        assert meta.has_prev is False


class TestBuildOrderBy:
    """화이트리스트 정렬"""

    columns = {"created_at": column("created_at"), "title": column("title")}

    def test_allowed_column(self):
        clause = build_order_by("title", SortOrder.ASC, self.columns)

        assert str(clause) == "title ASC"

    def test_unknown_column_falls_back_to_default(self):
        clause = build_order_by("password", SortOrder.DESC, self.columns)

        assert str(clause) == "created_at DESC"
