"""스키마 단위 테스트"""

import uuid

import pytest
from pydantic import ValidationError

from app.core.schemas import (
    APIResponse,
    BulkActionRequest,
    ErrorDetail,
    ErrorResponse,
    PageMeta,
    create_list_response,
    create_response,
)


class TestAPIResponse:
    """APIResponse 테스트"""

    def test_success_response_with_data(self):
        """데이터가 있는 성공 응답"""
        response = create_response(data={"id": 1}, message="조회 성공")

        assert response.success is True
        assert response.message == "조회 성공"
        assert response.data == {"id": 1}

    def test_default_message(self):
        """기본 메시지"""
        response = APIResponse(success=True)

        assert response.message == "요청이 성공적으로 처리되었습니다."
        assert response.data is None


class TestPageMeta:
    """PageMeta 테스트"""

    def test_middle_page(self):
        meta = PageMeta.build(total=25, page=2, limit=10)

        assert meta.total_pages == 3
        assert meta.has_next is True
        assert meta.has_prev is True

    def test_last_page(self):
        meta = PageMeta.build(total=20, page=2, limit=10)

        assert meta.total_pages == 2
        assert meta.has_next is False

    def test_empty_result(self):
        """결과가 없으면 total_pages는 0"""
        meta = PageMeta.build(total=0, page=1, limit=10)

        assert meta.total_pages == 0
        assert meta.has_next is False
        assert meta.has_prev is False

    def test_list_response(self):
        response = create_list_response(data=[1, 2], total=2, page=1, limit=10)

        assert response.data == [1, 2]
        assert response.meta.limit == 10


class TestBulkActionRequest:
    def test_defaults_to_empty_ids(self):
        request = BulkActionRequest(action="publish")

        assert request.ids == []

    def test_rejects_blank_action(self):
        with pytest.raises(ValidationError):
            BulkActionRequest(action="", ids=[uuid.uuid4()])


class TestErrorResponse:
    """ErrorResponse 테스트"""

    def test_error_envelope(self):
        response = ErrorResponse(
            message="게시글을 찾을 수 없습니다.",
            error=ErrorDetail(
                code="BLOG_POST_NOT_FOUND",
                message="게시글을 찾을 수 없습니다.",
            ),
        )

        dumped = response.model_dump()
        assert dumped["success"] is False
        assert dumped["data"] is None
        assert dumped["error"]["code"] == "BLOG_POST_NOT_FOUND"
        assert dumped["error"]["detail"] is None
