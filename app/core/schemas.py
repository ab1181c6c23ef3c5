"""공통 API 응답 스키마

모든 엔드포인트는 `{success, message, data}` 형태의 응답 봉투를 사용합니다.
실패 시에는 `error: {code, message, detail}`가 추가되고 `data`는 null입니다.

Usage::

    # 단일 데이터 응답
    from app.core.schemas import APIResponse, create_response
    return create_response(data=post, message="게시글을 조회했습니다.")

    # 목록 데이터 응답 (페이지네이션)
    from app.core.schemas import ListAPIResponse, create_list_response
    return create_list_response(data=posts, total=100, page=1, limit=10)

Note:
    Generic 타입의 classmethod는 Pydantic에서 제한이 있으므로,
    팩토리 함수(create_response, create_list_response)를 사용하거나
    직접 생성자를 호출하세요.
"""

import math
import uuid
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel, ConfigDict, Field

DataT = TypeVar("DataT")

DEFAULT_MESSAGE = "요청이 성공적으로 처리되었습니다."


class BaseSchema(BaseModel):
    """기본 스키마 (ORM 모델 변환용)"""

    model_config = ConfigDict(
        from_attributes=True,
        populate_by_name=True,
    )


class APIResponse(BaseModel, Generic[DataT]):
    """단일 데이터 API 응답

    Example::

        @router.get("/{id}", response_model=APIResponse[AuthorResponse])
        async def get_author(id: uuid.UUID):
            author = await service.get_author(id)
            return create_response(
                data=AuthorResponse.model_validate(author),
                message="저자를 조회했습니다.",
            )
    """

    success: bool = True
    message: str = DEFAULT_MESSAGE
    data: Optional[DataT] = None


class PageMeta(BaseModel):
    """페이지네이션 메타 정보"""

    total: int = Field(..., description="전체 아이템 수")
    page: int = Field(..., description="현재 페이지")
    limit: int = Field(..., description="페이지 크기")
    total_pages: int = Field(..., description="전체 페이지 수")
    has_next: bool = Field(..., description="다음 페이지 존재 여부")
    has_prev: bool = Field(..., description="이전 페이지 존재 여부")

    @classmethod
    def build(cls, total: int, page: int, limit: int) -> "PageMeta":
        total_pages = math.ceil(total / limit) if limit > 0 else 0
        return cls(
            total=total,
            page=page,
            limit=limit,
            total_pages=total_pages,
            has_next=page < total_pages,
            has_prev=page > 1,
        )


class ListAPIResponse(BaseModel, Generic[DataT]):
    """목록 데이터 API 응답 (페이지네이션 포함)"""

    success: bool = True
    message: str = DEFAULT_MESSAGE
    data: list[DataT] = Field(default_factory=list)
    meta: PageMeta


def create_response(
    data: Optional[DataT] = None,
    message: str = DEFAULT_MESSAGE,
    success: bool = True,
) -> APIResponse[DataT]:
    """API 응답 생성 팩토리 함수

    Args:
        data: 응답 데이터
        message: 응답 메시지
        success: 성공 여부

    Returns:
        APIResponse 인스턴스
    """
    return APIResponse(success=success, message=message, data=data)


def create_list_response(
    data: list[DataT],
    total: int,
    page: int,
    limit: int,
    message: str = DEFAULT_MESSAGE,
) -> ListAPIResponse[DataT]:
    """목록 API 응답 생성 팩토리 함수

    Args:
        data: 목록 데이터
        total: 전체 아이템 수
        page: 현재 페이지
        limit: 페이지 크기
        message: 응답 메시지

    Returns:
        ListAPIResponse 인스턴스
    """
    return ListAPIResponse(
        success=True,
        message=message,
        data=data,
        meta=PageMeta.build(total=total, page=page, limit=limit),
    )


# 벌크 작업 공통 스키마


class BulkIdsRequest(BaseModel):
    """ID 목록 기반 벌크 삭제 요청"""

    ids: list[uuid.UUID] = Field(
        default_factory=list, max_length=500, description="대상 ID 목록"
    )


class BulkActionRequest(BulkIdsRequest):
    """ID 목록 기반 벌크 액션 요청"""

    action: str = Field(..., min_length=1, description="적용할 액션")


class BulkResult(BaseModel):
    """벌크 작업 결과"""

    affected: int = Field(..., description="처리된 레코드 수")


class ErrorDetail(BaseModel):
    """에러 상세 정보"""

    code: str = Field(..., description="에러 코드")
    message: str = Field(..., description="에러 메시지")
    detail: Optional[dict[str, Any]] = Field(default=None, description="추가 정보")


class ErrorResponse(BaseModel):
    """에러 API 응답

    Example::

        {
            "success": false,
            "message": "게시글을 찾을 수 없습니다.",
            "data": null,
            "error": {
                "code": "BLOG_POST_NOT_FOUND",
                "message": "게시글을 찾을 수 없습니다.",
                "detail": {"post_id": "..."}
            }
        }
    """

    success: bool = False
    message: str
    data: None = None
    error: ErrorDetail
