"""페이지네이션/정렬 유틸리티"""

from enum import Enum

from fastapi import Query
from sqlalchemy import ColumnElement


class SortOrder(str, Enum):
    """정렬 방향"""

    ASC = "asc"
    DESC = "desc"


class PageParams:
    """페이지네이션 파라미터 의존성

    Example::

        from app.core.utils.pagination import PageParams
        from app.core.schemas import ListAPIResponse, create_list_response

        @router.get("", response_model=ListAPIResponse[AuthorResponse])
        async def list_authors(page_params: PageParams = Depends()):
            authors, total = await service.list_authors(
                offset=page_params.offset,
                limit=page_params.limit,
            )
            return create_list_response(
                data=authors,
                total=total,
                page=page_params.page,
                limit=page_params.limit,
            )
    """

    def __init__(
        self,
        page: int = Query(1, ge=1, description="페이지 번호"),
        limit: int = Query(10, ge=1, le=100, description="페이지 크기"),
    ):
        self.page = page
        self.limit = limit

    @property
    def offset(self) -> int:
        """오프셋 계산"""
        return (self.page - 1) * self.limit


class SortParams:
    """정렬 파라미터 의존성

    허용되지 않은 sort_by 값은 리포지토리에서 created_at으로 대체됩니다.
    """

    def __init__(
        self,
        sort_by: str = Query("created_at", max_length=50, description="정렬 기준"),
        sort_order: SortOrder = Query(SortOrder.DESC, description="정렬 방향"),
    ):
        self.sort_by = sort_by
        self.sort_order = sort_order


def build_order_by(
    sort_by: str,
    sort_order: SortOrder,
    columns: dict[str, ColumnElement],
    default: str = "created_at",
) -> ColumnElement:
    """화이트리스트 기반 ORDER BY 절 생성

    Args:
        sort_by: 요청된 정렬 기준
        sort_order: 정렬 방향
        columns: 허용된 정렬 기준 → 컬럼 매핑
        default: 허용되지 않은 값일 때 사용할 기준

    Returns:
        ORDER BY 절에 사용할 컬럼 표현식
    """
    column = columns.get(sort_by, columns[default])
    return column.asc() if sort_order == SortOrder.ASC else column.desc()
