"""Authors 도메인 라우터 (관리자)"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_admin_api_key
from app.core.exceptions import EmptyIdListException
from app.core.schemas import (
    APIResponse,
    BulkActionRequest,
    BulkIdsRequest,
    BulkResult,
    ListAPIResponse,
    create_list_response,
    create_response,
)
from app.core.utils.pagination import PageParams, SortParams
from app.domains.authors.schemas import (
    AuthorCreateRequest,
    AuthorDeleteResponse,
    AuthorListItem,
    AuthorResponse,
    AuthorUpdateRequest,
)
from app.domains.authors.service import AuthorService

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])


def get_author_service(
    session: AsyncSession = Depends(get_db),
) -> AuthorService:
    """AuthorService 의존성"""
    return AuthorService(session)


@router.get("", response_model=ListAPIResponse[AuthorListItem])
async def list_authors(
    page_params: PageParams = Depends(),
    sort_params: SortParams = Depends(),
    search: Optional[str] = Query(None, max_length=255, description="이름/이메일 검색"),
    service: AuthorService = Depends(get_author_service),
):
    """저자 목록 조회 (게시글 수 포함)"""
    rows, total = await service.list_authors(
        offset=page_params.offset,
        limit=page_params.limit,
        search=search,
        sort_by=sort_params.sort_by,
        sort_order=sort_params.sort_order,
    )
    items = [
        AuthorListItem.model_validate(author).model_copy(
            update={"posts_count": posts_count}
        )
        for author, posts_count in rows
    ]
    return create_list_response(
        data=items,
        total=total,
        page=page_params.page,
        limit=page_params.limit,
        message="저자 목록을 조회했습니다.",
    )


@router.post("", response_model=APIResponse[AuthorResponse], status_code=201)
async def create_author(
    data: AuthorCreateRequest,
    service: AuthorService = Depends(get_author_service),
):
    """저자 생성"""
    author = await service.create_author(data)
    return create_response(
        data=AuthorResponse.model_validate(author),
        message="저자가 생성되었습니다.",
    )


@router.delete("", response_model=APIResponse[AuthorDeleteResponse])
async def delete_authors(
    data: BulkIdsRequest,
    service: AuthorService = Depends(get_author_service),
):
    """저자 벌크 삭제 (게시글이 있는 저자가 포함되면 400)"""
    deleted = await service.delete_authors(data.ids)
    return create_response(
        data=AuthorDeleteResponse(deleted=deleted),
        message=f"{deleted}명의 저자가 삭제되었습니다.",
    )


@router.patch("", response_model=APIResponse[BulkResult])
async def bulk_update_authors(data: BulkActionRequest):
    """저자 벌크 액션 (상태가 없으므로 변경 없이 성공 처리)"""
    if not data.ids:
        raise EmptyIdListException()
    return create_response(
        data=BulkResult(affected=0),
        message="변경할 항목이 없습니다.",
    )


@router.get("/{author_id}", response_model=APIResponse[AuthorResponse])
async def get_author(
    author_id: uuid.UUID,
    service: AuthorService = Depends(get_author_service),
):
    """저자 상세 조회"""
    author = await service.get_author(author_id)
    return create_response(
        data=AuthorResponse.model_validate(author),
        message="저자를 조회했습니다.",
    )


@router.put("/{author_id}", response_model=APIResponse[AuthorResponse])
async def update_author(
    author_id: uuid.UUID,
    data: AuthorUpdateRequest,
    service: AuthorService = Depends(get_author_service),
):
    """저자 수정 (부분 수정)"""
    author = await service.update_author(author_id, data)
    return create_response(
        data=AuthorResponse.model_validate(author),
        message="저자가 수정되었습니다.",
    )


@router.delete("/{author_id}", response_model=APIResponse[AuthorDeleteResponse])
async def delete_author(
    author_id: uuid.UUID,
    service: AuthorService = Depends(get_author_service),
):
    """저자 삭제 (게시글이 있으면 400)"""
    await service.get_author(author_id)
    deleted = await service.delete_authors([author_id])
    return create_response(
        data=AuthorDeleteResponse(deleted=deleted),
        message="저자가 삭제되었습니다.",
    )
