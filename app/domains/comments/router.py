"""Comments 도메인 라우터 (관리자)"""

import uuid

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import get_admin_user, verify_admin_api_key
from app.core.schemas import APIResponse, create_response
from app.domains.comments.models import CommentEntityType
from app.domains.comments.schemas import (
    CommentCreateRequest,
    CommentResponse,
    CommentUpdateRequest,
)
from app.domains.comments.service import CommentService

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])


def get_comment_service(
    session: AsyncSession = Depends(get_db),
) -> CommentService:
    """CommentService 의존성"""
    return CommentService(session)


@router.get("", response_model=APIResponse[list[CommentResponse]])
async def list_comments(
    entity_type: CommentEntityType = Query(..., description="대상 유형"),
    entity_id: uuid.UUID = Query(..., description="대상 ID"),
    service: CommentService = Depends(get_comment_service),
):
    """대상의 코멘트 목록"""
    comments = await service.list_comments(entity_type, entity_id)
    return create_response(
        data=[CommentResponse.model_validate(c) for c in comments],
        message="코멘트 목록을 조회했습니다.",
    )


@router.post("", response_model=APIResponse[CommentResponse], status_code=201)
async def create_comment(
    data: CommentCreateRequest,
    author_name: str = Depends(get_admin_user),
    service: CommentService = Depends(get_comment_service),
):
    """코멘트 작성"""
    comment = await service.create_comment(data, author_name)
    return create_response(
        data=CommentResponse.model_validate(comment),
        message="코멘트가 작성되었습니다.",
    )


@router.patch("/{comment_id}", response_model=APIResponse[CommentResponse])
async def update_comment(
    comment_id: uuid.UUID,
    data: CommentUpdateRequest,
    service: CommentService = Depends(get_comment_service),
):
    """코멘트 수정"""
    comment = await service.update_comment(comment_id, data)
    return create_response(
        data=CommentResponse.model_validate(comment),
        message="코멘트가 수정되었습니다.",
    )


@router.delete("/{comment_id}", response_model=APIResponse[None])
async def delete_comment(
    comment_id: uuid.UUID,
    service: CommentService = Depends(get_comment_service),
):
    """코멘트 삭제"""
    await service.delete_comment(comment_id)
    return create_response(message="코멘트가 삭제되었습니다.")
