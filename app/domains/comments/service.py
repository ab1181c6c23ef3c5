"""Comments 도메인 서비스"""

import uuid
from typing import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.context import get_request_id
from app.core.logging import get_logger
from app.domains.comments.exceptions import CommentNotFoundException
from app.domains.comments.models import AdminComment, CommentEntityType
from app.domains.comments.repository import CommentRepository
from app.domains.comments.schemas import (
    CommentCreateRequest,
    CommentUpdateRequest,
)

logger = get_logger(__name__)


class CommentService:
    """관리자 코멘트 서비스"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = CommentRepository(session)

    async def list_comments(
        self, entity_type: CommentEntityType, entity_id: uuid.UUID
    ) -> Sequence[AdminComment]:
        """대상의 코멘트 목록 (고정 우선, 최신순)"""
        return await self.repository.get_for_entity(entity_type, entity_id)

    async def get_comment(self, comment_id: uuid.UUID) -> AdminComment:
        """코멘트 조회

        Raises:
            CommentNotFoundException: 없거나 삭제된 경우
        """
        comment = await self.repository.get_by_id(comment_id)
        if comment is None:
            raise CommentNotFoundException(comment_id)
        return comment

    async def create_comment(
        self, data: CommentCreateRequest, author_name: str
    ) -> AdminComment:
        """코멘트 생성

        Args:
            data: 생성 요청
            author_name: 작성한 관리자 이름
        """
        comment = await self.repository.create(
            AdminComment(
                entity_type=data.entity_type.value,
                entity_id=data.entity_id,
                content=data.content,
                author_name=author_name,
                is_internal=data.is_internal,
                is_pinned=data.is_pinned,
            )
        )
        logger.info(
            "Admin comment created",
            extra={
                "request_id": get_request_id(),
                "comment_id": str(comment.id),
                "entity_type": comment.entity_type,
            },
        )
        return comment

    async def update_comment(
        self, comment_id: uuid.UUID, data: CommentUpdateRequest
    ) -> AdminComment:
        """코멘트 수정 (내용, 고정, 내부 여부)"""
        comment = await self.get_comment(comment_id)
        for field, value in data.model_dump(exclude_unset=True).items():
            if value is not None:
                setattr(comment, field, value)
        return await self.repository.update(comment)

    async def delete_comment(self, comment_id: uuid.UUID) -> None:
        """코멘트 Soft Delete"""
        comment = await self.get_comment(comment_id)
        await self.repository.soft_delete(comment)
        logger.info(
            "Admin comment deleted",
            extra={"request_id": get_request_id(), "comment_id": str(comment_id)},
        )
