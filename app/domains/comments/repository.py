"""Comments 도메인 리포지토리"""

import uuid
from typing import Optional, Sequence, cast

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils.datetime import now_utc
from app.domains.comments.models import AdminComment, CommentEntityType


class CommentRepository:
    """코멘트 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, comment_id: uuid.UUID, include_deleted: bool = False
    ) -> Optional[AdminComment]:
        """ID로 코멘트 조회

        Args:
            comment_id: 코멘트 ID
            include_deleted: 삭제된 코멘트 포함 여부 (기본: False)
        """
        query = select(AdminComment).where(AdminComment.id == comment_id)
        if not include_deleted:
            query = query.where(AdminComment.deleted_at.is_(None))

        result = await self.session.execute(query)
        return cast(Optional[AdminComment], result.scalar_one_or_none())

    async def get_for_entity(
        self, entity_type: CommentEntityType, entity_id: uuid.UUID
    ) -> Sequence[AdminComment]:
        """대상의 삭제되지 않은 코멘트 (고정 우선, 최신순)"""
        result = await self.session.execute(
            select(AdminComment)
            .where(
                and_(
                    AdminComment.entity_type == entity_type.value,
                    AdminComment.entity_id == entity_id,
                    AdminComment.deleted_at.is_(None),
                )
            )
            .order_by(
                AdminComment.is_pinned.desc(), AdminComment.created_at.desc()
            )
        )
        return cast(Sequence[AdminComment], result.scalars().all())

    async def create(self, comment: AdminComment) -> AdminComment:
        """코멘트 생성"""
        self.session.add(comment)
        await self.session.flush()
        await self.session.refresh(comment)
        return comment

    async def update(self, comment: AdminComment) -> AdminComment:
        """코멘트 수정"""
        await self.session.flush()
        await self.session.refresh(comment)
        return comment

    async def soft_delete(self, comment: AdminComment) -> AdminComment:
        """코멘트 Soft Delete"""
        comment.deleted_at = now_utc()
        await self.session.flush()
        return comment
