"""Authors 도메인 리포지토리"""

import uuid
from typing import Optional, cast

from sqlalchemy import delete, func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils.pagination import SortOrder, build_order_by
from app.domains.authors.models import Author
from app.domains.blog.models import BlogPost

SORTABLE_COLUMNS = {
    "name": Author.name,
    "email": Author.email,
    "created_at": Author.created_at,
}


class AuthorRepository:
    """저자 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, author_id: uuid.UUID) -> Optional[Author]:
        """ID로 저자 조회"""
        result = await self.session.execute(
            select(Author).where(Author.id == author_id)
        )
        return cast(Optional[Author], result.scalar_one_or_none())

    async def get_by_email(self, email: str) -> Optional[Author]:
        """이메일로 저자 조회 (대소문자 무시)"""
        result = await self.session.execute(
            select(Author).where(func.lower(Author.email) == email.lower())
        )
        return cast(Optional[Author], result.scalar_one_or_none())

    def _apply_search(self, query, search: Optional[str]):
        if search:
            pattern = f"%{search}%"
            query = query.where(
                or_(Author.name.ilike(pattern), Author.email.ilike(pattern))
            )
        return query

    async def get_list_with_post_counts(
        self,
        offset: int = 0,
        limit: int = 10,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> list[tuple[Author, int]]:
        """저자 목록과 저자별 게시글 수 조회

        Returns:
            (저자, 게시글 수) 튜플 목록
        """
        posts_count = func.count(BlogPost.id).label("posts_count")
        query = (
            select(Author, posts_count)
            .outerjoin(BlogPost, BlogPost.author_id == Author.id)
            .group_by(Author.id)
        )
        query = self._apply_search(query, search)
        query = (
            query.order_by(build_order_by(sort_by, sort_order, SORTABLE_COLUMNS))
            .offset(offset)
            .limit(limit)
        )

        result = await self.session.execute(query)
        return [(row[0], int(row[1])) for row in result.all()]

    async def count(self, search: Optional[str] = None) -> int:
        """저자 수 조회"""
        query = self._apply_search(select(func.count(Author.id)), search)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def find_ids_with_posts(
        self, author_ids: list[uuid.UUID]
    ) -> list[uuid.UUID]:
        """게시글이 연결된 저자 ID 목록"""
        result = await self.session.execute(
            select(BlogPost.author_id)
            .where(BlogPost.author_id.in_(author_ids))
            .distinct()
        )
        return [row[0] for row in result.all()]

    async def create(self, author: Author) -> Author:
        """저자 생성"""
        self.session.add(author)
        await self.session.flush()
        await self.session.refresh(author)
        return author

    async def update(self, author: Author) -> Author:
        """저자 수정"""
        await self.session.flush()
        await self.session.refresh(author)
        return author

    async def delete_batch(self, author_ids: list[uuid.UUID]) -> int:
        """저자 벌크 삭제

        Returns:
            삭제된 레코드 수
        """
        result = await self.session.execute(
            delete(Author).where(Author.id.in_(author_ids))
        )
        await self.session.flush()
        return int(result.rowcount)
