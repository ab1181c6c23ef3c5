"""Blog 도메인 리포지토리

게시글, 카테고리, 태그 데이터 접근 계층입니다.
"""

import uuid
from dataclasses import dataclass
from typing import Optional, Sequence, cast

from sqlalchemy import and_, delete, exists, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils.pagination import SortOrder, build_order_by
from app.domains.blog.models import (
    BlogPost,
    Category,
    PostStatus,
    Tag,
    blog_post_tags,
)

POST_SORTABLE_COLUMNS = {
    "title": BlogPost.title,
    "status": BlogPost.status,
    "published_at": BlogPost.published_at,
    "created_at": BlogPost.created_at,
}


@dataclass
class BlogPostFilters:
    """게시글 목록 조회 필터

    모든 필드는 선택적이며, 제공된 필터만 적용됩니다.
    """

    category_id: Optional[uuid.UUID] = None
    tag_id: Optional[uuid.UUID] = None
    author_id: Optional[uuid.UUID] = None
    status: Optional[PostStatus] = None
    search: Optional[str] = None
    category_slug: Optional[str] = None
    tag_slug: Optional[str] = None


class BlogPostRepository:
    """게시글 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, post_id: uuid.UUID) -> Optional[BlogPost]:
        """ID로 게시글 조회"""
        result = await self.session.execute(
            select(BlogPost).where(BlogPost.id == post_id)
        )
        return cast(Optional[BlogPost], result.scalar_one_or_none())

    async def get_by_slug(
        self, slug: str, published_only: bool = False
    ) -> Optional[BlogPost]:
        """슬러그로 게시글 조회

        Args:
            slug: 게시글 슬러그
            published_only: True면 발행된 게시글만 조회
        """
        query = select(BlogPost).where(BlogPost.slug == slug)
        if published_only:
            query = query.where(BlogPost.status == PostStatus.PUBLISHED.value)

        result = await self.session.execute(query)
        return cast(Optional[BlogPost], result.scalar_one_or_none())

    async def slug_exists(
        self, slug: str, exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        """슬러그 사용 여부 (exclude_id 게시글 제외)"""
        query = select(BlogPost.id).where(BlogPost.slug == slug)
        if exclude_id:
            query = query.where(BlogPost.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    def _apply_filters(self, query, filters: Optional[BlogPostFilters]):
        if not filters:
            return query

        if filters.category_id:
            query = query.where(BlogPost.category_id == filters.category_id)

        if filters.author_id:
            query = query.where(BlogPost.author_id == filters.author_id)

        if filters.status:
            query = query.where(BlogPost.status == filters.status.value)

        if filters.tag_id:
            query = query.where(
                exists().where(
                    and_(
                        blog_post_tags.c.post_id == BlogPost.id,
                        blog_post_tags.c.tag_id == filters.tag_id,
                    )
                )
            )

        if filters.category_slug:
            query = query.where(
                BlogPost.category_id.in_(
                    select(Category.id).where(
                        Category.slug == filters.category_slug
                    )
                )
            )

        if filters.tag_slug:
            query = query.where(
                exists().where(
                    and_(
                        blog_post_tags.c.post_id == BlogPost.id,
                        blog_post_tags.c.tag_id == Tag.id,
                        Tag.slug == filters.tag_slug,
                    )
                )
            )

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(
                or_(
                    BlogPost.title.ilike(pattern),
                    BlogPost.excerpt.ilike(pattern),
                    BlogPost.content.ilike(pattern),
                )
            )

        return query

    async def get_list(
        self,
        offset: int = 0,
        limit: int = 10,
        filters: Optional[BlogPostFilters] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> Sequence[BlogPost]:
        """게시글 목록 조회

        Args:
            offset: 건너뛸 레코드 수
            limit: 조회할 최대 레코드 수
            filters: 필터 옵션
            sort_by: 정렬 기준 (허용되지 않은 값은 created_at)
            sort_order: 정렬 방향

        Returns:
            게시글 목록 (저자, 카테고리, 태그 포함)
        """
        query = self._apply_filters(select(BlogPost), filters)
        query = (
            query.order_by(
                build_order_by(sort_by, sort_order, POST_SORTABLE_COLUMNS),
                BlogPost.id,
            )
            .offset(offset)
            .limit(limit)
        )

        result = await self.session.execute(query)
        return cast(Sequence[BlogPost], result.scalars().all())

    async def count(self, filters: Optional[BlogPostFilters] = None) -> int:
        """게시글 수 조회 (get_list와 동일한 필터)"""
        query = self._apply_filters(select(func.count(BlogPost.id)), filters)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def get_related(
        self, post: BlogPost, limit: int = 3
    ) -> Sequence[BlogPost]:
        """같은 카테고리의 다른 발행 게시글 (최신순)"""
        if post.category_id is None:
            return []

        query = (
            select(BlogPost)
            .where(
                and_(
                    BlogPost.category_id == post.category_id,
                    BlogPost.id != post.id,
                    BlogPost.status == PostStatus.PUBLISHED.value,
                )
            )
            .order_by(BlogPost.published_at.desc().nullslast())
            .limit(limit)
        )
        result = await self.session.execute(query)
        return cast(Sequence[BlogPost], result.scalars().all())

    async def create(self, post: BlogPost) -> BlogPost:
        """게시글 생성 (태그 연결 포함)"""
        self.session.add(post)
        await self.session.flush()
        await self.session.refresh(post)
        return post

    async def update(self, post: BlogPost) -> BlogPost:
        """게시글 수정"""
        await self.session.flush()
        await self.session.refresh(post)
        return post

    async def update_status_batch(
        self, post_ids: list[uuid.UUID], status: PostStatus
    ) -> int:
        """게시글 상태 벌크 변경

        발행 시 published_at이 비어있는 게시글만 현재 시각으로 채웁니다.

        Returns:
            변경된 레코드 수
        """
        values: dict = {"status": status.value}
        if status == PostStatus.PUBLISHED:
            values["published_at"] = func.coalesce(
                BlogPost.published_at, func.now()
            )

        result = await self.session.execute(
            update(BlogPost)
            .where(BlogPost.id.in_(post_ids))
            .values(**values)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return int(result.rowcount)

    async def delete_batch(self, post_ids: list[uuid.UUID]) -> int:
        """게시글 벌크 삭제 (태그 연결을 먼저 삭제)

        Returns:
            삭제된 게시글 수
        """
        await self.session.execute(
            delete(blog_post_tags).where(blog_post_tags.c.post_id.in_(post_ids))
        )
        result = await self.session.execute(
            delete(BlogPost)
            .where(BlogPost.id.in_(post_ids))
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return int(result.rowcount)

    async def get_published_slugs(self) -> list[str]:
        """발행된 게시글 슬러그 목록"""
        result = await self.session.execute(
            select(BlogPost.slug)
            .where(BlogPost.status == PostStatus.PUBLISHED.value)
            .order_by(BlogPost.published_at.desc().nullslast())
        )
        return list(result.scalars().all())


class CategoryRepository:
    """카테고리 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, category_id: uuid.UUID) -> Optional[Category]:
        """ID로 카테고리 조회"""
        result = await self.session.execute(
            select(Category).where(Category.id == category_id)
        )
        return cast(Optional[Category], result.scalar_one_or_none())

    async def get_by_name(self, name: str) -> Optional[Category]:
        """이름으로 카테고리 조회 (대소문자 무시)"""
        result = await self.session.execute(
            select(Category).where(func.lower(Category.name) == name.lower())
        )
        return cast(Optional[Category], result.scalars().first())

    async def get_by_slug(self, slug: str) -> Optional[Category]:
        """슬러그로 카테고리 조회"""
        result = await self.session.execute(
            select(Category).where(Category.slug == slug)
        )
        return cast(Optional[Category], result.scalar_one_or_none())

    async def find_conflict(
        self,
        name: str,
        slug: str,
        exclude_id: Optional[uuid.UUID] = None,
    ) -> Optional[Category]:
        """이름 또는 슬러그가 겹치는 카테고리 조회"""
        query = select(Category).where(
            or_(func.lower(Category.name) == name.lower(), Category.slug == slug)
        )
        if exclude_id:
            query = query.where(Category.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return cast(Optional[Category], result.scalar_one_or_none())

    async def get_all_with_post_counts(
        self, published_only: bool = False
    ) -> list[tuple[Category, int]]:
        """카테고리 목록과 카테고리별 게시글 수 (이름순)

        Args:
            published_only: True면 발행된 게시글만 집계
        """
        join_condition = BlogPost.category_id == Category.id
        if published_only:
            join_condition = and_(
                join_condition, BlogPost.status == PostStatus.PUBLISHED.value
            )

        result = await self.session.execute(
            select(Category, func.count(BlogPost.id))
            .outerjoin(BlogPost, join_condition)
            .group_by(Category.id)
            .order_by(Category.name.asc())
        )
        return [(row[0], int(row[1])) for row in result.all()]

    async def create(self, category: Category) -> Category:
        """카테고리 생성"""
        self.session.add(category)
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def update(self, category: Category) -> Category:
        """카테고리 수정"""
        await self.session.flush()
        await self.session.refresh(category)
        return category

    async def delete(self, category: Category) -> None:
        """카테고리 삭제 (게시글의 category_id는 NULL로 변경)"""
        await self.session.delete(category)
        await self.session.flush()


class TagRepository:
    """태그 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, tag_id: uuid.UUID) -> Optional[Tag]:
        """ID로 태그 조회"""
        result = await self.session.execute(select(Tag).where(Tag.id == tag_id))
        return cast(Optional[Tag], result.scalar_one_or_none())

    async def get_by_ids(self, tag_ids: list[uuid.UUID]) -> Sequence[Tag]:
        """ID 목록으로 태그 조회 (존재하는 태그만)"""
        if not tag_ids:
            return []
        result = await self.session.execute(select(Tag).where(Tag.id.in_(tag_ids)))
        return cast(Sequence[Tag], result.scalars().all())

    async def get_by_slug(self, slug: str) -> Optional[Tag]:
        """슬러그로 태그 조회"""
        result = await self.session.execute(select(Tag).where(Tag.slug == slug))
        return cast(Optional[Tag], result.scalar_one_or_none())

    async def get_by_name_or_slug(self, name: str, slug: str) -> Optional[Tag]:
        """이름(대소문자 무시) 또는 슬러그로 태그 조회"""
        result = await self.session.execute(
            select(Tag)
            .where(or_(func.lower(Tag.name) == name.lower(), Tag.slug == slug))
            .limit(1)
        )
        return cast(Optional[Tag], result.scalar_one_or_none())

    async def slug_exists(
        self, slug: str, exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        """슬러그 사용 여부"""
        query = select(Tag.id).where(Tag.slug == slug)
        if exclude_id:
            query = query.where(Tag.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def get_all_with_post_counts(
        self, published_only: bool = False
    ) -> list[tuple[Tag, int]]:
        """태그 목록과 태그별 게시글 수 (이름순)"""
        query = select(Tag, func.count(BlogPost.id)).outerjoin(
            blog_post_tags, blog_post_tags.c.tag_id == Tag.id
        )
        post_condition = BlogPost.id == blog_post_tags.c.post_id
        if published_only:
            post_condition = and_(
                post_condition, BlogPost.status == PostStatus.PUBLISHED.value
            )
        query = (
            query.outerjoin(BlogPost, post_condition)
            .group_by(Tag.id)
            .order_by(Tag.name.asc())
        )

        result = await self.session.execute(query)
        return [(row[0], int(row[1])) for row in result.all()]

    async def create(self, tag: Tag) -> Tag:
        """태그 생성"""
        self.session.add(tag)
        await self.session.flush()
        await self.session.refresh(tag)
        return tag

    async def update(self, tag: Tag) -> Tag:
        """태그 수정"""
        await self.session.flush()
        await self.session.refresh(tag)
        return tag

    async def delete(self, tag: Tag) -> None:
        """태그 삭제 (게시글 연결은 CASCADE로 제거)"""
        await self.session.delete(tag)
        await self.session.flush()
