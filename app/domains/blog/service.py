"""Blog 도메인 서비스

게시글, 카테고리, 태그 관련 비즈니스 로직 계층입니다.
"""

import uuid
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.context import get_request_id
from app.core.exceptions import EmptyIdListException, InvalidBulkActionException
from app.core.logging import get_logger
from app.core.utils.datetime import now_utc
from app.core.utils.pagination import SortOrder
from app.core.utils.slug import slugify
from app.domains.authors.exceptions import AuthorNotFoundException
from app.domains.authors.repository import AuthorRepository
from app.domains.blog.exceptions import (
    BlogPostNotFoundException,
    BlogPostSlugExistsException,
    CategoryConflictException,
    CategoryNotFoundException,
    TagConflictException,
    TagNotFoundException,
)
from app.domains.blog.models import BlogPost, Category, PostStatus, Tag
from app.domains.blog.repository import (
    BlogPostFilters,
    BlogPostRepository,
    CategoryRepository,
    TagRepository,
)
from app.domains.blog.schemas import (
    BlogPostCreateRequest,
    BlogPostUpdateRequest,
    CategoryCreateRequest,
    CategoryUpdateRequest,
    TagCreateRequest,
    TagUpdateRequest,
)
from app.domains.indexing.service import IndexingService
from app.domains.indexing.types import NotificationType

logger = get_logger(__name__)

BULK_ACTIONS = {
    "publish": PostStatus.PUBLISHED,
    "unpublish": PostStatus.DRAFT,
    "archive": PostStatus.ARCHIVED,
}

# 값이 None이면 무시하는 필수 컬럼
_REQUIRED_FIELDS = {"title", "slug", "excerpt", "content", "status"}


class BlogPostService:
    """게시글 서비스"""

    def __init__(
        self,
        session: AsyncSession,
        indexing_service: Optional[IndexingService] = None,
    ):
        self.session = session
        self.repository = BlogPostRepository(session)
        self.tag_repository = TagRepository(session)
        self.category_repository = CategoryRepository(session)
        self.author_repository = AuthorRepository(session)
        self.indexing_service = indexing_service or IndexingService(session)

    async def _validate_references(
        self,
        author_id: Optional[uuid.UUID],
        category_id: Optional[uuid.UUID],
    ) -> None:
        if author_id and not await self.author_repository.get_by_id(author_id):
            raise AuthorNotFoundException(author_id)
        if category_id and not await self.category_repository.get_by_id(
            category_id
        ):
            raise CategoryNotFoundException(category_id)

    async def list_posts(
        self,
        offset: int,
        limit: int,
        filters: Optional[BlogPostFilters] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[Sequence[BlogPost], int]:
        """게시글 목록 조회 (관리자)

        Returns:
            (게시글 목록, 전체 수)
        """
        posts = await self.repository.get_list(
            offset=offset,
            limit=limit,
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        total = await self.repository.count(filters)
        return posts, total

    async def get_post(self, post_id: uuid.UUID) -> BlogPost:
        """게시글 조회

        Raises:
            BlogPostNotFoundException: 게시글이 없는 경우
        """
        post = await self.repository.get_by_id(post_id)
        if post is None:
            raise BlogPostNotFoundException(post_id=post_id)
        return post

    async def create_post(self, data: BlogPostCreateRequest) -> BlogPost:
        """게시글 생성

        Raises:
            BlogPostSlugExistsException: 슬러그 중복 시 (400)
            AuthorNotFoundException: 저자가 없는 경우
            CategoryNotFoundException: 카테고리가 없는 경우
        """
        if await self.repository.slug_exists(data.slug):
            raise BlogPostSlugExistsException(data.slug)
        await self._validate_references(data.author_id, data.category_id)

        tags = await self.tag_repository.get_by_ids(data.tag_ids)
        is_published = data.status == PostStatus.PUBLISHED

        post = await self.repository.create(
            BlogPost(
                title=data.title,
                slug=data.slug,
                excerpt=data.excerpt,
                content=data.content,
                featured_image=data.featured_image,
                author_id=data.author_id,
                category_id=data.category_id,
                status=data.status.value,
                published_at=now_utc() if is_published else None,
                meta_title=data.meta_title,
                meta_description=data.meta_description,
                meta_keywords=data.meta_keywords,
                tags=list(tags),
            )
        )

        logger.info(
            "Blog post created",
            extra={
                "request_id": get_request_id(),
                "post_id": str(post.id),
                "status": post.status,
            },
        )

        if is_published:
            await self.indexing_service.safe_notify_blog_post(post.slug)
        return post

    async def update_post(
        self, post_id: uuid.UUID, data: BlogPostUpdateRequest
    ) -> BlogPost:
        """게시글 부분 수정

        tag_ids가 주어지면 태그 연결을 교체하고, 처음 발행될 때만
        published_at을 채웁니다.
        """
        post = await self.get_post(post_id)
        changes = data.model_dump(exclude_unset=True)

        new_slug = changes.get("slug")
        if new_slug and await self.repository.slug_exists(
            new_slug, exclude_id=post.id
        ):
            raise BlogPostSlugExistsException(new_slug)
        await self._validate_references(
            changes.get("author_id"), changes.get("category_id")
        )

        tag_ids = changes.pop("tag_ids", None)
        if tag_ids is not None:
            post.tags = list(await self.tag_repository.get_by_ids(tag_ids))

        status = changes.pop("status", None)
        if status is not None:
            post.status = PostStatus(status).value
            if status == PostStatus.PUBLISHED and post.published_at is None:
                post.published_at = now_utc()

        for field, value in changes.items():
            if value is None and field in _REQUIRED_FIELDS:
                continue
            setattr(post, field, value)

        post = await self.repository.update(post)

        logger.info(
            "Blog post updated",
            extra={"request_id": get_request_id(), "post_id": str(post.id)},
        )

        if post.status == PostStatus.PUBLISHED.value:
            await self.indexing_service.safe_notify_blog_post(post.slug)
        return post

    async def delete_post(self, post_id: uuid.UUID) -> int:
        """게시글 삭제"""
        post = await self.get_post(post_id)
        was_published = post.status == PostStatus.PUBLISHED.value
        slug = post.slug

        deleted = await self.repository.delete_batch([post.id])

        if was_published:
            await self.indexing_service.safe_notify_blog_post(
                slug, NotificationType.URL_DELETED
            )
        return deleted

    async def bulk_action(self, post_ids: list[uuid.UUID], action: str) -> int:
        """게시글 벌크 상태 변경 (publish, unpublish, archive)

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
            InvalidBulkActionException: 지원하지 않는 액션
        """
        if not post_ids:
            raise EmptyIdListException()
        status = BULK_ACTIONS.get(action)
        if status is None:
            raise InvalidBulkActionException(action, list(BULK_ACTIONS))

        affected = await self.repository.update_status_batch(post_ids, status)

        logger.info(
            "Blog posts bulk updated",
            extra={
                "request_id": get_request_id(),
                "action": action,
                "affected": affected,
            },
        )
        return affected

    async def bulk_delete(self, post_ids: list[uuid.UUID]) -> int:
        """게시글 벌크 삭제 (태그 연결 포함)

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
        """
        if not post_ids:
            raise EmptyIdListException()

        deleted = await self.repository.delete_batch(post_ids)

        logger.info(
            "Blog posts deleted",
            extra={"request_id": get_request_id(), "deleted": deleted},
        )
        return deleted

    async def list_published(
        self,
        offset: int,
        limit: int,
        category_slug: Optional[str] = None,
        tag_slug: Optional[str] = None,
        search: Optional[str] = None,
    ) -> tuple[Sequence[BlogPost], int]:
        """발행된 게시글 목록 (최신 발행순)"""
        filters = BlogPostFilters(
            status=PostStatus.PUBLISHED,
            category_slug=category_slug,
            tag_slug=tag_slug,
            search=search,
        )
        return await self.list_posts(
            offset=offset,
            limit=limit,
            filters=filters,
            sort_by="published_at",
            sort_order=SortOrder.DESC,
        )

    async def get_published_post(self, slug: str) -> BlogPost:
        """발행된 게시글 조회

        Raises:
            BlogPostNotFoundException: 없거나 발행되지 않은 경우
        """
        post = await self.repository.get_by_slug(slug, published_only=True)
        if post is None:
            raise BlogPostNotFoundException(slug=slug)
        return post

    async def get_related_posts(
        self, slug: str, limit: int = 3
    ) -> Sequence[BlogPost]:
        """같은 카테고리의 발행 게시글 (최신순)"""
        post = await self.get_published_post(slug)
        return await self.repository.get_related(post, limit=limit)


class CategoryService:
    """카테고리 서비스"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = CategoryRepository(session)

    async def list_categories(
        self, published_only: bool = False
    ) -> list[tuple[Category, int]]:
        """카테고리 목록 (게시글 수 포함)"""
        return await self.repository.get_all_with_post_counts(published_only)

    async def get_category(self, category_id: uuid.UUID) -> Category:
        """카테고리 조회

        Raises:
            CategoryNotFoundException: 카테고리가 없는 경우
        """
        category = await self.repository.get_by_id(category_id)
        if category is None:
            raise CategoryNotFoundException(category_id)
        return category

    async def create_category(self, data: CategoryCreateRequest) -> Category:
        """카테고리 생성 (슬러그 미지정 시 이름에서 생성)

        Raises:
            CategoryConflictException: 이름 또는 슬러그 중복 시 (409)
        """
        slug = slugify(data.slug or data.name) or "untitled"
        if await self.repository.find_conflict(data.name, slug):
            raise CategoryConflictException(data.name, slug)

        category = await self.repository.create(
            Category(name=data.name, slug=slug, description=data.description)
        )
        logger.info(
            "Category created",
            extra={"request_id": get_request_id(), "slug": category.slug},
        )
        return category

    async def update_category(
        self, category_id: uuid.UUID, data: CategoryUpdateRequest
    ) -> Category:
        """카테고리 수정

        Raises:
            CategoryNotFoundException: 카테고리가 없는 경우
            CategoryConflictException: 이름 또는 슬러그 중복 시 (409)
        """
        category = await self.get_category(category_id)
        changes = data.model_dump(exclude_unset=True)

        name = changes.get("name") or category.name
        slug = slugify(changes["slug"]) if changes.get("slug") else category.slug
        if await self.repository.find_conflict(name, slug, exclude_id=category.id):
            raise CategoryConflictException(name, slug)

        category.name = name
        category.slug = slug
        if "description" in changes:
            category.description = changes["description"]

        return await self.repository.update(category)

    async def delete_category(self, category_id: uuid.UUID) -> None:
        """카테고리 삭제 (연결된 게시글은 카테고리 없음으로 변경)"""
        category = await self.get_category(category_id)
        await self.repository.delete(category)
        logger.info(
            "Category deleted",
            extra={"request_id": get_request_id(), "category_id": str(category_id)},
        )


class TagService:
    """태그 서비스"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = TagRepository(session)

    async def list_tags(self, published_only: bool = False) -> list[tuple[Tag, int]]:
        """태그 목록 (게시글 수 포함)"""
        return await self.repository.get_all_with_post_counts(published_only)

    async def get_tag(self, tag_id: uuid.UUID) -> Tag:
        """태그 조회

        Raises:
            TagNotFoundException: 태그가 없는 경우
        """
        tag = await self.repository.get_by_id(tag_id)
        if tag is None:
            raise TagNotFoundException(tag_id)
        return tag

    async def create_tag(self, data: TagCreateRequest) -> Tag:
        """태그 생성 (슬러그 미지정 시 이름에서 생성)

        Raises:
            TagConflictException: 슬러그 중복 시 (409)
        """
        slug = slugify(data.slug or data.name) or "untitled"
        if await self.repository.slug_exists(slug):
            raise TagConflictException(slug)

        tag = await self.repository.create(Tag(name=data.name, slug=slug))
        logger.info(
            "Tag created",
            extra={"request_id": get_request_id(), "slug": tag.slug},
        )
        return tag

    async def update_tag(self, tag_id: uuid.UUID, data: TagUpdateRequest) -> Tag:
        """태그 수정

        Raises:
            TagNotFoundException: 태그가 없는 경우
            TagConflictException: 슬러그 중복 시 (409)
        """
        tag = await self.get_tag(tag_id)
        changes = data.model_dump(exclude_unset=True)

        if changes.get("slug"):
            slug = slugify(changes["slug"])
            if await self.repository.slug_exists(slug, exclude_id=tag.id):
                raise TagConflictException(slug)
            tag.slug = slug
        if changes.get("name"):
            tag.name = changes["name"]

        return await self.repository.update(tag)

    async def delete_tag(self, tag_id: uuid.UUID) -> None:
        """태그 삭제 (게시글 연결은 함께 제거)"""
        tag = await self.get_tag(tag_id)
        await self.repository.delete(tag)
        logger.info(
            "Tag deleted",
            extra={"request_id": get_request_id(), "tag_id": str(tag_id)},
        )
