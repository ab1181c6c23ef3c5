"""AI 생성 결과 저장 서비스

생성된 게시글/서비스를 하나의 트랜잭션으로 저장합니다.
카테고리와 태그는 이름으로 찾고, 없으면 만듭니다.
"""

import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.context import get_request_id
from app.core.logging import get_logger
from app.core.utils.slug import generate_unique_slug, slugify
from app.domains.ai.schemas import (
    BlogPostSaveRequest,
    SaveResult,
    ServiceSaveRequest,
)
from app.domains.blog.models import Category, Tag
from app.domains.blog.repository import CategoryRepository, TagRepository
from app.domains.blog.schemas import BlogPostCreateRequest
from app.domains.blog.service import BlogPostService
from app.domains.indexing.service import IndexingService
from app.domains.services.models import ServiceStatus
from app.domains.services.schemas import ServiceCreateRequest
from app.domains.services.service import CatalogService

logger = get_logger(__name__)


class GeneratedContentService:
    """생성된 콘텐츠 저장 서비스"""

    def __init__(
        self,
        session: AsyncSession,
        indexing_service: Optional[IndexingService] = None,
    ):
        self.session = session
        self.indexing_service = indexing_service or IndexingService(session)
        self.post_service = BlogPostService(session, self.indexing_service)
        self.catalog_service = CatalogService(session, self.indexing_service)
        self.category_repository = CategoryRepository(session)
        self.tag_repository = TagRepository(session)

    async def _category_slug_exists(self, slug: str) -> bool:
        return await self.category_repository.get_by_slug(slug) is not None

    async def find_or_create_category(self, name: str) -> Category:
        """이름으로 카테고리 조회, 없으면 생성"""
        category = await self.category_repository.get_by_name(name)
        if category:
            return category

        slug = await generate_unique_slug(name, self._category_slug_exists)
        category = await self.category_repository.create(
            Category(
                name=name,
                slug=slug,
                description=f"Category for {name} related posts",
            )
        )
        logger.info(
            "Category created for generated post",
            extra={"request_id": get_request_id(), "category_id": str(category.id)},
        )
        return category

    async def find_or_create_tags(self, names: list[str]) -> list[Tag]:
        """이름 또는 슬러그로 태그 조회, 없으면 생성 (입력 순서 유지, 중복 제외)"""
        tags: list[Tag] = []
        seen: set[uuid.UUID] = set()
        for raw_name in names:
            name = raw_name.strip()
            if not name:
                continue
            tag = await self.tag_repository.get_by_name_or_slug(name, slugify(name))
            if tag is None:
                slug = await generate_unique_slug(
                    name, self.tag_repository.slug_exists
                )
                tag = await self.tag_repository.create(Tag(name=name, slug=slug))
            if tag.id not in seen:
                seen.add(tag.id)
                tags.append(tag)
        return tags

    async def save_blog_post(self, data: BlogPostSaveRequest) -> SaveResult:
        """생성된 게시글 저장

        Raises:
            AuthorNotFoundException: 저자가 없는 경우
            CategoryNotFoundException: category_id가 없는 카테고리인 경우
        """
        slug = await generate_unique_slug(
            data.slug or data.title, self.post_service.repository.slug_exists
        )

        category_id = data.category_id
        if category_id is None and data.category:
            category_id = (await self.find_or_create_category(data.category)).id

        tags = await self.find_or_create_tags(data.tags)

        post = await self.post_service.create_post(
            BlogPostCreateRequest(
                title=data.title,
                slug=slug,
                excerpt=data.excerpt,
                content=data.content,
                featured_image=data.featured_image,
                author_id=data.author_id,
                category_id=category_id,
                status=data.status,
                meta_title=data.meta_title,
                meta_description=data.meta_description,
                meta_keywords=data.meta_keywords,
                tag_ids=[tag.id for tag in tags],
            )
        )
        return SaveResult(id=post.id, slug=post.slug)

    async def save_service(self, data: ServiceSaveRequest) -> SaveResult:
        """생성된 서비스를 draft로 저장"""
        slug = await generate_unique_slug(
            data.slug or data.title, self.catalog_service.repository.slug_exists
        )
        service = await self.catalog_service.create_service(
            ServiceCreateRequest(
                **data.model_dump(exclude={"slug"}),
                slug=slug,
                status=ServiceStatus.DRAFT,
            ),
            status=ServiceStatus.DRAFT,
        )
        return SaveResult(id=service.id, slug=service.slug)
