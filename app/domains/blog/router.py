"""Blog 도메인 라우터

관리자용 게시글/카테고리/태그 API와 공개 블로그 API를 제공합니다.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_admin_api_key
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
from app.domains.blog.models import PostStatus
from app.domains.blog.repository import BlogPostFilters
from app.domains.blog.schemas import (
    BlogPostCreateRequest,
    BlogPostResponse,
    BlogPostUpdateRequest,
    CategoryCreateRequest,
    CategoryListItem,
    CategoryResponse,
    CategoryUpdateRequest,
    DeleteResult,
    TagCreateRequest,
    TagListItem,
    TagResponse,
    TagUpdateRequest,
)
from app.domains.blog.service import BlogPostService, CategoryService, TagService
from app.domains.indexing.client import GoogleIndexingClient, get_indexing_client
from app.domains.indexing.service import IndexingService

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])
category_router = APIRouter(dependencies=[Depends(verify_admin_api_key)])
tag_router = APIRouter(dependencies=[Depends(verify_admin_api_key)])
public_router = APIRouter()


def get_blog_post_service(
    session: AsyncSession = Depends(get_db),
    indexing_client: GoogleIndexingClient = Depends(get_indexing_client),
) -> BlogPostService:
    """BlogPostService 의존성"""
    return BlogPostService(session, IndexingService(session, indexing_client))


def get_category_service(
    session: AsyncSession = Depends(get_db),
) -> CategoryService:
    """CategoryService 의존성"""
    return CategoryService(session)


def get_tag_service(session: AsyncSession = Depends(get_db)) -> TagService:
    """TagService 의존성"""
    return TagService(session)


# 관리자: 게시글


@router.get("", response_model=ListAPIResponse[BlogPostResponse])
async def list_posts(
    page_params: PageParams = Depends(),
    sort_params: SortParams = Depends(),
    category_id: Optional[uuid.UUID] = Query(None, description="카테고리 ID"),
    tag_id: Optional[uuid.UUID] = Query(None, description="태그 ID"),
    author_id: Optional[uuid.UUID] = Query(None, description="저자 ID"),
    status: Optional[PostStatus] = Query(None, description="상태"),
    search: Optional[str] = Query(None, max_length=255, description="제목/요약/본문 검색"),
    service: BlogPostService = Depends(get_blog_post_service),
):
    """게시글 목록 조회 (관리자)"""
    filters = BlogPostFilters(
        category_id=category_id,
        tag_id=tag_id,
        author_id=author_id,
        status=status,
        search=search,
    )
    posts, total = await service.list_posts(
        offset=page_params.offset,
        limit=page_params.limit,
        filters=filters,
        sort_by=sort_params.sort_by,
        sort_order=sort_params.sort_order,
    )
    return create_list_response(
        data=[BlogPostResponse.from_post(post) for post in posts],
        total=total,
        page=page_params.page,
        limit=page_params.limit,
        message="게시글 목록을 조회했습니다.",
    )


@router.post("", response_model=APIResponse[BlogPostResponse], status_code=201)
async def create_post(
    data: BlogPostCreateRequest,
    service: BlogPostService = Depends(get_blog_post_service),
):
    """게시글 생성"""
    post = await service.create_post(data)
    return create_response(
        data=BlogPostResponse.from_post(post),
        message="게시글이 생성되었습니다.",
    )


@router.patch("", response_model=APIResponse[BulkResult])
async def bulk_update_posts(
    data: BulkActionRequest,
    service: BlogPostService = Depends(get_blog_post_service),
):
    """게시글 벌크 상태 변경 (publish, unpublish, archive)"""
    affected = await service.bulk_action(data.ids, data.action)
    return create_response(
        data=BulkResult(affected=affected),
        message=f"{affected}개의 게시글이 변경되었습니다.",
    )


@router.delete("", response_model=APIResponse[DeleteResult])
async def bulk_delete_posts(
    data: BulkIdsRequest,
    service: BlogPostService = Depends(get_blog_post_service),
):
    """게시글 벌크 삭제"""
    deleted = await service.bulk_delete(data.ids)
    return create_response(
        data=DeleteResult(deleted=deleted),
        message=f"{deleted}개의 게시글이 삭제되었습니다.",
    )


@router.get("/{post_id}", response_model=APIResponse[BlogPostResponse])
async def get_post(
    post_id: uuid.UUID,
    service: BlogPostService = Depends(get_blog_post_service),
):
    """게시글 상세 조회 (tag_ids 포함)"""
    post = await service.get_post(post_id)
    return create_response(
        data=BlogPostResponse.from_post(post),
        message="게시글을 조회했습니다.",
    )


@router.put("/{post_id}", response_model=APIResponse[BlogPostResponse])
async def update_post(
    post_id: uuid.UUID,
    data: BlogPostUpdateRequest,
    service: BlogPostService = Depends(get_blog_post_service),
):
    """게시글 수정 (부분 수정)"""
    post = await service.update_post(post_id, data)
    return create_response(
        data=BlogPostResponse.from_post(post),
        message="게시글이 수정되었습니다.",
    )


@router.delete("/{post_id}", response_model=APIResponse[DeleteResult])
async def delete_post(
    post_id: uuid.UUID,
    service: BlogPostService = Depends(get_blog_post_service),
):
    """게시글 삭제"""
    deleted = await service.delete_post(post_id)
    return create_response(
        data=DeleteResult(deleted=deleted),
        message="게시글이 삭제되었습니다.",
    )


# 관리자: 카테고리


@category_router.get("", response_model=APIResponse[list[CategoryListItem]])
async def list_categories(
    service: CategoryService = Depends(get_category_service),
):
    """카테고리 목록 (게시글 수 포함)"""
    rows = await service.list_categories()
    return create_response(
        data=[
            CategoryListItem.model_validate(category).model_copy(
                update={"posts_count": count}
            )
            for category, count in rows
        ],
        message="카테고리 목록을 조회했습니다.",
    )


@category_router.post(
    "", response_model=APIResponse[CategoryResponse], status_code=201
)
async def create_category(
    data: CategoryCreateRequest,
    service: CategoryService = Depends(get_category_service),
):
    """카테고리 생성"""
    category = await service.create_category(data)
    return create_response(
        data=CategoryResponse.model_validate(category),
        message="카테고리가 생성되었습니다.",
    )


@category_router.get("/{category_id}", response_model=APIResponse[CategoryResponse])
async def get_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(get_category_service),
):
    """카테고리 조회"""
    category = await service.get_category(category_id)
    return create_response(
        data=CategoryResponse.model_validate(category),
        message="카테고리를 조회했습니다.",
    )


@category_router.put("/{category_id}", response_model=APIResponse[CategoryResponse])
async def update_category(
    category_id: uuid.UUID,
    data: CategoryUpdateRequest,
    service: CategoryService = Depends(get_category_service),
):
    """카테고리 수정"""
    category = await service.update_category(category_id, data)
    return create_response(
        data=CategoryResponse.model_validate(category),
        message="카테고리가 수정되었습니다.",
    )


@category_router.delete("/{category_id}", response_model=APIResponse[None])
async def delete_category(
    category_id: uuid.UUID,
    service: CategoryService = Depends(get_category_service),
):
    """카테고리 삭제"""
    await service.delete_category(category_id)
    return create_response(message="카테고리가 삭제되었습니다.")


# 관리자: 태그


@tag_router.get("", response_model=APIResponse[list[TagListItem]])
async def list_tags(service: TagService = Depends(get_tag_service)):
    """태그 목록 (게시글 수 포함)"""
    rows = await service.list_tags()
    return create_response(
        data=[
            TagListItem.model_validate(tag).model_copy(update={"posts_count": count})
            for tag, count in rows
        ],
        message="태그 목록을 조회했습니다.",
    )


@tag_router.post("", response_model=APIResponse[TagResponse], status_code=201)
async def create_tag(
    data: TagCreateRequest,
    service: TagService = Depends(get_tag_service),
):
    """태그 생성"""
    tag = await service.create_tag(data)
    return create_response(
        data=TagResponse.model_validate(tag),
        message="태그가 생성되었습니다.",
    )


@tag_router.put("/{tag_id}", response_model=APIResponse[TagResponse])
async def update_tag(
    tag_id: uuid.UUID,
    data: TagUpdateRequest,
    service: TagService = Depends(get_tag_service),
):
    """태그 수정"""
    tag = await service.update_tag(tag_id, data)
    return create_response(
        data=TagResponse.model_validate(tag),
        message="태그가 수정되었습니다.",
    )


@tag_router.delete("/{tag_id}", response_model=APIResponse[None])
async def delete_tag(
    tag_id: uuid.UUID,
    service: TagService = Depends(get_tag_service),
):
    """태그 삭제"""
    await service.delete_tag(tag_id)
    return create_response(message="태그가 삭제되었습니다.")


# 공개 API


@public_router.get("/posts", response_model=ListAPIResponse[BlogPostResponse])
async def list_published_posts(
    page_params: PageParams = Depends(),
    category: Optional[str] = Query(None, description="카테고리 슬러그"),
    tag: Optional[str] = Query(None, description="태그 슬러그"),
    search: Optional[str] = Query(None, max_length=255, description="검색어"),
    service: BlogPostService = Depends(get_blog_post_service),
):
    """발행된 게시글 목록"""
    posts, total = await service.list_published(
        offset=page_params.offset,
        limit=page_params.limit,
        category_slug=category,
        tag_slug=tag,
        search=search,
    )
    return create_list_response(
        data=[BlogPostResponse.from_post(post) for post in posts],
        total=total,
        page=page_params.page,
        limit=page_params.limit,
        message="게시글 목록을 조회했습니다.",
    )


@public_router.get("/posts/{slug}", response_model=APIResponse[BlogPostResponse])
async def get_published_post(
    slug: str,
    service: BlogPostService = Depends(get_blog_post_service),
):
    """발행된 게시글 조회"""
    post = await service.get_published_post(slug)
    return create_response(
        data=BlogPostResponse.from_post(post),
        message="게시글을 조회했습니다.",
    )


@public_router.get(
    "/posts/{slug}/related", response_model=APIResponse[list[BlogPostResponse]]
)
async def get_related_posts(
    slug: str,
    limit: int = Query(3, ge=1, le=10, description="최대 개수"),
    service: BlogPostService = Depends(get_blog_post_service),
):
    """같은 카테고리의 관련 게시글"""
    posts = await service.get_related_posts(slug, limit=limit)
    return create_response(
        data=[BlogPostResponse.from_post(post) for post in posts],
        message="관련 게시글을 조회했습니다.",
    )


@public_router.get("/categories", response_model=APIResponse[list[CategoryListItem]])
async def list_public_categories(
    service: CategoryService = Depends(get_category_service),
):
    """카테고리 목록 (발행 게시글 수 포함)"""
    rows = await service.list_categories(published_only=True)
    return create_response(
        data=[
            CategoryListItem.model_validate(category).model_copy(
                update={"posts_count": count}
            )
            for category, count in rows
        ],
        message="카테고리 목록을 조회했습니다.",
    )


@public_router.get("/tags", response_model=APIResponse[list[TagListItem]])
async def list_public_tags(service: TagService = Depends(get_tag_service)):
    """태그 목록 (발행 게시글 수 포함)"""
    rows = await service.list_tags(published_only=True)
    return create_response(
        data=[
            TagListItem.model_validate(tag).model_copy(update={"posts_count": count})
            for tag, count in rows
        ],
        message="태그 목록을 조회했습니다.",
    )
