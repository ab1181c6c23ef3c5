"""Gallery 도메인 라우터

관리자용 이미지/그룹 API와 공개 갤러리 API를 제공합니다.
"""

import uuid
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, Query, UploadFile, status
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_admin_api_key
from app.core.schemas import (
    APIResponse,
    ListAPIResponse,
    create_list_response,
    create_response,
)
from app.core.storage import S3Client, get_s3_client
from app.core.utils.pagination import SortParams
from app.domains.gallery.repository import GalleryImageFilters
from app.domains.gallery.schemas import (
    BulkUpdateResult,
    DeleteResult,
    GalleryBulkDeleteRequest,
    GalleryBulkUpdateRequest,
    GalleryGroupCreateRequest,
    GalleryGroupListItem,
    GalleryGroupResponse,
    GalleryGroupUpdateRequest,
    GalleryImageResponse,
    GalleryImageUpdateRequest,
    PublicGalleryGroupResponse,
    PublicGalleryImageResponse,
)
from app.domains.gallery.service import GalleryService, parse_group_ids

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])
public_router = APIRouter()

MAX_GALLERY_PAGE_SIZE = 50


def get_gallery_service(
    session: AsyncSession = Depends(get_db),
    s3_client: S3Client = Depends(get_s3_client),
) -> GalleryService:
    """GalleryService 의존성"""
    return GalleryService(session, s3_client)


def _group_list_item(group, image_count: int) -> GalleryGroupListItem:
    return GalleryGroupListItem.model_validate(group).model_copy(
        update={"image_count": image_count}
    )


# 관리자: 이미지


@router.get("", response_model=ListAPIResponse[GalleryImageResponse])
async def list_images(
    page: int = Query(1, ge=1, description="페이지 번호"),
    limit: int = Query(20, ge=1, le=MAX_GALLERY_PAGE_SIZE, description="페이지 크기"),
    sort_params: SortParams = Depends(),
    group_id: Optional[uuid.UUID] = Query(None, description="그룹 ID"),
    search: Optional[str] = Query(None, max_length=200, description="검색어"),
    is_available: Optional[bool] = Query(None, description="공개 여부"),
    is_featured: Optional[bool] = Query(None, description="추천 여부"),
    service: GalleryService = Depends(get_gallery_service),
):
    """갤러리 이미지 목록 (그룹 포함)"""
    filters = GalleryImageFilters(
        group_id=group_id,
        search=search,
        is_available=is_available,
        is_featured=is_featured,
    )
    images, total = await service.list_images(
        offset=(page - 1) * limit,
        limit=limit,
        filters=filters,
        sort_by=sort_params.sort_by,
        sort_order=sort_params.sort_order,
    )
    return create_list_response(
        data=[GalleryImageResponse.model_validate(i) for i in images],
        total=total,
        page=page,
        limit=limit,
        message="갤러리 이미지 목록을 조회했습니다.",
    )


@router.post(
    "/upload",
    response_model=APIResponse[GalleryImageResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_image(
    file: UploadFile = File(..., description="이미지 파일"),
    name: str = Form(..., min_length=1, max_length=255),
    alt_text: str = Form(..., min_length=1, max_length=500),
    description: Optional[str] = Form(None),
    group_ids: Optional[str] = Form(None, description="그룹 ID JSON 배열"),
    is_available: bool = Form(True),
    is_featured: bool = Form(False),
    service: GalleryService = Depends(get_gallery_service),
):
    """갤러리 이미지 업로드 (jpeg, png, webp, gif / 최대 5MB)"""
    parsed_group_ids = parse_group_ids(group_ids)
    content = await file.read()
    image = await service.upload_image(
        content=content,
        file_name=file.filename,
        content_type=file.content_type,
        name=name,
        alt_text=alt_text,
        description=description,
        group_ids=parsed_group_ids,
        is_available=is_available,
        is_featured=is_featured,
    )
    return create_response(
        data=GalleryImageResponse.model_validate(image),
        message="이미지를 업로드했습니다.",
    )


@router.patch("/bulk", response_model=APIResponse[BulkUpdateResult])
async def bulk_update_images(
    data: GalleryBulkUpdateRequest,
    service: GalleryService = Depends(get_gallery_service),
):
    """이미지 벌크 변경 (availability, featured)"""
    updated = await service.bulk_update(data.image_ids, data.operation, data.value)
    return create_response(
        data=BulkUpdateResult(updated=updated),
        message=f"{updated}개의 이미지를 변경했습니다.",
    )


@router.delete("/bulk", response_model=APIResponse[DeleteResult])
async def bulk_delete_images(
    data: GalleryBulkDeleteRequest,
    service: GalleryService = Depends(get_gallery_service),
):
    """이미지 벌크 삭제"""
    deleted = await service.bulk_delete(data.image_ids)
    return create_response(
        data=DeleteResult(deleted=deleted),
        message=f"{deleted}개의 이미지를 삭제했습니다.",
    )


# 관리자: 그룹


@router.get("/groups", response_model=APIResponse[list[GalleryGroupListItem]])
async def list_groups(service: GalleryService = Depends(get_gallery_service)):
    """그룹 목록 (이미지 수 포함)"""
    groups = await service.list_groups()
    return create_response(
        data=[_group_list_item(g, count) for g, count in groups],
        message="갤러리 그룹 목록을 조회했습니다.",
    )


@router.post(
    "/groups",
    response_model=APIResponse[GalleryGroupResponse],
    status_code=status.HTTP_201_CREATED,
)
async def create_group(
    data: GalleryGroupCreateRequest,
    service: GalleryService = Depends(get_gallery_service),
):
    """그룹 생성 (슬러그 미입력 시 이름에서 생성)"""
    group = await service.create_group(data)
    return create_response(
        data=GalleryGroupResponse.model_validate(group),
        message="갤러리 그룹을 생성했습니다.",
    )


@router.get("/groups/{group_id}", response_model=APIResponse[GalleryGroupResponse])
async def get_group(
    group_id: uuid.UUID,
    service: GalleryService = Depends(get_gallery_service),
):
    """그룹 조회"""
    group = await service.get_group(group_id)
    return create_response(
        data=GalleryGroupResponse.model_validate(group),
        message="갤러리 그룹을 조회했습니다.",
    )


@router.put("/groups/{group_id}", response_model=APIResponse[GalleryGroupResponse])
async def update_group(
    group_id: uuid.UUID,
    data: GalleryGroupUpdateRequest,
    service: GalleryService = Depends(get_gallery_service),
):
    """그룹 수정"""
    group = await service.update_group(group_id, data)
    return create_response(
        data=GalleryGroupResponse.model_validate(group),
        message="갤러리 그룹을 수정했습니다.",
    )


@router.delete("/groups/{group_id}", response_model=APIResponse[None])
async def delete_group(
    group_id: uuid.UUID,
    service: GalleryService = Depends(get_gallery_service),
):
    """그룹 삭제 (이미지는 유지)"""
    await service.delete_group(group_id)
    return create_response(data=None, message="갤러리 그룹을 삭제했습니다.")


# 관리자: 이미지 단건


@router.get("/{image_id}", response_model=APIResponse[GalleryImageResponse])
async def get_image(
    image_id: uuid.UUID,
    service: GalleryService = Depends(get_gallery_service),
):
    """이미지 조회 (그룹 포함)"""
    image = await service.get_image(image_id)
    return create_response(
        data=GalleryImageResponse.model_validate(image),
        message="이미지를 조회했습니다.",
    )


@router.put("/{image_id}", response_model=APIResponse[GalleryImageResponse])
async def update_image(
    image_id: uuid.UUID,
    data: GalleryImageUpdateRequest,
    service: GalleryService = Depends(get_gallery_service),
):
    """이미지 수정 (group_ids가 있으면 그룹 연결 교체)"""
    image = await service.update_image(image_id, data)
    return create_response(
        data=GalleryImageResponse.model_validate(image),
        message="이미지를 수정했습니다.",
    )


@router.delete("/{image_id}", response_model=APIResponse[None])
async def delete_image(
    image_id: uuid.UUID,
    service: GalleryService = Depends(get_gallery_service),
):
    """이미지 삭제"""
    await service.delete_image(image_id)
    return create_response(data=None, message="이미지를 삭제했습니다.")


# 공개


@public_router.get("", response_model=ListAPIResponse[PublicGalleryImageResponse])
async def list_public_images(
    page: int = Query(1, ge=1, description="페이지 번호"),
    limit: int = Query(20, ge=1, le=MAX_GALLERY_PAGE_SIZE, description="페이지 크기"),
    featured: Optional[bool] = Query(None, description="추천 이미지만"),
    group_slug: Optional[str] = Query(None, description="그룹 슬러그"),
    service: GalleryService = Depends(get_gallery_service),
):
    """공개 갤러리 이미지 목록"""
    images, total = await service.list_public_images(
        offset=(page - 1) * limit,
        limit=limit,
        featured=featured,
        group_slug=group_slug,
    )
    return create_list_response(
        data=[PublicGalleryImageResponse.model_validate(i) for i in images],
        total=total,
        page=page,
        limit=limit,
        message="갤러리 이미지 목록을 조회했습니다.",
    )


@public_router.get(
    "/groups", response_model=APIResponse[list[GalleryGroupListItem]]
)
async def list_public_groups(service: GalleryService = Depends(get_gallery_service)):
    """활성 그룹 목록 (공개 이미지 수 포함)"""
    groups = await service.list_groups(active_only=True)
    return create_response(
        data=[_group_list_item(g, count) for g, count in groups],
        message="갤러리 그룹 목록을 조회했습니다.",
    )


@public_router.get(
    "/{group_slug}", response_model=APIResponse[PublicGalleryGroupResponse]
)
async def get_public_group(
    group_slug: str,
    service: GalleryService = Depends(get_gallery_service),
):
    """그룹과 공개 이미지 (그룹 내 순서)"""
    group, images = await service.get_public_group(group_slug)
    return create_response(
        data=PublicGalleryGroupResponse(
            group=GalleryGroupResponse.model_validate(group),
            images=[PublicGalleryImageResponse.model_validate(i) for i in images],
        ),
        message="갤러리 그룹을 조회했습니다.",
    )
