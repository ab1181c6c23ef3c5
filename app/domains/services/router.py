"""Services 도메인 라우터

관리자용 서비스 관리 API와 공개 서비스 조회 API를 제공합니다.
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
from app.domains.indexing.client import GoogleIndexingClient, get_indexing_client
from app.domains.indexing.service import IndexingService
from app.domains.services.models import ServiceCategory, ServiceStatus
from app.domains.services.repository import ServiceFilters
from app.domains.services.schemas import (
    DeleteResult,
    ServiceCreateRequest,
    ServiceIdResponse,
    ServiceResponse,
    ServiceUpdateRequest,
)
from app.domains.services.service import CatalogService

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])
public_router = APIRouter()


def get_catalog_service(
    session: AsyncSession = Depends(get_db),
    indexing_client: GoogleIndexingClient = Depends(get_indexing_client),
) -> CatalogService:
    """CatalogService 의존성"""
    return CatalogService(session, IndexingService(session, indexing_client))


@router.get("", response_model=ListAPIResponse[ServiceResponse])
async def list_services(
    page_params: PageParams = Depends(),
    sort_params: SortParams = Depends(),
    category: Optional[ServiceCategory] = Query(None, description="분류"),
    status: Optional[ServiceStatus] = Query(None, description="상태"),
    search: Optional[str] = Query(None, max_length=255, description="제목/설명 검색"),
    service: CatalogService = Depends(get_catalog_service),
):
    """서비스 목록 조회 (관리자)"""
    services, total = await service.list_services(
        offset=page_params.offset,
        limit=page_params.limit,
        filters=ServiceFilters(category=category, status=status, search=search),
        sort_by=sort_params.sort_by,
        sort_order=sort_params.sort_order,
    )
    return create_list_response(
        data=[ServiceResponse.from_service(s) for s in services],
        total=total,
        page=page_params.page,
        limit=page_params.limit,
        message="서비스 목록을 조회했습니다.",
    )


@router.post("", response_model=APIResponse[ServiceIdResponse], status_code=201)
async def create_service(
    data: ServiceCreateRequest,
    service: CatalogService = Depends(get_catalog_service),
):
    """서비스 생성 (하위 항목 포함)"""
    created = await service.create_service(data)
    return create_response(
        data=ServiceIdResponse(id=created.id),
        message="서비스가 생성되었습니다.",
    )


@router.patch("", response_model=APIResponse[BulkResult])
async def bulk_update_services(
    data: BulkActionRequest,
    service: CatalogService = Depends(get_catalog_service),
):
    """서비스 벌크 상태 변경 (publish, unpublish, archive)"""
    affected = await service.bulk_action(data.ids, data.action)
    return create_response(
        data=BulkResult(affected=affected),
        message=f"{affected}개의 서비스가 변경되었습니다.",
    )


@router.delete("", response_model=APIResponse[DeleteResult])
async def bulk_delete_services(
    data: BulkIdsRequest,
    service: CatalogService = Depends(get_catalog_service),
):
    """서비스 벌크 삭제"""
    deleted = await service.bulk_delete(data.ids)
    return create_response(
        data=DeleteResult(deleted=deleted),
        message=f"{deleted}개의 서비스가 삭제되었습니다.",
    )


@router.get("/{service_id}", response_model=APIResponse[ServiceResponse])
async def get_service(
    service_id: uuid.UUID,
    service: CatalogService = Depends(get_catalog_service),
):
    """서비스 상세 조회 (하위 항목 포함)"""
    found = await service.get_service(service_id)
    return create_response(
        data=ServiceResponse.from_service(found),
        message="서비스를 조회했습니다.",
    )


@router.put("/{service_id}", response_model=APIResponse[ServiceResponse])
async def update_service(
    service_id: uuid.UUID,
    data: ServiceUpdateRequest,
    service: CatalogService = Depends(get_catalog_service),
):
    """서비스 수정 (하위 항목 전체 교체)"""
    updated = await service.update_service(service_id, data)
    return create_response(
        data=ServiceResponse.from_service(updated),
        message="서비스가 수정되었습니다.",
    )


@router.delete("/{service_id}", response_model=APIResponse[DeleteResult])
async def delete_service(
    service_id: uuid.UUID,
    service: CatalogService = Depends(get_catalog_service),
):
    """서비스 삭제"""
    deleted = await service.delete_service(service_id)
    return create_response(
        data=DeleteResult(deleted=deleted),
        message="서비스가 삭제되었습니다.",
    )


# 공개 API


@public_router.get("", response_model=APIResponse[list[ServiceResponse]])
async def list_published_services(
    category: Optional[ServiceCategory] = Query(None, description="분류"),
    service: CatalogService = Depends(get_catalog_service),
):
    """발행된 서비스 목록"""
    services = await service.list_published(category)
    return create_response(
        data=[ServiceResponse.from_service(s) for s in services],
        message="서비스 목록을 조회했습니다.",
    )


@public_router.get("/{slug}", response_model=APIResponse[ServiceResponse])
async def get_published_service(
    slug: str,
    service: CatalogService = Depends(get_catalog_service),
):
    """발행된 서비스 조회"""
    found = await service.get_published_service(slug)
    return create_response(
        data=ServiceResponse.from_service(found),
        message="서비스를 조회했습니다.",
    )
