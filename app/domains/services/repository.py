"""Services 도메인 리포지토리"""

import uuid
from dataclasses import dataclass
from typing import Optional, Sequence, cast

from sqlalchemy import delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils.pagination import SortOrder, build_order_by
from app.domains.services.models import Service, ServiceCategory, ServiceStatus

SORTABLE_COLUMNS = {
    "title": Service.title,
    "category": Service.category,
    "timeline": Service.timeline,
    "created_at": Service.created_at,
}


@dataclass
class ServiceFilters:
    """서비스 목록 조회 필터"""

    category: Optional[ServiceCategory] = None
    status: Optional[ServiceStatus] = None
    search: Optional[str] = None


class ServiceRepository:
    """서비스 리포지토리 (하위 항목은 selectin으로 함께 로드)"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, service_id: uuid.UUID) -> Optional[Service]:
        """ID로 서비스 조회"""
        result = await self.session.execute(
            select(Service).where(Service.id == service_id)
        )
        return cast(Optional[Service], result.scalar_one_or_none())

    async def get_by_slug(
        self, slug: str, published_only: bool = False
    ) -> Optional[Service]:
        """슬러그로 서비스 조회"""
        query = select(Service).where(Service.slug == slug)
        if published_only:
            query = query.where(Service.status == ServiceStatus.PUBLISHED.value)
        result = await self.session.execute(query)
        return cast(Optional[Service], result.scalar_one_or_none())

    async def slug_exists(
        self, slug: str, exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        """슬러그 사용 여부"""
        query = select(Service.id).where(Service.slug == slug)
        if exclude_id:
            query = query.where(Service.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def existing_ids(self, service_ids: list[uuid.UUID]) -> set[uuid.UUID]:
        """존재하는 서비스 ID만 반환"""
        if not service_ids:
            return set()
        result = await self.session.execute(
            select(Service.id).where(Service.id.in_(service_ids))
        )
        return set(result.scalars().all())

    def _apply_filters(self, query, filters: Optional[ServiceFilters]):
        if not filters:
            return query

        if filters.category:
            query = query.where(Service.category == filters.category.value)

        if filters.status:
            query = query.where(Service.status == filters.status.value)

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(
                or_(
                    Service.title.ilike(pattern),
                    Service.short_description.ilike(pattern),
                    Service.full_description.ilike(pattern),
                )
            )

        return query

    async def get_list(
        self,
        offset: int = 0,
        limit: int = 10,
        filters: Optional[ServiceFilters] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> Sequence[Service]:
        """서비스 목록 조회"""
        query = self._apply_filters(select(Service), filters)
        query = (
            query.order_by(
                build_order_by(sort_by, sort_order, SORTABLE_COLUMNS),
                Service.id,
            )
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return cast(Sequence[Service], result.scalars().all())

    async def count(self, filters: Optional[ServiceFilters] = None) -> int:
        """서비스 수 조회"""
        query = self._apply_filters(select(func.count(Service.id)), filters)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def create(self, service: Service) -> Service:
        """서비스 생성 (하위 항목 포함)"""
        self.session.add(service)
        await self.session.flush()
        await self.session.refresh(service)
        return service

    async def update(self, service: Service) -> Service:
        """서비스 수정 (교체된 하위 항목 포함)"""
        await self.session.flush()
        await self.session.refresh(service)
        return service

    async def update_status_batch(
        self, service_ids: list[uuid.UUID], status: ServiceStatus
    ) -> int:
        """서비스 상태 벌크 변경"""
        result = await self.session.execute(
            update(Service)
            .where(Service.id.in_(service_ids))
            .values(status=status.value)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return int(result.rowcount)

    async def delete_batch(self, service_ids: list[uuid.UUID]) -> int:
        """서비스 벌크 삭제 (하위 항목은 CASCADE로 삭제)"""
        result = await self.session.execute(
            delete(Service)
            .where(Service.id.in_(service_ids))
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return int(result.rowcount)
