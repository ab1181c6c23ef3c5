"""Gallery 도메인 리포지토리"""

import uuid
from dataclasses import dataclass
from typing import Optional, Sequence, cast

from sqlalchemy import and_, delete, exists, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils.pagination import SortOrder, build_order_by
from app.domains.gallery.models import GalleryGroup, GalleryImage, GalleryImageGroup

IMAGE_SORTABLE_COLUMNS = {
    "name": GalleryImage.name,
    "display_order": GalleryImage.display_order,
    "file_size": GalleryImage.file_size,
    "created_at": GalleryImage.created_at,
}


@dataclass
class GalleryImageFilters:
    """이미지 목록 조회 필터"""

    group_id: Optional[uuid.UUID] = None
    group_slug: Optional[str] = None
    search: Optional[str] = None
    is_available: Optional[bool] = None
    is_featured: Optional[bool] = None


class GalleryImageRepository:
    """갤러리 이미지 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, image_id: uuid.UUID) -> Optional[GalleryImage]:
        """ID로 이미지 조회 (그룹 포함)"""
        result = await self.session.execute(
            select(GalleryImage).where(GalleryImage.id == image_id)
        )
        return cast(Optional[GalleryImage], result.scalar_one_or_none())

    async def get_by_ids(self, image_ids: list[uuid.UUID]) -> Sequence[GalleryImage]:
        """ID 목록으로 이미지 조회"""
        result = await self.session.execute(
            select(GalleryImage).where(GalleryImage.id.in_(image_ids))
        )
        return cast(Sequence[GalleryImage], result.scalars().all())

    def _apply_filters(self, query, filters: Optional[GalleryImageFilters]):
        if not filters:
            return query

        if filters.group_id:
            query = query.where(
                exists().where(
                    and_(
                        GalleryImageGroup.image_id == GalleryImage.id,
                        GalleryImageGroup.group_id == filters.group_id,
                    )
                )
            )

        if filters.group_slug:
            query = query.where(
                exists().where(
                    and_(
                        GalleryImageGroup.image_id == GalleryImage.id,
                        GalleryImageGroup.group_id == GalleryGroup.id,
                        GalleryGroup.slug == filters.group_slug,
                    )
                )
            )

        if filters.is_available is not None:
            query = query.where(GalleryImage.is_available == filters.is_available)

        if filters.is_featured is not None:
            query = query.where(GalleryImage.is_featured == filters.is_featured)

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(
                or_(
                    GalleryImage.name.ilike(pattern),
                    GalleryImage.alt_text.ilike(pattern),
                    GalleryImage.description.ilike(pattern),
                )
            )

        return query

    async def get_list(
        self,
        offset: int = 0,
        limit: int = 20,
        filters: Optional[GalleryImageFilters] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> Sequence[GalleryImage]:
        """이미지 목록 조회"""
        query = self._apply_filters(select(GalleryImage), filters)
        query = (
            query.order_by(
                build_order_by(sort_by, sort_order, IMAGE_SORTABLE_COLUMNS),
                GalleryImage.id,
            )
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return cast(Sequence[GalleryImage], result.scalars().all())

    async def count(self, filters: Optional[GalleryImageFilters] = None) -> int:
        """이미지 수 조회 (get_list와 동일한 필터)"""
        query = self._apply_filters(select(func.count(GalleryImage.id)), filters)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def get_available_in_group(
        self, group_id: uuid.UUID
    ) -> Sequence[GalleryImage]:
        """그룹의 공개 이미지 (그룹 내 순서)"""
        result = await self.session.execute(
            select(GalleryImage)
            .join(GalleryImageGroup, GalleryImageGroup.image_id == GalleryImage.id)
            .where(
                GalleryImageGroup.group_id == group_id,
                GalleryImage.is_available.is_(True),
            )
            .order_by(
                GalleryImageGroup.display_order.asc(),
                GalleryImage.display_order.asc(),
                GalleryImage.created_at.desc(),
            )
        )
        return cast(Sequence[GalleryImage], result.scalars().all())

    async def create(self, image: GalleryImage) -> GalleryImage:
        """이미지 생성 (그룹 연결 포함)"""
        self.session.add(image)
        await self.session.flush()
        await self.session.refresh(image)
        return image

    async def update(self, image: GalleryImage) -> GalleryImage:
        """이미지 수정"""
        await self.session.flush()
        await self.session.refresh(image)
        return image

    async def delete(self, image: GalleryImage) -> None:
        """이미지 삭제 (그룹 연결은 함께 삭제, 커버 참조는 해제)"""
        await self.session.delete(image)
        await self.session.flush()

    async def update_flag_batch(
        self, image_ids: list[uuid.UUID], column: str, value: bool
    ) -> int:
        """is_available / is_featured 벌크 변경

        Returns:
            변경된 레코드 수
        """
        result = await self.session.execute(
            update(GalleryImage)
            .where(GalleryImage.id.in_(image_ids))
            .values({column: value})
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return int(result.rowcount)

    async def delete_batch(self, image_ids: list[uuid.UUID]) -> int:
        """이미지 벌크 삭제

        Returns:
            삭제된 레코드 수
        """
        result = await self.session.execute(
            delete(GalleryImage)
            .where(GalleryImage.id.in_(image_ids))
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return int(result.rowcount)


class GalleryGroupRepository:
    """갤러리 그룹 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, group_id: uuid.UUID) -> Optional[GalleryGroup]:
        """ID로 그룹 조회"""
        result = await self.session.execute(
            select(GalleryGroup).where(GalleryGroup.id == group_id)
        )
        return cast(Optional[GalleryGroup], result.scalar_one_or_none())

    async def get_by_slug(
        self, slug: str, active_only: bool = False
    ) -> Optional[GalleryGroup]:
        """슬러그로 그룹 조회"""
        query = select(GalleryGroup).where(GalleryGroup.slug == slug)
        if active_only:
            query = query.where(GalleryGroup.is_active.is_(True))
        result = await self.session.execute(query)
        return cast(Optional[GalleryGroup], result.scalar_one_or_none())

    async def slug_exists(
        self, slug: str, exclude_id: Optional[uuid.UUID] = None
    ) -> bool:
        """슬러그 사용 여부 (exclude_id 그룹 제외)"""
        query = select(GalleryGroup.id).where(GalleryGroup.slug == slug)
        if exclude_id:
            query = query.where(GalleryGroup.id != exclude_id)
        result = await self.session.execute(query.limit(1))
        return result.scalar_one_or_none() is not None

    async def get_by_ids(self, group_ids: list[uuid.UUID]) -> Sequence[GalleryGroup]:
        """ID 목록으로 그룹 조회"""
        if not group_ids:
            return []
        result = await self.session.execute(
            select(GalleryGroup).where(GalleryGroup.id.in_(group_ids))
        )
        return cast(Sequence[GalleryGroup], result.scalars().all())

    async def get_all_with_image_counts(
        self, active_only: bool = False
    ) -> list[tuple[GalleryGroup, int]]:
        """그룹 목록과 그룹별 이미지 수 (정렬 순서, 이름순)

        Args:
            active_only: True면 활성 그룹과 공개 이미지만 집계
        """
        image_count = func.count(GalleryImage.id)
        image_join = GalleryImage.id == GalleryImageGroup.image_id
        if active_only:
            image_join = and_(image_join, GalleryImage.is_available.is_(True))

        query = (
            select(GalleryGroup, image_count)
            .outerjoin(GalleryImageGroup, GalleryImageGroup.group_id == GalleryGroup.id)
            .outerjoin(GalleryImage, image_join)
            .group_by(GalleryGroup.id)
            .order_by(GalleryGroup.display_order.asc(), GalleryGroup.name.asc())
        )
        if active_only:
            query = query.where(GalleryGroup.is_active.is_(True))

        result = await self.session.execute(query)
        return [(row[0], int(row[1])) for row in result.all()]

    async def create(self, group: GalleryGroup) -> GalleryGroup:
        """그룹 생성"""
        self.session.add(group)
        await self.session.flush()
        await self.session.refresh(group)
        return group

    async def update(self, group: GalleryGroup) -> GalleryGroup:
        """그룹 수정"""
        await self.session.flush()
        await self.session.refresh(group)
        return group

    async def delete(self, group: GalleryGroup) -> None:
        """그룹 삭제 (이미지 연결은 함께 삭제)"""
        await self.session.delete(group)
        await self.session.flush()
