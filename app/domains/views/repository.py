"""Views 도메인 리포지토리"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from sqlalchemy import and_, distinct, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.domains.blog.models import BlogPost, PostStatus
from app.domains.services.models import Service
from app.domains.views.models import ViewContentType, ViewTracking

CONTENT_MODELS = {
    ViewContentType.BLOG_POST: BlogPost,
    ViewContentType.SERVICE: Service,
}


@dataclass
class TopContentRow:
    """상위 콘텐츠 집계 행"""

    content_id: uuid.UUID
    title: str
    slug: str
    total_views: int
    unique_views: int
    views_today: int
    views_this_week: int
    views_this_month: int


class ViewTrackingRepository:
    """조회 기록 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def exists_since(
        self,
        content_type: ViewContentType,
        content_id: uuid.UUID,
        ip_address: str,
        since: datetime,
    ) -> bool:
        """같은 IP의 since 이후 조회 기록 존재 여부"""
        result = await self.session.execute(
            select(ViewTracking.id)
            .where(
                ViewTracking.content_type == content_type.value,
                ViewTracking.content_id == content_id,
                ViewTracking.ip_address == ip_address,
                ViewTracking.viewed_at >= since,
            )
            .limit(1)
        )
        return result.scalar_one_or_none() is not None

    async def create(self, view: ViewTracking) -> ViewTracking:
        """조회 기록 생성"""
        self.session.add(view)
        await self.session.flush()
        await self.session.refresh(view)
        return view

    async def count(
        self,
        since: Optional[datetime] = None,
        content_type: Optional[ViewContentType] = None,
        content_id: Optional[uuid.UUID] = None,
    ) -> int:
        """조회 수 (조건은 선택적으로 적용)"""
        query = select(func.count(ViewTracking.id))
        if since is not None:
            query = query.where(ViewTracking.viewed_at >= since)
        if content_type is not None:
            query = query.where(ViewTracking.content_type == content_type.value)
        if content_id is not None:
            query = query.where(ViewTracking.content_id == content_id)
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def count_unique_visitors(self) -> int:
        """고유 IP 수"""
        result = await self.session.execute(
            select(func.count(distinct(ViewTracking.ip_address)))
        )
        return int(result.scalar_one())

    async def count_published_posts(self) -> int:
        """발행된 게시글 수"""
        result = await self.session.execute(
            select(func.count(BlogPost.id)).where(
                BlogPost.status == PostStatus.PUBLISHED.value
            )
        )
        return int(result.scalar_one())

    async def count_services(self) -> int:
        """전체 서비스 수"""
        result = await self.session.execute(select(func.count(Service.id)))
        return int(result.scalar_one())

    async def get_top_content(
        self,
        content_type: ViewContentType,
        today_start: datetime,
        week_start: datetime,
        month_start: datetime,
        limit: int = 5,
    ) -> list[TopContentRow]:
        """조회수 상위 콘텐츠 (기간별 조회수 포함)"""
        model = CONTENT_MODELS[content_type]
        total = func.count(ViewTracking.id)
        result = await self.session.execute(
            select(
                ViewTracking.content_id,
                model.title,
                model.slug,
                total,
                func.count(distinct(ViewTracking.ip_address)),
                func.count(ViewTracking.id).filter(
                    ViewTracking.viewed_at >= today_start
                ),
                func.count(ViewTracking.id).filter(
                    ViewTracking.viewed_at >= week_start
                ),
                func.count(ViewTracking.id).filter(
                    ViewTracking.viewed_at >= month_start
                ),
            )
            .join(model, model.id == ViewTracking.content_id)
            .where(ViewTracking.content_type == content_type.value)
            .group_by(ViewTracking.content_id, model.title, model.slug)
            .order_by(total.desc(), model.title.asc())
            .limit(limit)
        )
        return [
            TopContentRow(
                content_id=row[0],
                title=row[1],
                slug=row[2],
                total_views=int(row[3]),
                unique_views=int(row[4]),
                views_today=int(row[5]),
                views_this_week=int(row[6]),
                views_this_month=int(row[7]),
            )
            for row in result.all()
        ]

    async def get_recent_with_titles(
        self, limit: int = 10
    ) -> list[tuple[ViewTracking, Optional[str]]]:
        """최근 조회 기록과 콘텐츠 제목"""
        title = func.coalesce(BlogPost.title, Service.title)
        result = await self.session.execute(
            select(ViewTracking, title)
            .outerjoin(
                BlogPost,
                and_(
                    ViewTracking.content_type == ViewContentType.BLOG_POST.value,
                    BlogPost.id == ViewTracking.content_id,
                ),
            )
            .outerjoin(
                Service,
                and_(
                    ViewTracking.content_type == ViewContentType.SERVICE.value,
                    Service.id == ViewTracking.content_id,
                ),
            )
            .order_by(ViewTracking.viewed_at.desc())
            .limit(limit)
        )
        return [(row[0], row[1]) for row in result.all()]

    async def get_daily_counts(
        self, since: datetime
    ) -> dict[tuple[date, str], int]:
        """since 이후 (UTC 날짜, 콘텐츠 유형)별 조회 수"""
        day = func.date(func.timezone("UTC", ViewTracking.viewed_at))
        result = await self.session.execute(
            select(day, ViewTracking.content_type, func.count(ViewTracking.id))
            .where(ViewTracking.viewed_at >= since)
            .group_by(day, ViewTracking.content_type)
        )
        return {(row[0], row[1]): int(row[2]) for row in result.all()}
