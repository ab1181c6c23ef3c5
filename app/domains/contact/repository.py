"""Contact 도메인 리포지토리"""

import uuid
from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Optional, Sequence, cast

from sqlalchemy import case, delete, func, or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.utils.datetime import UTC
from app.core.utils.pagination import SortOrder, build_order_by
from app.domains.contact.models import ContactSubmission, SubmissionStatus

SORTABLE_COLUMNS = {
    "name": ContactSubmission.name,
    "email": ContactSubmission.email,
    "status": ContactSubmission.status,
    "company": ContactSubmission.company,
    "created_at": ContactSubmission.created_at,
}


@dataclass
class SubmissionFilters:
    """문의 목록 조회 필터

    date_to는 해당 날짜 전체를 포함합니다.
    """

    status: Optional[SubmissionStatus] = None
    search: Optional[str] = None
    project_type: Optional[str] = None
    budget: Optional[str] = None
    date_from: Optional[date] = None
    date_to: Optional[date] = None


class ContactSubmissionRepository:
    """문의 리포지토리"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(
        self, submission_id: uuid.UUID
    ) -> Optional[ContactSubmission]:
        """ID로 문의 조회"""
        result = await self.session.execute(
            select(ContactSubmission).where(ContactSubmission.id == submission_id)
        )
        return cast(Optional[ContactSubmission], result.scalar_one_or_none())

    def _apply_filters(self, query, filters: Optional[SubmissionFilters]):
        if not filters:
            return query

        if filters.status:
            query = query.where(ContactSubmission.status == filters.status.value)

        if filters.project_type:
            query = query.where(
                ContactSubmission.project_type == filters.project_type
            )

        if filters.budget:
            query = query.where(ContactSubmission.budget == filters.budget)

        if filters.date_from:
            query = query.where(
                ContactSubmission.created_at
                >= datetime.combine(filters.date_from, time.min, tzinfo=UTC)
            )

        if filters.date_to:
            next_day = filters.date_to + timedelta(days=1)
            query = query.where(
                ContactSubmission.created_at
                < datetime.combine(next_day, time.min, tzinfo=UTC)
            )

        if filters.search:
            pattern = f"%{filters.search}%"
            query = query.where(
                or_(
                    ContactSubmission.name.ilike(pattern),
                    ContactSubmission.email.ilike(pattern),
                    ContactSubmission.company.ilike(pattern),
                    ContactSubmission.subject.ilike(pattern),
                    ContactSubmission.message.ilike(pattern),
                )
            )

        return query

    async def get_list(
        self,
        offset: int = 0,
        limit: int = 10,
        filters: Optional[SubmissionFilters] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> Sequence[ContactSubmission]:
        """문의 목록 조회"""
        query = self._apply_filters(select(ContactSubmission), filters)
        query = (
            query.order_by(
                build_order_by(sort_by, sort_order, SORTABLE_COLUMNS),
                ContactSubmission.id,
            )
            .offset(offset)
            .limit(limit)
        )
        result = await self.session.execute(query)
        return cast(Sequence[ContactSubmission], result.scalars().all())

    async def count(self, filters: Optional[SubmissionFilters] = None) -> int:
        """문의 수 조회 (get_list와 동일한 필터)"""
        query = self._apply_filters(
            select(func.count(ContactSubmission.id)), filters
        )
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def count_by_status(self) -> dict[str, int]:
        """전체 문의의 상태별 건수"""
        result = await self.session.execute(
            select(ContactSubmission.status, func.count(ContactSubmission.id))
            .group_by(ContactSubmission.status)
        )
        return {status: int(count) for status, count in result.all()}

    async def count_since(self, since: datetime) -> int:
        """since 이후 접수된 문의 수"""
        result = await self.session.execute(
            select(func.count(ContactSubmission.id)).where(
                ContactSubmission.created_at >= since
            )
        )
        return int(result.scalar_one())

    async def top_values(
        self, column_name: str, limit: int = 5
    ) -> list[tuple[str, int]]:
        """컬럼 값별 건수 상위 목록 (NULL 제외)

        Args:
            column_name: project_type 또는 budget
            limit: 최대 개수
        """
        column = getattr(ContactSubmission, column_name)
        count = func.count(ContactSubmission.id)
        result = await self.session.execute(
            select(column, count)
            .where(column.is_not(None))
            .group_by(column)
            .order_by(count.desc(), column.asc())
            .limit(limit)
        )
        return [(str(value), int(n)) for value, n in result.all()]

    async def get_recent(self, limit: int = 10) -> Sequence[ContactSubmission]:
        """최근 접수 문의"""
        result = await self.session.execute(
            select(ContactSubmission)
            .order_by(ContactSubmission.created_at.desc())
            .limit(limit)
        )
        return cast(Sequence[ContactSubmission], result.scalars().all())

    async def average_response_hours(self) -> float:
        """new가 아닌 문의의 평균 경과 시간 (시간 단위)"""
        age_seconds = func.extract(
            "epoch", func.now() - ContactSubmission.created_at
        )
        result = await self.session.execute(
            select(
                func.avg(
                    case(
                        (
                            ContactSubmission.status != SubmissionStatus.NEW.value,
                            age_seconds,
                        ),
                        else_=None,
                    )
                )
            )
        )
        avg_seconds = result.scalar_one_or_none()
        return float(avg_seconds or 0) / 3600

    async def get_created_between(
        self, start: datetime, end: datetime
    ) -> list[tuple[datetime, str]]:
        """기간 내 문의의 (접수 일시, 상태) 목록"""
        result = await self.session.execute(
            select(ContactSubmission.created_at, ContactSubmission.status).where(
                ContactSubmission.created_at >= start,
                ContactSubmission.created_at <= end,
            )
        )
        return [(row[0], row[1]) for row in result.all()]

    async def create(self, submission: ContactSubmission) -> ContactSubmission:
        """문의 생성"""
        self.session.add(submission)
        await self.session.flush()
        await self.session.refresh(submission)
        return submission

    async def update(self, submission: ContactSubmission) -> ContactSubmission:
        """문의 수정"""
        await self.session.flush()
        await self.session.refresh(submission)
        return submission

    async def delete(self, submission: ContactSubmission) -> None:
        """문의 삭제"""
        await self.session.delete(submission)
        await self.session.flush()

    async def update_status_batch(
        self, submission_ids: list[uuid.UUID], status: SubmissionStatus
    ) -> int:
        """문의 상태 벌크 변경

        Returns:
            변경된 레코드 수
        """
        result = await self.session.execute(
            update(ContactSubmission)
            .where(ContactSubmission.id.in_(submission_ids))
            .values(status=status.value)
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return int(result.rowcount)

    async def delete_batch(self, submission_ids: list[uuid.UUID]) -> int:
        """문의 벌크 삭제

        Returns:
            삭제된 레코드 수
        """
        result = await self.session.execute(
            delete(ContactSubmission)
            .where(ContactSubmission.id.in_(submission_ids))
            .execution_options(synchronize_session=False)
        )
        await self.session.flush()
        return int(result.rowcount)
