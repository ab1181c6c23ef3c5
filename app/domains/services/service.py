"""Services 도메인 서비스

서비스 본문과 하위 항목을 하나의 트랜잭션으로 저장합니다.
"""

import uuid
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.context import get_request_id
from app.core.exceptions import EmptyIdListException, InvalidBulkActionException
from app.core.logging import get_logger
from app.core.utils.pagination import SortOrder
from app.domains.indexing.service import IndexingService
from app.domains.indexing.types import NotificationType
from app.domains.services.exceptions import (
    ServiceNotFoundException,
    ServiceSlugExistsException,
)
from app.domains.services.models import (
    Service,
    ServiceBenefit,
    ServiceCategory,
    ServiceDeliverable,
    ServiceFAQ,
    ServiceFeature,
    ServiceGalleryImage,
    ServicePricingFeature,
    ServicePricingTier,
    ServiceProcessStep,
    ServiceRelated,
    ServiceStatus,
    ServiceTechnology,
    ServiceTestimonial,
)
from app.domains.services.repository import ServiceFilters, ServiceRepository
from app.domains.services.schemas import (
    ServiceContentInput,
    ServiceCreateRequest,
    ServiceUpdateRequest,
)

logger = get_logger(__name__)

BULK_ACTIONS = {
    "publish": ServiceStatus.PUBLISHED,
    "unpublish": ServiceStatus.DRAFT,
    "archive": ServiceStatus.ARCHIVED,
}

_BASE_FIELDS = (
    "title",
    "slug",
    "short_description",
    "full_description",
    "timeline",
    "category",
    "featured_image",
)


def apply_service_content(
    service: Service,
    content: ServiceContentInput,
    related_ids: list[uuid.UUID],
) -> None:
    """하위 항목을 입력 내용으로 전체 교체

    목록형 항목의 순서는 1부터 시작하며, 진행 단계는 입력된 step을 사용합니다.
    """
    service.features = [
        ServiceFeature(feature=value, order=index)
        for index, value in enumerate(content.features, start=1)
    ]
    service.benefits = [
        ServiceBenefit(benefit=value, order=index)
        for index, value in enumerate(content.benefits, start=1)
    ]
    service.technologies = [
        ServiceTechnology(technology=value, order=index)
        for index, value in enumerate(content.technologies, start=1)
    ]
    service.deliverables = [
        ServiceDeliverable(deliverable=value, order=index)
        for index, value in enumerate(content.deliverables, start=1)
    ]
    service.process_steps = [
        ServiceProcessStep(
            step=step.step,
            title=step.title,
            description=step.description,
            duration=step.duration,
        )
        for step in content.process_steps
    ]
    service.faqs = [
        ServiceFAQ(question=faq.question, answer=faq.answer, order=index)
        for index, faq in enumerate(content.faqs, start=1)
    ]
    service.gallery_images = [
        ServiceGalleryImage(image_url=url, order=index)
        for index, url in enumerate(content.gallery, start=1)
    ]
    service.testimonials = (
        [
            ServiceTestimonial(
                quote=content.testimonial.quote,
                author=content.testimonial.author,
                company=content.testimonial.company,
                avatar=content.testimonial.avatar,
            )
        ]
        if content.testimonial
        else []
    )
    service.pricing_tiers = [
        ServicePricingTier(
            name=tier.name,
            price=tier.price,
            description=tier.description,
            popular=tier.popular,
            order=index,
            features=[
                ServicePricingFeature(feature=feature, order=feature_index)
                for feature_index, feature in enumerate(tier.features, start=1)
            ],
        )
        for index, tier in enumerate(content.pricing_tiers, start=1)
    ]
    service.related_links = [
        ServiceRelated(related_service_id=related_id) for related_id in related_ids
    ]


class CatalogService:
    """서비스(상품 소개) 관리 서비스"""

    def __init__(
        self,
        session: AsyncSession,
        indexing_service: Optional[IndexingService] = None,
    ):
        self.session = session
        self.repository = ServiceRepository(session)
        self.indexing_service = indexing_service or IndexingService(session)

    async def _resolve_related_ids(
        self,
        related_ids: list[uuid.UUID],
        exclude_id: Optional[uuid.UUID] = None,
    ) -> list[uuid.UUID]:
        """존재하는 연관 서비스 ID만 입력 순서대로 (자기 자신, 중복 제외)"""
        existing = await self.repository.existing_ids(related_ids)
        resolved: list[uuid.UUID] = []
        for related_id in related_ids:
            if related_id in existing and related_id != exclude_id:
                if related_id not in resolved:
                    resolved.append(related_id)
        return resolved

    async def list_services(
        self,
        offset: int,
        limit: int,
        filters: Optional[ServiceFilters] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[Sequence[Service], int]:
        """서비스 목록 조회

        Returns:
            (서비스 목록, 전체 수)
        """
        services = await self.repository.get_list(
            offset=offset,
            limit=limit,
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        total = await self.repository.count(filters)
        return services, total

    async def get_service(self, service_id: uuid.UUID) -> Service:
        """서비스 조회

        Raises:
            ServiceNotFoundException: 서비스가 없는 경우
        """
        service = await self.repository.get_by_id(service_id)
        if service is None:
            raise ServiceNotFoundException(service_id=service_id)
        return service

    async def create_service(
        self,
        data: ServiceCreateRequest,
        status: Optional[ServiceStatus] = None,
    ) -> Service:
        """서비스와 하위 항목 생성

        Args:
            data: 생성 요청
            status: 지정 시 요청의 상태 대신 사용

        Raises:
            ServiceSlugExistsException: 슬러그 중복 시 (409)
        """
        if await self.repository.slug_exists(data.slug):
            raise ServiceSlugExistsException(data.slug)

        service = Service(
            title=data.title,
            slug=data.slug,
            short_description=data.short_description,
            full_description=data.full_description,
            timeline=data.timeline,
            category=data.category.value,
            status=(status or data.status).value,
            featured_image=data.featured_image,
        )
        service.id = uuid.uuid4()
        related_ids = await self._resolve_related_ids(
            data.related_services, exclude_id=service.id
        )
        apply_service_content(service, data, related_ids)

        service = await self.repository.create(service)

        logger.info(
            "Service created",
            extra={
                "request_id": get_request_id(),
                "service_id": str(service.id),
                "status": service.status,
            },
        )

        if service.status == ServiceStatus.PUBLISHED.value:
            await self.indexing_service.safe_notify_service(service.slug)
        return service

    async def update_service(
        self, service_id: uuid.UUID, data: ServiceUpdateRequest
    ) -> Service:
        """서비스 수정 (기본 필드 변경, 하위 항목 전체 교체)

        Raises:
            ServiceNotFoundException: 서비스가 없는 경우
            ServiceSlugExistsException: 슬러그 중복 시 (409)
        """
        service = await self.get_service(service_id)

        if data.slug and await self.repository.slug_exists(
            data.slug, exclude_id=service.id
        ):
            raise ServiceSlugExistsException(data.slug)

        for field in _BASE_FIELDS:
            value = getattr(data, field)
            if value is None:
                continue
            if isinstance(value, ServiceCategory):
                value = value.value
            setattr(service, field, value)
        if data.status is not None:
            service.status = data.status.value

        related_ids = await self._resolve_related_ids(
            data.related_services, exclude_id=service.id
        )
        apply_service_content(service, data, related_ids)

        service = await self.repository.update(service)

        logger.info(
            "Service updated",
            extra={"request_id": get_request_id(), "service_id": str(service.id)},
        )

        if service.status == ServiceStatus.PUBLISHED.value:
            await self.indexing_service.safe_notify_service(service.slug)
        return service

    async def delete_service(self, service_id: uuid.UUID) -> int:
        """서비스 삭제 (하위 항목 포함)"""
        service = await self.get_service(service_id)
        was_published = service.status == ServiceStatus.PUBLISHED.value
        slug = service.slug

        deleted = await self.repository.delete_batch([service.id])

        if was_published:
            await self.indexing_service.safe_notify_service(
                slug, NotificationType.URL_DELETED
            )
        return deleted

    async def bulk_action(self, service_ids: list[uuid.UUID], action: str) -> int:
        """서비스 벌크 상태 변경 (publish, unpublish, archive)

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
            InvalidBulkActionException: 지원하지 않는 액션
        """
        if not service_ids:
            raise EmptyIdListException()
        status = BULK_ACTIONS.get(action)
        if status is None:
            raise InvalidBulkActionException(action, list(BULK_ACTIONS))

        affected = await self.repository.update_status_batch(service_ids, status)
        logger.info(
            "Services bulk updated",
            extra={
                "request_id": get_request_id(),
                "action": action,
                "affected": affected,
            },
        )
        return affected

    async def bulk_delete(self, service_ids: list[uuid.UUID]) -> int:
        """서비스 벌크 삭제

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
        """
        if not service_ids:
            raise EmptyIdListException()

        deleted = await self.repository.delete_batch(service_ids)
        logger.info(
            "Services deleted",
            extra={"request_id": get_request_id(), "deleted": deleted},
        )
        return deleted

    async def list_published(
        self, category: Optional[ServiceCategory] = None
    ) -> Sequence[Service]:
        """발행된 서비스 목록 (최신순)"""
        filters = ServiceFilters(category=category, status=ServiceStatus.PUBLISHED)
        return await self.repository.get_list(
            offset=0,
            limit=1000,
            filters=filters,
            sort_by="created_at",
            sort_order=SortOrder.DESC,
        )

    async def get_published_service(self, slug: str) -> Service:
        """발행된 서비스 조회

        Raises:
            ServiceNotFoundException: 없거나 발행되지 않은 경우
        """
        service = await self.repository.get_by_slug(slug, published_only=True)
        if service is None:
            raise ServiceNotFoundException(slug=slug)
        return service
