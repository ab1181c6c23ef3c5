"""Indexing 도메인 서비스

사이트 URL 구성과 Google Indexing API 알림을 담당합니다.
"""

from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.context import get_request_id
from app.core.logging import get_logger
from app.domains.blog.models import PostStatus
from app.domains.blog.repository import BlogPostRepository
from app.domains.indexing.client import GoogleIndexingClient, get_indexing_client
from app.domains.indexing.types import (
    IndexableContentType,
    IndexingReport,
    NotificationType,
    UrlNotificationResult,
)
from app.domains.services.models import Service, ServiceStatus

logger = get_logger(__name__)

STATIC_PATHS = ("", "/about", "/services", "/blog", "/gallery", "/contact")


class IndexingService:
    """검색 엔진 URL 알림 서비스"""

    def __init__(
        self,
        session: AsyncSession,
        client: Optional[GoogleIndexingClient] = None,
        site_url: Optional[str] = None,
    ):
        self.session = session
        self.client = client or get_indexing_client()
        self.site_url = (site_url or settings.site_url).rstrip("/")
        self.post_repository = BlogPostRepository(session)

    @property
    def is_configured(self) -> bool:
        return self.client.is_configured

    def build_url(self, path: str) -> str:
        return f"{self.site_url}{path}"

    async def notify_urls(
        self,
        urls: list[str],
        notification_type: NotificationType = NotificationType.URL_UPDATED,
    ) -> IndexingReport:
        """URL 목록 알림

        Raises:
            IndexingNotConfiguredException: 설정되지 않은 경우
        """
        report = IndexingReport(
            results=await self.client.publish(urls, notification_type)
        )
        logger.info(
            "Indexing notification sent",
            extra={
                "request_id": get_request_id(),
                "total_urls": report.total_urls,
                "success_count": report.success_count,
                "failed_count": report.failed_count,
            },
        )
        return report

    async def blog_post_urls(
        self,
        slug: str,
        notification_type: NotificationType = NotificationType.URL_UPDATED,
    ) -> list[str]:
        """게시글 관련 URL 목록

        게시글 URL과 블로그 목록을 기본으로 하고, 발행된 게시글의 갱신
        알림이면 카테고리와 태그 페이지도 포함합니다.
        """
        urls = [self.build_url(f"/blog/{slug}"), self.build_url("/blog")]
        if notification_type != NotificationType.URL_UPDATED:
            return urls

        post = await self.post_repository.get_by_slug(slug)
        if post is None or post.status != PostStatus.PUBLISHED.value:
            return urls

        if post.category:
            urls.append(self.build_url(f"/blog/category/{post.category.slug}"))
        for tag in post.tags:
            urls.append(self.build_url(f"/blog/tag/{tag.slug}"))
        return urls

    def service_urls(self, slug: str) -> list[str]:
        """서비스 관련 URL 목록"""
        return [self.build_url(f"/services/{slug}"), self.build_url("/services")]

    def static_urls(self) -> list[str]:
        """정적 페이지 URL 목록"""
        return [self.build_url(path) for path in STATIC_PATHS]

    async def notify_blog_post(
        self,
        slug: str,
        notification_type: NotificationType = NotificationType.URL_UPDATED,
    ) -> IndexingReport:
        """게시글 변경 알림"""
        urls = await self.blog_post_urls(slug, notification_type)
        return await self.notify_urls(urls, notification_type)

    async def notify_service(
        self,
        slug: str,
        notification_type: NotificationType = NotificationType.URL_UPDATED,
    ) -> IndexingReport:
        """서비스 변경 알림"""
        return await self.notify_urls(self.service_urls(slug), notification_type)

    async def notify_site_settings(self) -> IndexingReport:
        """정적 페이지 갱신 알림"""
        return await self.notify_urls(self.static_urls())

    async def notify_all(self) -> IndexingReport:
        """모든 공개 URL 알림 (정적 페이지, 발행 게시글, 발행 서비스)"""
        urls = self.static_urls()

        for slug in await self.post_repository.get_published_slugs():
            urls.append(self.build_url(f"/blog/{slug}"))

        result = await self.session.execute(
            select(Service.slug)
            .where(Service.status == ServiceStatus.PUBLISHED.value)
            .order_by(Service.created_at.desc())
        )
        for slug in result.scalars().all():
            urls.append(self.build_url(f"/services/{slug}"))

        return await self.notify_urls(urls)

    async def notify_bulk(
        self,
        content_type: IndexableContentType,
        content_ids: list[str],
        notification_type: NotificationType = NotificationType.URL_UPDATED,
    ) -> IndexingReport:
        """여러 콘텐츠 알림

        Args:
            content_type: 콘텐츠 유형
            content_ids: 콘텐츠 슬러그 목록
            notification_type: 알림 유형

        Returns:
            전체 결과 집계 (콘텐츠 단위 실패는 해당 슬러그로 기록)
        """
        if content_type == IndexableContentType.SITE_SETTINGS:
            return await self.notify_site_settings()

        report = IndexingReport()
        for content_id in content_ids:
            try:
                if content_type == IndexableContentType.BLOG_POST:
                    partial = await self.notify_blog_post(
                        content_id, notification_type
                    )
                else:
                    partial = await self.notify_service(
                        content_id, notification_type
                    )
                report.extend(partial)
            except Exception as e:
                logger.warning(
                    f"Bulk indexing failed for {content_type.value}:{content_id}: {e}"
                )
                report.results.append(
                    UrlNotificationResult(
                        url=content_id,
                        success=False,
                        notification_type=notification_type,
                        error=str(e),
                    )
                )
        return report

    async def safe_notify_blog_post(
        self,
        slug: str,
        notification_type: NotificationType = NotificationType.URL_UPDATED,
    ) -> None:
        """게시글 알림 (실패해도 예외를 전파하지 않음)"""
        if not self.is_configured:
            logger.debug("Google indexing not configured, skipping notification")
            return
        try:
            await self.notify_blog_post(slug, notification_type)
        except Exception as e:
            logger.warning(
                f"Indexing notification failed for blog post {slug}: {e}",
                extra={"request_id": get_request_id()},
            )

    async def safe_notify_service(
        self,
        slug: str,
        notification_type: NotificationType = NotificationType.URL_UPDATED,
    ) -> None:
        """서비스 알림 (실패해도 예외를 전파하지 않음)"""
        if not self.is_configured:
            logger.debug("Google indexing not configured, skipping notification")
            return
        try:
            await self.notify_service(slug, notification_type)
        except Exception as e:
            logger.warning(
                f"Indexing notification failed for service {slug}: {e}",
                extra={"request_id": get_request_id()},
            )
