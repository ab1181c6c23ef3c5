"""Indexing 도메인 스키마 정의"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field

from app.domains.indexing.types import (
    IndexableContentType,
    IndexingReport,
    NotificationType,
)


class IndexingAction(str, Enum):
    """인덱싱 요청 액션"""

    NOTIFY_ALL = "notify_all"
    NOTIFY_BLOG_POST = "notify_blog_post"
    NOTIFY_SERVICE = "notify_service"
    NOTIFY_SITE_SETTINGS = "notify_site_settings"
    NOTIFY_URLS = "notify_urls"
    BULK_NOTIFY = "bulk_notify"


class IndexingRequest(BaseModel):
    """인덱싱 알림 요청

    action에 따라 slug, urls, content_type/content_ids가 필요합니다.
    """

    action: str = Field(..., min_length=1, description="액션")
    slug: Optional[str] = Field(None, description="게시글/서비스 슬러그")
    operation: NotificationType = Field(
        NotificationType.URL_UPDATED, description="알림 유형"
    )
    urls: Optional[list[str]] = Field(None, description="알릴 URL 목록")
    content_type: Optional[IndexableContentType] = None
    content_ids: Optional[list[str]] = Field(
        None, description="콘텐츠 슬러그 목록"
    )


class UrlNotificationResponse(BaseModel):
    """URL 단위 알림 결과"""

    url: str
    success: bool
    notification_type: NotificationType
    error: Optional[str] = None


class IndexingReportResponse(BaseModel):
    """알림 작업 결과"""

    total_urls: int
    success_count: int
    failed_count: int
    results: list[UrlNotificationResponse] = Field(default_factory=list)

    @classmethod
    def from_report(cls, report: IndexingReport) -> "IndexingReportResponse":
        return cls(
            total_urls=report.total_urls,
            success_count=report.success_count,
            failed_count=report.failed_count,
            results=[
                UrlNotificationResponse(
                    url=r.url,
                    success=r.success,
                    notification_type=r.notification_type,
                    error=r.error,
                )
                for r in report.results
            ],
        )


class IndexingStatusResponse(BaseModel):
    """인덱싱 설정 상태"""

    is_configured: bool
    has_client_email: bool
    has_private_key: bool
