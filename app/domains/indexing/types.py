"""Indexing 도메인 타입 정의"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional


class NotificationType(str, Enum):
    """Google Indexing API 알림 유형"""

    URL_UPDATED = "URL_UPDATED"
    URL_DELETED = "URL_DELETED"


class IndexableContentType(str, Enum):
    """알림 대상 콘텐츠 유형"""

    BLOG_POST = "blog_post"
    SERVICE = "service"
    SITE_SETTINGS = "site_settings"


@dataclass
class UrlNotificationResult:
    """URL 단위 알림 결과"""

    url: str
    success: bool
    notification_type: NotificationType = NotificationType.URL_UPDATED
    error: Optional[str] = None


@dataclass
class IndexingReport:
    """알림 작업 결과 집계"""

    results: list[UrlNotificationResult] = field(default_factory=list)

    @property
    def total_urls(self) -> int:
        return len(self.results)

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failed_count(self) -> int:
        return self.total_urls - self.success_count

    def extend(self, other: "IndexingReport") -> None:
        self.results.extend(other.results)
