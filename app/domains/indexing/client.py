"""Google Indexing API 클라이언트

서비스 계정으로 OAuth 토큰을 발급받아 URL 변경/삭제를 알립니다.
"""

import asyncio
from functools import lru_cache
from typing import Optional

import google.auth.transport.requests
import httpx
from google.auth.exceptions import GoogleAuthError
from google.oauth2 import service_account

from app.core.config import Settings, settings
from app.core.logging import get_logger
from app.domains.indexing.exceptions import (
    IndexingAuthException,
    IndexingNotConfiguredException,
)
from app.domains.indexing.types import NotificationType, UrlNotificationResult

logger = get_logger(__name__)

INDEXING_SCOPE = "https://www.googleapis.com/auth/indexing"
PUBLISH_ENDPOINT = "https://indexing.googleapis.com/v3/urlNotifications:publish"
TOKEN_URI = "https://oauth2.googleapis.com/token"


class GoogleIndexingClient:
    """Google Indexing API 클라이언트"""

    def __init__(
        self,
        client_email: Optional[str],
        private_key: Optional[str],
        timeout: float = 30.0,
    ):
        self.client_email = client_email
        self.private_key = private_key
        self.timeout = timeout
        self._credentials: Optional[service_account.Credentials] = None

    @classmethod
    def from_settings(cls, config: Settings) -> "GoogleIndexingClient":
        return cls(config.google_client_email, config.google_private_key)

    @property
    def is_configured(self) -> bool:
        return bool(self.client_email and self.private_key)

    def _build_credentials(self) -> service_account.Credentials:
        return service_account.Credentials.from_service_account_info(
            {
                "type": "service_account",
                "client_email": self.client_email,
                "private_key": self.private_key,
                "token_uri": TOKEN_URI,
            },
            scopes=[INDEXING_SCOPE],
        )

    def _refresh_token(self) -> str:
        if self._credentials is None:
            self._credentials = self._build_credentials()
        if not self._credentials.valid:
            self._credentials.refresh(google.auth.transport.requests.Request())
        return str(self._credentials.token)

    async def get_access_token(self) -> str:
        """OAuth 액세스 토큰 발급 (만료 시 갱신)

        Raises:
            IndexingNotConfiguredException: 서비스 계정 정보가 없는 경우
            IndexingAuthException: 토큰 발급 실패 시
        """
        if not self.is_configured:
            raise IndexingNotConfiguredException()
        try:
            return await asyncio.to_thread(self._refresh_token)
        except (GoogleAuthError, ValueError) as e:
            logger.error(f"Google indexing token refresh failed: {e}")
            raise IndexingAuthException(str(e))

    async def publish(
        self,
        urls: list[str],
        notification_type: NotificationType = NotificationType.URL_UPDATED,
    ) -> list[UrlNotificationResult]:
        """URL 목록 알림 (URL마다 개별 결과 반환)

        Args:
            urls: 알릴 URL 목록
            notification_type: URL_UPDATED 또는 URL_DELETED

        Returns:
            URL별 알림 결과
        """
        if not urls:
            return []

        token = await self.get_access_token()
        headers = {"Authorization": f"Bearer {token}"}
        results: list[UrlNotificationResult] = []

        async with httpx.AsyncClient(timeout=self.timeout) as client:
            for url in urls:
                try:
                    response = await client.post(
                        PUBLISH_ENDPOINT,
                        headers=headers,
                        json={"url": url, "type": notification_type.value},
                    )
                    response.raise_for_status()
                    results.append(
                        UrlNotificationResult(
                            url=url,
                            success=True,
                            notification_type=notification_type,
                        )
                    )
                except httpx.HTTPStatusError as e:
                    logger.warning(
                        f"Indexing notification rejected for {url}: "
                        f"HTTP {e.response.status_code}"
                    )
                    results.append(
                        UrlNotificationResult(
                            url=url,
                            success=False,
                            notification_type=notification_type,
                            error=f"HTTP {e.response.status_code}: {e.response.text[:200]}",
                        )
                    )
                except httpx.HTTPError as e:
                    logger.warning(f"Indexing notification failed for {url}: {e}")
                    results.append(
                        UrlNotificationResult(
                            url=url,
                            success=False,
                            notification_type=notification_type,
                            error=str(e) or e.__class__.__name__,
                        )
                    )

        return results


@lru_cache
def _create_indexing_client() -> GoogleIndexingClient:
    """인덱싱 클라이언트 싱글톤 생성 (캐시됨, 액세스 토큰 재사용)"""
    return GoogleIndexingClient.from_settings(settings)


def get_indexing_client() -> GoogleIndexingClient:
    """FastAPI DI용 인덱싱 클라이언트 의존성"""
    return _create_indexing_client()
