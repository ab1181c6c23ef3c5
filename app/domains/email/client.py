"""Resend HTTP API 클라이언트"""

from typing import Optional

import httpx

from app.core.config import Settings
from app.core.logging import get_logger
from app.domains.email.exceptions import EmailDeliveryError
from app.domains.email.types import OutgoingEmail

logger = get_logger(__name__)


class ResendClient:
    """Resend 메일 발송 클라이언트

    ``POST {api_url}/emails`` 를 Bearer 키로 호출합니다.
    """

    def __init__(
        self,
        api_key: Optional[str],
        api_url: str = "https://api.resend.com",
        timeout: float = 30.0,
    ):
        self.api_key = api_key
        self.api_url = api_url.rstrip("/")
        self.timeout = timeout

    @classmethod
    def from_settings(cls, config: Settings) -> "ResendClient":
        return cls(config.resend_api_key, config.resend_api_url)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def send(self, email: OutgoingEmail) -> str:
        """메일 1건 발송

        Returns:
            발송 API가 부여한 메시지 ID

        Raises:
            EmailDeliveryError: 키 미설정, HTTP 오류, 응답 형식 오류
        """
        if not self.is_configured:
            raise EmailDeliveryError("RESEND_API_KEY is not configured")

        try:
            async with httpx.AsyncClient(timeout=self.timeout) as client:
                response = await client.post(
                    f"{self.api_url}/emails",
                    headers={"Authorization": f"Bearer {self.api_key}"},
                    json=email.to_payload(),
                )
                response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EmailDeliveryError(
                f"HTTP {e.response.status_code}: {e.response.text[:200]}",
                status_code=e.response.status_code,
            )
        except httpx.HTTPError as e:
            raise EmailDeliveryError(str(e) or e.__class__.__name__)

        try:
            body = response.json()
        except ValueError:
            raise EmailDeliveryError(
                f"Invalid JSON response: {response.text[:200]}",
                status_code=response.status_code,
            )

        message_id = body.get("id") if isinstance(body, dict) else None
        if not message_id:
            raise EmailDeliveryError("No message id in response")
        return str(message_id)
