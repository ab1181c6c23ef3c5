"""Email 도메인 서비스

템플릿 렌더링, 수신자별 rate limit, 재시도 발송을 담당합니다.
"""

import asyncio
from functools import lru_cache
from typing import Any, Awaitable, Callable, Optional

from app.core.config import Settings, settings
from app.core.context import get_request_id
from app.core.logging import get_logger
from app.core.utils.rate_limit import InMemoryRateLimiter
from app.domains.email.client import ResendClient
from app.domains.email.exceptions import (
    EmailDeliveryError,
    InvalidTemplatePropsException,
)
from app.domains.email.templates import (
    TEMPLATE_SPECS,
    EmailTemplate,
    TemplateRenderer,
)
from app.domains.email.types import (
    BLOCKED_DOMAIN,
    RATE_LIMITED,
    EmailRequest,
    EmailResult,
    OutgoingEmail,
)

logger = get_logger(__name__)

BULK_BATCH_SIZE = 10
BULK_BATCH_DELAY_SECONDS = 1.0


class EmailService:
    """템플릿 메일 발송 서비스

    rate limiter는 인스턴스가 소유하며 수신자 주소를 키로 사용합니다.
    """

    def __init__(
        self,
        client: ResendClient,
        rate_limiter: InMemoryRateLimiter,
        max_retries: int = 3,
        retry_delay_ms: int = 1000,
        from_name: str = "Agency",
        from_address: str = "noreply@example.com",
        reply_to: Optional[str] = None,
        admin_recipients: Optional[list[str]] = None,
        blocked_domains: Optional[list[str]] = None,
        renderer: Optional[TemplateRenderer] = None,
        sleep: Callable[[float], Awaitable[Any]] = asyncio.sleep,
    ):
        self.client = client
        self.rate_limiter = rate_limiter
        self.max_retries = max_retries
        self.retry_delay_ms = retry_delay_ms
        self.from_name = from_name
        self.from_address = from_address
        self.reply_to = reply_to
        self.admin_recipients = admin_recipients or []
        self.blocked_domains = {d.lower() for d in blocked_domains or []}
        self.renderer = renderer or TemplateRenderer(
            company_name=from_name, support_email=reply_to
        )
        self._sleep = sleep

    @classmethod
    def from_settings(cls, config: Settings) -> "EmailService":
        return cls(
            client=ResendClient.from_settings(config),
            rate_limiter=InMemoryRateLimiter(
                max_requests=config.email_rate_limit_count,
                window_seconds=config.email_rate_limit_window_seconds,
            ),
            max_retries=config.email_max_retries,
            retry_delay_ms=config.email_retry_delay_ms,
            from_name=config.email_from_name,
            from_address=config.email_from_address,
            reply_to=config.email_reply_to,
            admin_recipients=config.email_admin_recipients,
            blocked_domains=config.email_blocked_domains,
        )

    @property
    def is_configured(self) -> bool:
        return self.client.is_configured

    @property
    def sender(self) -> str:
        return f"{self.from_name} <{self.from_address}>"

    def is_recipient_allowed(self, recipient: str) -> bool:
        """차단 도메인 여부 확인"""
        domain = recipient.rsplit("@", 1)[-1].lower()
        return domain not in self.blocked_domains

    async def send_templated_email(
        self,
        template: EmailTemplate,
        to: str,
        props: dict[str, Any],
        subject: Optional[str] = None,
    ) -> EmailResult:
        """템플릿 메일 1건 발송

        실패는 예외 대신 EmailResult(success=False)로 반환합니다.

        Args:
            template: 사용할 템플릿
            to: 수신자 주소
            props: 템플릿 값
            subject: 제목 (없으면 템플릿 기본 제목)

        Returns:
            EmailResult
        """
        try:
            html = self.renderer.render(template, props)
        except InvalidTemplatePropsException as e:
            return EmailResult(
                success=False,
                recipient=to,
                error=f"Template validation failed: {', '.join(e.missing)}",
            )

        if not self.rate_limiter.check(to.lower()):
            logger.warning(
                "Email rate limit exceeded",
                extra={"request_id": get_request_id(), "recipient": to},
            )
            return EmailResult(success=False, recipient=to, error=RATE_LIMITED)

        if not self.is_recipient_allowed(to):
            return EmailResult(success=False, recipient=to, error=BLOCKED_DOMAIN)

        email = OutgoingEmail(
            sender=self.sender,
            to=to,
            subject=subject or TEMPLATE_SPECS[template].default_subject,
            html=html,
            reply_to=self.reply_to,
            tags=[{"name": "template", "value": template.value.replace("-", "_")}],
        )

        try:
            message_id = await self.send_with_retries(email)
        except EmailDeliveryError as e:
            logger.error(
                "Email delivery failed",
                extra={
                    "request_id": get_request_id(),
                    "recipient": to,
                    "template": template.value,
                    "error": e.reason,
                },
            )
            return EmailResult(success=False, recipient=to, error=e.reason)

        logger.info(
            "Email sent",
            extra={
                "request_id": get_request_id(),
                "recipient": to,
                "template": template.value,
                "message_id": message_id,
            },
        )
        return EmailResult(success=True, recipient=to, message_id=message_id)

    async def send_with_retries(self, email: OutgoingEmail) -> str:
        """지수 백오프 재시도 발송

        최초 시도 후 최대 max_retries번 재시도하며,
        n번째 실패 후 retry_delay * 2**n 밀리초 대기합니다.

        Raises:
            EmailDeliveryError: 모든 시도가 실패한 경우 (마지막 오류)
        """
        for attempt in range(self.max_retries + 1):
            try:
                return await self.client.send(email)
            except EmailDeliveryError:
                if attempt >= self.max_retries:
                    raise
                delay = self.retry_delay_ms * (2**attempt) / 1000
                logger.warning(
                    f"Email send attempt {attempt + 1} failed, retrying in {delay:.1f}s",
                    extra={"request_id": get_request_id(), "recipient": email.to},
                )
                await self._sleep(delay)

        raise EmailDeliveryError("max_retries must be >= 0")

    async def send_contact_notification(
        self, props: dict[str, Any], recipients: Optional[list[str]] = None
    ) -> list[EmailResult]:
        """문의 접수 알림 (관리자 수신자 전체)"""
        targets = recipients if recipients is not None else self.admin_recipients
        subject_line = props.get("subject")
        subject = (
            f"New contact form submission: {subject_line}" if subject_line else None
        )
        results = []
        for recipient in targets:
            results.append(
                await self.send_templated_email(
                    EmailTemplate.CONTACT_FORM_NOTIFICATION,
                    recipient,
                    props,
                    subject=subject,
                )
            )
        return results

    async def send_contact_confirmation(
        self, to: str, props: dict[str, Any]
    ) -> EmailResult:
        """문의자에게 접수 확인 메일"""
        return await self.send_templated_email(
            EmailTemplate.CONTACT_FORM_CONFIRMATION, to, props
        )

    async def send_user_invitation(
        self, to: str, props: dict[str, Any]
    ) -> EmailResult:
        """사용자 초대 메일"""
        inviter = props.get("inviter_name")
        subject = f"{inviter} invited you to join" if inviter else None
        return await self.send_templated_email(
            EmailTemplate.USER_INVITATION, to, props, subject=subject
        )

    async def send_bulk(self, requests: list[EmailRequest]) -> list[EmailResult]:
        """대량 발송 (10건 단위 배치, 배치 사이 1초 대기)"""
        results: list[EmailResult] = []
        for start in range(0, len(requests), BULK_BATCH_SIZE):
            batch = requests[start : start + BULK_BATCH_SIZE]
            outcomes = await asyncio.gather(
                *(
                    self.send_templated_email(r.template, r.to, r.props, r.subject)
                    for r in batch
                ),
                return_exceptions=True,
            )
            for request, outcome in zip(batch, outcomes):
                if isinstance(outcome, BaseException):
                    results.append(
                        EmailResult(
                            success=False,
                            recipient=request.to,
                            error=str(outcome) or outcome.__class__.__name__,
                        )
                    )
                else:
                    results.append(outcome)

            if start + BULK_BATCH_SIZE < len(requests):
                await self._sleep(BULK_BATCH_DELAY_SECONDS)

        return results


@lru_cache
def _create_email_service() -> EmailService:
    """EmailService 싱글톤 생성 (rate limiter 유지를 위해 캐시됨)"""
    return EmailService.from_settings(settings)


def get_email_service() -> EmailService:
    """FastAPI DI용 EmailService 의존성"""
    return _create_email_service()
