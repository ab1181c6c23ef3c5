"""Email 도메인 타입 정의"""

from dataclasses import dataclass, field
from typing import Any, Optional

from app.domains.email.templates import EmailTemplate

RATE_LIMITED = "rate_limited"
BLOCKED_DOMAIN = "blocked_domain"


@dataclass
class EmailResult:
    """수신자 단위 발송 결과"""

    success: bool
    recipient: str
    message_id: Optional[str] = None
    error: Optional[str] = None


@dataclass
class EmailRequest:
    """템플릿 메일 발송 요청 (bulk 발송 단위)"""

    template: EmailTemplate
    to: str
    props: dict[str, Any] = field(default_factory=dict)
    subject: Optional[str] = None


@dataclass
class OutgoingEmail:
    """발송 API로 전달되는 렌더링 완료 메일"""

    sender: str
    to: str
    subject: str
    html: str
    reply_to: Optional[str] = None
    tags: list[dict[str, str]] = field(default_factory=list)

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "from": self.sender,
            "to": [self.to],
            "subject": self.subject,
            "html": self.html,
        }
        if self.reply_to:
            payload["reply_to"] = self.reply_to
        if self.tags:
            payload["tags"] = self.tags
        return payload
