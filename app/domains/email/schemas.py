"""Email 도메인 스키마 정의"""

from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, EmailStr, Field, model_validator

from app.domains.email.types import EmailResult


class EmailSendType(str, Enum):
    """발송 요청 유형"""

    CONTACT_FORM = "contact-form"
    USER_INVITATION = "user-invitation"
    SIMPLE = "simple"


class EmailSendRequest(BaseModel):
    """이메일 발송 요청

    - contact-form: data는 contact-form-notification 템플릿 값
    - user-invitation: data는 user-invitation 템플릿 값
    - simple: data는 {subject, content}
    """

    type: EmailSendType
    data: dict[str, Any]
    recipients: list[EmailStr] = Field(..., min_length=1, max_length=50)

    @model_validator(mode="after")
    def check_simple_data(self) -> "EmailSendRequest":
        if self.type == EmailSendType.SIMPLE:
            missing = [k for k in ("subject", "content") if not self.data.get(k)]
            if missing:
                raise ValueError(f"simple email requires: {', '.join(missing)}")
        return self


class EmailResultResponse(BaseModel):
    """수신자별 발송 결과"""

    success: bool
    recipient: str
    message_id: Optional[str] = None
    error: Optional[str] = None

    @classmethod
    def from_result(cls, result: EmailResult) -> "EmailResultResponse":
        return cls(
            success=result.success,
            recipient=result.recipient,
            message_id=result.message_id,
            error=result.error,
        )


class EmailSendResponse(BaseModel):
    """발송 결과 집계"""

    results: list[EmailResultResponse]
    success_count: int
    failed_count: int

    @classmethod
    def from_results(cls, results: list[EmailResult]) -> "EmailSendResponse":
        success_count = sum(1 for r in results if r.success)
        return cls(
            results=[EmailResultResponse.from_result(r) for r in results],
            success_count=success_count,
            failed_count=len(results) - success_count,
        )


class EmailHealthResponse(BaseModel):
    """이메일 서비스 상태"""

    status: str
    is_configured: bool
    from_address: str
