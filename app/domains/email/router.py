"""Email 도메인 라우터"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from app.core.schemas import APIResponse, create_response
from app.core.utils.datetime import now_utc
from app.domains.email.schemas import (
    EmailHealthResponse,
    EmailSendRequest,
    EmailSendResponse,
    EmailSendType,
)
from app.domains.email.service import EmailService, get_email_service
from app.domains.email.templates import EmailTemplate
from app.domains.email.types import EmailResult

router = APIRouter()


async def _send_one(
    service: EmailService, data: EmailSendRequest, recipient: str
) -> EmailResult:
    if data.type == EmailSendType.CONTACT_FORM:
        return await service.send_templated_email(
            EmailTemplate.CONTACT_FORM_NOTIFICATION, recipient, data.data
        )
    if data.type == EmailSendType.USER_INVITATION:
        return await service.send_user_invitation(recipient, data.data)

    subject = str(data.data["subject"])
    return await service.send_templated_email(
        EmailTemplate.NOTIFICATION,
        recipient,
        {
            "title": subject,
            "message": str(data.data["content"]),
            "severity": "info",
            "timestamp": now_utc().isoformat(),
        },
        subject=subject,
    )


@router.post(
    "/send",
    response_model=APIResponse[EmailSendResponse],
    responses={207: {"description": "일부 수신자 발송 실패"}},
)
async def send_email(
    data: EmailSendRequest,
    service: EmailService = Depends(get_email_service),
):
    """이메일 발송

    모두 성공하면 200, 하나라도 실패하면 207 (Multi-Status)을 반환합니다.
    """
    results = [await _send_one(service, data, str(r)) for r in data.recipients]
    summary = EmailSendResponse.from_results(results)

    if summary.failed_count:
        return JSONResponse(
            status_code=status.HTTP_207_MULTI_STATUS,
            content={
                "success": False,
                "message": (
                    f"{len(results)}건 중 {summary.failed_count}건의 "
                    "이메일 발송에 실패했습니다."
                ),
                "data": summary.model_dump(mode="json"),
            },
        )

    return create_response(
        data=summary,
        message=f"{len(results)}건의 이메일을 발송했습니다.",
    )


@router.get("/send", response_model=APIResponse[EmailHealthResponse])
async def email_health(
    service: EmailService = Depends(get_email_service),
):
    """이메일 서비스 상태 확인 (API 키 설정 여부)"""
    return create_response(
        data=EmailHealthResponse(
            status="ok" if service.is_configured else "not_configured",
            is_configured=service.is_configured,
            from_address=service.from_address,
        ),
        message="이메일 서비스 상태를 조회했습니다.",
    )
