"""이메일 템플릿 정의 및 렌더링

템플릿 본문은 templates/ 디렉터리의 Jinja2 HTML 파일입니다.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Optional

from jinja2 import Environment, PackageLoader, StrictUndefined, select_autoescape

from app.domains.email.exceptions import InvalidTemplatePropsException


class EmailTemplate(str, Enum):
    """지원 템플릿"""

    USER_INVITATION = "user-invitation"
    CONTACT_FORM_NOTIFICATION = "contact-form-notification"
    CONTACT_FORM_CONFIRMATION = "contact-form-confirmation"
    WELCOME = "welcome"
    PASSWORD_RESET = "password-reset"
    EMAIL_VERIFICATION = "email-verification"
    NOTIFICATION = "notification"


@dataclass(frozen=True)
class TemplateSpec:
    """템플릿별 기본 제목과 필수 값"""

    default_subject: str
    required_props: tuple[str, ...] = ()
    defaults: Optional[dict[str, Any]] = None


TEMPLATE_SPECS: dict[EmailTemplate, TemplateSpec] = {
    EmailTemplate.USER_INVITATION: TemplateSpec(
        default_subject="You're invited to join our platform",
        required_props=("inviter_name", "invitation_url"),
        defaults={"recipient_name": None, "inviter_email": None, "role": None, "expires_at": None},
    ),
    EmailTemplate.CONTACT_FORM_NOTIFICATION: TemplateSpec(
        default_subject="New contact form submission",
        required_props=("sender_name", "sender_email", "message"),
        defaults={
            "subject": None,
            "company": None,
            "phone": None,
            "project_type": None,
            "budget": None,
            "timeline": None,
            "submitted_at": None,
            "ip_address": None,
            "user_agent": None,
            "form_url": None,
            "site_url": None,
        },
    ),
    EmailTemplate.CONTACT_FORM_CONFIRMATION: TemplateSpec(
        default_subject="We've received your message - Thank you!",
        required_props=("sender_name", "message"),
        defaults={"subject": None, "submitted_at": None, "response_time": None},
    ),
    EmailTemplate.WELCOME: TemplateSpec(
        default_subject="Welcome to our platform",
        required_props=("user_name", "user_email", "dashboard_url"),
        defaults={"onboarding_url": None, "resources_url": None},
    ),
    EmailTemplate.PASSWORD_RESET: TemplateSpec(
        default_subject="Reset your password",
        required_props=("user_email", "reset_url"),
        defaults={"expires_at": None, "ip_address": None},
    ),
    EmailTemplate.EMAIL_VERIFICATION: TemplateSpec(
        default_subject="Verify your email address",
        required_props=("user_email", "verification_url"),
        defaults={"expires_at": None},
    ),
    EmailTemplate.NOTIFICATION: TemplateSpec(
        default_subject="Important notification",
        required_props=("title", "message"),
        defaults={"severity": "info", "action_url": None, "action_text": None, "timestamp": None},
    ),
}


def validate_props(template: EmailTemplate, props: dict[str, Any]) -> None:
    """필수 값 검증

    Raises:
        InvalidTemplatePropsException: 필수 값이 없거나 비어있는 경우
    """
    spec = TEMPLATE_SPECS[template]
    missing = [
        name
        for name in spec.required_props
        if props.get(name) is None or str(props.get(name)).strip() == ""
    ]
    if missing:
        raise InvalidTemplatePropsException(template.value, missing)


class TemplateRenderer:
    """Jinja2 기반 HTML 렌더러"""

    def __init__(
        self,
        company_name: str,
        support_email: Optional[str] = None,
        environment: Optional[Environment] = None,
    ):
        self.company_name = company_name
        self.support_email = support_email
        self.environment = environment or Environment(
            loader=PackageLoader("app.domains.email", "templates"),
            autoescape=select_autoescape(["html"]),
            undefined=StrictUndefined,
        )

    def render(self, template: EmailTemplate, props: dict[str, Any]) -> str:
        """템플릿 렌더링 (필수 값 검증 포함)"""
        validate_props(template, props)
        spec = TEMPLATE_SPECS[template]
        context: dict[str, Any] = {
            "title": spec.default_subject,
            "company_name": self.company_name,
            "support_email": self.support_email,
            "unsubscribe_url": None,
            "year": datetime.now(timezone.utc).year,
        }
        context.update(spec.defaults or {})
        context.update(props)
        return self.environment.get_template(f"{template.value}.html").render(
            **context
        )
