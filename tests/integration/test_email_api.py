"""Email API 통합 테스트"""

import pytest

from app.domains.email.exceptions import EmailDeliveryError

EMAIL_URL = "/api/v1/email/send"


class TestEmailSend:
    """이메일 발송 API"""

    @pytest.mark.asyncio
    async def test_simple_email_to_all_recipients(self, client, mock_email_delivery):
        response = await client.post(
            EMAIL_URL,
            json={
                "type": "simple",
                "data": {"subject": "Weekly update", "content": "All good"},
                "recipients": ["a@example.com", "b@example.com"],
            },
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["success_count"] == 2
        assert data["failed_count"] == 0
        assert data["results"][0]["message_id"] == "mock-message-id"
        assert mock_email_delivery.await_count == 2
        assert mock_email_delivery.await_args.args[0].subject == "Weekly update"

    @pytest.mark.asyncio
    async def test_simple_email_requires_subject(self, client):
        response = await client.post(
            EMAIL_URL,
            json={
                "type": "simple",
                "data": {"content": "No subject"},
                "recipients": ["a@example.com"],
            },
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_invalid_template_props_returns_multi_status(self, client):
        response = await client.post(
            EMAIL_URL,
            json={
                "type": "contact-form",
                "data": {"sender_name": "Alex"},
                "recipients": ["a@example.com"],
            },
        )

        assert response.status_code == 207
        body = response.json()
        assert body["success"] is False
        assert body["data"]["failed_count"] == 1
        assert body["data"]["results"][0]["error"].startswith(
            "Template validation failed"
        )

    @pytest.mark.asyncio
    async def test_delivery_failure_returns_multi_status(
        self, client, mock_email_delivery, monkeypatch
    ):
        from app.domains.email.service import get_email_service

        service = get_email_service()
        monkeypatch.setattr(service, "max_retries", 0)
        mock_email_delivery.side_effect = EmailDeliveryError("HTTP 500")

        response = await client.post(
            EMAIL_URL,
            json={
                "type": "simple",
                "data": {"subject": "Hi", "content": "Hello"},
                "recipients": ["a@example.com"],
            },
        )

        assert response.status_code == 207
        assert response.json()["data"]["results"][0]["error"] == "HTTP 500"


class TestEmailHealth:
    @pytest.mark.asyncio
    async def test_health_reports_configuration(self, client):
        response = await client.get(EMAIL_URL)

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["is_configured"] is False
        assert data["status"] == "not_configured"
