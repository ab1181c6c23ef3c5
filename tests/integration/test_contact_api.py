"""Contact API 통합 테스트"""

import uuid
from datetime import datetime

import pytest
from sqlalchemy import update

from app.core.utils.datetime import UTC
from app.domains.contact.models import ContactSubmission

CONTACT_URL = "/api/v1/contact"
ADMIN_CONTACT_URL = "/api/v1/admin/contact-submissions"


def _contact_payload(**overrides):
    payload = {
        "name": "Alex Kim",
        "email": "alex@example.com",
        "subject": "Redesign",
        "message": "We would like to redesign our marketing website this year.",
        "company": "Acme",
        "phone": "+1 (555) 010-2000",
        "project_type": "web-development",
        "budget": "25k-50k",
        "timeline": "1-2-months",
    }
    payload.update(overrides)
    return payload


async def _submit(client, **overrides):
    response = await client.post(CONTACT_URL, json=_contact_payload(**overrides))
    assert response.status_code == 201, response.text
    return response.json()["data"]["submission_id"]


class TestPublicContact:
    """공개 문의 접수"""

    @pytest.mark.asyncio
    async def test_submit_stores_and_sends_confirmation(
        self, client, admin_headers, mock_email_delivery
    ):
        response = await client.post(
            CONTACT_URL,
            json=_contact_payload(),
            headers={"X-Forwarded-For": "203.0.113.7, 10.0.0.1"},
        )

        assert response.status_code == 201
        submission_id = response.json()["data"]["submission_id"]
        assert submission_id is not None

        # 관리자 수신자가 없으면 접수 확인 메일만 발송
        mock_email_delivery.assert_awaited_once()
        sent = mock_email_delivery.await_args.args[0]
        assert sent.to == "alex@example.com"

        detail = await client.get(
            f"{ADMIN_CONTACT_URL}/{submission_id}", headers=admin_headers
        )
        assert detail.json()["data"]["ip_address"] == "203.0.113.7"

    @pytest.mark.asyncio
    async def test_email_failure_does_not_affect_submission(
        self, client, admin_headers, mock_email_delivery
    ):
        """메일 발송은 저장 커밋 이후 백그라운드에서 실행되어 실패해도 접수는 유지"""
        mock_email_delivery.side_effect = RuntimeError("mail provider down")

        response = await client.post(CONTACT_URL, json=_contact_payload())

        assert response.status_code == 201
        submission_id = response.json()["data"]["submission_id"]
        mock_email_delivery.assert_awaited()

        detail = await client.get(
            f"{ADMIN_CONTACT_URL}/{submission_id}", headers=admin_headers
        )
        assert detail.status_code == 200

    @pytest.mark.asyncio
    async def test_spam_is_accepted_but_not_stored(self, client, admin_headers):
        response = await client.post(
            CONTACT_URL,
            json=_contact_payload(
                message="Visit our casino for a lottery winner bonus"
            ),
        )

        assert response.status_code == 201
        assert response.json()["data"]["submission_id"] is None

        listing = await client.get(ADMIN_CONTACT_URL, headers=admin_headers)
        assert listing.json()["meta"]["total"] == 0

    @pytest.mark.asyncio
    async def test_validation_errors(self, client):
        response = await client.post(
            CONTACT_URL,
            json=_contact_payload(name="A", message="short", phone="call me"),
        )

        assert response.status_code == 400
        issues = response.json()["error"]["detail"]["issues"]
        fields = {issue.split(":")[0] for issue in issues}
        assert {"name", "message", "phone"} <= fields

    @pytest.mark.asyncio
    async def test_rate_limited_after_five_requests(self, client):
        for _ in range(5):
            await _submit(client)

        response = await client.post(CONTACT_URL, json=_contact_payload())

        assert response.status_code == 429
        assert response.json()["error"]["code"] == "CONTACT_RATE_LIMITED"


class TestAdminContact:
    """관리자 문의 관리"""

    @pytest.mark.asyncio
    async def test_view_marks_new_as_read(self, client, admin_headers):
        submission_id = await _submit(client)

        response = await client.get(
            f"{ADMIN_CONTACT_URL}/{submission_id}", headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "read"
        assert data["comments"] == []

    @pytest.mark.asyncio
    async def test_detail_includes_comments(self, client, admin_headers):
        submission_id = await _submit(client)
        await client.post(
            "/api/v1/admin/comments",
            json={
                "entity_type": "contact_submission",
                "entity_id": submission_id,
                "content": "Called back, waiting for brief",
            },
            headers=admin_headers,
        )

        response = await client.get(
            f"{ADMIN_CONTACT_URL}/{submission_id}", headers=admin_headers
        )

        comments = response.json()["data"]["comments"]
        assert len(comments) == 1
        assert comments[0]["author_name"] == "admin"

    @pytest.mark.asyncio
    async def test_list_with_status_counts(self, client, admin_headers):
        first = await _submit(client)
        await _submit(client, email="other@example.com", budget="under-10k")
        await client.patch(
            f"{ADMIN_CONTACT_URL}/{first}",
            json={"status": "responded"},
            headers=admin_headers,
        )

        response = await client.get(
            ADMIN_CONTACT_URL, params={"status": "new"}, headers=admin_headers
        )

        body = response.json()
        assert body["meta"]["total"] == 1
        assert body["data"][0]["email"] == "other@example.com"
        assert body["status_counts"] == {"new": 1, "read": 0, "responded": 1}

    @pytest.mark.asyncio
    async def test_list_search_and_budget_filter(self, client, admin_headers):
        await _submit(client)
        await _submit(client, name="Jordan Lee", budget="under-10k")

        by_search = await client.get(
            ADMIN_CONTACT_URL, params={"search": "jordan"}, headers=admin_headers
        )
        by_budget = await client.get(
            ADMIN_CONTACT_URL, params={"budget": "25k-50k"}, headers=admin_headers
        )

        assert [s["name"] for s in by_search.json()["data"]] == ["Jordan Lee"]
        assert [s["name"] for s in by_budget.json()["data"]] == ["Alex Kim"]

    @pytest.mark.asyncio
    async def test_list_date_range_filter(self, client, admin_headers, db_session):
        """date_from은 당일 0시부터, date_to는 해당 일 전체를 포함"""
        created = {
            "Before Range": datetime(2024, 3, 9, 23, 59, 59, tzinfo=UTC),
            "Range Start": datetime(2024, 3, 10, 0, 0, 0, tzinfo=UTC),
            "Range End": datetime(2024, 3, 15, 23, 59, 59, tzinfo=UTC),
            "After Range": datetime(2024, 3, 16, 0, 0, 1, tzinfo=UTC),
        }
        for name, created_at in created.items():
            submission_id = await _submit(client, name=name)
            await db_session.execute(
                update(ContactSubmission)
                .where(ContactSubmission.id == uuid.UUID(submission_id))
                .values(created_at=created_at)
            )
        db_session.expire_all()

        both = await client.get(
            ADMIN_CONTACT_URL,
            params={"date_from": "2024-03-10", "date_to": "2024-03-15"},
            headers=admin_headers,
        )
        from_only = await client.get(
            ADMIN_CONTACT_URL,
            params={"date_from": "2024-03-15"},
            headers=admin_headers,
        )
        to_only = await client.get(
            ADMIN_CONTACT_URL,
            params={"date_to": "2024-03-09"},
            headers=admin_headers,
        )

        assert sorted(s["name"] for s in both.json()["data"]) == [
            "Range End",
            "Range Start",
        ]
        assert both.json()["meta"]["total"] == 2
        assert sorted(s["name"] for s in from_only.json()["data"]) == [
            "After Range",
            "Range End",
        ]
        assert [s["name"] for s in to_only.json()["data"]] == ["Before Range"]

    @pytest.mark.asyncio
    async def test_list_rejects_invalid_date(self, client, admin_headers):
        response = await client.get(
            ADMIN_CONTACT_URL, params={"date_from": "03/10/2024"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_bulk_mark_responded(self, client, admin_headers):
        ids = [await _submit(client), await _submit(client)]

        response = await client.patch(
            ADMIN_CONTACT_URL,
            json={"ids": ids, "action": "mark-responded"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["affected"] == 2

    @pytest.mark.asyncio
    async def test_bulk_unknown_action(self, client, admin_headers):
        submission_id = await _submit(client)

        response = await client.patch(
            ADMIN_CONTACT_URL,
            json={"ids": [submission_id], "action": "publish"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_BULK_ACTION"

    @pytest.mark.asyncio
    async def test_delete_and_bulk_delete(self, client, admin_headers):
        first, second, third = [await _submit(client) for _ in range(3)]

        single = await client.delete(
            f"{ADMIN_CONTACT_URL}/{first}", headers=admin_headers
        )
        bulk = await client.request(
            "DELETE",
            ADMIN_CONTACT_URL,
            json={"ids": [second, third]},
            headers=admin_headers,
        )

        assert single.status_code == 200
        assert bulk.json()["data"]["deleted"] == 2
        missing = await client.get(
            f"{ADMIN_CONTACT_URL}/{first}", headers=admin_headers
        )
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "SUBMISSION_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_get_unknown_submission(self, client, admin_headers):
        response = await client.get(
            f"{ADMIN_CONTACT_URL}/{uuid.uuid4()}", headers=admin_headers
        )

        assert response.status_code == 404


class TestContactAnalytics:
    """문의 분석"""

    @pytest.mark.asyncio
    async def test_analytics_counts(self, client, admin_headers):
        await _submit(client)
        await _submit(client, project_type="consulting")

        response = await client.get(
            f"{ADMIN_CONTACT_URL}/analytics",
            params={"period": "week"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["period"] == "week"
        assert data["stats"]["total_submissions"] == 2
        assert data["stats"]["new_submissions"] == 2
        assert data["stats"]["submissions_today"] == 2
        assert len(data["stats"]["recent_submissions"]) == 2
        assert {v["value"] for v in data["stats"]["top_project_types"]} == {
            "web-development",
            "consulting",
        }
        assert len(data["chart_data"]) == 1
        assert sum(point["submissions"] for point in data["chart_data"]) == 2

    @pytest.mark.asyncio
    async def test_invalid_period(self, client, admin_headers):
        response = await client.get(
            f"{ADMIN_CONTACT_URL}/analytics",
            params={"period": "decade"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_ANALYTICS_PERIOD"
        assert "quarter" in error["detail"]["allowed"]
