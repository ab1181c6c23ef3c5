"""조회 기록/대시보드 분석 API 통합 테스트"""

import uuid

import pytest

VIEWS_URL = "/api/v1/views"
ANALYTICS_URL = "/api/v1/admin/analytics"


async def _published_post(client, headers, slug="popular"):
    response = await client.post(
        "/api/v1/admin/blog",
        json={
            "title": slug.title(),
            "slug": slug,
            "excerpt": "Summary",
            "content": "Body",
            "status": "published",
        },
        headers=headers,
    )
    assert response.status_code == 201
    return response.json()["data"]


class TestRecordView:
    """조회 기록"""

    @pytest.mark.asyncio
    async def test_record_and_skip_duplicate(self, client):
        payload = {"content_type": "blog_post", "content_id": str(uuid.uuid4())}
        headers = {"User-Agent": "pytest", "Referer": "https://google.com"}

        first = await client.post(VIEWS_URL, json=payload, headers=headers)
        second = await client.post(VIEWS_URL, json=payload, headers=headers)

        assert first.status_code == 201
        data = first.json()["data"]
        assert data["content_type"] == "blog_post"
        assert data["content_id"] == payload["content_id"]

        assert second.status_code == 200
        assert second.json()["data"] is None
        assert second.json()["message"] == "이미 기록된 조회입니다."

    @pytest.mark.asyncio
    async def test_different_ip_recorded_separately(self, client):
        payload = {"content_type": "service", "content_id": str(uuid.uuid4())}

        first = await client.post(
            VIEWS_URL, json=payload, headers={"X-Forwarded-For": "198.51.100.1"}
        )
        second = await client.post(
            VIEWS_URL, json=payload, headers={"X-Forwarded-For": "198.51.100.2"}
        )

        assert first.status_code == 201
        assert second.status_code == 201

    @pytest.mark.asyncio
    async def test_invalid_content_type(self, client):
        response = await client.post(
            VIEWS_URL,
            json={"content_type": "podcast", "content_id": str(uuid.uuid4())},
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"


class TestAnalytics:
    """대시보드 분석"""

    @pytest.mark.asyncio
    async def test_dashboard_stats(self, client, admin_headers):
        post = await _published_post(client, admin_headers)
        for ip in ("198.51.100.1", "198.51.100.2"):
            await client.post(
                VIEWS_URL,
                json={"content_type": "blog_post", "content_id": post["id"]},
                headers={"X-Forwarded-For": ip},
            )

        response = await client.get(
            ANALYTICS_URL, params={"period": "today"}, headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        stats = data["stats"]
        assert stats["total_blog_posts"] == 1
        assert stats["total_views"] == 2
        assert stats["total_unique_views"] == 2
        assert stats["views_today"] == 2
        top = stats["top_blog_posts"][0]
        assert top["slug"] == "popular"
        assert top["total_views"] == 2
        assert top["views_today"] == 2
        assert stats["recent_views"][0]["title"] == "Popular"
        assert len(data["chart_data"]) == 1
        assert data["chart_data"][0]["blog_post_views"] == 2

    @pytest.mark.asyncio
    async def test_empty_month_chart_is_zero_filled(self, client, admin_headers):
        response = await client.get(ANALYTICS_URL, headers=admin_headers)

        data = response.json()["data"]
        assert data["period"] == "month"
        assert data["chart_data"]
        assert all(point["views"] == 0 for point in data["chart_data"])
        assert data["chart_data"][0]["date"].endswith("-01")

    @pytest.mark.asyncio
    async def test_invalid_period(self, client, admin_headers):
        response = await client.get(
            ANALYTICS_URL, params={"period": "forever"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_ANALYTICS_PERIOD"
