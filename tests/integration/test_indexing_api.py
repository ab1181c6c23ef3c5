"""Indexing API 통합 테스트

Google 호출은 conftest의 mock_indexing_publish로 대체됩니다.
"""

import pytest

from app.domains.indexing.client import GoogleIndexingClient, get_indexing_client
from app.main import app

INDEXING_URL = "/api/v1/admin/google-indexing"
SITE = "http://localhost:3000"


@pytest.fixture
def configured_indexing():
    app.dependency_overrides[get_indexing_client] = lambda: GoogleIndexingClient(
        "bot@example.iam.gserviceaccount.com", "private-key"
    )
    yield
    app.dependency_overrides.pop(get_indexing_client, None)


class TestIndexingStatus:
    @pytest.mark.asyncio
    async def test_status_unconfigured(self, client, admin_headers):
        response = await client.get(INDEXING_URL, headers=admin_headers)

        assert response.status_code == 200
        assert response.json()["data"] == {
            "is_configured": False,
            "has_client_email": False,
            "has_private_key": False,
        }

    @pytest.mark.asyncio
    async def test_status_configured(self, client, admin_headers, configured_indexing):
        response = await client.get(INDEXING_URL, headers=admin_headers)

        assert response.json()["data"]["is_configured"] is True


class TestIndexingNotify:
    @pytest.mark.asyncio
    async def test_notify_requires_configuration(self, client, admin_headers):
        response = await client.post(
            INDEXING_URL, json={"action": "notify_all"}, headers=admin_headers
        )

        assert response.status_code == 500
        assert response.json()["error"]["code"] == "INDEXING_NOT_CONFIGURED"

    @pytest.mark.asyncio
    async def test_notify_urls(
        self, client, admin_headers, configured_indexing, mock_indexing_publish
    ):
        response = await client.post(
            INDEXING_URL,
            json={
                "action": "notify_urls",
                "urls": [f"{SITE}/blog/a", f"{SITE}/blog/b"],
                "operation": "URL_DELETED",
            },
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["total_urls"] == 2
        assert data["success_count"] == 2
        assert data["results"][0]["notification_type"] == "URL_DELETED"
        mock_indexing_publish.assert_called_once()

    @pytest.mark.asyncio
    async def test_notify_service(self, client, admin_headers, configured_indexing):
        response = await client.post(
            INDEXING_URL,
            json={"action": "notify_service", "slug": "web-development"},
            headers=admin_headers,
        )

        urls = [r["url"] for r in response.json()["data"]["results"]]
        assert urls == [f"{SITE}/services/web-development", f"{SITE}/services"]

    @pytest.mark.asyncio
    async def test_notify_site_settings(self, client, admin_headers, configured_indexing):
        response = await client.post(
            INDEXING_URL,
            json={"action": "notify_site_settings"},
            headers=admin_headers,
        )

        data = response.json()["data"]
        assert data["total_urls"] == 6
        assert data["results"][0]["url"] == SITE

    @pytest.mark.asyncio
    async def test_bulk_notify_blog_posts(
        self, client, admin_headers, configured_indexing
    ):
        response = await client.post(
            INDEXING_URL,
            json={
                "action": "bulk_notify",
                "content_type": "blog_post",
                "content_ids": ["first", "second"],
            },
            headers=admin_headers,
        )

        data = response.json()["data"]
        assert data["total_urls"] == 4
        assert data["failed_count"] == 0

    @pytest.mark.asyncio
    async def test_notify_all_includes_published_content(
        self, client, admin_headers, configured_indexing
    ):
        await client.post(
            "/api/v1/admin/blog",
            json={
                "title": "Live",
                "slug": "live",
                "excerpt": "Summary",
                "content": "Body",
                "status": "published",
            },
            headers=admin_headers,
        )
        await client.post(
            "/api/v1/admin/blog",
            json={
                "title": "Hidden",
                "slug": "hidden",
                "excerpt": "Summary",
                "content": "Body",
            },
            headers=admin_headers,
        )

        response = await client.post(
            INDEXING_URL, json={"action": "notify_all"}, headers=admin_headers
        )

        urls = [r["url"] for r in response.json()["data"]["results"]]
        assert f"{SITE}/blog/live" in urls
        assert f"{SITE}/blog/hidden" not in urls

    @pytest.mark.asyncio
    async def test_slug_required(self, client, admin_headers, configured_indexing):
        response = await client.post(
            INDEXING_URL,
            json={"action": "notify_blog_post"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INDEXING_SLUG_REQUIRED"

    @pytest.mark.asyncio
    async def test_bulk_requires_content(self, client, admin_headers, configured_indexing):
        response = await client.post(
            INDEXING_URL, json={"action": "bulk_notify"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INDEXING_INVALID_REQUEST"

    @pytest.mark.asyncio
    async def test_unknown_action(self, client, admin_headers, configured_indexing):
        response = await client.post(
            INDEXING_URL, json={"action": "reindex"}, headers=admin_headers
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INDEXING_UNKNOWN_ACTION"
