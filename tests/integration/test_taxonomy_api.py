"""카테고리/태그 API 통합 테스트"""

import uuid

import pytest

CATEGORIES_URL = "/api/v1/admin/categories"
TAGS_URL = "/api/v1/admin/tags"


class TestCategories:
    """카테고리 API"""

    @pytest.mark.asyncio
    async def test_create_generates_slug(self, client, admin_headers):
        response = await client.post(
            CATEGORIES_URL,
            json={"name": "Web Design & UX", "description": "All about design"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["slug"] == "web-design-ux"
        assert data["description"] == "All about design"

    @pytest.mark.asyncio
    async def test_name_conflict_is_case_insensitive(self, client, admin_headers):
        await client.post(CATEGORIES_URL, json={"name": "News"}, headers=admin_headers)

        response = await client.post(
            CATEGORIES_URL,
            json={"name": "news", "slug": "different"},
            headers=admin_headers,
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "CATEGORY_CONFLICT"

    @pytest.mark.asyncio
    async def test_list_sorted_by_name(self, client, admin_headers):
        for name in ("Zeta", "Alpha", "Mid"):
            await client.post(
                CATEGORIES_URL, json={"name": name}, headers=admin_headers
            )

        response = await client.get(CATEGORIES_URL, headers=admin_headers)

        names = [c["name"] for c in response.json()["data"]]
        assert names == ["Alpha", "Mid", "Zeta"]

    @pytest.mark.asyncio
    async def test_update_and_delete(self, client, admin_headers):
        created = await client.post(
            CATEGORIES_URL, json={"name": "Old"}, headers=admin_headers
        )
        category_id = created.json()["data"]["id"]

        updated = await client.put(
            f"{CATEGORIES_URL}/{category_id}",
            json={"name": "New", "slug": "New Slug"},
            headers=admin_headers,
        )
        assert updated.status_code == 200
        assert updated.json()["data"]["slug"] == "new-slug"

        deleted = await client.delete(
            f"{CATEGORIES_URL}/{category_id}", headers=admin_headers
        )
        assert deleted.status_code == 200
        assert deleted.json()["data"] is None

        missing = await client.get(
            f"{CATEGORIES_URL}/{category_id}", headers=admin_headers
        )
        assert missing.status_code == 404
        assert missing.json()["error"]["code"] == "CATEGORY_NOT_FOUND"


class TestTags:
    """태그 API"""

    @pytest.mark.asyncio
    async def test_create_and_list(self, client, admin_headers):
        response = await client.post(
            TAGS_URL, json={"name": "Machine Learning"}, headers=admin_headers
        )

        assert response.status_code == 201
        assert response.json()["data"]["slug"] == "machine-learning"

        listing = await client.get(TAGS_URL, headers=admin_headers)
        assert listing.json()["data"][0]["posts_count"] == 0

    @pytest.mark.asyncio
    async def test_slug_conflict(self, client, admin_headers):
        await client.post(TAGS_URL, json={"name": "SEO"}, headers=admin_headers)

        response = await client.post(
            TAGS_URL, json={"name": "Seo again", "slug": "seo"}, headers=admin_headers
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "TAG_CONFLICT"

    @pytest.mark.asyncio
    async def test_update_tag(self, client, admin_headers):
        created = await client.post(
            TAGS_URL, json={"name": "Draft"}, headers=admin_headers
        )
        tag_id = created.json()["data"]["id"]

        response = await client.put(
            f"{TAGS_URL}/{tag_id}",
            json={"name": "Final"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["name"] == "Final"
        assert response.json()["data"]["slug"] == "draft"

    @pytest.mark.asyncio
    async def test_delete_missing_tag(self, client, admin_headers):
        response = await client.delete(
            f"{TAGS_URL}/{uuid.uuid4()}", headers=admin_headers
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "TAG_NOT_FOUND"
