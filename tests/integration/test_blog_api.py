"""Blog 게시글 API 통합 테스트"""

import uuid

import pytest

ADMIN_BLOG_URL = "/api/v1/admin/blog"
PUBLIC_BLOG_URL = "/api/v1/blog"


async def _create_category(client, headers, name="Design"):
    response = await client.post(
        "/api/v1/admin/categories", json={"name": name}, headers=headers
    )
    assert response.status_code == 201
    return response.json()["data"]


async def _create_tag(client, headers, name="UX"):
    response = await client.post(
        "/api/v1/admin/tags", json={"name": name}, headers=headers
    )
    assert response.status_code == 201
    return response.json()["data"]


async def _create_post(client, headers, slug="hello-world", **overrides):
    payload = {
        "title": slug.replace("-", " ").title(),
        "slug": slug,
        "excerpt": "A short summary",
        "content": "word " * 400,
    }
    payload.update(overrides)
    response = await client.post(ADMIN_BLOG_URL, json=payload, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()["data"]


class TestAdminBlogPosts:
    """관리자 게시글 API"""

    @pytest.mark.asyncio
    async def test_create_draft_post(self, client, admin_headers):
        post = await _create_post(client, admin_headers)

        assert post["status"] == "draft"
        assert post["published_at"] is None
        assert post["reading_time"] == 2
        assert post["tags"] == []

    @pytest.mark.asyncio
    async def test_create_published_post_sets_published_at(
        self, client, admin_headers
    ):
        post = await _create_post(client, admin_headers, status="published")

        assert post["status"] == "published"
        assert post["published_at"] is not None

    @pytest.mark.asyncio
    async def test_temporary_tag_ids_ignored(self, client, admin_headers):
        tag = await _create_tag(client, admin_headers)

        post = await _create_post(
            client, admin_headers, tag_ids=[tag["id"], "temp-123", tag["id"]]
        )

        assert post["tag_ids"] == [tag["id"]]
        assert post["tags"][0]["slug"] == "ux"

    @pytest.mark.asyncio
    async def test_duplicate_slug_rejected(self, client, admin_headers):
        await _create_post(client, admin_headers)

        response = await client.post(
            ADMIN_BLOG_URL,
            json={
                "title": "Again",
                "slug": "hello-world",
                "excerpt": "x",
                "content": "y",
            },
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "BLOG_POST_SLUG_EXISTS"

    @pytest.mark.asyncio
    async def test_unknown_category_rejected(self, client, admin_headers):
        response = await client.post(
            ADMIN_BLOG_URL,
            json={
                "title": "T",
                "slug": "t",
                "excerpt": "x",
                "content": "y",
                "category_id": str(uuid.uuid4()),
            },
            headers=admin_headers,
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "CATEGORY_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_update_replaces_tags_and_publishes(self, client, admin_headers):
        first = await _create_tag(client, admin_headers, name="First")
        second = await _create_tag(client, admin_headers, name="Second")
        post = await _create_post(client, admin_headers, tag_ids=[first["id"]])

        response = await client.put(
            f"{ADMIN_BLOG_URL}/{post['id']}",
            json={"tag_ids": [second["id"]], "status": "published"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["tag_ids"] == [second["id"]]
        assert data["status"] == "published"
        assert data["published_at"] is not None
        assert data["title"] == post["title"]

    @pytest.mark.asyncio
    async def test_list_filters(self, client, admin_headers):
        category = await _create_category(client, admin_headers)
        await _create_post(
            client, admin_headers, slug="in-category", category_id=category["id"]
        )
        await _create_post(client, admin_headers, slug="no-category")

        response = await client.get(
            ADMIN_BLOG_URL,
            params={"category_id": category["id"]},
            headers=admin_headers,
        )

        body = response.json()
        assert body["meta"]["total"] == 1
        assert body["data"][0]["slug"] == "in-category"
        assert body["data"][0]["category"]["name"] == "Design"

    @pytest.mark.asyncio
    async def test_list_search(self, client, admin_headers):
        await _create_post(client, admin_headers, slug="python-tips")
        await _create_post(client, admin_headers, slug="design-notes")

        response = await client.get(
            ADMIN_BLOG_URL, params={"search": "python"}, headers=admin_headers
        )

        assert [p["slug"] for p in response.json()["data"]] == ["python-tips"]

    @pytest.mark.asyncio
    async def test_get_missing_post(self, client, admin_headers):
        response = await client.get(
            f"{ADMIN_BLOG_URL}/{uuid.uuid4()}", headers=admin_headers
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BLOG_POST_NOT_FOUND"


class TestBlogBulkOperations:
    """게시글 벌크 작업"""

    @pytest.mark.asyncio
    async def test_bulk_publish(self, client, admin_headers):
        first = await _create_post(client, admin_headers, slug="one")
        second = await _create_post(client, admin_headers, slug="two")

        response = await client.patch(
            ADMIN_BLOG_URL,
            json={"ids": [first["id"], second["id"]], "action": "publish"},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["affected"] == 2

        public = await client.get(f"{PUBLIC_BLOG_URL}/posts")
        assert public.json()["meta"]["total"] == 2

    @pytest.mark.asyncio
    async def test_bulk_invalid_action(self, client, admin_headers):
        post = await _create_post(client, admin_headers)

        response = await client.patch(
            ADMIN_BLOG_URL,
            json={"ids": [post["id"]], "action": "explode"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        error = response.json()["error"]
        assert error["code"] == "INVALID_BULK_ACTION"
        assert "publish" in error["detail"]["allowed"]

    @pytest.mark.asyncio
    async def test_bulk_empty_ids(self, client, admin_headers):
        response = await client.patch(
            ADMIN_BLOG_URL,
            json={"ids": [], "action": "publish"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "EMPTY_ID_LIST"

    @pytest.mark.asyncio
    async def test_bulk_delete(self, client, admin_headers):
        tag = await _create_tag(client, admin_headers)
        first = await _create_post(
            client, admin_headers, slug="one", tag_ids=[tag["id"]]
        )
        second = await _create_post(client, admin_headers, slug="two")

        response = await client.request(
            "DELETE",
            ADMIN_BLOG_URL,
            json={"ids": [first["id"], second["id"]]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        assert response.json()["data"]["deleted"] == 2

        listing = await client.get(ADMIN_BLOG_URL, headers=admin_headers)
        assert listing.json()["meta"]["total"] == 0

    @pytest.mark.asyncio
    async def test_delete_single(self, client, admin_headers):
        post = await _create_post(client, admin_headers, status="published")

        response = await client.delete(
            f"{ADMIN_BLOG_URL}/{post['id']}", headers=admin_headers
        )

        assert response.status_code == 200
        missing = await client.get(
            f"{ADMIN_BLOG_URL}/{post['id']}", headers=admin_headers
        )
        assert missing.status_code == 404


class TestPublicBlog:
    """공개 블로그 API"""

    @pytest.mark.asyncio
    async def test_only_published_posts_listed(self, client, admin_headers):
        await _create_post(client, admin_headers, slug="live", status="published")
        await _create_post(client, admin_headers, slug="draft")

        response = await client.get(f"{PUBLIC_BLOG_URL}/posts")

        assert response.status_code == 200
        assert [p["slug"] for p in response.json()["data"]] == ["live"]

    @pytest.mark.asyncio
    async def test_draft_post_not_found_publicly(self, client, admin_headers):
        await _create_post(client, admin_headers, slug="draft")

        response = await client.get(f"{PUBLIC_BLOG_URL}/posts/draft")

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "BLOG_POST_NOT_FOUND"

    @pytest.mark.asyncio
    async def test_filter_by_category_and_tag_slug(self, client, admin_headers):
        category = await _create_category(client, admin_headers)
        tag = await _create_tag(client, admin_headers)
        await _create_post(
            client,
            admin_headers,
            slug="tagged",
            status="published",
            category_id=category["id"],
            tag_ids=[tag["id"]],
        )
        await _create_post(client, admin_headers, slug="plain", status="published")

        by_category = await client.get(
            f"{PUBLIC_BLOG_URL}/posts", params={"category": "design"}
        )
        by_tag = await client.get(f"{PUBLIC_BLOG_URL}/posts", params={"tag": "ux"})

        assert [p["slug"] for p in by_category.json()["data"]] == ["tagged"]
        assert [p["slug"] for p in by_tag.json()["data"]] == ["tagged"]

    @pytest.mark.asyncio
    async def test_related_posts_same_category(self, client, admin_headers):
        category = await _create_category(client, admin_headers)
        for slug in ("main", "sibling"):
            await _create_post(
                client,
                admin_headers,
                slug=slug,
                status="published",
                category_id=category["id"],
            )
        await _create_post(client, admin_headers, slug="other", status="published")

        response = await client.get(f"{PUBLIC_BLOG_URL}/posts/main/related")

        assert [p["slug"] for p in response.json()["data"]] == ["sibling"]

    @pytest.mark.asyncio
    async def test_public_category_counts_published_only(
        self, client, admin_headers
    ):
        category = await _create_category(client, admin_headers)
        await _create_post(
            client,
            admin_headers,
            slug="live",
            status="published",
            category_id=category["id"],
        )
        await _create_post(
            client, admin_headers, slug="draft", category_id=category["id"]
        )

        public = await client.get(f"{PUBLIC_BLOG_URL}/categories")
        admin = await client.get("/api/v1/admin/categories", headers=admin_headers)

        assert public.json()["data"][0]["posts_count"] == 1
        assert admin.json()["data"][0]["posts_count"] == 2
