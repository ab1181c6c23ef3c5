"""Services API 통합 테스트"""

import uuid

import pytest

ADMIN_SERVICES_URL = "/api/v1/admin/services"
PUBLIC_SERVICES_URL = "/api/v1/services"


def _service_payload(slug="web-development", **overrides):
    payload = {
        "title": "Web Development",
        "slug": slug,
        "short_description": "Modern websites",
        "full_description": "We build fast, accessible websites.",
        "timeline": "4-8 weeks",
        "category": "Development",
        "features": ["Responsive design", "CMS integration"],
        "benefits": ["More leads"],
        "technologies": ["Next.js", "FastAPI"],
        "deliverables": ["Source code"],
        "process_steps": [
            {"step": 1, "title": "Discovery", "description": "Workshops"},
            {"step": 2, "title": "Build", "description": "Sprints", "duration": "4w"},
        ],
        "pricing_tiers": [
            {
                "name": "Starter",
                "price": "$5,000",
                "description": "Landing page",
                "features": ["1 page", "Contact form"],
            },
            {
                "name": "Growth",
                "price": "$15,000",
                "description": "Full site",
                "popular": True,
            },
        ],
        "faqs": [{"question": "Do you host?", "answer": "Yes."}],
        "testimonial": {
            "quote": "Great work",
            "author": "Sam",
            "company": "Acme",
        },
        "gallery": ["https://cdn.example.com/a.png"],
    }
    payload.update(overrides)
    return payload


async def _create_service(client, headers, **overrides):
    response = await client.post(
        ADMIN_SERVICES_URL, json=_service_payload(**overrides), headers=headers
    )
    assert response.status_code == 201, response.text
    return response.json()["data"]["id"]


class TestAdminServices:
    """관리자 서비스 API"""

    @pytest.mark.asyncio
    async def test_create_returns_id_and_children(self, client, admin_headers):
        service_id = await _create_service(client, admin_headers)

        response = await client.get(
            f"{ADMIN_SERVICES_URL}/{service_id}", headers=admin_headers
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["status"] == "published"
        assert data["features"] == ["Responsive design", "CMS integration"]
        assert [s["title"] for s in data["process_steps"]] == ["Discovery", "Build"]
        assert data["pricing_tiers"][0]["features"] == ["1 page", "Contact form"]
        assert data["pricing_tiers"][1]["popular"] is True
        assert data["testimonial"]["company"] == "Acme"
        assert data["gallery"] == ["https://cdn.example.com/a.png"]

    @pytest.mark.asyncio
    async def test_duplicate_slug_conflict(self, client, admin_headers):
        await _create_service(client, admin_headers)

        response = await client.post(
            ADMIN_SERVICES_URL, json=_service_payload(), headers=admin_headers
        )

        assert response.status_code == 409
        assert response.json()["error"]["code"] == "SERVICE_SLUG_EXISTS"

    @pytest.mark.asyncio
    async def test_invalid_category_rejected(self, client, admin_headers):
        response = await client.post(
            ADMIN_SERVICES_URL,
            json=_service_payload(category="Gardening"),
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"

    @pytest.mark.asyncio
    async def test_update_replaces_children(self, client, admin_headers):
        service_id = await _create_service(client, admin_headers)

        response = await client.put(
            f"{ADMIN_SERVICES_URL}/{service_id}",
            json={"title": "Web Apps", "features": ["PWA"]},
            headers=admin_headers,
        )

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["title"] == "Web Apps"
        assert data["slug"] == "web-development"
        assert data["features"] == ["PWA"]
        assert data["faqs"] == []
        assert data["testimonial"] is None

    @pytest.mark.asyncio
    async def test_related_services_skip_unknown_and_self(
        self, client, admin_headers
    ):
        other_id = await _create_service(client, admin_headers, slug="seo")
        service_id = await _create_service(client, admin_headers)

        response = await client.put(
            f"{ADMIN_SERVICES_URL}/{service_id}",
            json={"related_services": [other_id, service_id, str(uuid.uuid4())]},
            headers=admin_headers,
        )

        assert response.json()["data"]["related_services"] == [other_id]

    @pytest.mark.asyncio
    async def test_list_filter_by_category(self, client, admin_headers):
        await _create_service(client, admin_headers)
        await _create_service(
            client, admin_headers, slug="branding", category="Design"
        )

        response = await client.get(
            ADMIN_SERVICES_URL, params={"category": "Design"}, headers=admin_headers
        )

        body = response.json()
        assert body["meta"]["total"] == 1
        assert body["data"][0]["slug"] == "branding"

    @pytest.mark.asyncio
    async def test_bulk_archive_and_delete(self, client, admin_headers):
        first = await _create_service(client, admin_headers)
        second = await _create_service(client, admin_headers, slug="seo")

        archived = await client.patch(
            ADMIN_SERVICES_URL,
            json={"ids": [first, second], "action": "archive"},
            headers=admin_headers,
        )
        assert archived.json()["data"]["affected"] == 2

        public = await client.get(PUBLIC_SERVICES_URL)
        assert public.json()["data"] == []

        deleted = await client.request(
            "DELETE",
            ADMIN_SERVICES_URL,
            json={"ids": [first, second]},
            headers=admin_headers,
        )
        assert deleted.json()["data"]["deleted"] == 2

    @pytest.mark.asyncio
    async def test_delete_missing_service(self, client, admin_headers):
        response = await client.delete(
            f"{ADMIN_SERVICES_URL}/{uuid.uuid4()}", headers=admin_headers
        )

        assert response.status_code == 404
        assert response.json()["error"]["code"] == "SERVICE_NOT_FOUND"


class TestPublicServices:
    """공개 서비스 API"""

    @pytest.mark.asyncio
    async def test_only_published_visible(self, client, admin_headers):
        await _create_service(client, admin_headers)
        await _create_service(client, admin_headers, slug="hidden", status="draft")

        listing = await client.get(PUBLIC_SERVICES_URL)
        hidden = await client.get(f"{PUBLIC_SERVICES_URL}/hidden")
        visible = await client.get(f"{PUBLIC_SERVICES_URL}/web-development")

        assert [s["slug"] for s in listing.json()["data"]] == ["web-development"]
        assert hidden.status_code == 404
        assert visible.status_code == 200
        assert visible.json()["data"]["technologies"] == ["Next.js", "FastAPI"]
