"""Upload API 통합 테스트 (MinIO)"""

import pytest

from app.core.config import settings

UPLOAD_URL = "/api/v1/admin/upload"


class TestUpload:
    """이미지 업로드"""

    @pytest.mark.asyncio
    async def test_upload_to_folder(
        self, client, admin_headers, png_bytes, object_exists
    ):
        response = await client.post(
            UPLOAD_URL,
            files={"file": ("logo.png", png_bytes, "image/png")},
            data={"folder": "blog/covers"},
            headers=admin_headers,
        )

        assert response.status_code == 201
        data = response.json()["data"]
        assert data["pathname"].startswith("blog/covers/")
        assert data["pathname"].endswith(".png")
        assert data["size"] == len(png_bytes)
        assert data["content_type"] == "image/png"
        assert data["url"].endswith(data["pathname"])
        assert object_exists(data["pathname"])

    @pytest.mark.asyncio
    async def test_default_folder(self, client, admin_headers, png_bytes):
        response = await client.post(
            UPLOAD_URL,
            files={"file": ("photo.PNG", png_bytes, "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 201
        assert response.json()["data"]["pathname"].startswith("uploads/")

    @pytest.mark.asyncio
    async def test_rejects_unsupported_type(self, client, admin_headers):
        response = await client.post(
            UPLOAD_URL,
            files={"file": ("doc.pdf", b"%PDF-1.4", "application/pdf")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FILE_TYPE"

    @pytest.mark.asyncio
    async def test_rejects_extension_mismatch(
        self, client, admin_headers, png_bytes
    ):
        response = await client.post(
            UPLOAD_URL,
            files={"file": ("photo.jpg", png_bytes, "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "INVALID_FILE_TYPE"

    @pytest.mark.asyncio
    async def test_rejects_oversized_file(self, client, admin_headers):
        oversized = b"\0" * (settings.max_upload_size + 1)

        response = await client.post(
            UPLOAD_URL,
            files={"file": ("big.png", oversized, "image/png")},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "FILE_TOO_LARGE"

    @pytest.mark.asyncio
    async def test_rejects_invalid_folder(self, client, admin_headers, png_bytes):
        response = await client.post(
            UPLOAD_URL,
            files={"file": ("logo.png", png_bytes, "image/png")},
            data={"folder": "../etc"},
            headers=admin_headers,
        )

        assert response.status_code == 400
        assert response.json()["error"]["code"] == "VALIDATION_ERROR"
