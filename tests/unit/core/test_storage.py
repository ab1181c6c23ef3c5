"""S3Client 및 업로드 검증 유닛 테스트"""

from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError

from app.core.config import Settings
from app.core.exceptions import ErrorCode, InvalidUploadException, StorageException
from app.core.storage import S3Client, validate_image_upload

MAX_SIZE = 5 * 1024 * 1024


def make_settings(**overrides) -> Settings:
    values = {
        "s3_endpoint": "http://localhost:9000",
        "s3_access_key": "test",
        "s3_secret_key": "test",
        "s3_bucket_media": "media",
        "s3_region": "us-east-1",
        "s3_use_ssl": False,
    }
    values.update(overrides)
    return Settings(**values)


class TestValidateImageUpload:
    """업로드 이미지 검증 테스트"""

    def test_valid_png(self):
        """허용된 PNG 파일"""
        assert validate_image_upload("image/png", "logo.png", 1024, MAX_SIZE) == "png"

    def test_jpeg_accepts_jpg_and_jpeg_extension(self):
        """image/jpeg는 .jpg, .jpeg 확장자 모두 허용"""
        assert validate_image_upload("image/jpeg", "a.jpeg", 10, MAX_SIZE) == "jpg"
        assert validate_image_upload("image/jpeg", "a.JPG", 10, MAX_SIZE) == "jpg"

    def test_rejects_disallowed_type(self):
        """허용되지 않은 MIME 타입"""
        with pytest.raises(InvalidUploadException) as exc_info:
            validate_image_upload("application/pdf", "doc.pdf", 10, MAX_SIZE)

        assert exc_info.value.error_code == ErrorCode.INVALID_FILE_TYPE
        assert exc_info.value.status_code == 400

    def test_rejects_missing_type(self):
        """MIME 타입 누락"""
        with pytest.raises(InvalidUploadException):
            validate_image_upload(None, "a.png", 10, MAX_SIZE)

    def test_rejects_oversized_file(self):
        """최대 크기 초과"""
        with pytest.raises(InvalidUploadException) as exc_info:
            validate_image_upload("image/png", "a.png", MAX_SIZE + 1, MAX_SIZE)

        assert exc_info.value.error_code == ErrorCode.FILE_TOO_LARGE
        assert exc_info.value.detail_info["max_size"] == MAX_SIZE

    def test_rejects_extension_mismatch(self):
        """MIME 타입과 확장자 불일치"""
        with pytest.raises(InvalidUploadException) as exc_info:
            validate_image_upload("image/png", "photo.jpg", 10, MAX_SIZE)

        assert exc_info.value.error_code == ErrorCode.INVALID_FILE_TYPE

    def test_rejects_missing_extension(self):
        """확장자 없는 파일명"""
        with pytest.raises(InvalidUploadException):
            validate_image_upload("image/webp", "image", 10, MAX_SIZE)


class TestS3ClientUrls:
    """객체 키/URL 생성 테스트"""

    def test_build_object_key(self):
        """{folder}/{uuid}.{ext} 형식"""
        key = S3Client.build_object_key("/blog/", "png")

        folder, name = key.split("/")
        assert folder == "blog"
        assert name.endswith(".png")
        assert len(name) == 32 + len(".png")

    def test_build_object_key_defaults_folder(self):
        """빈 폴더는 uploads로 대체"""
        assert S3Client.build_object_key("", "gif").startswith("uploads/")

    def test_build_object_key_is_unique(self):
        """같은 폴더라도 매번 다른 키"""
        assert S3Client.build_object_key("a", "png") != S3Client.build_object_key(
            "a", "png"
        )

    def test_get_file_url_path_style(self):
        """MinIO endpoint는 path-style URL"""
        client = S3Client(make_settings())

        assert (
            client.get_file_url("blog/a.png")
            == "http://localhost:9000/media/blog/a.png"
        )

    def test_get_file_url_public_base_url(self):
        """공개 base URL이 있으면 우선 사용"""
        client = S3Client(make_settings(s3_public_base_url="https://cdn.example.com/"))

        assert client.get_file_url("blog/a.png") == "https://cdn.example.com/blog/a.png"

    def test_get_file_url_aws_virtual_hosted(self):
        """endpoint가 없으면 AWS virtual-hosted-style URL"""
        client = S3Client(
            make_settings(s3_endpoint=None, s3_region="ap-northeast-2", s3_use_ssl=True)
        )

        assert (
            client.get_file_url("a.png")
            == "https://media.s3.ap-northeast-2.amazonaws.com/a.png"
        )

    def test_object_key_from_url(self):
        """이 버킷 URL에서 객체 키 추출"""
        client = S3Client(make_settings())
        url = client.get_file_url("gallery/x.webp")

        assert client.object_key_from_url(url) == "gallery/x.webp"

    def test_object_key_from_external_url(self):
        """외부 URL은 None"""
        client = S3Client(make_settings())

        assert client.object_key_from_url("https://other.example.com/x.png") is None


class TestS3ClientErrors:
    """S3 오류 변환 테스트"""

    def _client_error(self, operation: str) -> ClientError:
        return ClientError(
            {"Error": {"Code": "500", "Message": "boom"}}, operation
        )

    def test_upload_failure_raises_storage_exception(self):
        """업로드 실패는 StorageException"""
        client = S3Client(make_settings())
        client.client = MagicMock()
        client.client.put_object.side_effect = self._client_error("PutObject")

        with pytest.raises(StorageException) as exc_info:
            client.upload_file(b"data", "blog/a.png", "image/png")

        assert exc_info.value.error_code == ErrorCode.S3_UPLOAD_FAILED
        assert exc_info.value.status_code == 500

    def test_upload_success_returns_url(self):
        """업로드 성공 시 공개 URL 반환"""
        client = S3Client(make_settings())
        client.client = MagicMock()

        url = client.upload_file(b"data", "blog/a.png", "image/png")

        assert url == "http://localhost:9000/media/blog/a.png"
        client.client.put_object.assert_called_once()

    def test_delete_failure_raises_storage_exception(self):
        """삭제 실패는 StorageException"""
        client = S3Client(make_settings())
        client.client = MagicMock()
        client.client.delete_object.side_effect = self._client_error("DeleteObject")

        with pytest.raises(StorageException) as exc_info:
            client.delete_file("blog/a.png")

        assert exc_info.value.error_code == ErrorCode.S3_DELETE_FAILED
