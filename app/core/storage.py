"""S3/MinIO Storage 서비스

이미지 등 미디어 파일 업로드/삭제를 위한 S3 클라이언트
"""

import uuid
from functools import lru_cache
from typing import Optional

import boto3
from botocore.client import Config
from botocore.exceptions import ClientError

from app.core.config import Settings, settings
from app.core.exceptions import (
    ErrorCode,
    InvalidUploadException,
    StorageException,
)
from app.core.logging import get_logger

logger = get_logger(__name__)

ALLOWED_IMAGE_TYPES = {
    "image/jpeg": "jpg",
    "image/jpg": "jpg",
    "image/png": "png",
    "image/webp": "webp",
    "image/gif": "gif",
}


def validate_image_upload(
    content_type: Optional[str],
    file_name: Optional[str],
    file_size: int,
    max_size: int,
) -> str:
    """업로드 이미지 검증

    Args:
        content_type: MIME 타입
        file_name: 원본 파일명
        file_size: 파일 크기 (bytes)
        max_size: 최대 크기 (bytes)

    Returns:
        저장에 사용할 확장자

    Raises:
        InvalidUploadException: 허용되지 않은 타입, 크기 초과, 확장자 불일치
    """
    extension = ALLOWED_IMAGE_TYPES.get(content_type or "")
    if extension is None:
        raise InvalidUploadException(
            message=(
                "허용되지 않은 파일 형식입니다. "
                f"(허용: {', '.join(ALLOWED_IMAGE_TYPES)})"
            ),
            error_code=ErrorCode.INVALID_FILE_TYPE,
            detail={"content_type": content_type},
        )

    if file_size > max_size:
        raise InvalidUploadException(
            message=(
                "파일 크기가 제한을 초과했습니다. "
                f"(최대: {max_size / 1024 / 1024:.0f}MB)"
            ),
            error_code=ErrorCode.FILE_TOO_LARGE,
            detail={"file_size": file_size, "max_size": max_size},
        )

    file_extension = ""
    if file_name and "." in file_name:
        file_extension = file_name.rsplit(".", 1)[1].lower()
    valid = file_extension == extension or (
        extension == "jpg" and file_extension in ("jpg", "jpeg")
    )
    if not valid:
        raise InvalidUploadException(
            message="파일 확장자가 파일 형식과 일치하지 않습니다.",
            error_code=ErrorCode.INVALID_FILE_TYPE,
            detail={"content_type": content_type, "file_name": file_name},
        )

    return extension


class S3Client:
    """S3/MinIO 클라이언트

    미디어 파일을 S3 또는 MinIO에 업로드/삭제합니다.
    """

    def __init__(self, settings: Settings):
        """S3 클라이언트 초기화

        Args:
            settings: 애플리케이션 설정
        """
        self.settings = settings
        self.bucket = settings.s3_bucket_media

        self.client = boto3.client(
            "s3",
            endpoint_url=settings.s3_endpoint,
            aws_access_key_id=settings.s3_access_key,
            aws_secret_access_key=settings.s3_secret_key,
            region_name=settings.s3_region,
            config=Config(
                signature_version="s3v4",
                s3={"addressing_style": "path"},  # MinIO 호환
            ),
            use_ssl=settings.s3_use_ssl,
        )

        logger.info(
            "S3 Client initialized",
            extra={
                "endpoint": settings.s3_endpoint,
                "bucket": self.bucket,
                "region": settings.s3_region,
            },
        )

    @staticmethod
    def build_object_key(folder: str, extension: str) -> str:
        """충돌 없는 객체 키 생성 ({folder}/{uuid}.{ext})"""
        clean_folder = folder.strip("/") or "uploads"
        return f"{clean_folder}/{uuid.uuid4().hex}.{extension}"

    def upload_file(
        self, file_content: bytes, object_key: str, content_type: str
    ) -> str:
        """파일을 S3에 업로드

        Args:
            file_content: 파일 내용 (bytes)
            object_key: S3 객체 키
            content_type: MIME 타입

        Returns:
            업로드된 객체의 공개 URL

        Raises:
            StorageException: S3 업로드 실패 시
        """
        try:
            self.client.put_object(
                Bucket=self.bucket,
                Key=object_key,
                Body=file_content,
                ContentType=content_type,
                Metadata={"content_length": str(len(file_content))},
            )
        except ClientError as e:
            logger.exception(
                "S3 upload failed",
                extra={
                    "bucket": self.bucket,
                    "key": object_key,
                    "error": str(e),
                },
            )
            raise StorageException(
                message="파일 업로드에 실패했습니다.",
                error_code=ErrorCode.S3_UPLOAD_FAILED,
                detail={"key": object_key, "error": str(e)},
            )

        logger.info(
            "File uploaded to S3",
            extra={
                "bucket": self.bucket,
                "key": object_key,
                "size": len(file_content),
            },
        )
        return self.get_file_url(object_key)

    def delete_file(self, object_key: str) -> None:
        """S3 객체 삭제

        Raises:
            StorageException: S3 삭제 실패 시
        """
        try:
            self.client.delete_object(Bucket=self.bucket, Key=object_key)
        except ClientError as e:
            logger.exception(
                "S3 delete failed",
                extra={"bucket": self.bucket, "key": object_key},
            )
            raise StorageException(
                message="파일 삭제에 실패했습니다.",
                error_code=ErrorCode.S3_DELETE_FAILED,
                detail={"key": object_key, "error": str(e)},
            )

    def get_file_url(self, object_key: str) -> str:
        """S3 객체 URL 생성

        Args:
            object_key: S3 객체 키

        Returns:
            S3 객체 URL
        """
        if self.settings.s3_public_base_url:
            base = self.settings.s3_public_base_url.rstrip("/")
            return f"{base}/{object_key}"

        protocol = "https" if self.settings.s3_use_ssl else "http"

        # MinIO는 path-style, AWS S3는 virtual-hosted-style
        endpoint = self.settings.s3_endpoint
        if endpoint:
            clean_endpoint = endpoint.replace("http://", "").replace(
                "https://", ""
            )
            return f"{protocol}://{clean_endpoint}/{self.bucket}/{object_key}"

        region = self.settings.s3_region
        if region == "us-east-1":
            host = f"{self.bucket}.s3.amazonaws.com"
        else:
            host = f"{self.bucket}.s3.{region}.amazonaws.com"
        return f"{protocol}://{host}/{object_key}"

    def object_key_from_url(self, url: str) -> Optional[str]:
        """이 버킷의 객체 URL에서 객체 키 추출 (외부 URL이면 None)"""
        prefix = self.get_file_url("")
        if url.startswith(prefix):
            return url[len(prefix):] or None
        return None


@lru_cache
def _create_s3_client() -> S3Client:
    """S3 클라이언트 싱글톤 생성 (캐시됨)"""
    return S3Client(settings)


def get_s3_client() -> S3Client:
    """FastAPI DI용 S3 클라이언트 의존성"""
    return _create_s3_client()
