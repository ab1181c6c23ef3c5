"""Uploads 도메인 서비스"""

import asyncio
from typing import Optional

from app.core.config import settings
from app.core.context import get_request_id
from app.core.logging import get_logger
from app.core.storage import S3Client, validate_image_upload
from app.domains.uploads.schemas import UploadResponse

logger = get_logger(__name__)

DEFAULT_FOLDER = "uploads"


class UploadService:
    """이미지 업로드 서비스 (블로그 본문, 서비스 이미지 등)"""

    def __init__(self, s3_client: S3Client, max_size: Optional[int] = None):
        self.s3_client = s3_client
        self.max_size = max_size or settings.max_upload_size

    async def upload_image(
        self,
        content: bytes,
        file_name: Optional[str],
        content_type: Optional[str],
        folder: str = DEFAULT_FOLDER,
    ) -> UploadResponse:
        """이미지 검증 후 저장소에 업로드

        Args:
            content: 파일 내용
            file_name: 원본 파일명
            content_type: MIME 타입
            folder: 저장 폴더 (기본: uploads)

        Raises:
            InvalidUploadException: 형식, 크기, 확장자 검증 실패
            StorageException: 업로드 실패
        """
        extension = validate_image_upload(
            content_type, file_name, len(content), self.max_size
        )
        object_key = S3Client.build_object_key(folder or DEFAULT_FOLDER, extension)
        url = await asyncio.to_thread(
            self.s3_client.upload_file, content, object_key, str(content_type)
        )

        logger.info(
            "Media uploaded",
            extra={
                "request_id": get_request_id(),
                "key": object_key,
                "size": len(content),
            },
        )
        return UploadResponse(
            url=url,
            pathname=object_key,
            size=len(content),
            content_type=str(content_type),
        )
