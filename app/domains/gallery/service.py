"""Gallery 도메인 서비스

이미지 업로드/관리, 그룹 관리, 공개 갤러리 조회를 담당합니다.
"""

import asyncio
import json
import uuid
from typing import Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.core.context import get_request_id
from app.core.exceptions import EmptyIdListException, StorageException
from app.core.logging import get_logger
from app.core.storage import S3Client, get_s3_client, validate_image_upload
from app.core.utils.datetime import now_utc
from app.core.utils.pagination import SortOrder
from app.core.utils.slug import slugify
from app.domains.gallery.exceptions import (
    GalleryGroupConflictException,
    GalleryGroupNotFoundException,
    GalleryImageNotFoundException,
    GalleryImagesNotFoundException,
    InvalidBulkOperationException,
    InvalidGroupIdsException,
)
from app.domains.gallery.models import GalleryGroup, GalleryImage, GalleryImageGroup
from app.domains.gallery.repository import (
    GalleryGroupRepository,
    GalleryImageFilters,
    GalleryImageRepository,
)
from app.domains.gallery.schemas import (
    BulkImageOperation,
    GalleryGroupCreateRequest,
    GalleryGroupUpdateRequest,
    GalleryImageUpdateRequest,
)

logger = get_logger(__name__)

GALLERY_FOLDER = "gallery"

BULK_OPERATION_COLUMNS = {
    BulkImageOperation.AVAILABILITY.value: "is_available",
    BulkImageOperation.FEATURED.value: "is_featured",
}


def parse_group_ids(raw: Optional[str]) -> list[uuid.UUID]:
    """multipart의 group_ids(JSON 배열 문자열) 파싱

    Raises:
        InvalidGroupIdsException: JSON 배열이 아니거나 UUID가 아닌 값이 있는 경우
    """
    if raw is None or not raw.strip():
        return []
    try:
        values = json.loads(raw)
    except json.JSONDecodeError:
        raise InvalidGroupIdsException("JSON 배열 형식이 아닙니다.")
    if not isinstance(values, list):
        raise InvalidGroupIdsException("JSON 배열 형식이 아닙니다.")

    try:
        ids = [uuid.UUID(str(value)) for value in values]
    except ValueError:
        raise InvalidGroupIdsException("UUID 형식이 아닌 값이 있습니다.")
    return list(dict.fromkeys(ids))


class GalleryService:
    """갤러리 서비스"""

    def __init__(self, session: AsyncSession, s3_client: Optional[S3Client] = None):
        self.session = session
        self.image_repository = GalleryImageRepository(session)
        self.group_repository = GalleryGroupRepository(session)
        self._s3_client = s3_client

    @property
    def s3_client(self) -> S3Client:
        if self._s3_client is None:
            self._s3_client = get_s3_client()
        return self._s3_client

    async def _build_group_links(
        self, group_ids: list[uuid.UUID]
    ) -> list[GalleryImageGroup]:
        found = {g.id: g for g in await self.group_repository.get_by_ids(group_ids)}
        missing = [str(gid) for gid in group_ids if gid not in found]
        if missing:
            raise InvalidGroupIdsException(
                f"존재하지 않는 그룹입니다 ({', '.join(missing)})"
            )
        return [
            GalleryImageGroup(
                group_id=group_id, group=found[group_id], display_order=index
            )
            for index, group_id in enumerate(group_ids)
        ]

    async def _remove_stored_files(self, images: Sequence[GalleryImage]) -> None:
        """저장소 파일 삭제 (실패는 로그만 남김)"""
        for image in images:
            for url in (image.original_url, image.thumbnail_url, image.optimized_url):
                if not url:
                    continue
                key = self.s3_client.object_key_from_url(url)
                if key is None:
                    continue
                try:
                    await asyncio.to_thread(self.s3_client.delete_file, key)
                except StorageException as e:
                    logger.warning(
                        f"Gallery file cleanup failed: {e.message}",
                        extra={"request_id": get_request_id(), "key": key},
                    )

    # 이미지

    async def list_images(
        self,
        offset: int = 0,
        limit: int = 20,
        filters: Optional[GalleryImageFilters] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[Sequence[GalleryImage], int]:
        """이미지 목록 조회 (그룹 포함)"""
        images = await self.image_repository.get_list(
            offset=offset,
            limit=limit,
            filters=filters,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        total = await self.image_repository.count(filters)
        return images, total

    async def get_image(self, image_id: uuid.UUID) -> GalleryImage:
        """이미지 조회

        Raises:
            GalleryImageNotFoundException: 이미지가 없는 경우
        """
        image = await self.image_repository.get_by_id(image_id)
        if image is None:
            raise GalleryImageNotFoundException(image_id)
        return image

    async def upload_image(
        self,
        content: bytes,
        file_name: Optional[str],
        content_type: Optional[str],
        name: str,
        alt_text: str,
        description: Optional[str] = None,
        group_ids: Optional[list[uuid.UUID]] = None,
        is_available: bool = True,
        is_featured: bool = False,
    ) -> GalleryImage:
        """이미지 업로드 및 등록

        파일은 gallery/<uuid>.<ext> 키로 저장됩니다.

        Raises:
            InvalidUploadException: 파일 형식, 크기, 확장자 검증 실패
            InvalidGroupIdsException: 존재하지 않는 그룹
            StorageException: 저장소 업로드 실패
        """
        extension = validate_image_upload(
            content_type, file_name, len(content), settings.max_upload_size
        )
        links = await self._build_group_links(group_ids or [])

        object_key = S3Client.build_object_key(GALLERY_FOLDER, extension)
        url = await asyncio.to_thread(
            self.s3_client.upload_file, content, object_key, str(content_type)
        )

        image = GalleryImage(
            name=name,
            alt_text=alt_text,
            description=description,
            file_name=file_name or object_key.rsplit("/", 1)[-1],
            original_url=url,
            file_size=len(content),
            mime_type=str(content_type),
            is_available=is_available,
            is_featured=is_featured,
            image_metadata={
                "object_key": object_key,
                "uploaded_at": now_utc().isoformat(),
            },
        )
        image.group_links = links
        image = await self.image_repository.create(image)

        logger.info(
            "Gallery image uploaded",
            extra={
                "request_id": get_request_id(),
                "image_id": str(image.id),
                "key": object_key,
                "size": len(content),
            },
        )
        return image

    async def update_image(
        self, image_id: uuid.UUID, data: GalleryImageUpdateRequest
    ) -> GalleryImage:
        """이미지 정보 수정 (group_ids가 있으면 그룹 연결 교체)"""
        image = await self.get_image(image_id)
        update_data = data.model_dump(exclude_unset=True)
        group_ids = update_data.pop("group_ids", None)

        for field, value in update_data.items():
            if value is None and field != "description":
                continue
            setattr(image, field, value)

        if group_ids is not None:
            image.group_links = await self._build_group_links(
                list(dict.fromkeys(group_ids))
            )

        return await self.image_repository.update(image)

    async def delete_image(self, image_id: uuid.UUID) -> None:
        """이미지 삭제 (저장소 파일 정리 포함)"""
        image = await self.get_image(image_id)
        await self.image_repository.delete(image)
        await self._remove_stored_files([image])
        logger.info(
            "Gallery image deleted",
            extra={"request_id": get_request_id(), "image_id": str(image_id)},
        )

    async def bulk_update(
        self, image_ids: list[uuid.UUID], operation: str, value: bool
    ) -> int:
        """이미지 벌크 변경 (availability, featured)

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
            InvalidBulkOperationException: 지원하지 않는 작업
            GalleryImagesNotFoundException: 변경된 이미지가 없는 경우
        """
        if not image_ids:
            raise EmptyIdListException()
        column = BULK_OPERATION_COLUMNS.get(operation)
        if column is None:
            raise InvalidBulkOperationException(
                operation, list(BULK_OPERATION_COLUMNS)
            )

        updated = await self.image_repository.update_flag_batch(
            image_ids, column, value
        )
        if updated == 0:
            raise GalleryImagesNotFoundException()

        logger.info(
            "Gallery images bulk updated",
            extra={
                "request_id": get_request_id(),
                "operation": operation,
                "updated": updated,
            },
        )
        return updated

    async def bulk_delete(self, image_ids: list[uuid.UUID]) -> int:
        """이미지 벌크 삭제

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
            GalleryImagesNotFoundException: 대상 이미지가 없는 경우
        """
        if not image_ids:
            raise EmptyIdListException()

        images = await self.image_repository.get_by_ids(image_ids)
        if not images:
            raise GalleryImagesNotFoundException()

        deleted = await self.image_repository.delete_batch([i.id for i in images])
        await self._remove_stored_files(images)

        logger.info(
            "Gallery images deleted",
            extra={"request_id": get_request_id(), "deleted": deleted},
        )
        return deleted

    # 그룹

    async def list_groups(
        self, active_only: bool = False
    ) -> list[tuple[GalleryGroup, int]]:
        """그룹 목록 (이미지 수 포함)"""
        return await self.group_repository.get_all_with_image_counts(active_only)

    async def get_group(self, group_id: uuid.UUID) -> GalleryGroup:
        """그룹 조회

        Raises:
            GalleryGroupNotFoundException: 그룹이 없는 경우
        """
        group = await self.group_repository.get_by_id(group_id)
        if group is None:
            raise GalleryGroupNotFoundException(group_id=group_id)
        return group

    async def _validate_cover(self, cover_image_id: Optional[uuid.UUID]) -> None:
        if cover_image_id and not await self.image_repository.get_by_id(
            cover_image_id
        ):
            raise GalleryImageNotFoundException(cover_image_id)

    async def create_group(self, data: GalleryGroupCreateRequest) -> GalleryGroup:
        """그룹 생성

        Raises:
            GalleryGroupConflictException: 슬러그 중복 (409)
        """
        slug = slugify(data.slug or data.name) or "untitled"
        if await self.group_repository.slug_exists(slug):
            raise GalleryGroupConflictException(slug)
        await self._validate_cover(data.cover_image_id)

        group = await self.group_repository.create(
            GalleryGroup(
                name=data.name,
                slug=slug,
                description=data.description,
                cover_image_id=data.cover_image_id,
                display_order=data.display_order,
                is_active=data.is_active,
            )
        )
        logger.info(
            "Gallery group created",
            extra={"request_id": get_request_id(), "group_id": str(group.id)},
        )
        return group

    async def update_group(
        self, group_id: uuid.UUID, data: GalleryGroupUpdateRequest
    ) -> GalleryGroup:
        """그룹 수정"""
        group = await self.get_group(group_id)
        update_data = data.model_dump(exclude_unset=True)

        if update_data.get("slug"):
            slug = slugify(update_data["slug"]) or group.slug
            if await self.group_repository.slug_exists(slug, exclude_id=group_id):
                raise GalleryGroupConflictException(slug)
            update_data["slug"] = slug
        if "cover_image_id" in update_data:
            await self._validate_cover(update_data["cover_image_id"])

        for field, value in update_data.items():
            if value is None and field not in ("description", "cover_image_id"):
                continue
            setattr(group, field, value)

        return await self.group_repository.update(group)

    async def delete_group(self, group_id: uuid.UUID) -> None:
        """그룹 삭제 (이미지는 유지, 연결만 삭제)"""
        group = await self.get_group(group_id)
        await self.group_repository.delete(group)
        logger.info(
            "Gallery group deleted",
            extra={"request_id": get_request_id(), "group_id": str(group_id)},
        )

    # 공개

    async def list_public_images(
        self,
        offset: int = 0,
        limit: int = 20,
        featured: Optional[bool] = None,
        group_slug: Optional[str] = None,
    ) -> tuple[Sequence[GalleryImage], int]:
        """공개 이미지 목록 (정렬 순서, 최신순)"""
        filters = GalleryImageFilters(
            is_available=True,
            is_featured=featured or None,
            group_slug=group_slug,
        )
        return await self.list_images(
            offset=offset,
            limit=limit,
            filters=filters,
            sort_by="display_order",
            sort_order=SortOrder.ASC,
        )

    async def get_public_group(
        self, slug: str
    ) -> tuple[GalleryGroup, Sequence[GalleryImage]]:
        """활성 그룹과 공개 이미지 (그룹 내 순서)

        Raises:
            GalleryGroupNotFoundException: 없거나 비활성 그룹
        """
        group = await self.group_repository.get_by_slug(slug, active_only=True)
        if group is None:
            raise GalleryGroupNotFoundException(slug=slug)
        images = await self.image_repository.get_available_in_group(group.id)
        return group, images
