"""Uploads 도메인 라우터 (관리자)"""

from fastapi import APIRouter, Depends, File, Form, UploadFile, status

from app.core.dependencies import verify_admin_api_key
from app.core.schemas import APIResponse, create_response
from app.core.storage import S3Client, get_s3_client
from app.domains.uploads.schemas import UploadResponse
from app.domains.uploads.service import DEFAULT_FOLDER, UploadService

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])


def get_upload_service(
    s3_client: S3Client = Depends(get_s3_client),
) -> UploadService:
    """UploadService 의존성"""
    return UploadService(s3_client)


@router.post(
    "",
    response_model=APIResponse[UploadResponse],
    status_code=status.HTTP_201_CREATED,
)
async def upload_file(
    file: UploadFile = File(..., description="이미지 파일"),
    folder: str = Form(DEFAULT_FOLDER, max_length=100, pattern=r"^[\w\-/]+$"),
    service: UploadService = Depends(get_upload_service),
):
    """이미지 업로드 (jpeg, png, webp, gif / 최대 5MB)"""
    content = await file.read()
    result = await service.upload_image(
        content=content,
        file_name=file.filename,
        content_type=file.content_type,
        folder=folder,
    )
    return create_response(data=result, message="파일을 업로드했습니다.")
