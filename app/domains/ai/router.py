"""AI 도메인 라우터

콘텐츠 생성/저장 API(/ai)와 블로그 이미지 생성 API(/admin/blog)를 제공합니다.
모두 관리자 인증이 필요합니다.
"""

from fastapi import APIRouter, Depends, status
from fastapi.responses import StreamingResponse
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.database import get_db
from app.core.dependencies import verify_admin_api_key
from app.core.schemas import APIResponse, create_response
from app.core.storage import S3Client, get_s3_client
from app.domains.ai.drafts.service import GeneratedContentService
from app.domains.ai.generation.service import ContentGenerationService
from app.domains.ai.images.service import ImageGenerationService
from app.domains.ai.images.variants import ImageVariantService
from app.domains.ai.schemas import (
    BlogPostSaveRequest,
    ContentGenerateRequest,
    ContentGenerateResponse,
    ContentRefineRequest,
    ContentRefineResponse,
    ImageGenerateRequest,
    ImageGenerateResponse,
    ImagePromptRequest,
    ImagePromptResponse,
    ImageVariantsRequest,
    ImageVariantsResponse,
    SaveResult,
    ServiceSaveRequest,
)

router = APIRouter(dependencies=[Depends(verify_admin_api_key)])
image_router = APIRouter(dependencies=[Depends(verify_admin_api_key)])


def get_content_generation_service() -> ContentGenerationService:
    """ContentGenerationService 의존성"""
    return ContentGenerationService()


def get_image_generation_service(
    s3_client: S3Client = Depends(get_s3_client),
) -> ImageGenerationService:
    """ImageGenerationService 의존성"""
    return ImageGenerationService(s3_client)


def get_image_variant_service(
    content_service: ContentGenerationService = Depends(get_content_generation_service),
    image_service: ImageGenerationService = Depends(get_image_generation_service),
) -> ImageVariantService:
    """ImageVariantService 의존성"""
    return ImageVariantService(content_service, image_service)


def get_generated_content_service(
    session: AsyncSession = Depends(get_db),
) -> GeneratedContentService:
    """GeneratedContentService 의존성"""
    return GeneratedContentService(session)


@router.post(
    "/content/generate", response_model=APIResponse[ContentGenerateResponse]
)
async def generate_content(
    data: ContentGenerateRequest,
    service: ContentGenerationService = Depends(get_content_generation_service),
):
    """AI 콘텐츠 생성"""
    result = await service.generate(data)
    return create_response(data=result, message="콘텐츠가 생성되었습니다.")


@router.post("/content/stream")
async def stream_content(
    data: ContentGenerateRequest,
    service: ContentGenerationService = Depends(get_content_generation_service),
):
    """AI 콘텐츠 스트리밍 생성 (text/plain 청크)

    첫 청크를 받은 뒤 응답을 시작하므로 시작 전 실패는 에러 응답으로 반환됩니다.
    """
    chunks = service.stream(data)
    try:
        first = await anext(chunks)
    except StopAsyncIteration:
        first = ""

    async def body():
        if first:
            yield first
        async for chunk in chunks:
            yield chunk

    return StreamingResponse(body(), media_type="text/plain; charset=utf-8")


@router.post("/content/refine", response_model=APIResponse[ContentRefineResponse])
async def refine_content(
    data: ContentRefineRequest,
    service: ContentGenerationService = Depends(get_content_generation_service),
):
    """기존 콘텐츠 개선"""
    result = await service.refine(data)
    return create_response(data=result, message="콘텐츠가 개선되었습니다.")


@router.post(
    "/content/save-blog-post",
    response_model=APIResponse[SaveResult],
    status_code=status.HTTP_201_CREATED,
)
async def save_generated_blog_post(
    data: BlogPostSaveRequest,
    service: GeneratedContentService = Depends(get_generated_content_service),
):
    """생성된 게시글 저장 (카테고리/태그 자동 생성)"""
    result = await service.save_blog_post(data)
    return create_response(data=result, message="게시글이 저장되었습니다.")


@router.post(
    "/content/save-service",
    response_model=APIResponse[SaveResult],
    status_code=status.HTTP_201_CREATED,
)
async def save_generated_service(
    data: ServiceSaveRequest,
    service: GeneratedContentService = Depends(get_generated_content_service),
):
    """생성된 서비스를 draft로 저장"""
    result = await service.save_service(data)
    return create_response(data=result, message="서비스가 저장되었습니다.")


@image_router.post(
    "/generate-image", response_model=APIResponse[ImageGenerateResponse]
)
async def generate_image(
    data: ImageGenerateRequest,
    service: ImageGenerationService = Depends(get_image_generation_service),
):
    """블로그 대표 이미지 생성"""
    result = await service.generate(data)
    return create_response(data=result, message="이미지가 생성되었습니다.")


@image_router.post(
    "/generate-image-prompt", response_model=APIResponse[ImagePromptResponse]
)
async def generate_image_prompt(
    data: ImagePromptRequest,
    service: ContentGenerationService = Depends(get_content_generation_service),
):
    """게시글 정보로 이미지 프롬프트 생성"""
    prompt = await service.generate_image_prompt(data)
    return create_response(
        data=ImagePromptResponse(prompt=prompt),
        message="이미지 프롬프트가 생성되었습니다.",
    )


@image_router.post(
    "/generate-image-variants", response_model=APIResponse[ImageVariantsResponse]
)
async def generate_image_variants(
    data: ImageVariantsRequest,
    service: ImageVariantService = Depends(get_image_variant_service),
):
    """게시글 대표 이미지를 스타일별로 동시에 생성

    일부 스타일이 실패해도 200으로 응답하며 실패 사유는 변형별 error에 담깁니다.
    """
    result = await service.generate(data)
    return create_response(
        data=result,
        message=f"이미지 변형 {result.metadata.success_count}개가 생성되었습니다.",
    )
