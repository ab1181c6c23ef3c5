"""대표 이미지 스타일 변형 생성

게시글로 프롬프트를 한 번 만든 뒤 스타일별 이미지를 동시에 생성합니다.
동시 생성 수는 MAX_CONCURRENT_GENERATIONS로 제한하고, 한 변형의 실패는
다른 변형에 영향을 주지 않습니다.
"""

import asyncio

from app.core.context import get_request_id
from app.core.exceptions import BaseAPIException
from app.core.logging import get_logger
from app.core.utils.time import measure_time
from app.domains.ai.exceptions import AINotConfiguredException
from app.domains.ai.generation.service import ContentGenerationService
from app.domains.ai.images.service import ImageGenerationService
from app.domains.ai.schemas import (
    ImageGenerateRequest,
    ImagePromptRequest,
    ImageVariant,
    ImageVariantsMetadata,
    ImageVariantsRequest,
    ImageVariantsResponse,
)
from app.domains.ai.types import ImageModel, ImageStyle

logger = get_logger(__name__)

MAX_CONCURRENT_GENERATIONS = 3
VARIANT_TIMEOUT_SECONDS = 180

LANDSCAPE_SIZES = {
    ImageModel.DALL_E_3: "1792x1024",
    ImageModel.GPT_IMAGE_1: "1536x1024",
}


class ImageVariantService:
    """스타일별 대표 이미지 변형 생성 서비스"""

    def __init__(
        self,
        content_service: ContentGenerationService,
        image_service: ImageGenerationService,
        max_concurrency: int = MAX_CONCURRENT_GENERATIONS,
        timeout_seconds: float = VARIANT_TIMEOUT_SECONDS,
    ):
        self.content_service = content_service
        self.image_service = image_service
        self.max_concurrency = max_concurrency
        self.timeout_seconds = timeout_seconds

    def _request_for(
        self, data: ImageVariantsRequest, prompt: str, style: ImageStyle
    ) -> ImageGenerateRequest:
        model = data.model or ImageModel(
            self.image_service.settings.llm_image_default_model
        )
        return ImageGenerateRequest(
            prompt=prompt,
            style=style,
            size=data.size or LANDSCAPE_SIZES[model],
            quality=data.quality,
            model=model,
        )

    async def _generate_one(
        self,
        semaphore: asyncio.Semaphore,
        data: ImageVariantsRequest,
        prompt: str,
        style: ImageStyle,
    ) -> ImageVariant:
        async with semaphore:
            try:
                image = await asyncio.wait_for(
                    self.image_service.generate(self._request_for(data, prompt, style)),
                    timeout=self.timeout_seconds,
                )
            except asyncio.TimeoutError:
                logger.warning(
                    "Image variant timed out",
                    extra={"request_id": get_request_id(), "style": style.value},
                )
                return ImageVariant(
                    style=style, prompt=prompt, error="이미지 생성 시간이 초과되었습니다."
                )
            except BaseAPIException as e:
                logger.warning(
                    "Image variant failed",
                    extra={
                        "request_id": get_request_id(),
                        "style": style.value,
                        "error_code": e.error_code,
                    },
                )
                return ImageVariant(style=style, prompt=prompt, error=e.message)

        return ImageVariant(style=style, prompt=prompt, image=image)

    async def generate(self, data: ImageVariantsRequest) -> ImageVariantsResponse:
        """스타일별 이미지 변형 생성

        Raises:
            AINotConfiguredException: API 키 미설정
            InvalidImageParamsException: 크기/품질 조합 오류 (400)
            ContentGenerationFailedException: 프롬프트 생성 실패
        """
        # 스타일과 무관하게 크기/품질 조합은 같으므로 한 번만 검증
        self.image_service.validate(self._request_for(data, "-", data.styles[0]))
        if not self.image_service.is_configured():
            raise AINotConfiguredException()

        with measure_time() as timer:
            prompt = await self.content_service.generate_image_prompt(
                ImagePromptRequest(
                    title=data.title, excerpt=data.excerpt, content=data.content
                )
            )
            semaphore = asyncio.Semaphore(self.max_concurrency)
            variants = await asyncio.gather(
                *(
                    self._generate_one(semaphore, data, prompt, style)
                    for style in data.styles
                )
            )

        success_count = sum(1 for v in variants if v.image is not None)
        metadata = ImageVariantsMetadata(
            total_generation_time_ms=int(timer["elapsed_ms"]),
            success_count=success_count,
            error_count=len(variants) - success_count,
        )
        logger.info(
            "Image variants generated",
            extra={
                "request_id": get_request_id(),
                "styles": [s.value for s in data.styles],
                "success_count": metadata.success_count,
                "error_count": metadata.error_count,
                "elapsed_ms": metadata.total_generation_time_ms,
            },
        )
        return ImageVariantsResponse(variants=list(variants), metadata=metadata)
