"""AI 이미지 생성 서비스

모델별 크기/품질을 검증하고 스타일 문구를 덧붙여 이미지를 생성합니다.
base64로 반환된 이미지는 오브젝트 스토리지에 올려 URL로 제공합니다.
"""

import asyncio
import base64
import binascii
from typing import Optional

from app.core.config import Settings, settings
from app.core.context import get_request_id
from app.core.exceptions import StorageException
from app.core.llm import ImageResult, aimage_generation_raw, get_observe_decorator
from app.core.llm.types import LLMProviderError
from app.core.logging import get_logger
from app.core.storage import S3Client
from app.domains.ai.exceptions import (
    AINotConfiguredException,
    ImageGenerationFailedException,
    InvalidImageParamsException,
)
from app.domains.ai.schemas import ImageGenerateRequest, ImageGenerateResponse
from app.domains.ai.types import IMAGE_QUALITIES, IMAGE_SIZES, ImageModel, ImageStyle

logger = get_logger(__name__)
observe = get_observe_decorator()

GENERATED_IMAGE_FOLDER = "ai-generated"

DEFAULT_QUALITY = {
    ImageModel.DALL_E_3: "standard",
    ImageModel.GPT_IMAGE_1: "auto",
}

STYLE_GUIDES = {
    ImageStyle.PHOTOGRAPHIC: "Professional photography, realistic, high detail",
    ImageStyle.ILLUSTRATION: "Modern digital illustration, clean lines, vibrant colors",
    ImageStyle.MINIMALIST: "Minimalist design, simple shapes, generous negative space",
    ImageStyle.ABSTRACT: "Abstract art, geometric forms, bold color composition",
    ImageStyle.TECHNICAL: "Technical diagram style, precise, blueprint aesthetic",
    ImageStyle.CORPORATE: "Corporate visual, polished, business-appropriate",
}

FEATURED_IMAGE_SUFFIX = (
    "Ensure the image is suitable for use as a blog post featured image, "
    "with no text or typography overlays."
)


def resolve_image_params(
    data: ImageGenerateRequest, default_model: str
) -> tuple[ImageModel, str, str]:
    """모델/크기/품질 조합 검증

    Returns:
        (모델, 크기, 품질)

    Raises:
        InvalidImageParamsException: 모델이 지원하지 않는 크기나 품질
    """
    model = data.model or ImageModel(default_model)

    sizes = IMAGE_SIZES[model]
    if data.size not in sizes:
        raise InvalidImageParamsException(model.value, "size", data.size, list(sizes))

    quality = data.quality or DEFAULT_QUALITY[model]
    qualities = IMAGE_QUALITIES[model]
    if quality not in qualities:
        raise InvalidImageParamsException(
            model.value, "quality", quality, list(qualities)
        )
    return model, data.size, quality


def build_styled_prompt(prompt: str, style: Optional[ImageStyle]) -> str:
    """스타일 문구를 붙인 최종 프롬프트"""
    if style is None:
        return prompt
    return f"{STYLE_GUIDES[style]}. {prompt.rstrip('.')}. {FEATURED_IMAGE_SUFFIX}"


class ImageGenerationService:
    """AI 이미지 생성 서비스"""

    def __init__(
        self,
        s3_client: Optional[S3Client] = None,
        app_settings: Settings = settings,
    ):
        self.s3_client = s3_client
        self.settings = app_settings

    def is_configured(self) -> bool:
        """이미지 생성 API 키 설정 여부"""
        return bool(self.settings.openai_api_key) and (
            self.settings.openai_api_key != "sk-your-openai-key-here"
        )

    def validate(self, data: ImageGenerateRequest) -> tuple[ImageModel, str, str]:
        """요청의 모델/크기/품질 조합 검증 (기본 모델 적용)"""
        return resolve_image_params(data, self.settings.llm_image_default_model)

    async def _store_base64(self, encoded: str) -> Optional[str]:
        """base64 이미지를 스토리지에 업로드 (실패 시 None)"""
        if self.s3_client is None:
            return None
        try:
            content = base64.b64decode(encoded)
        except (binascii.Error, ValueError):
            logger.warning(
                "Generated image is not valid base64",
                extra={"request_id": get_request_id()},
            )
            return None

        object_key = S3Client.build_object_key(GENERATED_IMAGE_FOLDER, "png")
        try:
            return await asyncio.to_thread(
                self.s3_client.upload_file, content, object_key, "image/png"
            )
        except StorageException:
            logger.warning(
                "Generated image upload failed, returning base64",
                extra={"request_id": get_request_id(), "key": object_key},
            )
            return None

    @observe(name="generate_image")
    async def generate(self, data: ImageGenerateRequest) -> ImageGenerateResponse:
        """이미지 생성

        Raises:
            InvalidImageParamsException: 크기/품질 조합 오류 (400)
            AINotConfiguredException: API 키 미설정
            ImageGenerationFailedException: 프로바이더 호출 실패
        """
        model, size, quality = self.validate(data)
        if not self.is_configured():
            raise AINotConfiguredException()

        prompt = build_styled_prompt(data.prompt, data.style)
        try:
            result: ImageResult = await aimage_generation_raw(
                model=model.value, prompt=prompt, size=size, quality=quality
            )
        except LLMProviderError as e:
            raise ImageGenerationFailedException(
                model.value, e.detail_info.get("error")
            )

        url = result.url
        encoded = result.base64
        if not url and encoded:
            url = await self._store_base64(encoded)
            if url:
                encoded = None

        logger.info(
            "Image generated",
            extra={
                "request_id": get_request_id(),
                "model": model.value,
                "size": size,
                "stored": bool(url) and not result.url,
            },
        )

        return ImageGenerateResponse(
            url=url,
            base64=encoded,
            revised_prompt=result.revised_prompt or prompt,
            model=model.value,
            size=size,
        )
