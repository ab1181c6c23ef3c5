"""LiteLLM 기반 LLM 프로바이더 래퍼

이 모듈은 LiteLLM을 직접 호출하는 유일한 곳입니다.
"""

import os
from typing import Any, AsyncGenerator, Optional

from litellm import acompletion, aimage_generation

from app.core.config import settings
from app.core.llm.types import (
    ImageResult,
    LLMMessage,
    LLMProviderError,
    LLMResult,
)
from app.core.logging import get_logger

logger = get_logger(__name__)


def _setup_api_keys() -> None:
    """환경 변수에 API 키 설정 (LiteLLM이 자동으로 읽음)"""
    os.environ["OPENAI_API_KEY"] = settings.openai_api_key
    os.environ["ANTHROPIC_API_KEY"] = settings.anthropic_api_key


# 모듈 로드 시 API 키 설정
_setup_api_keys()


async def acompletion_raw(
    model: str,
    messages: list[LLMMessage],
    temperature: float = 0.7,
    max_tokens: Optional[int] = None,
    **kwargs,
) -> LLMResult:
    """LiteLLM completion 호출 (비동기)

    Args:
        model: 모델 이름 (예: "gpt-4o", "claude-3-5-sonnet-latest")
        messages: 대화 메시지 리스트
        temperature: 샘플링 온도 (0.0 ~ 1.0)
        max_tokens: 최대 출력 토큰 수
        **kwargs: LiteLLM에 전달할 추가 파라미터

    Returns:
        LLMResult: 생성된 텍스트 및 사용량 정보

    Raises:
        LLMProviderError: 프로바이더 호출 실패 시
    """
    try:
        response = await acompletion(
            model=model,
            messages=[msg.model_dump() for msg in messages],
            temperature=temperature,
            max_tokens=max_tokens,
            **kwargs,
        )

        choice = response.choices[0]
        usage = response.usage

        return LLMResult(
            content=choice.message.content or "",
            model=response.model,
            input_tokens=usage.prompt_tokens,
            output_tokens=usage.completion_tokens,
            finish_reason=choice.finish_reason,
        )

    except Exception as e:
        logger.error(f"LiteLLM completion failed for model {model}: {e}")
        raise LLMProviderError(provider=model, original_error=str(e))


async def astream_completion_raw(
    model: str,
    messages: list[LLMMessage],
    temperature: float = 0.7,
    max_tokens: Optional[int] = None,
    **kwargs,
) -> AsyncGenerator[str, None]:
    """LiteLLM streaming completion (비동기 제너레이터)

    Args:
        model: 모델 이름
        messages: 대화 메시지 리스트
        temperature: 샘플링 온도
        max_tokens: 최대 출력 토큰 수
        **kwargs: LiteLLM 추가 파라미터

    Yields:
        str: 생성된 텍스트 청크

    Raises:
        LLMProviderError: 프로바이더 호출 실패 시
    """
    try:
        response = await acompletion(
            model=model,
            messages=[msg.model_dump() for msg in messages],
            temperature=temperature,
            max_tokens=max_tokens,
            stream=True,
            **kwargs,
        )

        async for chunk in response:
            if chunk.choices[0].delta.content:
                yield chunk.choices[0].delta.content

    except Exception as e:
        logger.error(f"LiteLLM streaming failed for model {model}: {e}")
        raise LLMProviderError(provider=model, original_error=str(e))


async def aimage_generation_raw(
    model: str,
    prompt: str,
    size: str,
    quality: Optional[str] = None,
    **kwargs: Any,
) -> ImageResult:
    """LiteLLM 이미지 생성 호출 (비동기)

    Args:
        model: 이미지 모델 (예: "dall-e-3", "gpt-image-1")
        prompt: 이미지 프롬프트
        size: 이미지 크기 (예: "1024x1024")
        quality: 품질 옵션 (모델별 허용값 상이)

    Returns:
        ImageResult: URL 또는 base64 이미지

    Raises:
        LLMProviderError: 프로바이더 호출 실패 시
    """
    params: dict[str, Any] = {"model": model, "prompt": prompt, "size": size, "n": 1}
    if quality:
        params["quality"] = quality
    params.update(kwargs)

    try:
        response = await aimage_generation(**params)
        image = response.data[0]
        return ImageResult(
            model=model,
            url=getattr(image, "url", None),
            base64=getattr(image, "b64_json", None),
            revised_prompt=getattr(image, "revised_prompt", None),
        )

    except Exception as e:
        logger.error(f"LiteLLM image generation failed for model {model}: {e}")
        raise LLMProviderError(provider=model, original_error=str(e))
