"""티어 기반 LLM Fallback 로직

호출부는 모델이 아닌 티어만 지정하면 자동으로 fallback이 처리됩니다.
Fallback 순서는 설정(LLM_CONTENT_MODELS, LLM_LIGHT_MODELS)에서 읽습니다.
"""

from typing import AsyncGenerator, Optional

from app.core.config import settings
from app.core.llm.provider import acompletion_raw, astream_completion_raw
from app.core.llm.types import (
    AllProvidersFailedError,
    LLMMessage,
    LLMProviderError,
    LLMResult,
    LLMTier,
)
from app.core.logging import get_logger
from app.core.utils.time import measure_time

logger = get_logger(__name__)


def get_models_for_tier(tier: LLMTier) -> list[str]:
    """티어별 fallback 모델 목록"""
    if tier == LLMTier.CONTENT:
        return list(settings.llm_content_models)
    return list(settings.llm_light_models)


async def call_with_fallback(
    tier: LLMTier,
    messages: list[LLMMessage],
    temperature: float = 0.7,
    max_tokens: Optional[int] = None,
    **kwargs,
) -> LLMResult:
    """티어 기반 LLM 호출 (자동 fallback)

    첫 번째 모델이 실패하면 자동으로 다음 모델로 재시도합니다.

    Args:
        tier: LLM 티어
        messages: 대화 메시지
        temperature: 샘플링 온도
        max_tokens: 최대 출력 토큰
        **kwargs: 추가 파라미터

    Returns:
        LLMResult: 생성 결과

    Raises:
        AllProvidersFailedError: 모든 모델 실패 시

    Example:
        from app.core.llm import LLMTier, LLMMessage, call_with_fallback

        result = await call_with_fallback(
            tier=LLMTier.CONTENT,
            messages=[LLMMessage(role="user", content="Hello!")],
        )
        print(result.content)
    """
    models = get_models_for_tier(tier)
    if not models:
        raise AllProvidersFailedError(tier=tier.value, attempts=[])

    attempted_models: list[str] = []

    for model in models:
        with measure_time() as timer:
            try:
                logger.info(f"Attempting LLM call with tier={tier.value}, model={model}")
                result = await acompletion_raw(
                    model=model,
                    messages=messages,
                    temperature=temperature,
                    max_tokens=max_tokens,
                    **kwargs,
                )
            except LLMProviderError as e:
                attempted_models.append(model)
                logger.warning(
                    f"Model {model} failed (tier={tier.value}): "
                    f"{e.detail_info.get('error')}. Trying next model..."
                )
                continue

        logger.info(
            f"LLM call succeeded with model={model} "
            f"({timer['elapsed_ms']:.0f}ms, tokens={result.total_tokens})"
        )
        return result

    raise AllProvidersFailedError(tier=tier.value, attempts=attempted_models)


async def stream_with_fallback(
    tier: LLMTier,
    messages: list[LLMMessage],
    temperature: float = 0.7,
    max_tokens: Optional[int] = None,
    **kwargs,
) -> AsyncGenerator[str, None]:
    """티어 기반 스트리밍 호출 (스트리밍 시작 전까지만 fallback)

    첫 번째 청크 전에 에러가 발생하면 다음 모델로 fallback합니다.
    스트리밍이 시작된 후에는 이미 yield된 청크를 되돌릴 수 없으므로
    즉시 에러를 발생시킵니다.

    Yields:
        str: 생성된 텍스트 청크

    Raises:
        AllProvidersFailedError: 모든 모델이 스트리밍 시작 전 실패 시
        LLMProviderError: 스트리밍 중 에러 발생 시 (fallback 없음)

    Example:
        async for chunk in stream_with_fallback(
            tier=LLMTier.CONTENT,
            messages=[LLMMessage(role="user", content="Write a story")],
        ):
            print(chunk, end="", flush=True)
    """
    models = get_models_for_tier(tier)
    if not models:
        raise AllProvidersFailedError(tier=tier.value, attempts=[])

    attempted_models: list[str] = []
    streaming_started = False

    for model in models:
        try:
            logger.info(f"Attempting streaming: tier={tier.value}, model={model}")

            async for chunk in astream_completion_raw(
                model=model,
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                **kwargs,
            ):
                if not streaming_started:
                    streaming_started = True
                    logger.info(f"Streaming started with model={model}")
                yield chunk

            logger.info(f"Streaming completed with model={model}")
            return

        except LLMProviderError as e:
            if streaming_started:
                logger.error(
                    f"Streaming failed mid-stream with model={model}: "
                    f"{e.detail_info.get('error')}. Cannot fallback."
                )
                raise

            attempted_models.append(model)
            logger.warning(
                f"Model {model} failed before streaming (tier={tier.value}): "
                f"{e.detail_info.get('error')}. Trying next model..."
            )
            continue

    raise AllProvidersFailedError(tier=tier.value, attempts=attempted_models)
