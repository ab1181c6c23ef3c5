"""AI 콘텐츠 생성 서비스

콘텐츠 유형별 프롬프트를 구성하고 티어 fallback으로 LLM을 호출합니다.
"""

import re
from typing import AsyncGenerator, Optional

from app.core.context import get_request_id
from app.core.llm import (
    LLMMessage,
    LLMTier,
    call_with_fallback,
    get_observe_decorator,
    stream_with_fallback,
)
from app.core.llm.types import AllProvidersFailedError, LLMProviderError
from app.core.logging import get_logger
from app.core.utils.text import count_words
from app.core.utils.time import measure_time
from app.domains.ai.exceptions import (
    ContentGenerationFailedException,
    StreamingNotSupportedException,
)
from app.domains.ai.generation import prompts
from app.domains.ai.schemas import (
    ContentGenerateRequest,
    ContentGenerateResponse,
    ContentRefineRequest,
    ContentRefineResponse,
    ImagePromptRequest,
)
from app.domains.ai.types import ContentType

logger = get_logger(__name__)
observe = get_observe_decorator()

_SUBJECT_LINE = re.compile(
    r"^\s*\**subject\**\s*:\s*(.+)$", re.IGNORECASE | re.MULTILINE
)

CONTENT_PREVIEW_LENGTH = 1000


def word_target(content_type: ContentType, length) -> str:
    """유형과 분량에 따른 목표 단어 수"""
    targets = prompts.WORD_TARGETS.get(content_type, prompts.DEFAULT_WORD_TARGETS)
    return targets[length]


def temperature_for(content_type: ContentType) -> float:
    """마케팅 카피만 더 높은 온도를 사용"""
    return 0.8 if content_type == ContentType.MARKETING_COPY else 0.7


def split_email_subject(text: str) -> tuple[Optional[str], str]:
    """제목(Subject:) 줄을 분리

    Returns:
        (제목, 제목 줄을 제거한 본문). 제목 줄이 없으면 (None, 원문)
    """
    match = _SUBJECT_LINE.search(text)
    if not match:
        return None, text
    subject = match.group(1).strip().strip("*").strip()
    body = (text[: match.start()] + text[match.end():]).strip()
    return subject, body


def build_user_prompt(data: ContentGenerateRequest) -> str:
    """요청 필드로 사용자 프롬프트 구성"""
    lines = [
        f"{prompts.TASK_DESCRIPTIONS[data.type]} about: {data.topic}",
        "",
        f"- Tone: {data.tone.value}",
        f"- Target length: {word_target(data.type, data.length)}",
    ]
    if data.keywords:
        lines.append(f"- Keywords to include: {', '.join(data.keywords)}")
    if data.target_audience:
        lines.append(f"- Target audience: {data.target_audience}")

    if data.type == ContentType.SERVICE_DESCRIPTION:
        lines.append(f"- Service name: {data.service_name}")
        if data.features:
            lines.append(f"- Features: {', '.join(data.features)}")
    elif data.type == ContentType.PAGE_CONTENT:
        lines.append(f"- Page type: {data.page_type or 'general'}")
        if data.sections:
            lines.append(f"- Sections: {', '.join(data.sections)}")
    elif data.type == ContentType.EMAIL_TEMPLATE:
        if data.email_type:
            lines.append(f"- Email type: {data.email_type}")
        lines.append(f"- Purpose: {data.purpose or data.topic}")
    elif data.type == ContentType.MARKETING_COPY:
        if data.platform:
            lines.append(f"- Platform: {data.platform}")
        if data.call_to_action:
            lines.append(f"- Call-to-action: {data.call_to_action}")

    if data.additional_instructions:
        lines.extend(["", "Additional instructions:", data.additional_instructions])

    return "\n".join(lines)


def build_refine_prompt(data: ContentRefineRequest) -> str:
    """개선 요청 사용자 프롬프트 구성"""
    options = []
    if data.tone:
        options.append(f"- Tone: {data.tone.value}")
    if data.target_audience:
        options.append(f"- Target audience: {data.target_audience}")
    if data.maintain_structure:
        options.append("- Keep the original headings and section order")
    else:
        options.append("- You may reorganize the structure if it helps")

    return prompts.REFINE_USER_TEMPLATE.format(
        improvements="\n".join(f"- {item}" for item in data.improvements),
        options="\n".join(options) + "\n",
        content=data.content,
    )


class ContentGenerationService:
    """AI 콘텐츠 생성 서비스"""

    @observe(name="generate_content")
    async def generate(
        self, data: ContentGenerateRequest
    ) -> ContentGenerateResponse:
        """콘텐츠 생성

        Raises:
            ContentGenerationFailedException: 모든 모델 호출 실패 시
        """
        messages = [
            LLMMessage(role="system", content=prompts.SYSTEM_PROMPTS[data.type]),
            LLMMessage(role="user", content=build_user_prompt(data)),
        ]

        with measure_time() as timer:
            try:
                result = await call_with_fallback(
                    tier=LLMTier.CONTENT,
                    messages=messages,
                    temperature=temperature_for(data.type),
                )
            except AllProvidersFailedError as e:
                logger.error(
                    "Content generation failed",
                    extra={
                        "request_id": get_request_id(),
                        "type": data.type.value,
                        "attempted_models": e.detail_info.get("attempted_models"),
                    },
                )
                raise ContentGenerationFailedException(data.type.value, e.message)

        content = result.content.strip()
        subject = None
        if data.type == ContentType.EMAIL_TEMPLATE:
            subject, _ = split_email_subject(content)

        elapsed_ms = int(timer["elapsed_ms"])
        logger.info(
            "Content generated",
            extra={
                "request_id": get_request_id(),
                "type": data.type.value,
                "model": result.model,
                "tokens": result.total_tokens,
                "elapsed_ms": elapsed_ms,
            },
        )

        return ContentGenerateResponse(
            content=content,
            word_count=count_words(content),
            generation_time_ms=elapsed_ms,
            model=result.model,
            tokens_used=result.total_tokens,
            subject=subject,
        )

    @observe(name="generate_image_prompt")
    async def generate_image_prompt(self, data: ImagePromptRequest) -> str:
        """게시글 정보로 이미지 생성 프롬프트 작성

        Raises:
            ContentGenerationFailedException: 모든 모델 호출 실패 시
        """
        messages = [
            LLMMessage(role="system", content=prompts.IMAGE_PROMPT_SYSTEM_PROMPT),
            LLMMessage(
                role="user",
                content=prompts.IMAGE_PROMPT_USER_TEMPLATE.format(
                    title=data.title,
                    excerpt=data.excerpt or "(none)",
                    content=(data.content or "(none)")[:CONTENT_PREVIEW_LENGTH],
                ),
            ),
        ]
        try:
            result = await call_with_fallback(
                tier=LLMTier.LIGHT, messages=messages, temperature=0.7
            )
        except AllProvidersFailedError as e:
            raise ContentGenerationFailedException("image-prompt", e.message)
        return result.content.strip()

    @observe(name="refine_content")
    async def refine(self, data: ContentRefineRequest) -> ContentRefineResponse:
        """기존 콘텐츠를 요청 사항에 맞게 개선

        Raises:
            ContentGenerationFailedException: 모든 모델 호출 실패 시
        """
        messages = [
            LLMMessage(role="system", content=prompts.REFINE_SYSTEM_PROMPT),
            LLMMessage(role="user", content=build_refine_prompt(data)),
        ]

        with measure_time() as timer:
            try:
                result = await call_with_fallback(
                    tier=LLMTier.CONTENT, messages=messages, temperature=0.7
                )
            except AllProvidersFailedError as e:
                logger.error(
                    "Content refinement failed",
                    extra={
                        "request_id": get_request_id(),
                        "attempted_models": e.detail_info.get("attempted_models"),
                    },
                )
                raise ContentGenerationFailedException("refine", e.message)

        content = result.content.strip()
        elapsed_ms = int(timer["elapsed_ms"])
        logger.info(
            "Content refined",
            extra={
                "request_id": get_request_id(),
                "model": result.model,
                "improvements": len(data.improvements),
                "elapsed_ms": elapsed_ms,
            },
        )

        return ContentRefineResponse(
            content=content,
            word_count=count_words(content),
            generation_time_ms=elapsed_ms,
            model=result.model,
            tokens_used=result.total_tokens,
        )

    def stream(self, data: ContentGenerateRequest) -> AsyncGenerator[str, None]:
        """콘텐츠를 청크 단위로 생성

        blog-post는 제목/메타데이터를 포함한 전체 응답이 필요해 스트리밍하지 않습니다.

        Raises:
            StreamingNotSupportedException: blog-post 유형 (호출 즉시)
            ContentGenerationFailedException: 첫 청크 전에 모든 모델 실패 시
        """
        if data.type == ContentType.BLOG_POST:
            raise StreamingNotSupportedException(data.type.value)
        return self._stream_chunks(data)

    async def _stream_chunks(
        self, data: ContentGenerateRequest
    ) -> AsyncGenerator[str, None]:
        messages = [
            LLMMessage(role="system", content=prompts.SYSTEM_PROMPTS[data.type]),
            LLMMessage(role="user", content=build_user_prompt(data)),
        ]
        chunk_count = 0
        try:
            async for chunk in stream_with_fallback(
                tier=LLMTier.CONTENT,
                messages=messages,
                temperature=temperature_for(data.type),
            ):
                chunk_count += 1
                yield chunk
        except AllProvidersFailedError as e:
            logger.error(
                "Content streaming failed",
                extra={
                    "request_id": get_request_id(),
                    "type": data.type.value,
                    "attempted_models": e.detail_info.get("attempted_models"),
                },
            )
            raise ContentGenerationFailedException(data.type.value, e.message)
        except LLMProviderError:
            logger.error(
                "Content stream interrupted",
                extra={
                    "request_id": get_request_id(),
                    "type": data.type.value,
                    "chunks": chunk_count,
                },
            )
            raise

        logger.info(
            "Content streamed",
            extra={
                "request_id": get_request_id(),
                "type": data.type.value,
                "chunks": chunk_count,
            },
        )
