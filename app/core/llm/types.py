"""LLM 관련 공통 타입 정의"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel

from app.core.exceptions import ErrorCode, InternalServerException


class LLMTier(str, Enum):
    """LLM 티어 (작업 성격 기반)

    Attributes:
        LIGHT: 짧은 작업 (이미지 프롬프트 작성 등)
        CONTENT: 긴 글 생성 (블로그, 서비스 설명, 마케팅 카피)
    """

    LIGHT = "light"
    CONTENT = "content"


class LLMMessage(BaseModel):
    """LLM 메시지 형식

    Attributes:
        role: 메시지 역할 ("system", "user", "assistant")
        content: 메시지 내용
    """

    role: str
    content: str


class LLMResult(BaseModel):
    """LLM 호출 결과

    Attributes:
        content: 생성된 텍스트
        model: 사용된 모델 이름
        input_tokens: 입력 토큰 수
        output_tokens: 출력 토큰 수
        finish_reason: 생성 완료 이유 (선택사항)
    """

    content: str
    model: str
    input_tokens: int
    output_tokens: int
    finish_reason: Optional[str] = None

    @property
    def total_tokens(self) -> int:
        return self.input_tokens + self.output_tokens


class ImageResult(BaseModel):
    """이미지 생성 결과"""

    model: str
    url: Optional[str] = None
    base64: Optional[str] = None
    revised_prompt: Optional[str] = None


class LLMProviderError(InternalServerException):
    """단일 LLM 프로바이더 호출 실패

    Fallback 로직에서 다음 모델로 재시도하기 위해 사용됩니다.
    """

    def __init__(self, provider: str, original_error: str):
        super().__init__(
            message=f"LLM provider '{provider}' failed: {original_error}",
            error_code=ErrorCode.LLM_PROVIDER_ERROR,
            detail={"provider": provider, "error": original_error},
        )


class AllProvidersFailedError(InternalServerException):
    """티어에 설정된 모든 모델 호출 실패"""

    def __init__(self, tier: str, attempts: list[str]):
        super().__init__(
            message=f"All providers failed for tier '{tier}'",
            error_code=ErrorCode.ALL_PROVIDERS_FAILED,
            detail={"tier": tier, "attempted_models": attempts},
        )
