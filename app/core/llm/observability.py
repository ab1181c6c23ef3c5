"""LangFuse 옵저버빌리티 연동

LANGFUSE_ENABLED=true 이면 모든 LiteLLM 호출을 트레이싱합니다.
"""

import os
from typing import Optional

import litellm
from langfuse import Langfuse
from langfuse.decorators import observe

from app.core.config import settings
from app.core.logging import get_logger

logger = get_logger(__name__)


def initialize_langfuse() -> Optional[Langfuse]:
    """LangFuse 클라이언트 초기화

    Returns:
        Langfuse: 초기화된 클라이언트 또는 None (비활성화/실패 시)
    """
    if not settings.langfuse_enabled:
        return None

    try:
        os.environ["LANGFUSE_SECRET_KEY"] = settings.langfuse_secret_key
        os.environ["LANGFUSE_PUBLIC_KEY"] = settings.langfuse_public_key
        os.environ["LANGFUSE_HOST"] = settings.langfuse_host

        # LiteLLM success/failure callback 등록
        litellm.success_callback = ["langfuse"]
        litellm.failure_callback = ["langfuse"]

        langfuse = Langfuse(
            secret_key=settings.langfuse_secret_key,
            public_key=settings.langfuse_public_key,
            host=settings.langfuse_host,
        )

        logger.info("LangFuse initialized successfully")
        return langfuse

    except Exception as e:
        logger.warning(
            f"LangFuse initialization failed: {e}. "
            "Continuing without observability."
        )
        return None


# 전역 클라이언트 (모듈 로드 시 초기화)
langfuse_client = initialize_langfuse()


def get_observe_decorator():
    """LangFuse @observe 데코레이터 반환

    Example:
        observe = get_observe_decorator()

        @observe(name="generate_content")
        async def generate(request: GenerateContentRequest):
            ...

    Returns:
        observe 데코레이터 (LangFuse 사용 가능 시) 또는 no-op 데코레이터
    """
    if langfuse_client:
        return observe

    def noop_observe(*args, **kwargs):
        def decorator(func):
            return func

        return decorator

    return noop_observe
