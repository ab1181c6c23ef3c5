"""Core LLM 인프라 공개 API"""

from app.core.llm.fallback import call_with_fallback, stream_with_fallback
from app.core.llm.observability import get_observe_decorator
from app.core.llm.provider import aimage_generation_raw
from app.core.llm.types import ImageResult, LLMMessage, LLMResult, LLMTier

__all__ = [
    # Types
    "LLMTier",
    "LLMMessage",
    "LLMResult",
    "ImageResult",
    # Functions
    "call_with_fallback",
    "stream_with_fallback",
    "aimage_generation_raw",
    # Decorators
    "get_observe_decorator",
]
