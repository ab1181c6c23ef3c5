"""슬러그 생성 유틸리티"""

import re
from typing import Awaitable, Callable

MAX_SLUG_LENGTH = 255

_INVALID_CHARS = re.compile(r"[^a-z0-9\s-]")
_WHITESPACE = re.compile(r"\s+")
_DASHES = re.compile(r"-{2,}")


def slugify(text: str, max_length: int = MAX_SLUG_LENGTH) -> str:
    """텍스트를 URL 슬러그로 변환

    Example:
        >>> slugify("Hello, World! 2024")
        'hello-world-2024'
    """
    slug = _INVALID_CHARS.sub("", text.lower())
    slug = _WHITESPACE.sub("-", slug.strip())
    slug = _DASHES.sub("-", slug).strip("-")
    return slug[:max_length].rstrip("-")


async def generate_unique_slug(
    base: str,
    exists: Callable[[str], Awaitable[bool]],
    max_length: int = MAX_SLUG_LENGTH,
) -> str:
    """중복되지 않는 슬러그 생성

    base가 사용 중이면 base-1, base-2 ... 순서로 시도합니다.

    Args:
        base: 기본 슬러그 (slugify 적용 전 텍스트도 허용)
        exists: 슬러그 사용 여부를 확인하는 비동기 함수
        max_length: 최대 길이 (접미사 포함)

    Returns:
        사용 가능한 슬러그
    """
    root = slugify(base, max_length) or "untitled"
    candidate = root
    counter = 0

    while await exists(candidate):
        counter += 1
        suffix = f"-{counter}"
        candidate = f"{root[: max_length - len(suffix)].rstrip('-')}{suffix}"

    return candidate
