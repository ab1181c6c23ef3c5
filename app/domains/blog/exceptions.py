"""Blog 도메인 예외 정의"""

import uuid
from enum import Enum

from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
)


class BlogErrorCode(str, Enum):
    """블로그 도메인 에러 코드"""

    BLOG_POST_NOT_FOUND = "BLOG_POST_NOT_FOUND"
    BLOG_POST_SLUG_EXISTS = "BLOG_POST_SLUG_EXISTS"
    CATEGORY_NOT_FOUND = "CATEGORY_NOT_FOUND"
    CATEGORY_CONFLICT = "CATEGORY_CONFLICT"
    TAG_NOT_FOUND = "TAG_NOT_FOUND"
    TAG_CONFLICT = "TAG_CONFLICT"


class BlogPostNotFoundException(NotFoundException):
    """게시글을 찾을 수 없는 경우"""

    def __init__(self, post_id: uuid.UUID | None = None, slug: str | None = None):
        detail = {}
        if post_id:
            detail["post_id"] = str(post_id)
        if slug:
            detail["slug"] = slug
        super().__init__(
            message="게시글을 찾을 수 없습니다.",
            error_code=BlogErrorCode.BLOG_POST_NOT_FOUND,
            detail=detail,
        )


class BlogPostSlugExistsException(BadRequestException):
    """이미 사용 중인 게시글 슬러그"""

    def __init__(self, slug: str):
        super().__init__(
            message="이미 사용 중인 슬러그입니다.",
            error_code=BlogErrorCode.BLOG_POST_SLUG_EXISTS,
            detail={"slug": slug},
        )


class CategoryNotFoundException(NotFoundException):
    """카테고리를 찾을 수 없는 경우"""

    def __init__(self, category_id: uuid.UUID | None = None):
        detail = {"category_id": str(category_id)} if category_id else {}
        super().__init__(
            message="카테고리를 찾을 수 없습니다.",
            error_code=BlogErrorCode.CATEGORY_NOT_FOUND,
            detail=detail,
        )


class CategoryConflictException(ConflictException):
    """카테고리 이름 또는 슬러그 중복"""

    def __init__(self, name: str, slug: str):
        super().__init__(
            message="같은 이름 또는 슬러그의 카테고리가 이미 존재합니다.",
            error_code=BlogErrorCode.CATEGORY_CONFLICT,
            detail={"name": name, "slug": slug},
        )


class TagNotFoundException(NotFoundException):
    """태그를 찾을 수 없는 경우"""

    def __init__(self, tag_id: uuid.UUID | None = None):
        detail = {"tag_id": str(tag_id)} if tag_id else {}
        super().__init__(
            message="태그를 찾을 수 없습니다.",
            error_code=BlogErrorCode.TAG_NOT_FOUND,
            detail=detail,
        )


class TagConflictException(ConflictException):
    """태그 슬러그 중복"""

    def __init__(self, slug: str):
        super().__init__(
            message="같은 슬러그의 태그가 이미 존재합니다.",
            error_code=BlogErrorCode.TAG_CONFLICT,
            detail={"slug": slug},
        )
