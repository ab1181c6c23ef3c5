"""Authors 도메인 예외 정의"""

import uuid
from enum import Enum

from app.core.exceptions import (
    BadRequestException,
    ConflictException,
    NotFoundException,
)


class AuthorErrorCode(str, Enum):
    """저자 도메인 에러 코드"""

    AUTHOR_NOT_FOUND = "AUTHOR_NOT_FOUND"
    AUTHOR_EMAIL_CONFLICT = "AUTHOR_EMAIL_CONFLICT"
    AUTHOR_HAS_POSTS = "AUTHOR_HAS_POSTS"


class AuthorNotFoundException(NotFoundException):
    """저자를 찾을 수 없는 경우"""

    def __init__(self, author_id: uuid.UUID | None = None):
        detail = {"author_id": str(author_id)} if author_id else {}
        super().__init__(
            message="저자를 찾을 수 없습니다.",
            error_code=AuthorErrorCode.AUTHOR_NOT_FOUND,
            detail=detail,
        )


class AuthorEmailConflictException(ConflictException):
    """이미 사용 중인 이메일인 경우"""

    def __init__(self, email: str):
        super().__init__(
            message="이미 사용 중인 이메일입니다.",
            error_code=AuthorErrorCode.AUTHOR_EMAIL_CONFLICT,
            detail={"email": email},
        )


class AuthorHasPostsException(BadRequestException):
    """게시글이 연결된 저자를 삭제하려는 경우"""

    def __init__(self, author_ids: list[uuid.UUID]):
        super().__init__(
            message="게시글이 있는 저자는 삭제할 수 없습니다.",
            error_code=AuthorErrorCode.AUTHOR_HAS_POSTS,
            detail={"author_ids": [str(a) for a in author_ids]},
        )
