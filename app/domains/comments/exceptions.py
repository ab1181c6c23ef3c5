"""Comments 도메인 예외 정의"""

import uuid
from enum import Enum

from app.core.exceptions import NotFoundException


class CommentErrorCode(str, Enum):
    """코멘트 도메인 에러 코드"""

    COMMENT_NOT_FOUND = "COMMENT_NOT_FOUND"


class CommentNotFoundException(NotFoundException):
    """코멘트를 찾을 수 없는 경우 (삭제된 코멘트 포함)"""

    def __init__(self, comment_id: uuid.UUID | None = None):
        detail = {"comment_id": str(comment_id)} if comment_id else {}
        super().__init__(
            message="코멘트를 찾을 수 없습니다.",
            error_code=CommentErrorCode.COMMENT_NOT_FOUND,
            detail=detail,
        )
