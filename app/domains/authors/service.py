"""Authors 도메인 서비스"""

import uuid
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import EmptyIdListException
from app.core.logging import get_logger
from app.core.context import get_request_id
from app.core.utils.pagination import SortOrder
from app.domains.authors.exceptions import (
    AuthorEmailConflictException,
    AuthorHasPostsException,
    AuthorNotFoundException,
)
from app.domains.authors.models import Author
from app.domains.authors.repository import AuthorRepository
from app.domains.authors.schemas import (
    AuthorCreateRequest,
    AuthorUpdateRequest,
)

logger = get_logger(__name__)


class AuthorService:
    """저자 서비스"""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.repository = AuthorRepository(session)

    async def list_authors(
        self,
        offset: int,
        limit: int,
        search: Optional[str] = None,
        sort_by: str = "created_at",
        sort_order: SortOrder = SortOrder.DESC,
    ) -> tuple[list[tuple[Author, int]], int]:
        """저자 목록 조회 (게시글 수 포함)

        Returns:
            ((저자, 게시글 수) 목록, 전체 수)
        """
        rows = await self.repository.get_list_with_post_counts(
            offset=offset,
            limit=limit,
            search=search,
            sort_by=sort_by,
            sort_order=sort_order,
        )
        total = await self.repository.count(search=search)
        return rows, total

    async def get_author(self, author_id: uuid.UUID) -> Author:
        """저자 조회

        Raises:
            AuthorNotFoundException: 저자가 없는 경우
        """
        author = await self.repository.get_by_id(author_id)
        if author is None:
            raise AuthorNotFoundException(author_id)
        return author

    async def create_author(self, data: AuthorCreateRequest) -> Author:
        """저자 생성

        Raises:
            AuthorEmailConflictException: 이메일 중복 시
        """
        if await self.repository.get_by_email(data.email):
            raise AuthorEmailConflictException(data.email)

        author = await self.repository.create(
            Author(
                name=data.name,
                email=data.email,
                bio=data.bio,
                avatar_url=data.avatar_url,
            )
        )

        logger.info(
            "Author created",
            extra={"request_id": get_request_id(), "author_id": str(author.id)},
        )
        return author

    async def update_author(
        self, author_id: uuid.UUID, data: AuthorUpdateRequest
    ) -> Author:
        """저자 부분 수정

        Raises:
            AuthorNotFoundException: 저자가 없는 경우
            AuthorEmailConflictException: 다른 저자가 이메일을 사용 중인 경우
        """
        author = await self.get_author(author_id)
        changes = data.model_dump(exclude_unset=True)

        new_email = changes.get("email")
        if new_email and new_email.lower() != author.email.lower():
            existing = await self.repository.get_by_email(new_email)
            if existing and existing.id != author.id:
                raise AuthorEmailConflictException(new_email)

        for field, value in changes.items():
            if value is not None or field in ("bio", "avatar_url"):
                setattr(author, field, value)

        return await self.repository.update(author)

    async def delete_authors(self, author_ids: list[uuid.UUID]) -> int:
        """저자 벌크 삭제

        하나라도 게시글이 연결되어 있으면 아무것도 삭제하지 않습니다.

        Raises:
            EmptyIdListException: ID 목록이 비어있는 경우
            AuthorHasPostsException: 게시글이 연결된 저자가 있는 경우
        """
        if not author_ids:
            raise EmptyIdListException()

        blocking = await self.repository.find_ids_with_posts(author_ids)
        if blocking:
            raise AuthorHasPostsException(blocking)

        deleted = await self.repository.delete_batch(author_ids)

        logger.info(
            "Authors deleted",
            extra={
                "request_id": get_request_id(),
                "requested": len(author_ids),
                "deleted": deleted,
            },
        )
        return deleted
