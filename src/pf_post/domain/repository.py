"""Store contract for posts and comments.

PostRepository implements it against PostgreSQL; unit tests pass mocks.
"""

from datetime import datetime
from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_post.domain.models import Comment, Post


class PostRepositoryProtocol(Protocol):
    # --- candidate lists (newest first) ---

    async def list_recent(self, db: AsyncSession, limit: int) -> list[Post]: ...

    async def list_before(
        self, db: AsyncSession, max_created_at: datetime, limit: int
    ) -> list[Post]: ...

    async def list_by_user(self, db: AsyncSession, user_id: int, limit: int) -> list[Post]: ...

    async def get_by_id(self, db: AsyncSession, post_id: int) -> Post | None: ...

    # --- batch hydration ---

    async def count_comments_by_post(
        self, db: AsyncSession, post_ids: list[int]
    ) -> dict[int, int]: ...

    async def list_comments_for_posts(
        self, db: AsyncSession, post_ids: list[int]
    ) -> list[Comment]: ...

    # --- profile counts ---

    async def count_comments_by_user(self, db: AsyncSession, user_id: int) -> int: ...

    async def list_post_ids_by_user(self, db: AsyncSession, user_id: int) -> list[int]: ...

    async def count_comments_on_posts(self, db: AsyncSession, post_ids: list[int]) -> int: ...

    # --- writes ---

    async def insert_post(self, db: AsyncSession, user_id: int, mime: str, body: str) -> int: ...

    async def insert_comment(
        self, db: AsyncSession, post_id: int, user_id: int, comment: str
    ) -> int: ...

    async def get_owner_account_name(self, db: AsyncSession, post_id: int) -> str | None: ...
