"""PostRepository: concrete implementation of PostRepositoryProtocol.

All queries use raw text() SQL (no ORM). Candidate lists never select
imgdata: the image bytes are served from external storage.
"""

from datetime import datetime

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_post.domain.models import Comment, Post

# ---------------------------------------------------------------------------
# SQL: candidate lists
# ---------------------------------------------------------------------------

_POST_COLUMNS = "id, user_id, body, mime, created_at"

_LIST_RECENT_SQL = text(f"""
    SELECT {_POST_COLUMNS}
    FROM posts
    ORDER BY created_at DESC
    LIMIT :limit
""")

_LIST_BEFORE_SQL = text(f"""
    SELECT {_POST_COLUMNS}
    FROM posts
    WHERE created_at <= :max_created_at
    ORDER BY created_at DESC
    LIMIT :limit
""")

_LIST_BY_USER_SQL = text(f"""
    SELECT {_POST_COLUMNS}
    FROM posts
    WHERE user_id = :user_id
    ORDER BY created_at DESC
    LIMIT :limit
""")

_GET_BY_ID_SQL = text(f"SELECT {_POST_COLUMNS} FROM posts WHERE id = :post_id")

# ---------------------------------------------------------------------------
# SQL: batch hydration (one round trip each, whatever the batch size)
# ---------------------------------------------------------------------------

_COUNT_BY_POST_SQL = text("""
    SELECT post_id, COUNT(*) AS comment_count
    FROM comments
    WHERE post_id IN :post_ids
    GROUP BY post_id
""").bindparams(bindparam("post_ids", expanding=True))

_COMMENTS_FOR_POSTS_SQL = text("""
    SELECT id, post_id, user_id, comment, created_at
    FROM comments
    WHERE post_id IN :post_ids
    ORDER BY created_at DESC
""").bindparams(bindparam("post_ids", expanding=True))

# ---------------------------------------------------------------------------
# SQL: profile counts
# ---------------------------------------------------------------------------

_COUNT_BY_USER_SQL = text(
    "SELECT COUNT(*) AS comment_count FROM comments WHERE user_id = :user_id"
)

_POST_IDS_BY_USER_SQL = text("SELECT id FROM posts WHERE user_id = :user_id")

_COUNT_ON_POSTS_SQL = text(
    "SELECT COUNT(*) AS comment_count FROM comments WHERE post_id IN :post_ids"
).bindparams(bindparam("post_ids", expanding=True))

# ---------------------------------------------------------------------------
# SQL: writes
# ---------------------------------------------------------------------------

_INSERT_POST_SQL = text("""
    INSERT INTO posts (user_id, mime, imgdata, body)
    VALUES (:user_id, :mime, :imgdata, :body)
    RETURNING id
""")

_INSERT_COMMENT_SQL = text("""
    INSERT INTO comments (post_id, user_id, comment)
    VALUES (:post_id, :user_id, :comment)
    RETURNING id
""")

_OWNER_ACCOUNT_NAME_SQL = text("""
    SELECT u.account_name
    FROM posts p
    JOIN users u ON p.user_id = u.id
    WHERE p.id = :post_id
""")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_post(row: object) -> Post:
    return Post(
        id=row.id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        body=row.body,  # type: ignore[attr-defined]
        mime=row.mime,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


def _row_to_comment(row: object) -> Comment:
    return Comment(
        id=row.id,  # type: ignore[attr-defined]
        post_id=row.post_id,  # type: ignore[attr-defined]
        user_id=row.user_id,  # type: ignore[attr-defined]
        comment=row.comment,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class PostRepository:
    async def list_recent(self, db: AsyncSession, limit: int) -> list[Post]:
        result = await db.execute(_LIST_RECENT_SQL, {"limit": limit})
        return [_row_to_post(row) for row in result.fetchall()]

    async def list_before(
        self, db: AsyncSession, max_created_at: datetime, limit: int
    ) -> list[Post]:
        result = await db.execute(
            _LIST_BEFORE_SQL, {"max_created_at": max_created_at, "limit": limit}
        )
        return [_row_to_post(row) for row in result.fetchall()]

    async def list_by_user(self, db: AsyncSession, user_id: int, limit: int) -> list[Post]:
        result = await db.execute(_LIST_BY_USER_SQL, {"user_id": user_id, "limit": limit})
        return [_row_to_post(row) for row in result.fetchall()]

    async def get_by_id(self, db: AsyncSession, post_id: int) -> Post | None:
        result = await db.execute(_GET_BY_ID_SQL, {"post_id": post_id})
        row = result.fetchone()
        return _row_to_post(row) if row else None

    async def count_comments_by_post(
        self, db: AsyncSession, post_ids: list[int]
    ) -> dict[int, int]:
        if not post_ids:
            return {}
        result = await db.execute(_COUNT_BY_POST_SQL, {"post_ids": post_ids})
        return {row.post_id: row.comment_count for row in result.fetchall()}

    async def list_comments_for_posts(
        self, db: AsyncSession, post_ids: list[int]
    ) -> list[Comment]:
        if not post_ids:
            return []
        result = await db.execute(_COMMENTS_FOR_POSTS_SQL, {"post_ids": post_ids})
        return [_row_to_comment(row) for row in result.fetchall()]

    async def count_comments_by_user(self, db: AsyncSession, user_id: int) -> int:
        result = await db.execute(_COUNT_BY_USER_SQL, {"user_id": user_id})
        return int(result.scalar_one())

    async def list_post_ids_by_user(self, db: AsyncSession, user_id: int) -> list[int]:
        result = await db.execute(_POST_IDS_BY_USER_SQL, {"user_id": user_id})
        return [row.id for row in result.fetchall()]

    async def count_comments_on_posts(self, db: AsyncSession, post_ids: list[int]) -> int:
        if not post_ids:
            return 0
        result = await db.execute(_COUNT_ON_POSTS_SQL, {"post_ids": post_ids})
        return int(result.scalar_one())

    async def insert_post(self, db: AsyncSession, user_id: int, mime: str, body: str) -> int:
        # Image bytes live in external storage; the column stays empty.
        result = await db.execute(
            _INSERT_POST_SQL,
            {"user_id": user_id, "mime": mime, "imgdata": b"", "body": body},
        )
        return int(result.scalar_one())

    async def insert_comment(
        self, db: AsyncSession, post_id: int, user_id: int, comment: str
    ) -> int:
        result = await db.execute(
            _INSERT_COMMENT_SQL,
            {"post_id": post_id, "user_id": user_id, "comment": comment},
        )
        return int(result.scalar_one())

    async def get_owner_account_name(self, db: AsyncSession, post_id: int) -> str | None:
        result = await db.execute(_OWNER_ACCOUNT_NAME_SQL, {"post_id": post_id})
        row = result.fetchone()
        return row.account_name if row else None
