"""Test doubles and row builders shared by unit tests."""

from datetime import UTC, datetime, timedelta

from src.pf_post.domain.models import Comment, Post
from src.pf_user.domain.models import User

BASE_TIME = datetime(2026, 1, 2, 15, 4, 5, tzinfo=UTC)


class FakeCacheStore:
    """In-memory CacheStore. With fail=True every call behaves like a dead cache."""

    def __init__(self, fail: bool = False) -> None:
        self.data: dict[str, bytes] = {}
        self.ttls: dict[str, int] = {}
        self.fail = fail
        self.gets: list[str] = []
        self.sets: list[str] = []
        self.deletes: list[str] = []

    async def get(self, key: str) -> bytes | None:
        self.gets.append(key)
        if self.fail:
            return None
        return self.data.get(key)

    async def set(self, key: str, value: bytes, ttl_seconds: int) -> bool:
        self.sets.append(key)
        if self.fail:
            return False
        self.data[key] = value
        self.ttls[key] = ttl_seconds
        return True

    async def delete(self, key: str) -> bool:
        self.deletes.append(key)
        if self.fail:
            return False
        self.data.pop(key, None)
        self.ttls.pop(key, None)
        return True


def make_user(user_id: int, name: str | None = None, **kwargs) -> User:
    return User(
        id=user_id,
        account_name=name or f"user{user_id}",
        passhash="$2b$12$fakehash",
        authority=kwargs.get("authority", 0),
        del_flg=kwargs.get("del_flg", 0),
        created_at=kwargs.get("created_at", BASE_TIME),
    )


def make_post(post_id: int, user_id: int, minutes: int = 0) -> Post:
    """Bare candidate row; larger minutes means newer."""
    return Post(
        id=post_id,
        user_id=user_id,
        body=f"post {post_id}",
        mime="image/jpeg",
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )


def make_comment(comment_id: int, post_id: int, user_id: int, minutes: int = 0) -> Comment:
    return Comment(
        id=comment_id,
        post_id=post_id,
        user_id=user_id,
        comment=f"comment {comment_id}",
        created_at=BASE_TIME + timedelta(minutes=minutes),
    )
