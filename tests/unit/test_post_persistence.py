"""Unit tests for PostRepository using MagicMock AsyncSession."""
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock

import pytest

from src.pf_post.infrastructure.persistence import PostRepository


def _make_post_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", 1)
    row.user_id = kwargs.get("user_id", 1)
    row.body = kwargs.get("body", "hello")
    row.mime = kwargs.get("mime", "image/png")
    row.created_at = datetime.now(UTC)
    return row


def _make_comment_row(**kwargs):
    row = MagicMock()
    row.id = kwargs.get("id", 1)
    row.post_id = kwargs.get("post_id", 1)
    row.user_id = kwargs.get("user_id", 2)
    row.comment = kwargs.get("comment", "nice")
    row.created_at = datetime.now(UTC)
    return row


@pytest.fixture
def db():
    return MagicMock()


def _result(rows=None, one=None, scalar=None):
    result_mock = MagicMock()
    result_mock.fetchall.return_value = rows or []
    result_mock.fetchone.return_value = one
    result_mock.scalar_one.return_value = scalar
    return result_mock


class TestCandidateLists:
    @pytest.mark.asyncio
    async def test_list_recent_maps_rows_in_order(self, db):
        db.execute = AsyncMock(return_value=_result(rows=[_make_post_row(id=i) for i in (3, 2, 1)]))

        posts = await PostRepository().list_recent(db, 40)

        assert [p.id for p in posts] == [3, 2, 1]
        assert posts[0].comments == []
        assert posts[0].user is None
        assert db.execute.call_args[0][1] == {"limit": 40}

    @pytest.mark.asyncio
    async def test_list_before_passes_bound(self, db):
        db.execute = AsyncMock(return_value=_result())
        bound = datetime(2016, 1, 2, 6, 4, 5, tzinfo=UTC)

        assert await PostRepository().list_before(db, bound, 40) == []
        assert db.execute.call_args[0][1] == {"max_created_at": bound, "limit": 40}

    @pytest.mark.asyncio
    async def test_get_by_id_not_found(self, db):
        db.execute = AsyncMock(return_value=_result(one=None))
        assert await PostRepository().get_by_id(db, 404) is None


class TestBatchHydration:
    @pytest.mark.asyncio
    async def test_counts_keyed_by_post(self, db):
        rows = []
        for post_id, count in ((10, 2), (12, 4)):
            row = MagicMock()
            row.post_id = post_id
            row.comment_count = count
            rows.append(row)
        db.execute = AsyncMock(return_value=_result(rows=rows))

        counts = await PostRepository().count_comments_by_post(db, [10, 11, 12])

        assert counts == {10: 2, 12: 4}
        db.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_comments_for_posts_single_query(self, db):
        rows = [_make_comment_row(id=i, post_id=10) for i in (3, 2, 1)]
        db.execute = AsyncMock(return_value=_result(rows=rows))

        comments = await PostRepository().list_comments_for_posts(db, [10, 11])

        assert [c.id for c in comments] == [3, 2, 1]
        db.execute.assert_awaited_once()
        assert db.execute.call_args[0][1] == {"post_ids": [10, 11]}

    @pytest.mark.asyncio
    async def test_empty_batches_skip_queries(self, db):
        db.execute = AsyncMock()
        repo = PostRepository()

        assert await repo.count_comments_by_post(db, []) == {}
        assert await repo.list_comments_for_posts(db, []) == []
        assert await repo.count_comments_on_posts(db, []) == 0
        db.execute.assert_not_called()


class TestProfileCounts:
    @pytest.mark.asyncio
    async def test_count_comments_by_user(self, db):
        db.execute = AsyncMock(return_value=_result(scalar=7))
        assert await PostRepository().count_comments_by_user(db, 1) == 7

    @pytest.mark.asyncio
    async def test_list_post_ids_by_user(self, db):
        db.execute = AsyncMock(return_value=_result(rows=[_make_post_row(id=i) for i in (5, 6)]))
        assert await PostRepository().list_post_ids_by_user(db, 1) == [5, 6]


class TestWrites:
    @pytest.mark.asyncio
    async def test_insert_post_leaves_imgdata_empty(self, db):
        db.execute = AsyncMock(return_value=_result(scalar=21))

        post_id = await PostRepository().insert_post(db, 1, "image/gif", "caption")

        assert post_id == 21
        params = db.execute.call_args[0][1]
        assert params["imgdata"] == b""
        assert params["mime"] == "image/gif"

    @pytest.mark.asyncio
    async def test_insert_comment_returns_id(self, db):
        db.execute = AsyncMock(return_value=_result(scalar=99))
        assert await PostRepository().insert_comment(db, 10, 2, "hi") == 99

    @pytest.mark.asyncio
    async def test_owner_account_name(self, db):
        row = MagicMock()
        row.account_name = "alice"
        db.execute = AsyncMock(return_value=_result(one=row))
        assert await PostRepository().get_owner_account_name(db, 10) == "alice"

    @pytest.mark.asyncio
    async def test_owner_missing(self, db):
        db.execute = AsyncMock(return_value=_result(one=None))
        assert await PostRepository().get_owner_account_name(db, 10) is None
