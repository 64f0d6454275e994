"""Unit tests for AdminService."""

from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from src.pf_admin.application.service import AdminService
from tests.factories import make_user


@pytest.fixture
def repo() -> MagicMock:
    r = MagicMock()
    r.list_active_normal_users = AsyncMock(return_value=[make_user(2, "bob"), make_user(3)])
    r.ban = AsyncMock(return_value=True)
    return r


@pytest.fixture
def invalidation() -> MagicMock:
    inv = MagicMock()
    inv.on_user_banned = AsyncMock()
    return inv


class TestListBannable:
    async def test_returns_public_info(self, repo, invalidation, db) -> None:
        users = await AdminService(invalidation, repo).list_bannable_users(db)

        assert [u.account_name for u in users] == ["bob", "user3"]
        assert "passhash" not in users[0].model_dump()


class TestBan:
    async def test_unknown_ids_are_not_reported(self, repo, invalidation, db) -> None:
        repo.ban.side_effect = lambda db, uid: uid != 404

        banned = await AdminService(invalidation, repo).ban_users(db, [2, 404])

        assert banned == [2]
        assert [c.args[0] for c in invalidation.on_user_banned.await_args_list] == [2]

    async def test_bans_once_per_id_and_invalidates(self, repo, invalidation, db) -> None:
        banned = await AdminService(invalidation, repo).ban_users(db, [2, 3, 2])

        assert banned == [2, 3]
        assert repo.ban.await_count == 2
        db.commit.assert_awaited_once()
        assert [c.args[0] for c in invalidation.on_user_banned.await_args_list] == [2, 3]

    async def test_failure_rolls_back_and_keeps_cache(self, repo, invalidation, db) -> None:
        repo.ban.side_effect = OperationalError("UPDATE", {}, Exception("down"))

        with pytest.raises(OperationalError):
            await AdminService(invalidation, repo).ban_users(db, [2])
        db.rollback.assert_awaited_once()
        invalidation.on_user_banned.assert_not_awaited()
