"""Admin application service: list bannable users, ban them."""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_gateway.user.schemas import UserInfo
from src.pf_post.application.invalidation import InvalidationController
from src.pf_user.domain.repository import UserRepositoryProtocol
from src.pf_user.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


class AdminService:
    def __init__(
        self,
        invalidation: InvalidationController,
        repo: UserRepositoryProtocol | None = None,
    ) -> None:
        self._invalidation = invalidation
        self._repo: UserRepositoryProtocol = repo or UserRepository()

    async def list_bannable_users(self, db: AsyncSession) -> list[UserInfo]:
        """Active, non-moderator users, newest first."""
        users = await self._repo.list_active_normal_users(db)
        return [UserInfo.from_domain(u) for u in users]

    async def ban_users(self, db: AsyncSession, user_ids: list[int]) -> list[int]:
        """Set del_flg for every id in one transaction, then evict their caches.

        Returns the ids that matched a user row; unknown ids are dropped.
        """
        ids: list[int] = []
        try:
            for user_id in dict.fromkeys(user_ids):
                if await self._repo.ban(db, user_id):
                    ids.append(user_id)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        for user_id in ids:
            await self._invalidation.on_user_banned(user_id)
        logger.info("banned %d users: %s", len(ids), ids)
        return ids
