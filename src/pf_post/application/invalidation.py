"""InvalidationController: evict the cache keys a committed write can stale.

| Write event                          | Keys deleted                                   |
|--------------------------------------|------------------------------------------------|
| post created by U                    | index_posts, account:<U>                       |
| comment by C on a post owned by P    | index_posts, account:<C>, account:<P>          |
| user U banned                        | user:<U>, index_posts                          |

Hooks are called after the write commits and are best effort: cache errors are
logged by the store, and a failed lookup only skips the key it was resolving.
A read racing a hook can re-populate a stale entry; it heals at the next TTL
expiry or the next write.
"""

import logging

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_cache.keys import FEED_KEY, account_key, user_key
from src.pf_cache.store import CacheStore
from src.pf_post.domain.repository import PostRepositoryProtocol
from src.pf_post.infrastructure.persistence import PostRepository
from src.pf_user.application.lookup import UserLookup

logger = logging.getLogger(__name__)


class InvalidationController:
    def __init__(
        self,
        cache: CacheStore,
        users: UserLookup,
        post_repo: PostRepositoryProtocol | None = None,
    ) -> None:
        self._cache = cache
        self._users = users
        self._posts: PostRepositoryProtocol = post_repo or PostRepository()

    async def on_post_created(self, db: AsyncSession, author_id: int) -> None:
        await self._cache.delete(FEED_KEY)
        await self._delete_profile_of(db, author_id)

    async def on_comment_created(
        self, db: AsyncSession, commenter_id: int, post_id: int
    ) -> None:
        await self._cache.delete(FEED_KEY)
        await self._delete_profile_of(db, commenter_id)

        try:
            owner_name = await self._posts.get_owner_account_name(db, post_id)
        except SQLAlchemyError as exc:
            logger.warning("owner lookup failed for post %d: %s", post_id, exc)
            return
        if owner_name is None:
            logger.info("post %d has no owner row, profile eviction skipped", post_id)
            return
        await self._cache.delete(account_key(owner_name))

    async def on_user_banned(self, user_id: int) -> None:
        await self._cache.delete(user_key(user_id))
        await self._cache.delete(FEED_KEY)

    async def _delete_profile_of(self, db: AsyncSession, user_id: int) -> None:
        try:
            user = await self._users.get_user(db, user_id)
        except SQLAlchemyError as exc:
            logger.warning("user lookup failed for %d: %s", user_id, exc)
            return
        if user is not None:
            await self._cache.delete(account_key(user.account_name))
