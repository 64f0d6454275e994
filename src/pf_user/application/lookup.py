"""UserLookup: read-through cache for User records keyed by id.

    get_user:  cache "user:<id>" → on Miss/Corrupt, SELECT by primary key →
               repopulate with user_ttl
    get_users: per-id cache get, then ONE batched IN (...) query for all misses

No locking: concurrent misses for the same id each reload and repopulate.
Both writers store the same row, so the last one winning is harmless.
"""

import asyncio
import logging

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_cache.codec import USER_CODEC, Hit
from src.pf_cache.keys import user_key
from src.pf_cache.store import CacheStore
from src.pf_user.domain.models import User
from src.pf_user.domain.repository import UserRepositoryProtocol
from src.pf_user.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


class UserLookup:
    def __init__(
        self,
        cache: CacheStore,
        ttl: int,
        repo: UserRepositoryProtocol | None = None,
    ) -> None:
        self._cache = cache
        self._ttl = ttl
        self._repo: UserRepositoryProtocol = repo or UserRepository()

    async def get_user(self, db: AsyncSession, user_id: int) -> User | None:
        """Return the user, or None when no row exists."""
        cached = await self._load_cached(user_id)
        if cached is not None:
            return cached

        user = await self._repo.get_by_id(db, user_id)
        if user is None:
            return None
        await self._store(user)
        return user

    async def get_users(self, db: AsyncSession, user_ids: list[int]) -> dict[int, User]:
        """Resolve many ids; ids without a row are absent from the result."""
        ids = list(dict.fromkeys(user_ids))
        if not ids:
            return {}

        cached = await asyncio.gather(*(self._load_cached(uid) for uid in ids))
        users: dict[int, User] = {}
        missing: list[int] = []
        for uid, user in zip(ids, cached):
            if user is None:
                missing.append(uid)
            else:
                users[uid] = user

        if missing:
            loaded = await self._repo.get_by_ids(db, missing)
            for user in loaded:
                users[user.id] = user
            # Concurrent writes: the whole batch is bounded by one cache timeout
            await asyncio.gather(*(self._store(user) for user in loaded))
            logger.debug("user cache: %d hit, %d loaded", len(ids) - len(missing), len(loaded))

        return users

    async def _load_cached(self, user_id: int) -> User | None:
        lookup = USER_CODEC.decode(await self._cache.get(user_key(user_id)))
        if isinstance(lookup, Hit):
            return lookup.value
        return None

    async def _store(self, user: User) -> None:
        await self._cache.set(user_key(user.id), USER_CODEC.encode(user), self._ttl)
