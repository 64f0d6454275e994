"""FeedAggregateCache: whole-page cache entries for the home feed and profiles.

    "index_posts"       → assembled home feed (list[Post]), TTL feed_ttl
    "account:<name>"    → ProfileAggregate, TTL profile_ttl

Both are read-through: Miss and Corrupt fall back to PostgreSQL, the result is
assembled and written back. Writes never update these entries in place; the
InvalidationController deletes them.

CSRF tokens are per render: entries are stored with blank tokens and the
caller's token is stamped on every read.
"""

import logging
from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_cache.codec import POST_LIST_CODEC, PROFILE_CODEC, Hit
from src.pf_cache.keys import FEED_KEY, account_key
from src.pf_cache.store import CacheStore
from src.pf_common.policy import CachePolicy
from src.pf_post.application.assembler import BatchPostAssembler
from src.pf_post.domain.models import Post, ProfileAggregate
from src.pf_post.domain.repository import PostRepositoryProtocol
from src.pf_post.infrastructure.persistence import PostRepository
from src.pf_user.domain.repository import UserRepositoryProtocol
from src.pf_user.infrastructure.persistence import UserRepository

logger = logging.getLogger(__name__)


def _stamp(posts: list[Post], csrf_token: str) -> list[Post]:
    return [replace(p, csrf_token=csrf_token) for p in posts]


class FeedAggregateCache:
    def __init__(
        self,
        cache: CacheStore,
        assembler: BatchPostAssembler,
        policy: CachePolicy,
        post_repo: PostRepositoryProtocol | None = None,
        user_repo: UserRepositoryProtocol | None = None,
    ) -> None:
        self._cache = cache
        self._assembler = assembler
        self._policy = policy
        self._posts: PostRepositoryProtocol = post_repo or PostRepository()
        self._users: UserRepositoryProtocol = user_repo or UserRepository()

    async def get_feed(self, db: AsyncSession, csrf_token: str) -> list[Post]:
        lookup = POST_LIST_CODEC.decode(await self._cache.get(FEED_KEY))
        if isinstance(lookup, Hit):
            return _stamp(lookup.value, csrf_token)

        candidates = await self._posts.list_recent(db, self._policy.candidate_limit)
        posts = await self._assembler.assemble(
            db, candidates, csrf_token, include_all_comments=False
        )
        # An empty feed is not cached; the next read retries the store.
        if posts:
            await self._cache.set(
                FEED_KEY,
                POST_LIST_CODEC.encode(_stamp(posts, "")),
                self._policy.feed_ttl,
            )
        return posts

    async def get_profile(
        self, db: AsyncSession, account_name: str, csrf_token: str
    ) -> ProfileAggregate | None:
        """Return the profile aggregate, or None for an unknown or banned account."""
        key = account_key(account_name)
        lookup = PROFILE_CODEC.decode(await self._cache.get(key))
        if isinstance(lookup, Hit) and lookup.value.user.id != 0:
            cached = lookup.value
            return replace(cached, posts=_stamp(cached.posts, csrf_token))

        user = await self._users.get_active_by_account_name(db, account_name)
        if user is None:
            return None

        candidates = await self._posts.list_by_user(db, user.id, self._policy.candidate_limit)
        posts = await self._assembler.assemble(
            db, candidates, csrf_token, include_all_comments=False
        )
        comment_count = await self._posts.count_comments_by_user(db, user.id)
        post_ids = await self._posts.list_post_ids_by_user(db, user.id)
        commented_count = await self._posts.count_comments_on_posts(db, post_ids)

        profile = ProfileAggregate(
            user=user,
            posts=posts,
            comment_count=comment_count,
            post_count=len(post_ids),
            commented_count=commented_count,
        )
        await self._cache.set(
            key,
            PROFILE_CODEC.encode(replace(profile, posts=_stamp(posts, ""))),
            self._policy.profile_ttl,
        )
        logger.debug("profile %s rebuilt (%d posts)", account_name, len(post_ids))
        return profile
