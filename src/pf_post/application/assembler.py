"""BatchPostAssembler: hydrate a candidate list of posts in O(1) round trips.

For any number of candidates the store sees at most:
  1. one COUNT(*) ... GROUP BY post_id         (full comment counts)
  2. one SELECT of all comments, newest first
  3. one SELECT ... WHERE id IN (...) for users missing from the cache

Per post the newest `comment_preview` comments are kept (all of them for a
single-post page) and reversed so they read oldest → newest. Posts by banned
authors are skipped in the same pass that enforces `page_size`, so a page can
come out short when the candidate list runs out first.
"""

import logging
from collections import defaultdict
from dataclasses import replace

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.policy import CachePolicy
from src.pf_post.domain.models import Comment, Post
from src.pf_post.domain.repository import PostRepositoryProtocol
from src.pf_post.infrastructure.persistence import PostRepository
from src.pf_user.application.lookup import UserLookup

logger = logging.getLogger(__name__)


class BatchPostAssembler:
    def __init__(
        self,
        users: UserLookup,
        policy: CachePolicy,
        repo: PostRepositoryProtocol | None = None,
    ) -> None:
        self._users = users
        self._policy = policy
        self._repo: PostRepositoryProtocol = repo or PostRepository()

    async def assemble(
        self,
        db: AsyncSession,
        candidates: list[Post],
        csrf_token: str,
        include_all_comments: bool,
    ) -> list[Post]:
        """Return hydrated posts in candidate order, at most page_size of them.

        Candidates are not mutated. Store errors propagate to the caller.
        """
        if not candidates:
            return []

        post_ids = [p.id for p in candidates]
        # Insertion-ordered set of author ids
        user_ids: dict[int, None] = dict.fromkeys(p.user_id for p in candidates)

        counts = await self._repo.count_comments_by_post(db, post_ids)

        comments_by_post: dict[int, list[Comment]] = defaultdict(list)
        for comment in await self._repo.list_comments_for_posts(db, post_ids):
            comments_by_post[comment.post_id].append(comment)
            user_ids.setdefault(comment.user_id, None)

        users = await self._users.get_users(db, list(user_ids))

        posts: list[Post] = []
        for stub in candidates:
            author = users.get(stub.user_id)
            if author is not None and author.is_banned:
                continue

            kept = comments_by_post.get(stub.id, [])
            if not include_all_comments:
                kept = kept[: self._policy.comment_preview]
            comments = [replace(c, user=users.get(c.user_id)) for c in reversed(kept)]

            posts.append(
                replace(
                    stub,
                    comment_count=counts.get(stub.id, 0),
                    comments=comments,
                    user=author,
                    csrf_token=csrf_token,
                )
            )
            if len(posts) >= self._policy.page_size:
                break

        logger.debug("assembled %d of %d candidate posts", len(posts), len(candidates))
        return posts
