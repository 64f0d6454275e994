"""PostApplicationService: thin composition layer over the feed core.

Reads go through FeedAggregateCache (feed, profile) or straight to the
assembler (timeline page, single post). Writes commit first and only then
call the InvalidationController; caches are never updated in place.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.datetime_utils import parse_iso8601
from src.pf_common.errors import (
    InvalidTimestampError,
    NoPostsFoundError,
    PostNotFoundError,
    UnsupportedImageTypeError,
    UserNotFoundError,
)
from src.pf_common.policy import CachePolicy
from src.pf_post.application.assembler import BatchPostAssembler
from src.pf_post.application.feed_cache import FeedAggregateCache
from src.pf_post.application.invalidation import InvalidationController
from src.pf_post.application.schemas import (
    CreateCommentResponse,
    CreatePostResponse,
    PostListResponse,
    PostView,
    ProfileResponse,
    mime_from_content_type,
)
from src.pf_post.domain.repository import PostRepositoryProtocol
from src.pf_post.infrastructure.persistence import PostRepository
from src.pf_user.domain.models import User


class PostApplicationService:
    def __init__(
        self,
        feed_cache: FeedAggregateCache,
        assembler: BatchPostAssembler,
        invalidation: InvalidationController,
        policy: CachePolicy,
        repo: PostRepositoryProtocol | None = None,
    ) -> None:
        self._feed_cache = feed_cache
        self._assembler = assembler
        self._invalidation = invalidation
        self._policy = policy
        self._repo: PostRepositoryProtocol = repo or PostRepository()

    # --- reads ---

    async def get_feed(self, db: AsyncSession, csrf_token: str) -> PostListResponse:
        posts = await self._feed_cache.get_feed(db, csrf_token)
        return PostListResponse.from_domain(posts)

    async def get_timeline(
        self, db: AsyncSession, max_created_at: str, csrf_token: str
    ) -> PostListResponse:
        # A literal "+" in a query string arrives as a space
        try:
            before = parse_iso8601(max_created_at.replace(" ", "+"))
        except ValueError:
            raise InvalidTimestampError(max_created_at) from None

        candidates = await self._repo.list_before(db, before, self._policy.candidate_limit)
        posts = await self._assembler.assemble(
            db, candidates, csrf_token, include_all_comments=False
        )
        if not posts:
            raise NoPostsFoundError()
        return PostListResponse.from_domain(posts)

    async def get_post(self, db: AsyncSession, post_id: int, csrf_token: str) -> PostView:
        post = await self._repo.get_by_id(db, post_id)
        if post is None:
            raise PostNotFoundError(post_id)
        posts = await self._assembler.assemble(db, [post], csrf_token, include_all_comments=True)
        # Empty when the author is banned
        if not posts:
            raise PostNotFoundError(post_id)
        return PostView.from_domain(posts[0])

    async def get_profile(
        self, db: AsyncSession, account_name: str, csrf_token: str
    ) -> ProfileResponse:
        profile = await self._feed_cache.get_profile(db, account_name, csrf_token)
        if profile is None:
            raise UserNotFoundError(account_name)
        return ProfileResponse.from_domain(profile)

    # --- writes ---

    async def create_post(
        self, db: AsyncSession, author: User, content_type: str, body: str
    ) -> CreatePostResponse:
        mime = mime_from_content_type(content_type)
        if mime is None:
            raise UnsupportedImageTypeError(content_type)

        try:
            post_id = await self._repo.insert_post(db, author.id, mime, body)
            await db.commit()
        except Exception:
            await db.rollback()
            raise

        await self._invalidation.on_post_created(db, author.id)
        return CreatePostResponse(post_id=post_id, location=f"/posts/{post_id}")

    async def create_comment(
        self, db: AsyncSession, author: User, post_id: int, comment: str
    ) -> CreateCommentResponse:
        try:
            comment_id = await self._repo.insert_comment(db, post_id, author.id, comment)
            await db.commit()
        except IntegrityError:
            # comments.post_id references posts.id
            await db.rollback()
            raise PostNotFoundError(post_id) from None
        except Exception:
            await db.rollback()
            raise

        await self._invalidation.on_comment_created(db, author.id, post_id)
        return CreateCommentResponse(
            comment_id=comment_id, post_id=post_id, location=f"/posts/{post_id}"
        )
