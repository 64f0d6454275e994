"""Feed assembly and cache lifetime constants, grouped for injection."""

from dataclasses import dataclass

from config.settings import Settings


@dataclass(frozen=True)
class CachePolicy:
    page_size: int = 20
    comment_preview: int = 3
    candidate_limit: int = 40
    feed_ttl: int = 60         # seconds
    profile_ttl: int = 60      # seconds
    user_ttl: int = 300        # seconds

    @classmethod
    def from_settings(cls, settings: Settings) -> "CachePolicy":
        return cls(
            page_size=settings.POSTS_PER_PAGE,
            comment_preview=settings.COMMENT_PREVIEW_COUNT,
            candidate_limit=settings.FEED_CANDIDATE_LIMIT,
            feed_ttl=settings.FEED_TTL_SECONDS,
            profile_ttl=settings.PROFILE_TTL_SECONDS,
            user_ttl=settings.USER_TTL_SECONDS,
        )
