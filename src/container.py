"""Process-wide service wiring.

Built once by the application lifespan from the Redis client and the
settings, then kept on app.state.container for the lifetime of the process.
Handlers reach it through the get_container dependency; tests build their
own container around fakes.
"""

from dataclasses import dataclass

from fastapi import Request

from src.pf_admin.application.service import AdminService
from src.pf_cache.store import CacheStore
from src.pf_common.policy import CachePolicy
from src.pf_gateway.user.service import UserService
from src.pf_post.application.assembler import BatchPostAssembler
from src.pf_post.application.feed_cache import FeedAggregateCache
from src.pf_post.application.invalidation import InvalidationController
from src.pf_post.application.service import PostApplicationService
from src.pf_user.application.lookup import UserLookup


@dataclass
class ServiceContainer:
    user_lookup: UserLookup
    assembler: BatchPostAssembler
    feed_cache: FeedAggregateCache
    invalidation: InvalidationController
    post_service: PostApplicationService
    user_service: UserService
    admin_service: AdminService


def build_container(cache: CacheStore, policy: CachePolicy) -> ServiceContainer:
    user_lookup = UserLookup(cache, ttl=policy.user_ttl)
    assembler = BatchPostAssembler(user_lookup, policy)
    feed_cache = FeedAggregateCache(cache, assembler, policy)
    invalidation = InvalidationController(cache, user_lookup)
    return ServiceContainer(
        user_lookup=user_lookup,
        assembler=assembler,
        feed_cache=feed_cache,
        invalidation=invalidation,
        post_service=PostApplicationService(feed_cache, assembler, invalidation, policy),
        user_service=UserService(),
        admin_service=AdminService(invalidation),
    )


def get_container(request: Request) -> ServiceContainer:
    return request.app.state.container
