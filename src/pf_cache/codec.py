"""JSON codec for cache payloads.

Defines the wire shape of cache entries only (not the DB schema). Decoding
returns a typed CacheLookup instead of raising:

    Hit(value)      payload decoded
    Miss()          key absent (or the cache was unavailable)
    Corrupt(reason) payload present but undecodable / schema mismatch

Callers route Miss and Corrupt alike to the authoritative load path.
"""

import logging
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from pydantic import TypeAdapter, ValidationError

from src.pf_post.domain.models import Post, ProfileAggregate
from src.pf_user.domain.models import User

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class Hit(Generic[T]):
    value: T


@dataclass(frozen=True)
class Miss:
    pass


@dataclass(frozen=True)
class Corrupt:
    reason: str


CacheLookup = Union[Hit[T], Miss, Corrupt]

MISS = Miss()


class EntityCodec(Generic[T]):
    def __init__(self, type_: Any, name: str) -> None:
        self._adapter: TypeAdapter[T] = TypeAdapter(type_)
        self._name = name

    def encode(self, value: T) -> bytes:
        return self._adapter.dump_json(value)

    def decode(self, payload: bytes | None) -> CacheLookup[T]:
        if payload is None:
            return MISS
        try:
            return Hit(self._adapter.validate_json(payload))
        except ValidationError as exc:
            logger.warning(
                "corrupt %s cache payload (%d errors)", self._name, exc.error_count()
            )
            return Corrupt(str(exc))


USER_CODEC: EntityCodec[User] = EntityCodec(User, "user")
POST_LIST_CODEC: EntityCodec[list[Post]] = EntityCodec(list[Post], "post list")
PROFILE_CODEC: EntityCodec[ProfileAggregate] = EntityCodec(ProfileAggregate, "profile")
