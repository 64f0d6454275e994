"""Domain models for pf_post: pure dataclasses, no business logic.

Fields after created_at are derived: only BatchPostAssembler fills them.
"""

from dataclasses import dataclass, field
from datetime import datetime

from src.pf_user.domain.models import User


@dataclass
class Comment:
    id: int
    post_id: int
    user_id: int
    comment: str
    created_at: datetime
    user: User | None = None


@dataclass
class Post:
    id: int
    user_id: int
    body: str
    mime: str
    created_at: datetime
    comment_count: int = 0
    comments: list[Comment] = field(default_factory=list)   # ascending by created_at
    user: User | None = None
    csrf_token: str = ""


@dataclass
class ProfileAggregate:
    """Everything the profile page shows, cached as a single entry."""

    user: User
    posts: list[Post]
    comment_count: int      # comments written by the user
    post_count: int
    commented_count: int    # comments received on the user's posts
