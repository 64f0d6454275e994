"""Pydantic schemas for pf_post API."""

from pydantic import BaseModel, Field

from src.pf_gateway.user.schemas import UserInfo
from src.pf_post.domain.models import Comment, Post, ProfileAggregate

_MIME_EXTENSIONS = {
    "image/jpeg": ".jpg",
    "image/png": ".png",
    "image/gif": ".gif",
}


def image_url(post_id: int, mime: str) -> str:
    """Public URL of the post image; unknown MIME types get no extension."""
    return f"/image/{post_id}{_MIME_EXTENSIONS.get(mime, '')}"


def mime_from_content_type(content_type: str) -> str | None:
    """Map an upload Content-Type to a stored MIME type, None if unsupported."""
    if "jpeg" in content_type:
        return "image/jpeg"
    if "png" in content_type:
        return "image/png"
    if "gif" in content_type:
        return "image/gif"
    return None


# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class CreatePostRequest(BaseModel):
    body: str = Field("", max_length=10_000)
    content_type: str = Field(..., description="Content-Type of the uploaded image")
    csrf_token: str


class CreateCommentRequest(BaseModel):
    post_id: int = Field(..., gt=0)
    comment: str = Field(..., min_length=1, max_length=10_000)
    csrf_token: str


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CommentView(BaseModel):
    comment_id: int
    post_id: int
    comment: str
    created_at: str
    user: UserInfo | None

    @classmethod
    def from_domain(cls, comment: Comment) -> "CommentView":
        return cls(
            comment_id=comment.id,
            post_id=comment.post_id,
            comment=comment.comment,
            created_at=comment.created_at.isoformat(),
            user=UserInfo.from_domain(comment.user) if comment.user else None,
        )


class PostView(BaseModel):
    post_id: int
    body: str
    mime: str
    image_url: str
    created_at: str
    comment_count: int
    comments: list[CommentView]
    user: UserInfo | None
    csrf_token: str

    @classmethod
    def from_domain(cls, post: Post) -> "PostView":
        return cls(
            post_id=post.id,
            body=post.body,
            mime=post.mime,
            image_url=image_url(post.id, post.mime),
            created_at=post.created_at.isoformat(),
            comment_count=post.comment_count,
            comments=[CommentView.from_domain(c) for c in post.comments],
            user=UserInfo.from_domain(post.user) if post.user else None,
            csrf_token=post.csrf_token,
        )


class PostListResponse(BaseModel):
    items: list[PostView]

    @classmethod
    def from_domain(cls, posts: list[Post]) -> "PostListResponse":
        return cls(items=[PostView.from_domain(p) for p in posts])


class ProfileResponse(BaseModel):
    user: UserInfo
    posts: list[PostView]
    post_count: int
    comment_count: int
    commented_count: int

    @classmethod
    def from_domain(cls, profile: ProfileAggregate) -> "ProfileResponse":
        return cls(
            user=UserInfo.from_domain(profile.user),
            posts=[PostView.from_domain(p) for p in profile.posts],
            post_count=profile.post_count,
            comment_count=profile.comment_count,
            commented_count=profile.commented_count,
        )


class CreatePostResponse(BaseModel):
    post_id: int
    location: str


class CreateCommentResponse(BaseModel):
    comment_id: int
    post_id: int
    location: str
