"""Unit tests for pf_post schemas and helpers."""

import pytest
from pydantic import ValidationError

from src.pf_common.datetime_utils import parse_iso8601
from src.pf_post.application.schemas import (
    CreateCommentRequest,
    PostView,
    image_url,
    mime_from_content_type,
)
from tests.factories import make_comment, make_post, make_user


class TestImageUrl:
    @pytest.mark.parametrize(
        ("mime", "expected"),
        [
            ("image/jpeg", "/image/7.jpg"),
            ("image/png", "/image/7.png"),
            ("image/gif", "/image/7.gif"),
            ("image/webp", "/image/7"),
        ],
    )
    def test_extension_follows_mime(self, mime: str, expected: str) -> None:
        assert image_url(7, mime) == expected


class TestMimeFromContentType:
    def test_known_types(self) -> None:
        assert mime_from_content_type("image/jpeg") == "image/jpeg"
        assert mime_from_content_type("image/png; charset=binary") == "image/png"
        assert mime_from_content_type("image/gif") == "image/gif"

    def test_unknown_type(self) -> None:
        assert mime_from_content_type("image/bmp") is None


class TestRequests:
    def test_comment_requires_positive_post_id(self) -> None:
        with pytest.raises(ValidationError):
            CreateCommentRequest(post_id=0, comment="hi", csrf_token="t")

    def test_comment_must_not_be_empty(self) -> None:
        with pytest.raises(ValidationError):
            CreateCommentRequest(post_id=1, comment="", csrf_token="t")


class TestPostView:
    def test_from_domain(self) -> None:
        post = make_post(3, 1)
        post.user = make_user(1, "alice")
        comment = make_comment(1, 3, 2)
        comment.user = make_user(2, "bob")
        post.comments = [comment]
        post.comment_count = 5
        post.csrf_token = "tok"

        view = PostView.from_domain(post)

        assert view.image_url == "/image/3.jpg"
        assert view.comment_count == 5
        assert view.comments[0].user.account_name == "bob"
        assert view.csrf_token == "tok"

    def test_missing_author(self) -> None:
        assert PostView.from_domain(make_post(3, 404)).user is None


class TestParseIso8601:
    def test_naive_is_utc(self) -> None:
        assert parse_iso8601("2016-01-02T15:04:05").utcoffset().total_seconds() == 0

    def test_malformed(self) -> None:
        with pytest.raises(ValueError):
            parse_iso8601("not-a-date")
