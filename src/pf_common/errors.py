"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Post/Comment
  9xxx: System

Cache failures never show up here: they are logged and treated as a miss
by src.pf_cache.
"""


class AppError(Exception):
    """Base application error."""

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        super().__init__(message)


# --- 1xxx: Auth/User ---

class AccountNameExistsError(AppError):
    def __init__(self) -> None:
        super().__init__(1001, "Account name already exists", 409)


class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid account name or password", 401)


class PermissionDeniedError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Moderator authority required", 403)


class CsrfTokenMismatchError(AppError):
    def __init__(self) -> None:
        super().__init__(1005, "CSRF token mismatch", 422)


class UserNotFoundError(AppError):
    def __init__(self, account_name: str) -> None:
        super().__init__(1006, f"User not found: {account_name}", 404)


# --- 2xxx: Post/Comment ---

class PostNotFoundError(AppError):
    def __init__(self, post_id: int) -> None:
        super().__init__(2001, f"Post not found: {post_id}", 404)


class UnsupportedImageTypeError(AppError):
    def __init__(self, content_type: str) -> None:
        super().__init__(
            2002,
            f"Unsupported image type: {content_type} (only jpg, png and gif)",
            422,
        )


class NoPostsFoundError(AppError):
    def __init__(self) -> None:
        super().__init__(2003, "No posts found", 404)


class InvalidTimestampError(AppError):
    def __init__(self, value: str) -> None:
        super().__init__(2004, f"Invalid ISO8601 timestamp: {value}", 422)


# --- 9xxx: System ---

class StoreQueryFailedError(AppError):
    def __init__(self, detail: str = "Store query failed") -> None:
        super().__init__(9003, detail, 500)
