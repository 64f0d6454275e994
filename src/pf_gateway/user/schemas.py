"""Pydantic request/response schemas for pf_gateway.

All responses are wrapped in ApiResponse at the router layer.
"""

from pydantic import BaseModel, Field

from src.pf_user.domain.models import User


class RegisterRequest(BaseModel):
    account_name: str = Field(..., min_length=3, max_length=64, pattern=r"^[0-9a-zA-Z_]+$")
    password: str = Field(..., min_length=6, max_length=128, pattern=r"^[0-9a-zA-Z_]+$")


class LoginRequest(BaseModel):
    account_name: str
    password: str


class UserInfo(BaseModel):
    """Public user fields: never carries the password hash."""

    user_id: int
    account_name: str
    authority: int
    created_at: str | None = None

    @classmethod
    def from_domain(cls, user: User) -> "UserInfo":
        return cls(
            user_id=user.id,
            account_name=user.account_name,
            authority=user.authority,
            created_at=user.created_at.isoformat() if user.created_at else None,
        )


class AuthResponse(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_in: int
    csrf_token: str
    user: UserInfo
