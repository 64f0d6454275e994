"""JWT access tokens standing in for the login session.

Each token carries the user id ("sub") and the per-session CSRF token
("csrf"). The CSRF token is echoed back by write requests and passed through
to assembled posts.

No revocation: a token stays valid until expiry. Banning a user does not
revoke it, but login is refused for banned accounts.
"""

import secrets
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt

from config.settings import settings
from src.pf_common.errors import InvalidCredentialsError

_ALGORITHM = settings.JWT_ALGORITHM  # "HS256"
_ACCESS_EXPIRE = timedelta(minutes=settings.JWT_EXPIRE_MINUTES)


def new_csrf_token() -> str:
    """32 hex chars from 16 random bytes."""
    return secrets.token_hex(16)


def create_access_token(user_id: int, csrf_token: str) -> str:
    now = datetime.now(UTC)
    payload = {
        "sub": str(user_id),
        "csrf": csrf_token,
        "type": "access",
        "iat": now,
        "exp": now + _ACCESS_EXPIRE,
    }
    return str(jwt.encode(payload, settings.JWT_SECRET, algorithm=_ALGORITHM))


def decode_token(token: str) -> dict[str, str]:
    """Decode and validate an access token.

    Raises:
        InvalidCredentialsError: Token invalid, expired or of another type.
    """
    try:
        payload: dict[str, str] = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[_ALGORITHM],  # Explicit list prevents algorithm confusion
        )
    except JWTError:
        raise InvalidCredentialsError() from None

    if payload.get("type") != "access":
        raise InvalidCredentialsError()
    return payload
