"""FastAPI dependencies: the caller's session.

Usage in any router:
    from src.pf_gateway.auth.dependencies import Session, get_current_session

    @router.post("/protected")
    async def protected(session: Session = Depends(get_current_session)):
        ...

The session user is resolved through UserLookup, so an authenticated request
normally costs one cache read and no SQL.
"""

from dataclasses import dataclass

from fastapi import Depends, HTTPException, status
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.ext.asyncio import AsyncSession

from src.container import ServiceContainer, get_container
from src.pf_common.database import get_db_session
from src.pf_common.errors import (
    CsrfTokenMismatchError,
    InvalidCredentialsError,
    PermissionDeniedError,
)
from src.pf_gateway.auth.jwt_handler import decode_token
from src.pf_user.domain.models import User

# auto_error=False: read endpoints also serve anonymous callers
oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/v1/auth/login", auto_error=False)

# Reusable 401 exception with WWW-Authenticate header (OAuth2 standard)
_CREDENTIALS_EXCEPTION = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Invalid or expired token",
    headers={"WWW-Authenticate": "Bearer"},
)


@dataclass
class Session:
    user: User | None
    csrf_token: str = ""

    @property
    def is_logged_in(self) -> bool:
        return self.user is not None


async def get_session(
    token: str | None = Depends(oauth2_scheme),
    db: AsyncSession = Depends(get_db_session),
    container: ServiceContainer = Depends(get_container),
) -> Session:
    """Anonymous session when no token is sent; 401 for a bad token."""
    if token is None:
        return Session(user=None)

    try:
        payload = decode_token(token)
    except InvalidCredentialsError:
        raise _CREDENTIALS_EXCEPTION from None

    sub = payload.get("sub")
    if not sub or not sub.isdigit():
        raise _CREDENTIALS_EXCEPTION

    user = await container.user_lookup.get_user(db, int(sub))
    if user is None:
        raise _CREDENTIALS_EXCEPTION
    return Session(user=user, csrf_token=payload.get("csrf", ""))


async def get_current_session(session: Session = Depends(get_session)) -> Session:
    """Session of a logged-in user; 401 otherwise."""
    if not session.is_logged_in:
        raise _CREDENTIALS_EXCEPTION
    return session


async def require_moderator(session: Session = Depends(get_current_session)) -> Session:
    """Session of a user with authority != 0; 403 otherwise."""
    if session.user is None or not session.user.is_moderator:
        raise PermissionDeniedError()
    return session


def verify_csrf(session: Session, csrf_token: str) -> None:
    """Raise CsrfTokenMismatchError (422) unless the submitted token matches."""
    if not session.csrf_token or csrf_token != session.csrf_token:
        raise CsrfTokenMismatchError()
