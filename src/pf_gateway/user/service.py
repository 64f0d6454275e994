"""User domain service: register, login.

All DB operations use the injected AsyncSession. register commits its own
transaction; login is read-only.
"""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_common.errors import AccountNameExistsError, InvalidCredentialsError
from src.pf_gateway.auth.jwt_handler import create_access_token, new_csrf_token
from src.pf_gateway.auth.password import hash_password, verify_password
from src.pf_user.domain.models import User
from src.pf_user.domain.repository import UserRepositoryProtocol
from src.pf_user.infrastructure.persistence import UserRepository


class UserService:
    """Stateless service: instantiate once, reuse across requests."""

    def __init__(self, repo: UserRepositoryProtocol | None = None) -> None:
        self._repo: UserRepositoryProtocol = repo or UserRepository()

    async def register(
        self,
        account_name: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[User, str, str]:
        """Create the user and open a session: (user, access_token, csrf_token).

        The new user is not written to the cache; the first lookup does it.
        """
        # DB UNIQUE constraint is the final guard
        if await self._repo.account_name_exists(db, account_name):
            raise AccountNameExistsError()

        try:
            user = await self._repo.insert(db, account_name, hash_password(password))
            await db.commit()
        except IntegrityError:
            # A concurrent registration won the UNIQUE (account_name) race
            await db.rollback()
            raise AccountNameExistsError() from None
        except Exception:
            await db.rollback()
            raise

        csrf_token = new_csrf_token()
        return user, create_access_token(user.id, csrf_token), csrf_token

    async def login(
        self,
        account_name: str,
        password: str,
        db: AsyncSession,
    ) -> tuple[User, str, str]:
        """Authenticate an active user: (user, access_token, csrf_token).

        Unknown, banned and wrong-password all raise InvalidCredentialsError
        so account names cannot be enumerated.
        """
        user = await self._repo.get_active_by_account_name(db, account_name)
        if user is None or not verify_password(password, user.passhash):
            raise InvalidCredentialsError()

        csrf_token = new_csrf_token()
        return user, create_access_token(user.id, csrf_token), csrf_token
