"""Repository Protocol: dependency inversion for testability.

Unit tests inject a mock that conforms to this Protocol.
Infrastructure layer provides the real implementation.
"""

from typing import Protocol

from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_user.domain.models import User


class UserRepositoryProtocol(Protocol):
    async def get_by_id(self, db: AsyncSession, user_id: int) -> User | None: ...

    async def get_by_ids(self, db: AsyncSession, user_ids: list[int]) -> list[User]: ...

    async def get_active_by_account_name(
        self, db: AsyncSession, account_name: str
    ) -> User | None: ...

    async def account_name_exists(self, db: AsyncSession, account_name: str) -> bool: ...

    async def insert(self, db: AsyncSession, account_name: str, passhash: str) -> User: ...

    async def list_active_normal_users(self, db: AsyncSession) -> list[User]: ...

    async def ban(self, db: AsyncSession, user_id: int) -> bool: ...
