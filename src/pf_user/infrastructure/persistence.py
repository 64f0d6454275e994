"""UserRepository, the concrete implementation of UserRepositoryProtocol.

All queries use raw text() SQL (no ORM). Batch lookups use an expanding
bind parameter, rendered as IN (...) by the driver.

Transaction ownership: the CALLER commits (see the application services).
"""

from sqlalchemy import bindparam, text
from sqlalchemy.ext.asyncio import AsyncSession

from src.pf_user.domain.models import User

# ---------------------------------------------------------------------------
# SQL
# ---------------------------------------------------------------------------

_USER_COLUMNS = "id, account_name, passhash, authority, del_flg, created_at"

_GET_BY_ID_SQL = text(f"SELECT {_USER_COLUMNS} FROM users WHERE id = :user_id")

_GET_BY_IDS_SQL = text(
    f"SELECT {_USER_COLUMNS} FROM users WHERE id IN :user_ids"
).bindparams(bindparam("user_ids", expanding=True))

_GET_ACTIVE_BY_NAME_SQL = text(f"""
    SELECT {_USER_COLUMNS}
    FROM users
    WHERE account_name = :account_name AND del_flg = 0
""")

_NAME_EXISTS_SQL = text("SELECT 1 FROM users WHERE account_name = :account_name")

_INSERT_SQL = text(f"""
    INSERT INTO users (account_name, passhash)
    VALUES (:account_name, :passhash)
    RETURNING {_USER_COLUMNS}
""")

_LIST_ACTIVE_NORMAL_SQL = text(f"""
    SELECT {_USER_COLUMNS}
    FROM users
    WHERE authority = 0 AND del_flg = 0
    ORDER BY created_at DESC
""")

_BAN_SQL = text("UPDATE users SET del_flg = 1 WHERE id = :user_id")

# ---------------------------------------------------------------------------
# Row mappers
# ---------------------------------------------------------------------------

def _row_to_user(row: object) -> User:
    return User(
        id=row.id,  # type: ignore[attr-defined]
        account_name=row.account_name,  # type: ignore[attr-defined]
        passhash=row.passhash,  # type: ignore[attr-defined]
        authority=row.authority,  # type: ignore[attr-defined]
        del_flg=row.del_flg,  # type: ignore[attr-defined]
        created_at=row.created_at,  # type: ignore[attr-defined]
    )


# ---------------------------------------------------------------------------
# Repository
# ---------------------------------------------------------------------------

class UserRepository:
    async def get_by_id(self, db: AsyncSession, user_id: int) -> User | None:
        result = await db.execute(_GET_BY_ID_SQL, {"user_id": user_id})
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def get_by_ids(self, db: AsyncSession, user_ids: list[int]) -> list[User]:
        if not user_ids:
            return []
        result = await db.execute(_GET_BY_IDS_SQL, {"user_ids": user_ids})
        return [_row_to_user(row) for row in result.fetchall()]

    async def get_active_by_account_name(
        self, db: AsyncSession, account_name: str
    ) -> User | None:
        result = await db.execute(_GET_ACTIVE_BY_NAME_SQL, {"account_name": account_name})
        row = result.fetchone()
        return _row_to_user(row) if row else None

    async def account_name_exists(self, db: AsyncSession, account_name: str) -> bool:
        result = await db.execute(_NAME_EXISTS_SQL, {"account_name": account_name})
        return result.fetchone() is not None

    async def insert(self, db: AsyncSession, account_name: str, passhash: str) -> User:
        result = await db.execute(
            _INSERT_SQL, {"account_name": account_name, "passhash": passhash}
        )
        return _row_to_user(result.fetchone())

    async def list_active_normal_users(self, db: AsyncSession) -> list[User]:
        result = await db.execute(_LIST_ACTIVE_NORMAL_SQL)
        return [_row_to_user(row) for row in result.fetchall()]

    async def ban(self, db: AsyncSession, user_id: int) -> bool:
        """True when a user row was updated."""
        result = await db.execute(_BAN_SQL, {"user_id": user_id})
        return result.rowcount > 0
