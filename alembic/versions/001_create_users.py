"""001: create users table

Revision ID: 001
Revises: 
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE users (
            id              SERIAL          PRIMARY KEY,
            account_name    VARCHAR(64)     NOT NULL,
            passhash        VARCHAR(128)    NOT NULL,
            authority       SMALLINT        NOT NULL DEFAULT 0,
            del_flg         SMALLINT        NOT NULL DEFAULT 0,
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW(),
            CONSTRAINT uq_users_account_name    UNIQUE (account_name),
            CONSTRAINT ck_users_account_name_len CHECK (LENGTH(account_name) >= 3)
        );
    """)
    op.execute(
        "CREATE INDEX idx_users_authority_del_flg ON users (authority, del_flg, created_at DESC);"
    )
    op.execute("COMMENT ON TABLE users IS 'accounts; del_flg <> 0 means banned';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS users CASCADE;")
