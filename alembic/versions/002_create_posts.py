"""002: create posts table

Revision ID: 002
Revises: 001
Create Date: 2026-10-16
"""
from typing import Sequence, Union
from alembic import op

revision: str = "002"
down_revision: Union[str, None] = "001"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute("""
        CREATE TABLE posts (
            id              SERIAL          PRIMARY KEY,
            user_id         INT             NOT NULL REFERENCES users (id),
            mime            VARCHAR(64)     NOT NULL,
            imgdata         BYTEA           NOT NULL DEFAULT '',
            body            TEXT            NOT NULL DEFAULT '',
            created_at      TIMESTAMPTZ     NOT NULL DEFAULT NOW()
        );
    """)
    op.execute("CREATE INDEX idx_posts_created_at ON posts (created_at DESC);")
    op.execute("CREATE INDEX idx_posts_user_created ON posts (user_id, created_at DESC);")
    op.execute("COMMENT ON COLUMN posts.imgdata IS 'left empty, images live in external storage';")


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS posts CASCADE;")
